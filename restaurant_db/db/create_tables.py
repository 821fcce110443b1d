"""Utility script to create (or recreate with --force) the database schema."""
from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from restaurant_db.core.log import configure_logging
from .session import Store


def create_all(force: bool = False) -> None:
    with Store.from_settings() as store:
        store.sync(force=force)


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Create the restaurant tables")
    ap.add_argument("--force", action="store_true", help="Drop every table before creating it")
    args = ap.parse_args()
    configure_logging()
    try:
        create_all(force=args.force)
        print("Database tables created successfully.")
    except SQLAlchemyError as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc
