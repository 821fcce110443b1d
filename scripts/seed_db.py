#!/usr/bin/env python3
"""
Create the schema and load the seed restaurants, menus and items.

Uso:
  python scripts/seed_db.py [--force]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Garante que o pacote restaurant_db seja importável quando rodado diretamente
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from restaurant_db.app_factory import create_repositories  # noqa: E402
from restaurant_db.core.log import configure_logging  # noqa: E402
from restaurant_db.seed_data import seed  # noqa: E402


def main() -> None:
    ap = argparse.ArgumentParser(description="Load seed data into the restaurant database")
    ap.add_argument("--force", action="store_true", help="Drop and recreate every table first")
    args = ap.parse_args()

    configure_logging()
    with create_repositories() as repos:
        repos.store.sync(force=args.force)
        counts = seed(repos)

    print("OK: seed data loaded")
    for table, count in counts.items():
        print(f"  {table}: {count}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)
