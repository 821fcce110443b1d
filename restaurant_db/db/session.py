"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from restaurant_db.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Connection handle owning one engine and its session factory.

    Create it once in the composition root, pass it to the repositories and
    call ``close()`` on shutdown.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        url = (url or "").strip()
        if not url:
            raise RuntimeError("A database URL must be configured to open the store.")
        self.engine: Engine = create_engine(url, echo=echo, future=True, pool_pre_ping=True)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)
        self._closed = False
        logger.debug("Opened store on %s", self.engine.url.render_as_string(hide_password=True))

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Store":
        settings = settings or get_settings()
        return cls(settings.resolved_database_url(), echo=settings.echo_sql)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session: Session = self._sessionmaker()
        try:
            yield session
        finally:
            session.close()

    def sync(self, *, force: bool = False) -> None:
        """Create every table; with ``force`` drop them all first."""
        from . import models  # noqa: F401  # ensure models are imported for metadata

        if force:
            logger.info("Dropping all tables before sync")
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info("Schema synchronized (%d tables)", len(Base.metadata.tables))

    def close(self) -> None:
        if self._closed:
            return
        self.engine.dispose()
        self._closed = True
        logger.debug("Closed store")

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
