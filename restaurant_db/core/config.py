"""
Configuration helpers for the restaurant store.

Settings are read from environment variables once and cached, so the store
and scripts do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from sqlalchemy.engine import URL


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    db_dialect: str
    db_name: str
    db_host: str
    db_port: int | None
    db_user: str
    db_password: str
    echo_sql: bool
    log_level: str

    def resolved_database_url(self) -> str:
        """Return DATABASE_URL, or a URL composed from the DB_* parts."""
        if self.database_url:
            return self.database_url
        if self.db_dialect == "sqlite":
            name = self.db_name or "restaurants"
            if name == ":memory:":
                return "sqlite://"
            if not name.endswith((".db", ".sqlite", ".sqlite3")):
                name = f"{name}.db"
            return f"sqlite:///{name}"
        drivername = self.db_dialect
        if drivername == "postgresql":
            # the postgres extra installs psycopg 3
            drivername = "postgresql+psycopg"
        url = URL.create(
            drivername,
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host or None,
            port=self.db_port,
            database=self.db_name or None,
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str | None, default: int | None = None) -> int | None:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip(),
        db_dialect=(os.getenv("DB_DIALECT") or "sqlite").strip().lower(),
        db_name=(os.getenv("DB_NAME") or "restaurants").strip(),
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=_int(os.getenv("DB_PORT")),
        db_user=os.getenv("DB_USER", ""),
        db_password=os.getenv("DB_PASSWORD", ""),
        echo_sql=_bool(os.getenv("DB_ECHO"), False),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
