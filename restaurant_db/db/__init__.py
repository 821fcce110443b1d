"""Database helpers (store, declarative base, models)."""

from .session import Base, Store

__all__ = ["Base", "Store"]
