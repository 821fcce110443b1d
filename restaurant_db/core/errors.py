"""Exceptions raised by the persistence layer.

Lookups that find nothing return ``None``; these are only raised for writes
that cannot be applied and for queries that ask for something undeclared.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Base exception for the restaurant store."""


class ValidationError(PersistenceError):
    """Raised when an attribute value or name is not accepted by a model."""

    def __init__(self, message: str, *, model: str | None = None, field: str | None = None) -> None:
        super().__init__(message)
        self.model = model
        self.field = field


class ReferenceViolationError(PersistenceError):
    """Raised when a record points at another record that does not exist."""


class ConfigurationError(PersistenceError):
    """Raised when a query names an association or attribute the model does not declare."""
