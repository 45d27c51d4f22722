"""Custom exceptions.

This module provides:
- A base exception for everything raised by the package
- Configuration errors raised while declaring a sluggable model
- The write guard error raised for rejected cache column assignments
- The invalid record error raised by validate() and save()
- Structured error detail models for validation failures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel


if TYPE_CHECKING:
    from sluggable.validation.errors import ErrorCollection


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class SluggableError(Exception):
    """Base package exception.

    All custom exceptions inherit from this class so callers can catch
    package errors in one place.
    """


class SluggableConfigurationError(SluggableError, ValueError):
    """Raised when a @sluggable declaration has invalid options."""

    def __init__(self, model: type | str, message: str) -> None:
        self.model = model
        name = model if isinstance(model, str) else model.__name__
        super().__init__(f"{name}: {message}")


class CacheColumnNotWritableError(SluggableError, AttributeError):
    """Raised when the slug cache column is assigned directly.

    Without lock mode the cache column only accepts forced writes coming
    from the derivation hook, so the public setter behaves as if it did
    not exist.
    """

    def __init__(self, record: Any, column: str) -> None:
        self.record = record
        self.column = column
        super().__init__(
            f"{type(record).__name__!r} object attribute {column!r} is read-only"
        )


class RecordInvalidError(SluggableError):
    """Raised when a record fails validation."""

    def __init__(self, record: Any, errors: ErrorCollection) -> None:
        self.record = record
        self.errors = errors
        joined = ", ".join(errors.full_messages())
        super().__init__(f"Validation failed: {joined}")

    @property
    def details(self) -> list[ErrorDetail]:
        """Field-scoped error details."""
        return self.errors.details()
