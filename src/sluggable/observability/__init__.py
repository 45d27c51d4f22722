"""Logging setup."""

from .logging import (
    get_logger,
    setup_logging,
    setup_logging_from_settings,
    validation_context,
)


__all__ = [
    "get_logger",
    "setup_logging",
    "setup_logging_from_settings",
    "validation_context",
]
