"""Database layer: declarative base, validation lifecycle and sessions."""

from sluggable.db.models import BaseDatabaseModel, ValidatedModel
from sluggable.db.session import (
    create_engine_from_settings,
    create_session_factory,
    install_flush_hook,
    remove_flush_hook,
)


__all__ = [
    "BaseDatabaseModel",
    "ValidatedModel",
    "create_engine_from_settings",
    "create_session_factory",
    "install_flush_hook",
    "remove_flush_hook",
]
