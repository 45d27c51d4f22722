"""Cached URL slugs for SQLAlchemy models.

Declare a model with :func:`sluggable` and its slug column is recomputed
from the source attribute on every validation cycle, optionally allowing a
manually assigned slug to be locked in place.
"""

from sluggable.core.exceptions import (
    CacheColumnNotWritableError,
    RecordInvalidError,
    SluggableConfigurationError,
    SluggableError,
)
from sluggable.db import (
    BaseDatabaseModel,
    ValidatedModel,
    create_session_factory,
    install_flush_hook,
)
from sluggable.slugs import (
    LockState,
    RecordMethod,
    SlugOptions,
    SourceMethod,
    lock_state,
    slug_config,
    sluggable,
    unlock,
    write_cache,
)
from sluggable.utils.slugify import parameterize


__version__ = "0.1.0"

__all__ = [
    "BaseDatabaseModel",
    "CacheColumnNotWritableError",
    "LockState",
    "RecordInvalidError",
    "RecordMethod",
    "SlugOptions",
    "SluggableConfigurationError",
    "SluggableError",
    "SourceMethod",
    "ValidatedModel",
    "create_session_factory",
    "install_flush_hook",
    "lock_state",
    "parameterize",
    "slug_config",
    "sluggable",
    "unlock",
    "write_cache",
]
