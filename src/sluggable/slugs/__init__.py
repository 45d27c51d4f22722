"""Slug derivation, lock handling and the @sluggable declaration."""

from .decorator import (
    SluggableConfig,
    configure,
    lock_state,
    slug_config,
    sluggable,
    unlock,
    write_cache,
)
from .deriver import SlugDeriver
from .lock_guard import LockGuard, LockState
from .options import RecordMethod, SlugOptions, SourceMethod, resolve_callback_method


__all__ = [
    "LockGuard",
    "LockState",
    "RecordMethod",
    "SlugDeriver",
    "SlugOptions",
    "SluggableConfig",
    "SourceMethod",
    "configure",
    "lock_state",
    "resolve_callback_method",
    "slug_config",
    "sluggable",
    "unlock",
    "write_cache",
]
