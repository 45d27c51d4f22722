"""The @sluggable class decorator.

Declaring a model sluggable attaches three things to it:

- a ``before_validation`` hook that recomputes the cached slug unless the
  record is locked
- a write guard on the cache column that rejects direct assignment, or,
  in lock mode, accepts it and sets the lock column
- the optional validation ruleset for the cache column

Example::

    @sluggable("title", allow_lock=True)
    class Book(ValidatedModel, BaseDatabaseModel):
        __tablename__ = "books"

        id: Mapped[int] = mapped_column(primary_key=True)
        title: Mapped[str | None]
        slug: Mapped[str | None]
        slug_lock: Mapped[bool | None]
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import ValidationError
from sqlalchemy import inspect
from sqlalchemy.orm.attributes import set_attribute

from sluggable.core.config import get_settings
from sluggable.core.exceptions import (
    CacheColumnNotWritableError,
    SluggableConfigurationError,
)
from sluggable.db.models.validated_model import ValidatedModel
from sluggable.observability.logging import get_logger
from sluggable.slugs.deriver import SlugDeriver
from sluggable.slugs.lock_guard import LockGuard, LockState
from sluggable.slugs.options import SlugOptions, resolve_callback_method
from sluggable.validation import ValidationRules, compile_rules

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=type)

_OPTION_NAMES = frozenset(f.name for f in dataclasses.fields(SlugOptions)) - {"source"}


@dataclass(frozen=True)
class SluggableConfig:
    """Resolved sluggable setup stored on the model as ``__sluggable__``."""

    options: SlugOptions
    deriver: SlugDeriver
    guard: LockGuard
    rules: ValidationRules | None = None

    @property
    def cache_column(self) -> str:
        return self.options.cache_column  # type: ignore[return-value]

    @property
    def lock_column(self) -> str:
        return self.options.lock_column  # type: ignore[return-value]


def slug_config(model_or_record: Any) -> SluggableConfig:
    """Return the sluggable setup of a model class or instance.

    Raises:
        SluggableConfigurationError: If the model was not declared sluggable.
    """
    model = model_or_record if isinstance(model_or_record, type) else type(model_or_record)
    config = getattr(model, "__sluggable__", None)
    if config is None:
        raise SluggableConfigurationError(model, "is not declared @sluggable")
    return config


def write_cache(record: Any, value: Any, *, force: bool = False) -> None:
    """Assign the cache column of ``record``.

    An unforced write behaves exactly like ``record.<cache_column> = value``.
    A forced write always stores the value and leaves the lock column alone.
    """
    column = slug_config(record).cache_column
    if force:
        set_attribute(record, column, value)
    else:
        setattr(record, column, value)


def lock_state(record: Any) -> LockState:
    return slug_config(record).guard.state(record)


def unlock(record: Any) -> None:
    """Clear the lock so the next validation cycle recomputes the slug."""
    config = slug_config(record)
    if not config.guard.enabled:
        raise SluggableConfigurationError(
            type(record), "lock mode is not enabled (allow_lock=False)"
        )
    config.guard.unlock(record)


def _guard_cache_write(target: Any, column: str, value: Any) -> Any:
    config = getattr(type(target), "__sluggable__", None)
    if config is None or column != config.cache_column:
        return value

    if not config.guard.enabled:
        logger.warning(
            "Rejected direct write to {}.{}",
            type(target).__name__,
            config.cache_column,
        )
        raise CacheColumnNotWritableError(target, config.cache_column)

    config.guard.lock(target)
    logger.debug(
        "Locked {}.{} at {!r}",
        type(target).__name__,
        config.cache_column,
        value,
    )
    return value


def _cache_slug(record: Any) -> None:
    config = getattr(type(record), "__sluggable__", None)
    if config is None:
        return
    if config.guard.is_locked(record):
        logger.debug(
            "Skipping slug derivation for locked {}",
            type(record).__name__,
        )
        return
    write_cache(record, config.deriver(record), force=True)


def _check_mapping(model: type, options: SlugOptions) -> None:
    if not issubclass(model, ValidatedModel):
        raise SluggableConfigurationError(
            model, "must inherit ValidatedModel to run before_validation hooks"
        )

    mapper = inspect(model, raiseerr=False)
    if mapper is None:
        raise SluggableConfigurationError(model, "is not a mapped class")

    columns = {attr.key for attr in mapper.column_attrs}
    if not hasattr(model, options.source):
        raise SluggableConfigurationError(
            model, f"source attribute {options.source!r} is not defined"
        )
    if options.cache_column not in columns:
        raise SluggableConfigurationError(
            model, f"cache column {options.cache_column!r} is not mapped"
        )
    if options.allow_lock and options.lock_column not in columns:
        raise SluggableConfigurationError(
            model, f"lock column {options.lock_column!r} is not mapped"
        )


def configure(model: ModelT, options: SlugOptions) -> SluggableConfig:
    """Attach sluggable behavior to ``model`` and return the resolved setup."""
    options = options.with_defaults(get_settings())
    _check_mapping(model, options)

    method = None
    if options.callback_method is not None:
        method = resolve_callback_method(model, options.callback_method)
        options = dataclasses.replace(options, callback_method=method)

    rules = None
    if options.validates is not None:
        try:
            rules = compile_rules(options.validates)
        except ValidationError as exc:
            raise SluggableConfigurationError(
                model, f"invalid validates ruleset: {exc}"
            ) from exc

    config = SluggableConfig(
        options=options,
        deriver=SlugDeriver(
            options.source,
            separator=options.separator,  # type: ignore[arg-type]
            callback=options.callback,
            method=method,
        ),
        guard=LockGuard(options.lock_column, enabled=options.allow_lock),  # type: ignore[arg-type]
        rules=rules,
    )
    model.__sluggable__ = config

    if rules is not None:
        model.validates(config.cache_column, rules)
    else:
        model.remove_validation(config.cache_column)
    if _cache_slug not in model.__before_validation__:
        model.before_validation(_cache_slug)

    if model.__write_guards__.get(config.cache_column) is not _guard_cache_write:
        model.guard_writes(config.cache_column, _guard_cache_write)

    logger.debug(
        "Configured {} as sluggable from {!r} into {!r} (allow_lock={})",
        model.__name__,
        options.source,
        config.cache_column,
        options.allow_lock,
    )
    return config


def sluggable(
    source: str | SlugOptions,
    /,
    **options: Any,
) -> Callable[[ModelT], ModelT]:
    """Class decorator deriving a cached slug from ``source``.

    Args:
        source: Attribute name to derive the slug from, or a complete
            :class:`SlugOptions`.
        **options: Any :class:`SlugOptions` field except ``source``.

    Raises:
        SluggableConfigurationError: On unknown options or a model that does
            not map the configured columns.
    """
    unknown = set(options) - _OPTION_NAMES
    if unknown:
        raise SluggableConfigurationError(
            "sluggable", f"unknown options: {', '.join(sorted(unknown))}"
        )

    if isinstance(source, SlugOptions):
        slug_options = dataclasses.replace(source, **options)
    else:
        slug_options = SlugOptions(source, **options)

    def decorate(model: ModelT) -> ModelT:
        configure(model, slug_options)
        return model

    return decorate
