"""Options accepted by the @sluggable declaration."""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sluggable.core.exceptions import SluggableConfigurationError

if TYPE_CHECKING:
    from sluggable.core.config import Settings
    from sluggable.validation import ValidationRules


@dataclass(frozen=True)
class RecordMethod:
    """A zero-argument method on the record that returns the slug.

    The method reads whatever fields it needs itself.
    """

    name: str

    def __call__(self, record: Any, _source: Any) -> Any:
        return getattr(record, self.name)()


@dataclass(frozen=True)
class SourceMethod:
    """A method on the record called with the source value."""

    name: str

    def __call__(self, record: Any, source: Any) -> Any:
        return getattr(record, self.name)(source)


CallbackMethod = RecordMethod | SourceMethod


def resolve_callback_method(
    model: type,
    method: str | CallbackMethod,
) -> CallbackMethod:
    """Turn a method name into a :class:`RecordMethod` or :class:`SourceMethod`.

    A method that accepts no positional arguments besides ``self`` becomes a
    RecordMethod; anything else is given the source value.

    Raises:
        SluggableConfigurationError: If the method is missing or not callable.
    """
    name = method if isinstance(method, str) else method.name
    try:
        raw = inspect.getattr_static(model, name)
    except AttributeError:
        raise SluggableConfigurationError(
            model, f"callback_method {name!r} is not defined"
        ) from None

    bound = getattr(model, name)
    if not callable(bound):
        raise SluggableConfigurationError(
            model, f"callback_method {name!r} is not callable"
        )
    if not isinstance(method, str):
        return method

    parameters = list(inspect.signature(bound).parameters.values())
    # Plain functions looked up on the class still carry `self`
    if inspect.isfunction(raw) and parameters:
        parameters = parameters[1:]

    positional = [
        p
        for p in parameters
        if p.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
    ]
    return SourceMethod(name) if positional else RecordMethod(name)


@dataclass(frozen=True)
class SlugOptions:
    """Configuration for one sluggable model.

    Attributes:
        source: Attribute the slug is derived from.
        allow_lock: If set, the cache column can be assigned manually and the
            assigned value is preserved on later saves. Requires a boolean
            lock column.
        callback: One-argument callable converting the source value to the
            slug. Ignored when ``callback_method`` is set or when not callable.
        callback_method: Method on the record producing the slug, given as a
            name, :class:`RecordMethod` or :class:`SourceMethod`.
        cache_column: Column holding the slug. Defaults to ``slug``.
        lock_column: Boolean column marking a manually set slug. Defaults to
            ``<cache_column>_lock``. Ignored unless ``allow_lock`` is set.
        separator: String between words in the default slug. Defaults to ``-``.
        validates: Ruleset attached to the cache column.
    """

    source: str
    allow_lock: bool = False
    callback: Callable[[Any], Any] | None = None
    callback_method: str | CallbackMethod | None = None
    cache_column: str | None = None
    lock_column: str | None = None
    separator: str | None = None
    validates: Mapping[str, Any] | ValidationRules | None = None

    def with_defaults(self, settings: Settings) -> SlugOptions:
        """Return a copy with every unset column and separator filled in."""
        cache_column = self.cache_column or settings.slug.default_cache_column
        return dataclasses.replace(
            self,
            cache_column=cache_column,
            lock_column=(
                self.lock_column or settings.slug.lock_column_for(cache_column)
            ),
            separator=(
                settings.slug.default_separator
                if self.separator is None
                else self.separator
            ),
            callback=self.callback if callable(self.callback) else None,
        )
