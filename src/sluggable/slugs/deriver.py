"""Slug derivation from a record's source attribute."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from sluggable.observability.logging import get_logger
from sluggable.slugs.options import CallbackMethod
from sluggable.utils.slugify import parameterize

logger = get_logger(__name__)


class SlugDeriver:
    """Compute a slug for a record.

    Precedence: callback method, then callback function, then the default
    :func:`~sluggable.utils.slugify.parameterize`. Callback results are used
    verbatim and callback errors propagate to the caller.
    """

    def __init__(
        self,
        source: str,
        *,
        separator: str = "-",
        callback: Callable[[Any], Any] | None = None,
        method: CallbackMethod | None = None,
    ) -> None:
        self.source = source
        self.separator = separator
        self.callback = callback
        self.method = method

    @property
    def mode(self) -> str:
        if self.method is not None:
            return "method"
        if self.callback is not None:
            return "callback"
        return "default"

    def source_value(self, record: Any) -> Any:
        return getattr(record, self.source)

    def derive(self, record: Any) -> Any:
        """Return the slug for ``record``'s current source value."""
        value = self.source_value(record)
        if self.method is not None:
            return self.method(record, value)
        if self.callback is not None:
            return self.callback(value)
        return parameterize(value, self.separator)

    def __call__(self, record: Any) -> Any:
        slug = self.derive(record)
        logger.debug(
            "Derived slug {!r} for {} ({} mode)",
            slug,
            type(record).__name__,
            self.mode,
        )
        return slug
