"""Slugify utility functions.

This module provides the default conversion of arbitrary text into a
URL-friendly slug, used whenever a sluggable model does not declare its own
callback.
"""

from __future__ import annotations

import re
from typing import Any

from slugify import slugify as _transliterate_slugify


_ACRONYM_BOUNDARY = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_QUOTES = re.compile(r"[\"'‘’“”]")
_WORD_BREAKS = re.compile(r"[\s_-]+")


def underscore(value: str) -> str:
    """Split CamelCase words with underscores and lowercase the result.

    >>> underscore("SluggableModel")
    'sluggable_model'
    """
    word = _ACRONYM_BOUNDARY.sub(r"\1_\2", value)
    word = _CAMEL_BOUNDARY.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def parameterize(value: Any, separator: str = "-") -> str:
    """Convert a value into a slug.

    Quotes are dropped, accented characters are transliterated to their
    base Latin letters, and every run of other punctuation, whitespace,
    underscores or hyphens becomes a single separator.

    Args:
        value: The source value. ``None`` yields an empty slug; anything else
            is converted with ``str()``.
        separator: String placed between words.

    Returns:
        str: The slug, without leading or trailing separators.
    """
    if value is None:
        return ""

    text = _QUOTES.sub("", underscore(str(value)))
    text = _transliterate_slugify(text, separator="-")
    text = _WORD_BREAKS.sub(lambda _: separator, text)
    if not separator:
        return text
    edge = re.escape(separator)
    return re.sub(rf"^(?:{edge})+|(?:{edge})+$", "", text)
