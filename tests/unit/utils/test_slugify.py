"""Unit tests for the slugify utility module."""

from __future__ import annotations

import pytest

from sluggable.utils.slugify import parameterize, underscore


pytestmark = pytest.mark.unit


class TestUnderscore:
    """Tests for the underscore helper."""

    def test_splits_camel_case(self) -> None:
        """Should insert underscores at lower-to-upper boundaries."""
        assert underscore("SluggableModel") == "sluggable_model"

    def test_splits_acronyms(self) -> None:
        """Should keep acronyms together and split before the next word."""
        assert underscore("HTMLParser") == "html_parser"

    def test_replaces_hyphens(self) -> None:
        """Should turn hyphens into underscores."""
        assert underscore("well-known") == "well_known"

    def test_leaves_spaced_words_alone(self) -> None:
        """Should only lowercase ordinary title case text."""
        assert underscore("A Tale of Two Cities") == "a tale of two cities"


class TestParameterize:
    """Tests for the default slug conversion."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("A Tale of Two Cities", "a-tale-of-two-cities"),
            ("The Little Prince", "the-little-prince"),
            (
                "The Lion, The Witch, and The Wardrobe",
                "the-lion-the-witch-and-the-wardrobe",
            ),
            ("Pokémon: The First Movie", "pokemon-the-first-movie"),
            ("Il Nome della Rosa", "il-nome-della-rosa"),
            ("Charlotte's Web", "charlottes-web"),
            ('The "Real" Thing', "the-real-thing"),
            ("Charlotte’s Web", "charlottes-web"),
        ],
    )
    def test_default_separator(self, source: str, expected: str) -> None:
        """Should normalize titles into hyphenated slugs."""
        assert parameterize(source) == expected

    def test_custom_separator(self) -> None:
        """Should join words with the given separator."""
        assert parameterize("The Alchemist", "_") == "the_alchemist"

    def test_collapses_whitespace_underscores_and_hyphens(self) -> None:
        """Should replace any run of word breaks with one separator."""
        assert parameterize("  spaced __ out -- words  ") == "spaced-out-words"

    def test_strips_leading_and_trailing_separators(self) -> None:
        """Should not start or end with a separator."""
        assert parameterize("--- Hello World! ---", "_") == "hello_world"

    def test_none_is_empty(self) -> None:
        """Should return an empty slug for a missing source."""
        assert parameterize(None) == ""

    def test_empty_string_is_empty(self) -> None:
        """Should return an empty slug for an empty source."""
        assert parameterize("") == ""

    def test_non_string_values_are_converted(self) -> None:
        """Should stringify non-string sources."""
        assert parameterize(2024) == "2024"

    @pytest.mark.parametrize(
        ("slug", "separator"),
        [
            ("a-tale-of-two-cities", "-"),
            ("pokemon-the-first-movie", "-"),
            ("the_alchemist", "_"),
            ("catch-22", "-"),
        ],
    )
    def test_idempotent_on_slugs(self, slug: str, separator: str) -> None:
        """Should leave slug-form input unchanged."""
        assert parameterize(slug, separator) == slug
        assert parameterize(parameterize(slug, separator), separator) == slug

    def test_multi_character_separator(self) -> None:
        """Should join with a longer separator without trimming letters."""
        assert parameterize("xylophone x-ray", "-x") == "xylophone-xx-xray"
        assert parameterize("X-Ray", "-x") == "x-xray"

    def test_empty_separator(self) -> None:
        """Should run the words together."""
        assert parameterize("The Alchemist", "") == "thealchemist"
