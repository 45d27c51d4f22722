"""Unit tests for the @sluggable declaration checks."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sluggable import (
    CacheColumnNotWritableError,
    SlugOptions,
    SluggableConfigurationError,
    ValidatedModel,
    slug_config,
    sluggable,
    unlock,
)
from sluggable.slugs import RecordMethod, SourceMethod, configure
from sluggable.slugs.decorator import _cache_slug, _guard_cache_write
from tests.fixtures.models import PlainBook, RecordMethodBook, SourceMethodBook


pytestmark = pytest.mark.unit


@pytest.fixture
def base():
    """A throwaway declarative base so test tables never collide."""

    class Base(DeclarativeBase):
        pass

    return Base


class TestDeclarationChecks:
    """Tests for errors raised while declaring a model sluggable."""

    def test_requires_validated_model(self, base):
        """Should reject a model without the validation lifecycle."""

        class Article(base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="ValidatedModel"):
            sluggable("title")(Article)

    def test_requires_mapped_class(self):
        """Should reject a class that is not mapped."""

        class Draft(ValidatedModel):
            title = None
            slug = None

        with pytest.raises(SluggableConfigurationError, match="not a mapped class"):
            sluggable("title")(Draft)

    def test_requires_source_attribute(self, base):
        """Should reject a source the model does not define."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="source attribute 'title'"):
            sluggable("title")(Article)

    def test_requires_cache_column(self, base):
        """Should reject a cache column that is not mapped."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="cache column 'slug'"):
            sluggable("title")(Article)

    def test_requires_lock_column_in_lock_mode(self, base):
        """Should reject lock mode without a lock column."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="lock column 'slug_lock'"):
            sluggable("title", allow_lock=True)(Article)

    def test_lock_column_not_needed_without_lock_mode(self, base):
        """Should accept a model without a lock column when lock mode is off."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        assert sluggable("title")(Article) is Article
        assert slug_config(Article).guard.enabled is False

    def test_rejects_missing_callback_method(self, base):
        """Should reject a callback method the model does not define."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="'to_slug' is not defined"):
            sluggable("title", callback_method="to_slug")(Article)

    def test_rejects_invalid_ruleset(self, base):
        """Should reject rule names it does not know."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="invalid validates ruleset"):
            sluggable("title", validates={"uniqueness": True})(Article)

    def test_rejects_uncompilable_format(self, base):
        """Should reject a format pattern that does not compile."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        with pytest.raises(SluggableConfigurationError, match="invalid validates ruleset"):
            sluggable("title", validates={"format": "(unclosed"})(Article)

    def test_rejects_unknown_options(self):
        """Should fail before a model is even decorated."""
        with pytest.raises(SluggableConfigurationError, match="unknown options: colum"):
            sluggable("title", colum="slug")

    def test_accepts_options_object(self, base):
        """Should accept a complete SlugOptions in place of the source name."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            permalink: Mapped[str | None]

        sluggable(SlugOptions("title", cache_column="permalink"), separator="_")(Article)

        config = slug_config(Article)
        assert config.cache_column == "permalink"
        assert config.options.separator == "_"


class TestSlugConfig:
    """Tests for the resolved configuration stored on models."""

    def test_defaults(self):
        """Should fill in default columns and separator."""
        config = slug_config(PlainBook)

        assert config.cache_column == "slug"
        assert config.lock_column == "slug_lock"
        assert config.options.separator == "-"
        assert config.rules is None

    def test_works_on_instances(self):
        """Should resolve the configuration from a record."""
        assert slug_config(PlainBook(title="Emma")) is slug_config(PlainBook)

    def test_resolves_callback_method_variants(self):
        """Should store the resolved method variant."""
        assert slug_config(SourceMethodBook).options.callback_method == SourceMethod(
            "slugify"
        )
        assert slug_config(RecordMethodBook).options.callback_method == RecordMethod(
            "to_slug"
        )

    def test_undecorated_model(self):
        """Should reject models that were never declared sluggable."""
        with pytest.raises(SluggableConfigurationError, match="not declared @sluggable"):
            slug_config(ValidatedModel)

    def test_reconfiguring_does_not_duplicate_hook(self, base):
        """Should register the derivation hook once per model."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        configure(Article, SlugOptions("title"))
        configure(Article, SlugOptions("title", separator="_"))

        assert Article.__before_validation__.count(_cache_slug) == 1
        assert slug_config(Article).options.separator == "_"

    def test_reconfiguring_without_rules_drops_them(self, base):
        """Should detach the old ruleset when re-declared without one."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        configure(Article, SlugOptions("title", validates={"presence": True}))
        assert not Article().is_valid()

        configure(Article, SlugOptions("title"))

        assert "slug" not in Article.__validation_rules__
        assert Article().is_valid()

    def test_reconfiguring_keeps_one_write_guard(self, base):
        """Should keep guarding the cache column after re-declaring."""

        class Article(ValidatedModel, base):
            __tablename__ = "articles"

            id: Mapped[int] = mapped_column(primary_key=True)
            title: Mapped[str | None]
            slug: Mapped[str | None]

        configure(Article, SlugOptions("title"))
        configure(Article, SlugOptions("title", separator="_"))

        assert dict(Article.__write_guards__) == {"slug": _guard_cache_write}
        with pytest.raises(CacheColumnNotWritableError):
            Article(slug="manual")

    def test_unlock_requires_lock_mode(self):
        """Should refuse to unlock a model without lock mode."""
        with pytest.raises(SluggableConfigurationError, match="lock mode is not enabled"):
            unlock(PlainBook(title="Emma"))
