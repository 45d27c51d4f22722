"""Settings for slug defaults, logging and the database.

Values are resolved in this order, first match wins:

1. keyword arguments to ``Settings()``
2. environment variables, nested with ``__`` (``SLUG__DEFAULT_SEPARATOR=_``)
3. a ``.env`` file in the working directory
4. ``config/base/*.yaml`` overlaid with ``config/environments/$SLUGGABLE_ENV``
5. the defaults declared on the section models below
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_source import MultiYamlConfigSettingsSource


if TYPE_CHECKING:
    from pydantic_settings import PydanticBaseSettingsSource


LogLevel = Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class SlugSettings(BaseModel):
    """Defaults for @sluggable options left unset."""

    default_separator: str = "-"
    default_cache_column: str = "slug"
    lock_suffix: str = "_lock"

    @field_validator("default_cache_column")
    @classmethod
    def _cache_column_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "default_cache_column cannot be blank"
            raise ValueError(msg)
        return value

    def lock_column_for(self, cache_column: str) -> str:
        """Name of the lock column paired with ``cache_column``."""
        return f"{cache_column}{self.lock_suffix}"


class LoggingSettings(BaseModel):
    level: LogLevel = "INFO"
    format: Literal["json", "text"] = "json"
    file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class DatabaseSettings(BaseModel):
    """Engine options used by create_session_factory."""

    url: str = "sqlite://"
    echo: bool = False


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    SLUGGABLE_ENV: str = "development"

    slug: SlugSettings = SlugSettings()
    logging: LoggingSettings = LoggingSettings()
    database: DatabaseSettings = DatabaseSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Slot the YAML layers between the .env file and secrets."""
        yaml_settings = MultiYamlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process; call ``cache_clear()`` to reload."""
    return Settings()
