"""YAML settings source layered by SLUGGABLE_ENV."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

# src/sluggable/core/config/yaml_source.py -> <repo>/config
_DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "config"
_SUFFIXES = (".yaml", ".yml")


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` merged in, section by section.

    Nested mappings are merged key by key; any other value in ``override``
    replaces the one in ``base``. Neither argument is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _yaml_files(directory: Path) -> list[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix in _SUFFIXES)


def _read_mapping(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping of settings sections, got {type(data).__name__}"
        raise ValueError(msg)
    return data


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings read from ``config/base`` then ``config/environments/<env>``.

    Files in each directory are applied in name order, and environment
    files win over base files. ``SLUGGABLE_CONFIG_DIR`` replaces the
    repository's ``config`` directory.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self.config_dir = Path(
            os.getenv("SLUGGABLE_CONFIG_DIR") or _DEFAULT_CONFIG_DIR
        ).expanduser()
        self.environment = os.getenv("SLUGGABLE_ENV", "development")
        self.loaded_files: list[Path] = []
        self._data = self._load()

    def _load(self) -> dict[str, Any]:
        layers = (
            self.config_dir / "base",
            self.config_dir / "environments" / self.environment,
        )
        data: dict[str, Any] = {}
        for directory in layers:
            for path in _yaml_files(directory):
                data = deep_merge(data, _read_mapping(path))
                self.loaded_files.append(path)
        return data

    def get_field_value(
        self,
        field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)
