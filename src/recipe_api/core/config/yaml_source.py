"""YAML settings source merging base and per-environment files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo


CONFIG_DIR_ENV = "RECIPE_API_CONFIG_DIR"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return ``base`` with ``override`` applied, merging nested dicts key by key."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_dir(directory: Path, into: dict[str, Any]) -> dict[str, Any]:
    """Merge every ``*.yaml`` file of ``directory`` into ``into``, sorted by name."""
    if not directory.exists():
        return into
    merged = into
    for yaml_file in sorted(directory.glob("*.yaml")):
        with yaml_file.open(encoding="utf-8") as f:
            merged = deep_merge(merged, yaml.safe_load(f) or {})
    return merged


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load and merge YAML files based on APP_ENV.

    Stage 1 loads config/base/*.yaml, stage 2 deep-merges
    config/environments/{APP_ENV}/*.yaml on top. The config directory can be
    relocated with the RECIPE_API_CONFIG_DIR environment variable.
    """

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        self._config_dir = self._find_config_dir()
        self._app_env = os.getenv("APP_ENV", "development")
        self._yaml_data = self._load_yaml_files()

    def _find_config_dir(self) -> Path:
        """Find the config directory (env override, else project root)."""
        override = os.getenv(CONFIG_DIR_ENV)
        if override:
            return Path(override)
        # src/recipe_api/core/config/yaml_source.py -> project root
        return Path(__file__).resolve().parents[4] / "config"

    def _load_yaml_files(self) -> dict[str, Any]:
        merged = load_yaml_dir(self._config_dir / "base", {})
        return load_yaml_dir(
            self._config_dir / "environments" / self._app_env, merged
        )

    def get_field_value(
        self,
        _field: FieldInfo,
        field_name: str,
    ) -> tuple[Any, str, bool]:
        """Get the value for a specific field from YAML data.

        Returns:
            Tuple of (value, field_name, is_complex).
        """
        value = self._yaml_data.get(field_name)
        return value, field_name, isinstance(value, (dict, list))

    def __call__(self) -> dict[str, Any]:
        """Return all YAML configuration data."""
        return self._yaml_data
