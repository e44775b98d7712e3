"""Unit tests for application configuration.

Tests cover:
- List parsing
- YAML merging
- Settings per environment
- Computed properties
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from recipe_api.core.config import AuthMode, Settings, get_settings
from recipe_api.core.config.settings import AuthSettings, parse_list
from recipe_api.core.config.yaml_source import CONFIG_DIR_ENV, deep_merge, load_yaml_dir


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestParseList:
    """Tests for parse_list helper function."""

    def test_parses_comma_separated_string(self) -> None:
        """Should parse comma-separated string."""
        result = parse_list("http://localhost:3000,http://localhost:8080")
        assert result == ["http://localhost:3000", "http://localhost:8080"]

    def test_filters_empty_values_and_whitespace(self) -> None:
        """Should strip whitespace and drop empty entries."""
        result = parse_list(" http://a.test , ,http://b.test ")
        assert result == ["http://a.test", "http://b.test"]

    def test_passes_through_list(self) -> None:
        """Should return list as-is."""
        origins = ["http://localhost:3000"]
        assert parse_list(origins) == origins


class TestDeepMerge:
    """Tests for YAML dictionary merging."""

    def test_nested_values_are_merged(self) -> None:
        """Should override leaves and keep siblings."""
        base = {"api": {"prefix": "", "cors_origins": ["*"]}, "app": {"debug": False}}
        override = {"api": {"cors_origins": []}}

        result = deep_merge(base, override)

        assert result == {"api": {"prefix": "", "cors_origins": []}, "app": {"debug": False}}

    def test_does_not_mutate_base(self) -> None:
        """Should return a new dictionary."""
        base = {"a": {"b": 1}}
        deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}

    def test_load_yaml_dir_merges_sorted_files(self, tmp_path: Path) -> None:
        """Later files (by name) should win."""
        (tmp_path / "a.yaml").write_text("mongo:\n  database: first\n  max_pool_size: 5\n")
        (tmp_path / "b.yaml").write_text("mongo:\n  database: second\n")

        result = load_yaml_dir(tmp_path, {})

        assert result == {"mongo": {"database": "second", "max_pool_size": 5}}

    def test_load_yaml_dir_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory leaves the data untouched."""
        assert load_yaml_dir(tmp_path / "nope", {"x": 1}) == {"x": 1}


class TestSettings:
    """Tests for Settings class."""

    def test_base_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should load base YAML values."""
        monkeypatch.setenv("APP_ENV", "development")
        settings = Settings()

        assert settings.app.name == "Recipe API"
        assert settings.server.port == 8080
        assert settings.mongo.database == "alsomeb"
        assert settings.mongo.recipes_collection == "Recipes"
        assert settings.api.pagination.default_per_page == 5
        assert settings.api.pagination.max_per_page == 100
        assert settings.api.cors_max_age == 3600

    def test_development_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Development should enable debug and text logs."""
        monkeypatch.setenv("APP_ENV", "development")
        settings = Settings()

        assert settings.app.debug is True
        assert settings.logging.format == "text"
        assert settings.auth_mode_enum == AuthMode.FIREBASE

    def test_test_environment_disables_auth(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The test environment should run without authentication."""
        monkeypatch.setenv("APP_ENV", "test")
        settings = Settings()

        assert settings.auth_mode_enum == AuthMode.DISABLED
        assert settings.is_non_production is True

    def test_production_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Production should bind all interfaces and keep cross-origin access."""
        monkeypatch.setenv("APP_ENV", "production")
        settings = Settings()

        assert settings.server.host == "0.0.0.0"  # noqa: S104
        assert settings.api.cors_origins == ["*"]
        assert settings.is_production is True
        assert settings.is_non_production is False

    def test_nested_environment_variable_override(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should let MONGO__DATABASE override the YAML value."""
        monkeypatch.setenv("MONGO__DATABASE", "recipes_test")
        settings = Settings()

        assert settings.mongo.database == "recipes_test"

    def test_secrets_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should read secrets from environment variables."""
        monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
        monkeypatch.setenv("FIREBASE_ID", "my-project")
        settings = Settings()

        assert settings.MONGO_URI == "mongodb://db:27017"
        assert settings.FIREBASE_ID == "my-project"

    def test_cors_origins_from_comma_separated_env(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Should accept a comma separated origin list."""
        settings = Settings(api={"cors_origins": "http://a.test,http://b.test"})

        assert settings.api.cors_origins == ["http://a.test", "http://b.test"]

    def test_invalid_auth_mode(self) -> None:
        """Should reject unknown auth modes."""
        settings = Settings(auth=AuthSettings(mode="magic"))

        with pytest.raises(ValueError, match="Invalid auth mode"):
            _ = settings.auth_mode_enum

    def test_config_dir_override(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        """Should load YAML from the directory named by the env variable."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "mongo.yaml").write_text("mongo:\n  database: elsewhere\n")
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))

        settings = Settings()

        assert settings.mongo.database == "elsewhere"
        assert settings.app.name == "Recipe API"


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_returns_same_instance(self) -> None:
        """Should cache the settings instance."""
        assert get_settings() is get_settings()
