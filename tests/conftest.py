"""Shared test fixtures and configuration for the Recipe API tests.

The test environment is selected before any settings are loaded, so the
YAML overrides in config/environments/test apply (auth disabled, text logs).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from recipe_api.core.config import get_settings


os.environ["APP_ENV"] = "test"

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Reload settings for every test so env changes are picked up."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
