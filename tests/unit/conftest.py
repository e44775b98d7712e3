"""Unit test configuration.

Unit tests should be fast and isolated - no external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

import recipe_api.auth.providers.factory as auth_factory_module
import recipe_api.database.connection as db_module


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def reset_global_state() -> Generator[None]:
    """Reset the module-level Mongo client and auth provider."""
    db_module._state["client"] = None
    auth_factory_module._state["provider"] = None
    yield
    db_module._state["client"] = None
    auth_factory_module._state["provider"] = None
