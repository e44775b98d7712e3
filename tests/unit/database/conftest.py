"""Database unit test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
def mock_cursor() -> MagicMock:
    """Create a chainable Motor cursor mock."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[])
    return cursor


@pytest.fixture
def mock_collection(mock_cursor: MagicMock) -> MagicMock:
    """Create a mock Motor collection."""
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.find = MagicMock(return_value=mock_cursor)
    return collection
