"""Integration test fixtures.

A throwaway MongoDB is started once per session with testcontainers; each
test gets its own collection so documents never leak between tests.
Run with ``pytest -m integration`` (Docker required).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import uuid4

import pytest
from motor.motor_asyncio import AsyncIOMotorClient
from testcontainers.mongodb import MongoDbContainer

from recipe_api.database import RecipeRepository


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator


@pytest.fixture(scope="session")
def mongo_url() -> Generator[str]:
    """Start a MongoDB container for the whole session."""
    with MongoDbContainer("mongo:7") as container:
        yield container.get_connection_url()


@pytest.fixture
async def mongo_client(mongo_url: str) -> AsyncGenerator[AsyncIOMotorClient[Any]]:
    """Motor client bound to the current event loop."""
    client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(mongo_url, tz_aware=True)
    yield client
    client.close()


@pytest.fixture
async def repository(
    mongo_client: AsyncIOMotorClient[Any],
) -> AsyncGenerator[RecipeRepository]:
    """Repository over a fresh, uniquely named collection."""
    collection = mongo_client["recipes_it"][f"Recipes_{uuid4().hex}"]
    yield RecipeRepository(collection)
    await collection.drop()
