"""MongoDB client management.

This module provides:
- Async Motor client lifecycle management via lifespan events
- Access to the configured database and collections
- A ping-based health check
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError

from recipe_api.core.config import get_settings
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

    from recipe_api.core.config import Settings

logger = get_logger(__name__)

# Client state container (avoids global statement for mutation)
_state: dict[str, AsyncIOMotorClient[Any] | None] = {"client": None}


class MissingStoreConfigurationError(RuntimeError):
    """Raised when MONGO_URI is not configured."""


async def init_mongo_client(settings: Settings | None = None) -> AsyncIOMotorClient[Any]:
    """Create the Motor client and verify the server answers a ping.

    Should be called during application startup (lifespan). A missing
    MONGO_URI or an unreachable server is fatal.

    Raises:
        MissingStoreConfigurationError: If MONGO_URI is empty.
        PyMongoError: If the server cannot be reached.
    """
    if settings is None:
        settings = get_settings()

    if not settings.MONGO_URI:
        msg = "MONGO_URI environment variable not set"
        raise MissingStoreConfigurationError(msg)

    logger.info(
        "Connecting to MongoDB",
        database=settings.mongo.database,
        collection=settings.mongo.recipes_collection,
    )

    client: AsyncIOMotorClient[Any] = AsyncIOMotorClient(
        settings.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo.server_selection_timeout_ms,
        maxPoolSize=settings.mongo.max_pool_size,
    )

    try:
        await client.admin.command("ping")
    except PyMongoError:
        logger.exception("Failed to connect to MongoDB with provided URI")
        client.close()
        raise

    _state["client"] = client
    logger.info("MongoDB connection established successfully")
    return client


async def close_mongo_client() -> None:
    """Close the Motor client (application shutdown)."""
    client = _state["client"]
    if client is not None:
        client.close()
        _state["client"] = None
        logger.info("MongoDB client closed")


def get_mongo_client() -> AsyncIOMotorClient[Any]:
    """Get the Motor client.

    Raises:
        RuntimeError: If the client is not initialized.
    """
    client = _state["client"]
    if client is None:
        msg = "MongoDB client not initialized. Call init_mongo_client() first."
        raise RuntimeError(msg)
    return client


def get_database(settings: Settings | None = None) -> AsyncIOMotorDatabase[Any]:
    """Get the configured database handle."""
    if settings is None:
        settings = get_settings()
    return get_mongo_client()[settings.mongo.database]


def get_recipes_collection(
    settings: Settings | None = None,
) -> AsyncIOMotorCollection[Any]:
    """Get the recipes collection handle."""
    if settings is None:
        settings = get_settings()
    return get_database(settings)[settings.mongo.recipes_collection]


async def check_database_health() -> dict[str, str]:
    """Check health of the MongoDB connection.

    Returns:
        Dictionary with health status.
    """
    client = _state["client"]
    if client is None:
        return {"database": "not_initialized"}

    try:
        await client.admin.command("ping")
    except PyMongoError:
        return {"database": "unhealthy"}
    return {"database": "healthy"}
