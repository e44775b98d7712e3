"""Application lifespan event handlers.

Startup opens the MongoDB client, builds the recipe repository and
initializes the auth provider. Both are critical: a failure aborts startup.
Shutdown releases them in reverse order.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_api.auth.providers import initialize_auth_provider, shutdown_auth_provider
from recipe_api.core.config import Settings, get_settings
from recipe_api.database import (
    RecipeRepository,
    close_mongo_client,
    get_recipes_collection,
    init_mongo_client,
)
from recipe_api.observability.logging import get_logger, setup_logging


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize all application services during startup."""
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # Store is critical - will raise on failure
    await _init_store(app, settings)

    # Auth is critical - will raise on failure
    await _init_auth(settings)

    logger.info("Application startup complete")


async def _init_store(app: FastAPI, settings: Settings) -> None:
    """Connect to MongoDB and expose the shared repository on app.state."""
    try:
        await init_mongo_client(settings)
    except Exception:
        logger.exception("Failed to initialize MongoDB client")
        raise

    app.state.recipe_repository = RecipeRepository(get_recipes_collection(settings))
    logger.info(
        "RecipeRepository initialized",
        database=settings.mongo.database,
        collection=settings.mongo.recipes_collection,
    )


async def _init_auth(settings: Settings) -> None:
    """Initialize auth provider (critical service)."""
    try:
        await initialize_auth_provider(settings)
        logger.info("Auth provider initialized", mode=settings.auth.mode)
    except Exception:
        logger.exception("Failed to initialize auth provider")
        raise


async def _shutdown(app: FastAPI) -> None:
    """Shutdown all application services."""
    logger.info("Shutting down application")

    await shutdown_auth_provider()

    app.state.recipe_repository = None
    await close_mongo_client()

    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Settings come from ``app.state.settings`` when the factory set them,
    otherwise from the cached global settings.
    """
    settings = getattr(app.state, "settings", None)
    if not isinstance(settings, Settings):
        settings = get_settings()

    await _startup(app, settings)
    try:
        yield
    finally:
        await _shutdown(app)
