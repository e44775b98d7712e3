"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
app.state; these dependencies hand them to route handlers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from recipe_api.core.config import Settings, get_settings


if TYPE_CHECKING:
    from recipe_api.database.repositories.recipe import RecipeRepository


async def get_recipe_repository(request: Request) -> RecipeRepository:
    """Get the recipe repository from app state.

    Raises:
        HTTPException: 503 if the repository is not initialized.
    """
    repository: RecipeRepository | None = getattr(
        request.app.state, "recipe_repository", None
    )
    if repository is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe store not available",
        )
    return repository


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was built with."""
    settings = getattr(request.app.state, "settings", None)
    if isinstance(settings, Settings):
        return settings
    return get_settings()
