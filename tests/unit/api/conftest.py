"""API test fixtures.

The app is built with the factory but the lifespan is never entered, so no
MongoDB client or auth provider is created. Routes get a repository and a
caller through app.state and dependency overrides.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any
from unittest.mock import AsyncMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from recipe_api.auth.dependencies import CurrentUser, get_current_user
from recipe_api.core.config.settings import AuthSettings, Settings
from recipe_api.database.repositories.recipe import (
    RecipeRepository,
    pagination_window,
    parse_object_id,
)
from recipe_api.factory import create_app
from recipe_api.models import MUTABLE_FIELDS


if TYPE_CHECKING:
    from fastapi import FastAPI

    from recipe_api.models import RecipeEntity


CALLER = CurrentUser(id="user-1", email="a@b.com", email_verified=True)


class InMemoryRecipeRepository:
    """Dict-backed stand-in for RecipeRepository."""

    def __init__(self) -> None:
        self.documents: dict[str, RecipeEntity] = {}

    async def insert(self, recipe: RecipeEntity) -> str:
        stored = recipe.model_copy(update={"id": ObjectId()})
        self.documents[str(stored.id)] = stored
        return str(stored.id)

    def _get(self, recipe_id: str) -> RecipeEntity | None:
        if parse_object_id(recipe_id) is None:
            return None
        return self.documents.get(recipe_id)

    async def find_by_id(self, recipe_id: str) -> RecipeEntity | None:
        return self._get(recipe_id)

    async def find_photo_url(self, recipe_id: str) -> str | None:
        recipe = self._get(recipe_id)
        return recipe.photo_url if recipe is not None else None

    async def find_by_owner_email(self, email: str) -> list[RecipeEntity]:
        return [r for r in self.documents.values() if r.email == email]

    async def find_all_paginated(self, page: int, per_page: int) -> list[RecipeEntity]:
        skip, limit = pagination_window(page, per_page)
        ordered = sorted(self.documents.values(), key=lambda r: str(r.id))
        return ordered[skip : skip + limit]

    async def replace_by_id(
        self, recipe_id: str, recipe: RecipeEntity
    ) -> RecipeEntity | None:
        current = self._get(recipe_id)
        if current is None:
            return None
        fields = recipe.model_dump(exclude={"id", "created"})
        updated = current.model_copy(update=fields)
        self.documents[recipe_id] = updated
        return updated

    async def partial_update_by_id(
        self, recipe_id: str, fields: dict[str, Any]
    ) -> RecipeEntity | None:
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            msg = f"Fields cannot be updated: {sorted(unknown)}"
            raise ValueError(msg)
        current = self._get(recipe_id)
        if current is None:
            return None
        updated = current.model_copy(
            update={**fields, "updated": datetime.now(UTC)}
        )
        self.documents[recipe_id] = updated
        return updated

    async def update_photo_url(self, recipe_id: str, url: str) -> RecipeEntity | None:
        return await self.partial_update_by_id(recipe_id, {"photo_url": url})

    async def delete_by_id(self, recipe_id: str) -> RecipeEntity | None:
        if self._get(recipe_id) is None:
            return None
        return self.documents.pop(recipe_id)


@pytest.fixture
def api_settings() -> Settings:
    """Settings of the app under test."""
    return Settings(APP_ENV="test", auth=AuthSettings(mode="disabled"))


@pytest.fixture
def app(api_settings: Settings) -> FastAPI:
    """App with an authenticated caller."""
    application = create_app(api_settings)
    application.dependency_overrides[get_current_user] = lambda: CALLER
    return application


@pytest.fixture
def mock_repository(app: FastAPI) -> AsyncMock:
    """Mock repository installed on app.state."""
    repository = AsyncMock(spec=RecipeRepository)
    app.state.recipe_repository = repository
    return repository


@pytest.fixture
def memory_repository(app: FastAPI) -> InMemoryRecipeRepository:
    """In-memory repository installed on app.state."""
    repository = InMemoryRecipeRepository()
    app.state.recipe_repository = repository
    return repository


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Test client that does not run the lifespan."""
    return TestClient(app)
