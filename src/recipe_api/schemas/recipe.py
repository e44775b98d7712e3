"""Recipe request and response schemas.

This module contains schemas for the recipe CRUD endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from recipe_api.schemas.base import APIRequest, APIResponse


class RecipeInput(APIRequest):
    """Client-supplied recipe body for create and full replace.

    Identifier and timestamps are never client-settable; any such
    properties in the body are ignored.
    """

    title: str = Field(..., description="Recipe title")
    description: str = Field(..., description="Recipe description")
    steps: list[str] = Field(..., description="Ordered preparation steps")
    ingredients: list[str] = Field(..., description="Ingredient lines")
    email: str = Field(..., description="Owner email")
    tags: list[str] = Field(default_factory=list, description="Free-text tags")
    photo_url: str | None = Field(default=None, description="Photo URL")


class RecipePatch(APIRequest):
    """Partial recipe body. Only fields the client sends are applied."""

    title: str | None = None
    description: str | None = None
    steps: list[str] | None = None
    ingredients: list[str] | None = None
    email: str | None = None
    tags: list[str] | None = None
    photo_url: str | None = None

    def to_fields(self) -> dict[str, Any]:
        """Return the fields explicitly sent by the client.

        An explicit ``null`` clears ``photo_url`` and is dropped for every
        other field, since those are required on the stored document.
        """
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name == "photo_url"
        }


class ImageUrlChangeRequest(APIRequest):
    """Body of the photo URL update endpoint."""

    photo_url: str = Field(..., description="New photo URL")


class Recipe(APIResponse):
    """Recipe as returned by the API."""

    id: str = Field(..., description="Recipe identifier (24 hex characters)")
    title: str
    description: str
    steps: list[str]
    ingredients: list[str]
    email: str
    tags: list[str] = Field(default_factory=list)
    photo_url: str | None = None
    created: datetime | None = Field(default=None, description="Creation time")
    updated: datetime = Field(..., description="Last modification time")


class MessageResponse(APIResponse):
    """Plain ``{"message": ...}`` acknowledgement."""

    message: str
