"""Pydantic schemas for request/response validation.

This module exports all schema classes for the Recipe API.
"""

# Base classes
from recipe_api.schemas.base import APIRequest, APIResponse

# Enums
from recipe_api.schemas.enums import ReadinessStatus, RecipeStatus

# Health schemas
from recipe_api.schemas.health import HealthResponse, ReadinessResponse

# Recipe schemas
from recipe_api.schemas.recipe import (
    ImageUrlChangeRequest,
    MessageResponse,
    Recipe,
    RecipeInput,
    RecipePatch,
)


__all__ = [
    "APIRequest",
    "APIResponse",
    "HealthResponse",
    "ImageUrlChangeRequest",
    "MessageResponse",
    "ReadinessResponse",
    "ReadinessStatus",
    "Recipe",
    "RecipeInput",
    "RecipePatch",
    "RecipeStatus",
]
