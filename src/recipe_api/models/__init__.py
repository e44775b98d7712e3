"""Persisted document models."""

from recipe_api.models.recipe import MUTABLE_FIELDS, RecipeEntity


__all__ = ["MUTABLE_FIELDS", "RecipeEntity"]
