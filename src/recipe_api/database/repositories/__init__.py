"""Database repositories."""

from recipe_api.database.repositories.recipe import RecipeRepository


__all__ = ["RecipeRepository"]
