"""MongoDB persistence layer.

This module provides:
- Motor client management
- The recipe repository
- Health check utilities
"""

from recipe_api.database.connection import (
    check_database_health,
    close_mongo_client,
    get_mongo_client,
    get_recipes_collection,
    init_mongo_client,
)
from recipe_api.database.exceptions import StoreError
from recipe_api.database.repositories.recipe import RecipeRepository


__all__ = [
    "RecipeRepository",
    "StoreError",
    "check_database_health",
    "close_mongo_client",
    "get_mongo_client",
    "get_recipes_collection",
    "init_mongo_client",
]
