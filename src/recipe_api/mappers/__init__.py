"""Data mappers for transforming between different schema representations.

This package contains functions for mapping data between:
- Client request bodies
- Stored recipe documents
- API responses
"""

from recipe_api.mappers.recipe import build_recipe_response, map_input_dto


__all__ = [
    "build_recipe_response",
    "map_input_dto",
]
