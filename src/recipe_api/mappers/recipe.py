"""Recipe-related data mappers.

This module contains functions for transforming recipe data between
the client DTO, the stored entity and the API response.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from recipe_api.models.recipe import RecipeEntity
from recipe_api.schemas import Recipe, RecipeStatus


if TYPE_CHECKING:
    from bson import ObjectId

    from recipe_api.schemas import RecipeInput


def map_input_dto(
    recipe_input: RecipeInput,
    recipe_id: ObjectId | None,
    status: RecipeStatus,
) -> RecipeEntity:
    """Build a storable entity from a client DTO.

    Args:
        recipe_input: Validated client body.
        recipe_id: Identifier to carry, or None to let the store assign one.
        status: CREATED stamps both ``created`` and ``updated``; UPDATED
            stamps only ``updated`` and leaves ``created`` unset so the
            stored value is kept.

    Returns:
        Entity ready for insert or replace.
    """
    now = datetime.now(UTC)
    created = now if status == RecipeStatus.CREATED else None

    return RecipeEntity(
        id=recipe_id,
        title=recipe_input.title,
        description=recipe_input.description,
        steps=list(recipe_input.steps),
        ingredients=list(recipe_input.ingredients),
        email=recipe_input.email,
        photo_url=recipe_input.photo_url,
        tags=list(recipe_input.tags),
        created=created,
        updated=now,
    )


def build_recipe_response(entity: RecipeEntity) -> Recipe:
    """Build API response from a stored entity.

    Raises:
        ValueError: If the entity has not been assigned an identifier.
    """
    if entity.id is None:
        msg = "Cannot render a recipe without an identifier"
        raise ValueError(msg)

    return Recipe(
        id=str(entity.id),
        title=entity.title,
        description=entity.description,
        steps=entity.steps,
        ingredients=entity.ingredients,
        email=entity.email,
        tags=entity.tags,
        photo_url=entity.photo_url,
        created=entity.created,
        updated=entity.updated,
    )
