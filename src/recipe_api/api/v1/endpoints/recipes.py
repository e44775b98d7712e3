"""Recipe endpoints.

Provides CRUD over the recipe collection. Every route requires a verified
identity and performs exactly one repository call:
- POST   /recipes                  create a recipe
- GET    /recipes                  list recipes one page at a time
- GET    /recipes/user             list the caller's recipes
- GET    /recipes/{recipe_id}      fetch one recipe
- PUT    /recipes/{recipe_id}      replace a recipe
- PATCH  /recipes/{recipe_id}      change some fields of a recipe
- DELETE /recipes/{recipe_id}      delete a recipe
- GET    /recipes/{recipe_id}/imgurl   fetch only the photo URL
- PATCH  /recipes/{recipe_id}/imgurl   change only the photo URL
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from fastapi.responses import PlainTextResponse

from recipe_api.api.dependencies import get_app_settings, get_recipe_repository
from recipe_api.auth.dependencies import CurrentUserDep
from recipe_api.core.config import Settings  # noqa: TC001
from recipe_api.core.exceptions import RecipeNotFoundException
from recipe_api.database.repositories.recipe import (
    MAX_PAGE,
    RecipeRepository,
    parse_object_id,
)
from recipe_api.mappers import build_recipe_response, map_input_dto
from recipe_api.observability.logging import get_logger
from recipe_api.schemas import (
    ImageUrlChangeRequest,
    MessageResponse,
    Recipe,
    RecipeInput,
    RecipePatch,
    RecipeStatus,
)


logger = get_logger(__name__)

router = APIRouter(tags=["Recipes"])

RepositoryDep = Annotated[RecipeRepository, Depends(get_recipe_repository)]
RecipeIdPath = Annotated[str, Path(description="Recipe identifier (24 hex characters)")]

_ERROR_RESPONSES: dict[int | str, dict[str, str]] = {
    403: {"description": "Missing or invalid JWT Token"},
    500: {"description": "Document store error"},
    503: {"description": "Service unavailable"},
}
_NOT_FOUND_RESPONSES: dict[int | str, dict[str, str]] = {
    **_ERROR_RESPONSES,
    400: {"description": "Malformed identifier or no such recipe"},
}


@router.post(
    "/recipes",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a recipe",
    responses={**_ERROR_RESPONSES, 422: {"description": "Request validation error"}},
)
async def create_recipe(
    recipe_input: RecipeInput,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> MessageResponse:
    """Store a new recipe and report its identifier.

    Identifier and timestamps are assigned by the server.
    """
    entity = map_input_dto(recipe_input, None, RecipeStatus.CREATED)
    recipe_id = await repository.insert(entity)

    logger.info("Recipe created", recipe_id=recipe_id, user_id=user.id)
    return MessageResponse(message=f"Recipe added with ID: {recipe_id}")


@router.get(
    "/recipes",
    response_model=list[Recipe],
    summary="List recipes",
    description="Returns one page of recipes in identifier order.",
    responses={**_ERROR_RESPONSES, 422: {"description": "Invalid pagination"}},
)
async def list_recipes(
    _user: CurrentUserDep,
    repository: RepositoryDep,
    settings: Annotated[Settings, Depends(get_app_settings)],
    page: Annotated[
        int | None, Query(ge=1, le=MAX_PAGE, description="1-based page")
    ] = None,
    per_page: Annotated[int | None, Query(ge=1, description="Page size")] = None,
) -> list[Recipe]:
    """List recipes, ``per_page`` capped at the configured maximum."""
    pagination = settings.api.pagination
    page = page or pagination.default_page
    per_page = min(per_page or pagination.default_per_page, pagination.max_per_page)

    recipes = await repository.find_all_paginated(page, per_page)
    return [build_recipe_response(recipe) for recipe in recipes]


@router.get(
    "/recipes/user",
    response_model=list[Recipe],
    summary="List the caller's recipes",
    description="Returns every recipe whose owner email is the caller's email.",
    responses=_ERROR_RESPONSES,
)
async def list_user_recipes(
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> list[Recipe]:
    """List recipes owned by the authenticated caller."""
    recipes = await repository.find_by_owner_email(user.email)
    return [build_recipe_response(recipe) for recipe in recipes]


@router.get(
    "/recipes/{recipe_id}",
    response_model=Recipe,
    summary="Get a recipe",
    responses=_NOT_FOUND_RESPONSES,
)
async def get_recipe(
    recipe_id: RecipeIdPath,
    _user: CurrentUserDep,
    repository: RepositoryDep,
) -> Recipe:
    """Fetch one recipe by identifier."""
    recipe = await repository.find_by_id(recipe_id)
    if recipe is None:
        raise RecipeNotFoundException.for_id(recipe_id)
    return build_recipe_response(recipe)


@router.put(
    "/recipes/{recipe_id}",
    response_model=Recipe,
    summary="Replace a recipe",
    description="Overwrites every client-controlled field; the creation time is kept.",
    responses={**_NOT_FOUND_RESPONSES, 422: {"description": "Request validation error"}},
)
async def replace_recipe(
    recipe_id: RecipeIdPath,
    recipe_input: RecipeInput,
    _user: CurrentUserDep,
    repository: RepositoryDep,
) -> Recipe:
    """Replace a recipe and return it as stored afterwards."""
    entity = map_input_dto(
        recipe_input, parse_object_id(recipe_id), RecipeStatus.UPDATED
    )
    recipe = await repository.replace_by_id(recipe_id, entity)
    if recipe is None:
        raise RecipeNotFoundException()

    logger.info("Recipe replaced", recipe_id=recipe_id)
    return build_recipe_response(recipe)


@router.patch(
    "/recipes/{recipe_id}",
    response_model=Recipe,
    summary="Update some fields of a recipe",
    description="Only the fields present in the body are changed.",
    responses={**_NOT_FOUND_RESPONSES, 422: {"description": "Request validation error"}},
)
async def patch_recipe(
    recipe_id: RecipeIdPath,
    patch: RecipePatch,
    _user: CurrentUserDep,
    repository: RepositoryDep,
) -> Recipe:
    """Apply a partial update and return the recipe as stored afterwards."""
    recipe = await repository.partial_update_by_id(recipe_id, patch.to_fields())
    if recipe is None:
        raise RecipeNotFoundException()

    logger.info("Recipe updated", recipe_id=recipe_id)
    return build_recipe_response(recipe)


@router.delete(
    "/recipes/{recipe_id}",
    response_model=MessageResponse,
    summary="Delete a recipe",
    responses=_NOT_FOUND_RESPONSES,
)
async def delete_recipe(
    recipe_id: RecipeIdPath,
    user: CurrentUserDep,
    repository: RepositoryDep,
) -> MessageResponse:
    """Delete a recipe."""
    recipe = await repository.delete_by_id(recipe_id)
    if recipe is None:
        raise RecipeNotFoundException.for_id(recipe_id)

    logger.info("Recipe deleted", recipe_id=recipe_id, user_id=user.id)
    return MessageResponse(message=f"Recipe with ID: {recipe_id} deleted")


@router.get(
    "/recipes/{recipe_id}/imgurl",
    response_class=PlainTextResponse,
    summary="Get a recipe's photo URL",
    description="Returns the photo URL as plain text.",
    responses=_NOT_FOUND_RESPONSES,
)
async def get_recipe_photo_url(
    recipe_id: RecipeIdPath,
    _user: CurrentUserDep,
    repository: RepositoryDep,
) -> PlainTextResponse:
    """Fetch only the photo URL of a recipe."""
    photo_url = await repository.find_photo_url(recipe_id)
    if photo_url is None:
        raise RecipeNotFoundException.for_id(recipe_id)
    return PlainTextResponse(photo_url)


@router.patch(
    "/recipes/{recipe_id}/imgurl",
    response_model=Recipe,
    summary="Change a recipe's photo URL",
    responses={**_NOT_FOUND_RESPONSES, 422: {"description": "Request validation error"}},
)
async def update_recipe_photo_url(
    recipe_id: RecipeIdPath,
    body: ImageUrlChangeRequest,
    _user: CurrentUserDep,
    repository: RepositoryDep,
) -> Recipe:
    """Change only the photo URL and return the recipe as stored afterwards."""
    recipe = await repository.update_photo_url(recipe_id, body.photo_url)
    if recipe is None:
        raise RecipeNotFoundException()
    return build_recipe_response(recipe)
