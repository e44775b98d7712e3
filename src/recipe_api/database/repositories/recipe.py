"""Recipe document repository.

Provides the data access layer for recipes stored in MongoDB. Every
operation is a single round trip; mutations that return the document use
the store's atomic find-and-modify commands and return the post-change
state.

A malformed identifier and a missing document produce the same ``None``
outcome. Driver failures are re-raised as StoreError.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from recipe_api.database.connection import get_recipes_collection
from recipe_api.database.exceptions import StoreError
from recipe_api.models.recipe import MUTABLE_FIELDS, RecipeEntity
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import Mapping

    from motor.motor_asyncio import AsyncIOMotorCollection

logger = get_logger(__name__)


def parse_object_id(recipe_id: str) -> ObjectId | None:
    """Parse a 24-hex string into an ObjectId, or None when malformed."""
    try:
        return ObjectId(recipe_id)
    except (InvalidId, TypeError):
        return None


# Largest page number accepted; keeps skip well inside a BSON int64
MAX_PAGE = 2**31 - 1


def pagination_window(page: int, per_page: int) -> tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page.

    Raises:
        ValueError: If page or per_page is below 1, or page exceeds MAX_PAGE.
    """
    if not 1 <= page <= MAX_PAGE:
        msg = f"page must be between 1 and {MAX_PAGE}, got {page}"
        raise ValueError(msg)
    if per_page < 1:
        msg = f"per_page must be >= 1, got {per_page}"
        raise ValueError(msg)
    return (page - 1) * per_page, per_page


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RecipeRepository:
    """Repository for recipe documents.

    Wraps one Motor collection. The instance holds no mutable state and is
    shared by all concurrent requests.
    """

    def __init__(self, collection: AsyncIOMotorCollection[Any] | None = None) -> None:
        """Initialize repository with an optional collection handle.

        Args:
            collection: Motor collection. If None, uses the configured
                recipes collection of the global client.
        """
        self._collection = collection

    @property
    def collection(self) -> AsyncIOMotorCollection[Any]:
        """Get the recipes collection."""
        if self._collection is not None:
            return self._collection
        return get_recipes_collection()

    # -------------------------------------------------------------------------
    # Create
    # -------------------------------------------------------------------------

    async def insert(self, recipe: RecipeEntity) -> str:
        """Insert one recipe and return the assigned identifier as hex string.

        Raises:
            StoreError: On any driver failure.
        """
        try:
            result = await self.collection.insert_one(recipe.to_document())
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        recipe_id = str(result.inserted_id)
        logger.debug("Recipe inserted", recipe_id=recipe_id)
        return recipe_id

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    async def find_by_id(self, recipe_id: str) -> RecipeEntity | None:
        """Find a recipe by identifier.

        Returns:
            The recipe, or None for a malformed identifier or no match.
        """
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        try:
            document = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        return RecipeEntity.from_document(document) if document else None

    async def find_photo_url(self, recipe_id: str) -> str | None:
        """Return only the photo URL of a recipe.

        Returns:
            The URL, or None for a malformed identifier, no match, or a
            recipe without a photo.
        """
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        try:
            document = await self.collection.find_one(
                {"_id": object_id}, projection={"photo_url": 1}
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        if not document:
            return None
        return document.get("photo_url")

    async def find_by_owner_email(self, email: str) -> list[RecipeEntity]:
        """Find all recipes owned by an email address (exact match)."""
        try:
            cursor = self.collection.find({"email": email}).sort("_id", ASCENDING)
            documents = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        return [RecipeEntity.from_document(doc) for doc in documents]

    async def find_all_paginated(self, page: int, per_page: int) -> list[RecipeEntity]:
        """Return one page of recipes ordered by identifier.

        Args:
            page: 1-based page number.
            per_page: Page size.

        Raises:
            ValueError: If page or per_page is below 1.
            StoreError: On any driver failure.
        """
        skip, limit = pagination_window(page, per_page)

        try:
            cursor = (
                self.collection.find({})
                .sort("_id", ASCENDING)
                .skip(skip)
                .limit(limit)
            )
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        return [RecipeEntity.from_document(doc) for doc in documents]

    # -------------------------------------------------------------------------
    # Update
    # -------------------------------------------------------------------------

    async def replace_by_id(
        self, recipe_id: str, recipe: RecipeEntity
    ) -> RecipeEntity | None:
        """Overwrite every client-controlled field of a recipe.

        The stored ``created`` survives unless the entity carries one.

        Returns:
            The document after replacement, or None on malformed id / no match.
        """
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        fields = recipe.to_document()
        fields.pop("_id", None)

        try:
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        return RecipeEntity.from_document(document) if document else None

    async def partial_update_by_id(
        self, recipe_id: str, fields: Mapping[str, Any]
    ) -> RecipeEntity | None:
        """Set only the given fields, always refreshing ``updated``.

        Args:
            recipe_id: Recipe identifier.
            fields: Field name to new value. Only mutable recipe fields
                are accepted.

        Returns:
            The document after the update, or None on malformed id / no match.

        Raises:
            ValueError: If a field is not client-mutable.
        """
        rejected = sorted(set(fields) - MUTABLE_FIELDS)
        if rejected:
            msg = f"Fields cannot be updated: {', '.join(rejected)}"
            raise ValueError(msg)

        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        update = {**fields, "updated": _utcnow()}

        try:
            document = await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": update},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        return RecipeEntity.from_document(document) if document else None

    async def update_photo_url(self, recipe_id: str, url: str) -> RecipeEntity | None:
        """Change only the photo URL (and ``updated``) of a recipe."""
        return await self.partial_update_by_id(recipe_id, {"photo_url": url})

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete_by_id(self, recipe_id: str) -> RecipeEntity | None:
        """Remove a recipe and return the removed document.

        Returns:
            The deleted document, or None on malformed id / no match.
        """
        object_id = parse_object_id(recipe_id)
        if object_id is None:
            return None

        try:
            document = await self.collection.find_one_and_delete({"_id": object_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e

        if document:
            logger.debug("Recipe deleted", recipe_id=recipe_id)
            return RecipeEntity.from_document(document)
        return None
