"""Persisted recipe document model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


# Fields a client may change through replace or partial update
MUTABLE_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "steps", "ingredients", "email", "photo_url", "tags"}
)


class RecipeEntity(BaseModel):
    """A recipe as stored in the ``Recipes`` collection.

    ``id`` maps to the document ``_id``. It is ``None`` until the store
    assigns one. ``created`` is ``None`` on entities built for a full
    replace, in which case the stored value is left untouched.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        extra="ignore",
    )

    id: ObjectId | None = Field(default=None, alias="_id")
    title: str
    description: str
    steps: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    email: str
    photo_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    created: datetime | None = None
    updated: datetime

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> RecipeEntity:
        """Build an entity from a raw BSON document."""
        return cls.model_validate(document)

    def to_document(self) -> dict[str, Any]:
        """Render the entity as a BSON document.

        ``_id`` is omitted when unset so the store assigns one, and
        ``created`` is omitted when unset so it is never overwritten.
        """
        document = self.model_dump(by_alias=True)
        if document.get("_id") is None:
            document.pop("_id", None)
        if document.get("created") is None:
            document.pop("created", None)
        return document
