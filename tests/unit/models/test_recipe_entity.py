"""Unit tests for the stored recipe document model."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from bson import ObjectId

from recipe_api.models import MUTABLE_FIELDS, RecipeEntity
from tests.factories import make_entity


pytestmark = pytest.mark.unit


class TestRecipeEntity:
    """Tests for RecipeEntity document conversion."""

    def test_from_document_maps_underscore_id(self) -> None:
        """Should read the store's _id into id."""
        oid = ObjectId()
        now = datetime.now(UTC)

        entity = RecipeEntity.from_document(
            {
                "_id": oid,
                "title": "Soup",
                "description": "Warm",
                "steps": ["boil"],
                "ingredients": ["water"],
                "email": "a@b.com",
                "updated": now,
                "legacy_field": "ignored",
            }
        )

        assert entity.id == oid
        assert entity.tags == []
        assert entity.photo_url is None
        assert entity.created is None

    def test_to_document_omits_unset_id_and_created(self) -> None:
        """Should leave _id to the store and never blank created."""
        document = make_entity(id=None, created=None).to_document()

        assert "_id" not in document
        assert "created" not in document
        assert "id" not in document
        assert document["updated"] is not None

    def test_to_document_keeps_assigned_id(self) -> None:
        """Should write an assigned id under _id."""
        entity = make_entity()

        assert entity.to_document()["_id"] == entity.id

    def test_mutable_fields(self) -> None:
        """Identifier and timestamps are never client-mutable."""
        assert {"_id", "id", "created", "updated"}.isdisjoint(MUTABLE_FIELDS)
        assert "photo_url" in MUTABLE_FIELDS
