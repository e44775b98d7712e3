"""Test data factories."""

from tests.factories.auth import KEY_ID, PROJECT_ID, firebase_claims
from tests.factories.recipe import RecipeInputFactory, make_entity


__all__ = [
    "KEY_ID",
    "PROJECT_ID",
    "RecipeInputFactory",
    "firebase_claims",
    "make_entity",
]
