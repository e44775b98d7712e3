"""Enumeration types for recipe API schemas."""

from __future__ import annotations

from enum import StrEnum


class RecipeStatus(StrEnum):
    """Whether a DTO is being mapped for a first insert or a rewrite."""

    CREATED = "created"
    UPDATED = "updated"


class ReadinessStatus(StrEnum):
    """Readiness check status values."""

    READY = "ready"
    NOT_READY = "not_ready"
