"""Health check schemas.

This module contains schemas for service health monitoring endpoints.
"""

from __future__ import annotations

from pydantic import Field

from recipe_api.schemas.base import APIResponse
from recipe_api.schemas.enums import ReadinessStatus


class HealthResponse(APIResponse):
    """Liveness check response."""

    message: str = Field(default="UP", description="Liveness marker")


class ReadinessResponse(APIResponse):
    """Readiness check response."""

    status: ReadinessStatus = Field(..., description="Overall readiness")
    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of each dependency",
    )
