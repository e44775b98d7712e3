"""Health check endpoints.

Provides liveness and readiness checks for load balancers and orchestrators.
Neither endpoint requires authentication.
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_api.database import check_database_health
from recipe_api.schemas import HealthResponse, ReadinessResponse, ReadinessStatus


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Basic health check to verify the service is running.",
)
async def health_check() -> HealthResponse:
    """Check if the service is alive. Does not touch any dependency."""
    return HealthResponse(message="UP")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Readiness check verifying the document store answers a ping.",
)
async def readiness_check() -> ReadinessResponse:
    """Check if the service is ready to handle requests."""
    dependencies = await check_database_health()

    ready = all(value == "healthy" for value in dependencies.values())
    return ReadinessResponse(
        status=ReadinessStatus.READY if ready else ReadinessStatus.NOT_READY,
        dependencies=dependencies,
    )
