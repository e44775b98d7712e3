"""API v1 router aggregating all endpoint routers.

Mounted under ``api.prefix`` (empty by default, so routes sit at the root).
"""

from __future__ import annotations

from fastapi import APIRouter

from recipe_api.api.v1.endpoints import health, recipes


router = APIRouter()

router.include_router(health.router)
router.include_router(recipes.router)
