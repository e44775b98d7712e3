"""Application factory for creating FastAPI instances.

This module provides the create_app factory function that:
- Configures the FastAPI application with appropriate settings
- Sets up middleware stack in the correct order
- Registers exception handlers
- Mounts API routers
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_api.api.v1.router import router as v1_router
from recipe_api.core.config import Settings, get_settings
from recipe_api.core.events import lifespan
from recipe_api.core.exceptions import setup_exception_handlers
from recipe_api.core.middleware import LoggingMiddleware, RequestIDMiddleware


CORS_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Authorization", "Accept", "Content-Type"]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure a FastAPI application instance.

    Args:
        settings: Optional settings override. If not provided, uses get_settings().

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    show_docs = settings.is_non_production

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="CRUD API over recipe documents, guarded by Firebase ID tokens",
        lifespan=lifespan,
        docs_url="/docs" if show_docs else None,
        redoc_url="/redoc" if show_docs else None,
        openapi_url="/openapi.json" if show_docs else None,
        debug=settings.app.debug,
    )

    # Store settings in app state for access in routes and lifespan
    app.state.settings = settings

    setup_exception_handlers(app)

    # Order matters - first added = last executed
    _setup_middleware(app, settings)

    _setup_routers(app, settings)

    return app


def _setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Order from request perspective:
    1. RequestIDMiddleware (adds request ID for tracing)
    2. LoggingMiddleware (logs requests/responses)
    3. CORSMiddleware (handles CORS)
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.api.cors_origins),
            allow_credentials=True,
            allow_methods=CORS_METHODS,
            allow_headers=CORS_HEADERS,
            expose_headers=["X-Request-ID"],
            max_age=settings.api.cors_max_age,
        )

    app.add_middleware(LoggingMiddleware)

    app.add_middleware(RequestIDMiddleware)


def _setup_routers(app: FastAPI, settings: Settings) -> None:
    """Mount API routers."""
    app.include_router(v1_router, prefix=settings.api.prefix)
