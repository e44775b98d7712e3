"""Application entry point.

Usage:
    # Development with auto-reload
    uvicorn recipe_api.main:app --reload

    # Or, with host and port from settings
    python -m recipe_api.main
"""

from recipe_api.factory import create_app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    from recipe_api.core.config import get_settings

    settings = get_settings()

    uvicorn.run(
        "recipe_api.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.is_development,
        log_level=settings.logging.level.lower(),
    )
