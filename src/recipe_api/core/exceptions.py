"""HTTP error types and the handlers that render them.

Every error body carries a ``message``. Authentication failures answer 403,
unknown or malformed recipe ids answer 400, and a repository StoreError
answers 500 with the driver text as the message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api.database.exceptions import StoreError
from recipe_api.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)

INVALID_TOKEN_MESSAGE = "Missing or invalid JWT Token"
NO_ID_MATCH_MESSAGE = "No ID Match"


class ErrorDetail(BaseModel):
    """One invalid request field."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response.

    ``message`` is always present; the remaining members are dropped from
    the body when empty.
    """

    message: str
    error: str | None = None
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Error with a fixed HTTP status, rendered by ``app_exception_handler``."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class RecipeNotFoundException(AppException):
    """Malformed identifier or missing recipe document.

    Both outcomes are reported identically with a 400.
    """

    def __init__(self, message: str = NO_ID_MATCH_MESSAGE) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error="NOT_FOUND",
            message=message,
        )

    @classmethod
    def for_id(cls, recipe_id: str) -> RecipeNotFoundException:
        """Build the 'No recipe with ID: ... found' variant."""
        return cls(f"No recipe with ID: {recipe_id} found")


class ForbiddenException(AppException):
    """Missing or invalid credential."""

    def __init__(self, message: str = INVALID_TOKEN_MESSAGE) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error="FORBIDDEN",
            message=message,
        )


class ServiceUnavailableException(AppException):
    """A dependency needed to serve the request is unreachable."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


def _get_request_id(request: Request) -> str | None:
    """Request id set by RequestIDMiddleware, if any."""
    return getattr(request.state, "request_id", None)


def _render(status_code: int, body: ErrorResponse) -> ORJSONResponse:
    return ORJSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Install the error renderers on ``app``."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Render an AppException with its own status."""
        return _render(
            exc.status_code,
            ErrorResponse(
                message=exc.message,
                error=exc.error,
                details=exc.details,
                request_id=_get_request_id(request),
            ),
        )

    @app.exception_handler(StoreError)
    async def store_error_handler(
        request: Request,
        exc: StoreError,
    ) -> ORJSONResponse:
        """Surface document store failures with the raw driver message."""
        logger.error("Document store operation failed", error=str(exc))
        return _render(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                message=str(exc),
                error="STORE_ERROR",
                request_id=_get_request_id(request),
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Render HTTPException (404 routes, 503 from dependencies)."""
        return _render(
            exc.status_code,
            ErrorResponse(
                message=str(exc.detail),
                error="HTTP_ERROR",
                request_id=_get_request_id(request),
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Render body, path and query validation failures as 422."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return _render(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            ErrorResponse(
                message="Request validation failed",
                error="VALIDATION_ERROR",
                details=details,
                request_id=_get_request_id(request),
            ),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Log the traceback and answer a generic 500."""
        logger.opt(exception=exc).error("Unhandled exception")

        return _render(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorResponse(
                message="An unexpected error occurred",
                error="INTERNAL_SERVER_ERROR",
                request_id=_get_request_id(request),
            ),
        )
