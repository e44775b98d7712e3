"""Per-request access logging.

Logs one line when a request starts and one when it completes, with the
status code and elapsed time. Health check endpoints are skipped.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_api.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS = frozenset({"/health", "/ready", "/favicon.ico"})


def get_client_ip(request: Request) -> str:
    """Best guess of the caller address, honoring X-Forwarded-For and X-Real-IP."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # First hop is the original client
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs "Request started" and "Request completed" with timing."""

    def __init__(
        self,
        app: ASGIApp,
        *,
        exclude_paths: frozenset[str] | set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.exclude_paths = (
            DEFAULT_EXCLUDED_PATHS if exclude_paths is None else frozenset(exclude_paths)
        )

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Bind request fields to the log context and time the call."""
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        bind_context(
            method=request.method,
            path=request.url.path,
            client_ip=get_client_ip(request),
        )

        logger.info(
            "Request started",
            query_params=str(request.query_params) if request.query_params else None,
        )

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        return response
