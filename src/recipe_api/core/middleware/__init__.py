"""Custom middleware components."""

from recipe_api.core.middleware.logging import LoggingMiddleware
from recipe_api.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
