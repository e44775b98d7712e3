"""Loguru setup for the service.

Outside development every record is one orjson-encoded line. Records carry
the request context (request id, method, path, client ip, user id) bound
by the middleware and the auth dependency. Records from the standard
logging module (uvicorn, pymongo, httpx) are routed through Loguru too.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


# Context variable for request-scoped data (request_id, method, path, ...)
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "pymongo",
    "motor",
    "httpx",
    "httpcore",
    "asyncio",
)


class InterceptHandler(logging.Handler):
    """Redirect standard library logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        """Re-log ``record`` through Loguru at the matching level."""
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging-module frames so Loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _format_record(record: dict[str, Any]) -> str:
    """Serialize a record and the bound request context as one JSON line."""
    record["extra"].update(_log_context.get())

    fields = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["extra"].get("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
        **record["extra"],
    }

    exception = record["exception"]
    if exception:
        fields["exception"] = {
            "type": exception.type.__name__ if exception.type else None,
            "value": str(exception.value) if exception.value else None,
        }

    # Escape braces: loguru treats the returned string as a format template
    line = orjson.dumps(fields, default=str).decode()
    return line.replace("{", "{{").replace("}", "}}") + "\n"


def _format_record_dev(record: dict[str, Any]) -> str:
    """Colorized single-line format with the request context appended."""
    context = _log_context.get()

    context_str = ""
    if context:
        context_str = " | " + " ".join(f"{k}={v}" for k, v in context.items())
        context_str = context_str.replace("{", "{{").replace("}", "}}")

    fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context_str} - "
        "<level>{message}</level>\n"
    )

    if record["exception"]:
        fmt += "{exception}\n"

    return fmt


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Replace Loguru sinks with a single stdout sink.

    JSON is used when ``log_format`` is "json" and not in development;
    otherwise the colorized text format.
    """
    logger.remove()

    if log_format == "json" and not is_development:
        logger.add(
            sys.stdout,
            format=_format_record,
            level=log_level.upper(),
            colorize=False,
            backtrace=True,
            diagnose=False,  # never dump locals in production
        )
    else:
        logger.add(
            sys.stdout,
            format=_format_record_dev,
            level=log_level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> "logger":  # type: ignore[valid-type]
    """Loguru logger tagged with the module ``name``."""
    return logger.bind(name=name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables included in every later log entry of this request.

    Example:
        bind_context(request_id="3f2c9a", user_id="firebase-uid")
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def clear_context() -> None:
    """Clear all context variables (called at the start of each request)."""
    _log_context.set({})


def unbind_context(*keys: str) -> None:
    """Remove specific context variables."""
    current = _log_context.get().copy()
    for key in keys:
        current.pop(key, None)
    _log_context.set(current)


def get_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
    "unbind_context",
]
