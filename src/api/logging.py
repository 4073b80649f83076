"""Structured logging and request middleware for the API.

This module provides:
- Structured logging configuration (key=value format)
- Request ID middleware for tracing
- Request timing middleware

Example:
    >>> from src.api.logging import setup_logging
    >>> setup_logging("INFO")
"""

import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


# Context variable for request ID (thread-safe)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Attributes every LogRecord carries; anything else was passed via `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}


# =============================================================================
# Custom Logging Formatter
# =============================================================================


class StructuredFormatter(logging.Formatter):
    """Structured log formatter producing key=value output.

    Formats log messages as:
        timestamp=ISO8601 level=LEVEL logger=NAME request_id=ID message=MSG [key=value ...]

    Fields passed through `extra=` are appended in insertion order.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as structured key=value pairs."""
        timestamp = self.formatTime(record, self.datefmt)
        req_id = request_id_var.get() or "-"

        parts = [
            f"timestamp={timestamp}",
            f"level={record.levelname}",
            f"logger={record.name}",
            f"request_id={req_id}",
        ]

        message = record.getMessage().replace('"', '\\"')
        parts.append(f'message="{message}"')

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            parts.append(f"{key}={_format_value(value)}")

        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            exc_text = exc_text.replace('\n', ' | ').replace('"', '\\"')
            parts.append(f'exception="{exc_text}"')

        return " ".join(parts)


def _format_value(value: object) -> str:
    text = str(value)
    if " " in text or '"' in text:
        return '"' + text.replace('"', '\\"') + '"'
    return text


# =============================================================================
# Logging Setup
# =============================================================================


def setup_logging(log_level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
    """
    formatter = StructuredFormatter(datefmt="%Y-%m-%dT%H:%M:%S%z")

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level.upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    stdout_handler.setLevel(log_level.upper())
    root_logger.addHandler(stdout_handler)

    # Reduce noise from third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# =============================================================================
# Middleware
# =============================================================================


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to assign a unique request ID to each request.

    The request ID is taken from the X-Request-ID header or generated as
    UUID4, stored in request.state.request_id and the request_id_var
    context variable, and echoed in the X-Request-ID response header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request with request ID tracking."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            request_id_var.reset(token)


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware to track and log request timing.

    Logs total request duration and adds X-Response-Time header.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable,
    ) -> Response:
        """Process request with timing tracking."""
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        logging.getLogger("api.timing").info(
            "Request complete",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response


def add_middleware(app: FastAPI) -> None:
    """Add all middleware to the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """
    # RequestID is added last so it runs first
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
