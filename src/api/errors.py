"""Error handling and HTTP mapping for the API.

This module provides:
- API-specific exception classes
- Mapping from pipeline errors to HTTP status codes
- Exception handlers for FastAPI

Error Code Mapping:
    - SanityCheckError -> 422 INVALID_GRAPH
    - SonifyConfigError -> 422 INVALID_CONFIG
    - SynthError -> 500 SYNTHESIS_FAILED
    - PlaybackError -> 503 PLAYBACK_UNAVAILABLE
    - Generic exceptions -> 500 INTERNAL_ERROR

The pipeline error code is kept in `details["reason"]` so clients can
tell an empty graph from a falling time axis.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from playback.errors import PlaybackError
from sonify.errors import SanityCheckError, SonifyConfigError
from synth.errors import SynthError

from .schemas import ApiErrorResponse, ErrorDetail


logger = logging.getLogger(__name__)


# =============================================================================
# API Exception Classes
# =============================================================================


class ApiError(Exception):
    """Base exception for API errors.

    Subclasses fix `status_code`, `code` and the default message.

    Attributes:
        status_code: HTTP status code to return.
        code: Machine-readable error code.
        message: Human-readable error message.
        details: Optional additional context.
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InvalidGraphError(ApiError):
    """Raised when the submitted points cannot be sonified."""

    status_code = 422
    code = "INVALID_GRAPH"
    default_message = "Invalid graph content"


class InvalidConfigError(ApiError):
    """Raised when sonification parameters are invalid."""

    status_code = 422
    code = "INVALID_CONFIG"
    default_message = "Invalid sonification configuration"


class SynthesisFailedError(ApiError):
    """Raised when rendering the sweep fails."""

    status_code = 500
    code = "SYNTHESIS_FAILED"
    default_message = "Synthesis failed"


class PlaybackUnavailableError(ApiError):
    """Raised when no playback device can be used."""

    status_code = 503
    code = "PLAYBACK_UNAVAILABLE"
    default_message = "Playback unavailable"


class InternalError(ApiError):
    """Raised for unexpected internal errors."""


# Pipeline error type -> API error type, checked in order
_ERROR_MAPPING: list[tuple[type[Exception], type[ApiError]]] = [
    (SanityCheckError, InvalidGraphError),
    (SonifyConfigError, InvalidConfigError),
    (SynthError, SynthesisFailedError),
    (PlaybackError, PlaybackUnavailableError),
]


# =============================================================================
# Error Mapping Functions
# =============================================================================


def map_exception_to_api_error(exc: Exception) -> ApiError:
    """Map pipeline exceptions to appropriate API errors.

    Args:
        exc: The exception raised during processing.

    Returns:
        An ApiError subclass with appropriate HTTP status and code.
    """
    if isinstance(exc, ApiError):
        return exc

    for source, target in _ERROR_MAPPING:
        if isinstance(exc, source):
            return target(
                message=exc.message,
                details={"reason": exc.code, **exc.details},
            )

    return InternalError(
        message=str(exc) or "An unexpected error occurred",
        details={"exception_type": type(exc).__name__},
    )


def create_error_response(api_error: ApiError) -> ApiErrorResponse:
    """Create a structured error response from an API error."""
    return ApiErrorResponse(
        error=ErrorDetail(
            code=api_error.code,
            message=api_error.message,
            details=api_error.details,
        )
    )


# =============================================================================
# Exception Handlers
# =============================================================================


async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Turn any exception into the standard error response.

    Server-side failures are logged with their traceback, rejected
    requests as warnings.
    """
    request_id = getattr(request.state, "request_id", "unknown")
    api_error = map_exception_to_api_error(exc)
    reason = (api_error.details or {}).get("reason")

    if api_error.status_code >= 500:
        logger.error(
            "Request failed: %s",
            api_error.message,
            extra={"code": api_error.code, "reason": reason},
            exc_info=exc,
        )
    else:
        logger.warning(
            "Request rejected: %s",
            api_error.message,
            extra={"code": api_error.code, "reason": reason},
        )

    return JSONResponse(
        status_code=api_error.status_code,
        content=create_error_response(api_error).model_dump(),
        headers={"X-Request-ID": request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app.

    Args:
        app: The FastAPI application instance.
    """
    app.add_exception_handler(ApiError, api_exception_handler)
    for source, _ in _ERROR_MAPPING:
        app.add_exception_handler(source, api_exception_handler)

    # Catch-all for unexpected errors
    app.add_exception_handler(Exception, api_exception_handler)
