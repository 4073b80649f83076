"""Custom exceptions for sound synthesis."""

from typing import Any


class SynthError(Exception):
    """Base exception for all synthesis errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "INVALID_SAMPLE_RATE").
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SynthError.

        Args:
            message: Human-readable error description.
            code: Short error code string.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"[{self.code}] {self.message} (details: {self.details})"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        """Return repr string."""
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, details={self.details!r})"


class SynthesisError(SynthError):
    """Raised when a frequency track or sample buffer cannot be produced.

    Common codes:
        - INVALID_SAMPLE_RATE: Sample rate is not a positive integer.
        - INVALID_TRACK: Control points or frequency track are malformed
          (mismatched lengths, wrong dimensions, non-finite values).
    """
    pass
