"""Custom exceptions for graph sonification."""

from typing import Any


class SonifyError(Exception):
    """Base exception for all sonification errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "INPUT_EMPTY").
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SonifyError.

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


class SanityCheckError(SonifyError):
    """Raised when the graph content cannot be turned into a sweep.

    Common codes:
        - INPUT_EMPTY: No points were supplied.
        - INPUT_TOO_SHORT: Exactly one point was supplied.
        - NEGATIVE_TIMESTAMP: A relative time is negative, or two
          consecutive points do not move forward in time.
    """
    pass


class SonifyConfigError(SonifyError):
    """Raised when a sonification configuration is invalid.

    Common codes:
        - INVALID_CONFIG: Configuration parameters are invalid.
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_CONFIG",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
