"""Custom exceptions for audio playback."""

from typing import Any


class PlaybackError(Exception):
    """Raised when a sample buffer cannot be played.

    Common codes:
        - SINK_NOT_FOUND: Sink ID not found in registry.
        - DEVICE_UNAVAILABLE: No audio output device (or audio backend)
          could be opened.
        - PLAYBACK_FAILED: The output stream failed while playing.

    Attributes:
        message: Human-readable error description.
        code: Short error code string.
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
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
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, details={self.details!r})"
