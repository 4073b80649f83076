"""Cooperative cancellation for in-flight sweeps."""

import threading


class CancellationToken:
    """Flag that asks a running pipeline to stop early.

    The pipeline polls the token between segments. Stopping is not an
    error: the stages return whatever they produced so far.

    Example:
        >>> token = CancellationToken()
        >>> token.is_cancelled
        False
        >>> token.cancel()
        >>> token.is_cancelled
        True
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Calling it more than once has no further effect."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        """Return True once cancellation was requested."""
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cancelled={self.is_cancelled})"


def is_cancelled(token: CancellationToken | None) -> bool:
    """Return True if `token` is given and cancelled."""
    return token is not None and token.is_cancelled
