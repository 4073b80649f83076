"""Sink registry for looking up and caching playback sinks.

Example:
    >>> from playback.registry import get_sink
    >>> sink = get_sink("buffer")
    >>> sink.play(samples, sample_rate=44100)
"""

import threading
from typing import Final

from .errors import PlaybackError
from .sinks import BufferSink, SoundDeviceSink
from .types import PlaybackSink


# Thread-safe sink cache
_sink_cache: dict[str, PlaybackSink] = {}
_cache_lock = threading.Lock()

AVAILABLE_SINKS: Final[dict[str, type]] = {
    "sounddevice": SoundDeviceSink,
    "buffer": BufferSink,
}

# IDs that share another sink's cached instance, so only one stream is open
SINK_ALIASES: Final[dict[str, str]] = {
    "default": "sounddevice",
}


def get_sink(sink_id: str = "default") -> PlaybackSink:
    """Get or create a cached sink instance.

    Args:
        sink_id: Identifier of the sink. Available:
            - "default": Default audio output device
            - "sounddevice": Same as default
            - "buffer": In-memory sink, nothing is played

    Returns:
        A sink implementing the PlaybackSink protocol.

    Raises:
        PlaybackError: SINK_NOT_FOUND if the sink ID is unknown.
    """
    sink_id = SINK_ALIASES.get(sink_id, sink_id)

    with _cache_lock:
        if sink_id in _sink_cache:
            return _sink_cache[sink_id]

        if sink_id not in AVAILABLE_SINKS:
            raise PlaybackError(
                message=f"Unknown sink ID: {sink_id}",
                code="SINK_NOT_FOUND",
                details={"sink_id": sink_id, "available": list_available_sinks()},
            )

        sink = AVAILABLE_SINKS[sink_id]()
        _sink_cache[sink_id] = sink
        return sink


def clear_cache() -> None:
    """Clear the sink cache."""
    with _cache_lock:
        _sink_cache.clear()


def list_available_sinks() -> list[str]:
    """List sink IDs that can be passed to get_sink()."""
    return [*SINK_ALIASES, *AVAILABLE_SINKS]
