"""Playback module handing finished sample buffers to an output.

This module provides:
- The PlaybackSink protocol
- An in-memory sink and a sounddevice-backed sink
- A registry for looking up sinks by ID

Example:
    >>> from playback import get_sink
    >>> sink = get_sink("buffer")
    >>> sink.play(samples, 44100, completion=lambda ok: print(ok))
    True
"""

from .errors import PlaybackError
from .registry import clear_cache, get_sink, list_available_sinks
from .sinks import BufferSink, SoundDeviceSink
from .types import CompletionCallback, PlaybackSink

__all__ = [
    # Registry
    "get_sink",
    "list_available_sinks",
    "clear_cache",
    # Sinks
    "BufferSink",
    "SoundDeviceSink",
    # Types
    "PlaybackSink",
    "CompletionCallback",
    # Errors
    "PlaybackError",
]
