"""Type definitions for playback sinks."""

from collections.abc import Callable
from typing import Protocol

import torch


CompletionCallback = Callable[[bool], None]


class PlaybackSink(Protocol):
    """Protocol defining the interface for playback sinks.

    A sink receives a finished sample buffer and plays it. The completion
    callback is invoked exactly once per `play` call: with True when the
    buffer played to its end, with False when playback was stopped or
    failed.
    """

    def play(
        self,
        samples: torch.Tensor,
        sample_rate: int,
        completion: CompletionCallback | None = None,
    ) -> None:
        """Start playing a buffer.

        Args:
            samples: 1-D float32 tensor of mono samples.
            sample_rate: Sample rate of `samples` in Hz.
            completion: Optional callback receiving the success flag.
        """
        ...

    def stop(self) -> None:
        """Stop the current playback, if any."""
        ...
