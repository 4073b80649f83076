"""Playback sink implementations.

Sinks:
    - BufferSink: Keeps the last buffer in memory and completes at once.
    - SoundDeviceSink: Streams the buffer to an audio output device.
"""

import logging
import threading

import numpy as np
import torch

from .errors import PlaybackError
from .types import CompletionCallback


logger = logging.getLogger(__name__)


class _Completion:
    """Invokes a completion callback at most once."""

    def __init__(self, callback: CompletionCallback | None) -> None:
        self._callback = callback
        self._lock = threading.Lock()
        self._done = False

    def __call__(self, success: bool) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        if self._callback is not None:
            self._callback(success)


class BufferSink:
    """Sink that records buffers instead of playing them.

    Useful for dry runs, the HTTP service and tests.

    Attributes:
        samples: The last buffer handed to `play`, or None.
        sample_rate: Sample rate of `samples`, or None.
        play_count: Number of `play` calls so far.
    """

    def __init__(self) -> None:
        self.samples: torch.Tensor | None = None
        self.sample_rate: int | None = None
        self.play_count = 0
        self.stop_count = 0

    @property
    def name(self) -> str:
        """Return the sink identifier."""
        return "buffer"

    def play(
        self,
        samples: torch.Tensor,
        sample_rate: int,
        completion: CompletionCallback | None = None,
    ) -> None:
        self.samples = samples
        self.sample_rate = sample_rate
        self.play_count += 1
        _Completion(completion)(True)

    def stop(self) -> None:
        self.stop_count += 1


class SoundDeviceSink:
    """Sink streaming mono buffers through `sounddevice.OutputStream`.

    `sounddevice` is imported on first playback, so the sink can be
    constructed on machines without PortAudio.

    Args:
        device: Output device index or name. None uses the default device.
        blocksize: Frames per stream callback.
    """

    def __init__(self, device: int | str | None = None, blocksize: int = 2048) -> None:
        self._device = device
        self._blocksize = blocksize
        self._lock = threading.Lock()
        self._stream = None
        self._completion: _Completion | None = None
        self._stop_requested = False

    @property
    def name(self) -> str:
        """Return the sink identifier."""
        return "sounddevice"

    def play(
        self,
        samples: torch.Tensor,
        sample_rate: int,
        completion: CompletionCallback | None = None,
    ) -> None:
        """Start streaming `samples`; returns without waiting for the end.

        Raises:
            PlaybackError: DEVICE_UNAVAILABLE if no output stream can be opened.
        """
        self.stop()

        # Nothing to stream, e.g. a sweep cancelled before synthesis
        if samples.numel() == 0:
            _Completion(completion)(True)
            return

        try:
            import sounddevice as sd
        except (ImportError, OSError) as e:
            raise PlaybackError(
                message=f"Audio backend is not available: {e}",
                code="DEVICE_UNAVAILABLE",
                details={"error": str(e)},
            ) from e

        audio = np.ascontiguousarray(
            samples.detach().cpu().numpy().reshape(-1, 1), dtype=np.float32
        )
        position = 0
        done = _Completion(completion)

        def callback(outdata, frames, time_info, status):
            nonlocal position
            if status:
                logger.debug("Output stream status: %s", status)
            if self._stop_requested:
                raise sd.CallbackStop

            end = position + frames
            chunk = audio[position:end]
            outdata[:len(chunk)] = chunk
            outdata[len(chunk):] = 0
            position = end
            if end >= len(audio):
                raise sd.CallbackStop

        def finished() -> None:
            done(not self._stop_requested and position >= len(audio))

        with self._lock:
            self._stop_requested = False
            try:
                stream = sd.OutputStream(
                    samplerate=sample_rate,
                    channels=1,
                    dtype="float32",
                    device=self._device,
                    blocksize=self._blocksize,
                    callback=callback,
                    finished_callback=finished,
                )
                stream.start()
            except sd.PortAudioError as e:
                raise PlaybackError(
                    message=f"Could not open audio output: {e}",
                    code="DEVICE_UNAVAILABLE",
                    details={"device": self._device, "error": str(e)},
                ) from e

            self._stream = stream
            self._completion = done

        logger.debug(
            "Streaming %d samples at %d Hz", len(audio), sample_rate
        )

    def stop(self) -> None:
        """Stop the current stream; its completion receives False."""
        with self._lock:
            stream = self._stream
            completion = self._completion
            self._stream = None
            self._completion = None
            self._stop_requested = True

        if stream is None:
            return

        try:
            stream.stop()
            stream.close()
        except Exception as e:
            raise PlaybackError(
                message=f"Failed to stop audio output: {e}",
                code="PLAYBACK_FAILED",
                details={"error": str(e)},
            ) from e
        finally:
            if completion is not None:
                completion(False)
