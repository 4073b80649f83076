"""High-level player turning graph content into an audible sweep.

Example:
    >>> from sonify import Audiograph, PlayingDuration
    >>> from playback import BufferSink
    >>> with Audiograph(playing_duration=PlayingDuration("short"), sink=BufferSink()) as graph:
    ...     graph.play([(0, 1.0), (5, 2.0), (10, 3.0)]).result().duration_sec
    2.0
"""

import copy
import logging
import threading
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor

from playback import CompletionCallback, PlaybackError, PlaybackSink, get_sink
from synth import SynthConfig, SynthError, clamp_volume

from .cancel import CancellationToken
from .duration import PlayingDuration
from .errors import SanityCheckError, SonifyError
from .generate import sonify_graph
from .scaling import FrequencyRange
from .schema import GraphSeries, PointLike, SweepResult
from .smooth import SmoothingConfig


logger = logging.getLogger(__name__)


DIAGNOSTICS_PREFIX = "Input computation failed."

DIAGNOSTICS: dict[str, str] = {
    "INPUT_EMPTY": "The input was empty and thus no sound could be produced: please provide at least two points.",
    "INPUT_TOO_SHORT": "The input was too short and thus no sound could be produced: please provide at least two points.",
    "NEGATIVE_TIMESTAMP": (
        "The x-values contain negative numbers or do not grow: every x-value must be "
        "greater than the previous one. Did you pass in the wrong data?"
    ),
}


class Audiograph:
    """Compute and play sweeps for graph content.

    Configuration can be changed at any time; every `play` call works on
    a snapshot taken when it is made. Sweeps are computed on a single
    background worker, and starting a new one cancels the previous.

    Args:
        frequency_range: Frequency band of the sweep.
        playing_duration: Duration policy of the sweep.
        smoothing_config: Smoothing applied to the values.
        synth_config: Sample rate and volume correction.
        sink: Where finished buffers are played. Defaults to the
            "default" sink of the registry.
        print_diagnostics: Whether rejected input is logged with an
            explanation.
    """

    def __init__(
        self,
        frequency_range: FrequencyRange | None = None,
        playing_duration: PlayingDuration | None = None,
        smoothing_config: SmoothingConfig | None = None,
        synth_config: SynthConfig | None = None,
        sink: PlaybackSink | None = None,
        print_diagnostics: bool = True,
    ) -> None:
        self.frequency_range = frequency_range or FrequencyRange()
        self.playing_duration = playing_duration or PlayingDuration()
        self.smoothing_config = smoothing_config or SmoothingConfig()
        self.synth_config = synth_config or SynthConfig()
        self.sink = sink if sink is not None else get_sink("default")
        self.print_diagnostics = print_diagnostics

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="audiograph")
        self._lock = threading.Lock()
        self._token: CancellationToken | None = None

    @property
    def volume_correction_factor(self) -> float:
        """Amplitude multiplier of the sweep, within [0, 2]."""
        return self.synth_config.volume_correction_factor

    @volume_correction_factor.setter
    def volume_correction_factor(self, value: float) -> None:
        self.synth_config = SynthConfig(
            sample_rate=self.synth_config.sample_rate,
            volume_correction_factor=clamp_volume(value),
        )

    def play(
        self,
        points: GraphSeries | Iterable[PointLike],
        completion: CompletionCallback | None = None,
    ) -> "Future[SweepResult | None]":
        """Compute and play the sweep for `points`.

        Args:
            points: Graph content in chart order, usually the same points
                that are drawn.
            completion: Called with True once playback finished, with
                False if the input was rejected or playback was stopped.

        Returns:
            Future resolving to the SweepResult, or None if no sweep could
            be produced.
        """
        series = GraphSeries.from_points(points)

        with self._lock:
            if self._token is not None:
                self._token.cancel()
            token = CancellationToken()
            self._token = token

            frequency_range = copy.copy(self.frequency_range)
            playing_duration = copy.copy(self.playing_duration)
            smoothing_config = copy.copy(self.smoothing_config)
            synth_config = copy.copy(self.synth_config)

        return self._executor.submit(
            self._run,
            series,
            frequency_range,
            playing_duration,
            smoothing_config,
            synth_config,
            token,
            completion,
        )

    def stop(self) -> None:
        """Cancel the running computation and stop playback."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()
        try:
            self.sink.stop()
        except PlaybackError as e:
            logger.error("Stopping playback failed: %s", e)

    def close(self) -> None:
        """Stop playback and shut down the background worker."""
        self.stop()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "Audiograph":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _run(
        self,
        series: GraphSeries,
        frequency_range: FrequencyRange,
        playing_duration: PlayingDuration,
        smoothing_config: SmoothingConfig,
        synth_config: SynthConfig,
        token: CancellationToken,
        completion: CompletionCallback | None,
    ) -> SweepResult | None:
        try:
            result = sonify_graph(
                series,
                playing_duration=playing_duration,
                smoothing_config=smoothing_config,
                frequency_range=frequency_range,
                synth_config=synth_config,
                token=token,
            )
        except SonifyError as e:
            self._report(e)
            _complete(completion, False)
            return None
        except SynthError as e:
            logger.error("Sweep synthesis failed: %s", e)
            _complete(completion, False)
            return None

        if result.cancelled:
            logger.debug(
                "Sweep cancelled, playing truncated buffer",
                extra={"samples": result.sample_count},
            )

        try:
            self.sink.play(result.samples, result.sample_rate, completion)
        except PlaybackError as e:
            logger.error("Playback failed: %s", e)
            _complete(completion, False)
            return None

        return result

    def _report(self, error: SonifyError) -> None:
        if not self.print_diagnostics:
            return

        if isinstance(error, SanityCheckError):
            description = DIAGNOSTICS.get(error.code, error.message)
        else:
            description = error.message
        logger.warning(
            "%s %s",
            DIAGNOSTICS_PREFIX,
            description,
            extra={"code": error.code},
        )


def _complete(completion: CompletionCallback | None, success: bool) -> None:
    if completion is not None:
        completion(success)
