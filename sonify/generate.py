"""Sweep generation orchestration for chart sonification.

This module provides the main entry points for turning graph content into
audio. It orchestrates the full pipeline:
1. Input validation
2. Value smoothing
3. Duration fitting (with decimation)
4. Frequency scaling
5. Frequency track generation, sine synthesis and tail postprocessing

Example:
    >>> from sonify.generate import sonify_graph
    >>> from sonify.duration import PlayingDuration
    >>> result = sonify_graph([(0, 1.0), (5, 2.0), (10, 3.0)], PlayingDuration("short"))
    >>> result.duration_sec
    2.0
"""

import logging
import time
from collections.abc import Iterable

from synth import SynthConfig, render_samples

from .cancel import CancellationToken, is_cancelled
from .duration import FitResult, PlayingDuration, fit_duration
from .scaling import FrequencyRange, scale_frequencies
from .schema import GraphSeries, PointLike, ScaledSeries, SweepResult
from .smooth import SmoothingConfig, smooth_values
from .validate import validate_series


logger = logging.getLogger(__name__)


def process_graph(
    points: GraphSeries | Iterable[PointLike],
    playing_duration: PlayingDuration | None = None,
    smoothing_config: SmoothingConfig | None = None,
    frequency_range: FrequencyRange | None = None,
    token: CancellationToken | None = None,
) -> tuple[ScaledSeries, FitResult]:
    """Turn graph content into control points for the synthesizer.

    Args:
        points: Graph content in chart order.
        playing_duration: Duration policy. If None, uses "recommended".
        smoothing_config: Smoothing of the values. If None, uses the
            default EMA.
        frequency_range: Target frequency band. If None, uses 150-2600 Hz.
        token: Optional cancellation token.

    Returns:
        Tuple of (ScaledSeries, FitResult). The fit result carries the
        decimation and iteration counts and the cancellation state.

    Raises:
        SanityCheckError: If the graph content cannot be played.
    """
    if playing_duration is None:
        playing_duration = PlayingDuration()
    if smoothing_config is None:
        smoothing_config = SmoothingConfig()
    if frequency_range is None:
        frequency_range = FrequencyRange()

    series = GraphSeries.from_points(points)
    validate_series(series)

    values = series.values
    if not is_cancelled(token):
        values = smooth_values(values, smoothing_config)

    fit = fit_duration(series.relative_times, values, playing_duration, token)

    frequencies = scale_frequencies(
        fit.values,
        frequency_range.min_frequency,
        frequency_range.max_frequency,
    )

    return ScaledSeries(relative_times=fit.relative_times, frequencies=frequencies), fit


def sonify_graph(
    points: GraphSeries | Iterable[PointLike],
    playing_duration: PlayingDuration | None = None,
    smoothing_config: SmoothingConfig | None = None,
    frequency_range: FrequencyRange | None = None,
    synth_config: SynthConfig | None = None,
    token: CancellationToken | None = None,
) -> SweepResult:
    """Generate the audio sweep for graph content.

    This is the main entry point for sonification. It handles the complete
    pipeline from raw points to the final sample buffer.

    Args:
        points: Graph content in chart order, as GraphPoints, (time, value)
            pairs or {"time", "value"} mappings.
        playing_duration: Duration policy. If None, uses "recommended".
        smoothing_config: Smoothing of the values. If None, uses the
            default EMA.
        frequency_range: Target frequency band. If None, uses 150-2600 Hz.
        synth_config: Sample rate and volume. If None, uses SynthConfig().
        token: Optional cancellation token. A cancelled sweep is returned
            with whatever was produced and `cancelled=True`.

    Returns:
        SweepResult with the sample buffer and pipeline metadata.

    Raises:
        SanityCheckError: If the graph content cannot be played.
        SynthesisError: If the synthesizer rejects the control points.
    """
    if playing_duration is None:
        playing_duration = PlayingDuration()
    if smoothing_config is None:
        smoothing_config = SmoothingConfig()
    if frequency_range is None:
        frequency_range = FrequencyRange()
    if synth_config is None:
        synth_config = SynthConfig()

    start_time = time.perf_counter()

    series = GraphSeries.from_points(points)
    scaled, fit = process_graph(
        series,
        playing_duration=playing_duration,
        smoothing_config=smoothing_config,
        frequency_range=frequency_range,
        token=token,
    )

    samples = render_samples(scaled, synth_config, token)

    result = SweepResult(
        samples=samples,
        sample_rate=synth_config.sample_rate,
        series=scaled,
        input_point_count=len(series),
        decimation_count=fit.decimations,
        iterations=fit.iterations,
        requested_duration_sec=playing_duration.requested_duration_sec,
        maximum_duration_sec=playing_duration.maximum_duration_sec,
        playing_duration=playing_duration.to_dict(),
        smoothing=smoothing_config.to_dict(),
        frequency_range=frequency_range.to_dict(),
        cancelled=is_cancelled(token),
    )

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    logger.info(
        "Sweep generated",
        extra={
            "input_points": result.input_point_count,
            "points": result.point_count,
            "decimations": result.decimation_count,
            "duration_sec": round(result.duration_sec, 3),
            "samples": result.sample_count,
            "cancelled": result.cancelled,
            "duration_ms": round(elapsed_ms, 2),
        },
    )

    return result
