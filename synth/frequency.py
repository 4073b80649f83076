"""Per-sample frequency tracks from scaled control points.

Between two control points the frequency moves linearly. A segment of
`d` seconds becomes `int(d * sample_rate)` samples, the first of which is
one step above the segment start and the last of which is exactly the
segment end frequency.
"""

import logging
import math
from typing import TYPE_CHECKING

import torch

from .errors import SynthesisError
from .utils import segment_sample_count, validate_sample_rate

if TYPE_CHECKING:
    from sonify.cancel import CancellationToken
    from sonify.schema import ScaledSeries


logger = logging.getLogger(__name__)


def _check_series(series: "ScaledSeries") -> None:
    if len(series.relative_times) != len(series.frequencies):
        raise SynthesisError(
            message="Every control point needs exactly one frequency",
            code="INVALID_TRACK",
            details={
                "time_count": len(series.relative_times),
                "frequency_count": len(series.frequencies),
            },
        )

    if not all(math.isfinite(f) for f in series.frequencies):
        raise SynthesisError(
            message="Frequencies must be finite numbers",
            code="INVALID_TRACK",
        )


def count_track_samples(series: "ScaledSeries", sample_rate: int) -> int:
    """Count the samples `generate_frequency_track` will produce.

    Args:
        series: Scaled control points.
        sample_rate: Output sample rate in Hz.

    Returns:
        Total number of samples over all segments.
    """
    times = series.relative_times
    return sum(
        max(segment_sample_count(end - start, sample_rate), 0)
        for start, end in zip(times, times[1:])
    )


def generate_frequency_track(
    series: "ScaledSeries",
    sample_rate: int,
    token: "CancellationToken | None" = None,
) -> torch.Tensor:
    """Interpolate control points into one frequency per sample.

    Args:
        series: Scaled control points in playback order.
        sample_rate: Output sample rate in Hz.
        token: Optional cancellation token, checked before every segment.

    Returns:
        1-D float64 tensor of frequencies in Hz. If cancelled, holds only
        the segments rendered before the cancellation.

    Raises:
        SynthesisError: INVALID_SAMPLE_RATE or INVALID_TRACK.

    Examples:
        >>> from sonify.schema import ScaledSeries
        >>> generate_frequency_track(ScaledSeries([0.0, 0.5], [100.0, 200.0]), 4).tolist()
        [150.0, 200.0]
    """
    validate_sample_rate(sample_rate)
    _check_series(series)

    track = torch.empty(count_track_samples(series, sample_rate), dtype=torch.float64)
    position = 0

    times = series.relative_times
    frequencies = series.frequencies

    for index in range(len(times) - 1):
        if token is not None and token.is_cancelled:
            logger.debug("Frequency track cancelled after %d samples", position)
            break

        sample_count = segment_sample_count(times[index + 1] - times[index], sample_rate)
        if sample_count <= 0:
            continue

        start_frequency = frequencies[index]
        delta = (frequencies[index + 1] - start_frequency) / sample_count
        steps = torch.arange(1, sample_count + 1, dtype=torch.float64)
        track[position:position + sample_count] = start_frequency + steps * delta
        position += sample_count

    return track[:position]
