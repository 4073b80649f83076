"""Synthesis module turning scaled control points into audio samples.

It handles:
- Interpolating control points into a per-sample frequency track
- Phase-continuous sine synthesis
- Trimming the buffer tail at a zero crossing

Example:
    >>> from synth import SynthConfig, render_samples
    >>> from sonify.schema import ScaledSeries
    >>> samples = render_samples(ScaledSeries([0.0, 1.0], [150.0, 2600.0]), SynthConfig())
    >>> samples.dtype
    torch.float32
"""

from typing import TYPE_CHECKING

import torch

from .errors import SynthError, SynthesisError
from .frequency import count_track_samples, generate_frequency_track
from .oscillator import synthesize
from .postprocess import (
    postprocess_buffer,
    samples_to_latest_rising_crossing,
    samples_to_trim,
)
from .utils import (
    SynthConfig,
    clamp_volume,
    segment_sample_count,
)

if TYPE_CHECKING:
    from sonify.cancel import CancellationToken
    from sonify.schema import ScaledSeries


__all__ = [
    # Main integration function
    "render_samples",
    # Config
    "SynthConfig",
    # Errors
    "SynthError",
    "SynthesisError",
    # Frequency track
    "count_track_samples",
    "generate_frequency_track",
    # Oscillator
    "synthesize",
    # Postprocessing
    "postprocess_buffer",
    "samples_to_latest_rising_crossing",
    "samples_to_trim",
    # Utils
    "clamp_volume",
    "segment_sample_count",
]


def render_samples(
    series: "ScaledSeries",
    config: SynthConfig | None = None,
    token: "CancellationToken | None" = None,
) -> torch.Tensor:
    """Render scaled control points into a playable sample buffer.

    Args:
        series: Scaled control points (seconds and Hz).
        config: Synthesis configuration. If None, uses SynthConfig().
        token: Optional cancellation token.

    Returns:
        1-D float32 tensor ending in a zero sample (empty if no samples
        were rendered).

    Raises:
        SynthesisError: If the control points cannot be rendered.
    """
    if config is None:
        config = SynthConfig()

    track = generate_frequency_track(series, config.sample_rate, token)
    samples = synthesize(track, config.sample_rate, config.volume_correction_factor)
    return postprocess_buffer(samples)
