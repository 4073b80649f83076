"""Chart sonification module.

This module turns a chart (a sequence of (time, value) points) into an
audible tone sweep whose pitch follows the chart. It provides:
- Graph and result data structures
- Input validation and value smoothing
- Fitting timestamps into a playing duration (with decimation)
- Scaling values into a frequency band
- The Audiograph player running sweeps in the background

Example:
    >>> from sonify import sonify_graph, PlayingDuration
    >>> result = sonify_graph([(0, 1.0), (5, 2.0), (10, 3.0)], PlayingDuration("short"))
    >>> result.sample_rate, result.duration_sec
    (44100, 2.0)
"""

from .audiograph import Audiograph
from .cancel import CancellationToken
from .duration import (
    FitResult,
    PlayingDuration,
    fit_duration,
    reduce_number_of_elements,
    rescale_times,
    segment_extension,
)
from .errors import SanityCheckError, SonifyConfigError, SonifyError
from .generate import process_graph, sonify_graph
from .scaling import FrequencyRange, scale_frequencies
from .schema import GraphPoint, GraphSeries, ScaledSeries, SweepResult
from .smooth import SmoothingConfig, exponential_moving_average, smooth_values
from .validate import validate_series

__all__ = [
    # Main entry points
    "sonify_graph",
    "process_graph",
    "Audiograph",
    # Schema
    "GraphPoint",
    "GraphSeries",
    "ScaledSeries",
    "SweepResult",
    # Configuration
    "PlayingDuration",
    "FrequencyRange",
    "SmoothingConfig",
    # Pipeline stages
    "validate_series",
    "smooth_values",
    "exponential_moving_average",
    "fit_duration",
    "FitResult",
    "rescale_times",
    "reduce_number_of_elements",
    "segment_extension",
    "scale_frequencies",
    # Cancellation
    "CancellationToken",
    # Errors
    "SonifyError",
    "SanityCheckError",
    "SonifyConfigError",
]
