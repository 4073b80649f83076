"""Data structures for graph content and sweep results.

This module defines the point types handed in by a chart, the scaled
control points produced by the pipeline, and the overall sweep result.

Example:
    >>> from sonify.schema import GraphSeries
    >>> series = GraphSeries.from_points([(0, 1.0), (5, 2.0), (10, 3.0)])
    >>> len(series), series.relative_times
    (3, [0.0, 5.0, 10.0])
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

import torch


@dataclass(frozen=True)
class GraphPoint:
    """A single chart point.

    Attributes:
        relative_time: Position on the time axis (x). Expected to be >= 0.
        value: Data value (y) that is mapped onto a frequency.
    """

    relative_time: float
    value: float


PointLike = Union[GraphPoint, tuple[float, float], Mapping[str, float]]


@dataclass
class GraphSeries:
    """Ordered chart points, left to right.

    Insertion order is the processing order. No invariants are enforced
    on construction; see `sonify.validate.validate_series`.

    Attributes:
        points: The chart points in chart order.
    """

    points: list[GraphPoint] = field(default_factory=list)

    @classmethod
    def from_points(cls, points: Iterable[PointLike]) -> "GraphSeries":
        """Build a series from points, pairs, or {"time", "value"} mappings.

        Args:
            points: Iterable of GraphPoint, (time, value) pairs, or mappings
                with "time" and "value" keys.

        Returns:
            A new GraphSeries.

        Raises:
            TypeError: If an element has none of the supported shapes.
        """
        if isinstance(points, GraphSeries):
            return cls(points=list(points.points))

        converted: list[GraphPoint] = []
        for point in points:
            if isinstance(point, GraphPoint):
                converted.append(point)
            elif isinstance(point, Mapping):
                converted.append(
                    GraphPoint(float(point["time"]), float(point["value"]))
                )
            elif isinstance(point, (tuple, list)) and len(point) == 2:
                converted.append(GraphPoint(float(point[0]), float(point[1])))
            else:
                raise TypeError(
                    f"Unsupported point {point!r}: expected GraphPoint, (time, value) or mapping"
                )
        return cls(points=converted)

    @property
    def relative_times(self) -> list[float]:
        """Return the x-values in chart order."""
        return [p.relative_time for p in self.points]

    @property
    def values(self) -> list[float]:
        """Return the y-values in chart order."""
        return [p.value for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GraphPoint]:
        return iter(self.points)


@dataclass
class ScaledSeries:
    """Control points scaled into playback time and frequency.

    Attributes:
        relative_times: Playback timestamps in seconds, starting at 0.
        frequencies: Frequencies in Hz, one per timestamp.
    """

    relative_times: list[float]
    frequencies: list[float]

    def __post_init__(self) -> None:
        if len(self.relative_times) != len(self.frequencies):
            raise ValueError(
                f"relative_times ({len(self.relative_times)}) and frequencies "
                f"({len(self.frequencies)}) must have the same length"
            )

    def __len__(self) -> int:
        return len(self.relative_times)

    @property
    def duration_sec(self) -> float:
        """Return the playback time of the last control point."""
        if not self.relative_times:
            return 0.0
        return self.relative_times[-1]

    def to_dict(self) -> list[dict[str, float]]:
        """Convert to a list of {"time", "frequency"} dictionaries."""
        return [
            {"time": round(t, 6), "frequency": round(f, 6)}
            for t, f in zip(self.relative_times, self.frequencies)
        ]


@dataclass
class SweepResult:
    """Complete result of sonifying one graph.

    Attributes:
        samples: Final sample buffer (1-D float32 tensor).
        sample_rate: Sample rate of `samples` in Hz.
        series: Scaled control points the samples were rendered from.
        input_point_count: Number of points handed in by the caller.
        decimation_count: How often the point count was halved.
        iterations: Number of duration fitting iterations.
        requested_duration_sec: Seed duration of the playing duration policy.
        maximum_duration_sec: Cap of the playing duration policy.
        playing_duration: Dictionary describing the policy applied.
        smoothing: Dictionary describing the smoothing applied.
        frequency_range: Dictionary with min/max frequency.
        cancelled: Whether processing was stopped before completion.
    """

    samples: torch.Tensor
    sample_rate: int
    series: ScaledSeries
    input_point_count: int
    decimation_count: int = 0
    iterations: int = 0
    requested_duration_sec: float = 0.0
    maximum_duration_sec: float = 0.0
    playing_duration: dict[str, Any] = field(default_factory=dict)
    smoothing: dict[str, Any] = field(default_factory=dict)
    frequency_range: dict[str, float] = field(default_factory=dict)
    cancelled: bool = False

    @property
    def duration_sec(self) -> float:
        """Return the scaled playback duration of the control points."""
        return self.series.duration_sec

    @property
    def sample_count(self) -> int:
        """Return the number of samples in the buffer."""
        return int(self.samples.numel())

    @property
    def point_count(self) -> int:
        """Return the number of control points after decimation."""
        return len(self.series)

    def to_dict(
        self,
        include_samples: bool = False,
        include_points: bool = False,
    ) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization.

        Args:
            include_samples: Whether to include the raw sample values.
            include_points: Whether to include the scaled control points.

        Returns:
            Dictionary representation suitable for JSON serialization.
        """
        result: dict[str, Any] = {
            "sample_rate": self.sample_rate,
            "duration_sec": round(self.duration_sec, 6),
            "sample_count": self.sample_count,
            "input_point_count": self.input_point_count,
            "point_count": self.point_count,
            "decimation_count": self.decimation_count,
            "iterations": self.iterations,
            "requested_duration_sec": round(self.requested_duration_sec, 6),
            "maximum_duration_sec": round(self.maximum_duration_sec, 6),
            "playing_duration": self.playing_duration,
            "smoothing": self.smoothing,
            "frequency_range": self.frequency_range,
            "cancelled": self.cancelled,
        }

        if include_points:
            result["points"] = self.series.to_dict()

        if include_samples:
            result["samples"] = self.samples.tolist()

        return result
