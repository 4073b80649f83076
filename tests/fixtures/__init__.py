"""Test fixtures for sonification tests.

This module provides utilities for generating chart point series for
testing. No data files are committed - series are generated
programmatically.
"""

import math


def generate_linear_points(
    count: int = 10,
    span: float = 10.0,
    slope: float = 1.0,
    offset: float = 0.0,
) -> list[tuple[float, float]]:
    """Generate evenly spaced points on a straight line.

    Args:
        count: Number of points.
        span: Time of the last point; the first is at 0.
        slope: Value change per time unit.
        offset: Value of the first point.

    Returns:
        List of (time, value) pairs.
    """
    step = span / (count - 1) if count > 1 else 0.0
    return [(i * step, offset + slope * i * step) for i in range(count)]


def generate_sine_points(
    count: int = 100,
    span: float = 10.0,
    periods: float = 2.0,
    amplitude: float = 1.0,
) -> list[tuple[float, float]]:
    """Generate evenly spaced points on a sine curve.

    Args:
        count: Number of points.
        span: Time of the last point; the first is at 0.
        periods: Number of full periods over the span.
        amplitude: Peak value.

    Returns:
        List of (time, value) pairs.
    """
    step = span / (count - 1) if count > 1 else 0.0
    return [
        (i * step, amplitude * math.sin(2 * math.pi * periods * i / max(count - 1, 1)))
        for i in range(count)
    ]


def generate_flat_points(
    count: int = 10,
    span: float = 10.0,
    value: float = 0.0,
) -> list[tuple[float, float]]:
    """Generate evenly spaced points with one constant value."""
    step = span / (count - 1) if count > 1 else 0.0
    return [(i * step, value) for i in range(count)]


def as_point_dicts(points: list[tuple[float, float]]) -> list[dict[str, float]]:
    """Convert (time, value) pairs to {"time", "value"} dictionaries."""
    return [{"time": t, "value": v} for t, v in points]


class CountdownToken:
    """Token-like object that reports cancellation after `polls` checks.

    Lets tests stop a pipeline stage part way through, at a known point.
    """

    def __init__(self, polls: int) -> None:
        self.remaining = polls
        self.poll_count = 0

    @property
    def is_cancelled(self) -> bool:
        self.poll_count += 1
        if self.remaining > 0:
            self.remaining -= 1
            return False
        return True
