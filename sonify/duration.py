"""Fitting graph timestamps into a playback duration.

Every segment (the line between two adjacent points) must play long
enough to be heard. Timestamps are scaled into a requested duration; if
some segments end up too short, the duration is enlarged and the scaling
is repeated. Once the enlarged duration would exceed the maximum allowed
by the playing duration policy, neighbouring points are averaged
together (decimated) so fewer, longer segments remain.

Policies:
    - short: Starts at 2s, never longer than 3s.
    - recommended: Starts at 3s, never longer than 10s.
    - long: Starts just below 20s, never longer than 20s.
    - exactly: Starts at and never exceeds the given number of seconds.

Example:
    >>> from sonify.duration import PlayingDuration, fit_duration
    >>> result = fit_duration([0.0, 5.0, 10.0], [1.0, 2.0, 3.0], PlayingDuration("short"))
    >>> result.relative_times, result.decimations
    ([0.0, 1.0, 2.0], 0)
"""

import logging
import math
from dataclasses import dataclass
from typing import Literal

from .cancel import CancellationToken, is_cancelled
from .errors import SanityCheckError, SonifyConfigError
from .scaling import DEGENERATE_RANGE


logger = logging.getLogger(__name__)


PlayingDurationPolicy = Literal["short", "recommended", "long", "exactly"]

# Each segment should play for at least 35ms to be perceivable.
MIN_SEGMENT_DURATION_SEC = 0.035

# Tolerance when comparing a segment against the minimum duration.
COMPARISON_PRECISION_SEC = 0.005

# Smallest enlargement suggested when a segment is too short.
MIN_ENLARGEMENT_SEC = 0.03

# Suggested totals within this distance of the duration count as fitting.
FIT_TOLERANCE_SEC = 1e-9

DECIMATION_LEVEL = 2
MIN_POINT_COUNT = 2

_MAXIMUM_DURATION_SEC: dict[str, float] = {
    "short": 3.0,
    "recommended": 10.0,
    "long": 20.0,
}

_REQUESTED_DURATION_SEC: dict[str, float] = {
    "short": 2.0,
    "recommended": 3.0,
}

# The long policy starts slightly below its cap.
_LONG_POLICY_HEADROOM_SEC = 0.1


@dataclass
class PlayingDuration:
    """Desired playing duration of a sweep.

    The requested duration is only a starting point: it is enlarged while
    segments are too short, but never beyond the maximum duration.

    Attributes:
        policy: One of "short", "recommended", "long" or "exactly".
            Default "recommended".
        seconds: Duration in seconds for the "exactly" policy. Ignored
            by the other policies.
    """

    policy: PlayingDurationPolicy = "recommended"
    seconds: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration on initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            SonifyConfigError: If the policy is unknown or "exactly" lacks
                a positive finite duration.
        """
        valid_policies = {"short", "recommended", "long", "exactly"}
        if self.policy not in valid_policies:
            raise SonifyConfigError(
                message=f"policy must be one of {valid_policies}, got '{self.policy}'",
                details={"parameter": "policy", "value": self.policy},
            )

        if self.policy == "exactly":
            if self.seconds is None or not math.isfinite(self.seconds) or self.seconds <= 0:
                raise SonifyConfigError(
                    message=f"seconds must be a positive finite number for policy 'exactly', got {self.seconds}",
                    details={"parameter": "seconds", "value": self.seconds},
                )

    @classmethod
    def exactly(cls, seconds: float) -> "PlayingDuration":
        """Create an "exactly" policy for the given number of seconds."""
        return cls(policy="exactly", seconds=seconds)

    @property
    def maximum_duration_sec(self) -> float:
        """Return the duration a sweep may never exceed."""
        if self.policy == "exactly":
            return float(self.seconds)
        return _MAXIMUM_DURATION_SEC[self.policy]

    @property
    def requested_duration_sec(self) -> float:
        """Return the duration the fitting starts from."""
        if self.policy == "exactly":
            return float(self.seconds)
        if self.policy == "long":
            return self.maximum_duration_sec - _LONG_POLICY_HEADROOM_SEC
        return _REQUESTED_DURATION_SEC[self.policy]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result: dict = {"policy": self.policy}
        if self.policy == "exactly":
            result["seconds"] = self.seconds
        return result


@dataclass
class FitResult:
    """Outcome of fitting timestamps into a playing duration.

    Attributes:
        relative_times: Scaled timestamps in seconds.
        values: Values belonging to the timestamps (averaged where points
            were decimated).
        duration_sec: Duration the timestamps were scaled into.
        iterations: Number of scaling passes.
        decimations: Number of times the point count was reduced.
        cancelled: Whether fitting stopped because of a cancellation.
    """

    relative_times: list[float]
    values: list[float]
    duration_sec: float
    iterations: int = 0
    decimations: int = 0
    cancelled: bool = False


def rescale_times(relative_times: list[float], duration: float) -> list[float]:
    """Scale timestamps linearly into [0, duration].

    If all timestamps are (nearly) equal the input range is taken to be
    [0, 1] to avoid a division by zero.

    Args:
        relative_times: Timestamps in chart order.
        duration: Target duration in seconds.

    Returns:
        New list of scaled timestamps.
    """
    if not relative_times:
        return []

    max_time = max(relative_times)
    min_time = min(relative_times)

    if abs(max_time - min_time) < DEGENERATE_RANGE:
        logger.debug(
            "Timestamps are not distinct enough: min=%s max=%s, using [0, 1] as range",
            min_time,
            max_time,
        )
        max_time = 1.0
        min_time = 0.0

    return [
        (relative_time - min_time) * duration / (max_time - min_time)
        for relative_time in relative_times
    ]


def reduce_number_of_elements(
    relative_times: list[float],
    values: list[float],
    level: int = DECIMATION_LEVEL,
) -> tuple[list[float], list[float]]:
    """Average consecutive chunks of `level` points into one point.

    This is a last resort when the graph does not fit into the maximum
    duration, as it lowers the resolution. The last chunk may hold fewer
    than `level` points and is averaged over what it contains.

    Args:
        relative_times: Timestamps in chart order.
        values: Values in chart order.
        level: Number of points combined into one. Default 2.

    Returns:
        Tuple of (times, values), each of length ceil(n / level).

    Examples:
        >>> reduce_number_of_elements([0.0, 1.0, 2.0], [4.0, 6.0, 8.0])
        ([0.5, 2.0], [5.0, 8.0])
    """
    if level < 1:
        raise ValueError(f"level must be >= 1, got {level}")

    return _chunk_means(relative_times, level), _chunk_means(values, level)


def _chunk_means(items: list[float], size: int) -> list[float]:
    means = []
    for start in range(0, len(items), size):
        chunk = items[start:start + size]
        means.append(sum(chunk) / len(chunk))
    return means


def segment_extension(
    relative_times: list[float],
    requested_duration: float,
) -> float | None:
    """Suggest how much longer playback must be for all segments to be audible.

    Too short segments count with the minimum segment duration, all others
    with their actual duration. The sum is compared to the requested
    duration.

    Args:
        relative_times: Scaled timestamps in chart order.
        requested_duration: Duration the timestamps were scaled into.

    Returns:
        None if every segment is long enough, otherwise the extension in
        seconds (at least MIN_ENLARGEMENT_SEC, so the fitting always makes
        progress).

    Raises:
        SanityCheckError: NEGATIVE_TIMESTAMP if a segment does not move
            forward in time.
    """
    suggested_duration = 0.0
    min_segment_duration = math.inf

    for index, (start, end) in enumerate(zip(relative_times, relative_times[1:])):
        segment_duration = end - start

        if not segment_duration > 0:
            raise SanityCheckError(
                message="The relative times need to grow monotonically: every time must be greater than the previous one",
                code="NEGATIVE_TIMESTAMP",
                details={
                    "segment_index": index,
                    "segment_duration": segment_duration,
                },
            )

        if segment_duration + COMPARISON_PRECISION_SEC < MIN_SEGMENT_DURATION_SEC:
            suggested_duration += MIN_SEGMENT_DURATION_SEC
        else:
            suggested_duration += segment_duration

        min_segment_duration = min(min_segment_duration, segment_duration)

    logger.debug(
        "Segment check: min_segment_sec=%s suggested_sec=%s requested_sec=%s",
        min_segment_duration,
        suggested_duration,
        requested_duration,
    )

    difference = suggested_duration - requested_duration
    if difference <= FIT_TOLERANCE_SEC:
        return None
    return max(difference, MIN_ENLARGEMENT_SEC)


def fit_duration(
    relative_times: list[float],
    values: list[float],
    playing_duration: PlayingDuration,
    token: CancellationToken | None = None,
) -> FitResult:
    """Scale timestamps so that every segment is audible within the policy.

    Starting from the requested duration, the timestamps are scaled, the
    segments are checked, and the duration is enlarged until all segments
    are long enough. When the enlarged duration would exceed the maximum,
    the points are decimated and the check is repeated at the maximum.

    Args:
        relative_times: Timestamps in chart order.
        values: Values in chart order (decimated alongside the timestamps).
        playing_duration: Policy deciding requested and maximum duration.
        token: Optional cancellation token, polled once per iteration.

    Returns:
        FitResult with the scaled timestamps and matching values.

    Raises:
        SanityCheckError: NEGATIVE_TIMESTAMP if timestamps do not increase.
    """
    maximum_duration = playing_duration.maximum_duration_sec
    desired_duration = playing_duration.requested_duration_sec

    current_times = list(relative_times)
    current_values = list(values)
    duration = min(desired_duration, maximum_duration)
    decimations = 0

    max_iterations = _iteration_limit(len(current_times), maximum_duration)

    for iteration in range(1, max_iterations + 1):
        if is_cancelled(token):
            logger.debug("Duration fitting cancelled after %d iterations", iteration - 1)
            return FitResult(
                relative_times=current_times,
                values=current_values,
                duration_sec=duration,
                iterations=iteration - 1,
                decimations=decimations,
                cancelled=True,
            )

        duration = min(desired_duration, maximum_duration)
        logger.debug(
            "Scaling into %ss (requested %ss, maximum %ss)",
            duration,
            desired_duration,
            maximum_duration,
        )
        current_times = rescale_times(current_times, duration)

        extension = segment_extension(current_times, duration)
        if extension is None:
            return FitResult(
                relative_times=current_times,
                values=current_values,
                duration_sec=duration,
                iterations=iteration,
                decimations=decimations,
            )

        expanded_duration = duration + extension
        logger.debug(
            "Duration of %ss too short for minimum segment size, enlarging to %ss",
            duration,
            expanded_duration,
        )

        if expanded_duration > maximum_duration:
            point_count = len(current_times)
            if math.ceil(point_count / DECIMATION_LEVEL) < MIN_POINT_COUNT:
                logger.warning(
                    "Cannot drop more points: point_count=%d duration_sec=%s, "
                    "some segments stay shorter than %ss",
                    point_count,
                    duration,
                    MIN_SEGMENT_DURATION_SEC,
                )
                return FitResult(
                    relative_times=current_times,
                    values=current_values,
                    duration_sec=duration,
                    iterations=iteration,
                    decimations=decimations,
                )

            current_times, current_values = reduce_number_of_elements(
                current_times, current_values, DECIMATION_LEVEL
            )
            decimations += 1
            logger.debug(
                "Removed %d points from %d",
                point_count - len(current_times),
                point_count,
            )

        desired_duration = expanded_duration

    logger.warning(
        "Duration fitting did not settle after %d iterations, using last scaling",
        max_iterations,
    )
    current_times = rescale_times(current_times, duration)
    return FitResult(
        relative_times=current_times,
        values=current_values,
        duration_sec=duration,
        iterations=max_iterations,
        decimations=decimations,
    )


def _iteration_limit(point_count: int, maximum_duration: float) -> int:
    """Upper bound on fitting iterations.

    Between two decimations the duration grows by at least
    MIN_ENLARGEMENT_SEC until it passes the maximum, and every decimation
    halves the point count.
    """
    decimation_rounds = math.ceil(math.log2(max(point_count, 2))) + 1
    enlargements = math.ceil(maximum_duration / MIN_ENLARGEMENT_SEC) + 2
    return decimation_rounds * enlargements
