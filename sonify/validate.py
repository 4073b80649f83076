"""Input validation for graph content."""

from .errors import SanityCheckError
from .schema import GraphSeries


def validate_series(series: GraphSeries) -> None:
    """Ensure the graph content can be processed.

    Only cheap structural checks are performed here. Points that go
    backwards in time are detected later, while the duration fitter
    measures segment durations.

    Args:
        series: Graph content in chart order.

    Raises:
        SanityCheckError: If validation fails, with code:
            - INPUT_EMPTY: No points at all.
            - INPUT_TOO_SHORT: A single point, which has no segment to play.
            - NEGATIVE_TIMESTAMP: At least one relative time is below zero.

    Examples:
        >>> from sonify.schema import GraphSeries
        >>> validate_series(GraphSeries.from_points([(0, 1), (1, 2)]))
    """
    if len(series) == 0:
        raise SanityCheckError(
            message="The input was empty and thus no sound could be produced: please provide at least two points",
            code="INPUT_EMPTY",
            details={"point_count": 0},
        )

    if len(series) == 1:
        raise SanityCheckError(
            message="The input was too short and thus no sound could be produced: please provide at least two points",
            code="INPUT_TOO_SHORT",
            details={"point_count": 1},
        )

    times = series.relative_times
    min_time = min(times)
    if min_time < 0:
        raise SanityCheckError(
            message="The relative times contain negative numbers, which cannot be played",
            code="NEGATIVE_TIMESTAMP",
            details={
                "min_relative_time": min_time,
                "index": times.index(min_time),
            },
        )
