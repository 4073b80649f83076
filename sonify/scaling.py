"""Linear scaling of graph values into an audible frequency band."""

import logging
import math
from dataclasses import dataclass

from .errors import SonifyConfigError


logger = logging.getLogger(__name__)

# Ranges narrower than this are treated as flat.
DEGENERATE_RANGE = 0.003


@dataclass
class FrequencyRange:
    """Frequency band the graph values are mapped onto.

    The lowest value plays at `min_frequency`, the highest at
    `max_frequency`. `min_frequency < max_frequency` is expected but not
    enforced; an inverted band simply plays the graph upside down.

    Attributes:
        min_frequency: Frequency in Hz of the lowest value. Default 150.
        max_frequency: Frequency in Hz of the highest value. Default 2600.
    """

    min_frequency: float = 150.0
    max_frequency: float = 2600.0

    def __post_init__(self) -> None:
        """Validate configuration on initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            SonifyConfigError: If a frequency is not a positive finite number.
        """
        for name in ("min_frequency", "max_frequency"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise SonifyConfigError(
                    message=f"{name} must be a positive finite number, got {value}",
                    details={"parameter": name, "value": value},
                )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for serialization."""
        return {
            "min_frequency": self.min_frequency,
            "max_frequency": self.max_frequency,
        }


def scale_frequencies(
    values: list[float],
    min_frequency: float,
    max_frequency: float,
) -> list[float]:
    """Map values linearly onto [min_frequency, max_frequency].

    If all values are (nearly) equal there is no range to scale against,
    and the whole line plays at `min_frequency`.

    Args:
        values: Graph values in chart order.
        min_frequency: Frequency of the smallest value.
        max_frequency: Frequency of the largest value.

    Returns:
        New list of frequencies in Hz.

    Examples:
        >>> scale_frequencies([1.0, 2.0, 3.0], 100.0, 300.0)
        [100.0, 200.0, 300.0]
    """
    if not values:
        return []

    max_value = max(values)
    min_value = min(values)

    if abs(max_value - min_value) < DEGENERATE_RANGE:
        logger.debug(
            "Values are not distinct enough: min=%s max=%s, playing at min_frequency",
            min_value,
            max_value,
        )
        return [float(min_frequency)] * len(values)

    return [
        (value - min_value) * (max_frequency - min_frequency) / (max_value - min_value)
        + min_frequency
        for value in values
    ]
