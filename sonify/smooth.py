"""Smoothing of graph values before they are turned into frequencies.

Spiky data makes an unpleasant sweep. An exponential moving average
suppresses spikes at the cost of a slight lag, because every output only
looks at the current and earlier values.

Smoothing Methods:
    - none: Keep the values as they are.
    - default: Exponential moving average with alpha 0.35.
    - custom: Exponential moving average with a caller supplied alpha,
      clamped into [0.0001, 1].

Example:
    >>> from sonify.smooth import SmoothingConfig, smooth_values
    >>> smooth_values([0.0, 10.0, 0.0], SmoothingConfig(method="custom", alpha=0.5))
    [0.0, 5.0, 2.5]
"""

import math
from dataclasses import dataclass
from typing import Literal


SmoothingMethod = Literal["none", "default", "custom"]

DEFAULT_ALPHA = 0.35
MIN_ALPHA = 0.0001
MAX_ALPHA = 1.0


@dataclass
class SmoothingConfig:
    """Configuration for smoothing graph values.

    Attributes:
        method: Smoothing method to use. One of:
            - "none": No smoothing.
            - "default": EMA with alpha 0.35.
            - "custom": EMA with `alpha`.
        alpha: EMA coefficient used by the "custom" method. Values
            outside [0.0001, 1] are clamped when applied. Default 0.35.
    """

    method: SmoothingMethod = "default"
    alpha: float = DEFAULT_ALPHA

    def __post_init__(self) -> None:
        """Validate configuration on initialization."""
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        valid_methods = {"none", "default", "custom"}
        if self.method not in valid_methods:
            raise ValueError(
                f"method must be one of {valid_methods}, got '{self.method}'"
            )

        if not math.isfinite(self.alpha):
            raise ValueError(f"alpha must be a finite number, got {self.alpha}")

    @property
    def effective_alpha(self) -> float | None:
        """Return the alpha actually applied, or None when smoothing is off."""
        if self.method == "none":
            return None
        if self.method == "default":
            return DEFAULT_ALPHA
        return max(min(self.alpha, MAX_ALPHA), MIN_ALPHA)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        result: dict = {"method": self.method}
        if self.effective_alpha is not None:
            result["alpha"] = self.effective_alpha
        return result


def exponential_moving_average(values: list[float], alpha: float) -> list[float]:
    """Apply a causal exponential moving average.

    The first output equals the first input; every following output moves
    a fraction `alpha` of the way from the previous output towards the
    current input.

    Args:
        values: Input values in chart order.
        alpha: Weight of the current value, in (0, 1].

    Returns:
        New list with the same length as `values`.
    """
    if not values:
        return []

    output = values[0]
    smoothed: list[float] = []
    for value in values:
        output += alpha * (value - output)
        smoothed.append(output)
    return smoothed


def smooth_values(values: list[float], config: SmoothingConfig) -> list[float]:
    """Apply the configured smoothing to graph values.

    Args:
        values: Input values in chart order.
        config: Smoothing configuration.

    Returns:
        New list of smoothed values. The input list is not modified.
    """
    alpha = config.effective_alpha
    if alpha is None:
        return list(values)
    return exponential_moving_average(values, alpha)
