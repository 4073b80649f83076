"""Utility functions and configuration for sound synthesis."""

import math
from dataclasses import dataclass

from .errors import SynthesisError


DEFAULT_SAMPLE_RATE = 44100

MIN_VOLUME_CORRECTION = 0.0
MAX_VOLUME_CORRECTION = 2.0


@dataclass
class SynthConfig:
    """Configuration for rendering control points into samples.

    Attributes:
        sample_rate: Output sample rate in Hz. Default 44100.
        volume_correction_factor: Amplitude multiplier, clamped into
            [0, 2]. A factor of 1 produces samples in [-0.5, 0.5].
    """

    sample_rate: int = DEFAULT_SAMPLE_RATE
    volume_correction_factor: float = 1.0

    def __post_init__(self) -> None:
        """Validate configuration on initialization."""
        self.validate()
        self.volume_correction_factor = clamp_volume(self.volume_correction_factor)

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            SynthesisError: INVALID_SAMPLE_RATE if the sample rate is not positive.
            ValueError: If the volume correction factor is not finite.
        """
        validate_sample_rate(self.sample_rate)

        if not math.isfinite(self.volume_correction_factor):
            raise ValueError(
                f"volume_correction_factor must be finite, got {self.volume_correction_factor}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "sample_rate": self.sample_rate,
            "volume_correction_factor": self.volume_correction_factor,
        }


def clamp_volume(value: float) -> float:
    """Clamp a volume correction factor into [0, 2].

    Examples:
        >>> clamp_volume(3.5)
        2.0
        >>> clamp_volume(-1)
        0.0
    """
    return float(max(MIN_VOLUME_CORRECTION, min(value, MAX_VOLUME_CORRECTION)))


def validate_sample_rate(sample_rate: int) -> None:
    """Raise SynthesisError unless `sample_rate` is a positive integer."""
    if isinstance(sample_rate, bool) or not isinstance(sample_rate, int) or sample_rate <= 0:
        raise SynthesisError(
            message=f"Sample rate must be a positive integer, got {sample_rate!r}",
            code="INVALID_SAMPLE_RATE",
            details={"sample_rate": sample_rate},
        )


def segment_sample_count(duration_sec: float, sample_rate: int) -> int:
    """Number of samples rendered for a segment of `duration_sec`.

    The fractional remainder is dropped, so very short segments may
    produce no samples at all.

    Examples:
        >>> segment_sample_count(1.0, 44100)
        44100
        >>> segment_sample_count(0.00001, 44100)
        0
    """
    return int(duration_sec * sample_rate)

