"""Phase-continuous sine synthesis."""

import math

import torch

from .errors import SynthesisError
from .utils import validate_sample_rate


AMPLITUDE = 0.5


def phase_increments(track: torch.Tensor, sample_rate: int) -> torch.Tensor:
    """Phase advance in radians per sample for every frequency in `track`."""
    return 2.0 * math.pi * track.to(torch.float64) / sample_rate


def synthesize(
    track: torch.Tensor,
    sample_rate: int,
    volume: float = 1.0,
) -> torch.Tensor:
    """Render a frequency track as a sine wave.

    The phase starts at zero and accumulates across the whole track, so
    frequency changes never cause jumps in the waveform. Sample `k` uses
    the phase reached after the first `k` frequencies.

    Args:
        track: 1-D tensor with one frequency in Hz per sample.
        sample_rate: Output sample rate in Hz.
        volume: Volume correction factor; the peak amplitude is
            `volume * 0.5`.

    Returns:
        1-D float32 tensor with the same length as `track`.

    Raises:
        SynthesisError: INVALID_SAMPLE_RATE or INVALID_TRACK.
    """
    validate_sample_rate(sample_rate)

    if track.dim() != 1:
        raise SynthesisError(
            message=f"Frequency track must be 1-D, got shape {tuple(track.shape)}",
            code="INVALID_TRACK",
            details={"shape": list(track.shape)},
        )

    if track.numel() == 0:
        return torch.zeros(0, dtype=torch.float32)

    increments = phase_increments(track, sample_rate)
    phases = torch.zeros_like(increments)
    phases[1:] = torch.cumsum(increments[:-1], dim=0)

    samples = volume * AMPLITUDE * torch.sin(phases)
    return samples.to(torch.float32)
