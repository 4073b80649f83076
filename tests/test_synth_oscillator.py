"""Tests for synth.oscillator module (sine synthesis)."""

import math

import pytest
import torch

from synth import SynthConfig
from synth.errors import SynthesisError
from synth.oscillator import phase_increments, synthesize
from synth.utils import clamp_volume


class TestSynthConfig:
    """Tests for SynthConfig dataclass."""

    def test_defaults(self):
        """Test default configuration values."""
        config = SynthConfig()
        assert config.sample_rate == 44100
        assert config.volume_correction_factor == 1.0

    def test_volume_is_clamped(self):
        """Test that the volume correction factor is clamped into [0, 2]."""
        assert SynthConfig(volume_correction_factor=5.0).volume_correction_factor == 2.0
        assert SynthConfig(volume_correction_factor=-1.0).volume_correction_factor == 0.0

    def test_clamp_volume(self):
        """Test the volume clamp helper."""
        assert clamp_volume(1.5) == 1.5
        assert clamp_volume(3) == 2.0

    def test_invalid_sample_rate_raises(self):
        """Test that the sample rate must be positive."""
        with pytest.raises(SynthesisError) as exc_info:
            SynthConfig(sample_rate=-44100)
        assert exc_info.value.code == "INVALID_SAMPLE_RATE"

    def test_non_finite_volume_raises(self):
        """Test that the volume must be finite."""
        with pytest.raises(ValueError, match="must be finite"):
            SynthConfig(volume_correction_factor=math.nan)


class TestSynthesize:
    """Tests for synthesize."""

    def test_starts_at_zero_phase(self):
        """Test that the first sample is sin(0)."""
        samples = synthesize(torch.full((100,), 440.0, dtype=torch.float64), 44100)
        assert samples[0].item() == 0.0

    def test_constant_frequency_matches_sine(self):
        """Test a constant tone against a direct sine."""
        sample_rate = 8000
        track = torch.full((800,), 100.0, dtype=torch.float64)
        samples = synthesize(track, sample_rate)
        t = torch.arange(800, dtype=torch.float64) / sample_rate
        expected = 0.5 * torch.sin(2 * math.pi * 100.0 * t)
        assert torch.allclose(samples.double(), expected, atol=1e-5)

    def test_output_dtype_and_length(self):
        """Test that output is float32 with the track length."""
        samples = synthesize(torch.linspace(150, 2600, 1000, dtype=torch.float64), 44100)
        assert samples.dtype == torch.float32
        assert samples.shape == (1000,)

    def test_amplitude_follows_volume(self):
        """Test that the peak amplitude is volume * 0.5."""
        track = torch.full((44100,), 441.0, dtype=torch.float64)
        assert synthesize(track, 44100, volume=1.0).abs().max().item() == pytest.approx(0.5, abs=1e-3)
        assert synthesize(track, 44100, volume=2.0).abs().max().item() == pytest.approx(1.0, abs=1e-3)
        assert synthesize(track, 44100, volume=0.0).abs().max().item() == 0.0

    def test_phase_continuity(self):
        """Test that consecutive samples never jump more than one phase step."""
        sample_rate = 44100
        track = torch.cat([
            torch.full((1000,), 150.0, dtype=torch.float64),
            torch.full((1000,), 2600.0, dtype=torch.float64),
            torch.linspace(2600.0, 300.0, 1000, dtype=torch.float64),
        ])
        samples = synthesize(track, sample_rate).double()
        steps = (samples[1:] - samples[:-1]).abs()
        bound = 0.5 * phase_increments(track, sample_rate)[:-1] + 1e-6
        assert bool((steps <= bound).all())

    def test_empty_track(self):
        """Test that an empty track gives an empty buffer."""
        samples = synthesize(torch.empty(0, dtype=torch.float64), 44100)
        assert samples.numel() == 0
        assert samples.dtype == torch.float32

    def test_two_dimensional_track_raises(self):
        """Test that the track must be 1-D."""
        with pytest.raises(SynthesisError) as exc_info:
            synthesize(torch.zeros(2, 10), 44100)
        assert exc_info.value.code == "INVALID_TRACK"

    def test_invalid_sample_rate_raises(self):
        """Test that the sample rate must be positive."""
        with pytest.raises(SynthesisError):
            synthesize(torch.zeros(10), 0)

