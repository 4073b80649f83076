"""Tests for synth.postprocess module (zero-crossing trimming)."""

import torch

from sonify.schema import ScaledSeries
from synth import SynthConfig, render_samples
from synth.postprocess import (
    postprocess_buffer,
    samples_to_latest_rising_crossing,
    samples_to_trim,
)


def buffer(*values: float) -> torch.Tensor:
    return torch.tensor(values, dtype=torch.float32)


class TestLatestRisingCrossing:
    """Tests for samples_to_latest_rising_crossing."""

    def test_crossing_at_end(self):
        """Test a crossing followed by one more sample."""
        assert samples_to_latest_rising_crossing(buffer(-2, -1, 1, 2)) == 2

    def test_crossing_before_falling_tail(self):
        """Test that the latest rising crossing is found behind a falling one."""
        assert samples_to_latest_rising_crossing(buffer(-2, -1, 1, 2, 1, -1)) == 4

    def test_latest_of_several_crossings(self):
        """Test that the crossing closest to the end wins."""
        assert samples_to_latest_rising_crossing(buffer(-1, 1, -1, 1, 2)) == 2

    def test_no_crossing(self):
        """Test buffers without a rising crossing."""
        assert samples_to_latest_rising_crossing(buffer(2, 1, 1, 2, 1, 1)) is None
        assert samples_to_latest_rising_crossing(buffer(1, -1)) is None
        assert samples_to_latest_rising_crossing(buffer(1)) is None

    def test_zero_is_not_a_crossing(self):
        """Test that touching zero does not count."""
        assert samples_to_latest_rising_crossing(buffer(-1, 0, 1)) is None


class TestSamplesToTrim:
    """Tests for samples_to_trim."""

    def test_empty(self):
        """Test that nothing is trimmed from an empty buffer."""
        assert samples_to_trim(buffer()) == 0

    def test_positive_tail_trims_after_last_negative(self):
        """Test a buffer ending on a positive half-wave."""
        assert samples_to_trim(buffer(-2, -1, 1, 2, 1)) == 3

    def test_positive_without_negatives(self):
        """Test a positive buffer without negative samples."""
        assert samples_to_trim(buffer(2, 1, 1, 2, 1, 1)) == 0

    def test_negative_tail_trims_to_crossing(self):
        """Test a buffer ending on a negative sample."""
        assert samples_to_trim(buffer(-2, -1, 1, 2, 1, -1)) == 4

    def test_negative_without_crossing(self):
        """Test a falling buffer without a rising crossing."""
        assert samples_to_trim(buffer(3, 1, -1, -2)) == 0


class TestPostprocessBuffer:
    """Tests for postprocess_buffer."""

    def test_positive_tail(self):
        """Test trimming of a positive tail."""
        assert postprocess_buffer(buffer(-2, -1, 1, 2, 1)).tolist() == [-2.0, -1.0, 0.0]

    def test_negative_tail(self):
        """Test trimming back to the rising crossing."""
        assert postprocess_buffer(buffer(-2, -1, 1, 2, 1, -1)).tolist() == [-2.0, -1.0, 0.0]

    def test_all_positive(self):
        """Test that an all-positive buffer only gets a zero appended."""
        assert postprocess_buffer(buffer(2, 1, 1, 2, 1, 1)).tolist() == [2.0, 1.0, 1.0, 2.0, 1.0, 1.0, 0.0]

    def test_empty_is_unchanged(self):
        """Test that an empty buffer stays empty."""
        assert postprocess_buffer(buffer()).numel() == 0

    def test_dtype_is_kept(self):
        """Test that the buffer dtype is preserved."""
        assert postprocess_buffer(buffer(1, -1)).dtype == torch.float32

    def test_input_not_modified(self):
        """Test that the input buffer is not modified."""
        original = buffer(-2, -1, 1, 2, 1)
        postprocess_buffer(original)
        assert original.tolist() == [-2.0, -1.0, 1.0, 2.0, 1.0]

    def test_sine_ends_in_zero(self, sine_buffer):
        """Test that a sine buffer ends in exactly zero and grows by at most one."""
        result = postprocess_buffer(sine_buffer)
        assert result[-1].item() == 0.0
        assert result.numel() <= sine_buffer.numel() + 1
        # Cut at most about one period of 440 Hz
        assert result.numel() >= sine_buffer.numel() - 44100 // 440 - 1


class TestRenderSamples:
    """Tests for synth.render_samples."""

    def test_render_ends_in_zero(self):
        """Test the full track, synth and postprocess chain."""
        samples = render_samples(ScaledSeries([0.0, 0.5, 1.0], [150.0, 2600.0, 800.0]), SynthConfig())
        assert samples[-1].item() == 0.0
        assert samples.numel() <= 44100 + 1
        assert samples.dtype == torch.float32

    def test_render_default_config(self):
        """Test rendering without a config."""
        samples = render_samples(ScaledSeries([0.0, 0.1], [440.0, 440.0]))
        assert samples.numel() > 0
