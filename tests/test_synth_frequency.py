"""Tests for synth.frequency module (frequency track generation)."""

import math

import pytest
import torch

from sonify.cancel import CancellationToken
from sonify.schema import ScaledSeries
from synth.errors import SynthesisError
from synth.frequency import count_track_samples, generate_frequency_track
from tests.fixtures import CountdownToken


class TestCountTrackSamples:
    """Tests for count_track_samples."""

    def test_sums_segment_counts(self):
        """Test that every segment contributes int(d * sample_rate)."""
        series = ScaledSeries([0.0, 0.5, 1.25], [100.0, 200.0, 300.0])
        assert count_track_samples(series, 100) == 50 + 75

    def test_fractional_samples_are_dropped(self):
        """Test that partial samples are not rendered."""
        series = ScaledSeries([0.0, 0.019], [100.0, 200.0])
        assert count_track_samples(series, 100) == 1

    def test_single_point(self):
        """Test that a single point has no samples."""
        assert count_track_samples(ScaledSeries([0.0], [100.0]), 44100) == 0


class TestGenerateFrequencyTrack:
    """Tests for generate_frequency_track."""

    def test_linear_interpolation(self):
        """Test that frequencies step linearly towards the segment end."""
        track = generate_frequency_track(ScaledSeries([0.0, 1.0], [100.0, 200.0]), 10)
        expected = [110.0, 120.0, 130.0, 140.0, 150.0, 160.0, 170.0, 180.0, 190.0, 200.0]
        assert track.tolist() == pytest.approx(expected)

    def test_length_matches_count(self):
        """Test that the track length equals the dry-run count."""
        series = ScaledSeries([0.0, 0.3, 0.7, 2.0], [150.0, 900.0, 400.0, 2600.0])
        track = generate_frequency_track(series, 44100)
        assert track.numel() == count_track_samples(series, 44100)

    def test_segment_ends_hit_control_points(self):
        """Test that each segment ends exactly on its end frequency."""
        series = ScaledSeries([0.0, 1.0, 2.0], [100.0, 300.0, 200.0])
        track = generate_frequency_track(series, 50)
        assert track[49].item() == pytest.approx(300.0)
        assert track[-1].item() == pytest.approx(200.0)
        assert track[50].item() == pytest.approx(298.0)

    def test_dtype_is_float64(self):
        """Test that frequencies are kept in double precision."""
        track = generate_frequency_track(ScaledSeries([0.0, 0.1], [100.0, 200.0]), 1000)
        assert track.dtype == torch.float64

    def test_zero_sample_segments_are_skipped(self):
        """Test that segments shorter than one sample produce nothing."""
        series = ScaledSeries([0.0, 0.001, 1.0], [100.0, 5000.0, 200.0])
        track = generate_frequency_track(series, 100)
        assert track.numel() == 99
        assert track.max().item() < 5000.0

    def test_cancelled_token_returns_empty(self):
        """Test that a cancelled token stops before any segment."""
        token = CancellationToken()
        token.cancel()
        track = generate_frequency_track(ScaledSeries([0.0, 1.0], [100.0, 200.0]), 44100, token)
        assert track.numel() == 0

    def test_cancelled_between_segments_keeps_rendered_segments(self):
        """Test that cancelling mid-track returns exactly the segments rendered so far."""
        series = ScaledSeries([0.0, 1.0, 2.0, 3.0], [100.0, 200.0, 300.0, 400.0])
        full = generate_frequency_track(series, 10)
        token = CountdownToken(1)

        track = generate_frequency_track(series, 10, token)

        assert track.numel() == 10
        assert track.tolist() == pytest.approx(full[:10].tolist())
        assert track[-1].item() == pytest.approx(200.0)
        assert token.poll_count == 2

    def test_invalid_sample_rate_raises(self):
        """Test that the sample rate must be a positive integer."""
        with pytest.raises(SynthesisError) as exc_info:
            generate_frequency_track(ScaledSeries([0.0, 1.0], [100.0, 200.0]), 0)
        assert exc_info.value.code == "INVALID_SAMPLE_RATE"

    def test_non_finite_frequency_raises(self):
        """Test that non-finite frequencies are rejected."""
        with pytest.raises(SynthesisError) as exc_info:
            generate_frequency_track(ScaledSeries([0.0, 1.0], [100.0, math.nan]), 100)
        assert exc_info.value.code == "INVALID_TRACK"
