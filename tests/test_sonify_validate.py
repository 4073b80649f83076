"""Tests for sonify.validate and sonify.schema."""

import pytest
import torch

from sonify.errors import SanityCheckError, SonifyError
from sonify.schema import GraphPoint, GraphSeries, ScaledSeries, SweepResult
from sonify.validate import validate_series


class TestGraphSeries:
    """Tests for building GraphSeries from different point shapes."""

    def test_from_pairs(self):
        """Test building from (time, value) pairs."""
        series = GraphSeries.from_points([(0, 1), (2, 3)])
        assert series.relative_times == [0.0, 2.0]
        assert series.values == [1.0, 3.0]

    def test_from_mappings(self):
        """Test building from {"time", "value"} mappings."""
        series = GraphSeries.from_points([{"time": 1, "value": 5}, {"time": 2, "value": 6}])
        assert series.points == [GraphPoint(1.0, 5.0), GraphPoint(2.0, 6.0)]

    def test_from_graph_points(self):
        """Test building from GraphPoint instances."""
        points = [GraphPoint(0.0, 1.0), GraphPoint(1.0, 2.0)]
        series = GraphSeries.from_points(points)
        assert list(series) == points
        assert len(series) == 2

    def test_from_series_copies(self):
        """Test that building from a series copies its points."""
        original = GraphSeries.from_points([(0, 1), (1, 2)])
        copy = GraphSeries.from_points(original)
        copy.points.append(GraphPoint(2.0, 3.0))
        assert len(original) == 2

    def test_unsupported_point_raises(self):
        """Test that unsupported point shapes raise TypeError."""
        with pytest.raises(TypeError, match="Unsupported point"):
            GraphSeries.from_points([(0, 1, 2)])


class TestScaledSeries:
    """Tests for ScaledSeries."""

    def test_mismatched_lengths_raise(self):
        """Test that times and frequencies must have the same length."""
        with pytest.raises(ValueError, match="must have the same length"):
            ScaledSeries([0.0, 1.0], [100.0])

    def test_duration_is_last_time(self):
        """Test duration_sec property."""
        assert ScaledSeries([0.0, 1.5, 3.0], [1.0, 2.0, 3.0]).duration_sec == 3.0
        assert ScaledSeries([], []).duration_sec == 0.0

    def test_to_dict(self):
        """Test conversion to a list of dictionaries."""
        series = ScaledSeries([0.0, 1.0], [150.0, 2600.0])
        assert series.to_dict() == [
            {"time": 0.0, "frequency": 150.0},
            {"time": 1.0, "frequency": 2600.0},
        ]


class TestSweepResult:
    """Tests for SweepResult serialization."""

    def make_result(self) -> SweepResult:
        return SweepResult(
            samples=torch.tensor([0.1, -0.1, 0.0]),
            sample_rate=44100,
            series=ScaledSeries([0.0, 2.0], [150.0, 2600.0]),
            input_point_count=2,
        )

    def test_properties(self):
        """Test derived properties."""
        result = self.make_result()
        assert result.sample_count == 3
        assert result.point_count == 2
        assert result.duration_sec == 2.0

    def test_to_dict_excludes_optional_fields(self):
        """Test that samples and points are excluded by default."""
        data = self.make_result().to_dict()
        assert "samples" not in data
        assert "points" not in data
        assert data["sample_count"] == 3

    def test_to_dict_includes_optional_fields(self):
        """Test that samples and points can be included."""
        data = self.make_result().to_dict(include_samples=True, include_points=True)
        assert len(data["samples"]) == 3
        assert data["points"][1]["frequency"] == 2600.0


class TestValidateSeries:
    """Tests for validate_series."""

    def test_valid_series_passes(self):
        """Test that two non-negative points pass."""
        validate_series(GraphSeries.from_points([(0, 1), (1, 2)]))

    def test_empty_input_raises(self):
        """Test that empty input is rejected with INPUT_EMPTY."""
        with pytest.raises(SanityCheckError) as exc_info:
            validate_series(GraphSeries())
        assert exc_info.value.code == "INPUT_EMPTY"

    def test_single_point_raises(self):
        """Test that a single point is rejected with INPUT_TOO_SHORT."""
        with pytest.raises(SanityCheckError) as exc_info:
            validate_series(GraphSeries.from_points([(10, 10)]))
        assert exc_info.value.code == "INPUT_TOO_SHORT"

    def test_single_negative_point_reports_too_short(self):
        """Test that the point count is checked before the timestamps."""
        with pytest.raises(SanityCheckError) as exc_info:
            validate_series(GraphSeries.from_points([(-10, 0)]))
        assert exc_info.value.code == "INPUT_TOO_SHORT"

    def test_negative_time_raises(self):
        """Test that negative timestamps are rejected."""
        with pytest.raises(SanityCheckError) as exc_info:
            validate_series(GraphSeries.from_points([(0, 1), (-1, 2), (3, 4)]))
        error = exc_info.value
        assert error.code == "NEGATIVE_TIMESTAMP"
        assert error.details["index"] == 1
        assert error.details["min_relative_time"] == -1.0

    def test_non_monotonic_time_passes_validation(self):
        """Test that ordering is not checked here."""
        validate_series(GraphSeries.from_points([(10, 10), (5, 30), (20, 20)]))

    def test_error_is_sonify_error(self):
        """Test error hierarchy and string form."""
        with pytest.raises(SonifyError) as exc_info:
            validate_series(GraphSeries())
        assert str(exc_info.value).startswith("[INPUT_EMPTY]")
