"""Pytest configuration and fixtures for the test suite."""

import sys
from pathlib import Path

import pytest
import torch

# Ensure project root is in path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from playback import BufferSink, clear_cache
from tests.fixtures import generate_linear_points, generate_sine_points


@pytest.fixture
def three_points() -> list[tuple[float, float]]:
    """Three evenly spaced, rising points."""
    return [(0.0, 1.0), (5.0, 2.0), (10.0, 3.0)]


@pytest.fixture
def sine_points() -> list[tuple[float, float]]:
    """A smooth sine curve with 100 points."""
    return generate_sine_points(count=100)


@pytest.fixture
def dense_points() -> list[tuple[float, float]]:
    """2001 points over 200 time units, too dense for 10 seconds."""
    return generate_linear_points(count=2001, span=200.0)


@pytest.fixture
def buffer_sink() -> BufferSink:
    """An in-memory playback sink."""
    return BufferSink()


@pytest.fixture
def sine_buffer() -> torch.Tensor:
    """One second of a 440 Hz sine at 44100 Hz, amplitude 0.5."""
    sample_rate = 44100
    t = torch.arange(sample_rate, dtype=torch.float64) / sample_rate
    return (0.5 * torch.sin(2 * torch.pi * 440 * t)).float()


@pytest.fixture(autouse=True)
def _reset_sink_cache():
    """Keep sink instances from leaking between tests."""
    clear_cache()
    yield
    clear_cache()


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "audio_device: marks tests that need a real audio output device"
    )
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow"
    )
