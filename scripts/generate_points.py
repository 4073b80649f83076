#!/usr/bin/env python3
"""Generate example chart point files.

Creates JSON point files that can be fed to scripts/sonify_graph.py.

Usage:
    python scripts/generate_points.py
    python scripts/generate_points.py --output_dir /tmp/points
"""

import argparse
import json
import sys
from pathlib import Path

import numpy as np

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def generate_ramp(count: int = 50, span: float = 10.0) -> list[list[float]]:
    """Generate a rising straight line."""
    times = np.linspace(0.0, span, count)
    return [[float(t), float(t)] for t in times]


def generate_sine(count: int = 200, span: float = 20.0, periods: float = 3.0) -> list[list[float]]:
    """Generate a sine curve."""
    times = np.linspace(0.0, span, count)
    values = np.sin(2 * np.pi * periods * times / span)
    return [[float(t), float(v)] for t, v in zip(times, values)]


def generate_random_walk(count: int = 2000, seed: int = 42) -> list[list[float]]:
    """Generate a stock-price-like random walk with daily timestamps."""
    rng = np.random.default_rng(seed)
    values = 100.0 + np.cumsum(rng.normal(0.0, 1.0, count))
    return [[float(day), float(v)] for day, v in enumerate(values)]


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate example chart point files")
    parser.add_argument(
        "--output_dir",
        type=str,
        default=str(project_root / "examples"),
        help="Directory to write the point files to",
    )
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    datasets = {
        "ramp.json": generate_ramp(),
        "sine.json": generate_sine(),
        "random_walk.json": generate_random_walk(),
    }

    for filename, points in datasets.items():
        path = output_dir / filename
        path.write_text(json.dumps(points) + "\n")
        print(f"Generated {path} ({len(points)} points)")

    return 0


if __name__ == "__main__":
    sys.exit(main())
