#!/usr/bin/env python3
"""Sonify chart points from a JSON file.

This script reads a list of chart points, fits them into a playing
duration, maps them onto a frequency band and renders the tone sweep.
The sweep summary is written as JSON; with --play the sweep is also
played through a playback sink.

The input file holds either pairs or objects:
    [[0, 1.0], [5, 2.0], [10, 3.0]]
    [{"time": 0, "value": 1.0}, {"time": 5, "value": 2.0}]

Usage:
    python scripts/sonify_graph.py --input points.json
    python scripts/sonify_graph.py --input points.json --duration short --smoothing none
    python scripts/sonify_graph.py --input points.json --duration exactly --seconds 4 --play

Example output:
    {
        "sample_rate": 44100,
        "duration_sec": 3.0,
        "sample_count": 131995,
        "input_point_count": 3,
        "point_count": 3,
        "decimation_count": 0,
        ...
    }
"""

import argparse
import json
import sys
import threading
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from playback import get_sink, list_available_sinks
from playback.errors import PlaybackError
from sonify import FrequencyRange, PlayingDuration, SmoothingConfig, sonify_graph
from sonify.errors import SonifyError
from synth import SynthConfig
from synth.errors import SynthError


def load_points(path: Path) -> list:
    """Load chart points from a JSON file.

    Accepts a list of [time, value] pairs or {"time", "value"} objects,
    or an object with a "points" key holding such a list.
    """
    data = json.loads(path.read_text())
    if isinstance(data, dict):
        data = data.get("points", [])
    return [tuple(p) if isinstance(p, list) else p for p in data]


def play_and_wait(result, sink_id: str, timeout: float) -> bool:
    """Play a sweep through a sink and wait for it to finish."""
    sink = get_sink(sink_id)
    finished = threading.Event()
    outcome = {"success": False}

    def completion(success: bool) -> None:
        outcome["success"] = success
        finished.set()

    sink.play(result.samples, result.sample_rate, completion)
    if not finished.wait(timeout):
        sink.stop()
    return outcome["success"]


def main() -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = argparse.ArgumentParser(
        description="Render the tone sweep for chart points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --input points.json
    %(prog)s --input points.json --duration long --min_frequency 200 --max_frequency 1800
    %(prog)s --input points.json --smoothing custom --alpha 0.2 --include_points --pretty
    %(prog)s --input points.json --play --sink sounddevice
        """,
    )

    # Input/output arguments
    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Path to a JSON file with chart points",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "--pretty", "-p",
        action="store_true",
        help="Pretty-print JSON output with indentation",
    )

    # Duration arguments
    parser.add_argument(
        "--duration",
        type=str,
        choices=["short", "recommended", "long", "exactly"],
        default="recommended",
        help="Playing duration policy (default: recommended)",
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="Duration in seconds for --duration exactly",
    )

    # Frequency arguments
    parser.add_argument(
        "--min_frequency",
        type=float,
        default=150.0,
        help="Frequency of the lowest value in Hz (default: 150)",
    )
    parser.add_argument(
        "--max_frequency",
        type=float,
        default=2600.0,
        help="Frequency of the highest value in Hz (default: 2600)",
    )

    # Smoothing arguments
    parser.add_argument(
        "--smoothing",
        type=str,
        choices=["none", "default", "custom"],
        default="default",
        help="Smoothing method (default: default)",
    )
    parser.add_argument(
        "--alpha",
        type=float,
        default=0.35,
        help="EMA alpha for --smoothing custom (default: 0.35)",
    )

    # Synthesis arguments
    parser.add_argument(
        "--sample_rate",
        type=int,
        default=44100,
        help="Sample rate in Hz (default: 44100)",
    )
    parser.add_argument(
        "--volume",
        type=float,
        default=1.0,
        help="Volume correction factor, 0-2 (default: 1.0)",
    )

    # Output control arguments
    parser.add_argument(
        "--include_points",
        action="store_true",
        help="Include the scaled control points in output",
    )
    parser.add_argument(
        "--include_samples",
        action="store_true",
        help="Include the rendered samples in output",
    )

    # Playback arguments
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play the sweep after rendering it",
    )
    parser.add_argument(
        "--sink",
        type=str,
        choices=list_available_sinks(),
        default="default",
        help="Playback sink for --play (default: default)",
    )

    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        print(json.dumps({
            "error": "File not found",
            "code": "FILE_NOT_FOUND",
            "path": str(input_path),
        }), file=sys.stderr)
        return 1

    try:
        points = load_points(input_path)

        if args.duration == "exactly":
            playing_duration = PlayingDuration.exactly(args.seconds if args.seconds is not None else 0.0)
        else:
            playing_duration = PlayingDuration(policy=args.duration)

        result = sonify_graph(
            points,
            playing_duration=playing_duration,
            smoothing_config=SmoothingConfig(method=args.smoothing, alpha=args.alpha),
            frequency_range=FrequencyRange(args.min_frequency, args.max_frequency),
            synth_config=SynthConfig(sample_rate=args.sample_rate, volume_correction_factor=args.volume),
        )

        output = result.to_dict(
            include_samples=args.include_samples,
            include_points=args.include_points,
        )

        if args.play:
            output["played"] = play_and_wait(result, args.sink, timeout=result.duration_sec + 5.0)

        if args.pretty:
            json_output = json.dumps(output, indent=2, ensure_ascii=False)
        else:
            json_output = json.dumps(output, ensure_ascii=False)

        if args.output:
            output_path = Path(args.output)
            output_path.write_text(json_output + "\n")
            print(f"Sweep summary written to {output_path}", file=sys.stderr)
        else:
            print(json_output)

        return 0

    except (SonifyError, SynthError, PlaybackError) as e:
        error_output = {
            "error": str(e),
            "code": e.code,
            "type": type(e).__name__,
        }
        if e.details:
            error_output["details"] = e.details
        print(json.dumps(error_output, default=str), file=sys.stderr)
        return 2

    except (ValueError, TypeError, KeyError) as e:
        print(json.dumps({
            "error": str(e),
            "code": "INVALID_INPUT",
            "type": type(e).__name__,
        }), file=sys.stderr)
        return 3


if __name__ == "__main__":
    sys.exit(main())
