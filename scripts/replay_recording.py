#!/usr/bin/env python3
"""Replay a recorded pose stream through the jump analysis engine.

Reads a JSON-lines recording (one pose frame per line), runs a single
analysis session over it and prints the resulting metrics. Useful for
checking threshold and calibration changes against saved sessions.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dunksense.core.config import get_settings
from dunksense.core.exceptions import AnalysisError
from dunksense.core.logging import get_logger, setup_logging
from dunksense.core.types import JumpAnalysisResult
from dunksense.pipeline.source import JsonLinesPoseSource, analyze_source

logger = get_logger(__name__)


def print_result(result: JumpAnalysisResult) -> None:
    """Print analysis metrics to console."""
    print("\n" + "=" * 60)
    print("JUMP ANALYSIS")
    print("=" * 60)
    print(f"  Height:            {result.max_height_cm:.1f} cm ({result.max_height_feet_display})")
    print(f"  Flight time:       {result.flight_time_s:.3f} s")
    print(f"  Contact time:      {result.contact_time_s:.3f} s (placeholder)")
    print(f"  Takeoff velocity:  {result.takeoff_velocity_mps:.2f} m/s")
    print(f"  Landing force:     {result.landing_force_n:.0f} (estimate)")
    print(f"  Symmetry:          {result.symmetry_score:.2f}")
    print(f"  Technique:         {result.technique_score:.2f}")
    print(f"  Grade:             {result.grade.value} ({result.overall_score:.2f})")

    print("\nPhases:")
    for phase in result.phases:
        print(
            f"  {phase.name.value:<12} {phase.start_timestamp:8.3f} -> "
            f"{phase.end_timestamp:8.3f}  {phase.key_metrics}"
        )

    print("\nRecommendations:")
    for tip in result.recommendations:
        print(f"  - {tip}")
    print("=" * 60)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Replay a recorded pose stream")
    parser.add_argument(
        "recording",
        type=Path,
        help="Path to JSON-lines pose recording",
    )
    parser.add_argument(
        "--velocity-threshold",
        type=float,
        help="Override phase transition velocity threshold",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Output JSON for the result",
    )

    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.file)

    if not args.recording.exists():
        logger.error("Recording not found: %s", args.recording)
        return 1

    analysis_settings = settings.analysis
    if args.velocity_threshold is not None:
        analysis_settings = analysis_settings.model_copy(
            update={"velocity_threshold": args.velocity_threshold}
        )

    try:
        result = analyze_source(
            JsonLinesPoseSource(args.recording),
            analysis_settings,
            settings.recommendations,
        )
    except AnalysisError as e:
        logger.warning("Analysis failed: %s", e.message)
        return 1

    print_result(result)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w") as f:
            json.dump(result.to_dict(), f, indent=2)
        logger.info("Result saved to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
