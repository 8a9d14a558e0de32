"""
SkyDrift Command Line Interface

Usage:
    skydrift-analyze [--config CONFIG_FILE] [--output REPORT] [--format json|txt|html]
                     [--map MAP_FILE] [--sample-size N] [--no-enrich]
"""

import argparse
import sys

from .config import Config
from .analysis import TrajectoryAnalyzer
from .visualization import TrajectoryMapGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SkyDrift - Analyze the last 24 hours of balloon trajectories"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Report output path (default: output.report_path from config)",
    )
    parser.add_argument(
        "--format",
        choices=["json", "txt", "html"],
        default=None,
        help="Report format (default: output.report_format from config)",
    )
    parser.add_argument(
        "--map",
        type=str,
        default=None,
        help="Also write an interactive HTML map of all trajectories",
    )
    parser.add_argument(
        "--sample-size",
        type=int,
        default=None,
        help="Number of balloons sampled for the temperature trend",
    )
    parser.add_argument(
        "--no-enrich",
        action="store_true",
        help="Skip the surface temperature lookup",
    )
    return parser


def main(argv=None):
    """Main entry point for trajectory analysis."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = Config(args.config)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if args.sample_size is not None:
        config.set("enrichment.sample_size", args.sample_size)
    if args.no_enrich:
        config.set("enrichment.enabled", False)

    output_path = args.output or config.report_path
    map_path = args.map or config.map_path

    try:
        analyzer = TrajectoryAnalyzer(config)
        results = analyzer.analyze_all(output_path=output_path, report_format=args.format)

        if map_path:
            generator = TrajectoryMapGenerator()
            generator.add_trajectories(results["trajectories"])
            generator.save(map_path)
    except KeyboardInterrupt:
        print("\n👋 Analysis stopped by user")
    except Exception as e:
        print(f"❌ Fatal error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
