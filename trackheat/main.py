#!/usr/bin/env python3
"""
trackheat CLI

Renders every GPS activity in a directory onto one PNG, centred on a named
place.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from trackheat.common.config import load_activity_colors
from trackheat.config.loader import ConfigurationError, RenderConfig, build_render_config, load_render_config
from trackheat.core.pipeline import run_pipeline
from trackheat.export import save_png
from trackheat.geocode import lookup_center
from trackheat.utils.constants import LOG_DATE_FORMAT, LOG_FORMAT
from trackheat.utils.env import verbose_default
from trackheat.utils.run_logging import RunLogHandler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trackheat",
        description="Render GPS activity tracks as a heatmap-style PNG",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Every .gpx and .fit.gz file, white strokes
  trackheat -i export/activities/ -o heatmap.png -c "Oslo, Norway"

  # Strava export: colour by activity type from activities.csv
  trackheat -i export/ -o heatmap.png -c "Oslo, Norway" --manifest

  # Wider window, larger image, parse on 4 threads
  trackheat -i export/ -o big.png -c "Oslo" --width 2000 --height 1000 --scale 2 --workers 4
        """
    )

    parser.add_argument("--config", type=Path, help="YAML run file; CLI flags override its values")
    parser.add_argument("-i", "--in-dir", dest="activities_dir", help="Directory where the activity files are")
    parser.add_argument("-o", "--out-file", dest="out_file", help="Output PNG filename")
    parser.add_argument("-c", "--center", help="Location to center the map around")
    parser.add_argument("--width", type=int, help="Width of output image (default: 1000)")
    parser.add_argument("--height", type=int, help="Height of output image (default: 500)")
    parser.add_argument("--scale", type=float, help="Zoom-out multiplier for the visible window (default: 1.0)")
    parser.add_argument("--manifest", dest="use_manifest", action="store_true", default=None,
                        help="Read activities.csv and colour tracks by activity type")
    parser.add_argument("--colors", dest="colors_file", help="Alternative activity colour YAML file")
    parser.add_argument("--workers", type=int, help="Threads used to parse track files (default: 1)")
    parser.add_argument("--log-file", type=Path, help="Also write the run log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", default=None,
                        help="Enable verbose output")
    return parser


def config_from_args(args: argparse.Namespace) -> RenderConfig:
    overrides: Dict[str, Any] = {
        key: getattr(args, key)
        for key in (
            "activities_dir", "out_file", "center", "width", "height",
            "scale", "use_manifest", "colors_file", "workers", "verbose",
        )
    }
    if args.config:
        return load_render_config(args.config, **overrides)
    return build_render_config({k: v for k, v in overrides.items() if v is not None})


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = config_from_args(args)
    except ConfigurationError as e:
        _configure_logging(bool(args.verbose) or verbose_default())
        logger.error(f"❌ {e}")
        return 1
    _configure_logging(config.verbose or verbose_default())

    try:
        colors = load_activity_colors(config.colors_file)
        if args.log_file:
            with RunLogHandler(args.log_file, label=str(config.out_file)):
                result = run_pipeline(config, colors, lookup_center)
                save_png(result.canvas, config.out_file)
        else:
            result = run_pipeline(config, colors, lookup_center)
            save_png(result.canvas, config.out_file)
    except ConfigurationError as e:
        logger.error(f"❌ {e}")
        return 1

    return 0


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


if __name__ == "__main__":
    sys.exit(main())
