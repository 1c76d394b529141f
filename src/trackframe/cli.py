#!/usr/bin/env python3
"""
Track framing tool.
This script loads a track (a GPX file or a JSON track record as returned by
the track API), resolves its path, fits a map viewport around it, and
generates an interactive HTML map of the result.

Requirements:
    pip install gpxpy folium shapely

"""

from typing import List, Optional
import webbrowser
import argparse
import json
import logging
import sys
import os
from gpxpy import gpx

from . import __version__
from . import visualization
from .config import TrackframeConfig
from .file_utils import generate_output_filename
from .frame import TrackFrame, frame_track
from .metrics import collect_metrics, log_metrics
from .models import Track

# Configure logging
logger = logging.getLogger("trackframe")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    defaults = TrackframeConfig()
    parser = argparse.ArgumentParser(
        description="Track path and map viewport tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="GPX file or JSON track record to process",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output HTML map file (default: auto-generated based on input filename)",
    )
    parser.add_argument(
        "--padding",
        type=float,
        default=defaults.padding_factor,
        help=f"Fractional padding added around the path (default: {defaults.padding_factor})",
    )
    parser.add_argument(
        "--min-span",
        type=float,
        default=defaults.min_span,
        help=f"Minimum viewport span in degrees (default: {defaults.min_span})",
    )
    parser.add_argument(
        "--max-span",
        type=float,
        default=defaults.max_span,
        help=f"Maximum viewport span in degrees (default: {defaults.max_span})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--no-map",
        action="store_true",
        help="Only print the path and viewport; don't write an HTML map",
    )
    parser.add_argument(
        "--no-open",
        action="store_true",
        help="Don't automatically open the HTML file in browser",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"trackframe {__version__}",
    )
    return parser


def determine_output_filename(input_filename: str, output_arg: Optional[str]) -> str:
    """
    Determine the output filename to use.

    Args:
        input_filename: Path to the input track file
        output_arg: Value from --output argument (None if not specified)

    Returns:
        Output filename to use

    Raises:
        RuntimeError: If auto-generation fails
        ValueError: If constructed filename would be illegal
    """
    if output_arg is not None:
        return output_arg

    try:
        return generate_output_filename(input_filename)
    except (RuntimeError, ValueError) as e:
        logger.error(f"Failed to generate output filename: {e}")
        raise


def open_file_in_browser(filename: str) -> None:
    """
    Open the specified file in the default browser.

    Args:
        filename: Path to the file to open
    """
    abs_path = os.path.abspath(filename)
    try:
        webbrowser.open(f"file://{abs_path}")
        logger.debug(f"Opening {abs_path} in your default browser...")
    except webbrowser.Error as e:
        logger.warning(f"Could not automatically open browser: {e}")
        logger.warning(f"Please manually open {abs_path}")


def setup_logging(args: argparse.Namespace) -> None:
    """Setup logging configuration."""
    level = getattr(logging, args.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def print_frame_summary(frame: TrackFrame) -> None:
    """
    Print the resolved path and viewport of a track.

    Args:
        frame: TrackFrame to describe
    """
    print(f"Path: {len(frame.path)} points (source: {frame.source})")

    for label, point in (("Start", frame.start), ("End", frame.end)):
        if point is not None:
            print(f"{label}: {point.latitude:.6f}, {point.longitude:.6f}")

    viewport = frame.viewport
    if viewport is None:
        print(f"No location available: {frame.placeholder or 'unknown'}")
        return

    print(
        f"Viewport: center {viewport.center.latitude:.6f}, {viewport.center.longitude:.6f}; "
        f"span {viewport.latitude_span:.4f} x {viewport.longitude_span:.4f} deg"
    )


def load_track(filename: str) -> Track:
    """
    Load a track file, logging and exiting on failure.

    Args:
        filename: Path to a GPX file or JSON track record

    Returns:
        Track object
    """
    try:
        return Track.from_file(filename)
    except FileNotFoundError:
        logger.error(f"Track file not found: {filename}")
    except PermissionError:
        logger.error(f"Cannot read track file (permission denied): {filename}")
    except gpx.GPXException as e:
        logger.error(f"Invalid GPX file: {e}")
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON track record: {e}")
    except ValueError as e:
        logger.error(f"Invalid track record: {e}")
    sys.exit(1)


def main(argv: Optional[List[str]] = None):
    """
    Parses command-line arguments, loads the track, frames it,
    and generates an interactive map.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.filename:
        parser.print_help()
        sys.exit(1)

    setup_logging(args)

    try:
        config = TrackframeConfig.from_args(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    track = load_track(args.filename)

    frame = frame_track(track, config)
    logger.info(f"Resolved {len(frame.path)} path points from {frame.source}")

    print_frame_summary(frame)

    metrics = collect_metrics(track, frame)

    if not args.no_map:
        try:
            output_filename = determine_output_filename(args.filename, args.output)
            logger.debug(f"Output filename: {output_filename}")
        except (RuntimeError, ValueError):
            sys.exit(1)

        try:
            visualization.create_track_map(
                frame, output_filename, route_points=track.route_points()
            )
        except OSError as e:
            logger.error(f"Failed to create map: {e}")
            sys.exit(1)

        if not args.no_open:
            open_file_in_browser(output_filename)

    log_metrics(metrics, config)


if __name__ == "__main__":
    main()
