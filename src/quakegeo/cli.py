#!/usr/bin/env python3
"""
Command-line front end for quakegeo.

Points are given as ``lon,lat,depth`` tuples. Use ``--`` before tuples with
a negative longitude so they are not mistaken for options.
"""

from typing import List, Optional
import argparse
import logging
import sys

from . import __version__
from . import geometry
from .config import QuakeGeoConfig
from .errors import QuakeGeoError
from .point import Point, parse_point
from .sequence import PointSequence

# Configure logging
logger = logging.getLogger("quakegeo")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Spherical-earth geometry for lon,lat,depth points",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--min-depth",
        type=float,
        default=None,
        help="Reject points shallower than this depth in km",
    )
    parser.add_argument(
        "--max-depth",
        type=float,
        default=None,
        help="Reject points deeper than this depth in km",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=5,
        help="Decimal places for distances and angles (default: 5)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    distance = subparsers.add_parser(
        "distance", help="Distances and azimuth between two points"
    )
    distance.add_argument("start", help="Start point as lon,lat,depth")
    distance.add_argument("end", help="End point as lon,lat,depth")

    resample = subparsers.add_parser(
        "resample", help="Resample a trace to even spacing"
    )
    resample.add_argument("spacing", type=float, help="Maximum spacing in km")
    resample.add_argument("points", nargs="+", help="Trace points as lon,lat,depth")

    partition = subparsers.add_parser(
        "partition", help="Split a trace into parts of similar length"
    )
    partition.add_argument("length", type=float, help="Target part length in km")
    partition.add_argument("points", nargs="+", help="Trace points as lon,lat,depth")

    return parser


def config_from_args(args: argparse.Namespace) -> QuakeGeoConfig:
    """Build a QuakeGeoConfig from parsed arguments."""
    depth_range = None
    if args.min_depth is not None or args.max_depth is not None:
        depth_range = (
            args.min_depth if args.min_depth is not None else float("-inf"),
            args.max_depth if args.max_depth is not None else float("inf"),
        )
    return QuakeGeoConfig(
        log_level=args.log_level,
        depth_range=depth_range,
        precision=args.precision,
    )


def setup_logging(config: QuakeGeoConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def _parse_trace(tokens: List[str], config: QuakeGeoConfig) -> PointSequence:
    return PointSequence(parse_point(t, config.depth_range) for t in tokens)


def run_distance(start: Point, end: Point, config: QuakeGeoConfig) -> None:
    """Print the distances and azimuth between two points."""
    p = config.precision
    print(f"horizontal: {geometry.horz_distance(start, end):.{p}f} km")
    print(f"horizontal_fast: {geometry.horz_distance_fast(start, end):.{p}f} km")
    print(f"vertical: {geometry.vert_distance(start, end):.{p}f} km")
    print(f"linear: {geometry.linear_distance(start, end):.{p}f} km")
    print(f"azimuth: {geometry.azimuth(start, end):.{p}f} deg")


def run_resample(trace: PointSequence, spacing: float) -> None:
    """Print a resampled trace, one point per line."""
    resampled = trace.resample(spacing)
    logger.info(f"Resampled {len(trace)} points to {len(resampled)}")
    print(resampled)


def run_partition(trace: PointSequence, length: float) -> None:
    """Print each partition of a trace, separated by blank lines."""
    partitions = trace.partition(length)
    logger.info(f"Split trace of {trace.length():.3f} km into {len(partitions)} parts")
    print("\n\n".join(str(part) for part in partitions))


def main(argv: Optional[List[str]] = None) -> None:
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    config = config_from_args(args)

    # Setup logging
    setup_logging(config)

    try:
        if args.command == "distance":
            start = parse_point(args.start, config.depth_range)
            end = parse_point(args.end, config.depth_range)
            run_distance(start, end, config)
        elif args.command == "resample":
            run_resample(_parse_trace(args.points, config), args.spacing)
        elif args.command == "partition":
            run_partition(_parse_trace(args.points, config), args.length)
    except QuakeGeoError as e:
        logger.error(f"{e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
