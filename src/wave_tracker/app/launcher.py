#!/usr/bin/env python3
"""
Main entry point for the Wave Tracker application.

This module provides the command-line interface for running wave tracking
over a video file and writing the recognized waves to a report.
"""

import argparse
import logging
import os
import sys

from .. import __version__
from ..config import ConfigurationError, get_default_params, load_config, save_config


def setup_logging(log_level: object = logging.INFO) -> object:
    """Set up console logging for the wave tracker."""
    handlers = [logging.StreamHandler(sys.stdout)]

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger(__name__)
    logger.info("Wave Tracker starting up...")
    logger.info(f"Python version: {sys.version}")
    logger.info(f"Working directory: {os.getcwd()}")


def parse_arguments(argv=None) -> object:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Wave Tracker - track and recognize waves in video",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wave-tracker beach.mp4                          # Track with default parameters
  wave-tracker beach.mp4 --config params.json     # Override parameters
  wave-tracker beach.mp4 --output out.mp4 --report waves.csv
        """,
    )

    parser.add_argument("video", help="Input video file")

    parser.add_argument(
        "--config",
        type=str,
        help="JSON file with tracking parameters (merged over defaults)",
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Write an annotated mask video to this path",
    )

    parser.add_argument(
        "--report",
        type=str,
        help="Write recognized waves to this CSV file",
    )

    parser.add_argument(
        "--save-config",
        type=str,
        help="Write the effective parameters to this JSON file",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO",
        help="Set the logging level (default: INFO)",
    )

    parser.add_argument(
        "--version", action="version", version=f"Wave Tracker {__version__}"
    )

    return parser.parse_args(argv)


def main(argv=None) -> object:
    """
    Application entry point.

    Parses command line arguments, sets up logging, loads parameters, runs the
    tracking pipeline and writes the requested outputs.
    """
    args = parse_arguments(argv)

    log_level = getattr(logging, args.log_level.upper())
    setup_logging(log_level=log_level)

    logger = logging.getLogger(__name__)

    # Heavy imports after logging so OpenCV/pandas failures are reported.
    from ..core.pipeline import WaveTrackingPipeline
    from ..data.report import summarize_run, write_wave_report

    try:
        params = load_config(args.config) if args.config else get_default_params()
        if args.save_config:
            save_config(params, args.save_config)

        pipeline = WaveTrackingPipeline(params)
        summary = pipeline.run(args.video, output_path=args.output)

        if args.report:
            write_wave_report(summary.recognized_waves, args.report)

        print(summarize_run(summary))
        return 0

    except (ConfigurationError, FileNotFoundError, RuntimeError) as e:
        logger.error(f"{e}")
        return 1

    except Exception as e:
        logger.error(f"Unexpected error during tracking: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
