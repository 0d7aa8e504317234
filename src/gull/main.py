#!/usr/bin/env python3
"""
GULL command line.

Load a snapshot of the geomagnetic field at a given date and print its
components at some Earth location.
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .config import GullConfig, load_config
from .exceptions import GullError, error_print
from .models.magnetic_field import compute_field
from .models.snapshot import load_snapshot
from .utils.logging import setup_logging

def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="gull",
        description="Compute the geomagnetic field at an Earth location"
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Geomagnetic model data file (.COF)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Snapshot date, as YYYY-MM-DD"
    )
    parser.add_argument(
        "--latitude",
        type=float,
        help="Geodetic latitude in degrees"
    )
    parser.add_argument(
        "--longitude",
        type=float,
        help="Geodetic longitude in degrees"
    )
    parser.add_argument(
        "--altitude",
        type=float,
        help="Altitude above the WGS84 ellipsoid in metres"
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Logging level"
    )
    parser.add_argument(
        "--plot",
        action="store_true",
        help="Plot the total intensity of the field over the Earth"
    )
    return parser.parse_args(argv)

def apply_arguments(config: GullConfig, args: argparse.Namespace) -> GullConfig:
    """Override config with command line arguments if provided."""
    if args.path:
        config.model.path = args.path
    if args.date:
        config.model.date = args.date
    if args.latitude is not None:
        config.location.latitude = args.latitude
    if args.longitude is not None:
        config.location.longitude = args.longitude
    if args.altitude is not None:
        config.location.altitude = args.altitude
    if args.log_level:
        config.logging.level = args.log_level
    return config

def run(config: GullConfig, plot: bool = False):
    """Print a snapshot summary and the field at the configured location."""
    model, location = config.model, config.location
    day, month, year = model.date.day, model.date.month, model.date.year

    with load_snapshot(model.path, day, month, year) as snapshot:
        _, z_min, z_max = snapshot.info()
        print("# Snapshot")
        print(f"- date       : {day}/{month}/{year}")
        print(f"- data set   : {model.path}")
        print(f"- altitude   : [{z_min:.0f}, {z_max:.0f}] (m)")

        field = compute_field(snapshot, location.latitude, location.longitude,
                              location.altitude)
        print("# Geomagnetic field")
        print(f"- location   : [{location.latitude:.5f}, "
              f"{location.longitude:.5f}] (deg)")
        print(f"- components : [{field.east * 1E+09:.0f}, "
              f"{field.north * 1E+09:.0f}, {field.up * 1E+09:.0f}] (nT)")

        if plot:
            import matplotlib.pyplot as plt
            from .plotting import plot_intensity_map
            plot_intensity_map(snapshot, location.altitude)
            plt.show()

def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    # Parse command line arguments
    args = parse_arguments(argv)

    try:
        config = load_config(args.config) if args.config else GullConfig()
    except (OSError, ValueError) as e:
        logging.error(f"Invalid configuration: {str(e)}")
        return 1
    apply_arguments(config, args)

    logger = setup_logging(config.logging.level, config.logging.log_file)
    try:
        run(config, plot=args.plot)
    except GullError as e:
        logger.error(str(e))
        error_print(sys.stderr, e.context.code, e.function, e.file, e.line)
        return 1
    finally:
        logger.close()
    return 0

if __name__ == "__main__":
    sys.exit(main())
