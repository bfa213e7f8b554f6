#!/usr/bin/env python3
"""
cli.py
~~~~~~
Command-line entry point: ``genericplotter [OPTIONS] <FILE> <FILE>``.

Reads the first FILE as whitespace-separated numeric columns, plots column
``-x`` against column ``-y`` and writes the scatterplot to the second FILE
(PNG). Defaults come from the built-in settings, then the YAML file given by
``--config`` (or ``$GENERICPLOTTER_CONFIG``), then the flags themselves.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import (
    CONFIG_ENV_VAR,
    DEFAULT_MARKER_SIZE,
    DEFAULT_XSIZE,
    DEFAULT_YSIZE,
    load_config,
    resolve_settings,
)
from .errors import PlotterError, UsageError
from .logging_config import setup_logging, verbosity_to_level
from .plot import draw_plot

logger = logging.getLogger(__name__)

PROG = "genericplotter"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Plot two columns of a whitespace-separated data file as a PNG scatterplot.",
        epilog=f"Settings file may also be given through ${CONFIG_ENV_VAR}.",
    )
    ap.add_argument("source", metavar="FILE", help="Whitespace-separated file with values to plot")
    ap.add_argument("target", metavar="FILE", help="Plot output image file name (.png)")

    ap.add_argument("-x", "--x", dest="x", type=int, required=True, metavar="COLUMN",
                    help="Select column for X axis (0-based)")
    ap.add_argument("--xdesc", metavar="COLNAME", help="Axis description for X axis")
    ap.add_argument("--xsize", type=int, metavar="PIXELS",
                    help=f"Size in pixels (X axis, default: {DEFAULT_XSIZE})")
    ap.add_argument("-y", "--y", dest="y", type=int, required=True, metavar="COLUMN",
                    help="Select column for Y axis (0-based)")
    ap.add_argument("--ydesc", metavar="COLNAME", help="Axis description for Y axis")
    ap.add_argument("--ysize", type=int, metavar="PIXELS",
                    help=f"Size in pixels (Y axis, default: {DEFAULT_YSIZE})")

    ap.add_argument("--title", metavar="TITLE", help="Plot title")
    ap.add_argument("--skip-rows", type=int, metavar="N",
                    help="Ignore the first N lines of the input file (default: 0)")
    ap.add_argument("--marker-size", type=float, metavar="PIXELS",
                    help=f"Marker diameter in pixels (default: {DEFAULT_MARKER_SIZE:g})")
    ap.add_argument("--config", metavar="PATH", help="YAML file with default settings")
    ap.add_argument("--log-file", metavar="PATH",
                    help="Also write log messages to PATH (at the -v level)")
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="Log progress to stderr (repeat for debug output)")
    ap.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        setup_logging(verbosity_to_level(args.verbose), log_file=args.log_file)
    except OSError as exc:
        parser.error(f"cannot open log file '{args.log_file}': {exc.strerror or exc}")

    try:
        settings = resolve_settings(
            args.source,
            args.target,
            args.x,
            args.y,
            xdesc=args.xdesc,
            ydesc=args.ydesc,
            xsize=args.xsize,
            ysize=args.ysize,
            title=args.title,
            skip_rows=args.skip_rows,
            marker_size=args.marker_size,
            cfg=load_config(args.config),
        )
    except UsageError as exc:
        parser.error(str(exc))

    try:
        out = draw_plot(settings)
    except PlotterError as exc:
        print(f"{PROG}: error: {exc}", file=sys.stderr)
        return exc.exit_code

    logger.info("Plot saved to %s", out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
