# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for RasterFit.

Handles command-line argument definition, viewport geometry parsing and
output file naming.
"""

from __future__ import annotations

import argparse
import math
import os
import re

from . import __version__
from .core.types import FilterKind, ScalingPolicy, TargetRectangle

_GEOMETRY_RE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*[xX]\s*([0-9]*\.?[0-9]+)\s*$")


def parse_geometry(spec: str) -> TargetRectangle:
    """Parse a ``WIDTHxHEIGHT`` specification into a TargetRectangle.

    Fractional sizes are accepted (``"640.5x480"``); the rendered buffer is
    truncated to whole pixels.

    Args:
        spec: Geometry string, e.g. ``"1920x1080"``

    Returns:
        TargetRectangle with the parsed width and height.

    Raises:
        ValueError: If the specification is malformed or smaller than 1x1.
    """
    m = _GEOMETRY_RE.match(spec)
    if not m:
        raise ValueError(f"Invalid geometry: '{spec}' (expected WIDTHxHEIGHT)")
    width = float(m.group(1))
    height = float(m.group(2))
    if not (math.isfinite(width) and math.isfinite(height)) or width < 1 or height < 1:
        raise ValueError(f"Geometry must be at least 1x1: '{spec}'")
    return TargetRectangle(width, height)


def _geometry_type(spec: str) -> TargetRectangle:
    try:
        return parse_geometry(spec)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc))


def get_output_name(inputfile: str, target: TargetRectangle) -> str:
    """
    Derive the PNG output file name for one input.

    Args:
        inputfile: Input image path
        target: Viewport the image was rendered into

    Returns:
        ``<base>-<W>x<H>.png`` where base is the input name without extension
    """
    base = os.path.splitext(os.path.basename(inputfile))[0] or "image"
    return f"{base}-{target.pixel_width}x{target.pixel_height}.png"


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the RasterFit argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="rasterfit",
        description="RasterFit - fit images into a viewport",
        epilog="Repeated input paths are rendered once and served from the cache.",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"RasterFit {__version__}"
    )
    parser.add_argument("inputfiles", nargs="+", help="Image files to render")
    parser.add_argument(
        "-g", "--geometry", type=_geometry_type, required=True,
        help="Target viewport as WIDTHxHEIGHT (e.g., 1920x1080)"
    )
    parser.add_argument(
        "-s", "--scaling",
        type=ScalingPolicy.from_string,
        choices=list(ScalingPolicy),
        default=ScalingPolicy.FILL,
        help="Scaling policy (fill, fit, none; default: fill)"
    )
    parser.add_argument(
        "-f", "--filter",
        type=FilterKind.from_string,
        choices=list(FilterKind),
        default=FilterKind.GOOD,
        help="Resampling filter (fast, good, best, nearest, bilinear, gaussian; default: good)"
    )
    parser.add_argument(
        "--output-dir", dest="output_dir", default="rf_output",
        help="Specify output directory (default: rf_output)"
    )
    parser.add_argument(
        "--cache-stats", action="store_true",
        help="Print image cache statistics after rendering"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    return parser
