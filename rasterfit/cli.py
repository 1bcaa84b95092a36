#!/usr/bin/env python3
# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
RasterFit - command line entry point

Renders each input image into the requested viewport and writes the result
as a PNG into the output directory. All inputs share one ResourceLoader, so
an input listed twice is decoded and scaled only once.

Usage:
    rasterfit -g 1920x1080 photo.jpg
    rasterfit -g 800x600 -s fit -f best --output-dir out a.png b.jpg
    rasterfit -g 256x256 --cache-stats a.png a.png
"""

from __future__ import annotations

import logging
import os
import sys

import cairo

from .cli_args import build_argument_parser, get_output_name
from .core.error import ImageError
from .core.resource_loader import ResourceLoader
from .devices.cairo_engine import CairoEngine

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Configure root logging; DEBUG when verbose, INFO otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("PIL").setLevel(logging.WARNING)


def _print_cache_stats(loader: ResourceLoader) -> None:
    stats = loader.get_stats()
    print("Image cache statistics:")
    print(f"  entries:  {stats['entries']}")
    print(f"  hits:     {stats['hits']}")
    print(f"  misses:   {stats['misses']}")
    print(f"  hit rate: {stats['hit_rate'] * 100:.1f}%")
    print(f"  memory:   {stats['memory_bytes'] / (1024 * 1024):.2f} MB")


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for RasterFit.

    Returns:
        Exit code: 0 if every input rendered, 1 if any failed
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    os.makedirs(args.output_dir, exist_ok=True)

    engine = CairoEngine()
    loader = ResourceLoader(engine)
    failures = 0
    # output file -> input path that produced it
    written: dict[str, str] = {}

    for inputfile in args.inputfiles:
        try:
            image = loader.load(inputfile, args.geometry, args.scaling, args.filter)
        except ImageError as exc:
            logger.error("%s", exc)
            failures += 1
            continue

        output_file = os.path.join(args.output_dir, get_output_name(inputfile, args.geometry))
        previous = written.get(output_file)
        if previous is not None and previous != inputfile:
            logger.warning("Overwriting %s (written from %s) with output of %s",
                           output_file, previous, inputfile)
        try:
            engine.write_png(image, output_file)
        except (cairo.Error, OSError) as exc:
            logger.error("Could not write %s: %s", output_file, exc)
            failures += 1
            continue
        written[output_file] = inputfile
        logger.info("Wrote %s (%s, %s, %s)", output_file, args.geometry, args.scaling, args.filter)

    if args.cache_stats:
        _print_cache_stats(loader)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
