# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

"""
Cairo Rendering Engine

RenderingEngine backed by pycairo. Target surfaces are FORMAT_ARGB32
(premultiplied, native byte order: BGRA in memory on little-endian).

Decoding:
- PNG files are read by Cairo itself (ImageSurface.create_from_png)
- Everything else is opened with Pillow, premultiplied with numpy and
  wrapped with ImageSurface.create_for_data (no PNG round-trip)
"""

import logging
import os
import sys
from typing import TYPE_CHECKING

import cairo
import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..core.error import (
    CompositeFailed,
    ContextCreationFailed,
    DecodeFailed,
    PixelExtractionFailed,
    SourceBindingFailed,
    SurfaceCreationFailed,
)
from ..core.types import FilterKind
from .engine import RenderingEngine

if TYPE_CHECKING:
    from ..core.image import Image

logger = logging.getLogger(__name__)

FILTER_MAP = {
    FilterKind.FAST: cairo.FILTER_FAST,
    FilterKind.GOOD: cairo.FILTER_GOOD,
    FilterKind.BEST: cairo.FILTER_BEST,
    FilterKind.NEAREST: cairo.FILTER_NEAREST,
    FilterKind.BILINEAR: cairo.FILTER_BILINEAR,
    FilterKind.GAUSSIAN: cairo.FILTER_GAUSSIAN,
}

PIXEL_FORMAT = cairo.FORMAT_ARGB32

# Byte positions of (R, G, B, A) inside one ARGB32 pixel in memory
if sys.byteorder == "little":
    _CHANNEL_OFFSETS = (2, 1, 0, 3)
else:
    _CHANNEL_OFFSETS = (1, 2, 3, 0)


class CairoEngine(RenderingEngine):
    """Rendering engine using Cairo image surfaces"""

    def load_surface(self, path: str) -> cairo.ImageSurface:
        if os.path.splitext(path)[1].lower() == ".png":
            try:
                surface = cairo.ImageSurface.create_from_png(path)
            except (cairo.Error, OSError) as exc:
                raise DecodeFailed(str(exc), path=path) from exc
        else:
            surface = _decode_with_pillow(path)
        logger.debug("Decoded image { path: %s, size: %dx%d }",
                     path, surface.get_width(), surface.get_height())
        return surface

    def surface_size(self, surface: cairo.ImageSurface) -> tuple[int, int]:
        return surface.get_width(), surface.get_height()

    def create_surface(self, width: int, height: int) -> cairo.ImageSurface:
        try:
            return cairo.ImageSurface(PIXEL_FORMAT, width, height)
        except cairo.Error as exc:
            raise SurfaceCreationFailed(f"{width}x{height}: {exc}") from exc

    def create_context(self, surface: cairo.ImageSurface) -> cairo.Context:
        try:
            return cairo.Context(surface)
        except cairo.Error as exc:
            raise ContextCreationFailed(str(exc)) from exc

    def scale(self, context: cairo.Context, factor: float) -> None:
        context.scale(factor, factor)

    def set_source_surface(self, context: cairo.Context, source: cairo.ImageSurface,
                           x: float, y: float, filter: FilterKind | None = None) -> None:
        try:
            context.set_source_surface(source, x, y)
            if filter is not None:
                context.get_source().set_filter(FILTER_MAP[filter])
        except cairo.Error as exc:
            raise SourceBindingFailed(str(exc)) from exc

    def paint(self, context: cairo.Context) -> None:
        try:
            context.paint()
        except cairo.Error as exc:
            raise CompositeFailed(str(exc)) from exc

    def get_data(self, surface: cairo.ImageSurface) -> bytes:
        try:
            surface.flush()
            return bytes(surface.get_data())
        except cairo.Error as exc:
            raise PixelExtractionFailed(str(exc)) from exc

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def to_surface(self, image: Image) -> cairo.ImageSurface:
        """Wrap a rendered Image in a new Cairo surface (copies the pixels)."""
        return cairo.ImageSurface.create_for_data(
            bytearray(image.data), PIXEL_FORMAT,
            image.width, image.height, image.stride
        )

    def write_png(self, image: Image, output_file: str) -> None:
        """Write a rendered Image to *output_file* as PNG."""
        self.to_surface(image).write_to_png(output_file)


def _decode_with_pillow(path: str) -> cairo.ImageSurface:
    """Decode *path* with Pillow into a premultiplied ARGB32 Cairo surface."""
    try:
        with PILImage.open(path) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError) as exc:
        raise DecodeFailed(str(exc), path=path) from exc

    width, height = rgba.size
    samples = np.asarray(rgba, dtype=np.uint16)
    alpha = samples[..., 3]

    # Cairo expects color channels already multiplied by alpha
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    for channel in range(3):
        offset = _CHANNEL_OFFSETS[channel]
        pixels[..., offset] = (samples[..., channel] * alpha + 127) // 255
    pixels[..., _CHANNEL_OFFSETS[3]] = alpha

    # Sources beyond Cairo's surface size limit fail here
    try:
        stride = cairo.ImageSurface.format_stride_for_width(PIXEL_FORMAT, width)
        return cairo.ImageSurface.create_for_data(
            bytearray(pixels.tobytes()), PIXEL_FORMAT, width, height, stride
        )
    except (cairo.Error, ValueError) as exc:
        raise DecodeFailed(f"{width}x{height}: {exc}", path=path) from exc
