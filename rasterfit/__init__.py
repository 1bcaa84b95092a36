# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
RasterFit - fit raster images into a viewport and cache the result.

    from rasterfit import ResourceLoader, TargetRectangle, ScalingPolicy

    loader = ResourceLoader()
    image = loader.load("photo.jpg", TargetRectangle(800, 600), ScalingPolicy.FIT)
"""

__version__ = "0.3.0"

from .core.error import (
    CompositeFailed,
    ContextCreationFailed,
    DecodeFailed,
    ImageError,
    InvalidGeometry,
    PixelExtractionFailed,
    SourceBindingFailed,
    SurfaceCreationFailed,
)
from .core.types import FilterKind, Placement, ScalingPolicy, TargetRectangle
from .devices.engine import RenderingEngine
from .devices.cairo_engine import CairoEngine
from .core.scaling import compute_placement, render
from .core.image import Image, load_image
from .core.resource_loader import ResourceLoader

__all__ = [
    "CairoEngine",
    "CompositeFailed",
    "ContextCreationFailed",
    "DecodeFailed",
    "FilterKind",
    "Image",
    "ImageError",
    "InvalidGeometry",
    "PixelExtractionFailed",
    "Placement",
    "RenderingEngine",
    "ResourceLoader",
    "ScalingPolicy",
    "SourceBindingFailed",
    "SurfaceCreationFailed",
    "TargetRectangle",
    "compute_placement",
    "load_image",
    "render",
]
