# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Scaler

Composites a decoded source surface into a target rectangle according to a
ScalingPolicy and returns the raw ARGB32 bytes of the target.

Two steps:
1. compute_placement() - pure geometry: scale factor and source offset
2. render() - drives the engine: allocate, transform, bind, paint, read back

Fit and Fill share one algorithm and differ only in how the two axis ratios
are combined (min for Fit, max for Fill). Offsets are computed in pre-scale
coordinates because the engine context is scaled before the source is bound.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from .error import InvalidGeometry
from .types import FilterKind, Placement, ScalingPolicy, TargetRectangle

if TYPE_CHECKING:
    from ..devices.engine import RenderingEngine

_RATIO_COMBINE: dict[ScalingPolicy, Callable[[float, float], float]] = {
    ScalingPolicy.FIT: min,
    ScalingPolicy.FILL: max,
}


def _crop_offset(source_len: int, target_len: float, scale: float) -> float:
    """Offset (pre-scale units) that centers the scaled source on one axis.

    Positive when the scaled source overflows the target, negative when it
    falls short (letterboxing). Clamped to [-target_len, target_len].
    """
    scaled_extent = int(source_len * scale)
    overflow = scaled_extent - int(target_len)
    # Halve toward zero, matching integer division on the pixel grid
    crop = int(overflow / 2) / scale
    return max(-target_len, min(target_len, crop))


def compute_placement(source_width: int, source_height: int,
                      target: TargetRectangle, policy: ScalingPolicy) -> Placement:
    """
    Compute how the source is positioned inside the target.

    Args:
        source_width: Source width in pixels
        source_height: Source height in pixels
        target: Requested output rectangle
        policy: Scaling policy

    Returns:
        Placement with the scale factor (None for NONE) and the offset at
        which the source is bound.

    Raises:
        InvalidGeometry: If either rectangle is empty, negative or not finite.
    """
    if not target.is_valid():
        raise InvalidGeometry(f"target {target} must be at least 1x1")
    if source_width <= 0 or source_height <= 0:
        raise InvalidGeometry(f"source {source_width}x{source_height} is empty")

    if policy is ScalingPolicy.NONE:
        pad_width = (target.width - source_width) / 2.0
        pad_height = (target.height - source_height) / 2.0
        return Placement(scale=None, x=pad_width, y=pad_height)

    height_ratio = target.height / source_height
    width_ratio = target.width / source_width
    scale = _RATIO_COMBINE[policy](height_ratio, width_ratio)

    crop_height = _crop_offset(source_height, target.height, scale)
    crop_width = _crop_offset(source_width, target.width, scale)
    return Placement(scale=scale, x=-crop_width, y=-crop_height)


def render(engine: RenderingEngine, source: Any, target: TargetRectangle,
           policy: ScalingPolicy, filter: FilterKind) -> bytes:
    """
    Render *source* into a new target-sized surface and return its bytes.

    The filter hint only applies to Fit and Fill; NONE never resamples.
    Engine failures propagate unchanged as ImageError subclasses.

    Returns:
        ``pixel_width * pixel_height * 4`` bytes of premultiplied ARGB32.
    """
    source_width, source_height = engine.surface_size(source)
    placement = compute_placement(source_width, source_height, target, policy)

    surface = engine.create_surface(target.pixel_width, target.pixel_height)
    ctx = engine.create_context(surface)
    if placement.scale is None:
        engine.set_source_surface(ctx, source, placement.x, placement.y)
    else:
        engine.scale(ctx, placement.scale)
        engine.set_source_surface(ctx, source, placement.x, placement.y, filter)
    engine.paint(ctx)

    return engine.get_data(surface)
