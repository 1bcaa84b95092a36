# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Rendered image value and the decode + scale step that produces it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import scaling
from .types import FilterKind, ScalingPolicy, TargetRectangle

if TYPE_CHECKING:
    from ..devices.engine import RenderingEngine

BYTES_PER_PIXEL = 4


@dataclass(frozen=True)
class Image:
    """A source image rendered into its target rectangle.

    ``data`` is premultiplied ARGB32, row-major, ``stride`` bytes per row
    with no padding. The rendering parameters are kept so a cache can tell
    when a later request asks for something else.
    """
    path: str
    width: int
    height: int
    data: bytes = field(repr=False)
    target: TargetRectangle
    policy: ScalingPolicy
    filter: FilterKind

    @property
    def stride(self) -> int:
        return self.width * BYTES_PER_PIXEL

    @property
    def nbytes(self) -> int:
        return len(self.data)

    def rendered_with(self, target: TargetRectangle, policy: ScalingPolicy,
                      filter: FilterKind) -> bool:
        """True if this image was rendered with exactly these parameters."""
        return (self.target == target and self.policy is policy
                and self.filter is filter)


def load_image(path: str, target: TargetRectangle, policy: ScalingPolicy,
               filter: FilterKind, engine: RenderingEngine) -> Image:
    """
    Decode *path* and render it into *target*.

    Raises:
        DecodeFailed: If the engine cannot load the file.
        ImageError: Any scaler failure, unchanged.
    """
    source = engine.load_surface(path)
    data = scaling.render(engine, source, target, policy, filter)
    return Image(
        path=path,
        width=target.pixel_width,
        height=target.pixel_height,
        data=data,
        target=target,
        policy=policy,
        filter=filter,
    )
