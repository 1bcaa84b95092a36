# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Value types shared by the scaler, the cache and the engines.

- ScalingPolicy: how a source is fitted into the target rectangle
- FilterKind: resampling hint handed through to the rendering engine
- TargetRectangle: requested output size (real-valued for ratio math)
- Placement: scale factor and source offset computed for one render
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ScalingPolicy(Enum):
    """
    Strategy for fitting a source image into a target rectangle.

    - FILL: scale to cover the target, cropping the overflowing axis
    - FIT: scale to be fully contained, padding the short axis
    - NONE: no scaling, source centered and clipped or padded
    """
    FILL = "fill"
    FIT = "fit"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> ScalingPolicy:
        """Parse a policy name such as ``'fill'`` (case-insensitive).

        Raises:
            ValueError: If value is not a known policy.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid scaling policy: {value}. "
                             f"Valid policies: {', '.join(p.value for p in cls)}")


class FilterKind(Enum):
    """Interpolation quality hint. Only the engine interprets these."""
    FAST = "fast"
    GOOD = "good"
    BEST = "best"
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    GAUSSIAN = "gaussian"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> FilterKind:
        """Parse a filter name such as ``'bilinear'`` (case-insensitive).

        Raises:
            ValueError: If value is not a known filter.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid filter: {value}. "
                             f"Valid filters: {', '.join(f.value for f in cls)}")


@dataclass(frozen=True)
class TargetRectangle:
    """Requested output dimensions.

    Width and height stay floats for the ratio math; the pixel buffer is
    allocated at the truncated integer size.
    """
    width: float
    height: float

    @property
    def pixel_width(self) -> int:
        return int(self.width)

    @property
    def pixel_height(self) -> int:
        return int(self.height)

    def is_valid(self) -> bool:
        """True when both dimensions are finite and at least one pixel."""
        return (math.isfinite(self.width) and math.isfinite(self.height)
                and self.pixel_width >= 1 and self.pixel_height >= 1)

    def __str__(self) -> str:
        return f"{self.width:g}x{self.height:g}"


@dataclass(frozen=True)
class Placement:
    """Where and how large the source lands on the target surface.

    ``scale`` is None when no scale transform is applied (NONE policy).
    ``x`` and ``y`` are in pre-scale coordinates, i.e. the values handed
    to the engine after the context has been scaled.
    """
    scale: float | None
    x: float
    y: float
