# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Rendering Engine Interface

The scaler only talks to the 2D rendering engine through this interface.
Each primitive is fallible and reports its own ImageError subclass, so a
failure can always be traced back to the engine call that caused it.

Surfaces and contexts are opaque to the caller: whatever an engine returns
from create_surface() / create_context() / load_surface() is handed back to
it unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..core.types import FilterKind


class RenderingEngine(ABC):
    """Abstract base class for rendering engine backends"""

    @abstractmethod
    def load_surface(self, path: str) -> Any:
        """Decode the image at *path* into a source surface.

        Raises:
            DecodeFailed
        """

    @abstractmethod
    def surface_size(self, surface: Any) -> tuple[int, int]:
        """Return ``(width, height)`` of a surface in pixels"""

    @abstractmethod
    def create_surface(self, width: int, height: int) -> Any:
        """Allocate a transparent premultiplied ARGB32 surface.

        Raises:
            SurfaceCreationFailed
        """

    @abstractmethod
    def create_context(self, surface: Any) -> Any:
        """Bind a drawing context to *surface*.

        Raises:
            ContextCreationFailed
        """

    @abstractmethod
    def scale(self, context: Any, factor: float) -> None:
        """Apply a uniform scale transform to *context*"""

    @abstractmethod
    def set_source_surface(self, context: Any, source: Any, x: float, y: float,
                           filter: FilterKind | None = None) -> None:
        """Use *source* as the paint source, offset by ``(x, y)`` in user space.

        A filter of None leaves the engine's default resampling untouched.

        Raises:
            SourceBindingFailed
        """

    @abstractmethod
    def paint(self, context: Any) -> None:
        """Composite the current source over the whole surface.

        Raises:
            CompositeFailed
        """

    @abstractmethod
    def get_data(self, surface: Any) -> bytes:
        """Return a copy of the surface's raw pixel bytes.

        Raises:
            PixelExtractionFailed
        """
