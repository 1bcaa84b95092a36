# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Image error taxonomy.

Every failure of the rendering engine is reported as its own ImageError
subclass, tied to the engine call that failed. None of them are retried;
callers should treat any of them as "this path is currently unusable".
"""

from __future__ import annotations


class ImageError(Exception):
    """Base class for all image loading and rendering failures."""

    kind = "image error"

    def __init__(self, message: str = "", path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message, path)

    def __str__(self) -> str:
        text = self.kind
        if self.message:
            text = f"{text}: {self.message}"
        if self.path is not None:
            text = f"{text} (path: {self.path})"
        return text


class SurfaceCreationFailed(ImageError):
    """The target surface could not be allocated."""
    kind = "could not create surface"


class ContextCreationFailed(ImageError):
    """A drawing context could not be bound to the target surface."""
    kind = "could not create context"


class SourceBindingFailed(ImageError):
    """The decoded source could not be set as the paint source."""
    kind = "could not set source"


class CompositeFailed(ImageError):
    """The paint operation did not complete."""
    kind = "could not write result"


class PixelExtractionFailed(ImageError):
    """Pixel bytes could not be read back from the rendered surface."""
    kind = "could not get data"


class DecodeFailed(ImageError):
    """The source path could not be loaded into a surface."""
    kind = "could not decode image"


class InvalidGeometry(ImageError):
    """Target or source dimensions are empty, negative or not finite."""
    kind = "invalid geometry"
