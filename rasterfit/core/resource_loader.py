# RasterFit - Viewport Image Scaling and Caching
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Resource Loader

Path-keyed cache of rendered images. Each distinct path is decoded and
rendered at most once for the lifetime of the loader:

- Keys are the path string exactly as given (case-sensitive, no
  normalization)
- Entries are never updated, evicted or invalidated
- A failed load leaves no entry behind, so the next request retries
- A hit returns the cached Image object itself; the scaling arguments of
  the hit are ignored

The loader holds no lock. Callers sharing one across threads must
serialize load() themselves, or use one loader per worker.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ..devices.cairo_engine import CairoEngine
from ..devices.engine import RenderingEngine
from .image import Image, load_image
from .types import FilterKind, ScalingPolicy, TargetRectangle

logger = logging.getLogger(__name__)


class ResourceLoader:
    """Cache mapping image paths to their rendered Image."""

    def __init__(self, engine: RenderingEngine | None = None) -> None:
        self.engine = engine if engine is not None else CairoEngine()
        self._loaded: dict[str, Image] = {}
        self._hits = 0
        self._misses = 0

    def load(self, path: str, target: TargetRectangle,
             scaling: ScalingPolicy = ScalingPolicy.FILL,
             filter: FilterKind = FilterKind.GOOD) -> Image:
        """Return the rendered image for *path*, rendering it on first use.

        Args:
            path: Image file path, used verbatim as the cache key.
            target: Output rectangle (only used on a miss).
            scaling: Scaling policy (only used on a miss).
            filter: Resampling hint (only used on a miss).

        Raises:
            ImageError: Decode or render failure. Nothing is cached.
        """
        image = self._loaded.get(path)
        if image is not None:
            self._hits += 1
            logger.debug("Fetching image from cache { path: %s }", path)
            if not image.rendered_with(target, scaling, filter):
                logger.warning(
                    "Cached image reused with different parameters "
                    "{ path: %s, cached: %s/%s/%s, requested: %s/%s/%s }",
                    path, image.target, image.policy, image.filter,
                    target, scaling, filter,
                )
            return image

        self._misses += 1
        image = load_image(path, target, scaling, filter, self.engine)
        self._loaded[path] = image
        logger.debug("Caching image { path: %s }", path)
        return image

    def get(self, path: str) -> Image | None:
        """Return the cached image for *path* without rendering."""
        return self._loaded.get(path)

    def paths(self) -> Iterator[str]:
        """Iterate over cached paths in insertion order."""
        return iter(list(self._loaded))

    def get_stats(self) -> dict:
        """Return cache statistics."""
        total = self._hits + self._misses
        return {
            'entries': len(self._loaded),
            'hits': self._hits,
            'misses': self._misses,
            'hit_rate': self._hits / total if total > 0 else 0.0,
            'memory_bytes': sum(image.nbytes for image in self._loaded.values()),
        }

    def __contains__(self, path: str) -> bool:
        return path in self._loaded

    def __len__(self) -> int:
        return len(self._loaded)

    def __repr__(self) -> str:
        return f"ResourceLoader(entries={len(self._loaded)}, engine={type(self.engine).__name__})"
