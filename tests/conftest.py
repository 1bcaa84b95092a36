"""Shared fixtures: a call-recording fake engine and Cairo test helpers."""
from __future__ import annotations

import sys
from collections import Counter
from dataclasses import dataclass

import cairo
import pytest

from rasterfit.core.error import (
    CompositeFailed,
    ContextCreationFailed,
    DecodeFailed,
    PixelExtractionFailed,
    SourceBindingFailed,
    SurfaceCreationFailed,
)
from rasterfit.devices.engine import RenderingEngine


FAILURE_KINDS = {
    "create_surface": SurfaceCreationFailed,
    "create_context": ContextCreationFailed,
    "set_source_surface": SourceBindingFailed,
    "paint": CompositeFailed,
    "get_data": PixelExtractionFailed,
}


@dataclass
class FakeSurface:
    width: int
    height: int


class FakeEngine(RenderingEngine):
    """Engine stand-in that records every primitive call.

    ``sources`` maps path -> (width, height); unknown paths fail to decode.
    Setting ``fail`` to a primitive name makes that primitive raise its
    error kind.
    """

    def __init__(self, sources: dict[str, tuple[int, int]] | None = None,
                 fail: str | None = None) -> None:
        self.sources = dict(sources or {})
        self.fail = fail
        self.calls: list[tuple] = []
        self.decodes: Counter = Counter()

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if self.fail == name:
            raise FAILURE_KINDS[name]("simulated failure")

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def load_surface(self, path):
        self.decodes[path] += 1
        if path not in self.sources:
            raise DecodeFailed("no such file", path=path)
        return FakeSurface(*self.sources[path])

    def surface_size(self, surface):
        return surface.width, surface.height

    def create_surface(self, width, height):
        self._record("create_surface", width, height)
        return FakeSurface(width, height)

    def create_context(self, surface):
        self._record("create_context", surface)
        return {"surface": surface}

    def scale(self, context, factor):
        self.calls.append(("scale", factor))

    def set_source_surface(self, context, source, x, y, filter=None):
        self._record("set_source_surface", x, y, filter)

    def paint(self, context):
        self._record("paint")

    def get_data(self, surface):
        self._record("get_data")
        return bytes(surface.width * surface.height * 4)


@pytest.fixture
def fake_engine():
    return FakeEngine()


# ----------------------------------------------------------------------
# Cairo helpers
# ----------------------------------------------------------------------

# Byte positions of (R, G, B, A) in a native-endian ARGB32 pixel
CHANNELS = (2, 1, 0, 3) if sys.byteorder == "little" else (1, 2, 3, 0)


def pixel(data: bytes, width: int, x: int, y: int) -> tuple[int, int, int, int]:
    """Return the premultiplied (r, g, b, a) of pixel (x, y)."""
    base = (y * width + x) * 4
    return tuple(data[base + offset] for offset in CHANNELS)


def solid_surface(width: int, height: int, rgb=(1.0, 0.0, 0.0)) -> cairo.ImageSurface:
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, width, height)
    ctx = cairo.Context(surface)
    ctx.set_source_rgb(*rgb)
    ctx.paint()
    surface.flush()
    return surface


@pytest.fixture
def png_file(tmp_path):
    """Factory writing an opaque solid-color PNG and returning its path."""
    def _create(width: int, height: int, name: str = "source.png", rgb=(1.0, 0.0, 0.0)) -> str:
        path = tmp_path / name
        solid_surface(width, height, rgb).write_to_png(str(path))
        return str(path)
    return _create
