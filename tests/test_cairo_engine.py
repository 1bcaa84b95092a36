"""Tests for the Cairo engine: decoding, primitives and failure mapping."""
import pytest
from PIL import Image as PILImage

from conftest import pixel
from rasterfit.core.error import DecodeFailed, SurfaceCreationFailed
from rasterfit.core.image import Image
from rasterfit.core.types import FilterKind, ScalingPolicy, TargetRectangle
from rasterfit.devices.cairo_engine import FILTER_MAP, CairoEngine


@pytest.fixture
def engine():
    return CairoEngine()


class TestDecode:

    def test_png_decoded_by_cairo(self, engine, png_file):
        surface = engine.load_surface(png_file(30, 12))
        assert engine.surface_size(surface) == (30, 12)

    def test_pillow_decode_is_premultiplied(self, engine, tmp_path):
        path = tmp_path / "half.tiff"
        PILImage.new("RGBA", (10, 5), (255, 0, 0, 128)).save(path)

        surface = engine.load_surface(str(path))

        assert engine.surface_size(surface) == (10, 5)
        data = engine.get_data(surface)
        assert pixel(data, 10, 3, 2) == (128, 0, 0, 128)

    def test_pillow_decode_opaque_rgb(self, engine, tmp_path):
        path = tmp_path / "opaque.bmp"
        PILImage.new("RGB", (4, 4), (10, 20, 30)).save(path)

        data = engine.get_data(engine.load_surface(str(path)))

        assert len(data) == 4 * 4 * 4
        assert pixel(data, 4, 0, 0) == (10, 20, 30, 255)

    @pytest.mark.parametrize("name", ["missing.png", "missing.jpg"])
    def test_missing_file(self, engine, tmp_path, name):
        path = str(tmp_path / name)
        with pytest.raises(DecodeFailed) as excinfo:
            engine.load_surface(path)
        assert excinfo.value.path == path

    def test_source_beyond_cairo_size_limit(self, engine, tmp_path):
        path = tmp_path / "panorama.bmp"
        PILImage.new("RGB", (40000, 1), (0, 0, 255)).save(path)
        with pytest.raises(DecodeFailed) as excinfo:
            engine.load_surface(str(path))
        assert excinfo.value.path == str(path)

    def test_decompression_bomb(self, engine, tmp_path, monkeypatch):
        path = tmp_path / "bomb.bmp"
        PILImage.new("RGB", (100, 100)).save(path)
        monkeypatch.setattr(PILImage, "MAX_IMAGE_PIXELS", 10)
        with pytest.raises(DecodeFailed):
            engine.load_surface(str(path))

    @pytest.mark.parametrize("name", ["garbage.png", "garbage.jpg"])
    def test_undecodable_file(self, engine, tmp_path, name):
        path = tmp_path / name
        path.write_bytes(b"definitely not an image")
        with pytest.raises(DecodeFailed):
            engine.load_surface(str(path))


class TestPrimitives:

    def test_new_surface_is_transparent(self, engine):
        surface = engine.create_surface(8, 4)
        assert engine.get_data(surface) == bytes(8 * 4 * 4)

    def test_oversized_surface_fails(self, engine):
        with pytest.raises(SurfaceCreationFailed):
            engine.create_surface(100000, 10)

    def test_filter_map_covers_every_kind(self):
        assert set(FILTER_MAP) == set(FilterKind)

    def test_write_png(self, engine, tmp_path):
        image = Image(
            path="x", width=6, height=3, data=bytes(6 * 3 * 4),
            target=TargetRectangle(6, 3), policy=ScalingPolicy.FIT, filter=FilterKind.GOOD,
        )
        output = tmp_path / "out.png"
        engine.write_png(image, str(output))
        written = engine.load_surface(str(output))
        assert engine.surface_size(written) == (6, 3)
