"""Tests for the PNG export module.

This module tests conversion of raw rasters into top-down images including:
- Row flipping from render order to image order
- PNG output for grayscale and RGB rasters
- File-to-file conversion
"""

import numpy as np
import pytest
from PIL import Image as PILImage


def _raster(width, height, mode, values):
    from src.voxelcast.core.raster import RasterImage

    return RasterImage(width=width, height=height, mode=mode, samples=np.array(values, dtype=np.uint8))


class TestRasterToArray:
    """Test conversion to top-down arrays."""

    def test_grayscale_rows_are_flipped(self):
        """Test the bottom render row becomes the last image row."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.preview.export import raster_to_array

        arr = raster_to_array(_raster(2, 2, PixelMode.GRAYSCALE, [10, 20, 30, 40]))

        assert arr.shape == (2, 2)
        assert arr.tolist() == [[30, 40], [10, 20]]

    def test_rgb_shape_and_order(self):
        """Test RGB rasters keep their channels."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.preview.export import raster_to_array

        values = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15, 16, 17, 18]
        arr = raster_to_array(_raster(3, 2, PixelMode.RGB, values))

        assert arr.shape == (2, 3, 3)
        assert arr.dtype == np.uint8
        assert arr[0, 0].tolist() == [10, 11, 12]
        assert arr[1, 2].tolist() == [7, 8, 9]


class TestSavePng:
    """Test PNG output."""

    def test_save_grayscale(self, tmp_path):
        """Test a grayscale raster is written as an 8-bit L image."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.preview.export import save_png

        path = tmp_path / "gray.png"
        save_png(_raster(2, 2, PixelMode.GRAYSCALE, [10, 20, 30, 40]), path)

        with PILImage.open(path) as img:
            assert img.format == "PNG"
            assert img.mode == "L"
            assert img.size == (2, 2)
            assert img.getpixel((0, 0)) == 30
            assert img.getpixel((1, 1)) == 20

    def test_save_rgb(self, tmp_path):
        """Test an RGB raster is written as an RGB image."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.preview.export import save_png

        path = tmp_path / "rgb.png"
        save_png(_raster(1, 2, PixelMode.RGB, [255, 0, 0, 0, 0, 255]), path)

        with PILImage.open(path) as img:
            assert img.mode == "RGB"
            assert img.size == (1, 2)
            assert img.getpixel((0, 0)) == (0, 0, 255)
            assert img.getpixel((0, 1)) == (255, 0, 0)

    def test_save_empty_image_raises(self, tmp_path):
        """Test an image with no pixels cannot be saved."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.preview.export import save_png

        with pytest.raises(ValueError):
            save_png(_raster(0, 0, PixelMode.GRAYSCALE, []), tmp_path / "empty.png")


class TestConvertRasterFile:
    """Test file-to-file conversion."""

    def test_convert_writes_png(self, tmp_path):
        """Test a raw raster file becomes an equivalent PNG."""
        from src.voxelcast.core.raster import PixelMode, write_raster
        from src.voxelcast.preview.export import convert_raster_file, raster_to_array

        source = _raster(4, 3, PixelMode.RGB, np.arange(36) * 7)
        bin_path = tmp_path / "image.bin"
        png_path = tmp_path / "image.png"
        write_raster(source, bin_path)

        image = convert_raster_file(bin_path, png_path)

        assert image.mode == PixelMode.RGB
        with PILImage.open(png_path) as img:
            assert np.array_equal(np.asarray(img), raster_to_array(source))

    def test_convert_rejects_corrupt_input(self, tmp_path):
        """Test a malformed raster leaves no PNG behind."""
        from src.voxelcast.core.raster import RasterError
        from src.voxelcast.preview.export import convert_raster_file

        bin_path = tmp_path / "bad.bin"
        png_path = tmp_path / "bad.png"
        bin_path.write_bytes(b"\x04\x00\x04\x00" + bytes(7))

        with pytest.raises(RasterError):
            convert_raster_file(bin_path, png_path)
        assert not png_path.exists()
