"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from the default scene through the
raw raster file to the final PNG. Tests run at low resolution so they stay
fast while still exercising every stage.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import numpy as np
from PIL import Image as PILImage


class TestDefaultSceneIntegration:
    """Integration tests for rendering the default scene."""

    def test_render_write_convert(self, tmp_path) -> None:
        """Test render -> raw raster -> PNG for the default scene."""
        from src.voxelcast.core.raster import PixelMode, read_raster, write_raster
        from src.voxelcast.core.renderer import render_scene
        from src.voxelcast.preview.export import convert_raster_file
        from src.voxelcast.scene.default_scene import create_default_scene

        voxels, camera = create_default_scene()
        image = render_scene(voxels, camera, 64, 64)

        bin_path = tmp_path / "image.bin"
        png_path = tmp_path / "image.png"
        write_raster(image, bin_path)
        assert bin_path.stat().st_size == 4 + 64 * 64 * 3

        converted = convert_raster_file(bin_path, png_path)
        assert converted.mode == PixelMode.RGB
        assert np.array_equal(converted.samples, read_raster(bin_path).samples)

        with PILImage.open(png_path) as img:
            assert img.size == (64, 64)
            assert img.mode == "RGB"
            pixels = np.asarray(img)

        # The first rendered pixel is the bottom-left of the PNG
        assert pixels[63, 0].tolist() == image.samples[0].tolist() == [0, 0, 0]
        assert pixels.any()

    def test_rgb_samples_are_face_colors(self) -> None:
        """Test every lit RGB sample is one of the three face colors."""
        from src.voxelcast.core.renderer import render_scene
        from src.voxelcast.scene.default_scene import create_default_scene

        voxels, camera = create_default_scene()
        image = render_scene(voxels, camera, 64, 64)

        lit = image.samples[image.samples.any(axis=1)]
        colors = {tuple(int(c) for c in sample) for sample in lit}
        assert colors <= {(255, 127, 127), (127, 255, 127), (127, 127, 255)}
        assert len(colors) >= 2

    def test_grayscale_matches_rgb_coverage(self) -> None:
        """Test both modes agree on which pixels hit a voxel."""
        from src.voxelcast.core.raster import PixelMode
        from src.voxelcast.core.renderer import render_scene
        from src.voxelcast.scene.default_scene import create_default_scene

        voxels, camera = create_default_scene()
        rgb = render_scene(voxels, camera, 64, 64, PixelMode.RGB)
        gray = render_scene(voxels, camera, 64, 64, PixelMode.GRAYSCALE)

        assert np.array_equal(rgb.samples.any(axis=1), gray.samples[:, 0] > 0)


class TestExampleScripts:
    """Tests for the command-line example scripts."""

    def test_render_voxels_writes_outputs(self, tmp_path) -> None:
        """Test the render script function writes the raster and PNG."""
        from examples.render_voxels import render_voxels

        bin_path = tmp_path / "out.bin"
        png_path = tmp_path / "out.png"
        result = render_voxels(
            width=32,
            height=32,
            mode="grayscale",
            output_path=str(bin_path),
            png_path=str(png_path),
            quiet=True,
        )

        assert result == bin_path
        assert bin_path.stat().st_size == 4 + 32 * 32
        with PILImage.open(png_path) as img:
            assert img.mode == "L"

    def test_bin2png_main(self, tmp_path, capsys) -> None:
        """Test the converter entry point on a rendered raster."""
        from examples.bin2png import main
        from src.voxelcast.core.raster import write_raster
        from src.voxelcast.core.renderer import render_scene
        from src.voxelcast.scene.default_scene import create_default_scene

        voxels, camera = create_default_scene()
        bin_path = tmp_path / "image.bin"
        png_path = tmp_path / "image.png"
        write_raster(render_scene(voxels, camera, 16, 16), bin_path)

        assert main(["--input", str(bin_path), "--output", str(png_path)]) == 0
        assert png_path.exists()
        assert "16x16 RGB" in capsys.readouterr().out

    def test_bin2png_reports_errors(self, tmp_path, capsys) -> None:
        """Test the converter returns 1 and prints an error for a bad file."""
        from examples.bin2png import main

        bad = tmp_path / "bad.bin"
        bad.write_bytes(b"\x01")

        assert main(["--input", str(bad), "--output", str(tmp_path / "bad.png")]) == 1
        assert capsys.readouterr().err.startswith("Error:")
