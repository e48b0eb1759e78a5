#!/usr/bin/env python3
"""Render the default two-voxel scene.

This script renders the default scene with one ray per pixel and writes the
result as a raw raster (see src/voxelcast/core/raster.py), optionally
converting it to PNG as well.

Usage:
    python -m examples.render_voxels [options]

Options:
    --width WIDTH       Image width in pixels (default: 256)
    --height HEIGHT     Image height in pixels (default: 256)
    --mode MODE         Sample encoding: rgb or grayscale (default: rgb)
    --output OUTPUT     Raw raster output path (default: image.bin)
    --png PNG           Also write a PNG to this path
    --quiet             Suppress progress output

Example:
    python -m examples.render_voxels --width 512 --height 512 --png image.png
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import taichi as ti  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the default voxel scene to a raw raster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=256,
        help="Image width in pixels (default: 256)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=256,
        help="Image height in pixels (default: 256)",
    )
    parser.add_argument(
        "--mode",
        choices=("rgb", "grayscale"),
        default="rgb",
        help="Sample encoding (default: rgb)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.bin",
        help="Raw raster output path (default: image.bin)",
    )
    parser.add_argument(
        "--png",
        type=str,
        default=None,
        help="Also write a PNG to this path",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_voxels(
    width: int = 256,
    height: int = 256,
    mode: str = "rgb",
    output_path: str = "image.bin",
    png_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render the default scene and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: "rgb" or "grayscale".
        output_path: Raw raster output path.
        png_path: Optional PNG output path.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved raw raster.
    """
    # Lazy imports to allow Taichi initialization first
    from src.voxelcast.core.raster import PixelMode, write_raster
    from src.voxelcast.core.renderer import render_scene
    from src.voxelcast.preview.export import save_png
    from src.voxelcast.scene.default_scene import create_default_scene

    voxels, camera = create_default_scene()
    pixel_mode = PixelMode.GRAYSCALE if mode == "grayscale" else PixelMode.RGB

    if not quiet:
        print(f"Rendering {len(voxels)} voxels at {width}x{height} ({pixel_mode.name})...")

    start_time = time.time()
    image = render_scene(voxels, camera, width, height, pixel_mode)

    output_file = Path(output_path)
    write_raster(image, output_file)
    if not quiet:
        print(f"Saved raster to: {output_file.absolute()}")

    if png_path is not None:
        save_png(image, png_path)
        if not quiet:
            print(f"Saved PNG to: {Path(png_path).absolute()}")

    total_time = time.time() - start_time
    if not quiet:
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Initialize Taichi
    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        if not args.quiet:
            print("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        if not args.quiet:
            print("Using CPU backend")

    try:
        render_voxels(
            width=args.width,
            height=args.height,
            mode=args.mode,
            output_path=args.output,
            png_path=args.png,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
