#!/usr/bin/env python3
"""Convert a raw raster written by render_voxels into a PNG.

The raster carries no mode field, so the sample encoding is inferred from the
file length unless --mode is given. Rows are flipped so the PNG is top-down.

Usage:
    python -m examples.bin2png [options]

Options:
    --input INPUT       Raw raster path (default: image.bin)
    --output OUTPUT     PNG output path (default: image.png)
    --mode MODE         Expected encoding: rgb or grayscale (default: infer)

Example:
    python -m examples.bin2png --input image.bin --output image.png
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project root is in the Python path for direct execution
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from src.voxelcast.core.raster import PixelMode  # noqa: E402
from src.voxelcast.preview.export import convert_raster_file  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert a raw raster into a PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input",
        type=str,
        default="image.bin",
        help="Raw raster path (default: image.bin)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.png",
        help="PNG output path (default: image.png)",
    )
    parser.add_argument(
        "--mode",
        choices=("rgb", "grayscale"),
        default=None,
        help="Expected sample encoding (default: infer from file length)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    mode = None
    if args.mode is not None:
        mode = PixelMode.GRAYSCALE if args.mode == "grayscale" else PixelMode.RGB

    try:
        image = convert_raster_file(args.input, args.output, mode=mode)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {image.width}x{image.height} {image.mode.name} PNG to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
