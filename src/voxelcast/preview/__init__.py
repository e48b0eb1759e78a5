"""Preview module for image output.

This module handles conversion of rendered rasters into viewable images:

Components:
    export: Raw raster to PNG conversion (Pillow)

Features:
    - Bottom-up raster rows flipped into top-down images
    - Grayscale ("L") and RGB PNG output
    - Length-checked reading of raw raster files

Example:
    >>> from src.voxelcast.preview import convert_raster_file
    >>> convert_raster_file("image.bin", "image.png")
"""

from src.voxelcast.preview.export import (
    PNG_COMPRESS_LEVEL,
    convert_raster_file,
    raster_to_array,
    save_png,
)

__all__ = [
    "PNG_COMPRESS_LEVEL",
    "raster_to_array",
    "save_png",
    "convert_raster_file",
]
