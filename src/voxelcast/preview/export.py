"""PNG export for raw rasters.

This module converts rendered rasters into conventional top-down images and
saves them as PNG files. The raw raster stores the bottom row first, so rows
are flipped on the way out.

Supported formats:
    - PNG (8-bit grayscale or RGB via Pillow)

Example:
    >>> from src.voxelcast.preview.export import convert_raster_file
    >>> convert_raster_file("image.bin", "image.png")
"""

from __future__ import annotations

import os

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.voxelcast.core.raster import PixelMode, RasterImage, read_raster

# zlib level used for PNG output
PNG_COMPRESS_LEVEL = 9


def raster_to_array(image: RasterImage) -> npt.NDArray[np.uint8]:
    """Convert a raster into a top-down image array.

    Args:
        image: The raster in render order (bottom row first).

    Returns:
        uint8 array of shape (H, W) for grayscale or (H, W, 3) for RGB, with
        row 0 at the top.
    """
    if image.mode == PixelMode.GRAYSCALE:
        rows = image.samples.reshape(image.height, image.width)
    else:
        rows = image.samples.reshape(image.height, image.width, 3)

    return np.ascontiguousarray(np.flipud(rows))


def save_png(
    image: RasterImage,
    filepath: str | os.PathLike[str],
    *,
    compress_level: int = PNG_COMPRESS_LEVEL,
) -> None:
    """Save a raster as a PNG file.

    Args:
        image: The raster to save.
        filepath: Output file path (should end in .png).
        compress_level: zlib compression level, 0-9.

    Raises:
        ValueError: If the image is empty.
        OSError: If the file cannot be written.
    """
    if image.width == 0 or image.height == 0:
        raise ValueError(f"Cannot save an empty {image.width}x{image.height} image")

    pil_image = PILImage.fromarray(raster_to_array(image))
    pil_image.save(filepath, format="PNG", compress_level=compress_level)


def convert_raster_file(
    input_path: str | os.PathLike[str],
    output_path: str | os.PathLike[str],
    *,
    mode: PixelMode | None = None,
) -> RasterImage:
    """Convert a raw raster file into a PNG file.

    Args:
        input_path: The raw raster to read.
        output_path: The PNG to write.
        mode: The expected sample encoding, or None to infer it from the
            file length.

    Returns:
        The decoded raster.

    Raises:
        OSError: If either file cannot be accessed.
        RasterError: If the input is not a valid raster.
    """
    image = read_raster(input_path, mode)
    save_png(image, output_path)
    return image
