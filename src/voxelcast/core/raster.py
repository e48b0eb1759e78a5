"""Raw raster serialization for rendered images.

The raster format is the hand-off between the renderer and the PNG
converter. It has no magic number, version or compression:

    bytes 0-1   image width,  uint16 little-endian
    bytes 2-3   image height, uint16 little-endian
    bytes 4-    width * height samples, row-major, row 0 = bottom row

Each sample is 3 bytes (RGB) or 1 byte (grayscale); the mode is not stored in
the file, so a reader either knows it or infers it from the total length. A
file whose length is not exactly 4 + width * height * bytes_per_sample is
rejected.

Example:
    >>> from src.voxelcast.core.raster import read_raster, write_raster
    >>> write_raster(image, "image.bin")
    >>> same = read_raster("image.bin")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import IntEnum

import numpy as np
import numpy.typing as npt

# Header: width and height as little-endian uint16
HEADER_DTYPE = np.dtype("<u2")
HEADER_SIZE = 2 * HEADER_DTYPE.itemsize

# Largest dimension the header can describe
MAX_DIMENSION = int(np.iinfo(HEADER_DTYPE).max)


class PixelMode(IntEnum):
    """Sample encoding for a whole image.

    RGB samples carry the normal-shaded color of the closest hit; GRAYSCALE
    samples carry the hit distance mapped to a single byte.
    """

    RGB = 0
    GRAYSCALE = 1


class RasterError(ValueError):
    """Raised when raw raster data is malformed or inconsistent."""


def bytes_per_sample(mode: PixelMode) -> int:
    """Return the number of bytes one sample occupies in the given mode."""
    return 1 if PixelMode(mode) == PixelMode.GRAYSCALE else 3


def expected_size(width: int, height: int, mode: PixelMode) -> int:
    """Return the exact file size of a raster with the given shape."""
    return HEADER_SIZE + width * height * bytes_per_sample(mode)


@dataclass
class RasterImage:
    """A rendered image in render order.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Sample encoding for every pixel.
        samples: uint8 array of shape (width * height, bytes_per_sample(mode)).
            Row 0 of the image (samples[0:width]) is the bottom row.
    """

    width: int
    height: int
    mode: PixelMode
    samples: npt.NDArray[np.uint8]

    def __post_init__(self) -> None:
        self.mode = PixelMode(self.mode)
        if not (0 <= self.width <= MAX_DIMENSION and 0 <= self.height <= MAX_DIMENSION):
            raise RasterError(
                f"Image dimensions ({self.width}x{self.height}) do not fit the "
                f"raster header (max {MAX_DIMENSION})"
            )
        expected = (self.width * self.height, bytes_per_sample(self.mode))
        samples = np.asarray(self.samples, dtype=np.uint8)
        if samples.size != expected[0] * expected[1]:
            raise RasterError(
                f"Expected {expected[0] * expected[1]} sample bytes for a "
                f"{self.width}x{self.height} {self.mode.name} image, got {samples.size}"
            )
        self.samples = samples.reshape(expected)

    @property
    def bytes_per_sample(self) -> int:
        """Get the number of bytes per sample."""
        return bytes_per_sample(self.mode)


def encode_raster(image: RasterImage) -> bytes:
    """Pack an image into the raw raster format.

    Args:
        image: The image to encode.

    Returns:
        Header followed by the samples in render order.
    """
    header = np.array([image.width, image.height], dtype=HEADER_DTYPE)
    return header.tobytes() + np.ascontiguousarray(image.samples).tobytes()


def _infer_mode(width: int, height: int, size: int) -> PixelMode:
    for mode in (PixelMode.GRAYSCALE, PixelMode.RGB):
        if expected_size(width, height, mode) == size:
            return mode
    raise RasterError(
        f"Input dimensions mismatch ({width}x{height}, {size} bytes); "
        "not an image or corrupt?"
    )


def decode_raster(data: bytes, mode: PixelMode | None = None) -> RasterImage:
    """Parse raw raster data.

    Args:
        data: The complete file contents.
        mode: The expected sample encoding, or None to infer it from the
            payload length (grayscale wins for an empty image).

    Returns:
        The decoded image.

    Raises:
        RasterError: If the data is shorter than the header or its length does
            not match the header dimensions.
    """
    if len(data) < HEADER_SIZE:
        raise RasterError(f"Raster is {len(data)} bytes, shorter than its {HEADER_SIZE}-byte header")

    width, height = (int(d) for d in np.frombuffer(data, dtype=HEADER_DTYPE, count=2))

    if mode is None:
        mode = _infer_mode(width, height, len(data))
    elif expected_size(width, height, mode) != len(data):
        raise RasterError(
            f"Input dimensions mismatch: {width}x{height} {PixelMode(mode).name} "
            f"needs {expected_size(width, height, mode)} bytes, got {len(data)}"
        )

    samples = np.frombuffer(data, dtype=np.uint8)[HEADER_SIZE:].copy()
    return RasterImage(width=width, height=height, mode=mode, samples=samples)


def write_raster(image: RasterImage, filepath: str | os.PathLike[str]) -> None:
    """Write an image to a raw raster file.

    Args:
        image: The image to write.
        filepath: Output file path.

    Raises:
        OSError: If the file cannot be opened or fewer bytes than expected
            were written.
    """
    payload = encode_raster(image)
    with open(filepath, "wb") as f:
        written = f.write(payload)
    if written != len(payload):
        raise OSError(f"Short write to '{filepath}': {written} of {len(payload)} bytes")


def read_raster(
    filepath: str | os.PathLike[str],
    mode: PixelMode | None = None,
) -> RasterImage:
    """Read and validate a raw raster file.

    Args:
        filepath: Input file path.
        mode: The expected sample encoding, or None to infer it.

    Returns:
        The decoded image.

    Raises:
        OSError: If the file cannot be read.
        RasterError: If the contents are not a valid raster.
    """
    if not os.path.isfile(filepath):
        raise OSError(f"Not a regular file: '{filepath}'")
    with open(filepath, "rb") as f:
        data = f.read()
    return decode_raster(data, mode)
