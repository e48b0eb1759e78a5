"""Core rendering module.

This module contains the fundamental building blocks of the ray caster:

Components:
    ray: Ray data structure and reciprocal-direction vector helpers
    matrix: Host-side 4x4 matrix algebra for the view transform
    raster: Raw raster format (header + samples) and its codec
    renderer: Per-pixel ray casting kernel and render target

The renderer maps every pixel index to a camera ray, scans the scene for the
closest voxel hit and writes a shaded sample into a flat buffer. The per-pixel
work runs in a single parallel Taichi kernel.
"""

from .matrix import (
    identity,
    matmul,
    matx4,
    matx4_rotate,
    matx4_scale_translate,
    matx4_translate,
    transform_point,
    transpose,
)
from .raster import (
    PixelMode,
    RasterError,
    RasterImage,
    bytes_per_sample,
    decode_raster,
    encode_raster,
    read_raster,
    write_raster,
)
from .ray import FLT_MAX, RCP_LIMIT, Ray, clamp_vec, make_ray, rcp, vec3

# Note: renderer is NOT imported here to avoid circular imports.
# Import directly from src.voxelcast.core.renderer when needed.

__all__ = [
    "FLT_MAX",
    "RCP_LIMIT",
    "Ray",
    "vec3",
    "rcp",
    "clamp_vec",
    "make_ray",
    "matx4",
    "identity",
    "matx4_translate",
    "matx4_scale_translate",
    "matx4_rotate",
    "transpose",
    "matmul",
    "transform_point",
    "PixelMode",
    "RasterError",
    "RasterImage",
    "bytes_per_sample",
    "encode_raster",
    "decode_raster",
    "write_raster",
    "read_raster",
]
