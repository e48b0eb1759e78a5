"""Per-pixel ray casting renderer.

This module implements the render kernel: every pixel index is mapped to a
camera ray, the scene is scanned for the closest voxel hit, and the hit is
turned into a byte sample. Pixels are independent, so a single parallel
Taichi loop over [0, width * height) renders the whole image; each iteration
writes only its own slot of the sample buffer.

Shading modes:
    - RGB: the face axis of the closest hit (x, y or z) as a unit vector,
      remapped from [-1, 1] to [0, 1]
    - GRAYSCALE: the hit distance mapped linearly, dist / 4, clamped to [0, 1]

Missed pixels get the background value 0 in both modes. Samples are stored
in render order, bottom row first.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.voxelcast.core.renderer import render_scene
    >>> from src.voxelcast.scene.default_scene import create_default_scene
    >>>
    >>> voxels, camera = create_default_scene()
    >>> image = render_scene(voxels, camera, 256, 256)
"""

import math
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.voxelcast.camera.view import (
    ViewCamera,
    get_camera_basis,
    get_ray_direction,
    is_camera_ready,
    setup_camera,
)
from src.voxelcast.core.raster import PixelMode, RasterImage, bytes_per_sample
from src.voxelcast.core.ray import FLT_MAX, make_ray, vec3
from src.voxelcast.geometry.voxel import Hit, VoxelInfo, compute_scene_bbox, hit_normal
from src.voxelcast.scene.intersection import get_voxel_count, intersect_scene, load_scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Background sample value for rays that miss every voxel
BACKGROUND = 0.0

# Hit distance that maps to full white in grayscale mode
GRAYSCALE_RANGE = 4.0

# PixelMode value compared inside kernels
_GRAYSCALE_MODE = int(PixelMode.GRAYSCALE)

# =============================================================================
# Render Target (Sample Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions and shading mode (actual active configuration)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())
_pixel_mode = ti.field(dtype=ti.i32, shape=())

# Byte samples, one slot per pixel index (preallocated to max size)
_sample_buffer = ti.Vector.field(3, dtype=ti.i32, shape=MAX_IMAGE_WIDTH * MAX_IMAGE_HEIGHT)

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int, mode: PixelMode = PixelMode.RGB) -> None:
    """Initialize the render target.

    Sets the active image dimensions and shading mode and clears the sample
    buffer. The buffer is preallocated to MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).
        mode: Sample encoding for the whole image.

    Raises:
        ValueError: If dimensions are out of range.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _pixel_mode[None] = int(PixelMode(mode))
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the sample buffer to the background value."""
    _sample_buffer.fill(0)


def reset_render_target() -> None:
    """Clear the sample buffer and mark the render target as not set up."""
    clear_render_target()
    _render_target_initialized[None] = 0


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def get_pixel_mode() -> PixelMode:
    """Get the shading mode of the current render target."""
    return PixelMode(int(_pixel_mode[None]))


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_ready_to_render() -> None:
    """Check that the render target, camera and scene are all usable."""
    _check_render_target_initialized()
    if not is_camera_ready():
        raise RuntimeError("Camera not set up. Call setup_camera() first.")
    if get_voxel_count() == 0:
        raise ValueError("Cannot render an empty scene")


# =============================================================================
# Per-Pixel Core
# =============================================================================


@ti.func
def shoot_ray(global_idx: ti.i32, width: ti.i32, height: ti.i32) -> Hit:
    """Trace the camera ray of one pixel against the scene.

    Args:
        global_idx: Linear pixel index, row * width + col.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The closest Hit along the pixel's ray.
    """
    row = global_idx // width
    col = global_idx % width

    direction = get_ray_direction(col, row, width, height)
    _, _, _, eye = get_camera_basis()
    ray = make_ray(eye, direction)

    return intersect_scene(ray)


@ti.func
def shade_hit(hit: Hit, mode: ti.i32) -> vec3:
    """Convert a hit into a color in [0, 1].

    Args:
        hit: The closest hit for a pixel.
        mode: PixelMode value.

    Returns:
        The background for a miss, otherwise the face-axis color (RGB mode) or
        the distance-mapped gray level replicated into all channels.
    """
    color = vec3(BACKGROUND, BACKGROUND, BACKGROUND)

    if hit.dist < FLT_MAX:
        if mode == _GRAYSCALE_MODE:
            level = tm.clamp(hit.dist * (1.0 / GRAYSCALE_RANGE), 0.0, 1.0)
            color = vec3(level, level, level)
        else:
            color = hit_normal(hit) * 0.5 + 0.5

    return color


@ti.func
def to_bytes(color: vec3) -> tm.ivec3:
    """Convert a [0, 1] color to byte values by truncating color * 255."""
    return ti.cast(color * 255.0, ti.i32)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_all_pixels(width: ti.i32, height: ti.i32, mode: ti.i32):
    """Shade every pixel into the sample buffer.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: PixelMode value.
    """
    for i in range(width * height):
        hit = shoot_ray(i, width, height)
        _sample_buffer[i] = to_bytes(shade_hit(hit, mode))


@ti.kernel
def _trace_single_pixel(global_idx: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Trace one pixel and pack its Hit as (dist, a_mask, b_mask)."""
    hit = shoot_ray(global_idx, width, height)
    return vec3(hit.dist, ti.cast(hit.a_mask, ti.f32), ti.cast(hit.b_mask, ti.f32))


@ti.kernel
def _render_single_pixel(global_idx: ti.i32, width: ti.i32, height: ti.i32, mode: ti.i32) -> vec3:
    """Shade one pixel and return its byte values as floats."""
    hit = shoot_ray(global_idx, width, height)
    return ti.cast(to_bytes(shade_hit(hit, mode)), ti.f32)


# =============================================================================
# Public Rendering API
# =============================================================================


def _check_pixel_index(global_idx: int) -> tuple[int, int]:
    width, height = get_image_dimensions()
    if not 0 <= global_idx < width * height:
        raise ValueError(f"Pixel index {global_idx} outside image of {width * height} pixels")
    return width, height


def trace_pixel(global_idx: int) -> tuple[float, int, int]:
    """Trace a single pixel and report its closest hit.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes all pixels in parallel.

    Args:
        global_idx: Linear pixel index, row * width + col (row 0 = bottom).

    Returns:
        Tuple of (distance, a_mask, b_mask). The distance is math.inf when
        the ray misses every voxel.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
        ValueError: If the scene is empty or the index is out of range.
    """
    _check_ready_to_render()
    width, height = _check_pixel_index(global_idx)

    packed = _trace_single_pixel(global_idx, width, height)
    dist = float(packed[0])
    if dist >= FLT_MAX:
        dist = math.inf

    return dist, int(packed[1]), int(packed[2])


def render_pixel(global_idx: int) -> tuple[int, ...]:
    """Render a single pixel with the current shading mode.

    Args:
        global_idx: Linear pixel index, row * width + col (row 0 = bottom).

    Returns:
        (r, g, b) in RGB mode or (gray,) in grayscale mode.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
        ValueError: If the scene is empty or the index is out of range.
    """
    _check_ready_to_render()
    width, height = _check_pixel_index(global_idx)

    mode = get_pixel_mode()
    sample = _render_single_pixel(global_idx, width, height, int(mode))

    return tuple(int(sample[c]) for c in range(bytes_per_sample(mode)))


def render_image() -> None:
    """Render every pixel of the current render target.

    Raises:
        RuntimeError: If the render target or camera has not been set up.
        ValueError: If the scene is empty.
    """
    _check_ready_to_render()

    width, height = get_image_dimensions()
    _render_all_pixels(width, height, int(get_pixel_mode()))


def get_samples_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered samples as a NumPy array.

    Returns:
        uint8 array of shape (width * height, bytes_per_sample), in render
        order (bottom row first).

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    channels = bytes_per_sample(get_pixel_mode())

    full = _sample_buffer.to_numpy()
    return full[: width * height, :channels].astype(np.uint8)


def render_scene(
    voxels: Sequence[VoxelInfo],
    camera: ViewCamera,
    width: int,
    height: int,
    mode: PixelMode = PixelMode.RGB,
) -> RasterImage:
    """Render a scene from scratch.

    Loads the voxels, fits the camera to their bounding box, renders every
    pixel and collects the samples. Rendering the same inputs twice yields
    identical samples.

    Args:
        voxels: The scene content (at least one voxel).
        camera: Rotation angles and eye position.
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Sample encoding.

    Returns:
        The rendered image in render order.

    Raises:
        ValueError: If the scene is empty, a voxel is malformed, or the
            dimensions are out of range.
    """
    if len(voxels) == 0:
        raise ValueError("Cannot render an empty scene")

    setup_render_target(width, height, mode)
    load_scene(voxels)
    setup_camera(camera, compute_scene_bbox(voxels), width, height)
    render_image()

    return RasterImage(width=width, height=height, mode=mode, samples=get_samples_numpy())
