"""Orbit-style view transform and camera basis for ray generation.

The camera is described by three rotation angles and an eye position in a
normalized frame. The frame is fitted to the scene automatically: the unit
cube is mapped onto the scene's bounding box by a uniform "zoom and pan"
transform, so the same angles frame any scene.

The forward chain is pan * zoom * rot * eye. Its inverse is assembled
directly as

    mv_inv = eye * transpose(rot) * zoom_n_pan

using that the rotation is orthonormal (transpose == inverse) and that the
eye and zoom-and-pan matrices are built in their already-inverted form.

The rows of mv_inv give the camera basis consumed per pixel:
    right:   row 0
    up:      row 1, scaled by height / width for the aspect ratio
    forward: row 2, negated (the camera looks down its local -z)
    eye:     row 3

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.voxelcast.camera.view import ViewCamera, setup_camera
    >>> from src.voxelcast.geometry.voxel import VoxelInfo, compute_scene_bbox
    >>> bbox = compute_scene_bbox([VoxelInfo((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))])
    >>> setup_camera(ViewCamera(), bbox, 256, 256)
"""

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.voxelcast.core.matrix import (
    Matrix4,
    matmul,
    matx4_rotate,
    matx4_scale_translate,
    matx4_translate,
    transpose,
)
from src.voxelcast.core.ray import vec3
from src.voxelcast.geometry.voxel import VoxelInfo, is_empty_bbox

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class ViewCamera:
    """Configuration for the scene-fitted view.

    Attributes:
        roll: Rotation about the z axis, in radians.
        azimuth: Rotation about the y axis, in radians.
        declination: Rotation about the x axis, in radians.
        eye: Camera position in the normalized (unit cube) frame.
    """

    roll: float = math.pi * 0.5 * 0.25
    azimuth: float = math.pi * 0.5 * 0.5
    declination: float = 0.0
    eye: tuple[float, float, float] = (0.0, 0.0, 2.125)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

# Basis vectors: right, up, forward, eye
_camera_basis = ti.Vector.field(3, dtype=ti.f32, shape=4)

# Flag to track if the camera has been set up
_camera_initialized = ti.field(dtype=ti.i32, shape=())


# =============================================================================
# View Transform (Python-side, computed once per render)
# =============================================================================


def compute_rotation(camera: ViewCamera) -> Matrix4:
    """Compose the camera rotation as R(roll, z) * R(azimuth, y) * R(declination, x)."""
    roll = matx4_rotate(math.sin(camera.roll), math.cos(camera.roll), 0.0, 0.0, 1.0)
    azim = matx4_rotate(math.sin(camera.azimuth), math.cos(camera.azimuth), 0.0, 1.0, 0.0)
    decl = matx4_rotate(math.sin(camera.declination), math.cos(camera.declination), 1.0, 0.0, 0.0)
    return matmul(matmul(roll, azim), decl)


def compute_zoom_and_pan(bbox: VoxelInfo) -> Matrix4:
    """Build the transform mapping the unit cube onto a bounding box.

    The scale is the largest half-extent of the box (so the fit is uniform)
    and the translation is the box centre.

    Raises:
        ValueError: If the bounding box is empty.
    """
    if is_empty_bbox(bbox):
        raise ValueError("Cannot frame an empty scene bounding box")

    bbox_min = np.asarray(bbox.minimum, dtype=np.float32)
    bbox_max = np.asarray(bbox.maximum, dtype=np.float32)
    centre = (bbox_max + bbox_min) * np.float32(0.5)
    extent = (bbox_max - bbox_min) * np.float32(0.5)
    max_extent = float(np.max(extent))

    return matx4_scale_translate(max_extent, centre)


def compute_view_transform(camera: ViewCamera, bbox: VoxelInfo) -> Matrix4:
    """Compute the inverse view transform (camera to world).

    Args:
        camera: Rotation angles and eye position.
        bbox: The scene bounding box used for framing.

    Returns:
        mv_inv = eye * transpose(rot) * zoom_n_pan.

    Raises:
        ValueError: If the bounding box is empty.
    """
    zoom_n_pan = compute_zoom_and_pan(bbox)
    eye = matx4_translate(camera.eye)
    rot = compute_rotation(camera)
    return matmul(matmul(eye, transpose(rot)), zoom_n_pan)


def compute_camera_basis(
    camera: ViewCamera,
    bbox: VoxelInfo,
    width: int,
    height: int,
) -> npt.NDArray[np.float32]:
    """Compute the four basis vectors used to generate per-pixel rays.

    Args:
        camera: Rotation angles and eye position.
        bbox: The scene bounding box used for framing.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A (4, 3) float32 array: right, aspect-scaled up, negated forward, eye.

    Raises:
        ValueError: If the bounding box is empty or the width is not positive.
    """
    if width <= 0:
        raise ValueError(f"Image width must be positive, got {width}")

    mv_inv = compute_view_transform(camera, bbox)
    aspect = np.float32(height) / np.float32(width)

    return np.stack(
        [
            mv_inv[0, :3],
            mv_inv[1, :3] * aspect,
            mv_inv[2, :3] * np.float32(-1.0),
            mv_inv[3, :3],
        ]
    ).astype(np.float32)


def setup_camera(camera: ViewCamera, bbox: VoxelInfo, width: int, height: int) -> None:
    """Initialize camera state for rendering.

    Computes the camera basis on the host and uploads it to Taichi fields.
    This must be called before rendering.

    Args:
        camera: Rotation angles and eye position.
        bbox: The scene bounding box used for framing.
        width: Image width in pixels.
        height: Image height in pixels.

    Raises:
        ValueError: If the bounding box is empty or the width is not positive.
    """
    basis = compute_camera_basis(camera, bbox, width, height)
    for i in range(4):
        _camera_basis[i] = basis[i].tolist()
    _camera_initialized[None] = 1


def reset_camera() -> None:
    """Mark the camera as not set up."""
    _camera_initialized[None] = 0


def is_camera_ready() -> bool:
    """Check if setup_camera() has been called since the last reset."""
    return bool(_camera_initialized[None])


# =============================================================================
# Ray Generation Support (Taichi-compatible)
# =============================================================================


@ti.func
def get_camera_basis():
    """Get the camera basis vectors.

    Returns:
        A tuple (right, up, forward, eye) of vec3.
    """
    return _camera_basis[0], _camera_basis[1], _camera_basis[2], _camera_basis[3]


@ti.func
def get_ray_direction(col: ti.i32, row: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the (unnormalized) direction of the ray through a pixel.

    Pixel (0, 0) is the bottom-left corner of the image.

    Args:
        col: Pixel column (0 = left).
        row: Pixel row (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        right * ndc_x + up * ndc_y + forward, with ndc in [-1, 1).
    """
    right, up, forward, _ = get_camera_basis()
    ndc_x = ti.cast(col * 2 - width, ti.f32) * (1.0 / ti.cast(width, ti.f32))
    ndc_y = ti.cast(row * 2 - height, ti.f32) * (1.0 / ti.cast(height, ti.f32))
    return right * ndc_x + up * ndc_y + forward


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info() -> dict[str, tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with the right, up, forward and eye vectors.
    """
    names = ("right", "up", "forward", "eye")
    info = {}
    for i, name in enumerate(names):
        v = _camera_basis[i]
        info[name] = (float(v[0]), float(v[1]), float(v[2]))
    return info
