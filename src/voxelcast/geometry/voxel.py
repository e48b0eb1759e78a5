"""Voxel primitive with slab-method ray intersection.

A voxel is an axis-aligned bounding box; it is the only renderable
primitive. This module provides the Taichi-side Voxel and Hit dataclasses,
the slab intersection test, and the host-side VoxelInfo description used to
build scenes and compute their bounds.

The slab method treats the box as the intersection of three pairs of parallel
planes. For each axis the ray enters the slab at min(t0, t1) and leaves it at
max(t0, t1); the ray is inside the box between the latest entry and the
earliest exit. Using the reciprocal direction turns the plane distances into
two multiplications per axis.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.voxelcast.geometry.voxel import Voxel, intersect_voxel
    >>> from src.voxelcast.core.ray import make_ray, vec3
    >>> @ti.kernel
    ... def probe() -> ti.f32:
    ...     box = Voxel(minimum=vec3(-1.0, -1.0, -1.0), maximum=vec3(1.0, 1.0, 1.0))
    ...     ray = make_ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))
    ...     return intersect_voxel(box, ray).dist  # 4.0
"""

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import taichi as ti

from src.voxelcast.core.ray import FLT_MAX, Ray, vec3

Point3 = tuple[float, float, float]


@ti.dataclass
class Voxel:
    """An axis-aligned box.

    Attributes:
        minimum: The corner with the smallest coordinates (vec3).
        maximum: The corner with the largest coordinates (vec3).
            minimum <= maximum on every axis is a caller contract.
    """

    minimum: vec3
    maximum: vec3


@ti.dataclass
class Hit:
    """Record of a ray-voxel intersection.

    Attributes:
        dist: Ray parameter of the entry point, or FLT_MAX for a miss.
        a_mask: 1 if the x entry is at least the y entry, else 0.
        b_mask: 1 if max(x entry, y entry) is at least the z entry, else 0.
            Together the masks name the face the ray entered through:
            b_mask ? (a_mask ? X : Y) : Z. They are only used for shading.
    """

    dist: ti.f32
    a_mask: ti.i32
    b_mask: ti.i32


@ti.func
def make_miss() -> Hit:
    """Create a Hit indicating no intersection."""
    return Hit(dist=FLT_MAX, a_mask=0, b_mask=0)


@ti.func
def intersect_voxel(voxel: Voxel, ray: Ray) -> Hit:
    """Test for ray-voxel intersection using the slab method.

    The test is strict on both sides: the ray hits only if
    0 < entry < exit. A ray starting on a face, starting inside the box, or
    grazing an edge or face is a miss.

    Args:
        voxel: The box to test against.
        ray: The ray, with its clamped reciprocal direction.

    Returns:
        A Hit with the entry distance and face masks. On a miss, dist is
        FLT_MAX (the masks are still filled in but carry no meaning).
    """
    t0 = (voxel.minimum - ray.origin) * ray.rcpdir
    t1 = (voxel.maximum - ray.origin) * ray.rcpdir

    axial_min = ti.min(t0, t1)
    axial_max = ti.max(t0, t1)

    a_mask = ti.select(axial_min.x >= axial_min.y, 1, 0)
    b_mask = ti.select(ti.max(axial_min.x, axial_min.y) >= axial_min.z, 1, 0)

    entry = ti.max(ti.max(axial_min.x, axial_min.y), axial_min.z)
    leave = ti.min(ti.min(axial_max.x, axial_max.y), axial_max.z)

    dist = FLT_MAX
    if 0.0 < entry and entry < leave:
        dist = entry

    return Hit(dist=dist, a_mask=a_mask, b_mask=b_mask)


@ti.func
def hit_normal(hit: Hit) -> vec3:
    """Get the unit axis of the face a hit entered through.

    Args:
        hit: A hit returned by intersect_voxel.

    Returns:
        (1, 0, 0), (0, 1, 0) or (0, 0, 1).
    """
    normal = vec3(0.0, 0.0, 1.0)
    if hit.b_mask == 1:
        if hit.a_mask == 1:
            normal = vec3(1.0, 0.0, 0.0)
        else:
            normal = vec3(0.0, 1.0, 0.0)
    return normal


# =============================================================================
# Host-side voxel description
# =============================================================================


@dataclass(frozen=True)
class VoxelInfo:
    """Python-side description of an axis-aligned box.

    Attributes:
        minimum: The (x, y, z) corner with the smallest coordinates.
        maximum: The (x, y, z) corner with the largest coordinates.
    """

    minimum: Point3
    maximum: Point3

    @property
    def centre(self) -> Point3:
        """Get the centre point of the box."""
        return (
            (self.maximum[0] + self.minimum[0]) * 0.5,
            (self.maximum[1] + self.minimum[1]) * 0.5,
            (self.maximum[2] + self.minimum[2]) * 0.5,
        )

    @property
    def extent(self) -> Point3:
        """Get the half size of the box along each axis."""
        return (
            (self.maximum[0] - self.minimum[0]) * 0.5,
            (self.maximum[1] - self.minimum[1]) * 0.5,
            (self.maximum[2] - self.minimum[2]) * 0.5,
        )

    def is_valid(self) -> bool:
        """Check that minimum <= maximum on every axis."""
        return all(lo <= hi for lo, hi in zip(self.minimum, self.maximum))


# Bounding box of a scene with no voxels
EMPTY_BBOX = VoxelInfo(
    minimum=(FLT_MAX, FLT_MAX, FLT_MAX),
    maximum=(-FLT_MAX, -FLT_MAX, -FLT_MAX),
)


def compute_scene_bbox(voxels: Iterable[VoxelInfo]) -> VoxelInfo:
    """Compute the bounding box of a list of voxels.

    Folds the component-wise min of the minimum corners and max of the
    maximum corners, starting from the degenerate EMPTY_BBOX. The arithmetic
    is done in float32, matching the values the kernels see.

    Args:
        voxels: The scene content.

    Returns:
        The tightest box enclosing every voxel, or EMPTY_BBOX if there are
        none. The empty box must never be intersected or used for framing.
    """
    bbox_min = np.full(3, FLT_MAX, dtype=np.float32)
    bbox_max = np.full(3, -FLT_MAX, dtype=np.float32)

    for voxel in voxels:
        bbox_min = np.minimum(bbox_min, np.asarray(voxel.minimum, dtype=np.float32))
        bbox_max = np.maximum(bbox_max, np.asarray(voxel.maximum, dtype=np.float32))

    return VoxelInfo(
        minimum=(float(bbox_min[0]), float(bbox_min[1]), float(bbox_min[2])),
        maximum=(float(bbox_max[0]), float(bbox_max[1]), float(bbox_max[2])),
    )


def is_empty_bbox(bbox: VoxelInfo) -> bool:
    """Check whether a bounding box encloses nothing."""
    return not bbox.is_valid()
