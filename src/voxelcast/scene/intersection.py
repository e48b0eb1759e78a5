"""Scene-level voxel storage and closest-hit query.

This module stores the scene's voxels in Taichi fields and provides the
brute-force closest-hit scan used by the renderer. There is no acceleration
structure: every ray is tested against every voxel.

Voxel order never changes the rendered result. When two voxels report the
same distance, the one stored first wins because a later hit must be
strictly closer to replace it.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.voxelcast.scene.intersection import add_voxel, clear_scene
    >>> clear_scene()
    >>> add_voxel((-1.0, -1.0, -1.0), (1.0, 1.0, 1.0))
    >>> # Use intersect_scene within a Taichi kernel
"""

from collections.abc import Iterable, Sequence

import taichi as ti

from src.voxelcast.core.ray import Ray
from src.voxelcast.geometry.voxel import Hit, Voxel, VoxelInfo, intersect_voxel, make_miss

# Maximum number of voxels supported in the scene
MAX_VOXELS = 1024

# Voxel storage: Structure of Arrays layout
voxel_mins = ti.Vector.field(3, dtype=ti.f32, shape=MAX_VOXELS)
voxel_maxs = ti.Vector.field(3, dtype=ti.f32, shape=MAX_VOXELS)
num_voxels = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all voxels from the scene.

    Resets the voxel count to zero. The field data is not cleared but will be
    overwritten when new voxels are added.
    """
    num_voxels[None] = 0


def add_voxel(minimum: Sequence[float], maximum: Sequence[float]) -> int:
    """Add a voxel to the scene.

    Args:
        minimum: The (x, y, z) corner with the smallest coordinates.
        maximum: The (x, y, z) corner with the largest coordinates.

    Returns:
        The index of the added voxel.

    Raises:
        ValueError: If minimum exceeds maximum on any axis.
        RuntimeError: If the maximum number of voxels is exceeded.
    """
    info = VoxelInfo(minimum=tuple(minimum), maximum=tuple(maximum))
    if not info.is_valid():
        raise ValueError(f"Voxel minimum {info.minimum} exceeds maximum {info.maximum}")

    idx = num_voxels[None]
    if idx >= MAX_VOXELS:
        raise RuntimeError(f"Maximum number of voxels ({MAX_VOXELS}) exceeded")
    voxel_mins[idx] = info.minimum
    voxel_maxs[idx] = info.maximum
    num_voxels[None] = idx + 1
    return idx


def load_scene(voxels: Iterable[VoxelInfo]) -> int:
    """Replace the scene content with the given voxels.

    Args:
        voxels: The voxels to store, in order.

    Returns:
        The number of voxels stored.
    """
    clear_scene()
    for voxel in voxels:
        add_voxel(voxel.minimum, voxel.maximum)
    return get_voxel_count()


def get_voxel_count() -> int:
    """Get the number of voxels in the scene."""
    return int(num_voxels[None])


def get_voxels() -> list[VoxelInfo]:
    """Get the stored voxels as host-side descriptions, in scene order."""
    mins = voxel_mins.to_numpy()
    maxs = voxel_maxs.to_numpy()
    return [
        VoxelInfo(
            minimum=(float(mins[i, 0]), float(mins[i, 1]), float(mins[i, 2])),
            maximum=(float(maxs[i, 0]), float(maxs[i, 1]), float(maxs[i, 2])),
        )
        for i in range(get_voxel_count())
    ]


@ti.func
def intersect_scene(ray: Ray) -> Hit:
    """Test a ray against every voxel in the scene.

    Args:
        ray: The ray to trace.

    Returns:
        The closest Hit, or a miss (dist == FLT_MAX) if no voxel was hit.
    """
    closest = make_miss()

    for i in range(num_voxels[None]):
        voxel = Voxel(minimum=voxel_mins[i], maximum=voxel_maxs[i])
        hit = intersect_voxel(voxel, ray)
        if hit.dist < closest.dist:
            closest = hit

    return closest
