"""Scene module for voxel storage and scene queries.

This module handles scene representation and ray-scene queries:

Components:
    intersection: Voxel storage in Taichi fields and the closest-hit scan
    default_scene: The fixed two-voxel scene and its camera

Scene data is organized for kernel access:
    - Structure-of-Arrays layout for voxel corners
    - A scalar field holding the active voxel count
"""

from .default_scene import (
    DEFAULT_HEIGHT,
    DEFAULT_VOXELS,
    DEFAULT_WIDTH,
    DefaultSceneParams,
    create_default_scene,
    get_default_scene_bounds,
)
from .intersection import (
    MAX_VOXELS,
    add_voxel,
    clear_scene,
    get_voxel_count,
    get_voxels,
    intersect_scene,
    load_scene,
)

__all__ = [
    # Intersection module
    "add_voxel",
    "clear_scene",
    "load_scene",
    "get_voxel_count",
    "get_voxels",
    "intersect_scene",
    "MAX_VOXELS",
    # Default scene module
    "DEFAULT_VOXELS",
    "DEFAULT_WIDTH",
    "DEFAULT_HEIGHT",
    "DefaultSceneParams",
    "create_default_scene",
    "get_default_scene_bounds",
]
