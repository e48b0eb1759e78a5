"""Geometry module for the voxel primitive.

This module provides the only renderable primitive and its intersection test:

Components:
    voxel: Axis-aligned box, hit record, slab-method intersection and
        scene bounding-box reduction

The intersection routine is a Taichi function (@ti.func) so it can be called
from the per-pixel render kernel. Bounding-box helpers run on the host.

Ray-voxel intersection follows the pattern:
    hit = intersect_voxel(voxel, ray)  # hit.dist == FLT_MAX on a miss
"""

from .voxel import (
    EMPTY_BBOX,
    Hit,
    Voxel,
    VoxelInfo,
    compute_scene_bbox,
    hit_normal,
    intersect_voxel,
    is_empty_bbox,
    make_miss,
)

__all__ = [
    "Voxel",
    "Hit",
    "VoxelInfo",
    "EMPTY_BBOX",
    "make_miss",
    "intersect_voxel",
    "hit_normal",
    "compute_scene_bbox",
    "is_empty_bbox",
]
