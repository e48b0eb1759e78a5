"""Camera module for view and ray generation.

This module provides the scene-fitted view used to generate primary rays:

Components:
    view: Roll/azimuth/declination camera, fitted to the scene bounding box

Camera responsibilities:
    - Compose the view rotation and its scene-fitting zoom and pan
    - Invert the view chain into four basis vectors (right, up, forward, eye)
    - Turn pixel coordinates into ray directions inside kernels

Ray generation uses normalized device coordinates:
    x in [-1, 1): left to right across image
    y in [-1, 1): bottom to top across image
"""

from .view import (
    ViewCamera,
    compute_camera_basis,
    compute_rotation,
    compute_view_transform,
    compute_zoom_and_pan,
    get_camera_basis,
    get_camera_info,
    get_ray_direction,
    is_camera_ready,
    reset_camera,
    setup_camera,
)

__all__ = [
    "ViewCamera",
    "compute_rotation",
    "compute_zoom_and_pan",
    "compute_view_transform",
    "compute_camera_basis",
    "setup_camera",
    "reset_camera",
    "is_camera_ready",
    "get_camera_basis",
    "get_ray_direction",
    "get_camera_info",
]
