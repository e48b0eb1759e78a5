"""Default two-voxel scene configuration.

The default scene is two overlapping unit-sized boxes sharing the main
diagonal, viewed by the default ViewCamera (rolled by pi/8 and turned by pi/4
around the vertical axis). Everything is fixed at startup; there is no scene
file.

Example:
    >>> from src.voxelcast.scene.default_scene import create_default_scene
    >>> voxels, camera = create_default_scene()
    >>> len(voxels)
    2
"""

from dataclasses import dataclass

from src.voxelcast.camera.view import ViewCamera
from src.voxelcast.geometry.voxel import VoxelInfo, compute_scene_bbox

# Scene content in world space
DEFAULT_VOXELS = (
    VoxelInfo(minimum=(-0.75, -0.75, -0.75), maximum=(0.25, 0.25, 0.25)),
    VoxelInfo(minimum=(-0.25, -0.25, -0.25), maximum=(0.75, 0.75, 0.75)),
)

# Default output resolution
DEFAULT_WIDTH = 256
DEFAULT_HEIGHT = 256


@dataclass
class DefaultSceneParams:
    """Parameters for the default scene.

    Attributes:
        voxels: The scene content.
        camera: The view configuration.
    """

    voxels: tuple[VoxelInfo, ...] = DEFAULT_VOXELS
    camera: ViewCamera | None = None


def create_default_scene(
    params: DefaultSceneParams | None = None,
) -> tuple[list[VoxelInfo], ViewCamera]:
    """Create the default scene and camera.

    Args:
        params: Optional overrides; defaults reproduce the two-voxel scene.

    Returns:
        Tuple of (voxels, camera).
    """
    if params is None:
        params = DefaultSceneParams()
    camera = params.camera if params.camera is not None else ViewCamera()
    return list(params.voxels), camera


def get_default_scene_bounds() -> VoxelInfo:
    """Get the bounding box of the default scene."""
    return compute_scene_bbox(DEFAULT_VOXELS)
