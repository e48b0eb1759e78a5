"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene, camera and render target state before each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from src.voxelcast.camera.view import reset_camera
    from src.voxelcast.core.renderer import reset_render_target
    from src.voxelcast.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        reset_camera()
        reset_render_target()

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def two_voxel_scene():
    """The two overlapping voxels of the default scene, as host descriptions."""
    from src.voxelcast.scene.default_scene import DEFAULT_VOXELS

    return list(DEFAULT_VOXELS)


@pytest.fixture
def front_camera():
    """A camera looking straight down -z at the scene centre."""
    from src.voxelcast.camera.view import ViewCamera

    return ViewCamera(roll=0.0, azimuth=0.0, declination=0.0, eye=(0.0, 0.0, 2.125))
