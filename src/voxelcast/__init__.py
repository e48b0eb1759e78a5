"""Python implementation of the Taichi-based voxel ray caster.

This package renders axis-aligned boxes ("voxels") with one primary ray per
pixel, using Taichi for the parallel per-pixel kernel:
- Slab-method ray/box intersection with face detection
- Scene-fitted camera built from roll, azimuth and declination
- Normal-shaded RGB or distance-mapped grayscale output
- Raw raster serialization and PNG conversion

Subpackages:
    core: Ray helpers, matrix algebra, raster codec and the render kernel
    geometry: The voxel primitive and its intersection test
    scene: Voxel storage, closest-hit scan and the default scene
    camera: View transform and camera basis
    preview: PNG export
"""

__version__ = "0.1.0"
