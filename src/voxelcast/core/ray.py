"""Ray data structure and vector utilities for the voxel ray caster.

This module provides the Ray dataclass and the handful of component-wise
vector helpers the slab intersection test needs. All operations are designed
to work within Taichi kernels.

A ray stores its reciprocal direction rather than the direction itself, so the
intersection test can replace divisions with multiplications. Division by zero
is defined rather than IEEE: a zero component maps to FLT_MAX, and the
reciprocal is then clamped to [-FLT_MAX/2, FLT_MAX/2] so that products with
small offsets never turn into NaN.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.voxelcast.core.ray import make_ray, vec3
    >>> @ti.kernel
    ... def probe() -> vec3:
    ...     ray = make_ray(vec3(0.0, 0.0, 2.0), vec3(0.0, 0.0, -0.5))
    ...     return ray.rcpdir
"""

import numpy as np
import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Largest finite float32; stands in for infinity everywhere in the kernels
FLT_MAX = float(np.finfo(np.float32).max)

# Bounds for the reciprocal ray direction
RCP_LIMIT = FLT_MAX * 0.5


@ti.dataclass
class Ray:
    """A ray with an origin point and a precomputed reciprocal direction.

    Attributes:
        origin: The starting point of the ray (vec3).
        rcpdir: Component-wise 1 / direction, clamped to
            [-RCP_LIMIT, RCP_LIMIT] (vec3).
    """

    origin: vec3
    rcpdir: vec3


@ti.func
def rcp(v: vec3) -> vec3:
    """Compute the component-wise reciprocal of a vector.

    Zero components (of either sign) map to +FLT_MAX instead of infinity, so
    the result is reproducible across backends.

    Args:
        v: The input vector.

    Returns:
        The vector (1/v.x, 1/v.y, 1/v.z) with zeros saturated to FLT_MAX.
    """
    result = vec3(FLT_MAX, FLT_MAX, FLT_MAX)
    for i in ti.static(range(3)):
        if v[i] != 0.0:
            result[i] = 1.0 / v[i]
    return result


@ti.func
def clamp_vec(v: vec3, lo: ti.f32, hi: ti.f32) -> vec3:
    """Clamp every component of a vector to [lo, hi].

    Args:
        v: The input vector.
        lo: Lower bound applied after the upper bound.
        hi: Upper bound.

    Returns:
        max(min(v, hi), lo), component-wise.
    """
    return ti.max(ti.min(v, hi), lo)


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from an origin and a (not necessarily normalized) direction.

    Args:
        origin: The starting point of the ray.
        direction: The direction vector. Zero components are allowed.

    Returns:
        A Ray with the clamped reciprocal direction precomputed.
    """
    return Ray(origin=origin, rcpdir=clamp_vec(rcp(direction), -RCP_LIMIT, RCP_LIMIT))
