"""Host-side 4x4 matrix algebra for the view transform.

Matrices are row-major float32 NumPy arrays of shape (4, 4) and follow the
row-vector convention: a point is transformed as

    v' = m[0] * v.x + m[1] * v.y + m[2] * v.z + m[3]

so translations live in row 3 and a chain of transforms reads left to right.
These functions run once per render (Python-side), never inside kernels.

Example:
    >>> import math
    >>> from src.voxelcast.core.matrix import matx4_rotate, transform_point
    >>> quarter = matx4_rotate(math.sin(math.pi / 2), math.cos(math.pi / 2), 0.0, 0.0, 1.0)
    >>> transform_point((1.0, 0.0, 0.0), quarter)  # x axis onto y axis
"""

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

Matrix4 = npt.NDArray[np.float32]


def matx4(*elements: float) -> Matrix4:
    """Build a 4x4 matrix from 16 row-major elements.

    Args:
        *elements: Exactly 16 values, row 0 first.

    Returns:
        A (4, 4) float32 array.

    Raises:
        ValueError: If the number of elements is not 16.
    """
    if len(elements) != 16:
        raise ValueError(f"A 4x4 matrix needs 16 elements, got {len(elements)}")
    return np.array(elements, dtype=np.float32).reshape(4, 4)


def identity() -> Matrix4:
    """Return the 4x4 identity matrix."""
    return np.eye(4, dtype=np.float32)


def matx4_translate(offset: Sequence[float]) -> Matrix4:
    """Build a translation matrix (offset stored in row 3)."""
    m = identity()
    m[3, :3] = offset
    return m


def matx4_scale_translate(scale: float, offset: Sequence[float]) -> Matrix4:
    """Build a uniform scale followed by a translation."""
    m = matx4_translate(offset)
    m[0, 0] = m[1, 1] = m[2, 2] = scale
    return m


def matx4_rotate(sin_a: float, cos_a: float, x: float, y: float, z: float) -> Matrix4:
    """Build a rotation about an arbitrary axis (Rodrigues' formula).

    The axis is NOT normalized here; passing a non-unit axis is a caller
    error and produces a matrix that is not a rotation.

    Args:
        sin_a: Sine of the rotation angle.
        cos_a: Cosine of the rotation angle.
        x: Axis x component.
        y: Axis y component.
        z: Axis z component.

    Returns:
        A (4, 4) float32 homogeneous rotation matrix for row vectors.
    """
    return matx4(
        x * x + cos_a * (1 - x * x),
        x * y - cos_a * (x * y) + sin_a * z,
        x * z - cos_a * (x * z) - sin_a * y,
        0.0,
        y * x - cos_a * (y * x) - sin_a * z,
        y * y + cos_a * (1 - y * y),
        y * z - cos_a * (y * z) + sin_a * x,
        0.0,
        z * x - cos_a * (z * x) + sin_a * y,
        z * y - cos_a * (z * y) - sin_a * x,
        z * z + cos_a * (1 - z * z),
        0.0,
        0.0, 0.0, 0.0, 1.0,
    )


def transpose(m: Matrix4) -> Matrix4:
    """Return the transpose of a matrix (the inverse, for pure rotations)."""
    return np.ascontiguousarray(m.T, dtype=np.float32)


def matmul(a: Matrix4, b: Matrix4) -> Matrix4:
    """Multiply two matrices; the result applies a first, then b."""
    return (a @ b).astype(np.float32)


def transform_point(v: Sequence[float], m: Matrix4) -> npt.NDArray[np.float32]:
    """Transform a point by a matrix with an implicit homogeneous w of 1.

    Args:
        v: The point (x, y, z).
        m: The transform.

    Returns:
        The transformed point as a float32 array of shape (3,).
    """
    x, y, z = (np.float32(c) for c in v)
    r = m[0] * x + m[1] * y + m[2] * z + m[3]
    return r[:3].astype(np.float32)
