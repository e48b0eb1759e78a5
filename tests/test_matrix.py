"""Unit tests for the host-side matrix module.

Tests cover:
- Matrix construction and identity
- Rodrigues rotation for principal and arbitrary axes
- Transpose as inverse of a rotation
- Row-vector point transformation
"""

import math

import numpy as np
import pytest


class TestConstruction:
    """Tests for basic matrix construction."""

    def test_matx4_row_major(self):
        """Test that elements fill rows first."""
        from src.voxelcast.core.matrix import matx4

        m = matx4(*range(16))
        assert m.shape == (4, 4)
        assert m.dtype == np.float32
        assert m[0, 3] == 3.0
        assert m[3, 0] == 12.0

    def test_matx4_rejects_wrong_count(self):
        """Test that anything but 16 elements is rejected."""
        from src.voxelcast.core.matrix import matx4

        with pytest.raises(ValueError):
            matx4(1.0, 2.0, 3.0)

    def test_translate_stores_offset_in_row_3(self):
        """Test translation layout for row vectors."""
        from src.voxelcast.core.matrix import matx4_translate

        m = matx4_translate((1.0, 2.0, 3.0))
        assert np.allclose(m[3], [1.0, 2.0, 3.0, 1.0])
        assert np.allclose(m[:3, :3], np.eye(3))

    def test_scale_translate(self):
        """Test uniform scale with translation."""
        from src.voxelcast.core.matrix import matx4_scale_translate, transform_point

        m = matx4_scale_translate(2.0, (1.0, 0.0, -1.0))
        assert np.allclose(transform_point((1.0, 1.0, 1.0), m), [3.0, 2.0, 1.0])


class TestRotation:
    """Tests for matx4_rotate."""

    def test_zero_angle_is_identity(self):
        """Test that a zero rotation about any axis is the identity."""
        from src.voxelcast.core.matrix import identity, matx4_rotate

        for axis in [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]:
            m = matx4_rotate(0.0, 1.0, *axis)
            assert np.allclose(m, identity(), atol=1e-7)

    def test_quarter_turn_about_z_maps_x_to_y(self):
        """Test the handedness of a rotation about z."""
        from src.voxelcast.core.matrix import matx4_rotate, transform_point

        m = matx4_rotate(1.0, 0.0, 0.0, 0.0, 1.0)
        assert np.allclose(transform_point((1.0, 0.0, 0.0), m), [0.0, 1.0, 0.0], atol=1e-6)
        assert np.allclose(transform_point((0.0, 1.0, 0.0), m), [-1.0, 0.0, 0.0], atol=1e-6)

    def test_quarter_turn_about_y_maps_z_to_x(self):
        """Test the handedness of a rotation about y."""
        from src.voxelcast.core.matrix import matx4_rotate, transform_point

        m = matx4_rotate(1.0, 0.0, 0.0, 1.0, 0.0)
        assert np.allclose(transform_point((0.0, 0.0, 1.0), m), [1.0, 0.0, 0.0], atol=1e-6)

    def test_arbitrary_axis_is_orthonormal(self):
        """Test that the rotation block is orthonormal for a unit axis."""
        from src.voxelcast.core.matrix import matx4_rotate

        axis = np.array([1.0, 2.0, 2.0]) / 3.0
        angle = 0.7
        m = matx4_rotate(math.sin(angle), math.cos(angle), *axis)
        r = m[:3, :3].astype(np.float64)

        assert np.allclose(r @ r.T, np.eye(3), atol=1e-6)
        assert abs(np.linalg.det(r) - 1.0) < 1e-6

    def test_axis_is_invariant(self):
        """Test that the rotation axis maps onto itself."""
        from src.voxelcast.core.matrix import matx4_rotate, transform_point

        axis = np.array([0.0, 0.6, 0.8])
        m = matx4_rotate(math.sin(1.2), math.cos(1.2), *axis)
        assert np.allclose(transform_point(axis, m), axis, atol=1e-6)

    def test_homogeneous_row_untouched(self):
        """Test that the rotation has no translation part."""
        from src.voxelcast.core.matrix import matx4_rotate

        m = matx4_rotate(math.sin(0.3), math.cos(0.3), 0.0, 0.0, 1.0)
        assert np.allclose(m[3], [0.0, 0.0, 0.0, 1.0])
        assert np.allclose(m[:, 3], [0.0, 0.0, 0.0, 1.0])


class TestProducts:
    """Tests for transpose, matmul and transform_point."""

    def test_transpose(self):
        """Test transpose swaps rows and columns."""
        from src.voxelcast.core.matrix import matx4, transpose

        m = matx4(*range(16))
        t = transpose(m)
        assert t[0, 3] == m[3, 0]
        assert t[2, 1] == m[1, 2]
        assert t.flags["C_CONTIGUOUS"]

    def test_transpose_inverts_rotation(self):
        """Test that R * transpose(R) is the identity."""
        from src.voxelcast.core.matrix import identity, matmul, matx4_rotate, transpose

        m = matx4_rotate(math.sin(0.9), math.cos(0.9), 0.0, 1.0, 0.0)
        assert np.allclose(matmul(m, transpose(m)), identity(), atol=1e-6)

    def test_matmul_applies_left_first(self):
        """Test row-vector composition order: (a * b) applies a, then b."""
        from src.voxelcast.core.matrix import matmul, matx4_rotate, matx4_translate, transform_point

        rot = matx4_rotate(1.0, 0.0, 0.0, 0.0, 1.0)
        move = matx4_translate((10.0, 0.0, 0.0))

        p = transform_point((1.0, 0.0, 0.0), matmul(rot, move))
        assert np.allclose(p, [10.0, 1.0, 0.0], atol=1e-6)

        q = transform_point((1.0, 0.0, 0.0), matmul(move, rot))
        assert np.allclose(q, [0.0, 11.0, 0.0], atol=1e-5)

    def test_transform_point_uses_implicit_w(self):
        """Test v' = m[0]*x + m[1]*y + m[2]*z + m[3]."""
        from src.voxelcast.core.matrix import matx4, transform_point

        m = matx4(*range(16))
        expected = (np.arange(16, dtype=np.float64).reshape(4, 4)[:3].T @ [1.0, 2.0, 3.0])[:3]
        expected += [12.0, 13.0, 14.0]
        assert np.allclose(transform_point((1.0, 2.0, 3.0), m), expected)
