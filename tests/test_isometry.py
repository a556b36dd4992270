from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from geospatial.isometry import Isometry3


def test_identity_leaves_points_unchanged():
    iso = Isometry3.identity()
    np.testing.assert_allclose(iso.transform_point([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])
    np.testing.assert_allclose(iso.to_matrix(), np.eye(4))


def test_transform_point_rotates_then_translates():
    iso = Isometry3.from_euler([10.0, 20.0, 30.0], 0.0, 0.0, math.pi)
    np.testing.assert_allclose(iso.transform_point([1.0, 0.0, 0.0]), [9.0, 20.0, 30.0], atol=1e-12)
    np.testing.assert_allclose(iso * np.array([0.0, 1.0, 0.0]), [10.0, 19.0, 30.0], atol=1e-12)


def test_basis_vectors_are_rotation_columns():
    iso = Isometry3.from_euler([0.0, 0.0, 0.0], 0.0, 0.0, math.pi / 2)
    x_axis, y_axis, z_axis = iso.basis_vectors()
    np.testing.assert_allclose(x_axis, [0.0, 1.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(y_axis, [-1.0, 0.0, 0.0], atol=1e-12)
    np.testing.assert_allclose(z_axis, [0.0, 0.0, 1.0], atol=1e-12)


def test_from_basis_ignores_axis_lengths():
    rotation = Rotation.from_euler("xyz", [0.3, -0.2, 1.1])
    matrix = rotation.as_matrix()

    iso = Isometry3.from_basis([1.0, 2.0, 3.0], 5.0 * matrix[:, 0], 0.01 * matrix[:, 1], 42.0 * matrix[:, 2])

    np.testing.assert_allclose(iso.rotation.as_matrix(), matrix, atol=1e-12)
    np.testing.assert_array_equal(iso.translation, [1.0, 2.0, 3.0])
    assert np.linalg.norm(iso.rotation.as_quat()) == pytest.approx(1.0)


def test_from_basis_orthogonalizes_skewed_axes():
    iso = Isometry3.from_basis(np.zeros(3), [1.0, 0.0, 0.0], [0.05, 1.0, 0.0], [0.0, 0.0, 1.0])
    matrix = iso.rotation.as_matrix()
    np.testing.assert_allclose(matrix.T @ matrix, np.eye(3), atol=1e-12)
    assert np.linalg.det(matrix) == pytest.approx(1.0)


def test_composition_and_inverse():
    a = Isometry3.from_euler([1.0, -2.0, 0.5], 0.1, 0.2, 0.3)
    b = Isometry3.from_euler([4.0, 0.0, -1.0], -0.4, 0.0, 1.2)
    p = np.array([0.7, -0.3, 2.0])

    np.testing.assert_allclose((a @ b).transform_point(p), a.transform_point(b.transform_point(p)))
    np.testing.assert_allclose((a * b).to_matrix(), a.to_matrix() @ b.to_matrix(), atol=1e-12)
    np.testing.assert_allclose((a @ a.inverse()).to_matrix(), np.eye(4), atol=1e-12)


def test_rejects_rotation_stacks():
    with pytest.raises(ValueError):
        Isometry3(np.zeros(3), Rotation.from_euler("z", [0.0, 1.0]))


def test_from_basis_rejects_zero_axis():
    with pytest.raises(ValueError, match="non-zero length"):
        Isometry3.from_basis(np.zeros(3), [1.0, 0.0, 0.0], [0.0, 0.0, 0.0], [0.0, 0.0, 1.0])
