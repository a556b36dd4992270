"""
Rigid Transforms.

A minimal isometry type (rotation followed by translation) built on
`scipy.spatial.transform.Rotation`. It provides what pose conversion needs:
applying the transform to points, reading its translation and basis vectors,
and rebuilding a transform from a (possibly non-orthonormal) basis.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation


@dataclass(frozen=True, eq=False)
class Isometry3:
    """A rigid-body transform ``p -> R p + t``.

    Attributes
    ----------
    translation : ndarray
        Translation vector of shape (3,).
    rotation : scipy.spatial.transform.Rotation
        Single rotation, stored internally as a unit quaternion.
    """
    translation: NDArray[np.float64]
    rotation: Rotation

    def __post_init__(self):
        translation = np.asarray(self.translation, dtype=float).reshape(3)
        object.__setattr__(self, "translation", translation)
        if not self.rotation.single:
            raise ValueError("Isometry3 requires a single rotation, not a stack")

    @classmethod
    def identity(cls) -> 'Isometry3':
        return cls(np.zeros(3), Rotation.identity())

    @classmethod
    def from_parts(cls, translation: ArrayLike, rotation: Rotation) -> 'Isometry3':
        return cls(np.asarray(translation, dtype=float), rotation)

    @classmethod
    def from_euler(
        cls,
        translation: ArrayLike,
        roll: float,
        pitch: float,
        yaw: float
    ) -> 'Isometry3':
        """Build an isometry from roll/pitch/yaw in radians.

        Angles are applied about the fixed x, y and z axes in that order,
        i.e. ``R = Rz(yaw) @ Ry(pitch) @ Rx(roll)``.
        """
        rotation = Rotation.from_euler("xyz", [roll, pitch, yaw])
        return cls(np.asarray(translation, dtype=float), rotation)

    @classmethod
    def from_basis(
        cls,
        translation: ArrayLike,
        x_axis: ArrayLike,
        y_axis: ArrayLike,
        z_axis: ArrayLike
    ) -> 'Isometry3':
        """Build an isometry whose rotation maps the unit axes onto a basis.

        The basis is not checked. Each axis is scaled to unit length and
        the resulting matrix is orthogonalised by scipy into the closest
        rotation, returned as a unit quaternion.

        Parameters
        ----------
        translation : array_like
            Translation vector of shape (3,).
        x_axis, y_axis, z_axis : array_like
            Basis vectors, used as the columns of the rotation matrix.
            None may have zero length.

        Raises
        ------
        ValueError
            If any axis has zero length.

        Returns
        -------
        Isometry3
        """
        columns = [np.asarray(axis, dtype=float).reshape(3) for axis in (x_axis, y_axis, z_axis)]
        norms = [np.linalg.norm(axis) for axis in columns]
        if not all(norm > 0.0 for norm in norms):
            raise ValueError(f"Basis axes must have non-zero length, got norms {norms}")
        matrix = np.column_stack([axis / norm for axis, norm in zip(columns, norms)])
        return cls(np.asarray(translation, dtype=float), Rotation.from_matrix(matrix))

    def transform_point(self, point: ArrayLike) -> NDArray[np.float64]:
        """Apply the isometry to a point of shape (3,)."""
        return self.rotation.apply(np.asarray(point, dtype=float)) + self.translation

    def basis_vectors(self) -> Tuple[NDArray[np.float64], NDArray[np.float64], NDArray[np.float64]]:
        """The rotated unit x, y and z axes."""
        matrix = self.rotation.as_matrix()
        return matrix[:, 0], matrix[:, 1], matrix[:, 2]

    def inverse(self) -> 'Isometry3':
        inverse_rotation = self.rotation.inv()
        return Isometry3(-inverse_rotation.apply(self.translation), inverse_rotation)

    def to_matrix(self) -> NDArray[np.float64]:
        """The 4x4 homogeneous transformation matrix."""
        matrix = np.eye(4)
        matrix[:3, :3] = self.rotation.as_matrix()
        matrix[:3, 3] = self.translation
        return matrix

    def __matmul__(self, other: 'Isometry3') -> 'Isometry3':
        """Compose two isometries: ``(self @ other)(p) == self(other(p))``."""
        if not isinstance(other, Isometry3):
            return NotImplemented
        return Isometry3(
            self.rotation.apply(other.translation) + self.translation,
            self.rotation * other.rotation
        )

    def __mul__(self, other):
        if isinstance(other, Isometry3):
            return self @ other
        return self.transform_point(other)
