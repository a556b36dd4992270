"""
Error Taxonomy for Coordinate Projection.

Every failure raised by the projection layer derives from `EprojError`, so
callers can catch the family as a whole or branch on the specific kind:

- `ConstructionError`: the engine could not build a transform for an SRS pair.
- `ConversionError`: the engine could not transform a point or a batch.
- `DegenerateBasisError`: a transported orientation is too close to singular.
"""

from typing import Any, Optional

import numpy as np


class EprojError(Exception):
    """Base class for all projection errors."""


class ConstructionError(EprojError):
    """The projection engine rejected a (source, target) pair."""

    def __init__(self, message: str, source: Any = None, target: Any = None):
        super().__init__(message)
        self.source = source
        self.target = target


class UnknownEpsgCodeError(ConstructionError):
    """An identifier does not name a supported spatial reference system."""

    def __init__(self, value: Any):
        super().__init__(f"Unknown EPSG code: {value!r}")
        self.value = value


class ConversionError(EprojError):
    """The projection engine could not transform the given input.

    For batch conversion this covers the whole batch: no partial output
    is ever returned.
    """

    def __init__(self, message: str, point: Optional[Any] = None):
        super().__init__(message)
        self.point = point


class DegenerateBasisError(EprojError):
    """The finite-difference basis of a transported pose is singular.

    Attributes
    ----------
    x_axis, y_axis : ndarray
        The transported probe vectors.
    ratio : float
        The smaller of the sine of the angle between the axes and the
        ratio of their lengths, both measured in metres.
    tolerance : float
        The threshold the ratio failed to exceed.
    """

    def __init__(
        self,
        x_axis: np.ndarray,
        y_axis: np.ndarray,
        ratio: float,
        tolerance: float
    ):
        super().__init__(
            f"Transported basis is degenerate: ratio={ratio:.3e} "
            f"<= tolerance={tolerance:.3e} "
            f"(x_axis={np.array2string(x_axis)}, y_axis={np.array2string(y_axis)})"
        )
        self.x_axis = x_axis
        self.y_axis = y_axis
        self.ratio = ratio
        self.tolerance = tolerance
