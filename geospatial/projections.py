"""
Coordinate and Pose Projection Between Spatial Reference Systems.

This module binds an ordered pair of spatial reference systems to a
projection engine transform and exposes point, point-array and pose
(isometry) conversion on top of it.

Scientific Context
------------------
Domain: Geodesy, cartographic projections
Model: Local linearization of a nonlinear point map

Why Poses Need Special Treatment
--------------------------------
1. Projections are nonlinear: a rotation cannot be transformed with a
   closed-form expression the way a point can.
2. The engine only exposes point-to-point transforms, no analytic Jacobian.
3. The orientation is therefore transported numerically: two probe points
   one unit along the pose's x and y axes are projected, and the differences
   to the projected origin estimate the local Jacobian's action on the frame.

Implementation
--------------
This module wraps `pyproj` for the point transforms. Angular axes of a
`Coordinate3` are in radians; the point-array operations use the engine's
native units (degrees for geographic systems, metres otherwise).

References
----------
- PROJ coordinate transformation software: https://proj.org
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

import math
import threading
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray
from pyproj import Transformer
from pyproj.exceptions import ProjError

from common.constants import ProjectionConstants
from common.exceptions import (
    ConstructionError,
    ConversionError,
    DegenerateBasisError,
)
from common.logging_config import get_logger
from common.types import Coordinate3
from geospatial.isometry import Isometry3
from geospatial.srid import SpatialReferenceIdentifier

logger = get_logger(__name__)

SrsLike = Union[SpatialReferenceIdentifier, str, int]


class Projector:
    """Converts coordinates and poses from one SRS into another.

    A projector is bound to exactly one ordered (source, target) pair and
    owns the engine transform built for it. Use `reversed()` for the
    opposite direction.

    Parameters
    ----------
    source, target : SpatialReferenceIdentifier, str or int
        The systems to convert from and to. Strings and integers are
        resolved with `SpatialReferenceIdentifier.parse`.
    probe_offset : float, optional
        Distance of the orientation probes from the pose origin, in the
        native unit of the source SRS (default: 1.0).
    degeneracy_tolerance : float, optional
        Minimum accepted sine of the angle between the transported x and y
        axes, and minimum ratio of their lengths, both measured in metres
        (default: 1e-6).

    Raises
    ------
    ConstructionError
        If an identifier is unknown or the engine rejects the pair.

    Thread Safety
    -------------
    Engine transforms are not thread-safe. Each projector serialises its
    own engine calls with a lock; it never shares its transform with
    another projector.

    Examples
    --------
    >>> projector = Projector(SpatialReferenceIdentifier.Epsg25832,
    ...                       SpatialReferenceIdentifier.Epsg4979)
    >>> geo = projector.convert(Coordinate3(691045.828, 5336014.506, 534.671))
    >>> lon_deg, lat_deg, h = geo.to_degrees()
    """

    def __init__(
        self,
        source: SrsLike,
        target: SrsLike,
        probe_offset: float = ProjectionConstants.PROBE_OFFSET.value,
        degeneracy_tolerance: float = ProjectionConstants.DEGENERACY_TOLERANCE.value
    ):
        self._source = SpatialReferenceIdentifier.parse(source)
        self._target = SpatialReferenceIdentifier.parse(target)

        if not probe_offset > 0.0:
            raise ValueError(f"probe_offset must be positive, got {probe_offset}")
        if degeneracy_tolerance < 0.0:
            raise ValueError(f"degeneracy_tolerance must be non-negative, got {degeneracy_tolerance}")
        self._probe_offset = float(probe_offset)
        self._degeneracy_tolerance = float(degeneracy_tolerance)

        try:
            self._transformer: Optional[Transformer] = Transformer.from_crs(
                self._source.as_str(),
                self._target.as_str(),
                always_xy=True
            )
        except ProjError as e:
            logger.error(f"Engine rejected {self._source} -> {self._target}: {e}")
            raise ConstructionError(
                f"Cannot build transform {self._source} -> {self._target}: {e}",
                source=self._source,
                target=self._target
            ) from e

        self._lock = threading.Lock()
        logger.debug(f"Created projector {self._source} -> {self._target}")

    @property
    def source(self) -> SpatialReferenceIdentifier:
        return self._source

    @property
    def target(self) -> SpatialReferenceIdentifier:
        return self._target

    @property
    def probe_offset(self) -> float:
        return self._probe_offset

    @property
    def degeneracy_tolerance(self) -> float:
        return self._degeneracy_tolerance

    @property
    def closed(self) -> bool:
        return self._transformer is None

    def reversed(self) -> 'Projector':
        """A new projector for the opposite direction, with its own transform."""
        return Projector(
            self._target,
            self._source,
            probe_offset=self._probe_offset,
            degeneracy_tolerance=self._degeneracy_tolerance
        )

    def close(self) -> None:
        """Release the engine transform. Further conversions fail."""
        with self._lock:
            self._transformer = None

    def __enter__(self) -> 'Projector':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = " closed" if self.closed else ""
        return f"<Projector {self._source} -> {self._target}{state}>"

    def _transform(self, xx, yy, zz, radians: bool = False):
        """Run the engine on scalars or arrays, raising on any failure."""
        with self._lock:
            if self._transformer is None:
                raise ConversionError(f"{self!r} has been closed")
            return self._transformer.transform(xx, yy, zz, radians=radians, errcheck=True)

    # =========================================================================
    # Point Conversion
    # =========================================================================

    def convert(self, point: Coordinate3) -> Coordinate3:
        """Convert a `Coordinate3` from the source into the target SRS.

        Angular axes are in radians on both sides.

        Parameters
        ----------
        point : Coordinate3
            Coordinate in the source SRS.

        Returns
        -------
        Coordinate3
            Coordinate in the target SRS.

        Raises
        ------
        ConversionError
            If the engine cannot transform the point.
        """
        try:
            x, y, z = self._transform(point.x, point.y, point.z, radians=True)
        except ProjError as e:
            logger.debug(f"Conversion of {point} failed: {e}")
            raise ConversionError(f"Cannot convert {point}: {e}", point=point) from e

        if not (math.isfinite(x) and math.isfinite(y) and math.isfinite(z)):
            raise ConversionError(f"Cannot convert {point}: non-finite result", point=point)
        return Coordinate3(float(x), float(y), float(z))

    def convert_point(self, point: ArrayLike) -> NDArray[np.float64]:
        """Convert a single point in the engine's native units.

        Parameters
        ----------
        point : array_like
            Point of shape (3,), degrees for geographic axes.

        Returns
        -------
        ndarray
            Converted point of shape (3,).

        Raises
        ------
        ConversionError
            If the engine cannot transform the point.
        """
        x, y, z = _as_point(point)
        try:
            result = np.array(self._transform(x, y, z), dtype=float)
        except ProjError as e:
            logger.debug(f"Conversion of point ({x}, {y}, {z}) failed: {e}")
            raise ConversionError(f"Cannot convert point ({x}, {y}, {z}): {e}", point=point) from e

        if not np.all(np.isfinite(result)):
            raise ConversionError(f"Cannot convert point ({x}, {y}, {z}): non-finite result", point=point)
        return result

    def convert_points(self, points: Union[ArrayLike, Sequence[ArrayLike]]) -> NDArray[np.float64]:
        """Convert a batch of points in one engine call.

        Equivalent, element for element, to `convert_point` on each point.
        The batch succeeds or fails as a whole.

        Parameters
        ----------
        points : array_like
            Points of shape (N, 3); N may be zero. Not modified.

        Returns
        -------
        ndarray
            Converted points of shape (N, 3), in input order.

        Raises
        ------
        ConversionError
            If any point cannot be transformed. No output is returned.
        ValueError
            If the input does not have shape (N, 3).
        """
        array = np.array(points, dtype=float)
        if array.shape in ((0,), (0, 3)):
            return np.empty((0, 3), dtype=float)
        if array.ndim != 2 or array.shape[1] != 3:
            raise ValueError(f"Expected points of shape (N, 3), got {array.shape}")

        logger.debug(f"Converting batch of {array.shape[0]} points {self._source} -> {self._target}")
        try:
            xx, yy, zz = self._transform(array[:, 0], array[:, 1], array[:, 2])
        except ProjError as e:
            logger.debug(f"Batch conversion of {array.shape[0]} points failed: {e}")
            raise ConversionError(f"Cannot convert batch of {array.shape[0]} points: {e}") from e

        result = np.column_stack([xx, yy, zz]).astype(float)
        if not np.all(np.isfinite(result)):
            bad = np.flatnonzero(~np.all(np.isfinite(result), axis=1))
            raise ConversionError(
                f"Cannot convert batch of {array.shape[0]} points: "
                f"non-finite result at indices {bad.tolist()}"
            )
        return result

    # =========================================================================
    # Pose Conversion
    # =========================================================================

    def convert_isometry(self, pose: Isometry3) -> Isometry3:
        """Convert a rigid-body pose from the source into the target SRS.

        The translation is converted as a point. The orientation is
        transported by projecting two probe points placed `probe_offset`
        along the pose's x and y axes and differencing them against the
        projected origin. The third axis is their cross product.

        Parameters
        ----------
        pose : Isometry3
            Pose in the source SRS, in the engine's native units.

        Returns
        -------
        Isometry3
            Pose in the target SRS. Its translation is exactly
            ``convert_point(pose.translation)``.

        Raises
        ------
        ConversionError
            If the origin or either probe cannot be transformed.
        DegenerateBasisError
            If the transported axes are collinear or one of them vanishes,
            e.g. at a pole of the target projection.

        Notes
        -----
        The probes are offset in the source units, so the linearization is
        coarser for a metric source than for a degree-based one. Neither
        axis is rescaled before the cross product.
        """
        origin = self.convert_point(pose.translation)

        d = self._probe_offset
        x_probe = pose.transform_point([d, 0.0, 0.0])
        y_probe = pose.transform_point([0.0, d, 0.0])

        x_axis = self.convert_point(x_probe) - origin
        y_axis = self.convert_point(y_probe) - origin
        z_axis = self._check_basis(origin, x_axis, y_axis)

        return Isometry3.from_basis(origin, x_axis, y_axis, z_axis)

    def _check_basis(
        self,
        origin: NDArray[np.float64],
        x_axis: NDArray[np.float64],
        y_axis: NDArray[np.float64]
    ) -> NDArray[np.float64]:
        """Return x_axis × y_axis, rejecting a near-singular basis.

        The basis is degenerate when the axes are nearly collinear (sine of
        their angle) or when one axis nearly vanishes next to the other.
        Both tests run on metric-scaled axes, so a geographic target with
        degree and metre components is judged in consistent units.
        """
        z_axis = np.cross(x_axis, y_axis)

        metric_x = self._metric_axis(origin, x_axis)
        metric_y = self._metric_axis(origin, y_axis)
        norm_x = np.linalg.norm(metric_x)
        norm_y = np.linalg.norm(metric_y)

        if norm_x > 0.0 and norm_y > 0.0:
            sine = float(np.linalg.norm(np.cross(metric_x, metric_y)) / (norm_x * norm_y))
            ratio = min(sine, float(min(norm_x, norm_y) / max(norm_x, norm_y)))
        else:
            ratio = 0.0

        if not ratio > self._degeneracy_tolerance:
            logger.warning(
                f"Degenerate basis {self._source} -> {self._target}: "
                f"ratio={ratio:.3e} (tolerance={self._degeneracy_tolerance:.3e})"
            )
            raise DegenerateBasisError(x_axis, y_axis, ratio, self._degeneracy_tolerance)
        return z_axis

    def _metric_axis(self, origin: NDArray[np.float64], axis: NDArray[np.float64]) -> NDArray[np.float64]:
        """Scale a target-unit difference vector to approximate metres."""
        if not self._target.is_geographic:
            return axis
        a = ProjectionConstants.EARTH_SEMI_MAJOR_AXIS.value
        per_degree = math.radians(1.0) * a
        return np.array([
            axis[0] * per_degree * math.cos(math.radians(origin[1])),
            axis[1] * per_degree,
            axis[2]
        ])


def _as_point(point: ArrayLike):
    array = np.asarray(point, dtype=float)
    if array.shape != (3,):
        raise ValueError(f"Expected a point of shape (3,), got {array.shape}")
    return float(array[0]), float(array[1]), float(array[2])
