"""
Coordinate Value Type.

This module defines `Coordinate3`, the three-component value exchanged with
the projection layer.

Unit Convention
---------------
The same triple carries different meanings depending on the spatial
reference system it is paired with:

1. Geographic SRS: (longitude, latitude, height) with the angular axes in
   RADIANS and the height in metres.
2. Projected or geocentric SRS: (x, y, z) in linear units (metres).

The type does not record which interpretation applies. Callers keep track of
it from the SRS they convert from or to. Downstream code relies on this
flexibility, so no unit tag is attached.
"""

from dataclasses import dataclass
from typing import Iterator, Union
import math

import numpy as np
from numpy.typing import ArrayLike, NDArray
import pint

from common.constants import ProjectionConstants
from common.units import Q_, STANDARD_UNITS, ensure_quantity


@dataclass(frozen=True)
class Coordinate3:
    """An ordered triple of floats in the units of some SRS.

    Attributes
    ----------
    x : float
        First axis: longitude in RADIANS, or easting / X in metres.
    y : float
        Second axis: latitude in RADIANS, or northing / Y in metres.
    z : float
        Third axis: height or Z in metres.

    Examples
    --------
    >>> munich = Coordinate3.geo(48.137, 11.575, 519.0)
    >>> lon_deg, lat_deg, h = munich.to_degrees()
    >>> print(f"{lat_deg:.3f}°N, {lon_deg:.3f}°E")
    48.137°N, 11.575°E
    """
    x: float
    y: float
    z: float

    @classmethod
    def geo(cls, latitude: float, longitude: float, height: float) -> 'Coordinate3':
        """Create a coordinate from latitude/longitude/height in degrees.

        The angular axes are stored in radians, in (lon, lat, h) order.
        """
        return cls(math.radians(longitude), math.radians(latitude), height)

    @classmethod
    def gis(cls, longitude: float, latitude: float, height: float) -> 'Coordinate3':
        """Create a coordinate from longitude/latitude/height in degrees."""
        return cls(math.radians(longitude), math.radians(latitude), height)

    @classmethod
    def from_quantities(
        cls,
        longitude: Union[float, pint.Quantity],
        latitude: Union[float, pint.Quantity],
        height: Union[float, pint.Quantity, None] = None
    ) -> 'Coordinate3':
        """Create a geographic coordinate from unit-tagged quantities.

        Parameters
        ----------
        longitude, latitude : float or pint.Quantity
            Any angular unit. Bare numbers are taken as degrees and
            trigger a warning.
        height : float or pint.Quantity
            Any length unit. Bare numbers are taken as metres; omitted
            means 0 m.

        Returns
        -------
        Coordinate3
            Coordinate with angular axes in radians and height in metres.
        """
        lon = ensure_quantity(longitude, "degree").to(STANDARD_UNITS["longitude"])
        lat = ensure_quantity(latitude, "degree").to(STANDARD_UNITS["latitude"])
        if height is None:
            height = Q_(0.0, "meter")
        h = ensure_quantity(height, "meter").to(STANDARD_UNITS["height"])
        return cls(float(lon.magnitude), float(lat.magnitude), float(h.magnitude))

    @classmethod
    def from_point(cls, point: ArrayLike) -> 'Coordinate3':
        """Create a coordinate from a 3-element point array."""
        x, y, z = np.asarray(point, dtype=float).reshape(3)
        return cls(float(x), float(y), float(z))

    def to_point(self) -> NDArray[np.float64]:
        """Return the coordinate as a point array of shape (3,)."""
        return np.array([self.x, self.y, self.z], dtype=float)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: 'Coordinate3') -> 'Coordinate3':
        if not isinstance(other, Coordinate3):
            return NotImplemented
        return Coordinate3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: 'Coordinate3') -> 'Coordinate3':
        if not isinstance(other, Coordinate3):
            return NotImplemented
        return Coordinate3(self.x - other.x, self.y - other.y, self.z - other.z)

    def to_radians(self) -> 'Coordinate3':
        """Convert the first two axes from degrees to radians."""
        return Coordinate3(math.radians(self.x), math.radians(self.y), self.z)

    def to_degrees(self) -> 'Coordinate3':
        """Convert the first two axes from radians to degrees."""
        return Coordinate3(math.degrees(self.x), math.degrees(self.y), self.z)

    def to_arcsec(self) -> 'Coordinate3':
        """Convert the first two axes from radians to seconds of arc."""
        factor = ProjectionConstants.ARCSEC_PER_DEGREE.value
        return Coordinate3(
            math.degrees(self.x) * factor,
            math.degrees(self.y) * factor,
            self.z
        )

    def to_geo(self) -> 'Coordinate3':
        """Convert internal (lon, lat, h) radians to (lat, lon, h) degrees."""
        return Coordinate3(math.degrees(self.y), math.degrees(self.x), self.z)

    def hypot3(self, other: 'Coordinate3') -> float:
        """Euclidean distance between two coordinates.

        Nested two-argument `math.hypot` calls avoid the overflow and
        underflow of a naive sum of squares.

        Parameters
        ----------
        other : Coordinate3
            The other coordinate, in the same SRS and units.

        Returns
        -------
        float
            Non-negative distance; zero iff both coordinates are equal.
        """
        return math.hypot(
            math.hypot(self.x - other.x, self.y - other.y),
            self.z - other.z
        )
