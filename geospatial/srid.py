"""
Spatial Reference Identifiers.

Closed table of the spatial reference systems the projector supports, each
mapped to the string the projection engine understands.
"""

from enum import Enum
from typing import Union

from common.exceptions import UnknownEpsgCodeError


GEOGRAPHIC = "geographic"
GEOCENTRIC = "geocentric"
PROJECTED = "projected"

_KINDS = {
    4326: (GEOGRAPHIC, "WGS 84"),
    4258: (GEOGRAPHIC, "ETRS89"),
    4979: (GEOGRAPHIC, "WGS 84 (3D)"),
    4937: (GEOGRAPHIC, "ETRS89 (3D)"),
    4978: (GEOCENTRIC, "WGS 84 geocentric"),
    4936: (GEOCENTRIC, "ETRS89 geocentric"),
    3857: (PROJECTED, "WGS 84 / Pseudo-Mercator"),
    25832: (PROJECTED, "ETRS89 / UTM zone 32N"),
    25833: (PROJECTED, "ETRS89 / UTM zone 33N"),
    32632: (PROJECTED, "WGS 84 / UTM zone 32N"),
    32633: (PROJECTED, "WGS 84 / UTM zone 33N"),
    3413: (PROJECTED, "WGS 84 / NSIDC Sea Ice Polar Stereographic North"),
    3031: (PROJECTED, "WGS 84 / Antarctic Polar Stereographic"),
}


class SpatialReferenceIdentifier(Enum):
    """Supported spatial reference systems.

    Each member's value is the engine identifier, an authority code
    followed by the numeric code (e.g. ``"EPSG:4326"``).
    """
    Epsg4326 = "EPSG:4326"
    Epsg4258 = "EPSG:4258"
    Epsg4979 = "EPSG:4979"
    Epsg4937 = "EPSG:4937"
    Epsg4978 = "EPSG:4978"
    Epsg4936 = "EPSG:4936"
    Epsg3857 = "EPSG:3857"
    Epsg25832 = "EPSG:25832"
    Epsg25833 = "EPSG:25833"
    Epsg32632 = "EPSG:32632"
    Epsg32633 = "EPSG:32633"
    Epsg3413 = "EPSG:3413"
    Epsg3031 = "EPSG:3031"

    def as_str(self) -> str:
        """The engine identifier string."""
        return self.value

    @property
    def code(self) -> int:
        return int(self.value.split(":", 1)[1])

    @property
    def kind(self) -> str:
        """One of 'geographic', 'geocentric' or 'projected'."""
        return _KINDS[self.code][0]

    @property
    def description(self) -> str:
        return _KINDS[self.code][1]

    @property
    def is_geographic(self) -> bool:
        return self.kind == GEOGRAPHIC

    @classmethod
    def parse(cls, value: Union['SpatialReferenceIdentifier', str, int]) -> 'SpatialReferenceIdentifier':
        """Resolve a member from a member, an engine string or a numeric code.

        Parameters
        ----------
        value : SpatialReferenceIdentifier, str or int
            E.g. ``SpatialReferenceIdentifier.Epsg4326``, ``"EPSG:4326"``,
            ``"epsg:4326"``, ``"4326"`` or ``4326``.

        Returns
        -------
        SpatialReferenceIdentifier

        Raises
        ------
        UnknownEpsgCodeError
            If the value does not name a supported system.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise UnknownEpsgCodeError(value)
        if isinstance(value, int):
            text = f"EPSG:{value}"
        elif isinstance(value, str):
            text = value.strip().upper()
            if text.isdigit():
                text = f"EPSG:{text}"
        else:
            raise UnknownEpsgCodeError(value)

        try:
            return cls(text)
        except ValueError:
            raise UnknownEpsgCodeError(value) from None

    def __str__(self) -> str:
        return self.value
