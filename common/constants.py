"""
Constants and Tunables for Coordinate Projection.

This module provides the numerical constants used by the projection layer,
each with its unit and provenance. Values that act as tuning knobs for the
orientation-transport algorithm live here so callers can read their defaults
without digging through the projector code.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- PROJ coordinate transformation software: https://proj.org
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class ProjectionConstants:
    """Registry of constants used by the projection layer.

    Orientation Transport
    ---------------------
    The probe offset and degeneracy tolerance control how a rotation is
    carried through a nonlinear point transform. Both can be overridden
    per `Projector` instance.

    Angular Units
    -------------
    Exact conversion factors between the angular units exposed by
    `Coordinate3`.
    """

    # =========================================================================
    # Orientation Transport
    # =========================================================================

    PROBE_OFFSET: Final[Constant] = Constant(
        value=1.0,
        uncertainty=0.0,
        unit="source SRS native unit",
        source="Finite-difference frame transport",
        description=(
            "Distance of the x/y probe points from the isometry origin, "
            "in the native axis unit of the source SRS (degrees or metres)"
        )
    )

    DEGENERACY_TOLERANCE: Final[Constant] = Constant(
        value=1e-6,
        uncertainty=0.0,
        unit="dimensionless",
        source="Finite-difference frame transport",
        description=(
            "Minimum sine of the angle between the transported axes, and "
            "minimum ratio of their metric lengths, below which the "
            "transported basis is rejected as singular"
        )
    )

    # =========================================================================
    # Angular Units
    # =========================================================================

    ARCSEC_PER_DEGREE: Final[Constant] = Constant(
        value=3600.0,
        uncertainty=0.0,  # Defined exactly
        unit="arcsec per degree",
        source="ISO 80000-3:2006",
        description="Seconds of arc in one degree"
    )

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )
