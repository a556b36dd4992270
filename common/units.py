"""
Unit Registry for Coordinate Handling.

This module provides a centralized unit system using the `pint` library. The
projection engine works on bare floats, so units only appear at the edges:
when callers build coordinates from tagged quantities, or when angular axes
are converted between radians, degrees and seconds of arc.

Example Usage
-------------
>>> from common.units import Q_, angle_to
>>> Q_(90, 'degree').to('radian')
<Quantity(1.57079633, 'radian')>
>>> angle_to(1.0, 'degree', 'arcsecond')
3600.0
"""

from typing import Union
import warnings

import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


def ensure_quantity(value: Union[float, pint.Quantity], default_unit: str) -> pint.Quantity:
    """Ensure a value is a pint Quantity, applying default unit if necessary.

    Parameters
    ----------
    value : float or pint.Quantity
        The value to convert.
    default_unit : str
        The unit to apply if value is a bare number.

    Returns
    -------
    pint.Quantity
        The value with units.

    Warnings
    --------
    Issues a warning if a bare number is provided without units.
    """
    if isinstance(value, pint.Quantity):
        return value
    else:
        warnings.warn(
            f"Bare number {value} provided without units. "
            f"Assuming {default_unit}. Consider using explicit units.",
            UserWarning,
            stacklevel=3
        )
        return ureg.Quantity(value, default_unit)


def angle_to(value: float, from_unit: str, to_unit: str) -> float:
    """Convert a bare angle between two angular units.

    Parameters
    ----------
    value : float
        The angle magnitude.
    from_unit, to_unit : str
        pint unit names (e.g. 'radian', 'degree', 'arcsecond').

    Returns
    -------
    float
        The magnitude expressed in `to_unit`.

    Raises
    ------
    pint.DimensionalityError
        If the units are not convertible into each other.
    """
    return float(ureg.Quantity(value, from_unit).to(to_unit).magnitude)


# Units of the Coordinate3 axes for a geographic SRS
STANDARD_UNITS = {
    # Coordinate3 convention
    "longitude": "radian",
    "latitude": "radian",
    "height": "meter",
}
