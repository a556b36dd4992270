"""
Geospatial Module for Coordinate and Pose Projection.

All conversions between spatial reference systems go through this module.
Point math is delegated to PROJ via `pyproj`; pose orientation is
transported locally by finite differences.

This module provides:
- The table of supported spatial reference systems
- A rigid transform type for poses
- The `Projector` for point, point-array and pose conversion
"""

from geospatial.srid import SpatialReferenceIdentifier

from geospatial.isometry import Isometry3

from geospatial.projections import Projector

__all__ = [
    # Reference systems
    "SpatialReferenceIdentifier",
    # Rigid transforms
    "Isometry3",
    # Projection
    "Projector",
]
