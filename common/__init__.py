"""
Common utilities and infrastructure for the coordinate projection library.

This package provides foundational components used across all modules:
- Constants and tunables with provenance
- Unit registry for angular and linear quantities
- The `Coordinate3` value type
- Error taxonomy
- Logging infrastructure
"""

from common.constants import ProjectionConstants
from common.units import ureg, Q_, angle_to
from common.types import Coordinate3
from common.exceptions import (
    EprojError,
    ConstructionError,
    UnknownEpsgCodeError,
    ConversionError,
    DegenerateBasisError,
)
from common.logging_config import get_logger

__all__ = [
    "ProjectionConstants",
    "ureg",
    "Q_",
    "angle_to",
    "Coordinate3",
    "EprojError",
    "ConstructionError",
    "UnknownEpsgCodeError",
    "ConversionError",
    "DegenerateBasisError",
    "get_logger",
]
