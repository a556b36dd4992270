from __future__ import annotations

import numpy as np
import pytest
from pyproj.exceptions import ProjError

from geospatial import projections


class LinearEngine:
    """Stand-in for a pyproj transformer applying a fixed 3x3 matrix."""

    def __init__(self, matrix, fail_above: float | None = None):
        self.matrix = np.asarray(matrix, dtype=float)
        self.fail_above = fail_above
        self.calls = 0

    def transform(self, xx, yy, zz, radians=False, errcheck=False):
        self.calls += 1
        stacked = np.array([xx, yy, zz], dtype=float)
        if self.fail_above is not None and np.any(stacked[0] > self.fail_above):
            raise ProjError("x: Invalid coordinate")
        out = self.matrix @ stacked
        return out[0], out[1], out[2]


@pytest.fixture
def linear_engine():
    return LinearEngine


@pytest.fixture
def install_engine(monkeypatch):
    """Make every Projector built in the test use the given engine."""

    def install(engine):
        class _Factory:
            @staticmethod
            def from_crs(source, target, always_xy=False):
                return engine

        monkeypatch.setattr(projections, "Transformer", _Factory)
        return engine

    return install


@pytest.fixture
def utm32_point():
    """Sample point in ETRS89 / UTM zone 32N."""
    return np.array([691045.828, 5336014.506, 534.671])
