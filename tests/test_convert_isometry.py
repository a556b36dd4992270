from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from common.exceptions import ConversionError, DegenerateBasisError
from geospatial.isometry import Isometry3
from geospatial.projections import Projector
from geospatial.srid import SpatialReferenceIdentifier as Srid


def test_translation_is_the_converted_origin(utm32_point):
    projector = Projector(Srid.Epsg25832, Srid.Epsg4979)
    pose = Isometry3.from_euler(utm32_point, 0.0, 0.0, math.pi)

    converted = projector.convert_isometry(pose)

    np.testing.assert_array_equal(converted.translation, projector.convert_point(utm32_point))
    assert np.linalg.norm(converted.rotation.as_quat()) == pytest.approx(1.0)


def test_same_system_preserves_orientation():
    projector = Projector(Srid.Epsg4978, Srid.Epsg4978)
    pose = Isometry3.from_euler([4177139.64, 855008.84, 4728267.31], 0.3, -0.7, 2.1)

    converted = projector.convert_isometry(pose)

    np.testing.assert_allclose(converted.translation, pose.translation, atol=1e-6)
    np.testing.assert_allclose(converted.rotation.as_matrix(), pose.rotation.as_matrix(), atol=1e-6)


def test_adjacent_utm_zones_rotate_about_the_vertical(utm32_point):
    projector = Projector(Srid.Epsg25832, Srid.Epsg25833)
    converted = projector.convert_isometry(Isometry3.from_parts(utm32_point, Rotation.identity()))

    x_axis, y_axis, z_axis = converted.basis_vectors()
    np.testing.assert_allclose(z_axis, [0.0, 0.0, 1.0], atol=1e-9)

    # Meridian convergence differs by a few degrees between zones 32 and 33
    angle = math.degrees(math.acos(np.clip(x_axis @ [1.0, 0.0, 0.0], -1.0, 1.0)))
    assert 3.0 < angle < 6.0


def test_output_basis_is_right_handed_for_mirroring_engine(install_engine, linear_engine):
    # Engine swaps the x and y axes, a reflection
    install_engine(linear_engine([[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]))
    projector = Projector(Srid.Epsg4978, Srid.Epsg4978)

    converted = projector.convert_isometry(Isometry3.from_parts([1.0, 2.0, 3.0], Rotation.identity()))

    np.testing.assert_allclose(converted.translation, [2.0, 1.0, 3.0])
    np.testing.assert_allclose(
        converted.rotation.as_matrix(),
        [[0.0, 1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, -1.0]],
        atol=1e-12,
    )


def test_scaling_engine_keeps_orientation(install_engine, linear_engine):
    engine = install_engine(linear_engine(np.diag([2.0, 2.0, 2.0])))
    projector = Projector(Srid.Epsg4978, Srid.Epsg4978)
    pose = Isometry3.from_euler([5.0, -3.0, 1.0], 0.2, 0.1, -0.4)

    converted = projector.convert_isometry(pose)

    np.testing.assert_allclose(converted.rotation.as_matrix(), pose.rotation.as_matrix(), atol=1e-12)
    assert engine.calls == 3


def test_probe_offset_is_configurable(install_engine, linear_engine):
    install_engine(linear_engine(np.eye(3)))
    pose = Isometry3.from_euler([0.0, 0.0, 0.0], 0.0, 0.0, 0.5)

    for offset in (1e-3, 1.0, 250.0):
        projector = Projector(Srid.Epsg4978, Srid.Epsg4978, probe_offset=offset)
        converted = projector.convert_isometry(pose)
        np.testing.assert_allclose(converted.rotation.as_matrix(), pose.rotation.as_matrix(), atol=1e-9)


def test_geographic_pole_is_degenerate():
    # Longitude collapses at the pole, so the x probe lands on the origin
    projector = Projector(Srid.Epsg4979, Srid.Epsg4978)
    pose = Isometry3.from_euler([0.0, 90.0, 0.0], 0.0, 0.0, math.pi)

    with pytest.raises(DegenerateBasisError) as excinfo:
        projector.convert_isometry(pose)

    assert excinfo.value.ratio <= projector.degeneracy_tolerance
    assert excinfo.value.x_axis.shape == (3,)
    assert np.linalg.norm(excinfo.value.y_axis) > 1000.0


def test_polar_stereographic_pole_is_degenerate():
    projector = Projector(Srid.Epsg4326, Srid.Epsg3413)
    pose = Isometry3.from_euler([-45.0, 90.0, 0.0], 0.0, 0.0, math.pi)

    with pytest.raises(DegenerateBasisError):
        projector.convert_isometry(pose)


def test_collinear_probes_are_degenerate(install_engine, linear_engine):
    # Rank-deficient engine: everything maps onto the x axis
    install_engine(linear_engine([[1.0, 1.0, 1.0], [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]))
    projector = Projector(Srid.Epsg4978, Srid.Epsg4978)

    with pytest.raises(DegenerateBasisError):
        projector.convert_isometry(Isometry3.identity())


def test_tolerance_controls_rejection(utm32_point):
    pose = Isometry3.from_parts(utm32_point, Rotation.identity())

    Projector(Srid.Epsg25832, Srid.Epsg25833).convert_isometry(pose)
    with pytest.raises(DegenerateBasisError):
        Projector(Srid.Epsg25832, Srid.Epsg25833, degeneracy_tolerance=2.0).convert_isometry(pose)


def test_probe_outside_domain_is_a_conversion_error():
    projector = Projector(Srid.Epsg4979, Srid.Epsg4978)
    # Identity orientation at the pole pushes the y probe to latitude 91
    pose = Isometry3.from_parts([0.0, 90.0, 0.0], Rotation.identity())

    with pytest.raises(ConversionError):
        projector.convert_isometry(pose)


def test_vertical_axis_into_geographic_target_is_accepted():
    # Web Mercator northing of 85°N; the pose's x axis points straight up
    projector = Projector(Srid.Epsg3857, Srid.Epsg4979)
    pose = Isometry3.from_euler([0.0, 19971868.88, 0.0], 0.0, -math.pi / 2, 0.0)

    converted = projector.convert_isometry(pose)

    np.testing.assert_array_equal(converted.translation, projector.convert_point(pose.translation))
    x_axis, y_axis, _ = converted.basis_vectors()
    np.testing.assert_allclose(x_axis, [0.0, 0.0, 1.0], atol=1e-6)
    np.testing.assert_allclose(y_axis, [0.0, 1.0, 0.0], atol=1e-6)


def test_degree_and_metre_axes_are_compared_in_metres(install_engine, linear_engine):
    # Horizontal axes shrink to ~1e-7 degrees per metre, height stays in metres
    install_engine(linear_engine(np.diag([1e-7, 1e-7, 1.0])))
    projector = Projector(Srid.Epsg4978, Srid.Epsg4979)
    pose = Isometry3.from_euler([0.0, 0.0, 0.0], 0.0, -math.pi / 2, 0.0)

    converted = projector.convert_isometry(pose)

    x_axis, _, _ = converted.basis_vectors()
    np.testing.assert_allclose(x_axis, [0.0, 0.0, 1.0], atol=1e-6)


def test_longitude_axis_vanishes_at_geographic_pole(install_engine, linear_engine):
    install_engine(linear_engine(np.eye(3)))
    projector = Projector(Srid.Epsg4979, Srid.Epsg4979)
    pose = Isometry3.from_euler([0.0, 90.0, 0.0], 0.0, 0.0, math.pi)

    with pytest.raises(DegenerateBasisError) as excinfo:
        projector.convert_isometry(pose)
    assert excinfo.value.ratio < 1e-9
