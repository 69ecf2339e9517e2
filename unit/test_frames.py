import numpy as np
import pytest

from sigprop import constants
from sigprop.data_types import PVCoordinates
from sigprop.errors import ArraySizeError, InvalidFrameError
from sigprop.models.frames import FrameTransform, Frame, GCRF, EME2000, ITRF, get_frame, geodetic2cartesian, \
    cartesian2geodetic, latlon2dcm_e_enu, enu2azel


def test_identity_transform(ref_date):
    transform = ITRF.get_transform_to(ITRF, ref_date)
    np.testing.assert_array_equal(transform.rotation, np.eye(3))
    np.testing.assert_array_equal(transform.rotation_rate, np.zeros((3, 3)))


def test_transform_inverse(ref_date):
    forward = GCRF.get_transform_to(ITRF, ref_date)
    backward = ITRF.get_transform_to(GCRF, ref_date)
    round_trip = forward.compose(backward)
    np.testing.assert_allclose(round_trip.rotation, np.eye(3), atol=1e-15)
    np.testing.assert_allclose(round_trip.rotation_rate, np.zeros((3, 3)), atol=1e-19)

    np.testing.assert_allclose(forward.inverse().rotation, backward.rotation, atol=1e-15)


def test_transform_composition(ref_date):
    direct = EME2000.get_transform_to(ITRF, ref_date)
    composed = EME2000.get_transform_to(GCRF, ref_date).compose(GCRF.get_transform_to(ITRF, ref_date))
    np.testing.assert_allclose(direct.rotation, composed.rotation, atol=1e-15)
    np.testing.assert_allclose(direct.rotation_rate, composed.rotation_rate, atol=1e-19)


def test_rotation_rate_finite_differences(ref_date):
    h = 1e-2
    transform = GCRF.get_transform_to(ITRF, ref_date)
    plus = GCRF.get_transform_to(ITRF, ref_date.shifted_by(h)).rotation
    minus = GCRF.get_transform_to(ITRF, ref_date.shifted_by(-h)).rotation
    np.testing.assert_allclose(transform.rotation_rate, (plus - minus) / (2 * h), atol=1e-11)


def test_ground_point_velocity(ref_date):
    equator = PVCoordinates([constants.EARTH_SEMI_MAJOR_AXIS, 0.0, 0.0])
    inertial = ITRF.get_transform_to(GCRF, ref_date).transform_pv(equator)
    assert np.linalg.norm(inertial.position) == pytest.approx(constants.EARTH_SEMI_MAJOR_AXIS)
    assert np.linalg.norm(inertial.velocity) == pytest.approx(
        constants.EARTH_ROTATION * constants.EARTH_SEMI_MAJOR_AXIS, rel=1e-12)
    # eastward motion
    assert np.cross(inertial.position, inertial.velocity)[2] > 0


def test_earth_rotation_period(ref_date):
    sidereal_day = 2 * np.pi / constants.EARTH_ROTATION
    start = GCRF.get_transform_to(ITRF, ref_date).rotation
    end = GCRF.get_transform_to(ITRF, ref_date.shifted_by(sidereal_day)).rotation
    np.testing.assert_allclose(start, end, atol=1e-12)


def test_frame_bias():
    transform = GCRF.get_transform_to(EME2000, None)
    np.testing.assert_allclose(transform.rotation @ transform.rotation.T, np.eye(3), atol=1e-15)
    # tens of milliarcseconds
    angle = np.arccos((np.trace(transform.rotation) - 1) / 2)
    assert 0 < angle < 2e-7


def test_pseudo_inertial_flags():
    assert GCRF.is_pseudo_inertial()
    assert EME2000.is_pseudo_inertial()
    assert not ITRF.is_pseudo_inertial()
    assert not Frame("Station", ITRF).is_pseudo_inertial()


def test_frame_tree():
    isolated = Frame("Isolated")
    assert ITRF.shares_tree_with(EME2000)
    assert not isolated.shares_tree_with(GCRF)
    assert not GCRF.shares_tree_with("GCRF")
    with pytest.raises(InvalidFrameError):
        isolated.get_transform_to(GCRF, None)


def test_get_frame():
    assert get_frame("itrf") is ITRF
    assert get_frame("EME2000") is EME2000
    with pytest.raises(InvalidFrameError):
        get_frame("TOD")


def test_transform_shape():
    with pytest.raises(ArraySizeError):
        FrameTransform(np.eye(2))
    with pytest.raises(ArraySizeError):
        PVCoordinates([1.0, 2.0])


def test_geodetic_round_trip():
    lat, lon, height = np.radians(38.7), np.radians(-9.1), 100.0
    position = geodetic2cartesian(lat, lon, height)
    np.testing.assert_allclose(cartesian2geodetic(*position), [lat, lon, height], atol=1e-6)

    pole = cartesian2geodetic(0.0, 0.0, 6_400_000.0)
    assert pole[0] == pytest.approx(np.pi / 2)


def test_enu_azimuth_elevation():
    dcm = latlon2dcm_e_enu(np.radians(38.7), np.radians(-9.1))
    up = dcm.T @ np.array([0.0, 0.0, 1.0])
    assert enu2azel(*(dcm @ up))[1] == pytest.approx(np.pi / 2)

    azimuth, elevation = enu2azel(1.0, 0.0, 1.0)
    assert azimuth == pytest.approx(np.pi / 2)
    assert elevation == pytest.approx(np.pi / 4)


def test_package_exports():
    import sigprop.models.frames as frames

    for name in frames.frames.__all__:
        assert getattr(frames, name) is getattr(frames.frames, name)
