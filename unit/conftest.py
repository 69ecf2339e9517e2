import numpy as np
import pytest

from sigprop.data_types import PVCoordinates
from sigprop.data_types.date import AbsoluteDate
from sigprop.models.bodies import EARTH
from sigprop.models.frames import GCRF
from sigprop.models.providers import PVCoordinatesProvider, ConstantPVProvider, LinearTwoPointsPVProvider, \
    TopocentricPoint
from sigprop.utils.math_utils import rot1, rot3


class CircularOrbit(PVCoordinatesProvider):
    """ Uniform circular motion, analytic position and velocity """

    def __init__(self, radius, rate, inclination, node, phase, ref_date, frame=GCRF):
        self.radius = radius
        self.rate = rate
        self.phase = phase
        self.ref_date = ref_date
        self.frame = frame
        # orbital plane -> frame
        self._dcm = rot3(node).T @ rot1(inclination).T

    def get_pv_coordinates(self, date, frame):
        angle = self.phase + self.rate * date.duration_from(self.ref_date)
        position = self.radius * np.array([np.cos(angle), np.sin(angle), 0.0])
        velocity = self.radius * self.rate * np.array([-np.sin(angle), np.cos(angle), 0.0])
        pv = PVCoordinates(self._dcm @ position, self._dcm @ velocity)
        return self.frame.get_transform_to(frame, date).transform_pv(pv)

    def get_native_frame(self, date):
        return self.frame


class PerturbedProvider(PVCoordinatesProvider):
    """ Wraps a provider and adds a position offset that is constant in `offset_frame` """

    def __init__(self, provider, offset, offset_frame):
        self.provider = provider
        self.offset = np.array(offset, dtype=float)
        self.offset_frame = offset_frame

    def get_pv_coordinates(self, date, frame):
        pv = self.provider.get_pv_coordinates(date, frame)
        transform = self.offset_frame.get_transform_to(frame, date)
        return pv.shifted(transform.rotation @ self.offset, transform.rotation_rate @ self.offset)

    def get_native_frame(self, date):
        return self.provider.get_native_frame(date)


@pytest.fixture
def ref_date():
    # close to J2000 so that the Earth rotation angle keeps its full precision
    return AbsoluteDate(2000, 1, 2, 0, 0, 0)


@pytest.fixture
def gnss_satellite(ref_date):
    return CircularOrbit(26_560_000.0, 1.4584e-4, np.radians(55.0), np.radians(30.0), 0.3, ref_date)


@pytest.fixture
def leo_satellite(ref_date):
    return CircularOrbit(7_000_000.0, 1.0780e-3, np.radians(98.0), np.radians(-20.0), 0.8, ref_date)


@pytest.fixture
def origin_emitter():
    return ConstantPVProvider(PVCoordinates(np.zeros(3)), GCRF)


@pytest.fixture
def closing_receiver(ref_date):
    """ Receiver moving from (1e7, 0, 0) to the origin in 10 s """
    return LinearTwoPointsPVProvider(np.array([1.0e7, 0.0, 0.0]), ref_date, np.zeros(3), ref_date.shifted_by(10.0),
                                     GCRF)


@pytest.fixture
def perturbed():
    return PerturbedProvider


@pytest.fixture
def station():
    return TopocentricPoint(EARTH, np.radians(38.7), np.radians(-9.1), 100.0)
