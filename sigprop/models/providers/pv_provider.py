""" Position history providers

A provider answers "where is this point, and how fast is it moving, at date t, expressed in frame F". The signal
propagation models only rely on the :py:class:`PVCoordinatesProvider` interface; the concrete classes below cover
the simple motions needed by callers and tests (fixed point, linear motion, station on a rotating body).
"""
from abc import ABC, abstractmethod

import numpy as np

from sigprop.data_types.pv_coordinates import PVCoordinates
from sigprop.errors import DegenerateGeometryError
from sigprop.models.frames import geodetic2cartesian, cartesian2geodetic, latlon2dcm_e_enu

__all__ = ["PVCoordinatesProvider", "ConstantPVProvider", "LinearTwoPointsPVProvider", "TopocentricPoint"]


class PVCoordinatesProvider(ABC):
    """ Interface of the position history of an emitter or a receiver """

    @abstractmethod
    def get_pv_coordinates(self, date, frame):
        """
        Args:
            date(sigprop.data_types.date.AbsoluteDate): date of the requested coordinates
            frame(sigprop.models.frames.Frame): frame of the requested coordinates
        Returns:
            sigprop.data_types.pv_coordinates.PVCoordinates: position and velocity of the point
        """

    @abstractmethod
    def get_native_frame(self, date):
        """
        Args:
            date(sigprop.data_types.date.AbsoluteDate): date
        Returns:
            sigprop.models.frames.Frame: frame in which the provider naturally expresses its coordinates
        """


class ConstantPVProvider(PVCoordinatesProvider):
    """
    Point with constant coordinates in a given frame.

    Args:
        pv(PVCoordinates): coordinates of the point. The velocity is kept as given and is not integrated (the
            point does not move), which mirrors a frozen state
        frame(sigprop.models.frames.Frame): frame of `pv`
    """

    def __init__(self, pv, frame):
        self._pv = pv if isinstance(pv, PVCoordinates) else PVCoordinates(pv)
        self._frame = frame

    def get_pv_coordinates(self, date, frame):
        return self._frame.get_transform_to(frame, date).transform_pv(self._pv)

    def get_native_frame(self, date):
        return self._frame


class LinearTwoPointsPVProvider(PVCoordinatesProvider):
    """
    Point moving at constant velocity, defined by two dated positions. The motion is extrapolated outside the
    interval.

    Args:
        start_pv(PVCoordinates or numpy.ndarray): position (velocity is ignored) at `start_date`
        start_date(sigprop.data_types.date.AbsoluteDate): first date
        end_pv(PVCoordinates or numpy.ndarray): position (velocity is ignored) at `end_date`
        end_date(sigprop.data_types.date.AbsoluteDate): second date
        frame(sigprop.models.frames.Frame): frame of the positions
    Raises:
        DegenerateGeometryError: if the two dates are equal
    """

    def __init__(self, start_pv, start_date, end_pv, end_date, frame):
        start = start_pv.position if isinstance(start_pv, PVCoordinates) else np.array(start_pv, dtype=float)
        end = end_pv.position if isinstance(end_pv, PVCoordinates) else np.array(end_pv, dtype=float)
        duration = end_date.duration_from(start_date)
        if duration == 0.0:
            raise DegenerateGeometryError(f"the two points of the linear motion share the date {start_date}")
        self._start = start
        self._start_date = start_date
        self._velocity = (end - start) / duration
        self._frame = frame

    def get_pv_coordinates(self, date, frame):
        dt = date.duration_from(self._start_date)
        pv = PVCoordinates(self._start + self._velocity * dt, self._velocity)
        return self._frame.get_transform_to(frame, date).transform_pv(pv)

    def get_native_frame(self, date):
        return self._frame


class TopocentricPoint(PVCoordinatesProvider):
    """
    Fixed point on the surface of (or above) a celestial body, such as a ground station.

    Args:
        body(sigprop.models.bodies.CelestialBody): parent body. The point is fixed in `body.body_frame`
        latitude(float): geodetic latitude [rad]
        longitude(float): longitude [rad]
        height(float): height above the body ellipsoid [m]
    """

    def __init__(self, body, latitude, longitude, height):
        self.body = body
        self.latitude = latitude
        self.longitude = longitude
        self.height = height
        self._position = geodetic2cartesian(latitude, longitude, height, body.equatorial_radius, body.flattening)
        self._dcm_body_enu = latlon2dcm_e_enu(latitude, longitude)

    @classmethod
    def from_cartesian(cls, body, position):
        """ Builds the point from body-fixed cartesian coordinates [m] """
        lat, long, height = cartesian2geodetic(*position, body.equatorial_radius, body.flattening)
        return cls(body, lat, long, height)

    @property
    def body_frame(self):
        return self.body.body_frame

    @property
    def position(self):
        """ Body-fixed cartesian position [m] """
        return self._position

    @property
    def dcm_body_enu(self):
        """ Rotation matrix from the body-fixed frame to the local East-North-Up frame """
        return self._dcm_body_enu

    def get_pv_coordinates(self, date, frame):
        return self.body_frame.get_transform_to(frame, date).transform_pv(PVCoordinates(self._position))

    def get_native_frame(self, date):
        return self.body_frame

    def __repr__(self):
        return f"<TopocentricPoint lat={self.latitude} lon={self.longitude} h={self.height}>"
