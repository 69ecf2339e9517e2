"""Useful reference frame functions and conversions

The frames of this module form a tree rooted at the GCRF. All frames share the same origin (the center of the
Earth), so a transform between two frames is a pure rotation `M` together with its time derivative `M_dot`:

    p_target = M @ p_source
    v_target = M @ v_source + M_dot @ p_source

This is the minimal frame transform service consumed by the signal propagation models. Precession, nutation and
polar motion are not modelled: the ITRF below is a uniform rotation of the GCRF around its Z axis.
"""

import numpy as np
from scipy.spatial.transform import Rotation

from sigprop import constants
from sigprop.data_types.date import J2000_EPOCH
from sigprop.errors import InvalidFrameError
from sigprop.data_types.pv_coordinates import PVCoordinates
from sigprop.utils.math_utils import rot1, rot3, rot3_dot, require_len_matrix

__all__ = ["FrameTransform", "Frame", "GCRF", "EME2000", "ITRF", "get_frame", "dcm_i_e", "dcm_i_e_dot",
           "geodetic2cartesian", "cartesian2geodetic", "latlon2dcm_e_enu", "enu2azel"]


class FrameTransform:
    """
    Rotation (and rotation rate) between two co-centered frames, evaluated at a given date.

    Attributes:
        rotation(numpy.ndarray): 3x3 matrix `M` mapping source coordinates into target coordinates
        rotation_rate(numpy.ndarray): 3x3 time derivative `M_dot` of the rotation matrix [1/s]
    """
    __slots__ = ["rotation", "rotation_rate"]

    def __init__(self, rotation, rotation_rate=None):
        rotation = np.array(rotation, dtype=float)
        rotation_rate = np.zeros((3, 3)) if rotation_rate is None else np.array(rotation_rate, dtype=float)
        require_len_matrix(rotation)
        require_len_matrix(rotation_rate)
        self.rotation = rotation
        self.rotation_rate = rotation_rate

    @classmethod
    def identity(cls):
        return cls(np.eye(3))

    def transform_vector(self, vector):
        """ Rotates a free vector (no transport term) """
        return self.rotation @ vector

    def transform_pv(self, pv):
        """
        Args:
            pv(sigprop.data_types.pv_coordinates.PVCoordinates): coordinates in the source frame
        Returns:
            sigprop.data_types.pv_coordinates.PVCoordinates: coordinates in the target frame
        """
        position = self.rotation @ pv.position
        velocity = self.rotation @ pv.velocity + self.rotation_rate @ pv.position
        return PVCoordinates(position, velocity)

    def compose(self, other):
        """
        Returns the transform that applies `self` first and then `other`.

        Args:
            other(FrameTransform): transform from the target of `self` to a third frame
        Returns:
            FrameTransform: transform from the source of `self` to the target of `other`
        """
        rotation = other.rotation @ self.rotation
        rotation_rate = other.rotation_rate @ self.rotation + other.rotation @ self.rotation_rate
        return FrameTransform(rotation, rotation_rate)

    def inverse(self):
        """ Inverse transform (for a rotation matrix, d(M^T)/dt = M_dot^T) """
        return FrameTransform(self.rotation.T, self.rotation_rate.T)


class Frame:
    """
    Node of the frame tree.

    Args:
        name(str): frame name
        parent(Frame or None): parent frame. A frame without parent is a root frame
        transform_provider(callable or None): function of an `AbsoluteDate` returning the `FrameTransform` from the
            parent frame to this frame. Ignored for root frames; the identity is used when None
        pseudo_inertial(bool): whether the frame has a negligible rotation with respect to its parent
    """

    def __init__(self, name, parent=None, transform_provider=None, pseudo_inertial=True):
        self.name = name
        self.parent = parent
        self._transform_provider = transform_provider
        self._pseudo_inertial = pseudo_inertial

    def __repr__(self):
        return f"<Frame '{self.name}'>"

    def __str__(self):
        return self.name

    def get_root(self):
        frame = self
        while frame.parent is not None:
            frame = frame.parent
        return frame

    def is_pseudo_inertial(self):
        """ A frame is pseudo-inertial when it and all its ancestors are flagged as pseudo-inertial """
        frame = self
        while frame is not None:
            if not frame._pseudo_inertial:
                return False
            frame = frame.parent
        return True

    def shares_tree_with(self, other):
        return isinstance(other, Frame) and self.get_root() is other.get_root()

    def _transform_from_parent(self, date):
        if self.parent is None or self._transform_provider is None:
            return FrameTransform.identity()
        return self._transform_provider(date)

    def _transform_from_root(self, date):
        chain = []
        frame = self
        while frame.parent is not None:
            chain.append(frame)
            frame = frame.parent

        transform = FrameTransform.identity()
        for frame in reversed(chain):
            transform = transform.compose(frame._transform_from_parent(date))
        return transform

    def get_transform_to(self, destination, date):
        """
        Computes the transform from this frame to the `destination` frame at the given date.

        Args:
            destination(Frame): destination frame
            date(sigprop.data_types.date.AbsoluteDate): date of the transform
        Returns:
            FrameTransform: the transform from `self` to `destination`
        Raises:
            InvalidFrameError: if the two frames do not belong to the same frame tree
        """
        if destination is self:
            return FrameTransform.identity()
        if not self.shares_tree_with(destination):
            raise InvalidFrameError(f"frames {self} and {destination} do not belong to the same frame tree")

        return self._transform_from_root(date).inverse().compose(destination._transform_from_root(date))


def _era(date):
    """ Earth rotation angle [rad] for the given date (uniform rotation from the J2000 value) """
    return constants.EARTH_ROTATION_ANGLE_J2000 + constants.EARTH_ROTATION * date.duration_from(J2000_EPOCH)


def dcm_i_e(date):
    """
    rotation matrix (DCM) from ECI frame (i) to ECEF frame (e) at the given date
    Args:
        date (sigprop.data_types.date.AbsoluteDate): date of the rotation
    Return:
        numpy.ndarray : 3x3 rotation matrix of angle theta around the Z-axis (ECI to ECEF)
    """
    return rot3(_era(date))


def dcm_i_e_dot(date):
    """
    Derivative of rotation matrix (DCM) from ECI frame (i) to ECEF frame (e) at the given date
    Args:
        date (sigprop.data_types.date.AbsoluteDate): date of the rotation
    Return:
        numpy.ndarray : 3x3 rotation matrix derivative of angle theta around the Z-axis (ECI to ECEF)
    """
    return rot3_dot(_era(date), constants.EARTH_ROTATION)


# frame bias between GCRF and EME2000 (IERS Conventions 2010, Eq. (5.21)) [rad]
_MAS2RAD = constants.DEG2RAD / 3600.0e3
_FRAME_BIAS = Rotation.from_euler("xyz", [-6.8192 * _MAS2RAD, -16.617 * _MAS2RAD, -14.6 * _MAS2RAD]).as_matrix()


def _frame_bias_transform(_date):
    return FrameTransform(_FRAME_BIAS)


def _earth_rotation_transform(date):
    return FrameTransform(dcm_i_e(date), dcm_i_e_dot(date))


GCRF = Frame("GCRF")
EME2000 = Frame("EME2000", GCRF, _frame_bias_transform, pseudo_inertial=True)
ITRF = Frame("ITRF", GCRF, _earth_rotation_transform, pseudo_inertial=False)

_cache = {"GCRF": GCRF, "EME2000": EME2000, "ITRF": ITRF}


def get_frame(name):
    """
    Args:
        name(str): name of one of the predefined frames ("GCRF", "EME2000", "ITRF")
    Returns:
        Frame: the predefined frame
    Raises:
        InvalidFrameError: if the frame name is unknown
    """
    try:
        return _cache[name.upper()]
    except KeyError:
        raise InvalidFrameError(f"Unknown frame {name}. Available frames are {list(_cache.keys())}")


def geodetic2cartesian(lat, long, height, a=constants.EARTH_SEMI_MAJOR_AXIS, f=constants.EARTH_FLATNESS):
    """
    Convert from geodetic coordinates to cartesian coordinates. Both refer to the body-fixed frame

    Args:
        lat(float): latitude in [rad]
        long(float): longitude in [rad]
        height(float): height in [m]
        a(float): equatorial radius of the ellipsoid [m]
        f(float): flattening of the ellipsoid
    Return:
        numpy.ndarray : [x, y, z] components in [m]
    """
    e2 = 2 * f - f * f

    # compute prime vertical radius of curvature at a given latitude for a given ellipsoid
    N = a / np.sqrt(1 - e2 * np.sin(lat) * np.sin(lat))

    x = (N + height) * np.cos(lat) * np.cos(long)
    y = (N + height) * np.cos(lat) * np.sin(long)
    z = ((1 - e2) * N + height) * np.sin(lat)

    return np.array([x, y, z])


def cartesian2geodetic(x, y, z, a=constants.EARTH_SEMI_MAJOR_AXIS, f=constants.EARTH_FLATNESS):
    """
    Convert from cartesian coordinates to geodetic coordinates. Both refer to the body-fixed frame

    Args:
        x(float): x component [m]
        y(float): y component [m]
        z(float): z component [m]
        a(float): equatorial radius of the ellipsoid [m]
        f(float): flattening of the ellipsoid
    Returns:
        list[float, float, float] : [lat, long, height] in [rad,rad,m]
    """
    e2 = 2 * f - f * f

    # computation of longitude
    long = np.arctan2(y, x)

    # initial value of latitude
    p = np.sqrt(x * x + y * y)
    lat = np.sign(z) * constants.PI / 2 if p == 0 else np.arctan2(z / p, 1 - e2)

    # iterative process to refine latitude
    MAX_ITERS = 10
    ABS_TOL = 1E-12
    height = abs(z) - a * np.sqrt(1 - e2) if p == 0 else 0
    for _ in range(MAX_ITERS):
        if p == 0:
            break
        lat_prev = lat

        N = a / np.sqrt(1 - e2 * np.sin(lat) * np.sin(lat))
        height = p / np.cos(lat) - N
        lat = np.arctan2(z / p, 1 - N / (N + height) * e2)

        if abs(lat - lat_prev) < ABS_TOL:
            break

    return [lat, long, height]


def latlon2dcm_e_enu(lat, lon):
    """
    transformation matrix from the ECEF frame to the ENU frame defined by lat and lon.
    Args:
        lat(float): latitude, rad
        lon(float): longitude, rad
    Returns:
        numpy.ndarray : rotation matrix from ECEF to ENU frame (3x3)
    """
    return rot1((constants.PI / 2 - lat)) @ rot3((constants.PI / 2 + lon))


def enu2azel(x_enu, y_enu, z_enu):
    """
    Transform ENU coordinates in Azimuth (Az) and Elevation (El) angles

    Args:
        x_enu(float) : X component in ENU frame [m]
        y_enu(float) : Y component in ENU frame [m]
        z_enu(float) : Z component in ENU frame [m]
    Return:
        list[float, float] : [Az, El] angles in [rad]
    """
    dist = np.sqrt(x_enu * x_enu + y_enu * y_enu + z_enu * z_enu)

    El = np.arcsin(z_enu / dist)

    Az = np.arctan2(x_enu, y_enu) % (2 * constants.PI)

    return [Az, El]
