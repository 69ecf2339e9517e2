""" Celestial bodies used as frame centers (gravitational parameter, shape and body-fixed frame) """

from sigprop import constants
from sigprop.models.frames import ITRF

__all__ = ["CelestialBody", "EARTH"]


class CelestialBody:
    """
    Attributes:
        name(str): body name
        gm(float): gravitational parameter [m^3/s^2]
        equatorial_radius(float): equatorial radius of the reference ellipsoid [m]
        flattening(float): flattening of the reference ellipsoid
        body_frame(sigprop.models.frames.Frame): body-fixed frame
    """
    __slots__ = ["name", "gm", "equatorial_radius", "flattening", "body_frame"]

    def __init__(self, name, gm, equatorial_radius, flattening, body_frame):
        super().__setattr__("name", name)
        super().__setattr__("gm", float(gm))
        super().__setattr__("equatorial_radius", float(equatorial_radius))
        super().__setattr__("flattening", float(flattening))
        super().__setattr__("body_frame", body_frame)

    def __setattr__(self, *args):
        raise TypeError("Cannot modify attributes of immutable object")

    def __repr__(self):
        return f"<CelestialBody '{self.name}' (gm={self.gm})>"


EARTH = CelestialBody("Earth", constants.MU_WGS84, constants.EARTH_SEMI_MAJOR_AXIS, constants.EARTH_FLATNESS, ITRF)
