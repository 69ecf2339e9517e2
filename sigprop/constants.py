""" Definition of some useful constants. """

"""
Reference:
    [1] Springer Handbook of Global Navigation Satellite Systems, Peter J.G. Teunissen, Oliver Montenbruck,
        Springer Cham, 2017
    [2] Petit, G. and Luzum, B. (eds.), IERS Conventions (2010), IERS Technical Note No. 36
"""

#######################
# RAD - DEG Conversions
#######################
PI = 3.141592653589793
DEG2RAD = PI / 180
RAD2DEG = 180 / PI

#######################################
# Orbital Mechanics and Earth constants
#######################################
SPEED_OF_LIGHT = 299792458.0  # [m/s]
MU_WGS84 = 3.986005E14  # [m^3/sec^2] (WGS84 value, for GPS)
EARTH_ROTATION = 7.292115E-5  # [rad/sec]
EARTH_FLATNESS = 1 / 298.257223563
EARTH_SEMI_MAJOR_AXIS = 6378137.0  # [m]  Equatorial radius Re

# Earth rotation angle at J2000 epoch (ERA, Eq. (5.15) of [2] evaluated at J2000.0) [rad]
EARTH_ROTATION_ANGLE_J2000 = 2 * PI * 0.7790572732640

###################################
# Signal propagation solver defaults
###################################
DEFAULT_THRESHOLD = 1.0E-12  # [s]
DEFAULT_MAX_ITER = 50
