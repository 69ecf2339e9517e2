# Constants for the tropospheric Saastamoinen model
import numpy as np
from math import cos, sin, sqrt

from sigprop import constants
from .tropo_correction import TroposphericCorrection

__all__ = ["SaastamoinenModel"]


class SaastamoinenModel(TroposphericCorrection):
    """
    A priori Saastamoinen troposphere model with seasonal meteorological tables.

    Args:
        height(float): station height above the ellipsoid [m]
        latitude(float): station geodetic latitude [rad]
    """
    LimLat = (15, 30, 45, 60, 75)

    #                   P0(mbar),T0(K),e0(mbar),beta(K/m),lambda0
    P_mean = np.array([[1013.25, 299.65, 26.31, 6.30e-3, 2.77],
                       [1017.25, 294.15, 21.79, 6.05e-3, 3.15],
                       [1015.75, 283.15, 11.66, 5.58e-3, 2.57],
                       [1011.75, 272.15, 6.78, 5.39e-3, 1.81],
                       [1013.00, 263.65, 4.11, 4.53e-3, 1.55]])

    #                     DP(mbar),DT(K),De(mbar),Db(K/m),dl
    P_season = np.array([[0.00, 0.00, 0.00, 0.00e-3, 0.00],
                         [-3.75, 7.00, 8.85, 0.25e-3, 0.33],
                         [-2.25, 11.00, 7.24, 0.32e-3, 0.46],
                         [-1.75, 15.00, 5.36, 0.81e-3, 0.74],
                         [-0.50, 14.50, 3.39, 0.62e-3, 0.30]])

    def __init__(self, height, latitude):
        self.height = height
        self.latitude = latitude

    def compute_signal_delay(self, date, elevation):
        zhd, zwd = self.compute_zenith_delays(self.height, self.latitude, date.doy)
        return (zhd + zwd) * self.mapping_function(elevation) / constants.SPEED_OF_LIGHT

    @staticmethod
    def mapping_function(el):
        """
        Args:
            el(float): elevation [rad]
        Returns:
            float: obliquity factor applied to the zenith delays
        """
        return 1.001 / sqrt(0.002001 + sin(el) ** 2)

    @staticmethod
    def meteo_parameters(lat, doy):
        """
        Interpolates the seasonal meteorological tables.

        Args:
            lat(float): latitude [rad]
            doy(float): day of the year (from 1 to 365)
        Return:
            numpy.ndarray: pressure [mbar], temperature [K], water vapour pressure [mbar], temperature lapse rate
                [K/m] and water vapour lapse rate
        """
        # the tables are indexed by the absolute latitude in degrees
        lat_deg = abs(constants.RAD2DEG * lat)
        D_star = 211 if lat < 0 else 28

        if lat_deg >= SaastamoinenModel.LimLat[-1]:
            P0 = SaastamoinenModel.P_mean[-1]
            DP = SaastamoinenModel.P_season[-1]

        elif lat_deg <= SaastamoinenModel.LimLat[0]:
            P0 = SaastamoinenModel.P_mean[0]
            DP = SaastamoinenModel.P_season[0]

        else:
            _i = int(np.searchsorted(SaastamoinenModel.LimLat, lat_deg)) - 1
            m = (lat_deg - SaastamoinenModel.LimLat[_i]) / (SaastamoinenModel.LimLat[_i + 1] -
                                                            SaastamoinenModel.LimLat[_i])
            P0 = SaastamoinenModel.P_mean[_i] + (SaastamoinenModel.P_mean[_i + 1] - SaastamoinenModel.P_mean[_i]) * m
            DP = SaastamoinenModel.P_season[_i] + (SaastamoinenModel.P_season[_i + 1] -
                                                   SaastamoinenModel.P_season[_i]) * m

        return P0 - DP * cos(2 * np.pi * (doy - D_star) / 365.25)

    @staticmethod
    def compute_zenith_delays(h, lat, doy):
        """
        This function computes the zenith tropospheric delays using the a priori Saastamoinen Model

        This code has been adapted from:
            Open source PANG-NAV software (https://geodesy.noaa.gov/gps-toolbox/PANG-NAV.htm), tropo_correction0.m
            script, implementing the Saastamoinen Model

        Args:
            h (float) : user altitude (geodetic coordinate)     [m]
            lat (float) : user latitude (geodetic coordinate)   [rad]
            doy (float) : Day of the year (from 1 to 365)       [1 - 365]

        Return:
            tuple[float, float] : zenith hydrostatic and wet delays [m]
        """
        P, T, e = SaastamoinenModel.meteo_parameters(lat, doy)[:3]
        return SaastamoinenModel.saasthyd(P, lat, e, T, h)

    @staticmethod
    def saasthyd(p, lat, e, T, hell):
        """
        This subroutine determines the zenith hydrostatic delay based on the
        equation by Saastamoinen (1972) as refined by Davis et al. (1985)

        Reference:
        Saastamoinen, J., Atmospheric correction for the troposphere and
        stratosphere in radio ranging of satellites. The use of artificial
        satellites for geodesy, Geophys. Monogr. Ser. 15, Amer. Geophys. Union,
        pp. 274-251, 1972.
        Davis, J.L, T.A. Herring, I.I. Shapiro, A.E.E. Rogers, and G. Elgered,
        Geodesy by Radio Interferometry: Effects of Atmospheric Modeling Errors
        on Estimates of Baseline Length, Radio Science, Vol. 20, No. 6,
        pp. 1593-1607, 1985.

        input parameters:
        p:     pressure in hPa
        lat:   ellipsoidal latitude in radians
        e:     water vapour pressure in hPa
        T:     temperature in K
        hell:  ellipsoidal height in m

        output parameters:
        zhd, zwd:  zenith hydrostatic and wet delays in meter
        """
        # calculate denominator f
        f = 1 - 0.00266 * cos(2 * lat) - 0.00000028 * hell

        # calculate the zenith hydrostatic delay
        D_z_dry = 0.0022768 * p / f

        # calculate the zenith wet delay
        D_z_wet = (0.002277 * (1255 / T + 0.05) * e) / f

        return D_z_dry, D_z_wet
