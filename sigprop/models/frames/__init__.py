from .frames import FrameTransform, Frame, GCRF, EME2000, ITRF, get_frame, dcm_i_e, dcm_i_e_dot, \
    geodetic2cartesian, cartesian2geodetic, latlon2dcm_e_enu, enu2azel
