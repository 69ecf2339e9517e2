from .pv_coordinates import PVCoordinates
