from .pv_provider import PVCoordinatesProvider, ConstantPVProvider, LinearTwoPointsPVProvider, TopocentricPoint
