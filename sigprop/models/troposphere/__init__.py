from .tropo_correction import TroposphericCorrection
from .tropo_saastamoinen import SaastamoinenModel
