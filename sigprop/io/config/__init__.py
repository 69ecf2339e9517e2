from .config import Config, config_dict
from .enums import ConvergenceAlgorithm, FixedDate
