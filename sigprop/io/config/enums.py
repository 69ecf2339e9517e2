""" Definition of some useful python Enumeration objects """

from enum import Enum
from sigprop.errors import EnumError


class ConvergenceAlgorithm(Enum):
    """
    Enumeration for the light-time iteration scheme. Available schemes are:
        * fixed point iteration on the propagation duration
        * Newton-Raphson iteration on the light-time residual
    """
    FIXED_POINT = 0
    NEWTON = 1

    @classmethod
    def show_options(cls):
        return f"[ fixed-point, newton ]"

    @classmethod
    def init_model(cls, model_str: str):
        if model_str.lower() in ("fixed-point", "fixed_point"):
            return ConvergenceAlgorithm.FIXED_POINT
        elif model_str.lower() == "newton":
            return ConvergenceAlgorithm.NEWTON
        else:
            raise EnumError(f"Unsupported convergence algorithm {model_str}. Available options are "
                            f"{cls.show_options()}")


class FixedDate(Enum):
    """ Enumeration for the date held fixed during the light-time solve (emission or reception) """
    EMISSION = 0
    RECEPTION = 1

    @classmethod
    def show_options(cls):
        return f"[ emission, reception ]"

    @classmethod
    def init_model(cls, model_str: str):
        if model_str.lower() == "emission":
            return FixedDate.EMISSION
        elif model_str.lower() == "reception":
            return FixedDate.RECEPTION
        else:
            raise EnumError(f"Unsupported fixed date type {model_str}. Available options are {cls.show_options()}")
