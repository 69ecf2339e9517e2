""" Common errors declarations of the library """
MODULE = "SigProp"


class MetaErrorClass(type):
    def __new__(mcs, name, bases, dct):
        dct['__module__'] = MODULE
        return super().__new__(mcs, name, bases, dct)


class SigPropError(Exception, metaclass=MetaErrorClass):
    """ Generic error. """


class EpochError(SigPropError):
    """ Error when dealing with AbsoluteDate objects. """

    def __init__(self, message):
        message = "Epoch Error -> " + message
        super().__init__(message)


class ConfigError(SigPropError):
    """ Error when parsing the json configuration file or when model parameters are invalid. """

    def __init__(self, message):
        message = "Configuration Error -> " + message
        super().__init__(message)


class ArraySizeError(SigPropError):
    """ Array has wrong size/shape. """

    def __init__(self, message):
        message = "Array Size Error -> " + message
        super().__init__(message)


class EnumError(SigPropError):
    """ Enumeration Error. """

    def __init__(self, message):
        message = "Enumeration Error -> " + message
        super().__init__(message)


class InvalidFrameError(SigPropError):
    """ The frame is not suitable for the requested computation (e.g. it is not pseudo-inertial). """

    def __init__(self, message):
        message = "Invalid Frame -> " + message
        super().__init__(message)


class ConvergenceFailureError(SigPropError):
    """
    The light-time iteration did not meet the convergence threshold within the maximum number of iterations.

    Attributes:
        residual(float): last absolute update of the propagation duration [s]
        iterations(int): number of performed iterations
    """

    def __init__(self, message, residual=None, iterations=None):
        self.residual = residual
        self.iterations = iterations
        message = "Convergence Failure -> " + message
        super().__init__(message)


class DegenerateGeometryError(SigPropError):
    """ Emitter and receiver geometry does not define a valid signal (coincident points, non causal dates). """

    def __init__(self, message):
        message = "Degenerate Geometry -> " + message
        super().__init__(message)
