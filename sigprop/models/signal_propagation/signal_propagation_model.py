"""Signal propagation model

The model holds the immutable solver settings (working frame, convergence threshold, iteration cap and scheme) and
computes :py:class:`SignalPropagation` results. A model can be shared between threads: a solve only reads the
model and the providers, and returns a new result.

Examples:
    >>> model = SignalPropagationModel(GCRF, 1e-14)
    >>> signal = model.compute_signal_propagation(satellite, station, date, FixedDate.RECEPTION)
    >>> signal.get_signal_propagation_duration()
"""
import math

from sigprop import constants
from sigprop.common_log import get_logger, MODEL_LOG
from sigprop.errors import ConfigError, InvalidFrameError
from sigprop.io.config.enums import ConvergenceAlgorithm, FixedDate
from sigprop.models.frames import Frame, get_frame
from .light_time import LightTimeProblem, solve_light_time
from .signal_propagation import SignalPropagation

__all__ = ["SignalPropagationModel", "compute_signal_propagations"]


class SignalPropagationModel:
    """
    Light-time solver settings.

    Args:
        working_frame(sigprop.models.frames.Frame): pseudo-inertial frame in which the light time is solved
        convergence_threshold(float): threshold on the update of the propagation duration [s], strictly positive
        max_iterations(int): maximum number of iterations, strictly positive
        algorithm(ConvergenceAlgorithm or str): iteration scheme (Newton-Raphson by default)
    Raises:
        InvalidFrameError: if the working frame is not pseudo-inertial
        ConfigError: if the threshold or the iteration cap are not strictly positive
    """
    __slots__ = ["working_frame", "convergence_threshold", "max_iterations", "algorithm"]

    def __init__(self, working_frame, convergence_threshold, max_iterations=constants.DEFAULT_MAX_ITER,
                 algorithm=ConvergenceAlgorithm.NEWTON):
        if not isinstance(working_frame, Frame):
            raise InvalidFrameError(f"{working_frame} is not a Frame")
        if not working_frame.is_pseudo_inertial():
            raise InvalidFrameError(f"working frame {working_frame} is not pseudo-inertial")

        if isinstance(convergence_threshold, bool) or not isinstance(convergence_threshold, (int, float)) \
                or not math.isfinite(convergence_threshold) or convergence_threshold <= 0:
            raise ConfigError(f"convergence threshold must be a strictly positive number, got "
                              f"{convergence_threshold}")
        if isinstance(max_iterations, bool) or not isinstance(max_iterations, int) or max_iterations <= 0:
            raise ConfigError(f"maximum number of iterations must be a strictly positive integer, got "
                              f"{max_iterations}")

        if isinstance(algorithm, str):
            algorithm = ConvergenceAlgorithm.init_model(algorithm)
        elif not isinstance(algorithm, ConvergenceAlgorithm):
            raise ConfigError(f"unsupported convergence algorithm {algorithm}. Available options are "
                              f"{ConvergenceAlgorithm.show_options()}")

        super().__setattr__("working_frame", working_frame)
        super().__setattr__("convergence_threshold", float(convergence_threshold))
        super().__setattr__("max_iterations", max_iterations)
        super().__setattr__("algorithm", algorithm)

    def __setattr__(self, *args):
        raise TypeError("Cannot modify attributes of immutable object")

    def __repr__(self):
        return f"<SignalPropagationModel frame={self.working_frame} threshold={self.convergence_threshold} " \
               f"max_iterations={self.max_iterations} algorithm={self.algorithm.name}>"

    @classmethod
    def from_config(cls, config):
        """
        Builds the model from the `signal_propagation` section of a validated configuration.

        Args:
            config(sigprop.io.config.Config): initialized configuration handler
        Returns:
            SignalPropagationModel: the configured model
        """
        return cls(get_frame(config.get("signal_propagation", "working_frame")),
                   config.get("signal_propagation", "convergence_threshold", fallback=constants.DEFAULT_THRESHOLD),
                   config.get("signal_propagation", "max_iterations", fallback=constants.DEFAULT_MAX_ITER),
                   config.get_algorithm())

    def _check_native_frame(self, provider, date):
        native = provider.get_native_frame(date)
        if not self.working_frame.shares_tree_with(native):
            raise InvalidFrameError(f"native frame {native} of {provider} cannot be related to the working frame "
                                    f"{self.working_frame}")

    def compute_signal_propagation(self, emitter, receiver, date, fixed_date_type):
        """
        Solves the light time between the emitter and the receiver.

        Args:
            emitter(sigprop.models.providers.PVCoordinatesProvider): emitter position history
            receiver(sigprop.models.providers.PVCoordinatesProvider): receiver position history
            date(sigprop.data_types.date.AbsoluteDate): the fixed date (emission or reception)
            fixed_date_type(FixedDate): which date is fixed
        Returns:
            SignalPropagation: the solved signal
        Raises:
            InvalidFrameError: if a provider frame cannot be related to the working frame
            ConvergenceFailureError: if the iteration does not converge within `max_iterations`
            DegenerateGeometryError: if the converged emitter and receiver positions coincide
        """
        if not isinstance(fixed_date_type, FixedDate):
            fixed_date_type = FixedDate.init_model(fixed_date_type)
        self._check_native_frame(emitter, date)
        self._check_native_frame(receiver, date)

        problem = LightTimeProblem(emitter, receiver, date, fixed_date_type, self.working_frame)
        tau, _ = solve_light_time(self.algorithm, problem, self.convergence_threshold, self.max_iterations)

        emitter_pv, receiver_pv = problem.evaluate(tau)
        emission_date, reception_date = problem.dates(tau)
        return SignalPropagation(emitter_pv, receiver_pv, emission_date, reception_date, fixed_date_type,
                                 self.working_frame)

    @staticmethod
    def get_signal_tropo_correction(correction, signal, station):
        """
        Tropospheric delay of a solved signal received by a ground station.

        Args:
            correction(sigprop.models.troposphere.TroposphericCorrection): tropospheric model
            signal(SignalPropagation): solved signal
            station(sigprop.models.providers.TopocentricPoint): receiving station
        Returns:
            float: signal delay [s] computed by `correction` at the reception date and the geometric elevation
        """
        elevation = signal.get_elevation(station)
        return correction.compute_signal_delay(signal.reception_date, elevation)


def compute_signal_propagations(model, emitter, receiver, dates, fixed_date_type):
    """
    Solves the light time for a sequence of fixed dates.

    Args:
        model(SignalPropagationModel): solver settings
        emitter(sigprop.models.providers.PVCoordinatesProvider): emitter position history
        receiver(sigprop.models.providers.PVCoordinatesProvider): receiver position history
        dates(iterable[AbsoluteDate]): fixed dates
        fixed_date_type(FixedDate): which date is fixed
    Returns:
        list[SignalPropagation]: solved signals, in the order of `dates`
    """
    if not isinstance(fixed_date_type, FixedDate):
        fixed_date_type = FixedDate.init_model(fixed_date_type)
    signals = [model.compute_signal_propagation(emitter, receiver, date, fixed_date_type) for date in dates]
    get_logger(MODEL_LOG).info(f"Solved {len(signals)} signal propagations ({fixed_date_type.name} fixed)")
    return signals
