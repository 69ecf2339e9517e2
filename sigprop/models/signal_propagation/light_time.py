"""Light-time iteration schemes

The signal leaves the emitter at `t_e` and reaches the receiver at `t_r = t_e + tau`. One of the two dates is
fixed by the caller, and the propagation duration `tau` solves

    f(tau) = || P_R(t_r) - P_E(t_e) || - c * tau = 0

with `t_r = t0 + tau` (emission fixed) or `t_e = t0 - tau` (reception fixed). Two schemes are available:
    * fixed point: `tau_{k+1} = || P_R - P_E ||(tau_k) / c`
    * Newton-Raphson: `tau_{k+1} = tau_k - f(tau_k) / f'(tau_k)`, with `f'(tau) = u . V_free - c`, where `u` is the
      unit line of sight and `V_free` the velocity of the endpoint whose date is being solved

Both start from `tau_0 = 0` and stop as soon as `|tau_{k+1} - tau_k|` is below the convergence threshold.

Reference:
    [1] ESA GNSS DATA PROCESSING, Volume I: Fundamentals and Algorithms, J. Sanz Subirana,
    J.M. Juan Zornoza and M. Hernández-Pajares, section 5.1.1.1
"""
import numpy as np
from numpy.linalg import norm

from sigprop import constants
from sigprop.common_log import get_logger, MODEL_LOG
from sigprop.errors import ConvergenceFailureError
from sigprop.io.config.enums import ConvergenceAlgorithm, FixedDate

__all__ = ["LightTimeProblem", "fixed_point", "newton", "solve_light_time"]


class LightTimeProblem:
    """
    Geometry of one light-time solve: the two providers, the fixed date and the working frame.

    The coordinates of the endpoint held at the fixed date are evaluated once; only the free endpoint is
    re-evaluated at each iteration.
    """
    __slots__ = ["emitter", "receiver", "date", "fixed_date_type", "frame", "_fixed_pv"]

    def __init__(self, emitter, receiver, date, fixed_date_type, frame):
        self.emitter = emitter
        self.receiver = receiver
        self.date = date
        self.fixed_date_type = fixed_date_type
        self.frame = frame
        if fixed_date_type == FixedDate.EMISSION:
            self._fixed_pv = emitter.get_pv_coordinates(date, frame)
        else:
            self._fixed_pv = receiver.get_pv_coordinates(date, frame)

    def dates(self, tau):
        """
        Returns:
            tuple[AbsoluteDate, AbsoluteDate]: emission and reception dates for the propagation duration `tau`
        """
        if self.fixed_date_type == FixedDate.EMISSION:
            return self.date, self.date.shifted_by(tau)
        return self.date.shifted_by(-tau), self.date

    def evaluate(self, tau):
        """
        Returns:
            tuple[PVCoordinates, PVCoordinates]: emitter and receiver coordinates in the working frame, at the
                emission and reception dates matching `tau`
        """
        if self.fixed_date_type == FixedDate.EMISSION:
            return self._fixed_pv, self.receiver.get_pv_coordinates(self.date.shifted_by(tau), self.frame)
        return self.emitter.get_pv_coordinates(self.date.shifted_by(-tau), self.frame), self._fixed_pv

    def free_velocity(self, emitter_pv, receiver_pv):
        """ Velocity of the endpoint whose date is solved for """
        if self.fixed_date_type == FixedDate.EMISSION:
            return receiver_pv.velocity
        return emitter_pv.velocity


def _failure(algorithm, residual, iterations):
    msg = f"{algorithm} light-time iteration did not converge after {iterations} iterations " \
          f"(last update {residual} s)"
    get_logger(MODEL_LOG).error(msg)
    return ConvergenceFailureError(msg, residual=residual, iterations=iterations)


def fixed_point(problem, threshold, max_iterations):
    """
    Fixed point iteration on the propagation duration.

    Args:
        problem(LightTimeProblem): geometry of the solve
        threshold(float): convergence threshold on the duration update [s]
        max_iterations(int): maximum number of iterations
    Returns:
        tuple[float, int]: converged propagation duration [s] and number of iterations
    Raises:
        ConvergenceFailureError: if the threshold is not met within `max_iterations` iterations
    """
    tau = 0.0
    residual = np.inf
    for iteration in range(1, max_iterations + 1):
        emitter_pv, receiver_pv = problem.evaluate(tau)
        new_tau = norm(receiver_pv.position - emitter_pv.position) / constants.SPEED_OF_LIGHT

        residual = abs(new_tau - tau)
        tau = new_tau
        if residual < threshold:
            return tau, iteration

    raise _failure("Fixed point", residual, max_iterations)


def newton(problem, threshold, max_iterations):
    """
    Newton-Raphson iteration on the light-time residual.

    Args:
        problem(LightTimeProblem): geometry of the solve
        threshold(float): convergence threshold on the duration update [s]
        max_iterations(int): maximum number of iterations
    Returns:
        tuple[float, int]: converged propagation duration [s] and number of iterations
    Raises:
        ConvergenceFailureError: if the threshold is not met within `max_iterations` iterations
    """
    c = constants.SPEED_OF_LIGHT
    tau = 0.0
    residual = np.inf
    for iteration in range(1, max_iterations + 1):
        emitter_pv, receiver_pv = problem.evaluate(tau)
        vector = receiver_pv.position - emitter_pv.position
        distance = norm(vector)

        f = distance - c * tau
        los = vector / distance if distance > 0.0 else np.zeros(3)
        df = np.dot(los, problem.free_velocity(emitter_pv, receiver_pv)) - c
        if df >= 0.0:
            # the free endpoint moves away at (or above) the speed of light along the line of sight
            raise _failure("Newton", residual, iteration)

        new_tau = tau - f / df
        residual = abs(new_tau - tau)
        tau = new_tau
        if residual < threshold:
            return tau, iteration

    raise _failure("Newton", residual, max_iterations)


_SOLVERS = {
    ConvergenceAlgorithm.FIXED_POINT: fixed_point,
    ConvergenceAlgorithm.NEWTON: newton,
}


def solve_light_time(algorithm, problem, threshold, max_iterations):
    """
    Main function to compute the propagation duration of a signal, dispatching on the iteration scheme.

    Args:
        algorithm(ConvergenceAlgorithm): iteration scheme
        problem(LightTimeProblem): geometry of the solve
        threshold(float): convergence threshold on the duration update [s]
        max_iterations(int): maximum number of iterations
    Returns:
        tuple[float, int]: converged propagation duration [s] and number of iterations
    """
    tau, iterations = _SOLVERS[algorithm](problem, threshold, max_iterations)
    get_logger(MODEL_LOG).debug(f"Light-time solve ({algorithm.name}, {problem.fixed_date_type.name} fixed at "
                                f"{problem.date}) converged in {iterations} iterations: tau = {tau} s")
    return tau, iterations
