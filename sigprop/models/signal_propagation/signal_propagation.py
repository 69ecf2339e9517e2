"""Solved signal between an emitter and a receiver

A :py:class:`SignalPropagation` holds the converged geometry of one signal (endpoint coordinates in the working
frame and the emission/reception dates). Every derived quantity is computed on demand from these values:
propagation vector and duration, partial derivatives, Shapiro delay and station elevation.

Partial derivatives
    Notation (working frame): `P = P_R(t_r) - P_E(t_e)`, `u = P / |P|`, `V_free` the velocity of the endpoint
    whose date was solved for (receiver when the emission date is fixed, emitter otherwise) and
    `D = c - u . V_free`. Then

        dtau/dP_E = -u / D          dP/dP_E = -I + V_free (x) dtau/dP_E
        dtau/dP_R =  u / D          dP/dP_R =  I + V_free (x) dtau/dP_R
        dtau/dt   = u . (V_R - V_E) / D
        dP/dt     = (V_R - V_E) + V_free * dtau/dt

    where `t` is the fixed date. When the derivatives are requested in another frame `F` (rotation `M` and rate
    `M_dot` from the working frame to `F`), position perturbations are expressed in `F` and the vector is
    re-expressed in `F` at the reception date, which adds the transport terms `M_dot(t_r) P dt_r/d.`.
"""
import numpy as np
from numpy.linalg import norm

from sigprop import constants
from sigprop.errors import DegenerateGeometryError
from sigprop.io.config.enums import FixedDate
from sigprop.models.frames import enu2azel

__all__ = ["SignalPropagation"]


class SignalPropagation:
    """
    Immutable result of a light-time solve.

    Args:
        emitter_pv(PVCoordinates): emitter coordinates at the emission date, in `frame`
        receiver_pv(PVCoordinates): receiver coordinates at the reception date, in `frame`
        emission_date(sigprop.data_types.date.AbsoluteDate): emission date
        reception_date(sigprop.data_types.date.AbsoluteDate): reception date
        fixed_date_type(FixedDate): which of the two dates was given by the caller
        frame(sigprop.models.frames.Frame): working frame of the solve (pseudo-inertial)
    Raises:
        DegenerateGeometryError: if the emitter and receiver positions coincide, or if the reception date is before
            the emission date
    """
    __slots__ = ["_emitter_pv", "_receiver_pv", "_emission_date", "_reception_date", "_fixed_date_type", "_frame"]

    def __init__(self, emitter_pv, receiver_pv, emission_date, reception_date, fixed_date_type, frame):
        if np.array_equal(emitter_pv.position, receiver_pv.position):
            raise DegenerateGeometryError(f"emitter and receiver positions coincide ({emitter_pv.position.tolist()})")
        if reception_date < emission_date:
            raise DegenerateGeometryError(f"reception date {reception_date} is before emission date {emission_date}")

        super().__setattr__("_emitter_pv", emitter_pv)
        super().__setattr__("_receiver_pv", receiver_pv)
        super().__setattr__("_emission_date", emission_date)
        super().__setattr__("_reception_date", reception_date)
        super().__setattr__("_fixed_date_type", fixed_date_type)
        super().__setattr__("_frame", frame)

    def __setattr__(self, *args):
        raise TypeError("Cannot modify attributes of immutable object")

    def __repr__(self):
        return f"<SignalPropagation {self._emission_date} -> {self._reception_date} ({self._frame})>"

    @property
    def emission_date(self):
        return self._emission_date

    @property
    def reception_date(self):
        return self._reception_date

    @property
    def fixed_date_type(self):
        return self._fixed_date_type

    @property
    def frame(self):
        return self._frame

    def _transform_to(self, frame, date):
        if frame is None or frame is self._frame:
            return None
        return self._frame.get_transform_to(frame, date)

    def get_emitter_pv(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): output frame (working frame when None)
        Returns:
            PVCoordinates: emitter coordinates at the emission date
        """
        transform = self._transform_to(frame, self._emission_date)
        return self._emitter_pv if transform is None else transform.transform_pv(self._emitter_pv)

    def get_receiver_pv(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): output frame (working frame when None)
        Returns:
            PVCoordinates: receiver coordinates at the reception date
        """
        transform = self._transform_to(frame, self._reception_date)
        return self._receiver_pv if transform is None else transform.transform_pv(self._receiver_pv)

    def get_signal_propagation_duration(self):
        """
        Returns:
            float: reception date minus emission date [s]
        """
        return self._reception_date.duration_from(self._emission_date)

    def get_vector(self, frame=None):
        """
        Propagation vector from the emitter (at emission) to the receiver (at reception).

        Args:
            frame(sigprop.models.frames.Frame or None): output frame, the vector is rotated with the transform at
                the reception date (working frame when None)
        Returns:
            numpy.ndarray: propagation vector [m]
        """
        vector = self._receiver_pv.position - self._emitter_pv.position
        transform = self._transform_to(frame, self._reception_date)
        return vector if transform is None else transform.transform_vector(vector)

    # ---------------------------------------------------------------------------------------------------------------
    # partial derivatives

    def _free_velocity(self):
        if self._fixed_date_type == FixedDate.EMISSION:
            return self._receiver_pv.velocity
        return self._emitter_pv.velocity

    def _line_of_sight(self):
        vector = self._receiver_pv.position - self._emitter_pv.position
        los = vector / norm(vector)
        denominator = constants.SPEED_OF_LIGHT - np.dot(los, self._free_velocity())
        return vector, los, denominator

    def _frame_terms(self, frame):
        """
        Returns:
            tuple: rotation and rotation rate at the reception date, and rotations at the emission date, from the
                working frame to `frame`. None when no frame change is needed
        """
        if frame is None or frame is self._frame:
            return None
        at_reception = self._frame.get_transform_to(frame, self._reception_date)
        at_emission = self._frame.get_transform_to(frame, self._emission_date)
        return at_reception.rotation, at_reception.rotation_rate, at_emission.rotation

    def _dtr_dtau(self):
        """ Derivative of the reception date with respect to the propagation duration (through the solve) """
        return 1.0 if self._fixed_date_type == FixedDate.EMISSION else 0.0

    def get_dtprop_dpem(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): frame of the emitter position perturbation
        Returns:
            numpy.ndarray: derivative of the propagation duration with respect to the emitter position [s/m], (3,)
        """
        _, los, denominator = self._line_of_sight()
        dtau = -los / denominator
        terms = self._frame_terms(frame)
        return dtau if terms is None else terms[2] @ dtau

    def get_dtprop_dprec(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): frame of the receiver position perturbation
        Returns:
            numpy.ndarray: derivative of the propagation duration with respect to the receiver position [s/m], (3,)
        """
        _, los, denominator = self._line_of_sight()
        dtau = los / denominator
        terms = self._frame_terms(frame)
        return dtau if terms is None else terms[0] @ dtau

    def get_dtprop_dt(self):
        """
        Returns:
            float: derivative of the propagation duration with respect to the fixed date
        """
        _, los, denominator = self._line_of_sight()
        return np.dot(los, self._receiver_pv.velocity - self._emitter_pv.velocity) / denominator

    def _dprop_dposition(self, sign, frame):
        vector, los, denominator = self._line_of_sight()
        dtau = sign * los / denominator
        dprop = sign * np.eye(3) + np.outer(self._free_velocity(), dtau)

        terms = self._frame_terms(frame)
        if terms is None:
            return dprop

        m_rec, m_rec_dot, m_em = terms
        # the perturbed endpoint is the emitter (sign < 0) or the receiver (sign > 0)
        m_x = m_em if sign < 0 else m_rec
        return m_rec @ dprop @ m_x.T + np.outer(m_rec_dot @ vector, self._dtr_dtau() * (m_x @ dtau))

    def get_dprop_dpem(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): frame of both the propagation vector and the emitter
                position perturbation (working frame when None)
        Returns:
            numpy.ndarray: derivative of the propagation vector with respect to the emitter position, (3,3)
        """
        return self._dprop_dposition(-1.0, frame)

    def get_dprop_dprec(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): frame of both the propagation vector and the receiver
                position perturbation (working frame when None)
        Returns:
            numpy.ndarray: derivative of the propagation vector with respect to the receiver position, (3,3)
        """
        return self._dprop_dposition(1.0, frame)

    def get_dprop_dt(self, frame=None):
        """
        Args:
            frame(sigprop.models.frames.Frame or None): frame of the propagation vector (working frame when None)
        Returns:
            numpy.ndarray: derivative of the propagation vector with respect to the fixed date [m/s], (3,)
        """
        vector, _, _ = self._line_of_sight()
        dtau_dt = self.get_dtprop_dt()
        dprop = (self._receiver_pv.velocity - self._emitter_pv.velocity) + self._free_velocity() * dtau_dt

        terms = self._frame_terms(frame)
        if terms is None:
            return dprop

        m_rec, m_rec_dot, _ = terms
        dtr_dt = 1.0 + self._dtr_dtau() * dtau_dt
        return m_rec @ dprop + m_rec_dot @ vector * dtr_dt

    # ---------------------------------------------------------------------------------------------------------------
    # corrections

    def get_shapiro_time_correction(self, mu_or_body):
        """
        First order Shapiro delay due to the body at the center of the working frame:

            dt = 2 mu / c^3 * ln[(r_e + r_r + r_er) / (r_e + r_r - r_er)]

        Args:
            mu_or_body(float or sigprop.models.bodies.CelestialBody): gravitational parameter [m^3/s^2], or an
                object exposing it as `gm`
        Returns:
            float: Shapiro delay [s]
        """
        mu = mu_or_body.gm if hasattr(mu_or_body, "gm") else float(mu_or_body)

        r_e = norm(self._emitter_pv.position)
        r_r = norm(self._receiver_pv.position)
        r_er = norm(self._receiver_pv.position - self._emitter_pv.position)

        return 2.0 * mu / constants.SPEED_OF_LIGHT ** 3 * np.log((r_e + r_r + r_er) / (r_e + r_r - r_er))

    def get_elevation(self, station):
        """
        Elevation of the emitter seen from a ground station, using the line of sight at the reception date.

        Args:
            station(sigprop.models.providers.TopocentricPoint): station (typically the receiver)
        Returns:
            float: elevation [rad]
        """
        line_of_sight = self._emitter_pv.position - self._receiver_pv.position
        to_body = self._frame.get_transform_to(station.body_frame, self._reception_date)
        x_enu, y_enu, z_enu = station.dcm_body_enu @ to_body.transform_vector(line_of_sight)
        _, elevation = enu2azel(x_enu, y_enu, z_enu)
        return elevation
