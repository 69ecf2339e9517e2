""" Analytic partial derivatives against centered finite differences (1 m in position, 1 s in time) """
import numpy as np
import pytest

from sigprop.io.config.enums import ConvergenceAlgorithm, FixedDate
from sigprop.models.frames import GCRF, ITRF
from sigprop.models.signal_propagation import SignalPropagationModel

H_POS = 1.0  # [m]
H_TIME = 1.0  # [s]
RTOL = 1e-4

MODEL = SignalPropagationModel(GCRF, 1e-15, algorithm=ConvergenceAlgorithm.NEWTON)


def _assert_close(analytic, numeric):
    scale = np.max(np.abs(analytic))
    np.testing.assert_allclose(analytic, numeric, rtol=RTOL, atol=RTOL * scale)


def _solve(emitter, receiver, date, fixed_date_type):
    return MODEL.compute_signal_propagation(emitter, receiver, date, fixed_date_type)


@pytest.mark.parametrize("fixed_date_type", [FixedDate.EMISSION, FixedDate.RECEPTION])
@pytest.mark.parametrize("frame", [None, ITRF])
def test_emitter_position(fixed_date_type, frame, gnss_satellite, leo_satellite, perturbed, ref_date):
    signal = _solve(gnss_satellite, leo_satellite, ref_date, fixed_date_type)
    dprop = signal.get_dprop_dpem(frame)
    dtprop = signal.get_dtprop_dpem(frame)
    offset_frame = GCRF if frame is None else frame

    for axis in range(3):
        h = np.zeros(3)
        h[axis] = H_POS
        plus = _solve(perturbed(gnss_satellite, h, offset_frame), leo_satellite, ref_date, fixed_date_type)
        minus = _solve(perturbed(gnss_satellite, -h, offset_frame), leo_satellite, ref_date, fixed_date_type)

        _assert_close(dprop[:, axis], (plus.get_vector(frame) - minus.get_vector(frame)) / (2 * H_POS))
        _assert_close(dtprop[axis], (plus.get_signal_propagation_duration() -
                                     minus.get_signal_propagation_duration()) / (2 * H_POS))


@pytest.mark.parametrize("fixed_date_type", [FixedDate.EMISSION, FixedDate.RECEPTION])
@pytest.mark.parametrize("frame", [None, ITRF])
def test_receiver_position(fixed_date_type, frame, gnss_satellite, leo_satellite, perturbed, ref_date):
    signal = _solve(gnss_satellite, leo_satellite, ref_date, fixed_date_type)
    dprop = signal.get_dprop_dprec(frame)
    dtprop = signal.get_dtprop_dprec(frame)
    offset_frame = GCRF if frame is None else frame

    for axis in range(3):
        h = np.zeros(3)
        h[axis] = H_POS
        plus = _solve(gnss_satellite, perturbed(leo_satellite, h, offset_frame), ref_date, fixed_date_type)
        minus = _solve(gnss_satellite, perturbed(leo_satellite, -h, offset_frame), ref_date, fixed_date_type)

        _assert_close(dprop[:, axis], (plus.get_vector(frame) - minus.get_vector(frame)) / (2 * H_POS))
        _assert_close(dtprop[axis], (plus.get_signal_propagation_duration() -
                                     minus.get_signal_propagation_duration()) / (2 * H_POS))


@pytest.mark.parametrize("fixed_date_type", [FixedDate.EMISSION, FixedDate.RECEPTION])
@pytest.mark.parametrize("frame", [None, ITRF])
def test_date(fixed_date_type, frame, gnss_satellite, leo_satellite, ref_date):
    signal = _solve(gnss_satellite, leo_satellite, ref_date, fixed_date_type)
    plus = _solve(gnss_satellite, leo_satellite, ref_date.shifted_by(H_TIME), fixed_date_type)
    minus = _solve(gnss_satellite, leo_satellite, ref_date.shifted_by(-H_TIME), fixed_date_type)

    _assert_close(signal.get_dprop_dt(frame), (plus.get_vector(frame) - minus.get_vector(frame)) / (2 * H_TIME))
    _assert_close(signal.get_dtprop_dt(), (plus.get_signal_propagation_duration() -
                                           minus.get_signal_propagation_duration()) / (2 * H_TIME))


@pytest.mark.parametrize("fixed_date_type", [FixedDate.EMISSION, FixedDate.RECEPTION])
def test_ground_station_receiver(fixed_date_type, gnss_satellite, station, perturbed, ref_date):
    """ Receiver fixed in the rotating body frame, derivatives expressed in that frame """
    signal = _solve(gnss_satellite, station, ref_date, fixed_date_type)
    dprop_dprec = signal.get_dprop_dprec(ITRF)
    dtprop_dprec = signal.get_dtprop_dprec(ITRF)
    dprop_dpem = signal.get_dprop_dpem(ITRF)

    for axis in range(3):
        h = np.zeros(3)
        h[axis] = H_POS
        plus = _solve(gnss_satellite, perturbed(station, h, ITRF), ref_date, fixed_date_type)
        minus = _solve(gnss_satellite, perturbed(station, -h, ITRF), ref_date, fixed_date_type)
        _assert_close(dprop_dprec[:, axis], (plus.get_vector(ITRF) - minus.get_vector(ITRF)) / (2 * H_POS))
        _assert_close(dtprop_dprec[axis], (plus.get_signal_propagation_duration() -
                                           minus.get_signal_propagation_duration()) / (2 * H_POS))

        plus = _solve(perturbed(gnss_satellite, h, ITRF), station, ref_date, fixed_date_type)
        minus = _solve(perturbed(gnss_satellite, -h, ITRF), station, ref_date, fixed_date_type)
        _assert_close(dprop_dpem[:, axis], (plus.get_vector(ITRF) - minus.get_vector(ITRF)) / (2 * H_POS))

    plus = _solve(gnss_satellite, station, ref_date.shifted_by(H_TIME), fixed_date_type)
    minus = _solve(gnss_satellite, station, ref_date.shifted_by(-H_TIME), fixed_date_type)
    _assert_close(signal.get_dprop_dt(ITRF), (plus.get_vector(ITRF) - minus.get_vector(ITRF)) / (2 * H_TIME))
    _assert_close(signal.get_dtprop_dt(), (plus.get_signal_propagation_duration() -
                                           minus.get_signal_propagation_duration()) / (2 * H_TIME))


def test_closing_receiver_partials(origin_emitter, closing_receiver, ref_date):
    signal = _solve(origin_emitter, closing_receiver, ref_date, FixedDate.EMISSION)
    c_plus_v = 299792458.0 + 1.0e6

    # moving the receiver away along x delays the reception, the closing speed shortens it
    np.testing.assert_allclose(signal.get_dtprop_dprec(), [1.0 / c_plus_v, 0.0, 0.0], rtol=1e-12)
    np.testing.assert_allclose(signal.get_dtprop_dpem(), [-1.0 / c_plus_v, 0.0, 0.0], rtol=1e-12)
    assert signal.get_dtprop_dt() == pytest.approx(-1.0e6 / c_plus_v, rel=1e-12)

    expected = np.eye(3)
    expected[0, 0] = 1.0 - 1.0e6 / c_plus_v
    np.testing.assert_allclose(signal.get_dprop_dprec(), expected, atol=1e-15)


def test_same_frame_is_working_frame(gnss_satellite, leo_satellite, ref_date):
    signal = _solve(gnss_satellite, leo_satellite, ref_date, FixedDate.RECEPTION)
    np.testing.assert_array_equal(signal.get_dprop_dpem(GCRF), signal.get_dprop_dpem())
    np.testing.assert_array_equal(signal.get_dtprop_dprec(GCRF), signal.get_dtprop_dprec())
    np.testing.assert_array_equal(signal.get_dprop_dt(GCRF), signal.get_dprop_dt())
