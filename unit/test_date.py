from datetime import datetime, timezone, timedelta

import pytest

from sigprop.data_types.date import AbsoluteDate, J2000_EPOCH
from sigprop.errors import EpochError


def test_constructors():
    date = AbsoluteDate(2016, 11, 17, 19, 16, 40)
    assert AbsoluteDate(datetime(2016, 11, 17, 19, 16, 40)) == date
    assert AbsoluteDate(date) == date
    assert AbsoluteDate(datetime(2016, 11, 17, 20, 16, 40, tzinfo=timezone(timedelta(hours=1)))) == date
    assert date.datetime == datetime(2016, 11, 17, 19, 16, 40)

    assert AbsoluteDate(2000, 1, 1, 12, 0, 0) == J2000_EPOCH
    assert J2000_EPOCH.j2000_seconds == 0.0

    with pytest.raises(TypeError):
        AbsoluteDate("2016-11-17")
    with pytest.raises(TypeError):
        AbsoluteDate(2016.0, 11, 17)


def test_sub_nanosecond_shifts():
    date = AbsoluteDate(2024, 3, 1, 12, 0, 0)
    shifted = date.shifted_by(1e-13)
    assert shifted > date
    assert shifted.duration_from(date) == pytest.approx(1e-13, abs=1e-20)

    # large epochs keep the fractional precision
    assert date.shifted_by(0.033356409519815).duration_from(date) == pytest.approx(0.033356409519815, abs=1e-16)


def test_negative_shift_and_carry():
    date = J2000_EPOCH.shifted_by(10.75)
    assert date.shifted_by(-0.25).duration_from(J2000_EPOCH) == 10.5
    assert date.shifted_by(0.5).duration_from(J2000_EPOCH) == 11.25
    assert date.shifted_by(-20.75).duration_from(J2000_EPOCH) == -10.0
    assert date.shifted_by(0.25) == J2000_EPOCH.shifted_by(11.0)


def test_timedelta_arithmetic():
    date = AbsoluteDate(2020, 2, 28, 23, 59, 30)
    later = date + timedelta(seconds=45)
    assert later.datetime == datetime(2020, 2, 29, 0, 0, 15)
    assert later - timedelta(seconds=45) == date
    assert later - date == 45.0

    with pytest.raises(TypeError):
        date + 1.0
    with pytest.raises(EpochError):
        date.duration_from(datetime(2020, 2, 28))


def test_ordering_and_hash():
    a = J2000_EPOCH.shifted_by(0.1)
    b = J2000_EPOCH.shifted_by(0.2)
    assert a < b <= b
    assert b > a >= a
    assert a != b
    assert J2000_EPOCH.shifted_by(0.25).shifted_by(0.25) == J2000_EPOCH.shifted_by(0.5)
    assert hash(J2000_EPOCH) == hash(AbsoluteDate(2000, 1, 1, 12))


def test_immutable():
    with pytest.raises(TypeError):
        J2000_EPOCH._epoch = 10


def test_day_of_year():
    assert AbsoluteDate(2024, 3, 1).doy == 61
    assert AbsoluteDate(2023, 12, 31, 23, 59, 59).doy == 365
