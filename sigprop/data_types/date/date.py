"""Date module
"""

import math
from datetime import datetime, timedelta

from sigprop.errors import EpochError

__all__ = ["AbsoluteDate", "J2000_EPOCH", "timedelta"]


class AbsoluteDate:
    """Date object

    All computations and in-memory saving are made with respect to the J2000 epoch
    (2000-01-01 12:00:00). The date is stored as an integer number of seconds plus a fractional part in [0, 1),
    so that the light-time solver can work with sub-nanosecond shifts without losing precision. A single uniform
    timescale is assumed (no leap seconds are handled).

    The constructor can take:

        * the same arguments as the standard library's datetime object (year, month, day, hour,
          minute, second, microsecond)
        * a :py:class:`datetime.datetime` object
        * another :py:class:`AbsoluteDate` object

    Examples:

        .. code-block:: python

            AbsoluteDate(2016, 11, 17, 19, 16, 40)
            AbsoluteDate(datetime(2016, 11, 17, 19, 16, 40))  # built-in datetime object
            J2000_EPOCH.shifted_by(0.0333)

    AbsoluteDate objects interact with :py:class:`timedelta` as datetime do. The difference of two
    AbsoluteDate objects is a float number of seconds.
    """

    __slots__ = ["_epoch", "_offset", "_cache"]

    J2000 = datetime(2000, 1, 1, 12, 0, 0)
    """Origin of the internal representation"""

    DEFAULT_FORMAT = "%Y-%m-%d %H:%M:%S"

    def __init__(self, *args, **kwargs):
        if len(args) == 1 and not kwargs:
            arg = args[0]
            if isinstance(arg, AbsoluteDate):
                epoch, offset = arg._epoch, arg._offset
            elif isinstance(arg, datetime):
                epoch, offset = self._convert_dt(arg)
            else:
                raise TypeError(f"Unknown type '{type(arg)}'")
        elif len(args) in range(3, 8) and list(map(type, args)) == [int] * len(args):
            # Same constructor as datetime.datetime
            # (year, month, day, hour=0, minute=0, second=0, microsecond=0)
            epoch, offset = self._convert_dt(datetime(*args, **kwargs))
        else:
            raise TypeError(
                f"Unknown type sequence {', '.join(str(type(x)) for x in args)}"
            )

        self._set(epoch, offset)

    def _set(self, epoch, offset):
        # As AbsoluteDate acts like an immutable object, we can't set its attributes normally
        super().__setattr__("_epoch", int(epoch))
        super().__setattr__("_offset", float(offset))
        super().__setattr__("_cache", {})

    @classmethod
    def _from_parts(cls, epoch, offset):
        if not math.isfinite(offset):
            raise EpochError(f"Invalid date offset {offset}")
        carry = math.floor(offset)
        offset -= carry
        if offset >= 1.0:
            # rounding of a value just below an integer
            carry += 1
            offset = 0.0
        obj = cls.__new__(cls)
        obj._set(epoch + carry, offset)
        return obj

    def __getstate__(self):  # pragma: no cover
        """Used for pickling"""
        return {"epoch": self._epoch, "offset": self._offset}

    def __setstate__(self, state):  # pragma: no cover
        """Used for unpickling"""
        self._set(state["epoch"], state["offset"])

    def __setattr__(self, *args):
        raise TypeError("Cannot modify attributes of immutable object")

    def __delattr__(self, *args):  # pragma: no cover
        raise TypeError("Cannot modify attributes of immutable object")

    def shifted_by(self, seconds):
        """
        Args:
            seconds(float): time shift in seconds (may be negative)
        Return:
            AbsoluteDate: new date shifted by the provided amount of seconds
        """
        whole = math.floor(seconds)
        return self._from_parts(self._epoch + int(whole), self._offset + (seconds - whole))

    def duration_from(self, other):
        """
        Args:
            other(AbsoluteDate): reference date
        Return:
            float: elapsed seconds from `other` to this date (negative if this date is earlier)
        """
        if not isinstance(other, AbsoluteDate):
            raise EpochError(f"Cannot compute duration between AbsoluteDate and {type(other)}")
        return (self._epoch - other._epoch) + (self._offset - other._offset)

    def __add__(self, other):
        if isinstance(other, timedelta):
            return self.shifted_by(other.total_seconds())
        raise TypeError(f"Unknown operation with {type(other)}")

    def __sub__(self, other):
        if isinstance(other, timedelta):
            return self.shifted_by(-other.total_seconds())
        elif isinstance(other, AbsoluteDate):
            return self.duration_from(other)
        raise TypeError(f"Unknown operation with {type(other)}")

    def _key(self):
        return self._epoch, self._offset

    def __gt__(self, other):
        return self._key() > other._key()

    def __ge__(self, other):
        return self._key() >= other._key()

    def __lt__(self, other):
        return self._key() < other._key()

    def __le__(self, other):
        return self._key() <= other._key()

    def __eq__(self, other):
        if not isinstance(other, AbsoluteDate):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):  # pragma: no cover
        return f"<{self.__class__.__name__} '{self}'>"

    def __str__(self):
        if "str" not in self._cache:
            self._cache["str"] = f"{self.datetime.isoformat()} ({self._offset:.12f})"
        return self._cache["str"]

    def __format__(self, fmt):  # pragma: no cover
        if fmt:
            return self.datetime.__format__(fmt)
        return str(self)

    @classmethod
    def _convert_dt(cls, dt):
        if dt.tzinfo is not None:
            dt = dt.replace(tzinfo=None) - dt.utcoffset()
        delta = dt - cls.J2000
        seconds = delta.days * 86400 + delta.seconds
        return seconds, delta.microseconds * 1e-6

    @property
    def datetime(self):
        """Conversion of the AbsoluteDate object into a ``datetime.datetime`` (microsecond resolution)"""
        if "dt" not in self._cache:
            self._cache["dt"] = self.J2000 + timedelta(seconds=self._epoch, microseconds=self._offset * 1e6)
        return self._cache["dt"]

    @classmethod
    def strptime(cls, data, format=DEFAULT_FORMAT):  # pragma: no cover
        """Convert a string representation of a date to an AbsoluteDate object"""
        return cls(datetime.strptime(data, format))

    def strftime(self, fmt):  # pragma: no cover
        """Format the date following the given format"""
        return self.datetime.strftime(fmt)

    @property
    def j2000_seconds(self):
        """
        Return:
            float: seconds elapsed since the J2000 epoch (precision limited by the float representation)
        """
        return self._epoch + self._offset

    @property
    def doy(self):
        """Computes day of year"""
        if "doy" not in self._cache:
            self._cache["doy"] = self.datetime.timetuple().tm_yday
        return self._cache["doy"]


J2000_EPOCH = AbsoluteDate(2000, 1, 1, 12, 0, 0)
