from .date import AbsoluteDate, J2000_EPOCH, timedelta
