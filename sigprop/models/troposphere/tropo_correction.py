""" Tropospheric correction strategy used by the signal propagation models """
from abc import ABC, abstractmethod

__all__ = ["TroposphericCorrection"]


class TroposphericCorrection(ABC):
    """
    Interface of a tropospheric model that provides the signal delay for a ground station.

    The signal propagation solver never applies the delay itself: the caller decides how to combine it with the
    light time (see :py:meth:`SignalPropagationModel.get_signal_tropo_correction`).
    """

    @abstractmethod
    def compute_signal_delay(self, date, elevation):
        """
        Args:
            date(sigprop.data_types.date.AbsoluteDate): date of the signal reception at the station
            elevation(float): elevation of the signal source seen from the station [rad]
        Returns:
            float: tropospheric signal delay [s]
        """
