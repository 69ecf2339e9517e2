""" Position-velocity pair used to exchange states between providers, frames and the signal solver """

import numpy as np

from sigprop.utils.math_utils import require_len_array

__all__ = ["PVCoordinates"]


class PVCoordinates:
    """
    Immutable pair of position [m] and velocity [m/s] vectors (numpy arrays of shape (3,)).

    The arrays are copied on construction and flagged read-only, so a `PVCoordinates` instance can be shared
    between threads.
    """
    __slots__ = ["position", "velocity"]

    def __init__(self, position, velocity=None):
        position = np.array(position, dtype=float)
        velocity = np.zeros(3) if velocity is None else np.array(velocity, dtype=float)
        require_len_array(position)
        require_len_array(velocity)
        position.setflags(write=False)
        velocity.setflags(write=False)
        super().__setattr__("position", position)
        super().__setattr__("velocity", velocity)

    def __setattr__(self, *args):
        raise TypeError("Cannot modify attributes of immutable object")

    def shifted(self, position_offset, velocity_offset=None):
        """ Returns a new `PVCoordinates` with the offsets added to the position (and velocity). """
        velocity = self.velocity if velocity_offset is None else self.velocity + velocity_offset
        return PVCoordinates(self.position + position_offset, velocity)

    def __eq__(self, other):
        if not isinstance(other, PVCoordinates):
            return NotImplemented
        return np.array_equal(self.position, other.position) and np.array_equal(self.velocity, other.velocity)

    def __hash__(self):
        return hash((tuple(self.position), tuple(self.velocity)))

    def __repr__(self):
        return f"{type(self).__name__}(position={self.position.tolist()}, velocity={self.velocity.tolist()})"
