""" Module with useful mathematical functions to support the library """

__all__ = ["rot1", "rot3", "rot3_dot", "require_len_array", "require_len_matrix"]

import numpy as np
from numpy import sin, cos
from sigprop.errors import ArraySizeError


def rot1(theta):
    """
    DCM of rotation of `theta` around first axis (Rotation 1).

    Args:
        theta (float): Angle in radians
    Returns:
        numpy.ndarray : 3x3 rotation matrix of angle theta around the X-axis
    """
    return np.array(
        [
            [1, 0, 0],
            [0, cos(theta), sin(theta)],
            [0, -sin(theta), cos(theta)],
        ]
    )


def rot3(theta):
    """
    DCM of rotation of `theta` around third axis (Rotation 3).

    Args:
        theta (float): Angle in radians
    Returns:
        numpy.ndarray : 3x3 rotation matrix of angle theta around the Z-axis
    """
    return np.array(
        [
            [cos(theta), sin(theta), 0],
            [-sin(theta), cos(theta), 0],
            [0, 0, 1],
        ]
    )


def rot3_dot(theta, theta_dot):
    """
    Time derivative of :py:func:`rot3` when the angle varies at rate `theta_dot`.

    Args:
        theta (float): Angle in radians
        theta_dot (float): Angle rate in radians per second
    Returns:
        numpy.ndarray : 3x3 derivative of the rotation matrix around the Z-axis
    """
    return theta_dot * np.array(
        [
            [-sin(theta), cos(theta), 0],
            [-cos(theta), -sin(theta), 0],
            [0, 0, 0],
        ]
    )


def require_len_array(arr: np.ndarray, length=3) -> None:
    """
    Checks the length of a numpy flat array.

    Args:
        arr(numpy.ndarray): input array to be checked
        length(int): required length of the array. Default value is 3
    Raises:
        AttributeError: if the input array is not a numpy object, the exception is raised
        ArraySizeError: if the input array does not have the correct length, the exception is raised
    """
    if not isinstance(arr, np.ndarray):
        raise AttributeError(f"Not a valid numpy array object (numpy.ndarray). It is of type {type(arr)}")

    if arr.ndim != 1 or arr.size != length:
        raise ArraySizeError(f"Invalid shape of array {arr}: should be an array of size {length}")


def require_len_matrix(arr: np.ndarray, nrows=3, ncols=3):
    """
    Checks the length of a numpy array (matrix).

    Args:
        arr(numpy.ndarray): input matrix to be checked
        nrows(int): required number of rows. Default value is 3
        ncols(int): required number of columns. Default value is 3
    Raises:
        AttributeError: if the input array is not a numpy object, the exception is raised
        ArraySizeError: if the input array (matrix) does not have the correct shape, the exception is raised
    """
    if not isinstance(arr, np.ndarray):
        raise AttributeError(f"Not a valid numpy array object (numpy.ndarray). It is of type {type(arr)}")

    if arr.ndim != 2:
        raise ArraySizeError(f"Invalid shape of matrix {arr}: should be of dimension {nrows}x{ncols}")

    rows, cols = arr.shape

    if rows != nrows or cols != ncols:
        raise ArraySizeError(f"Invalid shape of matrix {arr}: should be of dimension {nrows}x{ncols} but it is "
                             f"a {rows}x{cols} matrix")
