"""Domain checks applied to query inputs before any computation"""

__all__ = ['check_finite', 'check_latitude']

import math

from geodesics.exceptions import OutOfRange


def check_latitude(value: float, name: str = 'latitude') -> float:
    """
    Ensure a latitude lies in [-90, 90].

    Args:
        value:
            The latitude, in degrees

        name:
            The name of the argument, for the error message

    Returns:
        The latitude as a float
    """
    value = float(value)
    if not -90 <= value <= 90:
        raise OutOfRange(f'{name} {value} not in range [-90, 90]')
    return value


def check_finite(value: float, name: str) -> float:
    """Ensure a longitude, azimuth or distance is a finite number"""
    value = float(value)
    if not math.isfinite(value):
        raise OutOfRange(f'{name} must be finite; got {value}')
    return value
