"""Exceptions raised by geodesics"""

__all__ = ['GeodesicError', 'InvalidParameter', 'OutOfRange']


class GeodesicError(ValueError):
    """Base class for all errors raised by geodesics"""


class InvalidParameter(GeodesicError):
    """The ellipsoid shape, or an option requested of the solver, is not usable"""


class OutOfRange(GeodesicError):
    """An input angle or distance lies outside of its domain"""
