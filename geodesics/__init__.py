
from geodesics._version import __version__  # noqa: F401
from geodesics.utils.logging import LOGGER
from geodesics.exceptions import GeodesicError, InvalidParameter, OutOfRange
from geodesics.mask import Mask
from geodesics.results import DirectResult, InverseResult
from geodesics.line import GeodesicLine
from geodesics.ellipsoid import INTERNATIONAL, WGS84, Ellipsoid
from geodesics.coordinates import Coordinate

__all__ = [
    'Coordinate',
    'DirectResult',
    'Ellipsoid',
    'GeodesicError',
    'GeodesicLine',
    'INTERNATIONAL',
    'InverseResult',
    'InvalidParameter',
    'Mask',
    'OutOfRange',
    'WGS84',
    'LOGGER',
]
