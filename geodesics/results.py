"""Value objects returned by direct, inverse and line calculations"""

__all__ = ['DirectResult', 'InverseResult']

import math
from typing import Any, Dict, Optional


class _GeodesicResult:
    """
    Immutable record of a geodesic calculation. Optional quantities which were not
    requested are None.
    """

    __slots__ = ()

    def __setattr__(self, key, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, key):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def _set(self, **fields):
        for key, value in fields.items():
            object.__setattr__(self, key, value)

    def __eq__(self, other) -> bool:
        if not isinstance(other, self.__class__):
            return False

        return all(
            _same(getattr(self, key), getattr(other, key))
            for key in self.__slots__
        )

    def __hash__(self):
        return hash(tuple(getattr(self, key) for key in self.__slots__))

    def __repr__(self):
        parts = ', '.join(
            f'{key}={value}' for key, value in self.to_dict().items()
        )
        return f'<{self.__class__.__name__}({parts})>'

    def to_dict(self) -> Dict[str, Any]:
        """The populated fields of the result, as a dict"""
        return {
            key: getattr(self, key)
            for key in self.__slots__
            if getattr(self, key) is not None
        }


def _same(a, b) -> bool:
    """Equality which treats two NaNs as equal"""
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


class DirectResult(_GeodesicResult):
    """
    The end point of a geodesic given its start point, azimuth and length.

    Attributes:
        lat1, lon1, azi1:
            The start point and the azimuth there, in degrees

        lat2, lon2, azi2:
            The end point and the (forward) azimuth there, in degrees

        s12:
            The distance between the points, in meters

        a12:
            The arc length between the points on the auxiliary sphere, in degrees

        m12:
            The reduced length of the geodesic, in meters

        M12, M21:
            The geodesic scales of the geodesic (dimensionless)

        S12:
            The area between the geodesic and the equator, in square meters
    """

    __slots__ = (
        'lat1', 'lon1', 'azi1', 'lat2', 'lon2', 'azi2', 's12', 'a12',
        'm12', 'M12', 'M21', 'S12',
    )

    def __init__(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        azi1: float,
        lat2: float,
        lon2: float,
        azi2: float,
        s12: float,
        a12: float,
        m12: Optional[float] = None,
        M12: Optional[float] = None,  # pylint: disable=invalid-name
        M21: Optional[float] = None,  # pylint: disable=invalid-name
        S12: Optional[float] = None,  # pylint: disable=invalid-name
    ):
        self._set(
            lat1=lat1, lon1=lon1, azi1=azi1, lat2=lat2, lon2=lon2, azi2=azi2,
            s12=s12, a12=a12, m12=m12, M12=M12, M21=M21, S12=S12,
        )


class InverseResult(_GeodesicResult):
    """
    The shortest geodesic between two points.

    Attributes:
        lat1, lon1, lat2, lon2:
            The two points, in degrees

        azi1, azi2:
            The azimuths of the geodesic at the two points, in degrees

        s12:
            The distance between the points, in meters

        a12:
            The arc length between the points on the auxiliary sphere, in degrees

        m12, M12, M21, S12:
            As for DirectResult

        iterations:
            The number of solver steps taken (diagnostic only)

        bisections:
            How many of those steps fell back to bisecting the bracket (diagnostic only)
    """

    __slots__ = (
        'lat1', 'lon1', 'lat2', 'lon2', 'azi1', 'azi2', 's12', 'a12',
        'm12', 'M12', 'M21', 'S12', 'iterations', 'bisections',
    )

    def __init__(  # pylint: disable=too-many-arguments
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        azi1: float,
        azi2: float,
        s12: float,
        a12: float,
        m12: Optional[float] = None,
        M12: Optional[float] = None,  # pylint: disable=invalid-name
        M21: Optional[float] = None,  # pylint: disable=invalid-name
        S12: Optional[float] = None,  # pylint: disable=invalid-name
        iterations: int = 0,
        bisections: int = 0,
    ):
        self._set(
            lat1=lat1, lon1=lon1, lat2=lat2, lon2=lon2, azi1=azi1, azi2=azi2,
            s12=s12, a12=a12, m12=m12, M12=M12, M21=M21, S12=S12,
            iterations=iterations, bisections=bisections,
        )

    def __eq__(self, other) -> bool:
        # The iteration counts are diagnostics, not part of the solution
        if not isinstance(other, InverseResult):
            return False

        return all(
            _same(getattr(self, key), getattr(other, key))
            for key in self.__slots__
            if key not in ('iterations', 'bisections')
        )

    def __hash__(self):
        return hash(tuple(
            getattr(self, key) for key in self.__slots__
            if key not in ('iterations', 'bisections')
        ))
