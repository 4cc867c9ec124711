"""
Bit masks selecting which quantities a geodesic calculation computes.

The low bits (CAP_*) name the series a GeodesicLine must prepare; every output bit
carries the capability bits that it depends on, so OR'ing outputs together always
produces a self-consistent request.
"""

__all__ = ['Mask']

from enum import IntFlag


class Mask(IntFlag):
    """Capabilities of a GeodesicLine and outputs of a direct/inverse calculation"""

    EMPTY = 0

    CAP_NONE = 0
    CAP_C1 = 1 << 0
    CAP_C1p = 1 << 1
    CAP_C2 = 1 << 2
    CAP_C3 = 1 << 3
    CAP_C4 = 1 << 4
    CAP_ALL = 0x1F

    OUT_ALL = 0x7F80
    # Includes LONG_UNROLL
    OUT_MASK = 0xFF80

    LATITUDE = 1 << 7 | CAP_NONE
    LONGITUDE = 1 << 8 | CAP_C3
    AZIMUTH = 1 << 9 | CAP_NONE
    DISTANCE = 1 << 10 | CAP_C1
    DISTANCE_IN = 1 << 11 | CAP_C1 | CAP_C1p
    REDUCEDLENGTH = 1 << 12 | CAP_C1 | CAP_C2
    GEODESICSCALE = 1 << 13 | CAP_C1 | CAP_C2
    AREA = 1 << 14 | CAP_C4
    LONG_UNROLL = 1 << 15

    STANDARD = LATITUDE | LONGITUDE | AZIMUTH | DISTANCE
    DIFFERENTIALS = REDUCEDLENGTH | GEODESICSCALE
    ALL = OUT_ALL | CAP_ALL

    @classmethod
    def for_request(cls, differentials: bool = False, area: bool = False,
                    long_unroll: bool = False) -> 'Mask':
        """
        Build the output mask for a direct or inverse request.

        Args:
            differentials:
                Also compute the reduced length m12 and the geodesic scales M12, M21

            area:
                Also compute the area S12 between the geodesic and the equator

            long_unroll:
                Report the longitude of the second point unrolled, i.e. counting
                the number of times the geodesic encircles the ellipsoid

        Returns:
            Mask
        """
        mask = cls.STANDARD
        if differentials:
            mask |= cls.DIFFERENTIALS
        if area:
            mask |= cls.AREA
        if long_unroll:
            mask |= cls.LONG_UNROLL
        return mask
