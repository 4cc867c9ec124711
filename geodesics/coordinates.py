"""
Representation of a specific point on earth
"""

__all__ = ['Coordinate']

from typing import Tuple, Union

from geodesics import dms


class Coordinate:
    """
    Representation of a coordinate on the globe (i.e., a lon/lat pair).

    Latitudes past a pole are folded back over it (moving the longitude by 180
    degrees) and longitudes are reduced to [-180, 180).
    """

    def __init__(
        self,
        longitude: Union[float, int, str],
        latitude: Union[float, int, str],
    ):
        lon, lat = float(longitude), float(latitude)
        while not -90 <= lat <= 90:
            # Crosses one of the poles
            lat = 90 - (lat - 90) if lat > 90 else -90 - (lat + 90)
            lon = lon + 180 if lon < 0 else lon - 180

        while not -180 <= lon <= 180:
            # Crosses the antimeridian
            lon = lon - 360 if lon > 180 else lon + 360

        # Longitudes are bounded to [-180, 180)
        if lon == 180:
            lon = -180.

        self.longitude = lon
        self.latitude = lat

    def __eq__(self, other):
        if not isinstance(other, Coordinate):
            return False

        return self.latitude == other.latitude and self.longitude == other.longitude

    def __hash__(self):
        return hash((self.longitude, self.latitude))

    def __repr__(self):
        return f'<Coordinate({self.longitude}, {self.latitude})>'

    @classmethod
    def from_dms(cls, lon: Tuple[int, int, float, str], lat: Tuple[int, int, float, str]):
        """
        Creates a Coordinate from a Degree Minutes Seconds (lon, lat) pair.

        The quadrant value should consist of either 'E'/'W' (longitude) or 'N'/'S' (latitude)

        Args:
            lon:
                Longitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str))
            lat:
                Latitude, as a 4-tuple of
                ( <degrees> (float),  <minutes> (float), <seconds> (float), <quadrant> (str) )

        Returns:
            Coordinate
        """
        def convert(value: Tuple[int, int, float, str]):
            mult = -1 if value[3].upper() in ('S', 'W') else 1
            return mult * (value[0] + (value[1] / 60) + (value[2] / 3600))

        return cls(convert(lon), convert(lat))

    @classmethod
    def from_strings(cls, first: str, second: str):
        """
        Creates a Coordinate from a pair of angle strings in DMS or decimal notation,
        e.g. ``Coordinate.from_strings('40d38\\'N', '73d47\\'W')``. Latitude comes first
        unless hemisphere letters say otherwise.
        """
        lat, lon = dms.decode_lat_lon(first, second)
        return cls(lon, lat)

    def to_dms(self, decimals: int = 5) -> Tuple[Tuple[int, int, float, str], Tuple[int, int, float, str]]:
        """
        Convert the coordinate to degrees, minutes, seconds, hemisphere tuples

        Args:
            decimals:
                (Default 5) The number of decimals the seconds are rounded to

        Returns:
            ((degrees, minutes, seconds, 'E'/'W'), (degrees, minutes, seconds, 'N'/'S'))
        """
        return (
            (*dms.split(self.longitude, decimals), 'E' if self.longitude >= 0 else 'W'),
            (*dms.split(self.latitude, decimals), 'N' if self.latitude >= 0 else 'S'),
        )

    def to_float(self, reverse: bool = False) -> Tuple[float, float]:
        """
        Converts the coordinate to a tuple of floats (longitude, latitude)

        Args:
            reverse: (bool)
                (Default False) If True, reverses the coordinate order to (latitude, longitude)

        Returns:
            Tuple of (longitude, latitude)
        """
        if reverse:
            return self.latitude, self.longitude

        return self.longitude, self.latitude
