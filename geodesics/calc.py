"""
Geodesic calculations between Coordinates.

Thin wrappers around Ellipsoid.inverse() and Ellipsoid.direct() for callers that work
with Coordinate objects rather than raw latitudes and longitudes. All functions default
to the WGS84 ellipsoid.
"""

__all__ = [
    'bearing_degrees', 'destination_point', 'distance_meters',
    'final_bearing_degrees', 'intermediate_points',
]

from typing import List

from geodesics.coordinates import Coordinate
from geodesics.ellipsoid import WGS84, Ellipsoid
from geodesics.exceptions import OutOfRange


def distance_meters(coord1: Coordinate, coord2: Coordinate,
                    ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate the length of the shortest geodesic between two points

    Args:
        coord1:
            A coordinate

        coord2:
            A second coordinate

        ellipsoid:
            (Default WGS84) The ellipsoid to calculate on

    Returns:
        (float) the distance in meters
    """
    return ellipsoid.inverse(
        coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude
    ).s12


def bearing_degrees(coord1: Coordinate, coord2: Coordinate,
                    ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate the initial bearing of the shortest geodesic from coord1 to coord2

    Returns:
        (float) the bearing in degrees clockwise from north, in [0, 360)
    """
    azi1 = ellipsoid.inverse(
        coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude
    ).azi1
    return (azi1 + 360) % 360


def final_bearing_degrees(coord1: Coordinate, coord2: Coordinate,
                          ellipsoid: Ellipsoid = WGS84) -> float:
    """
    Calculate the bearing on arrival at coord2 along the shortest geodesic from coord1

    Returns:
        (float) the bearing in degrees clockwise from north, in [0, 360)
    """
    azi2 = ellipsoid.inverse(
        coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude
    ).azi2
    return (azi2 + 360) % 360


def destination_point(start: Coordinate, bearing: float, distance: float,
                      ellipsoid: Ellipsoid = WGS84) -> Coordinate:
    """
    Give a start location, a direction of travel (in degrees clockwise from North), and a
    distance of travel, returns the finish location.

    Args:
        start: (Coordinate)
            The starting location

        bearing: (float)
            The angle of heading, in degrees

        distance: (float)
            The amount of movement, in meters

        ellipsoid:
            (Default WGS84) The ellipsoid to calculate on

    Returns:
        (Coordinate)
    """
    result = ellipsoid.direct(start.latitude, start.longitude, bearing, distance)
    return Coordinate(result.lon2, result.lat2)


def intermediate_points(coord1: Coordinate, coord2: Coordinate, count: int,
                        ellipsoid: Ellipsoid = WGS84) -> List[Coordinate]:
    """
    Evenly spaced points along the shortest geodesic between two coordinates, both
    endpoints included.

    Args:
        coord1:
            The start point

        coord2:
            The end point

        count:
            The number of points to return, at least 2

        ellipsoid:
            (Default WGS84) The ellipsoid to calculate on

    Returns:
        List[Coordinate]
    """
    if count < 2:
        raise OutOfRange(f'count must be at least 2; got {count}')

    line = ellipsoid.inverse_line(
        coord1.latitude, coord1.longitude, coord2.latitude, coord2.longitude
    )
    return [Coordinate(x.lon2, x.lat2) for x in line.waypoints(count)]
