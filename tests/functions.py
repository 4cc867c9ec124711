from pytest import approx

from geodesics import Coordinate


def angle_difference(a: float, b: float) -> float:
    """The difference a - b reduced to [-180, 180)"""
    return (a - b + 180) % 360 - 180


def assert_angles_equal(a1: float, a2: float, abs_tol=1e-9):
    """
    Asserts that two angles (in degrees) are equal within a tolerance, treating
    angles which differ by a multiple of 360 degrees as equal.
    """
    assert angle_difference(a1, a2) == approx(0., abs=abs_tol), (a1, a2)


def assert_coordinates_equal(c1: Coordinate, c2: Coordinate, abs_tol=1e-7):
    """
    Asserts that two coordinates are equal within a specified absolute tolerance.

    Args:
        c1: The first Coordinate
        c2: The second Coordinate
        abs_tol: The absolute tolerance for floating point comparison.
                 Default is 1e-7 (approx 1.1cm at the equator).
    """
    try:
        assert_angles_equal(c1.longitude, c2.longitude, abs_tol)
        assert c1.latitude == approx(c2.latitude, abs=abs_tol)
    except AssertionError as e:
        print(c1.longitude, c1.latitude)
        print(c2.longitude, c2.latitude)
        raise e
