"""
Numeric primitives shared by the geodesic solver.

Angles handled here are in degrees unless the function name says otherwise. The
degree-based helpers are exact at multiples of 90 degrees, which keeps meridional and
equatorial geodesics free of spurious rounding.
"""

__all__ = [
    'DIGITS', 'EPSILON', 'MINVAL', 'MAXVAL',
    'ang_diff', 'ang_normalize', 'ang_round', 'atan2d', 'azi_canonical', 'cbrt', 'isfinite',
    'lat_fix', 'lon_canonical', 'norm', 'polyval', 'remainder', 'sincosd', 'sincosde', 'sq',
    'sum_error',
]

import math
from typing import Sequence, Tuple

DIGITS = 53
EPSILON = math.pow(2.0, 1 - DIGITS)
MINVAL = math.pow(2.0, -1022)
MAXVAL = math.pow(2.0, 1023) * (2 - EPSILON)


def sq(x: float) -> float:
    """Square a number"""
    return x * x


def cbrt(x: float) -> float:
    """Real cube root of a number, preserving its sign"""
    y = math.pow(abs(x), 1 / 3.0)
    return y if x > 0 else (-y if x < 0 else x)


def isfinite(x: float) -> bool:
    return abs(x) <= MAXVAL


def norm(x: float, y: float) -> Tuple[float, float]:
    """
    Scale a sine/cosine pair so that x**2 + y**2 == 1.

    Args:
        x:
            The (unnormalized) sine

        y:
            The (unnormalized) cosine

    Returns:
        Tuple of the normalized (sine, cosine)
    """
    r = math.hypot(x, y)
    return x / r, y / r


def sum_error(u: float, v: float) -> Tuple[float, float]:
    """
    Error free transformation of a sum.

    Returns:
        (s, t) such that s = round(u + v) and t = u + v - s exactly
    """
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    # u + v = s + t = s - (up + vpp); keep t == 0 when s == 0 to preserve signed zeros
    t = s if s == 0 else 0.0 - (up + vpp)
    return s, t


def polyval(n: int, p: Sequence[float], s: int, x: float) -> float:
    """
    Evaluate a polynomial using Horner's method.

    Args:
        n:
            The degree of the polynomial. A negative degree evaluates to zero.

        p:
            The coefficient array, highest power first

        s:
            The offset into p at which the coefficients begin

        x:
            The value at which to evaluate the polynomial

    Returns:
        float
    """
    y = float(0 if n < 0 else p[s])
    while n > 0:
        n -= 1
        s += 1
        y = y * x + p[s]
    return y


def remainder(x: float, y: float) -> float:
    """Remainder of x/y in the range [-y/2, y/2]"""
    y = abs(y)
    z = math.fmod(x, y)
    if 2 * abs(z) == y:
        z -= math.fmod(x, 2 * y) - z
    elif 2 * abs(z) > y:
        z += y if z < 0 else -y
    return z


def ang_round(x: float) -> float:
    """
    Round an angle so that small values are coarsened to a grid of 1/16 degree. Values
    smaller than about 1e-20 become zero, which avoids underflow in the solver.
    """
    z = 1 / 16.0
    y = abs(x)
    w = z - y
    # z - (z - y) snaps y onto the grid
    y = z - w if w > 0 else y
    return math.copysign(y, x)


def ang_normalize(x: float) -> float:
    """Reduce an angle to the range [-180, 180], keeping the sign of +/-180"""
    y = remainder(x, 360)
    return math.copysign(180.0, x) if abs(y) == 180 else y


def lat_fix(x: float) -> float:
    """Replace latitudes outside [-90, 90] with NaN"""
    return math.nan if abs(x) > 90 else x


def ang_diff(x: float, y: float) -> Tuple[float, float]:
    """
    Compute y - x reduced to the range [-180, 180] exactly.

    Returns:
        (d, e) where d is the rounded difference and e the rounding error
    """
    d, t = sum_error(remainder(-x, 360), remainder(y, 360))
    d, t = sum_error(remainder(d, 360), t)
    if d == 0 or abs(d) == 180:
        d = math.copysign(d, y - x if t == 0 else -t)
    return d, t


def _quadrant_rotate(s: float, c: float, q: int) -> Tuple[float, float]:
    q = q % 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    return s, c


def sincosd(x: float) -> Tuple[float, float]:
    """
    Sine and cosine of an angle in degrees, exact at multiples of 90 degrees.

    Args:
        x:
            The angle, in degrees

    Returns:
        Tuple of (sine, cosine)
    """
    r = math.fmod(x, 360) if isfinite(x) else math.nan
    q = 0 if math.isnan(r) else int(round(r / 90))
    r -= 90 * q
    r = math.radians(r)
    s, c = _quadrant_rotate(math.sin(r), math.cos(r), q)
    c = c + 0.0
    if s == 0:
        s = math.copysign(s, x)
    return s, c


def sincosde(x: float, t: float) -> Tuple[float, float]:
    """Sine and cosine of x + t in degrees, where t is a small correction to x"""
    q = int(round(x / 90)) if isfinite(x) else 0
    r = x - 90 * q
    r = math.radians(ang_round(r + t))
    s, c = _quadrant_rotate(math.sin(r), math.cos(r), q)
    c = c + 0.0
    if s == 0:
        s = math.copysign(s, x)
    return s, c


def atan2d(y: float, x: float) -> float:
    """
    Two-argument arctangent in degrees, exact for the cardinal directions.

    Returns:
        The angle in the range [-180, 180]
    """
    # Reduce to the first octant so that atan2 sees |y| <= x
    if abs(y) > abs(x):
        q = 2
        x, y = y, x
    else:
        q = 0
    if x < 0:
        q += 1
        x = -x
    ang = math.degrees(math.atan2(y, x))
    if q == 1:
        ang = math.copysign(180, y) - ang
    elif q == 2:
        ang = 90 - ang
    elif q == 3:
        ang = -90 + ang
    return ang


def lon_canonical(x: float) -> float:
    """Reduce a longitude to the range [-180, 180)"""
    x = ang_normalize(x) + 0.0
    return -180.0 if x == 180 else x


def azi_canonical(x: float) -> float:
    """Reduce an azimuth to the range (-180, 180]"""
    x = ang_normalize(x) + 0.0
    return 180.0 if x == -180 else x
