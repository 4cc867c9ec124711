
from fractions import Fraction
import math

import pytest
from pytest import approx

from geodesics.geomath import *


def test_sq_cbrt():
    assert sq(-3.) == 9.
    assert cbrt(-8.) == approx(-2.)
    assert cbrt(27.) == approx(3.)
    assert cbrt(0.) == 0.


def test_isfinite():
    assert isfinite(1e300)
    assert not isfinite(math.inf)
    assert not isfinite(math.nan)


def test_norm():
    s, c = norm(3., 4.)
    assert s == approx(0.6)
    assert c == approx(0.8)


def test_sum_error():
    s, t = sum_error(1., 1e-20)
    assert s == 1.
    assert t == 1e-20

    s, t = sum_error(0.1, 0.2)
    assert s == 0.1 + 0.2
    assert Fraction(s) + Fraction(t) == Fraction(0.1) + Fraction(0.2)

    # Signed zeros are preserved
    s, t = sum_error(-0., -0.)
    assert math.copysign(1, s) == -1
    assert t == 0


def test_polyval():
    assert polyval(2, [1, 2, 3], 0, 2.) == 11.
    assert polyval(1, [9, 1, 2], 1, 3.) == 5.
    assert polyval(-1, [1, 2], 0, 2.) == 0.


def test_remainder():
    assert remainder(370., 360.) == 10.
    assert remainder(-190., 360.) == 170.
    assert remainder(180., 360.) == 180.
    assert remainder(540., 360.) == -180.


def test_ang_round():
    assert ang_round(1e-30) == 0.
    assert ang_round(-1e-30) == 0.
    assert math.copysign(1, ang_round(-1e-30)) == -1
    assert ang_round(45.) == 45.


def test_ang_normalize():
    assert ang_normalize(180.) == 180.
    assert ang_normalize(-180.) == -180.
    assert ang_normalize(540.) == 180.
    assert ang_normalize(-540.) == -180.
    assert ang_normalize(360.) == 0.
    assert ang_normalize(190.) == -170.


def test_lat_fix():
    assert lat_fix(45.) == 45.
    assert math.isnan(lat_fix(91.))


def test_ang_diff():
    assert ang_diff(10., 20.) == (10., 0.)
    assert ang_diff(170., -170.) == (20., 0.)
    assert ang_diff(-170., 170.) == (-20., 0.)

    d, _ = ang_diff(0., 180.)
    assert d == 180.
    d, _ = ang_diff(0., -180.)
    assert d == -180.


def test_sincosd():
    assert sincosd(0.) == (0., 1.)
    assert sincosd(90.) == (1., 0.)
    assert sincosd(180.) == (0., -1.)
    assert sincosd(270.) == (-1., 0.)
    assert sincosd(-90.) == (-1., 0.)

    s, c = sincosd(30.)
    assert s == approx(0.5)
    assert c == approx(math.sqrt(3) / 2)

    s, c = sincosd(math.inf)
    assert math.isnan(s) and math.isnan(c)


def test_sincosde():
    assert sincosde(90., 0.) == (1., 0.)
    s, c = sincosde(30., 1e-15)
    assert s == approx(0.5)
    assert c == approx(math.sqrt(3) / 2)


def test_atan2d():
    assert atan2d(1., 0.) == 90.
    assert atan2d(-1., 0.) == -90.
    assert atan2d(0., -1.) == 180.
    assert atan2d(-0., -1.) == -180.
    assert atan2d(1., 1.) == approx(45.)
    assert atan2d(0., 1.) == 0.


@pytest.mark.parametrize('value,expected', [
    (180., -180.),
    (-180., -180.),
    (540., -180.),
    (190., -170.),
    (0., 0.),
])
def test_lon_canonical(value, expected):
    assert lon_canonical(value) == expected


@pytest.mark.parametrize('value,expected', [
    (-180., 180.),
    (180., 180.),
    (-540., 180.),
    (270., -90.),
    (-0., 0.),
])
def test_azi_canonical(value, expected):
    assert azi_canonical(value) == expected
    assert math.copysign(1, azi_canonical(value)) == math.copysign(1, expected)
