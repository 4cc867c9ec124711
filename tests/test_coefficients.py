
import math

import pytest
from pytest import approx

from geodesics.coefficients import *
from geodesics.exceptions import InvalidParameter


def test_check_order():
    assert check_order(3) == 3
    assert check_order(6) == 6

    with pytest.raises(InvalidParameter):
        check_order(2)

    with pytest.raises(InvalidParameter):
        check_order(7)

    with pytest.raises(InvalidParameter):
        check_order(4.5)


def test_a1m1f():
    eps = 0.01
    eps2 = eps ** 2
    expected = (eps + eps2 / 4 + eps2 ** 2 / 64 + eps2 ** 3 / 256) / (1 - eps)
    assert a1m1f(eps) == approx(expected, rel=1e-14)
    assert a1m1f(0.) == 0.

    # Lower orders drop the high degree terms
    expected = (eps + eps2 / 4) / (1 - eps)
    assert a1m1f(eps, 3) == approx(expected, rel=1e-14)


def test_a2m1f():
    eps = 0.01
    eps2 = eps ** 2
    expected = (-eps - 3 * eps2 / 4 - 7 * eps2 ** 2 / 64 - 11 * eps2 ** 3 / 256) / (1 + eps)
    assert a2m1f(eps) == approx(expected, rel=1e-14)


def test_c1f():
    eps = 0.01
    c = [0.] * 7
    c1f(eps, c)
    assert c[0] == 0.
    assert c[1] == approx(-eps / 2 + 3 * eps ** 3 / 16 - eps ** 5 / 32, rel=1e-14)
    assert c[2] == approx(-eps ** 2 / 16 + eps ** 4 / 32 - 9 * eps ** 6 / 2048, rel=1e-14)
    assert c[6] == approx(-7 * eps ** 6 / 2048, rel=1e-14)

    c = [0.] * 4
    c1f(eps, c, 3)
    assert c[1] == approx(-eps / 2 + 3 * eps ** 3 / 16, rel=1e-14)
    assert c[3] == approx(-eps ** 3 / 48, rel=1e-14)


def test_c1pf_reverts_c1():
    # sigma -> tau -> sigma is the identity to the order of the series
    eps = 0.005
    c1 = [0.] * 7
    c1p = [0.] * 7
    c1f(eps, c1)
    c1pf(eps, c1p)

    sigma = 0.7
    tau = sigma + sin_cos_series(True, math.sin(sigma), math.cos(sigma), c1)
    back = tau + sin_cos_series(True, math.sin(tau), math.cos(tau), c1p)
    assert back == approx(sigma, abs=1e-14)


def test_sin_cos_series():
    x = 0.3
    sx, cx = math.sin(x), math.cos(x)

    assert sin_cos_series(True, sx, cx, [0., 1.]) == approx(math.sin(2 * x))
    assert sin_cos_series(True, sx, cx, [0., 0.5, 0.25]) == approx(
        0.5 * math.sin(2 * x) + 0.25 * math.sin(4 * x)
    )
    assert sin_cos_series(False, sx, cx, [1.]) == approx(math.cos(x))
    assert sin_cos_series(False, sx, cx, [1., 2.]) == approx(
        math.cos(x) + 2 * math.cos(3 * x)
    )


def test_series_coefficients_sphere():
    series = SeriesCoefficients(0.)
    assert series.a3f(0.) == 1.

    # With n = 0, A3 = 1 - eps/2 - eps^2/4 - eps^3/16 - ...
    eps = 0.01
    assert series.a3f(eps) == approx(
        1 - eps / 2 - eps ** 2 / 4 - eps ** 3 / 16 - 3 * eps ** 4 / 64 - 3 * eps ** 5 / 128,
        rel=1e-14
    )

    c3 = [0.] * 6
    series.c3f(eps, c3)
    assert c3[1] == approx(eps / 4 + eps ** 2 / 8 + 3 * eps ** 3 / 64 + 5 * eps ** 4 / 128 + 3 * eps ** 5 / 128, rel=1e-14)

    c4 = [0.] * 6
    series.c4f(eps, c4)
    assert c4[0] == approx(2 / 3 - eps / 5 - 2 / 105 * eps ** 2 + 11 / 315 * eps ** 3
                           + 4 / 1155 * eps ** 4 + 97 / 15015 * eps ** 5, rel=1e-14)


def test_series_coefficients_order():
    n = 0.0016792203863836474
    full = SeriesCoefficients(n, 6)
    low = SeriesCoefficients(n, 3)
    assert low.order == 3
    assert repr(low) == f'<SeriesCoefficients(n={n}, order=3)>'

    eps = 0.001
    assert low.a3f(eps) == approx(full.a3f(eps), rel=1e-8)

    c3 = [0.] * 3
    low.c3f(eps, c3)
    c3_full = [0.] * 6
    full.c3f(eps, c3_full)
    assert c3[1] == approx(c3_full[1], rel=1e-5)
    assert c3[2] == approx(c3_full[2], rel=1e-2)
