
import pytest
from pytest import approx

from geodesics.dms import *
from geodesics.exceptions import OutOfRange


@pytest.mark.parametrize('text,expected', [
    ('40.5', (40.5, AngleKind.NONE)),
    ('-73.98', (-73.98, AngleKind.NONE)),
    ("40d30'N", (40.5, AngleKind.LATITUDE)),
    ("40d30'S", (-40.5, AngleKind.LATITUDE)),
    ("73d30'36\"W", (-73.51, AngleKind.LONGITUDE)),
    ("W73d30'36\"", (-73.51, AngleKind.LONGITUDE)),
    ('12d30', (12.5, AngleKind.NONE)),
    ("74d0.5'E", (74 + 0.5 / 60, AngleKind.LONGITUDE)),
    ('+5D', (5., AngleKind.NONE)),
    ('10°30\'', (10.5, AngleKind.NONE)),
])
def test_decode(text, expected):
    angle, kind = decode(text)
    assert angle == approx(expected[0], abs=1e-12)
    assert kind is expected[1]


@pytest.mark.parametrize('text', [
    '', 'N', 'abc', "30'10d", "10.5d30'", "10d60'", "10d30'60\"", '10d20d', '1-2',
])
def test_decode_illegal(text):
    with pytest.raises(OutOfRange):
        decode(text)


def test_decode_lat_lon():
    assert decode_lat_lon('40.6', '-73.8') == (40.6, -73.8)
    assert decode_lat_lon('73d48\'W', '40d36\'N') == approx((40.6, -73.8))
    assert decode_lat_lon('40d36\'N', '73d48\'W') == approx((40.6, -73.8))
    assert decode_lat_lon('-73.8E', '40.6') == approx((40.6, -73.8))
    assert decode_lat_lon('0', '350') == (0., 350.)

    with pytest.raises(OutOfRange):
        decode_lat_lon('10N', '20S')

    with pytest.raises(OutOfRange):
        decode_lat_lon('10E', '20W')

    with pytest.raises(OutOfRange):
        decode_lat_lon('91', '0')

    with pytest.raises(OutOfRange):
        decode_lat_lon('0', '361')


def test_decode_azimuth():
    assert decode_azimuth('45') == 45.
    assert decode_azimuth('270') == -90.
    assert decode_azimuth('180') == -180.
    assert decode_azimuth('-180') == -180.
    assert decode_azimuth('90W') == -90.

    with pytest.raises(OutOfRange):
        decode_azimuth('45N')

    with pytest.raises(OutOfRange):
        decode_azimuth('400')


def test_split():
    assert split(40.5, 0) == (40, 30, 0.)
    assert split(-73.51, 1) == (73, 30, 36.)
    # Rounding carries into the minutes and degrees
    assert split(10.999999999, 2) == (11, 0, 0.)


@pytest.mark.parametrize('angle,prec,kind,expected', [
    (40.5, 0, AngleKind.NONE, '40d'),
    (40.5, 1, AngleKind.NONE, '40.5d'),
    (40.5, 2, AngleKind.NONE, "40d30'"),
    (-40.5, 2, AngleKind.NONE, "-40d30'"),
    (40.5, 3, AngleKind.LATITUDE, "40d30.0'N"),
    (-5.51, 4, AngleKind.LATITUDE, "05d30'36\"S"),
    (-73.51, 5, AngleKind.LONGITUDE, "073d30'36.0\"W"),
    (73.51, 4, AngleKind.LONGITUDE, "073d30'36\"E"),
    (-0.0000001, 4, AngleKind.NONE, "0d00'00\""),
    (59.99999999, 4, AngleKind.AZIMUTH, "60d00'00\""),
])
def test_encode(angle, prec, kind, expected):
    assert encode(angle, prec, kind) == expected
