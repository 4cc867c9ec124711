"""
Reading and writing angles as degrees, minutes and seconds.

Accepted input looks like ``40d26'47"N``, ``-73.98``, ``74d0.5'W`` or ``12d30``. The
designators d, ' and " mark degrees, minutes and seconds; the designator of the
least significant component may be left off. A trailing (or leading) hemisphere
letter N/S/E/W gives the sign and identifies the angle as a latitude or longitude.
"""

__all__ = [
    'AngleKind', 'decode', 'decode_azimuth', 'decode_lat_lon', 'encode', 'split'
]

from enum import Enum
import re
from typing import Tuple

from geodesics.exceptions import OutOfRange


class AngleKind(Enum):
    """What an angle represents, as indicated by its hemisphere designator"""
    NONE = 0
    LATITUDE = 1
    LONGITUDE = 2
    AZIMUTH = 3


_HEMISPHERES = {
    'N': (AngleKind.LATITUDE, 1),
    'S': (AngleKind.LATITUDE, -1),
    'E': (AngleKind.LONGITUDE, 1),
    'W': (AngleKind.LONGITUDE, -1),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(d|°|''|'|\"|)")

_DESIGNATORS = {'d': 0, '°': 0, "'": 1, "''": 2, '"': 2}


def decode(dms: str) -> Tuple[float, AngleKind]:
    """
    Decode a DMS string.

    Args:
        dms:
            The angle, e.g. ``40d26'47"N``

    Returns:
        (angle in degrees, AngleKind); the kind is NONE unless a hemisphere was given

    Raises:
        OutOfRange: if the string cannot be read as an angle
    """
    body = dms.strip().upper().replace('D', 'd')
    kind, sign = AngleKind.NONE, 1
    if body and body[-1] in _HEMISPHERES:
        kind, sign = _HEMISPHERES[body[-1]]
        body = body[:-1].rstrip()
    elif body and body[0] in _HEMISPHERES:
        kind, sign = _HEMISPHERES[body[0]]
        body = body[1:].lstrip()

    if body[:1] in ('+', '-'):
        sign *= -1 if body[0] == '-' else 1
        body = body[1:]

    if not body:
        raise OutOfRange(f'Empty angle in {dms!r}')

    components = [0.0, 0.0, 0.0]
    last = -1
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if not match or match.end() == pos:
            raise OutOfRange(f'Illegal character in DMS string {dms!r}')

        number, designator = match.groups()
        index = _DESIGNATORS[designator] if designator else last + 1
        if index <= last or index > 2:
            raise OutOfRange(f'Components out of order in DMS string {dms!r}')
        if last >= 0 and '.' in body[:pos]:
            raise OutOfRange(f'Only the last component of {dms!r} may have a fraction')

        components[index] = float(number)
        last = index
        pos = match.end()

    degrees, minutes, seconds = components
    if last > 0 and (minutes >= 60 or seconds >= 60):
        raise OutOfRange(f'Minutes or seconds not less than 60 in {dms!r}')

    return sign * (degrees + minutes / 60 + seconds / 3600), kind


def decode_lat_lon(first: str, second: str) -> Tuple[float, float]:
    """
    Decode a latitude/longitude pair. The latitude comes first unless hemisphere
    letters say otherwise.

    Returns:
        (latitude, longitude) in degrees

    Raises:
        OutOfRange: if either string is illegal, both name the same kind of
            hemisphere, or the latitude is outside [-90, 90]
    """
    a, kind_a = decode(first)
    b, kind_b = decode(second)
    if kind_a is not AngleKind.NONE and kind_a is kind_b:
        raise OutOfRange(
            f'Both {first} and {second} are '
            f'{"latitudes" if kind_a is AngleKind.LATITUDE else "longitudes"}'
        )

    if kind_a is AngleKind.LONGITUDE or kind_b is AngleKind.LATITUDE:
        a, b = b, a

    if not -90 <= a <= 90:
        raise OutOfRange(f'Latitude {a} not in range [-90, 90]')
    if not -180 <= b <= 360:
        raise OutOfRange(f'Longitude {b} not in range [-180, 360]')

    return a, b


def decode_azimuth(dms: str) -> float:
    """
    Decode an azimuth, which may be given in [-180, 360] and may carry an E/W
    designator but not N/S.

    Returns:
        The azimuth in degrees, reduced to [-180, 180)
    """
    azi, kind = decode(dms)
    if not -180 <= azi <= 360:
        raise OutOfRange(f'Azimuth {dms} not in range [-180, 360]')
    if azi >= 180:
        azi -= 360
    if kind is AngleKind.LATITUDE:
        raise OutOfRange(f'Azimuth {dms} has a latitude hemisphere, N/S')

    return azi


def split(angle: float, decimals: int) -> Tuple[int, int, float]:
    """
    Split an angle's magnitude into whole degrees, whole minutes and seconds, with
    the seconds rounded to the given number of decimals. Rounding carries into
    minutes and degrees, so the seconds are always less than 60.
    """
    scale = 10 ** decimals
    ticks = round(abs(angle) * 3600 * scale)
    whole, fraction = divmod(ticks, scale)
    minutes, seconds = divmod(whole, 60)
    degrees, minutes = divmod(minutes, 60)
    return int(degrees), int(minutes), seconds + fraction / scale


def encode(angle: float, prec: int, kind: AngleKind = AngleKind.NONE) -> str:
    """
    Encode an angle as a DMS string.

    Args:
        angle:
            The angle, in degrees

        prec:
            The number of decimal digits relative to whole degrees. Below 2 only
            degrees are written, below 4 degrees and minutes, otherwise degrees,
            minutes and seconds with prec - 4 decimals.

        kind:
            LATITUDE or LONGITUDE write a hemisphere letter in place of the sign and
            pad the degrees to 2 or 3 digits respectively

    Returns:
        str
    """
    prec = max(0, min(prec, 15))
    if prec < 2:
        trailing, decimals = 0, prec
    elif prec < 4:
        trailing, decimals = 1, prec - 2
    else:
        trailing, decimals = 2, prec - 4

    scale = 10 ** decimals
    ticks = round(abs(angle) * 60 ** trailing * scale)
    whole, fraction = divmod(ticks, scale)
    parts = []
    for _ in range(trailing):
        whole, part = divmod(whole, 60)
        parts.insert(0, part)
    parts.insert(0, whole)

    def _fmt(value: int, width: int, last: bool) -> str:
        text = f'{value:0{width}d}'
        if last and decimals:
            text += f'.{fraction:0{decimals}d}'
        return text

    width = {AngleKind.LATITUDE: 2, AngleKind.LONGITUDE: 3}.get(kind, 1)
    out = _fmt(parts[0], width, trailing == 0) + 'd'
    if trailing >= 1:
        out += _fmt(parts[1], 2, trailing == 1) + "'"
    if trailing == 2:
        out += _fmt(parts[2], 2, True) + '"'

    negative = angle < 0 and ticks != 0
    if kind is AngleKind.LATITUDE:
        return out + ('S' if negative else 'N')
    if kind is AngleKind.LONGITUDE:
        return out + ('W' if negative else 'E')

    return ('-' if negative else '') + out
