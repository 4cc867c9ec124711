"""
The ``geod`` command line utility.

Reads one query per line from standard input (or a file) and writes one answer per
line, in one of three modes:

    direct (default)    lat1 lon1 azi1 s12   ->  lat2 lon2 azi2
    -l lat1 lon1 azi1   s12                  ->  lat2 lon2 azi2
    -i                  lat1 lon1 lat2 lon2  ->  azi1 azi2 s12

With -f each output line is the full record ``lat1 lon1 azi1 lat2 lon2 azi2 s12``.
A line which cannot be processed produces ``ERROR: <message>`` so that output lines
stay aligned with input lines.
"""

__all__ = ['GeodProcessor', 'main']

from typing import Iterable, Iterator, List, Optional, Tuple

import click

from geodesics._version import __version__
from geodesics.dms import AngleKind, decode_azimuth, decode_lat_lon, encode
from geodesics.ellipsoid import INTERNATIONAL, WGS84, Ellipsoid
from geodesics.exceptions import GeodesicError, OutOfRange
from geodesics.line import GeodesicLine
from geodesics.utils.logging import LOGGER, set_log_level

# Max precision = 9: 1 nm in distance, 1e-14 degrees (1.1 nm), 1e-10 seconds (3 nm)
MIN_PRECISION = 0
MAX_PRECISION = 9


class GeodProcessor:
    """
    Turns input lines into output lines for one of the three geod modes.

    Args:
        ellipsoid:
            The Ellipsoid to calculate on

        mode:
            One of 'direct', 'inverse' or 'line'

        line_start:
            (lat1, lon1, azi1) of the fixed geodesic, required for mode 'line'

        dms:
            Write angles as degrees, minutes and seconds

        full:
            Write the full seven quantity record

        prec:
            Output precision relative to 1 m; clamped to [0, 9]. Angles are written
            with prec + 5 decimals.
    """

    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        mode: str = 'direct',
        line_start: Optional[Tuple[float, float, float]] = None,
        dms: bool = False,
        full: bool = False,
        prec: int = 3,
    ):
        if mode not in ('direct', 'inverse', 'line'):
            raise ValueError(f'Unknown mode {mode!r}')

        self.ellipsoid = ellipsoid
        self.mode = mode
        self.dms = dms
        self.full = full
        self.prec = min(MAX_PRECISION, max(MIN_PRECISION, prec))

        self._line: Optional[GeodesicLine] = None
        self._line_start = line_start
        if mode == 'line':
            if line_start is None:
                raise ValueError("Mode 'line' requires the start of the line")
            self._line = ellipsoid.line(*line_start)

    def _angle(self, value: float, kind: AngleKind) -> str:
        if self.dms:
            return encode(value, self.prec + 5, kind)
        return f'{value:.{self.prec + 5}f}'

    def _lat_lon(self, lat: float, lon: float) -> str:
        return (
            f'{self._angle(lat, AngleKind.LATITUDE)} '
            f'{self._angle(lon, AngleKind.LONGITUDE)}'
        )

    def _distance(self, value: float) -> str:
        return f'{value:.{self.prec}f}'

    @staticmethod
    def _tokens(line: str, count: int) -> List[str]:
        tokens = line.split()
        if len(tokens) < count:
            raise OutOfRange(f'Incomplete input: {line.strip()}')
        return tokens[:count]

    @staticmethod
    def _read_distance(token: str) -> float:
        try:
            return float(token)
        except ValueError:
            raise OutOfRange(f'Illegal distance {token}') from None

    def _direct(self, line: str) -> str:
        slat1, slon1, sazi1, ss12 = self._tokens(line, 4)
        lat1, lon1 = decode_lat_lon(slat1, slon1)
        azi1 = decode_azimuth(sazi1)
        s12 = self._read_distance(ss12)
        result = self.ellipsoid.direct(lat1, lon1, azi1, s12)
        return self._record(lat1, lon1, azi1, result.lat2, result.lon2, result.azi2, s12)

    def _along_line(self, line: str) -> str:
        s12 = self._read_distance(self._tokens(line, 1)[0])
        result = self._line.position(s12)  # type: ignore[union-attr]
        lat1, lon1, azi1 = self._line_start  # type: ignore[misc]
        return self._record(lat1, lon1, azi1, result.lat2, result.lon2, result.azi2, s12)

    def _inverse(self, line: str) -> str:
        slat1, slon1, slat2, slon2 = self._tokens(line, 4)
        lat1, lon1 = decode_lat_lon(slat1, slon1)
        lat2, lon2 = decode_lat_lon(slat2, slon2)
        result = self.ellipsoid.inverse(lat1, lon1, lat2, lon2)
        if self.full:
            return ' '.join((
                self._lat_lon(lat1, lon1),
                self._angle(result.azi1, AngleKind.AZIMUTH),
                self._lat_lon(lat2, lon2),
                self._angle(result.azi2, AngleKind.AZIMUTH),
                self._distance(result.s12),
            ))

        return ' '.join((
            self._angle(result.azi1, AngleKind.AZIMUTH),
            self._angle(result.azi2, AngleKind.AZIMUTH),
            self._distance(result.s12),
        ))

    def _record(  # pylint: disable=too-many-arguments
        self, lat1: float, lon1: float, azi1: float,
        lat2: float, lon2: float, azi2: float, s12: float
    ) -> str:
        """The output of a direct or line query"""
        out = [self._lat_lon(lat2, lon2), self._angle(azi2, AngleKind.AZIMUTH)]
        if self.full:
            out = [
                self._lat_lon(lat1, lon1), self._angle(azi1, AngleKind.AZIMUTH),
                *out, self._distance(s12),
            ]
        return ' '.join(out)

    def process_line(self, line: str) -> str:
        """
        Answer a single query.

        Raises:
            GeodesicError: if the query cannot be read or is out of range
        """
        if self.mode == 'inverse':
            return self._inverse(line)
        if self.mode == 'line':
            return self._along_line(line)
        return self._direct(line)

    def process(self, lines: Iterable[str]) -> Iterator[Tuple[str, bool]]:
        """
        Answer a stream of queries, skipping blank lines.

        Yields:
            (output line, whether the query succeeded)
        """
        for line in lines:
            if not line.strip():
                continue

            try:
                yield self.process_line(line), True
            except GeodesicError as exc:
                LOGGER.debug('Failed to process %r: %s', line, exc)
                yield f'ERROR: {exc}', False


def _ellipsoid(international: bool, shape: Optional[Tuple[float, float]]) -> Ellipsoid:
    if shape is not None:
        a, f = shape
        # Values of f above 1 are inverse flattenings
        return Ellipsoid.from_inverse_flattening(a, f) if f > 1 else Ellipsoid(a, f)
    if international:
        return INTERNATIONAL
    return WGS84


@click.command(name='geod')
@click.version_option(version=__version__, prog_name='geod')
@click.option('-i', '--inverse', is_flag=True, help='Solve the inverse problem')
@click.option(
    '-l', '--line', 'line_start', nargs=3, type=str, default=None,
    metavar='LAT1 LON1 AZI1',
    help='Compute points along the geodesic line starting at LAT1 LON1 with azimuth AZI1',
)
@click.option(
    '-n', '--international', is_flag=True,
    help='Use the international ellipsoid (a = 6378388 m, 1/f = 297)',
)
@click.option(
    '-e', '--ellipsoid', 'shape', nargs=2, type=float, default=None, metavar='A F',
    help='Use the ellipsoid with equatorial radius A and flattening F (F > 1 is 1/f)',
)
@click.option('-d', '--dms', is_flag=True, help='Write angles as degrees, minutes, seconds')
@click.option('-f', '--full', is_flag=True, help='Write the full geodesic record')
@click.option(
    '-p', '--precision', 'prec', type=int, default=3, show_default=True,
    help='Output precision relative to 1 m (0 to 9)',
)
@click.option('-v', '--verbose', count=True, help='Increase log verbosity (-vv for debug output)')
@click.argument('input_file', type=click.File('r'), default='-')
@click.pass_context
def main(  # pylint: disable=too-many-arguments
    ctx: click.Context,
    inverse: bool,
    line_start: Optional[Tuple[str, str, str]],
    international: bool,
    shape: Optional[Tuple[float, float]],
    dms: bool,
    full: bool,
    prec: int,
    verbose: int,
    input_file,
) -> None:
    """
    Perform geodesic calculations on the lines of INPUT_FILE (default stdin).

    \b
    Modes:
      (default)          lat1 lon1 azi1 s12   ->  lat2 lon2 azi2
      -l LAT1 LON1 AZI1  s12                  ->  lat2 lon2 azi2
      -i                 lat1 lon1 lat2 lon2  ->  azi1 azi2 s12

    Angles may be decimal degrees or DMS (e.g. 40d26'47"N). By default latitude
    precedes longitude; either may come first when N/S or E/W are appended.
    Distances are in meters.
    """
    if verbose:
        set_log_level('DEBUG' if verbose > 1 else 'INFO')

    if inverse and line_start:
        raise click.UsageError('-i and -l are mutually exclusive')

    try:
        ellipsoid = _ellipsoid(international, shape)
    except GeodesicError as exc:
        raise click.BadParameter(str(exc), param_hint="'-e'") from exc

    start = None
    if line_start:
        try:
            lat1, lon1 = decode_lat_lon(line_start[0], line_start[1])
            start = (lat1, lon1, decode_azimuth(line_start[2]))
        except GeodesicError as exc:
            raise click.BadParameter(str(exc), param_hint="'-l'") from exc

    processor = GeodProcessor(
        ellipsoid,
        mode='inverse' if inverse else ('line' if start else 'direct'),
        line_start=start,
        dms=dms,
        full=full,
        prec=prec,
    )

    failed = False
    for output, ok in processor.process(input_file):
        click.echo(output)
        failed = failed or not ok

    if failed:
        ctx.exit(1)
