
from click.testing import CliRunner
import pytest

from geodesics import INTERNATIONAL, WGS84, Ellipsoid, __version__
from geodesics.cli import MAX_PRECISION, GeodProcessor, main
from geodesics.dms import AngleKind, decode_lat_lon, encode


@pytest.fixture
def runner():
    return CliRunner()


def _lines(result):
    return [x for x in result.output.splitlines() if x]


def test_version(runner):
    result = runner.invoke(main, ['--version'])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_direct(runner):
    result = runner.invoke(main, [], input='-32.06 115.74 225 20e6\n')
    assert result.exit_code == 0

    expected = WGS84.direct(-32.06, 115.74, 225., 20e6)
    assert _lines(result) == [
        f'{expected.lat2:.8f} {expected.lon2:.8f} {expected.azi2:.8f}'
    ]


def test_inverse(runner):
    result = runner.invoke(main, ['-i'], input='40.6 -73.8 51.6 -0.5\n')
    assert result.exit_code == 0

    expected = WGS84.inverse(40.6, -73.8, 51.6, -0.5)
    assert _lines(result) == [
        f'{expected.azi1:.8f} {expected.azi2:.8f} {expected.s12:.3f}'
    ]
    assert _lines(result)[0].endswith('5551759.400')


def test_inverse_full(runner):
    result = runner.invoke(main, ['-i', '-f', '-p', '0'], input='40.6 -73.8 51.6 -0.5\n')
    assert result.exit_code == 0

    expected = WGS84.inverse(40.6, -73.8, 51.6, -0.5)
    assert _lines(result) == [
        f'40.60000 -73.80000 {expected.azi1:.5f} 51.60000 -0.50000 '
        f'{expected.azi2:.5f} 5551759'
    ]


def test_line(runner):
    result = runner.invoke(main, ['-l', '40.6', '73.8W', '51.2'], input='0\n1e6\n')
    assert result.exit_code == 0

    line = WGS84.line(40.6, -73.8, 51.2)
    assert _lines(result) == [
        f'{x.lat2:.8f} {x.lon2:.8f} {x.azi2:.8f}'
        for x in (line.position(0.), line.position(1e6))
    ]


def test_direct_full(runner):
    result = runner.invoke(main, ['-f'], input='10 20 30 1000\n')
    assert result.exit_code == 0

    expected = WGS84.direct(10., 20., 30., 1000.)
    assert _lines(result) == [
        f'10.00000000 20.00000000 30.00000000 {expected.lat2:.8f} '
        f'{expected.lon2:.8f} {expected.azi2:.8f} 1000.000'
    ]


def test_dms_output(runner):
    result = runner.invoke(main, ['-d'], input="40d36'N 73d48'W 51.2 1e6\n")
    assert result.exit_code == 0

    lat1, lon1 = decode_lat_lon("40d36'N", "73d48'W")
    expected = WGS84.direct(lat1, lon1, 51.2, 1e6)
    assert _lines(result) == [' '.join((
        encode(expected.lat2, 8, AngleKind.LATITUDE),
        encode(expected.lon2, 8, AngleKind.LONGITUDE),
        encode(expected.azi2, 8, AngleKind.AZIMUTH),
    ))]
    assert _lines(result)[0].split()[0].endswith('N')
    assert _lines(result)[0].split()[1].endswith('W')


def test_other_ellipsoids(runner):
    result = runner.invoke(main, ['-i', '-n'], input='0 0 10 10\n')
    assert result.exit_code == 0
    assert _lines(result)[0].endswith(f'{INTERNATIONAL.inverse(0., 0., 10., 10.).s12:.3f}')

    # Flattening greater than 1 is read as the inverse flattening
    clarke = Ellipsoid.from_inverse_flattening(6378249.145, 293.465)
    result = runner.invoke(main, ['-i', '-e', '6378249.145', '293.465'], input='0 0 10 10\n')
    assert result.exit_code == 0
    assert _lines(result)[0].endswith(f'{clarke.inverse(0., 0., 10., 10.).s12:.3f}')

    sphere = Ellipsoid(6_371_000., 0.)
    result = runner.invoke(main, ['-i', '-e', '6371000', '0'], input='0 0 0 90\n')
    assert result.exit_code == 0
    assert _lines(result)[0].endswith(f'{sphere.inverse(0., 0., 0., 90.).s12:.3f}')


def test_error_lines(runner):
    result = runner.invoke(main, ['-i'], input='91 0 0 0\n\n0 0 0 1\n10 20\n')
    assert result.exit_code == 1

    lines = _lines(result)
    assert len(lines) == 3
    assert lines[0].startswith('ERROR: ')
    assert not lines[1].startswith('ERROR')
    assert lines[2].startswith('ERROR: Incomplete input')


def test_illegal_distance(runner):
    result = runner.invoke(main, [], input='0 0 0 far\n')
    assert result.exit_code == 1
    assert _lines(result) == ['ERROR: Illegal distance far']


def test_bad_options(runner):
    result = runner.invoke(main, ['-i', '-l', '0', '0', '0'], input='')
    assert result.exit_code == 2

    result = runner.invoke(main, ['-e', '0', '0'], input='')
    assert result.exit_code == 2

    result = runner.invoke(main, ['-l', '91', '0', '0'], input='')
    assert result.exit_code == 2


def test_processor():
    processor = GeodProcessor(mode='inverse', prec=20)
    assert processor.prec == MAX_PRECISION

    assert list(processor.process(['', '  \n'])) == []
    output, ok = next(processor.process(['0 0 0 1']))
    assert ok
    assert output.split()[0] == '90.00000000000000'

    with pytest.raises(ValueError):
        GeodProcessor(mode='sideways')

    with pytest.raises(ValueError):
        GeodProcessor(mode='line')
