"""
Constants declarations for geodesics
"""

from geodesics.geomath import DIGITS, EPSILON, MINVAL

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening

# International (Hayford 1924) Ellipsoid Constants
INTERNATIONAL_A = 6378388.0
INTERNATIONAL_RF = 297.0  # Inverse flattening

# Order of the series expansions in the flattening
DEFAULT_ORDER = 6
MIN_ORDER = 3
MAX_ORDER = 6

# Inverse solver tuning. Newton's method is tried for the first MAXIT1 steps,
# after which the solver bisects the bracket until MAXIT2 steps have been taken.
MAXIT1 = 20
MAXIT2 = MAXIT1 + DIGITS + 10

TINY = MINVAL ** 0.5
TOL0 = EPSILON
TOL1 = 200 * TOL0
TOL2 = TOL0 ** 0.5
TOLB = TOL0
XTHRESH = 1000 * TOL2
