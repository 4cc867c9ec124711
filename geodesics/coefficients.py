"""
Series expansions in the flattening used by the geodesic solver.

The tables below hold the Taylor coefficients of the expansions to sixth order. Each
polynomial is stored as integer numerators, highest power first, followed by a
common denominator. Lower expansion orders drop the terms whose total degree in the
small parameters (eps and the third flattening n) reaches the order; since the
Taylor coefficients do not depend on where the series is truncated, a lower order
simply uses the low-degree tail of each polynomial.

Notation:
    eps   - the expansion parameter of a particular geodesic, k2 / (2(1 + sqrt(1 + k2)) + k2)
    n     - the third flattening of the ellipsoid, f / (2 - f)
    sigma - the arc length on the auxiliary sphere
    tau   - the scaled distance, s / (b A1)
"""

__all__ = [
    'SeriesCoefficients', 'a1m1f', 'a2m1f', 'c1f', 'c1pf', 'c2f',
    'check_order', 'sin_cos_series',
]

from typing import Iterator, List, MutableSequence, Sequence, Tuple

from geodesics._const import DEFAULT_ORDER, MAX_ORDER, MIN_ORDER
from geodesics.exceptions import InvalidParameter
from geodesics.geomath import polyval, sq

# (A1 - 1) * (1 - eps) - eps, even polynomial in eps
_A1M1_COEFF = [1, 4, 64, 0, 256]

# C1[l] / eps^l, even polynomials in eps; distance from sigma
_C1_COEFF = [
    -1, 6, -16, 32,
    -9, 64, -128, 2048,
    9, -16, 768,
    3, -5, 512,
    -7, 1280,
    -7, 2048,
]

# C1'[l] / eps^l; sigma from distance (the reversion of C1)
_C1P_COEFF = [
    205, -432, 768, 1536,
    4005, -4736, 3840, 12288,
    -225, 116, 384,
    -7173, 2695, 7680,
    3467, 7680,
    38081, 61440,
]

# (1 + A2) * (1 + eps) - 1, even polynomial in eps
_A2M1_COEFF = [-11, -28, -192, 0, 256]

# C2[l] / eps^l; reduced length and geodesic scale
_C2_COEFF = [
    1, 2, 16, 32,
    35, 64, 384, 2048,
    15, 80, 768,
    7, 35, 512,
    63, 1280,
    77, 2048,
]

# Coefficients of eps^j in A3, polynomials in n; j = 5 .. 0
_A3_COEFF = [
    -3, 128,
    -2, -3, 64,
    -1, -3, -1, 16,
    3, -1, -2, 8,
    1, -1, 2,
    1, 1,
]

# Coefficients of eps^j in C3[l], polynomials in n; l = 1 .. 5, j = 5 .. l
_C3_COEFF = [
    3, 128,
    2, 5, 128,
    -1, 3, 3, 64,
    -1, 0, 1, 8,
    -1, 1, 4,
    5, 256,
    1, 3, 128,
    -3, -2, 3, 64,
    1, -3, 2, 32,
    7, 512,
    -10, 9, 384,
    5, -9, 5, 192,
    7, 512,
    -14, 7, 512,
    21, 2560,
]

# Coefficients of eps^j in C4[l], polynomials in n; l = 0 .. 5, j = 5 .. l
_C4_COEFF = [
    97, 15015,
    1088, 156, 45045,
    -224, -4784, 1573, 45045,
    -10656, 14144, -4576, -858, 45045,
    64, 624, -4576, 6864, -3003, 15015,
    100, 208, 572, 3432, -12012, 30030, 45045,
    1, 9009,
    -2944, 468, 135135,
    5792, 1040, -1287, 135135,
    5952, -11648, 9152, -2574, 135135,
    -64, -624, 4576, -6864, 3003, 135135,
    8, 10725,
    1856, -936, 225225,
    -8448, 4992, -1144, 225225,
    -1440, 4160, -4576, 1716, 225225,
    -136, 63063,
    1024, -208, 105105,
    3584, -3328, 1144, 315315,
    -128, 135135,
    -2560, 832, 405405,
    128, 99099,
]


def check_order(order: int) -> int:
    """Validate a series expansion order"""
    if not isinstance(order, int) or not MIN_ORDER <= order <= MAX_ORDER:
        raise InvalidParameter(
            f'Series order must be an integer between {MIN_ORDER} and {MAX_ORDER}; got {order!r}'
        )
    return order


def _truncated(coeff: Sequence[int], offset: int, full_degree: int, degree: int,
               x: float) -> float:
    """
    Evaluate the block of coeff starting at offset, a polynomial of degree
    full_degree followed by its denominator, keeping only terms up to degree.
    """
    return (
        polyval(degree, coeff, offset + full_degree - degree, x)
        / coeff[offset + full_degree + 1]
    )


def _even_series(coeff: Sequence[int], eps: float, c: MutableSequence[float],
                 order: int):
    """Fill c[1..order] from a table of C[l] / eps^l in the layout of _C1_COEFF"""
    eps2 = sq(eps)
    d = eps
    o = 0
    for l in range(1, MAX_ORDER + 1):
        full = (MAX_ORDER - l) // 2
        if l <= order:
            c[l] = d * _truncated(coeff, o, full, (order - l) // 2, eps2)
            d *= eps
        o += full + 2


def a1m1f(eps: float, order: int = DEFAULT_ORDER) -> float:
    """
    The scale factor A1 - 1 relating distance to arc length on the auxiliary sphere.

    Args:
        eps:
            The expansion parameter of the geodesic

        order:
            The expansion order

    Returns:
        float
    """
    full = MAX_ORDER // 2
    t = _truncated(_A1M1_COEFF, 0, full, order // 2, sq(eps))
    return (t + eps) / (1 - eps)


def c1f(eps: float, c: MutableSequence[float], order: int = DEFAULT_ORDER):
    """Fill c[1..order] with the coefficients C1[l] of the distance series"""
    _even_series(_C1_COEFF, eps, c, order)


def c1pf(eps: float, c: MutableSequence[float], order: int = DEFAULT_ORDER):
    """Fill c[1..order] with the coefficients C1'[l] giving sigma in terms of tau"""
    _even_series(_C1P_COEFF, eps, c, order)


def a2m1f(eps: float, order: int = DEFAULT_ORDER) -> float:
    """The scale factor A2 - 1 of the reduced length series"""
    full = MAX_ORDER // 2
    t = _truncated(_A2M1_COEFF, 0, full, order // 2, sq(eps))
    return (t - eps) / (1 + eps)


def c2f(eps: float, c: MutableSequence[float], order: int = DEFAULT_ORDER):
    """Fill c[1..order] with the coefficients C2[l] of the reduced length series"""
    _even_series(_C2_COEFF, eps, c, order)


def sin_cos_series(sinp: bool, sinx: float, cosx: float, c: Sequence[float]) -> float:
    """
    Evaluate a trigonometric series with Clenshaw summation.

    Args:
        sinp:
            If True, evaluate sum(c[i] * sin(2*i*x), i = 1..n); c[0] is unused.
            Otherwise evaluate sum(c[i] * cos((2*i+1)*x), i = 0..n-1).

        sinx:
            sin(x)

        cosx:
            cos(x)

        c:
            The series coefficients

    Returns:
        float
    """
    k = len(c)
    n = k - (1 if sinp else 0)
    ar = 2 * (cosx - sinx) * (cosx + sinx)
    y1 = 0
    if n & 1:
        k -= 1
        y0 = c[k]
    else:
        y0 = 0

    n = n // 2
    while n:
        n -= 1
        k -= 1
        y1 = ar * y0 - y1 + c[k]
        k -= 1
        y0 = ar * y1 - y0 + c[k]

    return 2 * sinx * cosx * y0 if sinp else cosx * (y0 - y1)


def _blocks(layout: Sequence[Tuple[int, int]]) -> Iterator[Tuple[int, int, int]]:
    """
    Walk a table of polynomials in n, yielding (offset, full degree, truncated degree)
    for each block. Layout pairs give the full and truncated degree; a truncated degree
    below zero means the block is absent at this order.
    """
    o = 0
    for full, degree in layout:
        yield o, full, degree
        o += full + 2


class SeriesCoefficients:
    """
    The coefficients of the series that depend on the third flattening n only. These
    are computed once per ellipsoid and only read afterwards.

    Args:
        n:
            The third flattening of the ellipsoid

        order:
            The expansion order
    """

    def __init__(self, n: float, order: int = DEFAULT_ORDER):
        self.n = n
        self.order = check_order(order)
        self._a3x = self._a3coeff()
        self._c3x = self._c3coeff()
        self._c4x = self._c4coeff()

    def __repr__(self):
        return f'<SeriesCoefficients(n={self.n}, order={self.order})>'

    def _a3coeff(self) -> List[float]:
        layout = [
            (min(MAX_ORDER - j - 1, j), min(self.order - j - 1, j))
            for j in range(MAX_ORDER - 1, -1, -1)
        ]
        return [
            _truncated(_A3_COEFF, o, full, degree, self.n)
            for o, full, degree in _blocks(layout)
            if degree >= 0
        ]

    def _c3coeff(self) -> List[float]:
        layout = [
            (min(MAX_ORDER - j - 1, j), min(self.order - j - 1, j) if l < self.order else -1)
            for l in range(1, MAX_ORDER)
            for j in range(MAX_ORDER - 1, l - 1, -1)
        ]
        return [
            _truncated(_C3_COEFF, o, full, degree, self.n)
            for o, full, degree in _blocks(layout)
            if degree >= 0
        ]

    def _c4coeff(self) -> List[float]:
        layout = [
            (MAX_ORDER - j - 1, self.order - j - 1 if l < self.order else -1)
            for l in range(MAX_ORDER)
            for j in range(MAX_ORDER - 1, l - 1, -1)
        ]
        return [
            _truncated(_C4_COEFF, o, full, degree, self.n)
            for o, full, degree in _blocks(layout)
            if degree >= 0
        ]

    def a3f(self, eps: float) -> float:
        """The scale factor A3 of the longitude difference series"""
        return polyval(self.order - 1, self._a3x, 0, eps)

    def c3f(self, eps: float, c: MutableSequence[float]):
        """Fill c[1..order-1] with the coefficients C3[l] of the longitude series"""
        mult = 1
        o = 0
        for l in range(1, self.order):
            m = self.order - l - 1
            mult *= eps
            c[l] = mult * polyval(m, self._c3x, o, eps)
            o += m + 1

    def c4f(self, eps: float, c: MutableSequence[float]):
        """Fill c[0..order-1] with the coefficients C4[l] of the area series"""
        mult = 1
        o = 0
        for l in range(self.order):
            m = self.order - l - 1
            c[l] = mult * polyval(m, self._c4x, o, eps)
            o += m + 1
            mult *= eps
