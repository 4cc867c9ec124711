"""
Geodesics on an ellipsoid of revolution.

The direct and inverse problems are solved by mapping the ellipsoid onto an auxiliary
sphere using the reduced latitude, solving the great circle problem there in closed
form, and correcting with series in the flattening. The inverse problem additionally
solves for the azimuth at the equator crossing with Newton's method, safeguarded by
bisection.

    >>> from geodesics import WGS84
    >>> result = WGS84.inverse(40.6, -73.8, 51.6, -0.5)
    >>> round(result.s12 / 1000, 3)
    5551.759

The calculations are accurate to round off for |f| < 1/50.
"""

__all__ = ['Ellipsoid', 'INTERNATIONAL', 'WGS84']

import math
from typing import List, Optional, Tuple

from pydantic import validate_call

from geodesics._const import (
    DEFAULT_ORDER, INTERNATIONAL_A, INTERNATIONAL_RF, MAXIT1, MAXIT2, TINY,
    TOL0, TOL1, TOL2, TOLB, WGS84_A, WGS84_F, XTHRESH
)
from geodesics.coefficients import (
    SeriesCoefficients, a1m1f, a2m1f, c1f, c2f, check_order, sin_cos_series
)
from geodesics.exceptions import InvalidParameter
from geodesics.geomath import (
    ang_diff, ang_round, atan2d, azi_canonical, cbrt, lat_fix,
    lon_canonical, norm, sincosd, sincosde, sq
)
from geodesics.line import GeodesicLine
from geodesics.mask import Mask
from geodesics.results import DirectResult, InverseResult
from geodesics.utils.logging import LOGGER, warn_once
from geodesics.validation import check_finite, check_latitude


class Ellipsoid:
    """
    An ellipsoid of revolution and the geodesic calculations on it.

    Instances are immutable once constructed and may be shared freely, including
    between threads.

    Args:
        a:
            The equatorial radius, in meters

        f:
            The flattening. Zero gives a sphere and a negative value a prolate
            ellipsoid.

        order:
            (Default 6) The order of the series expansions in the flattening, 3 to 6

    Raises:
        InvalidParameter: if the radius is not finite and positive, or the
            flattening is not finite or not less than 1
    """

    @validate_call
    def __init__(self, a: float, f: float, order: int = DEFAULT_ORDER):
        if not (math.isfinite(a) and a > 0):
            raise InvalidParameter(f'Equatorial radius must be finite and positive; got {a}')
        if not (math.isfinite(f) and f < 1):
            raise InvalidParameter(f'Flattening must be finite and less than 1; got {f}')

        self._a = a
        self._f = f
        self._order = check_order(order)

        self.f1 = 1 - f
        self.e2 = f * (2 - f)
        self.ep2 = self.e2 / sq(self.f1)
        self.n = f / (2 - f)
        self._b = a * self.f1
        if not (math.isfinite(self._b) and self._b > 0):
            raise InvalidParameter(f'Polar semi-axis must be finite and positive; got {self._b}')

        # Authalic radius squared
        if self.e2 == 0:
            ratio = 1.0
        elif self.e2 > 0:
            ratio = math.atanh(math.sqrt(self.e2)) / math.sqrt(self.e2)
        else:
            ratio = math.atan(math.sqrt(-self.e2)) / math.sqrt(-self.e2)
        self.c2 = (sq(a) + sq(self._b) * ratio) / 2

        # The short line approximation in _inverse_start is used when sin(sig12)
        # falls below etol2. The result is then accurate to round off for |f| < 1/50.
        self.etol2 = 0.1 * TOL2 / math.sqrt(
            max(0.001, abs(f)) * min(1.0, 1 - f / 2) / 2
        )
        self.series = SeriesCoefficients(self.n, self._order)
        LOGGER.debug('Constructed %r', self)

    @classmethod
    def from_inverse_flattening(cls, a: float, rf: float, order: int = DEFAULT_ORDER) -> 'Ellipsoid':
        """
        Create an ellipsoid from its equatorial radius and inverse flattening.

        Args:
            a:
                The equatorial radius, in meters

            rf:
                The inverse flattening, 1/f. Zero or infinity gives a sphere, and a
                negative value a prolate ellipsoid.

            order:
                (Default 6) The order of the series expansions

        Returns:
            Ellipsoid
        """
        rf = float(rf)
        if math.isnan(rf):
            raise InvalidParameter('Inverse flattening must not be NaN')

        f = 0.0 if rf == 0 or math.isinf(rf) else 1 / rf
        return cls(a, f, order)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ellipsoid):
            return False

        return self.a == other.a and self.f == other.f and self.order == other.order

    def __hash__(self):
        return hash((self.a, self.f, self.order))

    def __repr__(self):
        return f'<Ellipsoid(a={self.a}, f={self.f})>'

    @property
    def a(self) -> float:
        """The equatorial radius, in meters"""
        return self._a

    @property
    def f(self) -> float:
        """The flattening"""
        return self._f

    @property
    def b(self) -> float:
        """The polar semi-axis, in meters"""
        return self._b

    @property
    def order(self) -> int:
        return self._order

    @property
    def inverse_flattening(self) -> float:
        """1/f, or infinity for a sphere"""
        return math.inf if self.f == 0 else 1 / self.f

    @property
    def ellipsoid_area(self) -> float:
        """The total surface area of the ellipsoid, in square meters"""
        return 4 * math.pi * self.c2

    @property
    def equator_length(self) -> float:
        """The circumference of the equator, in meters"""
        return 2 * math.pi * self.a

    # ------------------------------------------------------------------------
    # Shared machinery
    # ------------------------------------------------------------------------

    def _new_scratch(self) -> Tuple[List[float], List[float], List[float]]:
        return (
            [0.0] * (self.order + 1),
            [0.0] * (self.order + 1),
            [0.0] * self.order,
        )

    def _eps(self, calp0: float) -> float:
        k2 = sq(calp0) * self.ep2
        return k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)

    def _lengths(  # pylint: disable=too-many-arguments, too-many-locals
        self, eps: float, sig12: float,
        ssig1: float, csig1: float, dn1: float,
        ssig2: float, csig2: float, dn2: float,
        cbet1: float, cbet2: float, outmask: int,
        c1a: List[float], c2a: List[float],
    ) -> Tuple[float, float, float, float, float]:
        """
        Distance, reduced length and geodesic scales of a geodesic segment, scaled by b.

        Returns:
            (s12b, m12b, m0, M12, M21); quantities not in outmask are NaN
        """
        outmask &= Mask.OUT_MASK
        s12b = m12b = m0 = M12 = M21 = math.nan
        A1 = A2 = m0x = J12 = 0.0
        if outmask & (Mask.DISTANCE | Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
            A1 = a1m1f(eps, self.order)
            c1f(eps, c1a, self.order)
            if outmask & (Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
                A2 = a2m1f(eps, self.order)
                c2f(eps, c2a, self.order)
                m0x = A1 - A2
                A2 = 1 + A2
            A1 = 1 + A1

        if outmask & Mask.DISTANCE:
            B1 = (sin_cos_series(True, ssig2, csig2, c1a)
                  - sin_cos_series(True, ssig1, csig1, c1a))
            # Missing a factor of b
            s12b = A1 * (sig12 + B1)
            if outmask & (Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
                B2 = (sin_cos_series(True, ssig2, csig2, c2a)
                      - sin_cos_series(True, ssig1, csig1, c2a))
                J12 = m0x * sig12 + (A1 * B1 - A2 * B2)
        elif outmask & (Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
            # Assume here that c1a and c2a have the same length
            for l in range(1, self.order + 1):
                c2a[l] = A1 * c1a[l] - A2 * c2a[l]
            J12 = m0x * sig12 + (sin_cos_series(True, ssig2, csig2, c2a)
                                 - sin_cos_series(True, ssig1, csig1, c2a))

        if outmask & Mask.REDUCEDLENGTH:
            m0 = m0x
            # Grouping keeps the cancellation exact for coincident points
            m12b = (dn2 * (csig1 * ssig2) - dn1 * (ssig1 * csig2)
                    - csig1 * csig2 * J12)

        if outmask & Mask.GEODESICSCALE:
            csig12 = csig1 * csig2 + ssig1 * ssig2
            t = self.ep2 * (cbet1 - cbet2) * (cbet1 + cbet2) / (dn1 + dn2)
            M12 = csig12 + (t * ssig2 - csig2 * J12) * ssig1 / dn1
            M21 = csig12 - (t * ssig1 - csig1 * J12) * ssig2 / dn2

        return s12b, m12b, m0, M12, M21

    @staticmethod
    def _astroid(x: float, y: float) -> float:
        """
        Solve k^4 + 2 k^3 - (x^2 + y^2 - 1) k^2 - 2 y^2 k - y^2 = 0 for its positive
        root k. This is the starting guess for nearly antipodal points.
        """
        p = sq(x)
        q = sq(y)
        r = (p + q - 1) / 6
        if q == 0 and r <= 0:
            # y = 0 with |x| <= 1. The solution with k = 0 is taken (x^2 + y^2 = 1
            # is the boundary of the region where the geodesic is the meridian).
            return 0.0

        # Avoid possible division by zero when r = 0 by multiplying equations for
        # s and t by r^3 and r, resp.
        S = p * q / 4
        r2 = sq(r)
        r3 = r * r2
        # The discriminant of the quadratic equation for T3. This is zero on the
        # evolute curve p^(1/3) + q^(1/3) = 1
        disc = S * (S + 2 * r3)
        u = r
        if disc >= 0:
            T3 = S + r3
            # Pick the sign on the sqrt to maximize abs(T3), minimizing round off
            T3 += -math.sqrt(disc) if T3 < 0 else math.sqrt(disc)
            T = cbrt(T3)
            # T can be zero; but then r2 / T -> 0.
            u += T + (r2 / T if T != 0 else 0)
        else:
            # T is complex, but the way u is defined the result is real.
            ang = math.atan2(math.sqrt(-disc), -(S + r3))
            # There are three possible cube roots. We choose the root which avoids
            # cancellation. Note that disc < 0 implies that r < 0.
            u += 2 * r * math.cos(ang / 3)

        v = math.sqrt(sq(u) + q)
        # Avoid loss of accuracy when u < 0.
        uv = q / (v - u) if u < 0 else u + v
        w = (uv - q) / (2 * v)
        # Rearrange expression for k to avoid loss of accuracy due to subtraction.
        return uv / (math.sqrt(uv + sq(w)) + w)

    def _inverse_start(  # pylint: disable=too-many-arguments, too-many-locals, too-many-statements
        self,
        sbet1: float, cbet1: float, dn1: float,
        sbet2: float, cbet2: float, dn2: float,
        lam12: float, slam12: float, clam12: float,
        c1a: List[float], c2a: List[float],
    ) -> Tuple[float, float, float, float, float, float]:
        """
        Starting guess for the azimuth at point 1. For short lines the guess is
        accurate enough that no iteration is needed; sig12 is then returned
        non-negative along with the azimuth at point 2.

        Returns:
            (sig12, salp1, calp1, salp2, calp2, dnm); sig12 is -1 when the
            guess needs refining
        """
        sig12 = -1.0
        salp2 = calp2 = dnm = math.nan

        # bet12 = bet2 - bet1 in [0, pi); bet12a = bet2 + bet1 in (-pi, 0]
        sbet12 = sbet2 * cbet1 - cbet2 * sbet1
        cbet12 = cbet2 * cbet1 + sbet2 * sbet1
        sbet12a = sbet2 * cbet1 + cbet2 * sbet1
        shortline = cbet12 >= 0 and sbet12 < 0.5 and cbet2 * lam12 < 0.5
        if shortline:
            sbetm2 = sq(sbet1 + sbet2)
            # sin((bet1+bet2)/2)^2 = (sbet1 + sbet2)^2 / ((sbet1 + sbet2)^2 + (cbet1 + cbet2)^2)
            sbetm2 /= sbetm2 + sq(cbet1 + cbet2)
            dnm = math.sqrt(1 + self.ep2 * sbetm2)
            omg12 = lam12 / (self.f1 * dnm)
            somg12 = math.sin(omg12)
            comg12 = math.cos(omg12)
        else:
            somg12 = slam12
            comg12 = clam12

        salp1 = cbet2 * somg12
        if comg12 >= 0:
            calp1 = sbet12 + cbet2 * sbet1 * sq(somg12) / (1 + comg12)
        else:
            calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        ssig12 = math.hypot(salp1, calp1)
        csig12 = sbet1 * sbet2 + cbet1 * cbet2 * comg12

        if shortline and ssig12 < self.etol2:
            # Really short lines
            salp2 = cbet1 * somg12
            calp2 = sbet12 - cbet1 * sbet2 * (
                sq(somg12) / (1 + comg12) if comg12 >= 0 else 1 - comg12
            )
            salp2, calp2 = norm(salp2, calp2)
            # Set return value
            sig12 = math.atan2(ssig12, csig12)
        elif (abs(self.n) > 0.1 or csig12 >= 0
              or ssig12 >= 6 * abs(self.n) * math.pi * sq(cbet1)):
            # Nothing to do, the zeroth order spherical approximation is OK
            pass
        else:
            # Scale lam12 and bet2 to x, y coordinates where the antipodal point is
            # at the origin and the singular point is at y = 0, x = -1
            lam12x = math.atan2(-slam12, -clam12)
            if self.f >= 0:
                # x = dlong, y = dlat
                eps = self._eps(sbet1)
                lamscale = self.f * cbet1 * self.series.a3f(eps) * math.pi
                betscale = lamscale * cbet1
                x = lam12x / lamscale
                y = sbet12a / betscale
            else:
                # x = dlat, y = dlong
                cbet12a = cbet2 * cbet1 - sbet2 * sbet1
                bet12a = math.atan2(sbet12a, cbet12a)
                # In the case of lon12 = 180, this repeats a calculation made in
                # inverse()
                _, m12b, m0, _, _ = self._lengths(
                    self.n, math.pi + bet12a, sbet1, -cbet1, dn1, sbet2, cbet2, dn2,
                    cbet1, cbet2, Mask.REDUCEDLENGTH, c1a, c2a
                )
                x = -1 + m12b / (cbet1 * cbet2 * m0 * math.pi)
                betscale = (sbet12a / x if x < -0.01
                            else -self.f * sq(cbet1) * math.pi)
                lamscale = betscale / cbet1
                y = lam12x / lamscale

            if y > -TOL1 and x > -1 - XTHRESH:
                # Strip near cut
                if self.f >= 0:
                    salp1 = min(1.0, -x)
                    calp1 = -math.sqrt(1 - sq(salp1))
                else:
                    calp1 = max(0.0 if x > -TOL1 else -1.0, x)
                    salp1 = math.sqrt(1 - sq(calp1))
            else:
                # Estimate alp1 by solving the astroid problem
                k = self._astroid(x, y)
                if self.f >= 0:
                    omg12a = lamscale * (-x * k / (1 + k))
                else:
                    omg12a = lamscale * (-y * (1 + k) / k)
                somg12 = math.sin(omg12a)
                comg12 = -math.cos(omg12a)
                # Update spherical estimate of alp1 using omg12 instead of lam12
                salp1 = cbet2 * somg12
                calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        # Sanity check on starting guess. Backwards check allows NaN through.
        if not salp1 <= 0:
            salp1, calp1 = norm(salp1, calp1)
        else:
            salp1 = 1.0
            calp1 = 0.0

        return sig12, salp1, calp1, salp2, calp2, dnm

    def _lambda12(  # pylint: disable=too-many-arguments, too-many-locals
        self,
        sbet1: float, cbet1: float, dn1: float,
        sbet2: float, cbet2: float, dn2: float,
        salp1: float, calp1: float,
        slam120: float, clam120: float,
        diffp: bool,
        c1a: List[float], c2a: List[float], c3a: List[float],
    ):
        """
        The longitude difference lam12 predicted by the ellipsoidal series for a
        trial azimuth alp1, less the target difference lam120, and its derivative.

        Returns:
            (v, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps, domg12, dv)
        """
        if sbet1 == 0 and calp1 == 0:
            # Break degeneracy of equatorial line
            calp1 = -TINY

        # sin(alp1) * cos(bet1) = sin(alp0)
        salp0 = salp1 * cbet1
        # calp0 > 0
        calp0 = math.hypot(calp1, salp1 * sbet1)

        # tan(bet1) = tan(sig1) * cos(alp1)
        # tan(omg1) = sin(alp0) * tan(sig1) = tan(omg1)=tan(alp1)*sin(bet1)
        ssig1 = sbet1
        somg1 = salp0 * sbet1
        csig1 = comg1 = calp1 * cbet1
        ssig1, csig1 = norm(ssig1, csig1)

        # Enforce symmetries in the case abs(bet2) = -bet1
        salp2 = salp0 / cbet2 if cbet2 != cbet1 else salp1
        # calp2 = sqrt(1 - sq(salp2)) = sqrt(sq(calp0) - sq(sbet2)) / cbet2
        # and subst for calp0 and rearrange to give (choose positive sqrt to give
        # alp2 in [0, pi/2]).
        if cbet2 != cbet1 or abs(sbet2) != -sbet1:
            calp2 = math.sqrt(
                sq(calp1 * cbet1)
                + ((cbet2 - cbet1) * (cbet1 + cbet2) if cbet1 < -sbet1
                   else (sbet1 - sbet2) * (sbet1 + sbet2))
            ) / cbet2
        else:
            calp2 = abs(calp1)

        # tan(bet2) = tan(sig2) * cos(alp2)
        # tan(omg2) = sin(alp0) * tan(sig2).
        ssig2 = sbet2
        somg2 = salp0 * sbet2
        csig2 = comg2 = calp2 * cbet2
        ssig2, csig2 = norm(ssig2, csig2)

        # sig12 = sig2 - sig1, limit to [0, pi]
        sig12 = math.atan2(max(0.0, csig1 * ssig2 - ssig1 * csig2),
                           csig1 * csig2 + ssig1 * ssig2)
        # omg12 = omg2 - omg1, limit to [0, pi]
        somg12 = max(0.0, comg1 * somg2 - somg1 * comg2)
        comg12 = comg1 * comg2 + somg1 * somg2
        # eta = omg12 - lam120
        eta = math.atan2(somg12 * clam120 - comg12 * slam120,
                         comg12 * clam120 + somg12 * slam120)

        eps = self._eps(calp0)
        self.series.c3f(eps, c3a)
        B312 = (sin_cos_series(True, ssig2, csig2, c3a)
                - sin_cos_series(True, ssig1, csig1, c3a))
        domg12 = -self.f * self.series.a3f(eps) * salp0 * (sig12 + B312)
        lam12 = eta + domg12

        if diffp:
            if calp2 == 0:
                dlam12 = -2 * self.f1 * dn1 / sbet1
            else:
                _, dlam12, _, _, _ = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2,
                    Mask.REDUCEDLENGTH, c1a, c2a
                )
                dlam12 *= self.f1 / (calp2 * cbet2)
        else:
            dlam12 = math.nan

        return (lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps,
                domg12, dlam12)

    def _gen_inverse(  # pylint: disable=too-many-locals, too-many-branches, too-many-statements
        self, lat1: float, lon1: float, lat2: float, lon2: float, outmask: int
    ):
        """
        The core inverse calculation.

        Returns:
            (a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21, S12, numit, nbisect)
        """
        a12 = s12 = m12 = M12 = M21 = S12 = math.nan
        outmask &= Mask.OUT_MASK
        numit = nbisect = 0

        # Compute longitude difference (ang_diff does this carefully).
        lon12, lon12s = ang_diff(lon1, lon2)
        # Make longitude difference positive.
        lonsign = math.copysign(1, lon12)
        lon12 = lonsign * lon12
        lon12s = lonsign * lon12s
        lam12 = math.radians(lon12)
        # Calculate sincos of lon12 + error (this applies ang_round internally).
        slam12, clam12 = sincosde(lon12, lon12s)
        # the supplementary longitude difference
        lon12s = (180 - lon12) - lon12s

        # If really close to the equator, treat as on equator.
        lat1 = ang_round(lat_fix(lat1))
        lat2 = ang_round(lat_fix(lat2))
        # Swap points so that point with higher (abs) latitude is point 1.
        # If one latitude is a nan, then it becomes lat1.
        swapp = -1 if abs(lat1) < abs(lat2) or math.isnan(lat2) else 1
        if swapp < 0:
            lonsign *= -1
            lat2, lat1 = lat1, lat2
        # Make lat1 <= -0
        latsign = math.copysign(1, -lat1)
        lat1 *= latsign
        lat2 *= latsign
        # Now we have
        #
        #     0 <= lon12 <= 180
        #     -90 <= lat1 <= -0
        #     lat1 <= lat2 <= -lat1
        #
        # longsign, swapp, latsign register the transformation to bring the
        # coordinates to this canonical form. In all cases, 1 means no change was
        # made. We make these transformations so that there are few cases to
        # check, e.g., on verifying quadrants in atan2. In addition, this enforces
        # some symmetries in the results returned.

        sbet1, cbet1 = sincosd(lat1)
        sbet1 *= self.f1
        # Ensure cbet1 = +epsilon at poles
        sbet1, cbet1 = norm(sbet1, cbet1)
        cbet1 = max(TINY, cbet1)

        sbet2, cbet2 = sincosd(lat2)
        sbet2 *= self.f1
        # Ensure cbet2 = +epsilon at poles
        sbet2, cbet2 = norm(sbet2, cbet2)
        cbet2 = max(TINY, cbet2)

        # If cbet1 < -sbet1, then cbet2 - cbet1 is a sensitive measure of the
        # |bet1| - |bet2|. Alternatively (cbet1 >= -sbet1), abs(sbet2) + sbet1 is
        # a better measure. This logic is used in assigning calp2 in _lambda12.
        # Sometimes these quantities vanish and in that case we force bet2 = +/-
        # bet1 exactly. An example where is is necessary is the inverse problem
        # 48.522876735459 0 -48.52287673545898293 179.599720456223079643
        # which failed with Visual Studio 10 (Release and Debug)
        if cbet1 < -sbet1:
            if cbet2 == cbet1:
                sbet2 = math.copysign(sbet1, sbet2)
        else:
            if abs(sbet2) == -sbet1:
                cbet2 = cbet1

        dn1 = math.sqrt(1 + self.ep2 * sq(sbet1))
        dn2 = math.sqrt(1 + self.ep2 * sq(sbet2))

        c1a, c2a, c3a = self._new_scratch()

        meridian = lat1 == -90 or slam12 == 0
        if meridian:
            # Endpoints are on a single full meridian, so the geodesic might lie
            # on a meridian.
            calp1 = clam12  # Head to the target longitude
            salp1 = slam12
            calp2 = 1.0  # At the target we're heading north
            salp2 = 0.0

            # tan(bet) = tan(sig) * cos(alp)
            ssig1 = sbet1
            csig1 = calp1 * cbet1
            ssig2 = sbet2
            csig2 = calp2 * cbet2

            # sig12 = sig2 - sig1
            sig12 = math.atan2(max(0.0, csig1 * ssig2 - ssig1 * csig2),
                               csig1 * csig2 + ssig1 * ssig2)
            s12x, m12x, _, M12, M21 = self._lengths(
                self.n, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2,
                outmask | Mask.DISTANCE | Mask.REDUCEDLENGTH, c1a, c2a
            )

            # Add the check for sig12 since zero length geodesics might yield m12 <
            # 0. Test case was
            #
            #    echo 20.001 0 20.001 0 | GeodSolve -i
            #
            # In fact, we will have sig12 > pi/2 for meridional geodesic which is
            # not a shortest path.
            if sig12 < 1 or m12x >= 0:
                if sig12 < 3 * TINY or (sig12 < TOL0 and (s12x < 0 or m12x < 0)):
                    # Prevent negative s12 or m12 for short lines
                    sig12 = m12x = s12x = 0.0
                m12x *= self._b
                s12x *= self._b
                a12 = math.degrees(sig12)
            else:
                # m12 < 0, i.e., prolate and too close to anti-podal
                meridian = False

        # somg12 > 1 marks that it needs to be calculated
        somg12 = 2.0
        comg12 = 0.0
        omg12 = 0.0
        if not meridian and sbet1 == 0 and (self.f <= 0 or lon12s >= self.f * 180):
            # Geodesic runs along equator
            calp1 = calp2 = 0.0
            salp1 = salp2 = 1.0
            s12x = self.a * lam12
            sig12 = omg12 = lam12 / self.f1
            m12x = self._b * math.sin(sig12)
            if outmask & Mask.GEODESICSCALE:
                M12 = M21 = math.cos(sig12)
            a12 = lon12 / self.f1

        elif not meridian:
            # Now point1 and point2 belong within a hemisphere bounded by a
            # meridian and geodesic is neither meridional or equatorial.

            # Figure a starting point for Newton's method
            sig12, salp1, calp1, salp2, calp2, dnm = self._inverse_start(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12, c1a, c2a
            )

            if sig12 >= 0:
                # Short lines (_inverse_start sets salp2, calp2, dnm)
                s12x = sig12 * self._b * dnm
                m12x = sq(dnm) * self._b * math.sin(sig12 / dnm)
                if outmask & Mask.GEODESICSCALE:
                    M12 = M21 = math.cos(sig12 / dnm)
                a12 = math.degrees(sig12)
                omg12 = lam12 / (self.f1 * dnm)
            else:
                (sig12, salp1, calp1, salp2, calp2, ssig1, csig1, ssig2, csig2,
                 eps, domg12, numit, nbisect) = self._solve_azimuth(
                    sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                    slam12, clam12, c1a, c2a, c3a
                )
                # Ensure that the reduced length and geodesic scale are computed in
                # a "canonical" way, with the I2 integral.
                lengthmask = outmask | (
                    Mask.DISTANCE if outmask & (Mask.REDUCEDLENGTH | Mask.GEODESICSCALE)
                    else Mask.EMPTY
                )
                s12x, m12x, _, M12, M21 = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2, cbet1, cbet2,
                    lengthmask, c1a, c2a
                )
                m12x *= self._b
                s12x *= self._b
                a12 = math.degrees(sig12)
                if outmask & Mask.AREA:
                    # omg12 = lam12 - domg12
                    sdomg12 = math.sin(domg12)
                    cdomg12 = math.cos(domg12)
                    somg12 = slam12 * cdomg12 - clam12 * sdomg12
                    comg12 = clam12 * cdomg12 + slam12 * sdomg12

        # Convert -0 to 0
        if outmask & Mask.DISTANCE:
            s12 = 0.0 + s12x
        if outmask & Mask.REDUCEDLENGTH:
            m12 = 0.0 + m12x

        if outmask & Mask.AREA:
            S12 = self._area(
                sbet1, cbet1, sbet2, cbet2, salp1, calp1, salp2, calp2,
                meridian, somg12, comg12, omg12
            )
            S12 *= swapp * lonsign * latsign
            # Convert -0 to 0
            S12 += 0.0

        # Convert calp, salp to azimuth accounting for lonsign, swapp, latsign.
        if swapp < 0:
            salp2, salp1 = salp1, salp2
            calp2, calp1 = calp1, calp2
            if outmask & Mask.GEODESICSCALE:
                M21, M12 = M12, M21

        salp1 *= swapp * lonsign
        calp1 *= swapp * latsign
        salp2 *= swapp * lonsign
        calp2 *= swapp * latsign

        return (a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21, S12,
                numit, nbisect)

    def _solve_azimuth(  # pylint: disable=too-many-arguments, too-many-locals
        self,
        sbet1: float, cbet1: float, dn1: float,
        sbet2: float, cbet2: float, dn2: float,
        salp1: float, calp1: float,
        slam12: float, clam12: float,
        c1a: List[float], c2a: List[float], c3a: List[float],
    ):
        """
        Solve for the azimuth alp1 whose geodesic reaches the target longitude.

        Newton's method is used for the first MAXIT1 steps. The root is kept within a
        bracket [alp1a, alp1b]; whenever a Newton step leaves the bracket, or after
        MAXIT1 steps, the bracket is bisected instead. The loop ends when the
        longitude residual is below tolerance, the bracket collapses, or MAXIT2
        steps have been taken; in the last case the current estimate is used.
        """
        numit = nbisect = 0
        # Bracketing range
        tripn = tripb = False
        salp1a = TINY
        calp1a = 1.0
        salp1b = TINY
        calp1b = -1.0
        while True:
            # the WGS84 test set: mean = 1.47, sd = 1.25, max = 16
            # WGS84 and random input: mean = 2.85, sd = 0.60
            (v, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2,
             eps, domg12, dv) = self._lambda12(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                slam12, clam12, numit < MAXIT1, c1a, c2a, c3a
            )
            # Reversed test to allow escape with NaNs
            if tripb or not abs(v) >= (8 if tripn else 1) * TOL0:
                break
            if numit == MAXIT2:
                warn_once(
                    'Inverse geodesic solution did not converge within %d iterations; '
                    'returning the best estimate',
                    MAXIT2,
                )
                break

            # Update bracketing values
            if v > 0 and (numit > MAXIT1 or calp1 / salp1 > calp1b / salp1b):
                salp1b = salp1
                calp1b = calp1
            elif v < 0 and (numit > MAXIT1 or calp1 / salp1 < calp1a / salp1a):
                salp1a = salp1
                calp1a = calp1

            numit += 1
            if numit < MAXIT1 and dv > 0:
                dalp1 = -v / dv
                if abs(dalp1) < math.pi:
                    sdalp1 = math.sin(dalp1)
                    cdalp1 = math.cos(dalp1)
                    nsalp1 = salp1 * cdalp1 + calp1 * sdalp1
                    if nsalp1 > 0:
                        calp1 = calp1 * cdalp1 - salp1 * sdalp1
                        salp1 = nsalp1
                        salp1, calp1 = norm(salp1, calp1)
                        # In some regimes we don't get quadratic convergence because
                        # slope -> 0. So use convergence conditions based on epsilon
                        # instead of sqrt(epsilon).
                        tripn = abs(v) <= 16 * TOL0
                        continue

            # Either dv was not positive or updated value was outside legal range.
            # Use the midpoint of the bracket as the next estimate.
            nbisect += 1
            salp1 = (salp1a + salp1b) / 2
            calp1 = (calp1a + calp1b) / 2
            salp1, calp1 = norm(salp1, calp1)
            tripn = False
            tripb = (abs(salp1a - salp1) + (calp1a - calp1) < TOLB
                     or abs(salp1 - salp1b) + (calp1 - calp1b) < TOLB)

        LOGGER.debug('Inverse solution took %d steps (%d bisections)', numit, nbisect)

        return (sig12, salp1, calp1, salp2, calp2, ssig1, csig1, ssig2, csig2,
                eps, domg12, numit, nbisect)

    def _area(  # pylint: disable=too-many-arguments, too-many-locals
        self,
        sbet1: float, cbet1: float, sbet2: float, cbet2: float,
        salp1: float, calp1: float, salp2: float, calp2: float,
        meridian: bool, somg12: float, comg12: float, omg12: float,
    ) -> float:
        """Area between the canonicalized geodesic and the equator"""
        # From Lambda12: sin(alp1) * cos(bet1) = sin(alp0)
        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)  # calp0 > 0
        if calp0 != 0 and salp0 != 0:
            # From Lambda12: tan(bet) = tan(sig) * cos(alp)
            ssig1, csig1 = norm(sbet1, calp1 * cbet1)
            ssig2, csig2 = norm(sbet2, calp2 * cbet2)
            eps = self._eps(calp0)
            # Multiplier = a^2 * e^2 * cos(alpha0) * sin(alpha0).
            A4 = sq(self.a) * calp0 * salp0 * self.e2
            c4a = [0.0] * self.order
            self.series.c4f(eps, c4a)
            B41 = sin_cos_series(False, ssig1, csig1, c4a)
            B42 = sin_cos_series(False, ssig2, csig2, c4a)
            S12 = A4 * (B42 - B41)
        else:
            # Avoid problems with indeterminate sig1, sig2 on equator
            S12 = 0.0

        if not meridian and somg12 > 1:
            somg12 = math.sin(omg12)
            comg12 = math.cos(omg12)

        if not meridian and comg12 > -0.7071 and sbet2 - sbet1 < 1.75:
            # Long difference not too big and lat difference not too big.
            # Use tan(Gamma/2) = tan(omg12/2)
            # * (tan(bet1/2)+tan(bet2/2))/(1+tan(bet1/2)*tan(bet2/2))
            # with tan(x/2) = sin(x)/(1+cos(x))
            domg12 = 1 + comg12
            dbet1 = 1 + cbet1
            dbet2 = 1 + cbet2
            alp12 = 2 * math.atan2(somg12 * (sbet1 * dbet2 + sbet2 * dbet1),
                                   domg12 * (sbet1 * sbet2 + dbet1 * dbet2))
        else:
            # alp12 = alp2 - alp1, used in atan2 so no need to normalize
            salp12 = salp2 * calp1 - calp2 * salp1
            calp12 = calp2 * calp1 + salp2 * salp1
            # The right thing appears to happen if alp1 = +/-180 and alp2 = 0, viz
            # salp12 = -0 and alp12 = -180. However this depends on the sign being
            # attached to 0 correctly. The following ensures the correct behavior.
            if salp12 == 0 and calp12 < 0:
                salp12 = TINY * calp1
                calp12 = -1.0
            alp12 = math.atan2(salp12, calp12)

        return S12 + self.c2 * alp12

    # ------------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------------

    def direct(self, lat1: float, lon1: float, azi1: float, s12: float,
               differentials: bool = False, area: bool = False,
               long_unroll: bool = False) -> DirectResult:
        """
        Solve the direct geodesic problem: find the point a given distance and
        azimuth from a start point.

        Args:
            lat1:
                Latitude of point 1, in degrees [-90, 90]

            lon1:
                Longitude of point 1, in degrees

            azi1:
                Azimuth at point 1, in degrees clockwise from north

            s12:
                Distance from point 1 to point 2, in meters. May be negative.

            differentials:
                Also compute the reduced length m12 and the geodesic scales M12 and M21

            area:
                Also compute the area S12 between the geodesic and the equator

            long_unroll:
                Report lon2 unrolled, i.e. lon2 - lon1 is the longitude swept out by
                the geodesic, rather than reduced to [-180, 180)

        Returns:
            DirectResult

        Raises:
            OutOfRange: if lat1 is outside [-90, 90] or an input is not finite
        """
        s12 = check_finite(s12, 's12')
        outmask = Mask.for_request(differentials, area, long_unroll)
        line = GeodesicLine(self, lat1, lon1, azi1, outmask | Mask.DISTANCE_IN)
        return line._result(False, s12, outmask)  # pylint: disable=protected-access

    def arc_direct(self, lat1: float, lon1: float, azi1: float, a12: float,
                   differentials: bool = False, area: bool = False,
                   long_unroll: bool = False) -> DirectResult:
        """
        Solve the direct geodesic problem with the distance given as an arc length on
        the auxiliary sphere, in degrees. Arguments are otherwise as for direct().
        """
        a12 = check_finite(a12, 'a12')
        outmask = Mask.for_request(differentials, area, long_unroll)
        line = GeodesicLine(self, lat1, lon1, azi1, outmask)
        return line._result(True, a12, outmask)  # pylint: disable=protected-access

    def inverse(self, lat1: float, lon1: float, lat2: float, lon2: float,
                differentials: bool = False, area: bool = False,
                long_unroll: bool = False) -> InverseResult:
        """
        Solve the inverse geodesic problem: find the shortest geodesic between two
        points.

        When several geodesics of equal length join the points (e.g. antipodal
        points), one of them is picked consistently; for points on opposite sides of
        the earth on the equator that is the meridional geodesic through a pole.

        Args:
            lat1:
                Latitude of point 1, in degrees [-90, 90]

            lon1:
                Longitude of point 1, in degrees

            lat2:
                Latitude of point 2, in degrees [-90, 90]

            lon2:
                Longitude of point 2, in degrees

            differentials:
                Also compute the reduced length m12 and the geodesic scales M12 and M21

            area:
                Also compute the area S12 between the geodesic and the equator

            long_unroll:
                Report lon2 as lon1 plus the longitude difference along the geodesic,
                rather than reduced to [-180, 180)

        Returns:
            InverseResult

        Raises:
            OutOfRange: if a latitude is outside [-90, 90] or a longitude is not finite
        """
        lat1 = check_latitude(lat1, 'lat1')
        lat2 = check_latitude(lat2, 'lat2')
        lon1 = check_finite(lon1, 'lon1')
        lon2 = check_finite(lon2, 'lon2')
        outmask = Mask.for_request(differentials, area, long_unroll)

        (a12, s12, salp1, calp1, salp2, calp2, m12, M12, M21, S12,
         numit, nbisect) = self._gen_inverse(lat1, lon1, lat2, lon2, outmask)

        if long_unroll:
            lon12, e = ang_diff(lon1, lon2)
            lon2 = (lon1 + lon12) + e
        else:
            lon1 = lon_canonical(lon1)
            lon2 = lon_canonical(lon2)

        return InverseResult(
            lat1=lat1,
            lon1=lon1,
            lat2=lat2,
            lon2=lon2,
            azi1=azi_canonical(atan2d(salp1, calp1)),
            azi2=azi_canonical(atan2d(salp2, calp2)),
            s12=s12,
            a12=a12,
            m12=m12 if differentials else None,
            M12=M12 if differentials else None,
            M21=M21 if differentials else None,
            S12=S12 if area else None,
            iterations=numit,
            bisections=nbisect,
        )

    def line(self, lat1: float, lon1: float, azi1: float,
             caps: int = Mask.STANDARD | Mask.DISTANCE_IN) -> GeodesicLine:
        """
        A geodesic line starting at (lat1, lon1) with azimuth azi1.

        Args:
            lat1, lon1:
                Point 1, in degrees

            azi1:
                Azimuth at point 1, in degrees

            caps:
                The capabilities of the line, a combination of Mask values. The
                default supports position() and arc_position() without the
                differential and area quantities; use Mask.ALL for everything.

        Returns:
            GeodesicLine
        """
        return GeodesicLine(self, lat1, lon1, azi1, caps)

    def direct_line(self, lat1: float, lon1: float, azi1: float, s12: float,
                    caps: int = Mask.STANDARD | Mask.DISTANCE_IN) -> GeodesicLine:
        """
        A geodesic line from point 1 with its reference point 3 a distance s12 (in
        meters) along it, supporting GeodesicLine.position_at_fraction() and
        GeodesicLine.waypoints().
        """
        return GeodesicLine(self, lat1, lon1, azi1, caps, distance=s12)

    def arc_direct_line(self, lat1: float, lon1: float, azi1: float, a12: float,
                        caps: int = Mask.STANDARD | Mask.DISTANCE_IN) -> GeodesicLine:
        """As direct_line(), with the reference point given by arc length in degrees"""
        return GeodesicLine(self, lat1, lon1, azi1, caps, arc=a12)

    def inverse_line(self, lat1: float, lon1: float, lat2: float, lon2: float,
                     caps: int = Mask.STANDARD | Mask.DISTANCE_IN) -> GeodesicLine:
        """
        The shortest geodesic line from point 1 to point 2, with point 2 as its
        reference point 3.

        Returns:
            GeodesicLine
        """
        lat1 = check_latitude(lat1, 'lat1')
        lat2 = check_latitude(lat2, 'lat2')
        lon1 = check_finite(lon1, 'lon1')
        lon2 = check_finite(lon2, 'lon2')
        a12, _, salp1, calp1, _, _, _, _, _, _, _, _ = self._gen_inverse(
            lat1, lon1, lat2, lon2, Mask.EMPTY
        )
        azi1 = atan2d(salp1, calp1)
        if caps & (Mask.OUT_MASK & Mask.DISTANCE_IN):
            # The distance to point 3 is needed to interpolate by distance
            caps |= Mask.DISTANCE
        return GeodesicLine(
            self, lat1, lon1, azi1, caps, arc=a12, _sincos_azi1=(salp1, calp1)
        )


def _well_known(a: float, f: Optional[float] = None, rf: Optional[float] = None) -> Ellipsoid:
    if rf is not None:
        return Ellipsoid.from_inverse_flattening(a, rf)
    return Ellipsoid(a, f)


WGS84 = _well_known(WGS84_A, f=WGS84_F)
INTERNATIONAL = _well_known(INTERNATIONAL_A, rf=INTERNATIONAL_RF)
