"""
A single geodesic, defined by a point and an azimuth, along which positions can be
computed repeatedly without redoing the per-line setup.
"""

from __future__ import annotations

__all__ = ['GeodesicLine']

import math
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

import numpy as np

from geodesics._const import TINY
from geodesics.coefficients import (
    a1m1f, a2m1f, c1f, c1pf, c2f, sin_cos_series
)
from geodesics.exceptions import InvalidParameter, OutOfRange
from geodesics.geomath import (
    ang_normalize, ang_round, atan2d, azi_canonical, lon_canonical, norm,
    sincosd, sq
)
from geodesics.mask import Mask
from geodesics.results import DirectResult
from geodesics.validation import check_finite, check_latitude

if TYPE_CHECKING:
    from geodesics.ellipsoid import Ellipsoid


class GeodesicLine:
    """
    A geodesic line starting at (lat1, lon1) with azimuth azi1.

    The line takes a snapshot of the auxiliary sphere quantities at point 1 when it is
    constructed; positions along the line are pure functions of that snapshot. Lines
    are normally obtained from Ellipsoid.line(), Ellipsoid.direct_line() or
    Ellipsoid.inverse_line().

    Args:
        ellipsoid:
            The Ellipsoid the line lies on

        lat1:
            Latitude of point 1, in degrees [-90, 90]

        lon1:
            Longitude of point 1, in degrees

        azi1:
            Azimuth at point 1, in degrees

        caps:
            The capabilities the line should support, a combination of Mask values.
            LATITUDE, AZIMUTH and LONG_UNROLL are always included.

    Keyword Args:
        distance: (float)
            Optional distance to a reference point 3 on the line, in meters

        arc: (float)
            Optional arc length to a reference point 3 on the line, in degrees.
            Ignored when distance is given.
    """

    def __init__(  # pylint: disable=too-many-arguments, too-many-statements
        self,
        ellipsoid: 'Ellipsoid',
        lat1: float,
        lon1: float,
        azi1: float,
        caps: int = Mask.STANDARD | Mask.DISTANCE_IN,
        distance: Optional[float] = None,
        arc: Optional[float] = None,
        _sincos_azi1: Optional[Tuple[float, float]] = None,
    ):
        lat1 = check_latitude(lat1, 'lat1')
        lon1 = check_finite(lon1, 'lon1')
        azi1 = check_finite(azi1, 'azi1')

        if distance is not None:
            caps |= Mask.DISTANCE_IN
        elif arc is not None:
            caps |= Mask.DISTANCE

        self.ellipsoid = ellipsoid
        self.a = ellipsoid.a
        self.f = ellipsoid.f
        self._b = ellipsoid.b
        self._c2 = ellipsoid.c2
        self._f1 = ellipsoid.f1
        self._order = ellipsoid.order
        self.caps = Mask(caps) | Mask.LATITUDE | Mask.AZIMUTH | Mask.LONG_UNROLL

        self.lat1 = lat1
        self.lon1 = lon1
        if _sincos_azi1 is None:
            self.azi1 = ang_normalize(azi1)
            self.salp1, self.calp1 = sincosd(ang_round(self.azi1))
        else:
            self.azi1 = azi1
            self.salp1, self.calp1 = _sincos_azi1

        sbet1, cbet1 = sincosd(ang_round(lat1))
        sbet1 *= self._f1
        # Ensure cbet1 = +epsilon at poles
        sbet1, cbet1 = norm(sbet1, cbet1)
        cbet1 = max(TINY, cbet1)
        self._dn1 = math.sqrt(1 + ellipsoid.ep2 * sq(sbet1))

        # Evaluate alp0 from sin(alp1) * cos(bet1) = sin(alp0)
        self._salp0 = self.salp1 * cbet1
        self._calp0 = math.hypot(self.calp1, self.salp1 * sbet1)
        # sig1 is the arc length from the northward equator crossing to point 1
        # and omg1 the corresponding longitude on the auxiliary sphere. With
        # alp1 = 0 or 180 at the equator, sig1 = 0 is chosen.
        self._ssig1 = sbet1
        self._somg1 = self._salp0 * sbet1
        self._csig1 = self._comg1 = (
            cbet1 * self.calp1 if sbet1 != 0 or self.calp1 != 0 else 1
        )
        self._ssig1, self._csig1 = norm(self._ssig1, self._csig1)

        self._k2 = sq(self._calp0) * ellipsoid.ep2
        eps = self._k2 / (2 * (1 + math.sqrt(1 + self._k2)) + self._k2)

        if self.caps & Mask.CAP_C1:
            self._A1m1 = a1m1f(eps, self._order)
            self._C1a = [0.0] * (self._order + 1)
            c1f(eps, self._C1a, self._order)
            self._B11 = sin_cos_series(True, self._ssig1, self._csig1, self._C1a)
            s = math.sin(self._B11)
            c = math.cos(self._B11)
            # tau1 = sig1 + B11
            self._stau1 = self._ssig1 * c + self._csig1 * s
            self._ctau1 = self._csig1 * c - self._ssig1 * s

        if self.caps & Mask.CAP_C1p:
            self._C1pa = [0.0] * (self._order + 1)
            c1pf(eps, self._C1pa, self._order)

        if self.caps & Mask.CAP_C2:
            self._A2m1 = a2m1f(eps, self._order)
            self._C2a = [0.0] * (self._order + 1)
            c2f(eps, self._C2a, self._order)
            self._B21 = sin_cos_series(True, self._ssig1, self._csig1, self._C2a)

        if self.caps & Mask.CAP_C3:
            self._C3a = [0.0] * self._order
            ellipsoid.series.c3f(eps, self._C3a)
            self._A3c = -self.f * self._salp0 * ellipsoid.series.a3f(eps)
            self._B31 = sin_cos_series(True, self._ssig1, self._csig1, self._C3a)

        if self.caps & Mask.CAP_C4:
            self._C4a = [0.0] * self._order
            ellipsoid.series.c4f(eps, self._C4a)
            # Multiplier = a^2 * e^2 * cos(alpha0) * sin(alpha0)
            self._A4 = sq(self.a) * self._calp0 * self._salp0 * ellipsoid.e2
            self._B41 = sin_cos_series(False, self._ssig1, self._csig1, self._C4a)

        self.s13 = math.nan
        self.a13 = math.nan
        if distance is not None:
            self.s13 = check_finite(distance, 'distance')
            self.a13 = self._gen_position(False, self.s13, Mask.EMPTY)[0]
        elif arc is not None:
            self.a13 = check_finite(arc, 'arc')
            self.s13 = self._gen_position(True, self.a13, Mask.DISTANCE)[4]

    def __repr__(self):
        return (
            f'<GeodesicLine(lat1={self.lat1}, lon1={self.lon1}, azi1={self.azi1}'
            f'{"" if math.isnan(self.s13) else f", s13={self.s13}"})>'
        )

    @property
    def distance(self) -> Optional[float]:
        """Distance to the reference point 3, if the line was built with one"""
        return None if math.isnan(self.s13) else self.s13

    @property
    def arc(self) -> Optional[float]:
        """Arc length to the reference point 3, if the line was built with one"""
        return None if math.isnan(self.a13) else self.a13

    def _gen_position(  # pylint: disable=too-many-locals, too-many-branches, too-many-statements
        self, arcmode: bool, s12_a12: float, outmask: int
    ) -> Tuple[float, float, float, float, float, float, float, float, float]:
        """
        The core position calculation. Quantities not covered by outmask (or by the
        capabilities of the line) are returned as NaN.

        Returns:
            (a12, lat2, lon2, azi2, s12, m12, M12, M21, S12)
        """
        a12 = lat2 = lon2 = azi2 = s12 = m12 = M12 = M21 = S12 = math.nan
        outmask &= self.caps & Mask.OUT_MASK
        if not (arcmode or (self.caps & (Mask.OUT_MASK & Mask.DISTANCE_IN))):
            return a12, lat2, lon2, azi2, s12, m12, M12, M21, S12

        B12 = 0.0
        AB1 = 0.0
        if arcmode:
            # Interpret s12_a12 as spherical arc length
            sig12 = math.radians(s12_a12)
            ssig12, csig12 = sincosd(s12_a12)
        else:
            # Interpret s12_a12 as distance
            tau12 = s12_a12 / (self._b * (1 + self._A1m1))
            tau12 = tau12 if math.isfinite(tau12) else math.nan
            s = math.sin(tau12)
            c = math.cos(tau12)
            # tau2 = tau1 + tau12
            B12 = -sin_cos_series(
                True,
                self._stau1 * c + self._ctau1 * s,
                self._ctau1 * c - self._stau1 * s,
                self._C1pa,
            )
            sig12 = tau12 - (B12 - self._B11)
            ssig12 = math.sin(sig12)
            csig12 = math.cos(sig12)
            if abs(self.f) > 0.01:
                # The reverted distance series is inaccurate for |f| > 1/100, so take
                # one Newton step to correct sig12, using the forward series.
                ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
                csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
                B12 = sin_cos_series(True, ssig2, csig2, self._C1a)
                serr = ((1 + self._A1m1) * (sig12 + (B12 - self._B11)) - s12_a12 / self._b)
                sig12 = sig12 - serr / math.sqrt(1 + self._k2 * sq(ssig2))
                ssig12 = math.sin(sig12)
                csig12 = math.cos(sig12)
                # Update B12 below

        # sig2 = sig1 + sig12
        ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
        csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
        dn2 = math.sqrt(1 + self._k2 * sq(ssig2))
        if outmask & (Mask.DISTANCE | Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
            if arcmode or abs(self.f) > 0.01:
                B12 = sin_cos_series(True, ssig2, csig2, self._C1a)
            AB1 = (1 + self._A1m1) * (B12 - self._B11)

        # sin(bet2) = cos(alp0) * sin(sig2)
        sbet2 = self._calp0 * ssig2
        cbet2 = math.hypot(self._salp0, self._calp0 * csig2)
        if cbet2 == 0:
            # I.e., salp0 = 0, csig2 = 0. Break the degeneracy in this case
            cbet2 = csig2 = TINY
        # tan(alp0) = cos(sig2) * tan(alp2)
        salp2 = self._salp0
        calp2 = self._calp0 * csig2

        if outmask & Mask.DISTANCE:
            s12 = self._b * ((1 + self._A1m1) * sig12 + AB1) if arcmode else s12_a12

        if outmask & Mask.LONGITUDE:
            # tan(omg2) = sin(alp0) * tan(sig2)
            somg2 = self._salp0 * ssig2
            comg2 = csig2
            E = math.copysign(1, self._salp0)
            # omg12 = omg2 - omg1
            if outmask & Mask.LONG_UNROLL:
                omg12 = E * (
                    sig12
                    - (math.atan2(ssig2, csig2) - math.atan2(self._ssig1, self._csig1))
                    + (math.atan2(E * somg2, comg2) - math.atan2(E * self._somg1, self._comg1))
                )
            else:
                omg12 = math.atan2(
                    somg2 * self._comg1 - comg2 * self._somg1,
                    comg2 * self._comg1 + somg2 * self._somg1,
                )
            lam12 = omg12 + self._A3c * (
                sig12 + (sin_cos_series(True, ssig2, csig2, self._C3a) - self._B31)
            )
            lon12 = math.degrees(lam12)
            if outmask & Mask.LONG_UNROLL:
                lon2 = self.lon1 + lon12
            else:
                lon2 = ang_normalize(ang_normalize(self.lon1) + ang_normalize(lon12))

        if outmask & Mask.LATITUDE:
            lat2 = atan2d(sbet2, self._f1 * cbet2)

        if outmask & Mask.AZIMUTH:
            azi2 = atan2d(salp2, calp2)

        if outmask & (Mask.REDUCEDLENGTH | Mask.GEODESICSCALE):
            B22 = sin_cos_series(True, ssig2, csig2, self._C2a)
            AB2 = (1 + self._A2m1) * (B22 - self._B21)
            J12 = (self._A1m1 - self._A2m1) * sig12 + (AB1 - AB2)
            if outmask & Mask.REDUCEDLENGTH:
                # Grouping keeps the cancellation exact for coincident points
                m12 = self._b * (
                    (dn2 * (self._csig1 * ssig2) - self._dn1 * (self._ssig1 * csig2))
                    - self._csig1 * csig2 * J12
                )
            if outmask & Mask.GEODESICSCALE:
                t = (self._k2 * (ssig2 - self._ssig1) * (ssig2 + self._ssig1)
                     / (self._dn1 + dn2))
                M12 = csig12 + (t * ssig2 - csig2 * J12) * self._ssig1 / self._dn1
                M21 = csig12 - (t * self._ssig1 - self._csig1 * J12) * ssig2 / dn2

        if outmask & Mask.AREA:
            B42 = sin_cos_series(False, ssig2, csig2, self._C4a)
            if self._calp0 == 0 or self._salp0 == 0:
                # alp12 = alp2 - alp1, used in atan2 so no need to normalize
                salp12 = salp2 * self.calp1 - calp2 * self.salp1
                calp12 = calp2 * self.calp1 + salp2 * self.salp1
            else:
                # tan(alp) = tan(alp0) * sec(sig)
                # tan(alp2-alp1) = (tan(alp2) -tan(alp1)) / (tan(alp2)*tan(alp1)+1)
                # = calp0 * salp0 * (csig1-csig2) / (salp0^2 + calp0^2 * csig1*csig2)
                # If csig12 > 0, write
                #   csig1 - csig2 = ssig12 * (csig1 * ssig12 / (1 + csig12) + ssig1)
                # else
                #   csig1 - csig2 = csig1 * (1 - csig12) + ssig12 * ssig1
                # No need to normalize
                salp12 = self._calp0 * self._salp0 * (
                    self._csig1 * (1 - csig12) + ssig12 * self._ssig1 if csig12 <= 0
                    else ssig12 * (self._csig1 * ssig12 / (1 + csig12) + self._ssig1)
                )
                calp12 = sq(self._salp0) + sq(self._calp0) * self._csig1 * csig2
            S12 = self._c2 * math.atan2(salp12, calp12) + self._A4 * (B42 - self._B41)

        a12 = s12_a12 if arcmode else math.degrees(sig12)
        return a12, lat2, lon2, azi2, s12, m12, M12, M21, S12

    def _check_caps(self, outmask: int):
        missing = int(outmask) & ~int(self.caps) & int(Mask.OUT_ALL | Mask.CAP_ALL)
        if missing:
            raise InvalidParameter(
                f"GeodesicLine was not constructed with the capabilities {Mask(missing)!r}"
            )

    def _result(self, arcmode: bool, s12_a12: float, outmask: int) -> DirectResult:
        """Run a position calculation and package it as a DirectResult"""
        self._check_caps(outmask | (Mask.EMPTY if arcmode else Mask.DISTANCE_IN))
        if s12_a12 == 0:
            # The start point, returned as given
            a12, lat2, lon2, azi2, s12, m12, M12, M21, S12 = (
                0.0, self.lat1, self.lon1, self.azi1, 0.0, 0.0, 1.0, 1.0, 0.0
            )
        else:
            a12, lat2, lon2, azi2, s12, m12, M12, M21, S12 = self._gen_position(
                arcmode, s12_a12, outmask
            )
        unroll = bool(outmask & Mask.LONG_UNROLL)
        differentials = outmask & Mask.OUT_MASK & Mask.DIFFERENTIALS
        area = outmask & Mask.OUT_MASK & Mask.AREA
        return DirectResult(
            lat1=self.lat1,
            lon1=self.lon1 if unroll else lon_canonical(self.lon1),
            azi1=azi_canonical(self.azi1),
            lat2=lat2,
            lon2=lon2 if unroll else lon_canonical(lon2),
            azi2=azi_canonical(azi2),
            s12=s12,
            a12=a12,
            m12=m12 if differentials else None,
            M12=M12 if differentials else None,
            M21=M21 if differentials else None,
            S12=S12 if area else None,
        )

    def position(self, s12: float, differentials: bool = False, area: bool = False,
                 long_unroll: bool = False) -> DirectResult:
        """
        Find the point a given distance along the line.

        Args:
            s12:
                The distance from point 1, in meters. May be negative.

            differentials:
                Also compute the reduced length and geodesic scales

            area:
                Also compute the area between the geodesic and the equator

            long_unroll:
                Unroll the longitude of point 2 instead of reducing it to [-180, 180)

        Returns:
            DirectResult
        """
        s12 = check_finite(s12, 's12')
        return self._result(False, s12, Mask.for_request(differentials, area, long_unroll))

    def arc_position(self, a12: float, differentials: bool = False, area: bool = False,
                     long_unroll: bool = False) -> DirectResult:
        """
        Find the point a given arc length (on the auxiliary sphere) along the line.

        Args:
            a12:
                The arc length from point 1, in degrees. May be negative.

            differentials, area, long_unroll:
                As for position()

        Returns:
            DirectResult
        """
        a12 = check_finite(a12, 'a12')
        return self._result(True, a12, Mask.for_request(differentials, area, long_unroll))

    def position_at_fraction(self, fraction: float, **kwargs) -> DirectResult:
        """
        Find the point a fraction of the way to the line's reference point 3, e.g. 0.5
        for the midpoint. Fractions outside [0, 1] extrapolate along the line.

        Keyword arguments are passed through to position().
        """
        if self.distance is None:
            raise InvalidParameter('GeodesicLine has no reference distance')

        return self.position(float(fraction) * self.s13, **kwargs)

    def waypoints(self, count: int) -> List[DirectResult]:
        """
        Evenly spaced points from point 1 to the reference point 3, inclusive.

        Args:
            count:
                The number of points, at least 2

        Returns:
            List[DirectResult]
        """
        if self.distance is None:
            raise InvalidParameter('GeodesicLine has no reference distance')
        if count < 2:
            raise OutOfRange(f'Waypoint count must be at least 2; got {count}')

        return [self.position(float(s)) for s in np.linspace(0.0, self.s13, int(count))]

    def positions(self, distances: Sequence[float]) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Vectorized form of position() returning only the coordinates.

        Args:
            distances:
                An array-like of distances from point 1, in meters

        Returns:
            Arrays of (lat2, lon2, azi2), each the shape of distances
        """
        s12 = np.asarray(distances, dtype=float)
        out = np.empty(s12.shape + (3,))
        for index, value in np.ndenumerate(s12):
            result = self.position(float(value))
            out[index] = (result.lat2, result.lon2, result.azi2)

        return out[..., 0], out[..., 1], out[..., 2]
