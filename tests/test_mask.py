
from geodesics.mask import *


def test_outputs_include_capabilities():
    assert Mask.LONGITUDE & Mask.CAP_C3
    assert Mask.DISTANCE_IN & Mask.CAP_C1p
    assert Mask.AREA & Mask.CAP_C4
    assert Mask.REDUCEDLENGTH & Mask.CAP_C2
    assert not Mask.LATITUDE & Mask.CAP_ALL
    assert Mask.STANDARD & Mask.OUT_ALL == Mask.STANDARD & Mask.OUT_MASK
    assert not Mask.LONG_UNROLL & Mask.OUT_ALL


def test_for_request():
    assert Mask.for_request() == Mask.STANDARD

    mask = Mask.for_request(differentials=True)
    assert mask & Mask.REDUCEDLENGTH == Mask.REDUCEDLENGTH
    assert mask & Mask.GEODESICSCALE == Mask.GEODESICSCALE
    assert not mask & (Mask.AREA & Mask.OUT_MASK)

    mask = Mask.for_request(area=True, long_unroll=True)
    assert mask & Mask.AREA == Mask.AREA
    assert mask & Mask.LONG_UNROLL
    assert not mask & Mask.CAP_C2

    assert Mask.for_request(True, True) | Mask.LONG_UNROLL == Mask.for_request(True, True, True)
