import math

import pytest

from landscape_sweep.geometry import (
    IntersectionKind,
    OrderedPoint,
    Segment,
    orientation,
    segment_intersection,
)


def seg(x1, y1, x2, y2):
    return Segment(OrderedPoint(x1, y1), OrderedPoint(x2, y2))


def test_ordered_point_orders_by_x_then_y():
    points = [OrderedPoint(2, 0), OrderedPoint(1, 5), OrderedPoint(1, 1)]
    assert sorted(points) == [OrderedPoint(1, 1), OrderedPoint(1, 5), OrderedPoint(2, 0)]
    assert OrderedPoint(1.0, 0.0) < OrderedPoint(1.0, 0.5)


def test_ordered_point_canonicalises_negative_zero():
    p = OrderedPoint(-0.0, -0.0)
    assert p == OrderedPoint(0.0, 0.0)
    assert hash(p) == hash(OrderedPoint(0.0, 0.0))
    assert math.copysign(1.0, p.x) == 1.0
    assert math.copysign(1.0, p.y) == 1.0


def test_ordered_point_rejects_nan():
    with pytest.raises(ValueError):
        OrderedPoint(float("nan"), 0.0)
    with pytest.raises(ValueError):
        OrderedPoint(0.0, float("nan"))


def test_ordered_point_unpacks_to_floats():
    x, y = OrderedPoint(1, 2)
    assert (x, y) == (1.0, 2.0)
    assert isinstance(x, float)


def test_orientation_signs():
    a, b = OrderedPoint(0, 0), OrderedPoint(1, 0)
    assert orientation(a, b, OrderedPoint(0, 1)) == 1
    assert orientation(a, b, OrderedPoint(0, -1)) == -1
    assert orientation(a, b, OrderedPoint(5, 0)) == 0


def test_proper_crossing():
    hit = segment_intersection(seg(2, 0, 4, 2), seg(2, 2, 4, 0))
    assert hit.kind is IntersectionKind.PROPER
    assert hit.is_proper
    assert hit.point == OrderedPoint(3.0, 1.0)


def test_shared_endpoint_is_a_touch():
    hit = segment_intersection(seg(0, 0, 2, 2), seg(2, 2, 4, 0))
    assert hit.kind is IntersectionKind.TOUCH
    assert hit.point == OrderedPoint(2, 2)


def test_endpoint_on_interior_is_a_touch():
    hit = segment_intersection(seg(0, 0, 4, 0), seg(2, 0, 2, 3))
    assert hit.kind is IntersectionKind.TOUCH
    assert hit.point == OrderedPoint(2, 0)
    assert not hit.is_proper


def test_collinear_overlap():
    hit = segment_intersection(seg(0, 0, 2, 2), seg(1, 1, 3, 3))
    assert hit.kind is IntersectionKind.COLLINEAR
    assert hit.point is None


@pytest.mark.parametrize(
    "s1, s2",
    [
        (seg(0, 0, 1, 1), seg(2, 2, 3, 3)),   # collinear, disjoint
        (seg(0, 0, 2, 2), seg(0, 1, 2, 3)),   # parallel
        (seg(0, 0, 4, 4), seg(3, 0, 4, 1)),   # overlapping boxes, no contact
    ],
)
def test_disjoint_segments(s1, s2):
    assert segment_intersection(s1, s2) is None
