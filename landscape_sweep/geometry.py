"""
geometry.py

Planar primitives for the landscape sweep:

- OrderedPoint: an (x, y) pair of floats with a total order (x first, then y).
- Segment: a directed line segment between two OrderedPoints.
- segment_intersection: exact classification of how two segments meet.

All predicates are plain float comparisons, no tolerance is applied.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, NamedTuple, Optional
import math


@dataclass(frozen=True, order=True)
class OrderedPoint:
    """
    Point in the plane compared lexicographically by (x, y).

    Floats are only partially ordered because of NaN, so NaN coordinates are
    rejected on construction. Negative zero is stored as positive zero, which
    makes equality and ordering agree bit for bit.
    """
    x: float
    y: float

    def __post_init__(self):
        x, y = float(self.x), float(self.y)
        if math.isnan(x) or math.isnan(y):
            raise ValueError(f"OrderedPoint coordinates must not be NaN, got ({x}, {y})")
        # x + 0.0 maps -0.0 to 0.0 and leaves every other float untouched
        object.__setattr__(self, "x", x + 0.0)
        object.__setattr__(self, "y", y + 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"OrderedPoint({self.x!r}, {self.y!r})"


class Segment(NamedTuple):
    start: OrderedPoint
    end: OrderedPoint


class IntersectionKind(Enum):
    PROPER = "proper"          # single point interior to both segments
    TOUCH = "touch"            # single point that is an endpoint of a segment
    COLLINEAR = "collinear"    # overlapping collinear segments


@dataclass(frozen=True)
class SegmentIntersection:
    kind: IntersectionKind
    point: Optional[OrderedPoint] = None

    @property
    def is_proper(self) -> bool:
        return self.kind is IntersectionKind.PROPER


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def orientation(p: OrderedPoint, q: OrderedPoint, r: OrderedPoint) -> int:
    """Sign of the turn p -> q -> r: 1 counterclockwise, -1 clockwise, 0 collinear."""
    val = _cross(q.x - p.x, q.y - p.y, r.x - p.x, r.y - p.y)
    if val > 0:
        return 1
    if val < 0:
        return -1
    return 0


def _boxes_overlap(s1: Segment, s2: Segment) -> bool:
    return (
        min(s1.start.x, s1.end.x) <= max(s2.start.x, s2.end.x)
        and min(s2.start.x, s2.end.x) <= max(s1.start.x, s1.end.x)
        and min(s1.start.y, s1.end.y) <= max(s2.start.y, s2.end.y)
        and min(s2.start.y, s2.end.y) <= max(s1.start.y, s1.end.y)
    )


def _on_segment(p: OrderedPoint, seg: Segment) -> bool:
    """True if p, already known to be collinear with seg, lies within its bounding box."""
    return (
        min(seg.start.x, seg.end.x) <= p.x <= max(seg.start.x, seg.end.x)
        and min(seg.start.y, seg.end.y) <= p.y <= max(seg.start.y, seg.end.y)
    )


def _proper_point(s1: Segment, s2: Segment) -> OrderedPoint:
    p, q = s1.start, s2.start
    rx, ry = s1.end.x - p.x, s1.end.y - p.y
    sx, sy = s2.end.x - q.x, s2.end.y - q.y
    t = _cross(q.x - p.x, q.y - p.y, sx, sy) / _cross(rx, ry, sx, sy)
    return OrderedPoint(p.x + t * rx, p.y + t * ry)


def segment_intersection(s1: Segment, s2: Segment) -> Optional[SegmentIntersection]:
    """
    Classify the intersection of two closed segments.

    Parameters
    ----------
    s1, s2 : Segment
        Non-degenerate segments.

    Returns
    -------
    SegmentIntersection or None
        None when the segments do not meet. Otherwise a PROPER intersection
        (with its point), a TOUCH where one segment's endpoint lies on the
        other (the point is that endpoint), or a COLLINEAR overlap (no point).
    """
    if not _boxes_overlap(s1, s2):
        return None

    o1 = orientation(s1.start, s1.end, s2.start)
    o2 = orientation(s1.start, s1.end, s2.end)
    o3 = orientation(s2.start, s2.end, s1.start)
    o4 = orientation(s2.start, s2.end, s1.end)

    if o1 == 0 and o2 == 0:
        # bounding boxes overlap, so collinear segments share at least a point
        return SegmentIntersection(IntersectionKind.COLLINEAR)

    if o1 * o2 > 0 or o3 * o4 > 0:
        return None

    if o1 != 0 and o2 != 0 and o3 != 0 and o4 != 0:
        return SegmentIntersection(IntersectionKind.PROPER, _proper_point(s1, s2))

    for o, p, seg in (
        (o1, s2.start, s1),
        (o2, s2.end, s1),
        (o3, s1.start, s2),
        (o4, s1.end, s2),
    ):
        if o == 0 and _on_segment(p, seg):
            return SegmentIntersection(IntersectionKind.TOUCH, p)
    return None
