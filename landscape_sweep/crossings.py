"""
crossings.py

Detect where two rank-adjacent tents swap order.

Two segments of equal slope sign are parallel or identical and never change
their order, so only a rising tent against a falling one can cross. Of the
possible intersections only a proper one (interior to both active segments)
changes the ranking; touches at an endpoint are settled by the apex and death
events, collinear overlaps leave both values equal.
"""

from typing import Optional

from .events import Event, EventKind
from .geometry import segment_intersection
from .tents import Tent


def find_crossing(first: Tent, second: Tent) -> Optional[Event]:
    """
    Crossing event of two tents, or None.

    Parameters
    ----------
    first, second : Tent
        Tents in either order.

    Returns
    -------
    Event or None
        An INTERSECTION event whose `tent` is the rising tent and whose
        `other` is the falling one.
    """
    if first.rising == second.rising:
        return None

    rising, falling = (first, second) if first.rising else (second, first)
    hit = segment_intersection(rising.active_segment(), falling.active_segment())
    if hit is None or not hit.is_proper:
        return None

    return Event(hit.point, EventKind.INTERSECTION, rising.index, falling.index)
