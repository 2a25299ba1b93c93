"""
events.py

Sweep events and their order.

Events are compared by point (x, then y), then by kind, then by tent ids, so
a min-heap of events (heapq) yields them left to right. At a shared point the
kinds are handled in the order DEATH, BIRTH, INTERSECTION, MIDDLE: tents
ending at x leave before tents starting at x arrive, and a crossing that
rounds onto the apex of its rising tent is handled while that tent still
rises.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Optional

from .geometry import OrderedPoint
from .tents import Tent


class EventKind(IntEnum):
    DEATH = 0
    BIRTH = 1
    INTERSECTION = 2
    MIDDLE = 3


@dataclass(frozen=True, order=True)
class Event:
    point: OrderedPoint
    kind: EventKind
    tent: int
    # second tent of an INTERSECTION, the one currently ranked above `tent`
    other: Optional[int] = None


def seed_events(tents: Iterable[Tent]) -> List[Event]:
    """Birth, apex and death events of every tent, three per tent."""
    events: List[Event] = []
    for tent in tents:
        events.append(Event(tent.birth, EventKind.BIRTH, tent.index))
        events.append(Event(tent.apex, EventKind.MIDDLE, tent.index))
        events.append(Event(tent.death, EventKind.DEATH, tent.index))
    return events
