"""
sweep.py

Sweep-line computation of persistence landscapes.

The landscape layer λ_i(x) is the (i+1)-th largest tent value at x. Instead
of sorting all tent values at every x, the sweep keeps the alive tents in
rank order and only updates that order where it changes:

- BIRTH        a tent enters at value 0, i.e. at the bottom of the ranking
- MIDDLE       a tent passes its apex and starts falling
- INTERSECTION a rising tent overtakes the falling tent directly above it
- DEATH        a tent leaves at value 0 from the bottom of the ranking

Each event appends its point to the layer of every tent it concerns, so every
layer receives exactly its breakpoints, in increasing x.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence
import heapq
import logging

import numpy as np

from .crossings import find_crossing
from .events import Event, EventKind, seed_events
from .geometry import OrderedPoint
from .status import ActiveRanks
from .tents import Tent, as_pairs, build_tents

logger = logging.getLogger(__name__)


class SweepInvariantError(RuntimeError):
    """The sweep reached a state that correct event handling never produces."""


def record_point(layers: List[List[OrderedPoint]], rank: int, point: OrderedPoint) -> None:
    """Append `point` to layer `rank` if that layer was requested."""
    if rank < len(layers):
        layers[rank].append(point)


@dataclass
class _SweepState:
    tents: List[Tent]
    layers: List[List[OrderedPoint]]
    status: ActiveRanks = field(init=False)
    queue: List[Event] = field(init=False)
    n_events: int = 0
    n_crossings: int = 0
    n_stale: int = 0

    def __post_init__(self):
        self.status = ActiveRanks(self.tents)
        self.queue = seed_events(self.tents)
        heapq.heapify(self.queue)

    def ranked(self, tent_id: int, event: Event) -> Tent:
        tent = self.tents[tent_id]
        if tent.rank is None:
            raise SweepInvariantError(f"{event.kind.name} event at {event.point} for inactive tent {tent_id}")
        return tent

    def probe(self, tent_id: int, offset: int) -> None:
        """Queue the crossing of a tent with its neighbour `offset` ranks away, if any."""
        neighbor_id = self.status.neighbor(tent_id, offset)
        if neighbor_id is None:
            return
        crossing = find_crossing(self.tents[tent_id], self.tents[neighbor_id])
        if crossing is not None:
            heapq.heappush(self.queue, crossing)

    def bottom_rank(self) -> int:
        return len(self.status) - 1

    def on_birth(self, event: Event) -> None:
        tent = self.tents[event.tent]
        if tent.rank is not None:
            raise SweepInvariantError(f"Tent {tent.index} is born twice")

        # Tents born at the same x share their rising line; the one dying
        # later stays on top once the other one turns at its apex.
        position = len(self.status)
        while position > 0:
            above = self.tents[self.status.at(position - 1)]
            if above.birth.x != tent.birth.x or above.death.x >= tent.death.x:
                break
            position -= 1
        self.status.insert(tent.index, position)

        # every tent from `position` down is 0 here, so the newly occupied
        # bottom layer is the one that gains a breakpoint
        record_point(self.layers, self.bottom_rank(), event.point)
        self.probe(tent.index, -1)

    def on_middle(self, event: Event) -> None:
        tent = self.ranked(event.tent, event)
        tent.rising = False
        record_point(self.layers, tent.rank, event.point)
        self.probe(tent.index, 1)

    def on_death(self, event: Event) -> None:
        tent = self.ranked(event.tent, event)
        # every tent ranked at or below this one is 0 here as well
        record_point(self.layers, self.bottom_rank(), event.point)
        self.status.remove(tent.index)

    def on_intersection(self, event: Event) -> None:
        if event.other is None:
            raise SweepInvariantError(f"Intersection event at {event.point} without a second tent")
        lower = self.ranked(event.tent, event)
        upper = self.ranked(event.other, event)
        if not lower.rising:
            raise SweepInvariantError(
                f"Crossing at {event.point}: overtaking tent {lower.index} is not rising"
            )
        # A tent born in between, or an earlier swap at the same point, can
        # separate the pair after the crossing was queued. The next swap that
        # makes them adjacent again probes them anew.
        if lower.rank != upper.rank + 1:
            self.n_stale += 1
            return

        record_point(self.layers, lower.rank, event.point)
        record_point(self.layers, upper.rank, event.point)

        self.status.swap(upper.index, lower.index)
        self.n_crossings += 1
        self.probe(lower.index, -1)
        self.probe(upper.index, 1)

    def run(self) -> None:
        handlers = {
            EventKind.BIRTH: self.on_birth,
            EventKind.MIDDLE: self.on_middle,
            EventKind.DEATH: self.on_death,
            EventKind.INTERSECTION: self.on_intersection,
        }
        while self.queue:
            event = heapq.heappop(self.queue)
            handlers[event.kind](event)
            self.n_events += 1

        if len(self.status) != 0:
            raise SweepInvariantError(f"{len(self.status)} tents still active after the sweep")


def sweep_tents(tents: Sequence[Tent], k: int) -> List[List[OrderedPoint]]:
    """
    Run the sweep over prepared tents.

    The tents are mutated (`rising`, `rank`) and must be fresh, i.e. as
    returned by `build_tents`.
    """
    layers: List[List[OrderedPoint]] = [[] for _ in range(k)]
    state = _SweepState(tents=list(tents), layers=layers)
    logger.debug("Sweeping %d tents for %d layers", len(state.tents), k)
    state.run()
    logger.debug(
        "Sweep done: %d events, %d crossings, %d stale crossings skipped",
        state.n_events, state.n_crossings, state.n_stale,
    )
    return layers


def validate_k(k: Any) -> int:
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 0:
        raise ValueError(f"k must be a non-negative integer, got {k!r}")
    return int(k)


def persistence_landscape(pairs: Any, k: int) -> List[List[OrderedPoint]]:
    """
    Compute the first k persistence landscape layers of a diagram.

    Parameters
    ----------
    pairs :
        Birth-death pairs in any order: an (n, 2) array-like, a sequence of
        2-sequences or bar-like objects with `.birth` and `.death`. Pairs with
        a non-finite coordinate are ignored.
    k : int
        Number of layers, k >= 0.

    Returns
    -------
    list of list of OrderedPoint
        Exactly k layers. Layer i holds the breakpoints of λ_{i+1} in
        non-decreasing x; linear interpolation between them (and 0 outside)
        gives the layer's graph. Layers deeper than the maximal number of
        overlapping pairs are empty.
    """
    k = validate_k(k)
    tents = build_tents(as_pairs(pairs))
    return sweep_tents(tents, k)
