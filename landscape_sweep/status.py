"""
status.py

Active-rank sequence of the sweep.

Holds the ids of the tents alive at the sweep position, ordered from largest
to smallest value. The rank stored on each tent always equals its position in
the sequence. Arrivals and departures happen in the zero-valued tail, so the
renumbering after an insert or removal only touches the few tents below it.
"""

from typing import Iterator, List, Optional, Sequence

from .tents import Tent


class ActiveRanks:

    def __init__(self, tents: Sequence[Tent]):
        self._tents = tents
        self._order: List[int] = []

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[int]:
        return iter(self._order)

    def _renumber(self, start: int) -> None:
        for pos in range(start, len(self._order)):
            self._tents[self._order[pos]].rank = pos

    def insert(self, tent_id: int, position: Optional[int] = None) -> int:
        """Insert a tent at `position` (default: bottom) and return its rank."""
        if position is None:
            position = len(self._order)
        if not 0 <= position <= len(self._order):
            raise IndexError(f"Insert position {position} out of range for {len(self._order)} tents")
        self._order.insert(position, tent_id)
        self._renumber(position)
        return position

    def remove(self, tent_id: int) -> int:
        """Remove a ranked tent, clear its rank and return the rank it had."""
        position = self._tents[tent_id].rank
        if position is None or self._order[position] != tent_id:
            raise ValueError(f"Tent {tent_id} is not in the active sequence")
        del self._order[position]
        self._tents[tent_id].rank = None
        self._renumber(position)
        return position

    def swap(self, upper_id: int, lower_id: int) -> None:
        """Exchange two tents with ranks r and r + 1."""
        upper = self._tents[upper_id].rank
        lower = self._tents[lower_id].rank
        if upper is None or lower != upper + 1:
            raise ValueError(f"Tents {upper_id} and {lower_id} are not adjacent")
        self._order[upper], self._order[lower] = lower_id, upper_id
        self._tents[upper_id].rank = lower
        self._tents[lower_id].rank = upper

    def at(self, rank: int) -> Optional[int]:
        if 0 <= rank < len(self._order):
            return self._order[rank]
        return None

    def neighbor(self, tent_id: int, offset: int) -> Optional[int]:
        """Id of the tent `offset` ranks away (negative = above), or None."""
        rank = self._tents[tent_id].rank
        if rank is None:
            return None
        return self.at(rank + offset)
