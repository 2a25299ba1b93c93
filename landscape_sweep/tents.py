"""
tents.py

Tent functions of a persistence diagram.

Every finite pair (b, d) with b < d yields the tent

    t(x) = max(0, min(x - b, d - x)),

which rises from (b, 0) to the apex ((b + d)/2, (d - b)/2) and falls back to
(d, 0). Pairs can be given as an (n, 2) array, as a sequence of 2-sequences,
or as bar-like objects exposing `.birth` and `.death`.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple
import logging
import math

import numpy as np

from .geometry import OrderedPoint, Segment

logger = logging.getLogger(__name__)


class BirthDeath(NamedTuple):
    birth: float
    death: float


@dataclass
class Tent:
    """
    Tent function of one birth-death pair, plus the sweep state attached to it.

    `rising` is True until the sweep has passed the apex. `rank` is the
    tent's position in the active sequence (0 = largest value) while the
    sweep is between its birth and death, and None otherwise.
    """
    index: int
    birth: OrderedPoint
    apex: OrderedPoint
    death: OrderedPoint
    rising: bool = True
    rank: Optional[int] = None

    @classmethod
    def from_pair(cls, birth: float, death: float, index: int) -> "Tent":
        return cls(
            index=index,
            birth=OrderedPoint(birth, 0.0),
            apex=OrderedPoint((birth + death) / 2.0, (death - birth) / 2.0),
            death=OrderedPoint(death, 0.0),
        )

    @property
    def is_active(self) -> bool:
        return self.rank is not None

    def active_segment(self) -> Segment:
        """Segment of the tent the sweep line currently crosses."""
        if self.rising:
            return Segment(self.birth, self.apex)
        return Segment(self.apex, self.death)

    def value_at(self, x: float) -> float:
        return max(0.0, min(x - self.birth.x, self.death.x - x))


def _pair_of(item: Any) -> Tuple[float, float]:
    if hasattr(item, "birth") and hasattr(item, "death"):
        return float(item.birth), float(item.death)
    birth, death = item
    return float(birth), float(death)


def as_pairs(pairs: Any) -> List[Tuple[float, float]]:
    """
    Normalise diagram input to a list of (birth, death) float tuples.

    Parameters
    ----------
    pairs :
        numpy array of shape (n, 2), an iterable of 2-sequences, or an
        iterable of bar-like objects with `.birth` and `.death`.

    Returns
    -------
    list of (float, float)
        Pairs in input order, nothing filtered yet.
    """
    if isinstance(pairs, np.ndarray):
        arr = np.asarray(pairs, dtype=float)
        if arr.size == 0:
            return []
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise ValueError(f"pairs must be an (n, 2) array-like, got shape {arr.shape}.")
        return [(float(b), float(d)) for b, d in arr]
    return [_pair_of(item) for item in pairs]


def build_tents(pairs: Iterable[Tuple[float, float]]) -> List[Tent]:
    """
    Build one tent per usable pair.

    Pairs with a non-finite birth or death are dropped, as are pairs with
    death <= birth, whose tent is empty. Survivors are numbered 0..n-1 in
    input order; that number is the tent's identity for the whole sweep.
    """
    tents: List[Tent] = []
    n_infinite = 0
    n_empty = 0
    for birth, death in pairs:
        if not (math.isfinite(birth) and math.isfinite(death)):
            n_infinite += 1
            continue
        if death <= birth:
            n_empty += 1
            continue
        tents.append(Tent.from_pair(birth, death, len(tents)))

    if n_infinite or n_empty:
        logger.debug(
            "Dropped %d non-finite and %d empty pairs, %d tents remain",
            n_infinite, n_empty, len(tents),
        )
    return tents
