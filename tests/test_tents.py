from types import SimpleNamespace

import numpy as np
import pytest

from landscape_sweep.geometry import OrderedPoint
from landscape_sweep.tents import BirthDeath, Tent, as_pairs, build_tents


def test_tent_points():
    tent = Tent.from_pair(1.0, 3.0, 7)
    assert tent.index == 7
    assert tent.birth == OrderedPoint(1, 0)
    assert tent.apex == OrderedPoint(2, 1)
    assert tent.death == OrderedPoint(3, 0)
    assert tent.rising
    assert tent.rank is None
    assert not tent.is_active


def test_active_segment_follows_slope():
    tent = Tent.from_pair(0.0, 4.0, 0)
    assert tent.active_segment() == (OrderedPoint(0, 0), OrderedPoint(2, 2))
    tent.rising = False
    assert tent.active_segment() == (OrderedPoint(2, 2), OrderedPoint(4, 0))


def test_value_at():
    tent = Tent.from_pair(0.0, 4.0, 0)
    assert tent.value_at(-1.0) == 0.0
    assert tent.value_at(1.0) == 1.0
    assert tent.value_at(2.0) == 2.0
    assert tent.value_at(3.5) == 0.5
    assert tent.value_at(5.0) == 0.0


def test_build_tents_filters_and_renumbers():
    pairs = [
        (0.0, float("inf")),
        (1.0, 3.0),
        (float("-inf"), 2.0),
        (float("nan"), 1.0),
        (2.0, 2.0),
        (5.0, 4.0),
        (0.5, 6.0),
    ]
    tents = build_tents(pairs)
    assert [t.index for t in tents] == [0, 1]
    assert [(t.birth.x, t.death.x) for t in tents] == [(1.0, 3.0), (0.5, 6.0)]


def test_build_tents_empty():
    assert build_tents([]) == []


def test_as_pairs_accepts_arrays():
    arr = np.array([[0.0, 1.0], [2.0, 5.0]])
    assert as_pairs(arr) == [(0.0, 1.0), (2.0, 5.0)]
    assert as_pairs(np.empty((0, 2))) == []


def test_as_pairs_rejects_wrong_shape():
    with pytest.raises(ValueError):
        as_pairs(np.zeros((3, 3)))
    with pytest.raises(ValueError):
        as_pairs(np.zeros(4))


def test_as_pairs_accepts_bars_and_tuples():
    bars = [SimpleNamespace(birth=0, death=2), BirthDeath(1.0, 4.0), [3, 5], (6, 7)]
    assert as_pairs(bars) == [(0.0, 2.0), (1.0, 4.0), (3.0, 5.0), (6.0, 7.0)]
