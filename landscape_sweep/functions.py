"""
functions.py

Function-level view of computed landscapes.

- PiecewiseLinearFunction: one layer as breakpoints, evaluated with np.interp.
- Landscape: the k layers of a diagram with grid evaluation.
- landscape_on_grid: direct evaluation by sorting tent values at every grid
  point. Much slower than the sweep, but independent of it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from .geometry import OrderedPoint
from .sweep import sweep_tents, validate_k
from .tents import as_pairs, build_tents


@dataclass
class PiecewiseLinearFunction:
    """
    Piecewise-linear function specified by breakpoints (xs, ys).
    Between xs[i] and xs[i+1] the function is linear. Outside [xs[0], xs[-1]]
    the function evaluates to 0.0.
    """
    xs: NDArray[np.float64]
    ys: NDArray[np.float64]
    domain: Tuple[float, float]
    metadata: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_points(cls, points: Sequence[OrderedPoint], **metadata: Any) -> "PiecewiseLinearFunction":
        xs = np.array([p.x for p in points], dtype=float)
        ys = np.array([p.y for p in points], dtype=float)
        domain = (float(xs[0]), float(xs[-1])) if xs.size else (0.0, 0.0)
        return cls(xs=xs, ys=ys, domain=domain, metadata=dict(metadata))

    def __call__(self, x: Union[NDArray[np.float64], float]):
        """
        Layer value at x (float or array). Repeated breakpoints from a crossing
        cascade have zero width and do not affect np.interp.
        """
        x_arr = np.asarray(x, dtype=float)
        if self.xs.size == 0:
            values = np.zeros_like(x_arr)
        else:
            values = np.interp(x_arr, self.xs, self.ys, left=0.0, right=0.0)
        return float(values) if np.isscalar(x) else values

    def integral(self) -> float:
        """L1 norm; landscape layers are non-negative so this is the plain integral."""
        if self.xs.size < 2:
            return 0.0
        return float(np.sum(0.5 * np.diff(self.xs) * (self.ys[1:] + self.ys[:-1])))


def _check_grid(grid: Any) -> NDArray[np.float64]:
    grid_arr = np.asarray(grid, dtype=float).ravel()
    if grid_arr.size == 0:
        raise ValueError("grid must be non-empty")
    if not np.all(np.isfinite(grid_arr)):
        raise ValueError("grid contains non-finite values")
    if np.any(np.diff(grid_arr) < 0):
        raise ValueError("grid must be sorted in non-decreasing order")
    return grid_arr


@dataclass
class Landscape:
    """
    First k layers of the persistence landscape of a diagram.

    `layers[i]` holds the breakpoints of λ_{i+1}; `n_tents` is the number of
    pairs that survived filtering.
    """
    layers: List[List[OrderedPoint]]
    n_tents: int = 0

    def __len__(self) -> int:
        return len(self.layers)

    def __getitem__(self, index: int) -> List[OrderedPoint]:
        if 0 <= index < len(self.layers):
            return self.layers[index]
        return []

    @property
    def domain(self) -> Tuple[float, float]:
        """Smallest interval containing every breakpoint, (0.0, 0.0) if there are none."""
        xs = [p.x for layer in self.layers for p in layer]
        if not xs:
            return (0.0, 0.0)
        return (min(xs), max(xs))

    def to_functions(self) -> List[PiecewiseLinearFunction]:
        return [
            PiecewiseLinearFunction.from_points(layer, k=i + 1)
            for i, layer in enumerate(self.layers)
        ]

    def evaluate(self, x: float) -> List[float]:
        return [f(x) for f in self.to_functions()]

    def evaluate_on_grid(
        self,
        grid: NDArray[np.float64],
        levels: Union[int, Sequence[int], None] = None,
        *,
        fill_value: float = 0.0,
    ) -> NDArray[np.float64]:
        """Evaluate selected landscape levels on a common grid.

        Parameters
        ----------
        grid:
            One-dimensional, monotonically non-decreasing sample grid.
        levels:
            None evaluates every stored layer. An int m evaluates levels
            k=1..m, a sequence evaluates those k-values in the given order.
        fill_value:
            Value used when a requested level was not computed.

        Returns
        -------
        numpy.ndarray
            Array of shape (L, G) where G=len(grid) and L is the number of
            requested levels.
        """
        grid_arr = _check_grid(grid)

        if levels is None:
            ks = list(range(1, len(self.layers) + 1))
        elif isinstance(levels, (int, np.integer)):
            if levels < 1:
                raise ValueError("levels must be >= 1")
            ks = list(range(1, int(levels) + 1))
        else:
            ks = [int(k) for k in levels]
            if any(k < 1 for k in ks):
                raise ValueError("all requested landscape levels must be >= 1")

        functions = self.to_functions()
        out = np.full((len(ks), grid_arr.size), float(fill_value), dtype=float)
        for i, k in enumerate(ks):
            if k > len(functions):
                continue
            out[i, :] = functions[k - 1](grid_arr)
        return out


def compute_landscape(pairs: Any, k: int) -> Landscape:
    """Sweep the diagram and wrap the layers in a Landscape."""
    k = validate_k(k)
    tents = build_tents(as_pairs(pairs))
    return Landscape(layers=sweep_tents(tents, k), n_tents=len(tents))


def landscape_on_grid(pairs: Any, x_grid: NDArray[np.float64], k: int) -> NDArray[np.float64]:
    """
    Sample the first k landscape layers on a grid by brute force.

    Evaluates every tent at every grid point and sorts the values, so it
    costs O(n G log n) for n tents and G grid points.

    Returns
    -------
    numpy.ndarray
        Array of shape (k, G); row i is λ_{i+1} on the grid, zero-padded when
        the diagram has fewer than i+1 tents.
    """
    k = validate_k(k)
    grid_arr = _check_grid(x_grid)
    tents = build_tents(as_pairs(pairs))

    out = np.zeros((k, grid_arr.size), dtype=float)
    if not tents or k == 0:
        return out

    births = np.array([t.birth.x for t in tents], dtype=float)[:, None]
    deaths = np.array([t.death.x for t in tents], dtype=float)[:, None]
    values = np.maximum(0.0, np.minimum(grid_arr[None, :] - births, deaths - grid_arr[None, :]))

    # sorted_vals[i, j] = (i+1)-th largest value at grid_arr[j]
    sorted_vals = np.sort(values, axis=0)[::-1, :]
    depth = min(k, sorted_vals.shape[0])
    out[:depth, :] = sorted_vals[:depth, :]
    return out
