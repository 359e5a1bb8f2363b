"""Marker placement.

Markers are the fixed targets that alive cells collide with. They are
placed at uniformly random positions; repeated draws land on the same cell,
so the number of marked cells can be lower than the requested count.
"""

import logging

import numpy as np

from ..core.cell import CellPatch
from ..core.grid import Grid

logger = logging.getLogger(__name__)

MARKED = CellPatch(marked=True)


def marker_count(side: int, ratio: float = 1 / 8) -> int:
    """Number of marker draws for a grid of ``side`` cells per edge."""
    return int(side * side * ratio)


def put_markers(grid: Grid, rng: np.random.Generator, count: int) -> None:
    """Mark ``count`` random positions in place (repeats allowed)."""
    for _ in range(count):
        x = int(rng.integers(0, grid.side))
        y = int(rng.integers(0, grid.side))
        grid.set(x, y, MARKED)


def reseed_markers(grid: Grid, rng: np.random.Generator, count: int) -> Grid:
    """Return a copy of ``grid`` with a freshly randomized marked set.

    Alive and active flags are left untouched.
    """
    reseeded = grid.copy()
    reseeded.clear_marked()
    put_markers(reseeded, rng, count)
    logger.debug(f"Placed {reseeded.count_marked()} markers from {count} draws")
    return reseeded
