"""Single moving cursor.

One alive cell walks the grid in raster order (left to right, top to
bottom, wrapping rows), advancing one cell per tick. A full cycle takes
side * side ticks.
"""

import numpy as np

from ..core.cell import ALIVE, DEAD
from ..core.grid import Grid
from .base import Simulation, SimulationKind


def cursor_indexes(tick: int, size: int) -> tuple:
    """Return (prev_index, next_index) of the cursor for ``tick``.

    The previous index is clamped to 0 before the first full tick.
    """
    prev_index = 0 if tick < 1 else (tick - 1) % size
    next_index = max(tick, 0) % size
    return prev_index, next_index


class MoverSimulation(Simulation):
    """Exactly one alive cell, moved one raster step per tick."""

    kind = SimulationKind.MOVER

    def _seed_alive(self, grid: Grid, rng: np.random.Generator) -> None:
        grid.set(0, 0, ALIVE)

    def step(self, tick: int, grid: Grid, rng: np.random.Generator) -> Grid:
        prev_index, next_index = cursor_indexes(tick, grid.size)

        next_grid = grid.copy()
        if prev_index == next_index:
            return next_grid

        next_grid.set_index(prev_index, DEAD)
        next_grid.set_index(next_index, ALIVE)
        return next_grid
