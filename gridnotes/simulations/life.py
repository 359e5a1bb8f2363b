"""Game of Life rules over a bounded (non-wrapping) grid.

Live cells survive with 2 or 3 alive neighbors and die otherwise, with the
single-neighbor case handled as its own death branch. Dead cells are born
with exactly 3 alive neighbors. Off-grid neighbors count as dead.
"""

from typing import Set
import logging

import numpy as np

from ..core.cell import ALIVE
from ..core.grid import Grid
from .base import Simulation, SimulationKind

logger = logging.getLogger(__name__)


SURVIVAL_SET: Set[int] = {2, 3}  # Live cells survive with 2-3 neighbors
BIRTH_SET: Set[int] = {3}        # Dead cells born with exactly 3 neighbors
ISOLATION_COUNT = 1              # Live cells with a single neighbor die


def update_cell(alive: bool, live_neighbors: int) -> bool:
    """Determine the next state of one cell.

    Args:
        alive: Current cell state
        live_neighbors: Number of alive neighbors (0-8)

    Returns:
        Next cell state (True=alive, False=dead)
    """
    if alive:
        if live_neighbors == ISOLATION_COUNT:
            return False
        if live_neighbors in SURVIVAL_SET:
            return True
        return False  # Underpopulation (0) or overpopulation (4+)
    return live_neighbors in BIRTH_SET


class LifeSimulation(Simulation):
    """Simultaneous Life update against the start-of-tick snapshot."""

    kind = SimulationKind.LIFE

    def __init__(self, seed_ratio: float = 0.5):
        """Initialize the Life rule.

        Args:
            seed_ratio: Number of random placements at seed time, as a
                fraction of the cell count (placements may repeat)
        """
        self.seed_ratio = max(0.0, min(1.0, seed_ratio))

    def seed_count(self, size: int) -> int:
        return int(size * self.seed_ratio)

    def _seed_alive(self, grid: Grid, rng: np.random.Generator) -> None:
        for _ in range(self.seed_count(grid.size)):
            x = int(rng.integers(0, grid.side))
            y = int(rng.integers(0, grid.side))
            grid.set(x, y, ALIVE)

    def step(self, tick: int, grid: Grid, rng: np.random.Generator) -> Grid:
        next_grid = Grid.rebuild_preserving(grid, rects=grid.rects)
        next_grid.clear_alive()

        for y in range(grid.side):
            for x in range(grid.side):
                neighbors = grid.count_alive_neighbors(x, y)
                if update_cell(bool(grid.alive[y, x]), neighbors):
                    next_grid.set(x, y, ALIVE)

        return next_grid

    def __repr__(self) -> str:
        return f"LifeSimulation(seed_ratio={self.seed_ratio})"
