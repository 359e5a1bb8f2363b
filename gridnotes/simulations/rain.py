"""Falling particles.

Every tick each particle drops one row. While fewer than
``limit_factor * side`` particles are on the grid, one new particle is
spawned at a random column of the top row. Particles that fall past the
bottom edge are discarded.
"""

import logging

import numpy as np

from ..core.cell import ALIVE
from ..core.grid import Grid
from .base import Simulation, SimulationKind

logger = logging.getLogger(__name__)


class RainSimulation(Simulation):
    """Gravity drop of particles spawned on row 0."""

    kind = SimulationKind.RAIN

    def __init__(self, limit_factor: int = 2):
        """Initialize the rain rule.

        Args:
            limit_factor: Spawning stops once the particle count reaches
                ``limit_factor * side``
        """
        if limit_factor < 1:
            raise ValueError("limit_factor must be at least 1")
        self.limit_factor = limit_factor

    def spawn_limit(self, side: int) -> int:
        return self.limit_factor * side

    def step(self, tick: int, grid: Grid, rng: np.random.Generator) -> Grid:
        drops = grid.alive_indexes()

        next_grid = grid.copy()
        next_grid.clear_alive()

        if len(drops) < self.spawn_limit(grid.side):
            x = int(rng.integers(0, grid.side))
            next_grid.set(x, 0, ALIVE)

        fallen = 0
        for index in drops:
            x, y = grid.index_to_pos(index)
            if y + 1 < grid.side:
                next_grid.set(x, y + 1, ALIVE)
            else:
                fallen += 1

        if fallen:
            logger.debug(f"Tick {tick}: {fallen} drops left the grid")
        return next_grid

    def __repr__(self) -> str:
        return f"RainSimulation(limit_factor={self.limit_factor})"
