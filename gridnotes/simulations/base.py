"""Simulation rule contract and the closed set of simulation kinds."""

from enum import Enum
from typing import List
import logging

import numpy as np

from ..core.grid import Grid

logger = logging.getLogger(__name__)


class SimulationKind(Enum):
    """Selectable simulation rules, in UI order."""
    MOVER = "mover"
    RAIN = "rain"
    LIFE = "life"

    @classmethod
    def names(cls) -> List[str]:
        """Ordered variant names for UI enumeration."""
        return [kind.value for kind in cls]

    @classmethod
    def from_name(cls, name: str) -> 'SimulationKind':
        """Look up a kind by its UI name.

        Raises:
            ValueError: If no simulation has that name
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown simulation '{name}', expected one of {cls.names()}") from None


class Simulation:
    """Base class for grid transition rules.

    A rule is seeded once per activation and then stepped once per tick.
    Both operations leave their input grid untouched and return a new grid.
    """

    kind: SimulationKind

    def seed(self, grid: Grid, rng: np.random.Generator) -> Grid:
        """Produce the initial grid for this rule.

        Alive flags are cleared before the rule places its own cells;
        marked/active flags are carried over.
        """
        seeded = grid.copy()
        seeded.clear_alive()
        self._seed_alive(seeded, rng)
        logger.debug(f"Seeded {self.kind.value}: {seeded.count_alive()} alive")
        return seeded

    def _seed_alive(self, grid: Grid, rng: np.random.Generator) -> None:
        """Place the rule's initial alive cells on a cleared grid (in place)."""

    def step(self, tick: int, grid: Grid, rng: np.random.Generator) -> Grid:
        """Compute the grid for ``tick`` from the current grid."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
