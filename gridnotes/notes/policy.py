"""Collision detection and note selection.

A collision is a cell that is both alive and marked. On emission ticks one
collision is promoted to a note-on according to the selected policy; a
cell that is already sounding is not re-triggered. On stop ticks every
sounding cell is released with a note-off.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple
import logging

import numpy as np

from ..core.cell import Cell, CellPatch
from ..core.grid import Grid
from .events import NoteOff, NoteOn, note_for_position

logger = logging.getLogger(__name__)

ACTIVATE = CellPatch(active=True)
RELEASE = CellPatch(active=False)


class NotePolicy(Enum):
    """Which collision index becomes the note when several exist."""
    MIN = "min"
    MAX = "max"
    AVG = "avg"
    RANDOM = "random"

    @classmethod
    def names(cls) -> List[str]:
        """Ordered variant names for UI enumeration."""
        return [policy.value for policy in cls]

    @classmethod
    def from_name(cls, name: str) -> 'NotePolicy':
        """Look up a policy by its UI name.

        Raises:
            ValueError: If no policy has that name
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown note policy '{name}', expected one of {cls.names()}") from None


def collisions(grid: Grid) -> List[Tuple[int, Cell]]:
    """All alive and marked cells as (index, cell), ascending by index."""
    return [(index, cell) for index, cell in grid.cells() if cell.is_collision]


def select_index(indexes: Sequence[int], policy: NotePolicy,
                 rng: Optional[np.random.Generator] = None) -> Optional[int]:
    """Pick one representative index from a collision set.

    Args:
        indexes: Collision indexes
        policy: Selection policy
        rng: Random generator used by the RANDOM policy

    Returns:
        The selected index, or None for an empty set
    """
    if len(indexes) == 0:
        return None

    if policy is NotePolicy.MIN:
        return min(indexes)
    if policy is NotePolicy.MAX:
        return max(indexes)
    if policy is NotePolicy.AVG:
        return sum(indexes) // len(indexes)
    if policy is NotePolicy.RANDOM:
        rng = rng if rng is not None else np.random.default_rng()
        return int(indexes[int(rng.integers(0, len(indexes)))])

    raise ValueError(f"Unsupported note policy: {policy!r}")


class NoteEmitter:
    """Edge-triggered note gate over the grid's active flags.

    Attributes:
        policy: Current selection policy
        channel: Channel for every event
        velocity: Velocity for note-on events
    """

    def __init__(self, policy: NotePolicy = NotePolicy.MIN, channel: int = 1,
                 velocity: float = 0.8, rng: Optional[np.random.Generator] = None):
        """Initialize the emitter.

        Args:
            policy: Collision selection policy
            channel: Fixed event channel
            velocity: Fixed note-on velocity
            rng: Random generator for the RANDOM policy
        """
        self.policy = policy
        self.channel = channel
        self.velocity = velocity
        self.rng = rng if rng is not None else np.random.default_rng()

        self.notes_on = 0
        self.notes_off = 0

    def emit(self, grid: Grid) -> List[NoteOn]:
        """Promote the selected collision to a note-on (in place on ``grid``).

        Under AVG the truncated mean index need not be a collision itself.
        That cell is activated and sounds all the same, so ``active`` can be
        set on a cell that is neither alive nor marked until the next stop
        pass releases it.

        Returns:
            A single-element list when a new note starts, else an empty list
        """
        indexes = [index for index, _ in collisions(grid)]
        selected = select_index(indexes, self.policy, self.rng)
        if selected is None:
            return []

        x, y = grid.index_to_pos(selected)
        cell = grid.get(x, y)
        if cell.active:
            return []

        grid.set(x, y, ACTIVATE)
        event = NoteOn(self.channel, note_for_position(x, y), self.velocity)
        self.notes_on += 1
        logger.debug(f"Note on {event.note} at ({x}, {y}) from {len(indexes)} collisions")
        return [event]

    def stop(self, grid: Grid) -> List[NoteOff]:
        """Release every sounding cell (in place on ``grid``)."""
        events = []
        for index in np.flatnonzero(grid.active):
            x, y = grid.index_to_pos(int(index))
            grid.set(x, y, RELEASE)
            events.append(NoteOff(self.channel, note_for_position(x, y)))

        self.notes_off += len(events)
        if events:
            logger.debug(f"Released {len(events)} notes")
        return events
