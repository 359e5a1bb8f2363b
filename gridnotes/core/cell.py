"""Cell value types shared by the grid, the simulation rules and the note policy.

A cell carries three flags with separate owners:

- ``alive``: owned by the active simulation rule
- ``marked``: fixed target flag, set when markers are seeded
- ``active``: "currently sounding" flag, owned by the note emitter

Geometry (``rect``) is carried along untouched for the renderer.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with a top-left origin (pixel units)."""

    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def inset(self, pad: float) -> 'Rect':
        """Return a rectangle shrunk by ``pad`` on every side."""
        w = max(0.0, self.w - 2 * pad)
        h = max(0.0, self.h - 2 * pad)
        return Rect(self.x + pad, self.y + pad, w, h)


@dataclass(frozen=True)
class Cell:
    """Snapshot of a single grid position."""

    alive: bool = False
    marked: bool = False
    active: bool = False
    rect: Optional[Rect] = None

    @property
    def is_collision(self) -> bool:
        """True when the cell is both alive and marked."""
        return self.alive and self.marked


@dataclass(frozen=True)
class CellPatch:
    """Partial update over the mutable cell flags.

    Fields left as ``None`` keep their current value when the patch is
    merged by ``Grid.set``.
    """

    alive: Optional[bool] = None
    marked: Optional[bool] = None
    active: Optional[bool] = None

    def apply(self, cell: Cell) -> Cell:
        """Merge this patch over ``cell`` and return the result."""
        return replace(
            cell,
            alive=cell.alive if self.alive is None else self.alive,
            marked=cell.marked if self.marked is None else self.marked,
            active=cell.active if self.active is None else self.active,
        )


# Common patches
ALIVE = CellPatch(alive=True)
DEAD = CellPatch(alive=False)
