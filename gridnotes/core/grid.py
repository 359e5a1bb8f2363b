"""Core grid state for the cell simulations.

The grid is a fixed SIDE x SIDE square of cells stored row-major
(``index = y * side + x``). Each cell flag lives in its own numpy boolean
array so the rules and the note policy can scan the whole field cheaply,
while ``get``/``set`` present the per-cell ``Cell``/``CellPatch`` view.
"""

import numpy as np
from typing import Iterator, List, Optional, Sequence, Tuple
import logging

from .cell import Cell, CellPatch, Rect

logger = logging.getLogger(__name__)

# Moore neighborhood offsets (dx, dy) in the order returned by Grid.neighbors
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (0, -1), (1, -1),   # top-left, top, top-right
    (-1, 0), (1, 0),              # left, right
    (-1, 1), (0, 1), (1, 1),      # bottom-left, bottom, bottom-right
)


class Grid:
    """Square grid of cells with alive/marked/active flags.

    Attributes:
        side: Number of cells along each edge
        alive: 2D numpy boolean array, indexed [y, x]
        marked: 2D numpy boolean array, indexed [y, x]
        active: 2D numpy boolean array, indexed [y, x]
        rects: Optional per-cell geometry in index order (renderer passthrough)
    """

    def __init__(self, side: int,
                 alive: Optional[np.ndarray] = None,
                 marked: Optional[np.ndarray] = None,
                 active: Optional[np.ndarray] = None,
                 rects: Optional[Sequence[Rect]] = None):
        """Initialize grid with given side length.

        Args:
            side: Cells per edge
            alive: Optional initial alive flags, shape (side, side)
            marked: Optional initial marked flags, shape (side, side)
            active: Optional initial active flags, shape (side, side)
            rects: Optional geometry, one Rect per cell in index order

        Raises:
            ValueError: If side is not positive or an initial array doesn't match
        """
        if side < 1:
            raise ValueError("Grid side must be positive")

        self.side = side
        self.alive = self._init_flags("alive", alive)
        self.marked = self._init_flags("marked", marked)
        self.active = self._init_flags("active", active)

        if rects is not None and len(rects) != side * side:
            raise ValueError(f"Expected {side * side} rects, got {len(rects)}")
        self.rects: Optional[List[Rect]] = list(rects) if rects is not None else None

    def _init_flags(self, name: str, initial: Optional[np.ndarray]) -> np.ndarray:
        if initial is None:
            return np.zeros((self.side, self.side), dtype=bool)
        if initial.shape != (self.side, self.side):
            raise ValueError(f"Initial {name} shape {initial.shape} doesn't match grid size {(self.side, self.side)}")
        if initial.dtype != bool:
            raise ValueError(f"Initial {name} must be boolean array")
        return initial.copy()

    @classmethod
    def rebuild_preserving(cls, old: 'Grid', rects: Optional[Sequence[Rect]] = None,
                           side: Optional[int] = None) -> 'Grid':
        """Build a grid with new geometry, carrying flags over by position.

        Positions present in ``old`` keep their alive/marked/active flags;
        positions outside it default to all-false.

        Args:
            old: Grid whose flags are carried over
            rects: New per-cell geometry (None drops geometry)
            side: Side of the new grid (defaults to ``old.side``)

        Returns:
            Grid: New grid with the same flags and the new geometry
        """
        side = old.side if side is None else side
        grid = cls(side, rects=rects)

        overlap = min(side, old.side)
        grid.alive[:overlap, :overlap] = old.alive[:overlap, :overlap]
        grid.marked[:overlap, :overlap] = old.marked[:overlap, :overlap]
        grid.active[:overlap, :overlap] = old.active[:overlap, :overlap]
        return grid

    @property
    def size(self) -> int:
        """Total number of cells (side squared)."""
        return self.side * self.side

    def index_to_pos(self, index: int) -> Tuple[int, int]:
        """Convert a flat row-major index into (x, y)."""
        return index % self.side, index // self.side

    def pos_to_index(self, x: int, y: int) -> int:
        """Convert (x, y) into a flat row-major index."""
        return y * self.side + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.side and 0 <= y < self.side

    def copy(self) -> 'Grid':
        """Create a deep copy of the grid."""
        return Grid(self.side, self.alive, self.marked, self.active, self.rects)

    def get(self, x: int, y: int) -> Optional[Cell]:
        """Get the cell at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)

        Returns:
            The cell, or None if the coordinates are off the grid
        """
        if not self.in_bounds(x, y):
            return None

        rect = self.rects[self.pos_to_index(x, y)] if self.rects is not None else None
        return Cell(
            alive=bool(self.alive[y, x]),
            marked=bool(self.marked[y, x]),
            active=bool(self.active[y, x]),
            rect=rect,
        )

    def set(self, x: int, y: int, patch: CellPatch) -> None:
        """Merge a partial update into the cell at coordinates.

        Args:
            x: X coordinate (column)
            y: Y coordinate (row)
            patch: Fields to overwrite; None fields are left unchanged

        Raises:
            IndexError: If coordinates are out of bounds
        """
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates ({x}, {y}) out of bounds for {self.side}x{self.side} grid")

        cell = patch.apply(self.get(x, y))
        self.alive[y, x] = cell.alive
        self.marked[y, x] = cell.marked
        self.active[y, x] = cell.active

    def set_index(self, index: int, patch: CellPatch) -> None:
        x, y = self.index_to_pos(index)
        self.set(x, y, patch)

    def neighbors(self, x: int, y: int) -> List[Optional[Cell]]:
        """Get the eight Moore-neighborhood cells of (x, y).

        Order: top-left, top, top-right, left, right, bottom-left, bottom,
        bottom-right. Off-grid positions are None.
        """
        return [self.get(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]

    def count_alive_neighbors(self, x: int, y: int) -> int:
        """Count alive neighbors using the Moore neighborhood.

        Cells outside the grid are never counted (no wrap-around).

        Returns:
            Number of alive neighbors (0-8)
        """
        count = 0
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and self.alive[ny, nx]:
                count += 1
        return count

    def clear_alive(self) -> None:
        """Reset every cell to dead; marked/active flags are untouched."""
        self.alive.fill(False)

    def clear_marked(self) -> None:
        self.marked.fill(False)

    def alive_indexes(self) -> List[int]:
        """Flat indexes of alive cells in ascending order."""
        return [int(i) for i in np.flatnonzero(self.alive)]

    def count_alive(self) -> int:
        """Count total number of alive cells."""
        return int(np.sum(self.alive))

    def count_marked(self) -> int:
        return int(np.sum(self.marked))

    def count_active(self) -> int:
        return int(np.sum(self.active))

    def cells(self) -> Iterator[Tuple[int, Cell]]:
        """Iterate over (index, cell) pairs in index order."""
        for index in range(self.size):
            x, y = self.index_to_pos(index)
            yield index, self.get(x, y)

    def __getitem__(self, key: Tuple[int, int]) -> Optional[Cell]:
        """Access a cell using grid[x, y] syntax."""
        x, y = key
        return self.get(x, y)

    def __len__(self) -> int:
        return self.size

    def __eq__(self, other: object) -> bool:
        """Check flag equality with another grid (geometry is ignored)."""
        if not isinstance(other, Grid):
            return False
        return (self.side == other.side and
                np.array_equal(self.alive, other.alive) and
                np.array_equal(self.marked, other.marked) and
                np.array_equal(self.active, other.active))

    def __str__(self) -> str:
        """String representation showing alive cells only."""
        alive_char = '█'
        dead_char = '░'

        lines = []
        for y in range(self.side):
            lines.append(''.join(alive_char if self.alive[y, x] else dead_char
                                 for x in range(self.side)))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (f"Grid({self.side}x{self.side}, alive={self.count_alive()}, "
                f"marked={self.count_marked()}, active={self.count_active()})")
