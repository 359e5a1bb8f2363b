"""Unit tests for core grid operations.

Tests grid construction, bounds-checked access, partial updates,
neighborhood queries and geometry rebuilds.
"""

import pytest
import numpy as np
from gridnotes.core.cell import Cell, CellPatch, Rect
from gridnotes.core.grid import Grid
from gridnotes.core.layout import cell_side_and_zone, layout_cells


class TestGridInitialization:
    """Test grid initialization and basic properties."""

    def test_side_must_be_positive(self):
        """Zero or negative side is rejected."""
        Grid(1)  # Should work

        with pytest.raises(ValueError, match="must be positive"):
            Grid(0)

        with pytest.raises(ValueError, match="must be positive"):
            Grid(-3)

    def test_initial_state_empty(self):
        """New grid has every flag cleared."""
        grid = Grid(8)
        assert len(grid) == 64
        assert grid.count_alive() == 0
        assert grid.count_marked() == 0
        assert grid.count_active() == 0

    def test_initial_state_from_array(self):
        """Grid can be initialized from numpy arrays."""
        alive = np.array([[True, False], [False, True]], dtype=bool)
        grid = Grid(2, alive=alive)

        assert grid.get(0, 0).alive is True
        assert grid.get(1, 0).alive is False
        assert grid.get(0, 1).alive is False
        assert grid.get(1, 1).alive is True

        # Grid keeps its own copy
        alive[0, 0] = False
        assert grid.get(0, 0).alive is True

    def test_initial_state_validation(self):
        """Invalid initial arrays raise ValueError."""
        with pytest.raises(ValueError, match="shape.*doesn't match"):
            Grid(4, alive=np.zeros((2, 2), dtype=bool))

        with pytest.raises(ValueError, match="must be boolean"):
            Grid(2, marked=np.array([[1, 0], [0, 1]], dtype=int))

        with pytest.raises(ValueError, match="Expected 4 rects"):
            Grid(2, rects=[Rect()])

    def test_index_position_bijection(self):
        """Row-major index maps to (x, y) and back."""
        grid = Grid(5)
        assert grid.index_to_pos(0) == (0, 0)
        assert grid.index_to_pos(4) == (4, 0)
        assert grid.index_to_pos(5) == (0, 1)
        assert grid.index_to_pos(24) == (4, 4)

        for index in range(grid.size):
            x, y = grid.index_to_pos(index)
            assert grid.pos_to_index(x, y) == index


class TestGridAccess:
    """Test bounds-checked reads and partial updates."""

    def test_in_bounds_get_returns_cell(self):
        """Every on-grid coordinate yields a Cell."""
        grid = Grid(6)
        for y in range(6):
            for x in range(6):
                assert isinstance(grid.get(x, y), Cell)

    def test_out_of_bounds_get_returns_none(self):
        """Off-grid coordinates, including negatives, yield None."""
        grid = Grid(6)
        for x, y in [(-1, 0), (0, -1), (6, 0), (0, 6), (-5, -5), (100, 2)]:
            assert grid.get(x, y) is None
            assert grid[x, y] is None

    def test_set_merges_only_supplied_fields(self):
        """A patch leaves unspecified flags unchanged."""
        grid = Grid(4)
        grid.set(1, 2, CellPatch(alive=True, marked=True))
        grid.set(1, 2, CellPatch(active=True))

        cell = grid.get(1, 2)
        assert cell.alive and cell.marked and cell.active

        grid.set(1, 2, CellPatch(alive=False))
        cell = grid.get(1, 2)
        assert cell.alive is False
        assert cell.marked is True
        assert cell.active is True

    def test_patch_apply(self):
        """Patches merge over a cell value and keep its geometry."""
        rect = Rect(1, 2, 3, 4)
        cell = Cell(alive=True, marked=False, active=True, rect=rect)

        merged = CellPatch(marked=True, active=False).apply(cell)

        assert merged == Cell(alive=True, marked=True, active=False, rect=rect)
        assert CellPatch().apply(cell) == cell

    def test_collision_flag(self):
        grid = Grid(3)
        grid.set(0, 0, CellPatch(alive=True, marked=True))
        grid.set(1, 0, CellPatch(alive=True))
        grid.set(2, 0, CellPatch(marked=True))

        assert grid.get(0, 0).is_collision
        assert not grid.get(1, 0).is_collision
        assert not grid.get(2, 0).is_collision

    def test_empty_patch_is_noop(self):
        grid = Grid(3)
        grid.set(0, 0, CellPatch(alive=True))
        before = grid.copy()

        grid.set(0, 0, CellPatch())
        assert grid == before

    def test_set_out_of_bounds_raises(self):
        """Writes are in-bounds only."""
        grid = Grid(4)
        with pytest.raises(IndexError):
            grid.set(4, 0, CellPatch(alive=True))
        with pytest.raises(IndexError):
            grid.set(0, -1, CellPatch(alive=True))

    def test_copy_is_independent(self):
        grid = Grid(4)
        clone = grid.copy()
        clone.set(0, 0, CellPatch(alive=True))

        assert grid.get(0, 0).alive is False
        assert grid != clone

    def test_clear_alive_keeps_other_flags(self):
        """Clearing the field only kills cells."""
        grid = Grid(4)
        grid.set(1, 1, CellPatch(alive=True, marked=True, active=True))
        grid.set(2, 3, CellPatch(alive=True))

        grid.clear_alive()
        assert grid.count_alive() == 0
        assert grid.get(1, 1).marked is True
        assert grid.get(1, 1).active is True

    def test_alive_indexes_ascending(self):
        grid = Grid(4)
        for x, y in [(3, 3), (0, 1), (2, 0)]:
            grid.set(x, y, CellPatch(alive=True))

        assert grid.alive_indexes() == [2, 4, 15]

    def test_cells_iterates_in_index_order(self):
        grid = Grid(3)
        grid.set(2, 1, CellPatch(marked=True))

        indexes = [index for index, _ in grid.cells()]
        assert indexes == list(range(9))
        assert [index for index, cell in grid.cells() if cell.marked] == [5]


class TestNeighbors:
    """Test Moore neighborhood queries."""

    def test_neighbor_order(self):
        """Neighbors come back top-left, top, top-right, left, right, bottom row."""
        grid = Grid(3)
        expected_order = [(0, 0), (1, 0), (2, 0), (0, 1), (2, 1), (0, 2), (1, 2), (2, 2)]

        for position, (x, y) in enumerate(expected_order):
            grid.clear_alive()
            grid.set(x, y, CellPatch(alive=True))

            neighbors = grid.neighbors(1, 1)
            assert len(neighbors) == 8
            alive_positions = [i for i, cell in enumerate(neighbors) if cell.alive]
            assert alive_positions == [position]

    def test_corner_neighbors_off_grid(self):
        """Off-grid neighbors are None."""
        grid = Grid(3)
        neighbors = grid.neighbors(0, 0)

        assert [i for i, cell in enumerate(neighbors) if cell is None] == [0, 1, 2, 3, 5]
        assert all(neighbors[i] is not None for i in (4, 6, 7))

    def test_count_excludes_center(self):
        """Center cell is not counted as its own neighbor."""
        grid = Grid(3)
        grid.set(1, 1, CellPatch(alive=True))
        assert grid.count_alive_neighbors(1, 1) == 0

    def test_count_all_around(self):
        grid = Grid(3)
        grid.alive[:] = True
        assert grid.count_alive_neighbors(1, 1) == 8

    def test_count_never_wraps(self):
        """Edges see only on-grid neighbors."""
        grid = Grid(3)
        grid.alive[:] = True

        assert grid.count_alive_neighbors(0, 0) == 3
        assert grid.count_alive_neighbors(1, 0) == 5
        assert grid.count_alive_neighbors(2, 2) == 3

        # Opposite edge must not leak in
        grid = Grid(4)
        grid.set(3, 0, CellPatch(alive=True))
        assert grid.count_alive_neighbors(0, 0) == 0


class TestRebuild:
    """Test geometry rebuilds."""

    def test_rebuild_preserves_flags(self):
        """All flags survive a geometry change."""
        rng = np.random.default_rng(7)
        old = Grid(8,
                   alive=rng.random((8, 8)) < 0.5,
                   marked=rng.random((8, 8)) < 0.3,
                   active=rng.random((8, 8)) < 0.1)

        rects = layout_cells(Rect(0, 0, 400, 300), 8)
        rebuilt = Grid.rebuild_preserving(old, rects=rects)

        assert rebuilt == old
        assert rebuilt.get(1, 0).rect == rects[1]

    def test_rebuild_different_side(self):
        """Positions missing from the old grid default to cleared flags."""
        old = Grid(2)
        old.alive[:] = True
        old.marked[:] = True

        rebuilt = Grid.rebuild_preserving(old, side=3)
        assert rebuilt.count_alive() == 4
        assert rebuilt.get(2, 2) == Cell()
        assert rebuilt.get(1, 1).marked is True


class TestLayout:
    """Test cell geometry for window bounds."""

    def test_side_and_zone(self):
        cell_side, zone = cell_side_and_zone(Rect(0, 0, 640, 320), 32)
        assert zone == pytest.approx(10.0)
        assert cell_side == pytest.approx(9.8)

    def test_layout_row_major(self):
        rects = layout_cells(Rect(0, 0, 320, 320), 32)
        assert len(rects) == 32 * 32
        assert rects[0].x == 0 and rects[0].y == 0
        assert rects[33].x == pytest.approx(10.0)
        assert rects[33].y == pytest.approx(10.0)

    def test_inset(self):
        rect = Rect(10, 10, 20, 20).inset(4)
        assert rect == Rect(14, 14, 12, 12)


def test_memory_usage_verification():
    """A 32x32 grid stepped through many copies stays small."""
    import psutil
    import os

    process = psutil.Process(os.getpid())
    memory_before = process.memory_info().rss / 1024 / 1024  # MB

    grid = Grid(32)
    for _ in range(100):
        grid = grid.copy()
        grid.alive[:] = np.random.random((32, 32)) < 0.5

    memory_after = process.memory_info().rss / 1024 / 1024  # MB
    assert memory_after - memory_before < 50, f"Memory grew by {memory_after - memory_before:.1f}MB"
