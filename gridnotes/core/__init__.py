"""Grid data model: cells, partial updates and geometry."""

from .cell import Cell, CellPatch, Rect
from .grid import Grid
from .layout import cell_side_and_zone, layout_cells

__all__ = [
    'Cell',
    'CellPatch',
    'Rect',
    'Grid',
    'cell_side_and_zone',
    'layout_cells',
]
