"""Render contract: turn a grid snapshot into draw commands.

The grid never touches pixels. A renderer asks for ``render_commands``
each frame and paints the returned rectangles in order: the base layer
colored by ``alive``, then a ``marked`` overlay and an ``active`` overlay,
both inset from the cell bounds.
"""

from dataclasses import dataclass
from typing import List, Tuple

from .core.cell import Rect
from .core.grid import Grid

Color = Tuple[int, int, int]

ALIVE_COLOR: Color = (255, 255, 255)
DEAD_COLOR: Color = (0, 0, 0)
MARKED_COLOR: Color = (255, 255, 0)
ACTIVE_COLOR: Color = (255, 0, 0)

LAYER_BASE = 0
LAYER_MARKED = 1
LAYER_ACTIVE = 2


@dataclass(frozen=True)
class DrawCommand:
    """Fill ``rect`` with ``color``; lower layers are painted first."""
    rect: Rect
    color: Color
    layer: int


def render_commands(grid: Grid, inset_ratio: float = 0.2) -> List[DrawCommand]:
    """Build the draw commands for every cell of ``grid``.

    The active overlay sits inside the marked overlay. Cells without
    geometry are skipped.

    Args:
        grid: Grid snapshot
        inset_ratio: Overlay inset as a fraction of the cell height

    Returns:
        Commands sorted by layer, then by cell index
    """
    commands: List[DrawCommand] = []
    for _, cell in grid.cells():
        rect = cell.rect
        if rect is None:
            continue

        commands.append(DrawCommand(rect, ALIVE_COLOR if cell.alive else DEAD_COLOR, LAYER_BASE))

        pad = rect.h * inset_ratio
        if cell.marked:
            commands.append(DrawCommand(rect.inset(pad), MARKED_COLOR, LAYER_MARKED))
        if cell.active:
            commands.append(DrawCommand(rect.inset(pad * 1.5), ACTIVE_COLOR, LAYER_ACTIVE))

    commands.sort(key=lambda c: c.layer)
    return commands


def render_text(grid: Grid) -> str:
    """Terminal rendering: '@' active, '*' collision, '#' alive, '+' marked, '.' empty."""
    chars = []
    for index, cell in grid.cells():
        if index and index % grid.side == 0:
            chars.append('\n')
        if cell.active:
            chars.append('@')
        elif cell.is_collision:
            chars.append('*')
        elif cell.alive:
            chars.append('#')
        elif cell.marked:
            chars.append('+')
        else:
            chars.append('.')
    return ''.join(chars)
