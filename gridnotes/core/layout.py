"""Cell geometry for a window of a given size.

The grid is laid out as a square anchored at the window's top-left corner.
Each cell occupies a square ``zone`` of ``min(width, height) / side`` pixels
and is drawn slightly smaller than its zone so neighbouring cells stay
visually separated.
"""

from typing import List, Tuple

from .cell import Rect


DEFAULT_PADDING_RATIO = 0.01


def cell_side_and_zone(bounds: Rect, side: int,
                       padding_ratio: float = DEFAULT_PADDING_RATIO) -> Tuple[float, float]:
    """Compute the drawn cell edge and the zone pitch for ``bounds``.

    Args:
        bounds: Window bounds
        side: Cells per grid edge
        padding_ratio: Padding on each side of a cell, as a fraction of the zone

    Returns:
        (cell_side, zone) in pixels
    """
    zone = min(bounds.w, bounds.h) / side
    padding = zone * padding_ratio
    return zone - padding * 2.0, zone


def layout_cells(bounds: Rect, side: int,
                 padding_ratio: float = DEFAULT_PADDING_RATIO) -> List[Rect]:
    """Lay out ``side * side`` cell rectangles in row-major order."""
    cell_side, zone = cell_side_and_zone(bounds, side, padding_ratio)

    rects = []
    for index in range(side * side):
        x, y = index % side, index // side
        rects.append(Rect(bounds.x + x * zone, bounds.y + y * zone, cell_side, cell_side))
    return rects
