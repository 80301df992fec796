"""
Line-of-sight test between two grid cells.

Walks the Bresenham line from one cell to the other and checks that every
cell it touches exists and is walkable. When a step advances both axes at
once, the two cells beside the diagonal must each be walkable too, so a line
never slips between two blocked corners.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .grid import Grid
    from .node import Node


def has_line_of_sight(grid: Grid, a: Node, b: Node) -> bool:
    """Return True if every cell on the line from ``a`` to ``b`` is walkable."""
    x0, y0 = a.x, a.y
    x1, y1 = b.x, b.y
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        if not grid.is_walkable(x0, y0):
            return False
        if x0 == x1 and y0 == y1:
            return True
        e2 = 2 * err
        step_x = e2 >= dy and x0 != x1
        step_y = e2 <= dx and y0 != y1
        if step_x and step_y:
            # Diagonal step: both corner cells must be open
            if not grid.is_walkable(x0 + sx, y0) or not grid.is_walkable(x0, y0 + sy):
                return False
        if step_x:
            err += dy
            x0 += sx
        if step_y:
            err += dx
            y0 += sy
