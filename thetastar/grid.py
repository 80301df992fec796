from __future__ import annotations

import logging
import math
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_TILE_SIZE, DEFAULT_WALKABLE_VALUE, NEIGHBOR_OFFSETS
from .errors import MalformedGridError
from .node import Node

logger = logging.getLogger(__name__)


class Grid:
    """Walkability map built from a 2D table of raw cell values, read-only after construction."""

    def __init__(
        self,
        map_grid: Sequence[Sequence[int]],
        tile_size: Optional[float] = DEFAULT_TILE_SIZE,
        walkable_value: Optional[int] = DEFAULT_WALKABLE_VALUE,
    ) -> None:
        if tile_size is not None and not tile_size > 0:
            raise ValueError(f"tile_size must be positive, got {tile_size!r}")
        self.tile_size = tile_size
        self.walkable_value = walkable_value

        try:
            rows = [list(row) for row in map_grid]
        except TypeError as exc:
            raise MalformedGridError(f"grid rows must be sequences: {exc}") from exc
        if not rows or not rows[0]:
            raise MalformedGridError("grid must have at least one row and one column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise MalformedGridError(
                    f"row {y} has {len(row)} cells, expected {width}"
                )

        self.map = rows
        self.height = len(rows)
        self.width = width
        self.size = self.width * self.height

        try:
            raw = np.asarray(rows)
        except ValueError as exc:
            raise MalformedGridError(f"grid cells must be scalars: {exc}") from exc
        if raw.ndim != 2:
            raise MalformedGridError(
                f"grid must be two-dimensional, got {raw.ndim} dimensions"
            )
        if walkable_value is not None:
            self.walkable = raw == walkable_value
        else:
            self.walkable = raw != 0

        # One node per cell, flat in row-major order so node.id == y * width + x
        self.nodes: List[Node] = [
            Node(x, y, self.walkable[y, x], y * self.width + x)
            for y in range(self.height)
            for x in range(self.width)
        ]
        logger.debug(
            "Built %dx%d grid, %d walkable cells, tile_size=%s",
            self.width,
            self.height,
            int(np.count_nonzero(self.walkable)),
            self.tile_size,
        )

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def node(self, x: int, y: int) -> Optional[Node]:
        """Return the node at grid (x, y), or None if out of bounds."""
        if not self.in_bounds(x, y):
            return None
        return self.nodes[y * self.width + x]

    def is_walkable(self, x: int, y: int) -> bool:
        """Return True if (x, y) is inside the grid and walkable."""
        if not self.in_bounds(x, y):
            return False
        return bool(self.walkable[y, x])

    def neighbors(self, node: Node) -> Iterator[Node]:
        """
        Yield the walkable cells adjacent to ``node``, in NEIGHBOR_OFFSETS order.
        A diagonal cell is only yielded when both cells it squeezes between are walkable.
        """
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = node.x + dx, node.y + dy
            if not self.is_walkable(nx, ny):
                continue
            if dx and dy and not (
                self.is_walkable(nx, node.y) and self.is_walkable(node.x, ny)
            ):
                continue
            yield self.nodes[ny * self.width + nx]

    def to_grid_coords(self, world_x: float, world_y: float) -> Tuple[int, int]:
        """Map world coordinates to grid indices (floor division by tile size)."""
        if self.tile_size is None:
            return math.floor(world_x), math.floor(world_y)
        return int(world_x // self.tile_size), int(world_y // self.tile_size)

    def to_world_coords(self, x: int, y: int) -> Tuple[float, float]:
        """Map grid indices back to world coordinates of the cell origin."""
        if self.tile_size is None:
            return x, y
        return x * self.tile_size, y * self.tile_size

    def cell_at(self, world_x: float, world_y: float) -> Optional[Node]:
        """Return the node containing world point (world_x, world_y), or None."""
        return self.node(*self.to_grid_coords(world_x, world_y))
