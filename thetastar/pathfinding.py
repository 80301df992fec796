"""
Pathfinding utilities: implements any-angle Theta* search over a Grid.
"""
from __future__ import annotations

import logging
import math
import threading
from typing import List, NamedTuple, Optional, Sequence, Union

from .config import (
    DEFAULT_TILE_SIZE,
    DEFAULT_WALKABLE_VALUE,
    MAX_SEARCH_ITERATIONS,
)
from .errors import OutOfBoundsError, SearchLimitExceeded
from .frontier import Frontier
from .grid import Grid
from .los import has_line_of_sight
from .node import Node, SearchContext

logger = logging.getLogger(__name__)


class Waypoint(NamedTuple):
    """One path point, in world units when the grid has a tile size.

    Coordinates are ints unless a float tile size scales them.
    """

    x: Union[int, float]
    y: Union[int, float]


def heuristic(a: Node, b: Node) -> float:
    """Euclidean distance between two nodes, in grid units."""
    return math.hypot(b.x - a.x, b.y - a.y)


def path_length(path: Sequence[Sequence[float]]) -> float:
    """Total Euclidean length of a waypoint list."""
    return sum(
        math.hypot(b[0] - a[0], b[1] - a[1]) for a, b in zip(path, path[1:])
    )


class ThetaStar:
    """
    Theta* search engine bound to one grid.

    map_grid: 2D table of raw cell values, or an existing Grid to share.
    tile_size: world units per cell; search inputs and outputs use world units.
    walkable_value: raw value marking walkable cells (default: any nonzero).
    max_iterations: optional cap on node extractions per search.

    The engine owns one SearchContext guarded by a lock. Pass ``context`` to
    ``search`` (see ``new_context``) to run searches concurrently instead.
    """

    def __init__(
        self,
        map_grid: Union[Grid, Sequence[Sequence[int]]],
        tile_size: Optional[float] = DEFAULT_TILE_SIZE,
        walkable_value: Optional[int] = DEFAULT_WALKABLE_VALUE,
        max_iterations: Optional[int] = MAX_SEARCH_ITERATIONS,
    ) -> None:
        if isinstance(map_grid, Grid):
            self.grid = map_grid
        else:
            self.grid = Grid(map_grid, tile_size=tile_size, walkable_value=walkable_value)
        self.max_iterations = max_iterations
        self.context = self.new_context()
        self._lock = threading.Lock()

    def new_context(self) -> SearchContext:
        """Create a fresh SearchContext sized for this engine's grid."""
        return SearchContext(self.grid.size)

    def search(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        context: Optional[SearchContext] = None,
    ) -> Optional[List[Waypoint]]:
        """
        Find an any-angle path from (x1, y1) to (x2, y2).
        Returns the waypoints from start to target inclusive, or None if no path exists.
        Raises OutOfBoundsError if either endpoint lies outside the grid.
        """
        start = self._endpoint("start", x1, y1)
        target = self._endpoint("target", x2, y2)

        # A blocked endpoint can never be left or entered
        if not start.walkable or not target.walkable:
            logger.debug("No path: blocked endpoint %r -> %r", start, target)
            return None

        if context is not None:
            if context.size != self.grid.size:
                raise ValueError(
                    f"context holds {context.size} nodes, grid has {self.grid.size}"
                )
            return self._search(start, target, context)
        with self._lock:
            return self._search(start, target, self.context)

    def _endpoint(self, role: str, x: float, y: float) -> Node:
        # Infinite or NaN coordinates map to no cell at all
        if not (math.isfinite(x) and math.isfinite(y)):
            raise OutOfBoundsError(role, x, y)
        node = self.grid.cell_at(x, y)
        if node is None:
            raise OutOfBoundsError(role, x, y)
        return node

    def _search(self, start: Node, target: Node, ctx: SearchContext) -> Optional[List[Waypoint]]:
        try:
            return self._run(start, target, ctx)
        finally:
            # Leave no cost state behind, whatever the outcome
            ctx.reset()

    def _run(self, start: Node, target: Node, ctx: SearchContext) -> Optional[List[Waypoint]]:
        frontier = Frontier(ctx)
        ctx.mark_start(start, heuristic(start, target))
        frontier.insert_or_update(start)

        iterations = 0
        while frontier:
            iterations += 1
            if self.max_iterations is not None and iterations > self.max_iterations:
                logger.warning(
                    "Search %r -> %r aborted after %d iterations",
                    start,
                    target,
                    self.max_iterations,
                )
                raise SearchLimitExceeded(self.max_iterations)

            current = frontier.extract_best()
            if current is target:
                path = self.reconstruct_path(target, ctx)
                logger.debug(
                    "Path %r -> %r found: %d waypoints, %d iterations",
                    start,
                    target,
                    len(path),
                    iterations,
                )
                return path

            frontier.close(current)
            for neighbor in self.grid.neighbors(current):
                if frontier.is_closed(neighbor):
                    continue
                self.update_vertex(current, neighbor, target, ctx, frontier)

        logger.debug("No path %r -> %r after %d iterations", start, target, iterations)
        return None

    def update_vertex(
        self,
        current: Node,
        neighbor: Node,
        target: Node,
        ctx: SearchContext,
        frontier: Frontier,
    ) -> None:
        """
        Relax ``neighbor`` from ``current``. If the parent of ``current`` can see
        ``neighbor`` the path skips ``current`` and connects straight to that parent.
        """
        grandparent = self.grid.nodes[ctx.parent_id(current)]
        if has_line_of_sight(self.grid, grandparent, neighbor):
            via = grandparent
        else:
            via = current
        new_g = float(ctx.g[via.id]) + heuristic(via, neighbor)
        if new_g < ctx.g[neighbor.id]:
            ctx.set_costs(neighbor, new_g, heuristic(neighbor, target), via)
            frontier.insert_or_update(neighbor)

    def reconstruct_path(self, target: Node, ctx: SearchContext) -> List[Waypoint]:
        """Walk parent links from ``target`` back to the self-parented start."""
        nodes = [target]
        node = target
        while not ctx.is_start(node):
            node = self.grid.nodes[ctx.parent_id(node)]
            nodes.append(node)
            if len(nodes) > self.grid.size:
                raise RuntimeError(f"parent chain from {target!r} does not reach the start")
        nodes.reverse()
        return [Waypoint(*self.grid.to_world_coords(n.x, n.y)) for n in nodes]
