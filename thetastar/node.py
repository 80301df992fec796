"""
Node module: per-cell identity and the search state kept for each cell.
"""
from __future__ import annotations

import logging
from typing import Set

import numpy as np

from .config import COST_UNKNOWN, NO_PARENT, STATE_NEW

logger = logging.getLogger(__name__)


class Node:
    """One grid cell. Coordinates, walkability and id never change."""

    def __init__(self, x: int, y: int, walkable: bool, node_id: int) -> None:
        self.x = x
        self.y = y
        self.walkable = bool(walkable)
        # Flat index (y * width + x) into SearchContext arrays
        self.id = node_id

    def __repr__(self):
        return f"<Node x={self.x} y={self.y} walkable={self.walkable}>"


class SearchContext:
    """
    Cost, parent and frontier state for every node of a grid, indexed by node id.

    A context belongs to one search at a time. Every node whose state changes
    is recorded in ``touched`` so that ``reset`` only rewrites those entries.
    A node is the start of the current search iff its parent id is its own id.
    """

    def __init__(self, size: int) -> None:
        self.size = size
        self.g = np.full(size, COST_UNKNOWN, dtype=np.float64)
        self.h = np.full(size, COST_UNKNOWN, dtype=np.float64)
        self.f = np.full(size, COST_UNKNOWN, dtype=np.float64)
        self.parent = np.full(size, NO_PARENT, dtype=np.int64)
        self.state = np.full(size, STATE_NEW, dtype=np.uint8)
        self.touched: Set[int] = set()

    def set_costs(self, node: Node, g: float, h: float, parent: Node) -> None:
        """Record a better path to ``node`` through ``parent``."""
        idx = node.id
        self.touched.add(idx)
        self.g[idx] = g
        self.h[idx] = h
        self.f[idx] = g + h
        self.parent[idx] = parent.id

    def mark_start(self, node: Node, h: float) -> None:
        # Self-parent sentinel: the walk-back stops here
        self.set_costs(node, 0.0, h, node)

    def is_start(self, node: Node) -> bool:
        return int(self.parent[node.id]) == node.id

    def parent_id(self, node: Node) -> int:
        return int(self.parent[node.id])

    def reset(self) -> int:
        """Return touched nodes to the unknown state; returns how many were reset."""
        count = len(self.touched)
        if count:
            idx = np.fromiter(self.touched, dtype=np.int64, count=count)
            self.g[idx] = COST_UNKNOWN
            self.h[idx] = COST_UNKNOWN
            self.f[idx] = COST_UNKNOWN
            self.parent[idx] = NO_PARENT
            self.state[idx] = STATE_NEW
            self.touched.clear()
        logger.debug("Reset %d nodes", count)
        return count

    def is_clean(self) -> bool:
        """
        True when no node carries state from a previous search.
        Callers reusing a context can check this between searches.
        """
        return (
            not self.touched
            and bool(np.all(np.isinf(self.g)))
            and bool(np.all(self.parent == NO_PARENT))
            and bool(np.all(self.state == STATE_NEW))
        )
