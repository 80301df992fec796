"""
Frontier: open and closed sets for one search.

The open set is a binary heap of (f, h, seq, node) entries. Updating a node
pushes a fresh entry and leaves the old one in the heap; stale entries are
recognised by their sequence number and skipped on extraction. Membership
lives in the SearchContext ``state`` array, so tests are O(1).
"""
from __future__ import annotations

import heapq
import itertools
from typing import TYPE_CHECKING, Dict, List, Tuple

from .config import STATE_CLOSED, STATE_NEW, STATE_OPEN

if TYPE_CHECKING:
    from .node import Node, SearchContext


class Frontier:
    """Open/closed bookkeeping ordered by f ascending, then h ascending."""

    def __init__(self, context: SearchContext) -> None:
        self._context = context
        self._heap: List[Tuple[float, float, int, Node]] = []
        # Latest heap sequence number per open node id
        self._latest: Dict[int, int] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._latest)

    def __bool__(self) -> bool:
        return bool(self._latest)

    def __contains__(self, node: Node) -> bool:
        return bool(self._context.state[node.id] == STATE_OPEN)

    def insert_or_update(self, node: Node) -> None:
        """Add ``node`` to the open set, or reprioritise it with its current costs."""
        ctx = self._context
        idx = node.id
        if ctx.state[idx] == STATE_CLOSED:
            raise ValueError(f"{node!r} is already closed")
        seq = next(self._counter)
        heapq.heappush(self._heap, (float(ctx.f[idx]), float(ctx.h[idx]), seq, node))
        self._latest[idx] = seq
        ctx.state[idx] = STATE_OPEN
        ctx.touched.add(idx)

    def extract_best(self) -> Node:
        """Remove and return the open node with the smallest f (ties: smallest h)."""
        while self._heap:
            _, _, seq, node = heapq.heappop(self._heap)
            if self._latest.get(node.id) != seq:
                continue
            del self._latest[node.id]
            self._context.state[node.id] = STATE_NEW
            return node
        raise IndexError("extract from an empty frontier")

    def close(self, node: Node) -> None:
        idx = node.id
        # Any heap entries left for this node become stale
        self._latest.pop(idx, None)
        self._context.state[idx] = STATE_CLOSED
        self._context.touched.add(idx)

    def is_closed(self, node: Node) -> bool:
        return bool(self._context.state[node.id] == STATE_CLOSED)
