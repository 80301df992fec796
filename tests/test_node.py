import math

import numpy as np

from thetastar.config import NO_PARENT
from thetastar.node import Node, SearchContext


def test_node_repr():
    n = Node(3, 4, True, 11)
    r = repr(n)
    assert "x=3" in r and "y=4" in r
    assert "walkable=True" in r
    assert n.id == 11


def test_context_starts_clean():
    ctx = SearchContext(6)
    assert ctx.size == 6
    assert ctx.is_clean()
    assert np.all(np.isinf(ctx.g))
    assert np.all(ctx.parent == NO_PARENT)


def test_set_costs_records_parent_and_f():
    ctx = SearchContext(4)
    a = Node(0, 0, True, 0)
    b = Node(1, 0, True, 1)
    ctx.set_costs(b, 1.5, 2.0, a)
    assert ctx.g[1] == 1.5
    assert ctx.h[1] == 2.0
    assert math.isclose(ctx.f[1], 3.5)
    assert ctx.parent_id(b) == a.id
    assert not ctx.is_start(b)
    assert ctx.touched == {1}
    assert not ctx.is_clean()


def test_start_is_its_own_parent():
    ctx = SearchContext(4)
    start = Node(0, 0, True, 0)
    ctx.mark_start(start, 3.0)
    assert ctx.is_start(start)
    assert ctx.g[0] == 0.0
    assert ctx.f[0] == 3.0


def test_reset_clears_only_touched_nodes():
    ctx = SearchContext(5)
    nodes = [Node(i, 0, True, i) for i in range(5)]
    ctx.mark_start(nodes[0], 4.0)
    ctx.set_costs(nodes[3], 3.0, 1.0, nodes[0])
    ctx.state[3] = 1
    # Two nodes were touched
    assert ctx.reset() == 2
    assert ctx.is_clean()
    # Resetting a clean context is a no-op
    assert ctx.reset() == 0
