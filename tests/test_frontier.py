import pytest

from thetastar.frontier import Frontier
from thetastar.grid import Grid
from thetastar.node import SearchContext


@pytest.fixture
def setup():
    grid = Grid([[1, 1, 1], [1, 1, 1], [1, 1, 1]])
    ctx = SearchContext(grid.size)
    return grid, ctx, Frontier(ctx)


def test_extract_orders_by_f_then_h(setup):
    grid, ctx, frontier = setup
    origin = grid.node(0, 0)
    a, b, c = grid.node(1, 0), grid.node(2, 0), grid.node(0, 1)
    ctx.set_costs(a, 2.0, 1.0, origin)  # f=3, h=1
    ctx.set_costs(b, 1.0, 2.0, origin)  # f=3, h=2
    ctx.set_costs(c, 0.5, 0.5, origin)  # f=1
    for node in (b, a, c):
        frontier.insert_or_update(node)
    assert len(frontier) == 3
    assert frontier.extract_best() is c
    assert frontier.extract_best() is a
    assert frontier.extract_best() is b
    assert not frontier


def test_full_ties_keep_insertion_order(setup):
    grid, ctx, frontier = setup
    origin = grid.node(1, 1)
    nodes = [grid.node(0, 0), grid.node(2, 2), grid.node(1, 0)]
    for node in nodes:
        ctx.set_costs(node, 1.0, 1.0, origin)
        frontier.insert_or_update(node)
    assert [frontier.extract_best() for _ in nodes] == nodes


def test_update_reprioritises_and_skips_stale_entries(setup):
    grid, ctx, frontier = setup
    origin = grid.node(0, 0)
    a, b = grid.node(1, 1), grid.node(2, 2)
    ctx.set_costs(a, 4.0, 1.0, origin)
    ctx.set_costs(b, 2.0, 1.0, origin)
    frontier.insert_or_update(a)
    frontier.insert_or_update(b)
    # A cheaper route to a moves it ahead of b
    ctx.set_costs(a, 1.0, 1.0, origin)
    frontier.insert_or_update(a)
    assert len(frontier) == 2
    assert frontier.extract_best() is a
    assert frontier.extract_best() is b
    # Only the stale entry for a is left in the heap
    assert len(frontier) == 0
    with pytest.raises(IndexError):
        frontier.extract_best()


def test_membership_and_close(setup):
    grid, ctx, frontier = setup
    origin = grid.node(0, 0)
    a = grid.node(1, 0)
    assert a not in frontier
    ctx.set_costs(a, 1.0, 1.0, origin)
    frontier.insert_or_update(a)
    assert a in frontier
    assert not frontier.is_closed(a)
    node = frontier.extract_best()
    assert node not in frontier
    frontier.close(node)
    # Closed nodes are never open again
    assert frontier.is_closed(node)
    assert node not in frontier
    with pytest.raises(ValueError):
        frontier.insert_or_update(node)


def test_closing_open_node_drops_it(setup):
    grid, ctx, frontier = setup
    a = grid.node(2, 1)
    ctx.set_costs(a, 1.0, 1.0, grid.node(0, 0))
    frontier.insert_or_update(a)
    frontier.close(a)
    assert len(frontier) == 0
    with pytest.raises(IndexError):
        frontier.extract_best()


def test_state_is_cleared_by_context_reset(setup):
    grid, ctx, frontier = setup
    a = grid.node(1, 2)
    ctx.set_costs(a, 1.0, 1.0, grid.node(0, 0))
    frontier.insert_or_update(a)
    frontier.close(grid.node(0, 0))
    ctx.reset()
    assert ctx.is_clean()
    assert a not in frontier
    assert not frontier.is_closed(grid.node(0, 0))
