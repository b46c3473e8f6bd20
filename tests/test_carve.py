# tests/test_carve.py
from cavebrawl.doors import Side, door_mouth
from cavebrawl.grid import Grid
from cavebrawl.mapgen.carve import (
    BinaryCell, carve_corridor, carve_rect, empty_solid_grid, seed_grid, smooth, solid_neighbours,
)
from cavebrawl.mapgen.connect import (
    carve_tunnel, connect_mouths, ensure_open_cell, flood, join_main_body,
    largest_region, open_regions, prune_unreachable,
)
from cavebrawl.rng import PMRandom

O, X = BinaryCell.OPEN, BinaryCell.SOLID

def open_cells(grid):
    return {(x, y) for x, y, v in grid.cells() if v == O}

def test_seed_extremes():
    rng = PMRandom.from_seed(5)
    assert all(v == O for v in seed_grid(10, 8, 0.0, rng).buf)
    assert all(v == X for v in seed_grid(10, 8, 1.0, rng).buf)

def test_out_of_bounds_counts_as_solid():
    g = Grid.empty(3, 3, O)
    assert solid_neighbours(g, 0, 0) == 5
    assert solid_neighbours(g, 1, 1) == 0
    assert solid_neighbours(g, 1, 0) == 3

def test_smoothing_removes_isolated_noise():
    g = Grid.empty(7, 7, O)
    g.set(3, 3, X)
    out = smooth(g, threshold=4)
    assert out.get(3, 3) == O
    # the input grid is untouched
    assert g.get(3, 3) == X

def test_smoothing_fills_isolated_hole():
    g = Grid.empty(7, 7, X)
    g.set(3, 3, O)
    assert smooth(g, threshold=4).get(3, 3) == X

def test_carve_rect_clips_and_counts():
    g = empty_solid_grid(4, 4)
    assert carve_rect(g, -2, -2, 1, 1) == 4
    assert carve_rect(g, 0, 0, 1, 1) == 0

def test_corridors_reach_centre_from_every_side():
    for side in Side:
        g = empty_solid_grid(20, 15)
        carve_corridor(g, side, 3)
        reach = flood(g, [door_mouth(side, 20, 15)])
        assert (10, 7) in reach
        assert reach == open_cells(g)

def test_corridor_width():
    g = empty_solid_grid(20, 15)
    carve_corridor(g, Side.NORTH, 3)
    assert {x for x, y in open_cells(g) if y == 0} == {9, 10, 11}

def test_regions_and_largest():
    g = Grid.from_rows([
        [O, X, O, O],
        [X, X, O, O],
        [O, X, X, X],
    ])
    regions = open_regions(g)
    assert [len(r) for r in regions] == [1, 4, 1]
    assert largest_region(g) == {(2, 0), (3, 0), (2, 1), (3, 1)}

def test_tunnel_joins_points():
    g = empty_solid_grid(10, 10)
    carve_tunnel(g, (1, 1), (8, 6))
    assert (8, 6) in flood(g, [(1, 1)])

def test_connect_mouths_tunnels_cut_off_doors():
    g = empty_solid_grid(12, 9)
    mouths = [door_mouth(Side.NORTH, 12, 9), door_mouth(Side.WEST, 12, 9)]
    for m in mouths:
        g.set(*m, O)
    assert connect_mouths(g, mouths) == 1
    assert mouths[1] in flood(g, mouths[:1])

def test_small_pockets_are_pruned():
    g = empty_solid_grid(12, 9)
    carve_corridor(g, Side.NORTH, 3)
    carve_rect(g, 0, 6, 3, 8)       # separate cave pocket, smaller than the corridor
    carve_rect(g, 11, 8, 11, 8)     # single stray cell
    anchors = [door_mouth(Side.NORTH, 12, 9)]
    assert join_main_body(g, anchors) is False
    assert prune_unreachable(g, anchors) == 13
    assert len(open_regions(g)) == 1
    assert (11, 8) not in open_cells(g)

def test_large_cave_body_is_joined_not_pruned():
    g = empty_solid_grid(12, 9)
    carve_corridor(g, Side.NORTH, 3)   # x 5..7, y 0..4
    carve_rect(g, 0, 6, 11, 8)         # 36-cell cave below, sealed off by row 5
    anchors = [door_mouth(Side.NORTH, 12, 9)]
    assert join_main_body(g, anchors) is True
    assert prune_unreachable(g, anchors) == 0
    assert (0, 8) in flood(g, anchors)

def test_ensure_open_cell_on_solid_map():
    g = empty_solid_grid(5, 5)
    assert ensure_open_cell(g)
    assert (2, 2) in open_cells(g)
    assert not ensure_open_cell(g)
