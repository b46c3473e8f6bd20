# tests/test_roomgen.py
import pytest

from cavebrawl.errors import InvalidDimension, NoReachableSpawn
from cavebrawl.grid import Grid
from cavebrawl.mapgen.carve import BinaryCell, carve_corridor, carve_rect, empty_solid_grid
from cavebrawl.mapgen.rooms import FLOOR, WALL, RoomGenerator
from cavebrawl.doors import Side

O, X = BinaryCell.OPEN, BinaryCell.SOLID

def test_mask_marks_solid_as_wall():
    g = Grid.from_rows([
        [O, X],
        [X, O],
    ])
    mask = RoomGenerator(g, [False] * 4).derive_foreground_mask()
    assert mask.as_matrix() == [[FLOOR, WALL], [WALL, FLOOR]]
    # the binary map itself is left alone
    assert g.get(0, 0) == O

def test_door_flags_must_have_four_entries():
    with pytest.raises(InvalidDimension):
        RoomGenerator(empty_solid_grid(3, 3), [True])

def test_spawn_is_farthest_from_door():
    g = empty_solid_grid(9, 9)
    carve_corridor(g, Side.NORTH, 1)    # x=4, y=0..4
    carve_rect(g, 4, 4, 8, 4)           # turn east
    carve_rect(g, 8, 4, 8, 8)           # then south to the corner
    spawn = RoomGenerator(g, [True, False, False, False]).derive_spawn()
    assert spawn == (8, 8)

def test_spawn_ties_break_row_major():
    g = empty_solid_grid(9, 5)
    carve_corridor(g, Side.NORTH, 1)    # x=4, y=0..2
    carve_rect(g, 0, 2, 8, 2)           # symmetric arms to both sides
    spawn = RoomGenerator(g, [True, False, False, False]).derive_spawn()
    assert spawn == (0, 2)

def test_spawn_without_doors_is_nearest_centre():
    g = empty_solid_grid(7, 7)
    carve_rect(g, 0, 0, 1, 1)
    carve_rect(g, 3, 4, 3, 4)
    assert RoomGenerator(g, [False] * 4).derive_spawn() == (3, 4)

def test_spawn_is_deterministic():
    g = empty_solid_grid(11, 11)
    for side in Side:
        carve_corridor(g, side, 3)
    rg = RoomGenerator(g, [True] * 4)
    assert rg.derive_spawn() == rg.derive_spawn()

def test_fully_solid_map_has_no_spawn():
    with pytest.raises(NoReachableSpawn):
        RoomGenerator(empty_solid_grid(5, 5), [False] * 4).derive_spawn()
    with pytest.raises(NoReachableSpawn):
        RoomGenerator(empty_solid_grid(5, 5), [True, False, False, False]).derive_spawn()

def test_sealed_door_mouth_has_no_spawn():
    g = empty_solid_grid(9, 9)
    carve_corridor(g, Side.NORTH, 1)
    # east door flagged but its corridor was never carved
    with pytest.raises(NoReachableSpawn):
        RoomGenerator(g, [True, True, False, False]).derive_spawn()
