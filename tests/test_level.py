# tests/test_level.py
import pytest

from cavebrawl.doors import Side
from cavebrawl.errors import InvalidDimension, RoomError, UnknownRoom
from cavebrawl.level import Level
from cavebrawl.room import Room
from cavebrawl.tiles import NO_ROOM, TileLayer

def small_level(**kw):
    return Level.grid_layout("caves", 3, 2, 12, 10, seed=42, **kw)

def test_grid_layout_links_neighbours_both_ways():
    level = small_level()
    assert sorted(level.rooms) == [0, 1, 2, 3, 4, 5]
    assert level.room(0).connectivity == (NO_ROOM, 1, 3, NO_ROOM)
    assert level.room(4).connectivity == (1, 5, NO_ROOM, 3)
    for rid, room in level.rooms.items():
        for side, other in enumerate(room.connectivity):
            if other != NO_ROOM:
                assert level.room(other).connectivity[Side(side).opposite] == rid
        assert room.level is level

def test_grid_layout_rejects_empty():
    with pytest.raises(InvalidDimension):
        Level.grid_layout("x", 0, 2, 10, 10)

def test_unknown_room():
    level = small_level()
    with pytest.raises(UnknownRoom):
        level.room(17)
    with pytest.raises(UnknownRoom):
        level.request_transition(17)
    assert issubclass(UnknownRoom, RoomError) and issubclass(UnknownRoom, KeyError)

def test_rooms_generate_lazily():
    level = small_level()
    assert not any(r.is_generated() for r in level.rooms.values())
    pos = level.enter(0)
    assert level.room(0).is_generated()
    assert not level.room(1).is_generated()
    sx, sy = level.room(0).get_player_spawn()
    assert pos == (sx * 32, sy * 32)
    assert level.current_room is level.room(0)
    assert level.last_room_id == NO_ROOM

def test_door_tiles_name_their_level():
    level = small_level()
    level.enter(0)
    x, y = level.room(0).door_cells(Side.EAST)[0]
    tile = level.room(0).tile_at(TileLayer.FOREGROUND, x, y)
    assert tile.target_room == 1 and tile.target_level == "caves"

def test_transition_runs_on_update():
    level = small_level()
    who = object()
    level.enter(0, who)
    assert level.update(who) is None

    x, y = level.room(0).door_cells(Side.EAST)[0]
    assert level.room(0).enter_cell(x, y) == 1
    assert level.current_room_id == 0
    assert level.pending_room_id == 1

    pos = level.update(who)
    assert level.current_room_id == 1
    assert level.last_room_id == 0
    assert level.pending_room_id is None
    # arrived through room 1's west door
    assert pos == level.room(1).compute_entry(0)
    assert who in level.room(1).entities
    assert who not in level.room(0).entities

def test_going_back_keeps_first_room():
    level = small_level()
    level.enter(0)
    before = [m.as_matrix() for m in level.room(0).tile_layers]
    level.enter(1)
    level.enter(0)
    assert [m.as_matrix() for m in level.room(0).tile_layers] == before
    assert level.last_room_id == 1

def test_rooms_can_be_added_by_hand():
    a = Room(10, 8, 8, [-1, 11, -1, -1])
    b = Room(11, 8, 8, [-1, -1, -1, 10])
    level = Level("hand", [a, b], cave_density=0.3)
    assert a.level is level and b.level is level
    level.enter(10)
    assert level.enter(11) == b.compute_entry(10)
