# tests/test_render.py
import os

import pytest

from cavebrawl.errors import RoomNotGenerated
from cavebrawl.room import Room, Viewport
from cavebrawl.tiles import DOOR, SPAWNER, TileLayer

class RecordingSurface:
    def __init__(self):
        self.blits = []

    def blit(self, image, pos):
        self.blits.append((image, pos))

def make_room():
    room = Room(0, 20, 15, [5, -1, -1, -1], seed=21)
    room.generate_room(0.45)
    return room

def test_visible_range_clamps_to_layer():
    room = Room(0, 20, 15, [-1] * 4)
    cols, rows = room.visible_range(Viewport(0, 0, 64, 64))
    assert (cols, rows) == (range(0, 2), range(0, 2))
    cols, rows = room.visible_range(Viewport(-50, -50, 100, 100))
    assert (cols, rows) == (range(0, 2), range(0, 2))
    cols, rows = room.visible_range(Viewport(16, 16, 32, 32))
    assert (cols, rows) == (range(0, 2), range(0, 2))
    cols, rows = room.visible_range(Viewport(0, 0, 10000, 10000))
    assert (cols, rows) == (range(0, 24), range(0, 19))
    cols, rows = room.visible_range(Viewport(10000, 0, 64, 64))
    assert len(cols) == 0

def test_render_requires_generation():
    room = Room(0, 8, 8, [-1] * 4)
    with pytest.raises(RoomNotGenerated):
        room.render(RecordingSurface(), Viewport(0, 0, 64, 64), lambda t: t)

def test_layers_draw_in_order():
    room = make_room()
    order = [layer for layer, _, _, _ in room.visible_cells(Viewport(0, 0, 24 * 32, 19 * 32))]
    assert order == sorted(order)
    assert order[0] == TileLayer.BACKGROUND
    assert order[-1] == TileLayer.SPAWNER

def test_render_blits_every_visible_tile_with_offset():
    room = make_room()
    surface = RecordingSurface()
    drawn = room.render(surface, Viewport(0, 0, 24 * 32, 19 * 32), lambda t: t)
    total = sum(len(list(m.occupied())) for m in room.tile_layers)
    assert drawn == total == len(surface.blits)
    assert SPAWNER in [img for img, _ in surface.blits]
    assert DOOR in [img for img, _ in surface.blits]

    surface = RecordingSurface()
    room.render(surface, Viewport(32, 32, 32, 32), lambda t: t)
    # only cell (1, 1) is visible, drawn at the viewport origin
    assert {pos for _, pos in surface.blits} == {(0, 0)}

def test_snapshot_image_size(tmp_path):
    pytest.importorskip("PIL")
    from cavebrawl.render.snapshot import render_room_image, save_room_png, tile_image

    room = make_room()
    img = render_room_image(room, tile_size=4)
    assert img.size == (24 * 4, 19 * 4)
    assert tile_image(DOOR, 8, 8).size == (8, 8)

    out = save_room_png(room, str(tmp_path / "png" / "room.png"), tile_size=2)
    assert os.path.exists(out)

def test_tileset_fallback_surface(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame = pytest.importorskip("pygame")
    from cavebrawl.render.tileset import Tileset

    pygame.font.init()
    try:
        ts = Tileset(16)
        assert ts(DOOR).get_size() == (16, 16)
        assert ts.view(DOOR, 8).get_size() == (8, 8)
        assert ts(DOOR) is ts(DOOR)
    finally:
        pygame.font.quit()
