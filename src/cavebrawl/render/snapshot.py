# src/cavebrawl/render/snapshot.py
# Still-image rendering of a generated room using Pillow.
# Works with tile images named "<id>.png" or "tile_<id>.png" under assets/tiles.

from __future__ import annotations

import os
from functools import lru_cache

from PIL import Image, ImageDraw

from ..room import Room, Viewport
from ..tiles import fallback_color

TILES_DIR = os.path.join("assets", "tiles")


@lru_cache(maxsize=1024)
def tile_image(texture: int, tile_w: int, tile_h: int) -> Image.Image:
    for name in (f"{texture}.png", f"tile_{texture}.png"):
        p = os.path.join(TILES_DIR, name)
        if os.path.exists(p):
            img = Image.open(p).convert("RGBA")
            if img.size != (tile_w, tile_h):
                img = img.resize((tile_w, tile_h), Image.NEAREST)
            return img
    # Fallback: coloured tile with a thin outline so variants stay readable
    img = Image.new("RGBA", (tile_w, tile_h), color=fallback_color(texture))
    ImageDraw.Draw(img).rectangle((0, 0, tile_w - 1, tile_h - 1), outline=(0, 0, 0, 80))
    return img


class _Canvas:
    """Adapter giving a PIL image the blit() surface contract Room.render() expects."""

    def __init__(self, image: Image.Image):
        self.image = image

    def blit(self, tile: Image.Image, pos) -> None:
        x0, y0 = pos
        self.image.paste(tile, (x0, y0, x0 + tile.width, y0 + tile.height), tile)


def render_room_image(room: Room, tile_size: int = 16) -> Image.Image:
    """All four layers of `room`, drawn at `tile_size` pixels per cell."""
    full_w, full_h = room.grid_size
    tw, th = room.config.tile_width, room.config.tile_height
    canvas = _Canvas(Image.new("RGBA", (full_w * tw, full_h * th), (0, 0, 0, 255)))
    room.render(canvas, Viewport(0, 0, full_w * tw, full_h * th), lambda t: tile_image(t, tw, th))
    if (tw, th) != (tile_size, tile_size):
        return canvas.image.resize((full_w * tile_size, full_h * tile_size), Image.NEAREST)
    return canvas.image


def save_room_png(room: Room, out_png: str, tile_size: int = 16) -> str:
    parent = os.path.dirname(out_png)
    if parent:
        os.makedirs(parent, exist_ok=True)
    render_room_image(room, tile_size).save(out_png)
    return out_png
