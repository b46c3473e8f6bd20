#!/usr/bin/env python3
# Minimal interactive viewer for generated levels (no gameplay).
# - Arrow keys walk a marker through the current room; walls block
# - Stepping onto a door tile moves to the neighbouring room
# - Camera follows the marker; only visible tiles are drawn
# - R: regenerate the whole level with a new seed
# - 60 Hz fixed loop

import argparse, logging
import pygame
from cavebrawl.level import Level
from cavebrawl.render.tileset import Tileset
from cavebrawl.room import Viewport
from cavebrawl.tiles import TileLayer

SCREEN_TILES_W, SCREEN_TILES_H = 20, 12

KEY_STEPS = {
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
}

class Marker:
    """Stand-in entity: just a grid position."""
    def __init__(self):
        self.x, self.y = 0, 0

    def place_px(self, pos, tile):
        self.x, self.y = pos[0] // tile, pos[1] // tile

def build_level(args, seed):
    level = Level.grid_layout(
        "viewer", args.columns, args.rows, args.width, args.height,
        cave_density=args.density, seed=seed,
    )
    return level

def camera_for(room, marker, tile):
    full_w, full_h = room.grid_size
    vw, vh = SCREEN_TILES_W * tile, SCREEN_TILES_H * tile
    x = max(0, min(marker.x * tile + tile // 2 - vw // 2, full_w * tile - vw))
    y = max(0, min(marker.y * tile + tile // 2 - vh // 2, full_h * tile - vh))
    return Viewport(x, y, vw, vh)

def try_step(level, marker, dx, dy, tile):
    room = level.current_room
    nx, ny = marker.x + dx, marker.y + dy
    w, h = room.grid_size
    if not (0 <= nx < w and 0 <= ny < h):
        return
    fg = room.tile_at(TileLayer.FOREGROUND, nx, ny)
    if fg is not None and fg.blocks:
        return
    marker.x, marker.y = nx, ny
    if room.enter_cell(nx, ny) is not None:
        marker.place_px(level.update(marker), tile)

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--columns", type=int, default=3)
    ap.add_argument("--rows", type=int, default=3)
    ap.add_argument("--width", type=int, default=30, help="Room interior width")
    ap.add_argument("--height", type=int, default=20, help="Room interior height")
    ap.add_argument("--density", type=float, default=0.45)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    pygame.init()
    pygame.display.set_caption("cavebrawl viewer")
    clock = pygame.time.Clock()

    level = build_level(args, args.seed)
    tile = level.room(0).config.tile_width
    screen = pygame.display.set_mode((SCREEN_TILES_W * tile, SCREEN_TILES_H * tile))
    tiles = Tileset(tile)

    marker = Marker()
    marker.place_px(level.enter(0, marker), tile)

    seed = args.seed
    running = True
    while running:
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                if ev.key == pygame.K_ESCAPE:
                    running = False
                elif ev.key in KEY_STEPS:
                    try_step(level, marker, *KEY_STEPS[ev.key], tile)
                elif ev.key == pygame.K_r:
                    seed = None if seed is None else seed + 1000
                    level = build_level(args, seed)
                    marker = Marker()
                    marker.place_px(level.enter(0, marker), tile)

        room = level.current_room
        view = camera_for(room, marker, tile)

        screen.fill((0, 0, 0))
        room.render(screen, view, tiles)
        pygame.draw.rect(
            screen, (255, 60, 60),
            pygame.Rect(marker.x * tile - view.x + 4, marker.y * tile - view.y + 4, tile - 8, tile - 8),
        )

        pygame.display.set_caption(
            f"cavebrawl viewer - room {level.current_room_id}  from {level.last_room_id}  cell ({marker.x},{marker.y})"
        )
        pygame.display.flip()
        clock.tick(60)

    pygame.quit()

if __name__ == "__main__":
    main()
