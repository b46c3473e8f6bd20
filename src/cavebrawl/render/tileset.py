# src/cavebrawl/render/tileset.py
from __future__ import annotations
import os
import pygame
from functools import lru_cache
from typing import Tuple

from ..tiles import fallback_color

ASSET_DIR = os.path.join("assets")
TILES_DIR = os.path.join(ASSET_DIR, "tiles")

def _path_candidates(texture: int) -> Tuple[str, ...]:
    return (
        os.path.join(TILES_DIR, f"{texture}.png"),
        os.path.join(TILES_DIR, f"tile_{texture}.png"),
        os.path.join(ASSET_DIR, f"{texture}.png"),
    )

class Tileset:
    """
    Texture collaborator for Room.render():
      - Resolves a texture selector to assets/tiles/<id>.png (or tile_<id>.png)
      - Falls back to a coloured square labelled with the selector
      - Returns pygame.Surface of exactly (tile_size, tile_size) from view()
    """
    def __init__(self, tile_size: int, font=None):
        self.tile_size = tile_size
        self.font = font or pygame.font.SysFont(None, max(10, tile_size // 2))

    @lru_cache(maxsize=512)
    def get(self, texture: int) -> pygame.Surface:
        # load once at native size; scale on demand in view()
        for p in _path_candidates(texture):
            if os.path.exists(p):
                return pygame.image.load(p).convert_alpha()
        img = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
        img.fill(fallback_color(texture))
        txt = self.font.render(str(texture), True, (0, 0, 0))
        r = txt.get_rect(center=(self.tile_size // 2, self.tile_size // 2))
        img.blit(txt, r)
        return img

    @lru_cache(maxsize=2048)
    def view(self, texture: int, size: int) -> pygame.Surface:
        base = self.get(texture)
        if base.get_size() == (size, size):
            return base
        return pygame.transform.scale(base, (size, size))

    def __call__(self, texture: int) -> pygame.Surface:
        return self.view(texture, self.tile_size)
