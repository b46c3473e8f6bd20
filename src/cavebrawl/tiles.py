# Texture selectors and the tile variants painted onto room layers.
# Selectors are opaque ints; the renderer collaborator maps them to images.

from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Optional, Tuple

GROUND_BASE = 0      # 0..15  ground, keyed by cardinal solid mask
WALL_BASE = 100      # 100..146 wall, one per 47-blob variant
WALL_VARIANTS = 47
DOOR = 200
SPAWNER = 210

NO_ROOM = -1

class TileLayer(IntEnum):
    BACKGROUND = 0
    FOREGROUND = 1
    SPAWNER = 2
    MISC = 3

class TileKind(Enum):
    GROUND = "ground"
    WALL = "wall"
    DOOR = "door"
    SPAWNER = "spawner"

@dataclass(frozen=True)
class Tile:
    kind: TileKind
    texture: int
    target_room: int = NO_ROOM
    target_level: Optional[str] = None

    @property
    def is_door(self) -> bool:
        return self.kind is TileKind.DOOR

    @property
    def blocks(self) -> bool:
        return self.kind is TileKind.WALL

def is_ground_texture(texture: int) -> bool:
    return GROUND_BASE <= texture < GROUND_BASE + 16

def is_wall_texture(texture: int) -> bool:
    return WALL_BASE <= texture < WALL_BASE + WALL_VARIANTS

# Shared variants: every cell painted with the same texture holds the same object.

@lru_cache(maxsize=None)
def ground_tile(texture: int) -> Tile:
    return Tile(TileKind.GROUND, texture)

@lru_cache(maxsize=None)
def wall_tile(texture: int) -> Tile:
    return Tile(TileKind.WALL, texture)

@lru_cache(maxsize=None)
def door_tile(target_room: int, target_level: Optional[str] = None) -> Tile:
    if target_room < 0:
        raise ValueError("door tiles need a connected room id")
    return Tile(TileKind.DOOR, DOOR, target_room, target_level)

SPAWN_MARKER = Tile(TileKind.SPAWNER, SPAWNER)

def fallback_color(texture: int) -> Tuple[int, int, int, int]:
    if texture >= SPAWNER: return (255, 220,   0, 255)   # spawn marker
    if texture >= DOOR:    return (200, 120,  40, 255)   # doors
    if texture >= WALL_BASE:
        shade = 60 + (texture - WALL_BASE) % 8 * 6
        return (shade, shade, shade + 10, 255)           # walls
    return (120, 100, 80, 255)                            # ground
