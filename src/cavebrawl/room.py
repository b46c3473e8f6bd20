# src/cavebrawl/room.py
# Room orchestrator: owns four tile layers, connectivity, spawn and entry state.

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

from .autotile import WALL_SOLID, GroundTilePattern, TilePattern, WallTilePattern
from .config import DEFAULTS, GenerationConfig
from .doors import (
    Side,
    bordered_size,
    door_flags,
    door_window,
    entry_cell,
    from_grid,
    in_interior,
    is_within_door_window,
    to_grid,
)
from .errors import (
    InvalidDimension,
    NoReachableSpawn,
    RoomAlreadyGenerated,
    RoomNotGenerated,
)
from .grid import Grid, TileMap
from .mapgen.generator import MapGenerator, check_density, check_dimensions
from .mapgen.rooms import WALL, RoomGenerator
from .rng import PMRandom
from .tiles import (
    NO_ROOM,
    SPAWN_MARKER,
    Tile,
    TileLayer,
    door_tile,
    ground_tile,
    wall_tile,
)

logger = logging.getLogger(__name__)

XY = Tuple[int, int]

_BLANK_NEIGHBOURHOOD = (0,) * 9


class Viewport(NamedTuple):
    """Pixel rectangle; pygame.Rect satisfies the same attribute contract."""
    x: int
    y: int
    width: int
    height: int


class Room:
    def __init__(
        self,
        room_id: int,
        width: int,
        height: int,
        connectivity: Sequence[int],
        *,
        level: Any = None,
        config: GenerationConfig = DEFAULTS,
        seed: Optional[int] = None,
    ) -> None:
        check_dimensions(width, height)
        if len(connectivity) != 4:
            raise InvalidDimension(f"connectivity needs 4 entries (N, E, S, W), got {len(connectivity)}")
        self.id = room_id
        self.level = level
        self.width = width
        self.height = height
        self.config = config
        self.seed = seed
        # Any negative id means "no neighbour"; normalise to NO_ROOM.
        self.connectivity: Tuple[int, ...] = tuple(int(r) if r >= 0 else NO_ROOM for r in connectivity)

        self.tile_layers: List[TileMap] = self._blank_layers()
        self.generated = False
        self.player_spawn: Optional[XY] = None
        self.start_pos: Optional[XY] = None
        self.entities: List[Any] = []

    # ---- Layers ----
    def _blank_layers(self) -> List[TileMap]:
        full_w, full_h = bordered_size(self.width, self.height)
        return [TileMap.blank(full_w, full_h) for _ in TileLayer]

    @property
    def grid_size(self) -> XY:
        return bordered_size(self.width, self.height)

    def tile_at(self, layer: TileLayer, x: int, y: int) -> Optional[Tile]:
        """Tile on `layer` at grid (x, y), or None; raises OutOfBoundsAccess off-layer."""
        return self.tile_layers[TileLayer(layer)].get(x, y)

    def is_generated(self) -> bool:
        return self.generated

    def get_player_spawn(self) -> XY:
        if not self.generated:
            raise RoomNotGenerated(f"room {self.id} has no spawn before generation")
        return self.player_spawn

    @property
    def doors(self) -> List[bool]:
        return door_flags(self.connectivity)

    # ---- Generation ----
    def generate_room(self, cave_density: float) -> None:
        """
        Run MapGenerator -> RoomGenerator and paint Background, Foreground and
        Spawner. On NoReachableSpawn, retry with lower density up to
        config.max_attempts times. Layers are committed only on success.
        """
        if self.generated:
            raise RoomAlreadyGenerated(f"room {self.id} is already generated")
        check_density(cave_density)

        rng = PMRandom.from_seed(self.seed)
        density = cave_density
        for attempt in range(1, self.config.max_attempts + 1):
            try:
                layers, spawn = self._build_layers(density, rng)
                break
            except NoReachableSpawn:
                if attempt == self.config.max_attempts:
                    logger.error("room %s: no reachable spawn after %d attempts", self.id, attempt)
                    raise
                lowered = max(0.0, density - self.config.density_step)
                logger.warning(
                    "room %s: no reachable spawn at density %.2f (attempt %d); retrying at %.2f",
                    self.id, density, attempt, lowered,
                )
                density = lowered

        self.tile_layers = layers
        self.player_spawn = spawn
        self.generated = True
        logger.debug("room %s generated: spawn=%s doors=%s", self.id, spawn, self.doors)

    def _build_layers(self, density: float, rng: PMRandom) -> Tuple[List[TileMap], XY]:
        doors = self.doors
        binary = MapGenerator(self.config, rng).generate(self.width, self.height, density, doors)
        rg = RoomGenerator(binary, doors)
        mask = rg.derive_foreground_mask()
        spawn = rg.derive_spawn(mask)

        layers = self._blank_layers()
        self._paint_background(layers[TileLayer.BACKGROUND], GroundTilePattern())
        self._paint_foreground(layers[TileLayer.FOREGROUND], mask, WallTilePattern())
        spawn_xy = to_grid(*spawn)
        layers[TileLayer.SPAWNER].set(*spawn_xy, SPAWN_MARKER)
        return layers, spawn_xy

    def _paint_background(self, layer: TileMap, pattern: TilePattern) -> None:
        tile = ground_tile(pattern.select_variant(_BLANK_NEIGHBOURHOOD))
        for iy in range(self.height):
            for ix in range(self.width):
                layer.set(*to_grid(ix, iy), tile)

    def _paint_foreground(self, layer: TileMap, mask: Grid, pattern: TilePattern) -> None:
        perimeter = wall_tile(WALL_SOLID)
        level_name = getattr(self.level, "name", None)
        for x, y, _ in layer.cells():
            if not in_interior(x, y, self.width, self.height):
                layer.set(x, y, self._border_tile(x, y, perimeter, level_name))
                continue
            ix, iy = from_grid(x, y)
            if mask.get(ix, iy) == WALL:
                layer.set(x, y, wall_tile(pattern.select_variant(mask.neighbourhood(ix, iy))))

    def _border_tile(self, x: int, y: int, perimeter: Tile, level_name: Optional[str]) -> Tile:
        for side in Side:
            target = self.connectivity[side]
            if target != NO_ROOM and is_within_door_window(side, x, y, self.width, self.height):
                return door_tile(target, level_name)
        return perimeter

    # ---- Connectivity / entry ----
    def door_index(self, room_id: int) -> int:
        """Side index whose neighbour is `room_id`, or -1."""
        if room_id < 0:
            return NO_ROOM
        for i, rid in enumerate(self.connectivity):
            if rid == room_id:
                return i
        return NO_ROOM

    def door_cells(self, side: Side) -> List[XY]:
        """Grid cells on `side` currently holding door tiles."""
        layer = self.tile_layers[TileLayer.FOREGROUND]
        return [
            (x, y) for x, y in door_window(Side(side), self.width, self.height)
            if layer.get(x, y) is not None and layer.get(x, y).is_door
        ]

    def compute_entry(self, entered_from_room_id: int = NO_ROOM) -> XY:
        """
        Pixel position an entity should appear at when arriving from
        `entered_from_room_id`: just inside the matching door, or the player
        spawn for a fresh entry (-1 or an id this room is not connected to).
        """
        door = self.door_index(entered_from_room_id)
        if door == NO_ROOM:
            gx, gy = self.get_player_spawn()
        else:
            gx, gy = to_grid(*entry_cell(Side(door), self.width, self.height, self.config.entry_inset))
        self.start_pos = (gx * self.config.tile_width, gy * self.config.tile_height)
        return self.start_pos

    load = compute_entry

    def enter_cell(self, x: int, y: int) -> Optional[int]:
        """Report a door crossing at grid (x, y) to the level; return the target id."""
        tile = self.tile_at(TileLayer.FOREGROUND, x, y)
        if tile is None or not tile.is_door:
            return None
        if self.level is not None:
            self.level.request_transition(tile.target_room)
        return tile.target_room

    # ---- Entities ----
    def add_entity(self, entity: Any) -> None:
        if entity not in self.entities:
            self.entities.append(entity)

    def remove_entity(self, entity: Any) -> None:
        if entity in self.entities:
            self.entities.remove(entity)

    # ---- Rendering ----
    def visible_range(self, viewport: Any) -> Tuple[range, range]:
        """Grid columns and rows whose pixel bounds intersect `viewport`, clamped."""
        tw, th = self.config.tile_width, self.config.tile_height
        full_w, full_h = self.grid_size
        x_start = max(0, viewport.x // tw)
        x_end = min(full_w, -(-(viewport.x + viewport.width) // tw))
        y_start = max(0, viewport.y // th)
        y_end = min(full_h, -(-(viewport.y + viewport.height) // th))
        return range(x_start, max(x_start, x_end)), range(y_start, max(y_start, y_end))

    def visible_cells(self, viewport: Any) -> Iterator[Tuple[TileLayer, int, int, Tile]]:
        """Non-empty cells inside `viewport`, Background first, Misc last."""
        if not self.generated:
            raise RoomNotGenerated(f"room {self.id} must be generated before rendering")
        cols, rows = self.visible_range(viewport)
        for layer in TileLayer:
            tiles = self.tile_layers[layer]
            for y in rows:
                for x in cols:
                    tile = tiles.get(x, y)
                    if tile is not None:
                        yield layer, x, y, tile

    def render(self, surface: Any, viewport: Any, textures: Callable[[int], Any]) -> int:
        """Blit every visible tile onto `surface`; return the number drawn."""
        tw, th = self.config.tile_width, self.config.tile_height
        drawn = 0
        for _layer, x, y, tile in self.visible_cells(viewport):
            surface.blit(textures(tile.texture), (x * tw - viewport.x, y * th - viewport.y))
            drawn += 1
        return drawn

    def __repr__(self) -> str:
        return (
            f"Room(id={self.id}, size={self.width}x{self.height}, "
            f"connectivity={list(self.connectivity)}, generated={self.generated})"
        )
