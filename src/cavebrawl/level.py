# src/cavebrawl/level.py
# Level: the world-side collaborator that owns rooms and executes door transitions.

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import DEFAULTS, GenerationConfig
from .errors import InvalidDimension, UnknownRoom
from .room import Room
from .tiles import NO_ROOM

logger = logging.getLogger(__name__)

XY = Tuple[int, int]


class Level:
    """
    Room graph plus traversal state.

    Rooms are generated lazily on first entry. Door tiles call
    request_transition(); the transition itself runs on the next update(), so
    a room never swaps itself out from under the caller mid-step.
    """

    def __init__(
        self,
        name: str,
        rooms: Iterable[Room] = (),
        *,
        cave_density: float = 0.45,
    ) -> None:
        self.name = name
        self.cave_density = cave_density
        self.rooms: Dict[int, Room] = {}
        self.current_room_id: Optional[int] = None
        self.last_room_id: int = NO_ROOM
        self.pending_room_id: Optional[int] = None
        for room in rooms:
            self.add_room(room)

    @classmethod
    def grid_layout(
        cls,
        name: str,
        columns: int,
        rows: int,
        width: int,
        height: int,
        *,
        cave_density: float = 0.45,
        config: GenerationConfig = DEFAULTS,
        seed: Optional[int] = None,
    ) -> "Level":
        """columns×rows rooms, each linked to its orthogonal neighbours; id = row*columns + col."""
        if columns <= 0 or rows <= 0:
            raise InvalidDimension(f"level layout must be positive, got {columns}x{rows}")
        level = cls(name, cave_density=cave_density)
        for r in range(rows):
            for c in range(columns):
                rid = r * columns + c
                connectivity = (
                    rid - columns if r > 0 else NO_ROOM,           # north
                    rid + 1 if c + 1 < columns else NO_ROOM,       # east
                    rid + columns if r + 1 < rows else NO_ROOM,    # south
                    rid - 1 if c > 0 else NO_ROOM,                 # west
                )
                room_seed = None if seed is None else seed + rid
                level.add_room(Room(rid, width, height, connectivity, config=config, seed=room_seed))
        return level

    def add_room(self, room: Room) -> None:
        room.level = self
        self.rooms[room.id] = room

    def room(self, room_id: int) -> Room:
        try:
            return self.rooms[room_id]
        except KeyError:
            raise UnknownRoom(room_id) from None

    @property
    def current_room(self) -> Optional[Room]:
        if self.current_room_id is None:
            return None
        return self.rooms[self.current_room_id]

    def enter(self, room_id: int, entity: Any = None) -> XY:
        """Make `room_id` current and return the entry pixel position."""
        room = self.room(room_id)
        if not room.is_generated():
            room.generate_room(self.cave_density)

        previous = self.current_room_id
        came_from = previous if previous is not None else NO_ROOM
        pos = room.compute_entry(came_from)

        if entity is not None:
            if previous is not None:
                self.rooms[previous].remove_entity(entity)
            room.add_entity(entity)

        self.last_room_id = came_from
        self.current_room_id = room_id
        logger.debug("level %s: entered room %s from %s at %s", self.name, room_id, came_from, pos)
        return pos

    def request_transition(self, room_id: int) -> None:
        if room_id not in self.rooms:
            raise UnknownRoom(room_id)
        self.pending_room_id = room_id

    def update(self, entity: Any = None) -> Optional[XY]:
        """Run a queued transition, if any; return the new entry position."""
        if self.pending_room_id is None:
            return None
        target, self.pending_room_id = self.pending_room_id, None
        return self.enter(target, entity)
