# src/cavebrawl/mapgen/rooms.py
# Binary map -> wall mask + single spawn cell.

from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

from ..doors import Side, door_mouth
from ..errors import InvalidDimension, NoReachableSpawn
from ..grid import Grid
from .carve import BinaryCell

XY = Tuple[int, int]

WALL = 1
FLOOR = 0


class RoomGenerator:
    """
    Derives render-side data from a finished binary map.

    Spawn policy: the open cell with the greatest walking distance
    (4-neighbour BFS) from every door mouth, ties broken row-major. With no
    doors, the open cell closest (Manhattan) to the interior centre, ties
    broken row-major. Deterministic for a given map and door set.
    """

    def __init__(self, binary: Grid, doors: Sequence[bool]):
        if len(doors) != 4:
            raise InvalidDimension(f"expected 4 door flags, got {len(doors)}")
        self.binary = binary
        self.doors = [bool(d) for d in doors]

    def derive_foreground_mask(self) -> Grid:
        """1 where SOLID (wall), 0 where OPEN; interior-sized."""
        mask = Grid.empty(self.binary.width, self.binary.height, WALL)
        mask.buf = [WALL if v == BinaryCell.SOLID else FLOOR for v in self.binary.buf]
        return mask

    def derive_spawn(self, mask: Optional[Grid] = None) -> XY:
        mask = mask if mask is not None else self.derive_foreground_mask()
        mouths = [
            door_mouth(Side(i), mask.width, mask.height)
            for i, flag in enumerate(self.doors) if flag
        ]
        if mouths:
            # A sealed mouth means the map broke its corridor guarantee.
            starts = [m for m in mouths if mask.get(*m) == FLOOR]
            dist = _walk_distances(mask, starts) if len(starts) == len(mouths) else {}
            if dist:
                return max(dist, key=lambda c: (dist[c], -c[1], -c[0]))
        elif any(v == FLOOR for v in mask.buf):
            cx, cy = mask.width // 2, mask.height // 2
            floors = [(x, y) for x, y, v in mask.cells() if v == FLOOR]
            return min(floors, key=lambda c: (abs(c[0] - cx) + abs(c[1] - cy), c[1], c[0]))
        raise NoReachableSpawn(
            f"no reachable open cell in {mask.width}x{mask.height} map (doors={self.doors})"
        )


def _walk_distances(mask: Grid, starts: List[XY]) -> Dict[XY, int]:
    dist: Dict[XY, int] = {s: 0 for s in starts}
    q = deque(starts)
    while q:
        x, y = q.popleft()
        d = dist[(x, y)]
        for n in mask.neighbours4(x, y):
            if n not in dist and mask.get(*n) == FLOOR:
                dist[n] = d + 1
                q.append(n)
    return dist
