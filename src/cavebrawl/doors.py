# Room geometry shared by carving, painting and entry placement.
#
# Two coordinate spaces exist:
#   interior  (ix, iy) in [0, width) × [0, height)      -- mapgen grids
#   grid      (x, y)   in [0, width+4) × [0, height+4)  -- room tile layers
# to_grid()/from_grid() are the only places the border offset is applied.

from enum import IntEnum
from typing import Iterator, List, Sequence, Tuple

from .tiles import NO_ROOM

XY = Tuple[int, int]

BORDER = 2
DOOR_HALF_WIDTH = 3   # door window spans centre±3 along its side

class Side(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def opposite(self) -> "Side":
        return Side((self + 2) % 4)

def to_grid(ix: int, iy: int) -> XY:
    return (ix + BORDER, iy + BORDER)

def from_grid(x: int, y: int) -> XY:
    return (x - BORDER, y - BORDER)

def bordered_size(width: int, height: int) -> XY:
    return (width + 2 * BORDER, height + 2 * BORDER)

def in_interior(x: int, y: int, width: int, height: int) -> bool:
    """True when grid coordinate (x, y) is inside the playable interior."""
    return BORDER <= x < width + BORDER and BORDER <= y < height + BORDER

def door_flags(connectivity: Sequence[int]) -> List[bool]:
    return [rid > NO_ROOM for rid in connectivity]

def door_line(side: Side, width: int, height: int) -> int:
    """Grid row (N/S) or column (E/W) that holds the side's door tiles."""
    if side == Side.NORTH:
        return BORDER - 1
    if side == Side.SOUTH:
        return height + BORDER
    if side == Side.WEST:
        return BORDER - 1
    return width + BORDER

def door_center(side: Side, width: int, height: int) -> int:
    """Grid column (N/S) or row (E/W) the door window is centred on."""
    full_w, full_h = bordered_size(width, height)
    return full_w // 2 if side in (Side.NORTH, Side.SOUTH) else full_h // 2

def _window_span(side: Side, width: int, height: int) -> range:
    # Clipped to the interior edge so ring corners never belong to two sides.
    center = door_center(side, width, height)
    extent = width if side in (Side.NORTH, Side.SOUTH) else height
    lo = max(BORDER, center - DOOR_HALF_WIDTH)
    hi = min(extent + BORDER, center + DOOR_HALF_WIDTH + 1)
    return range(lo, max(lo, hi))

def is_within_door_window(side: Side, x: int, y: int, width: int, height: int) -> bool:
    line = door_line(side, width, height)
    if side in (Side.NORTH, Side.SOUTH):
        return y == line and x in _window_span(side, width, height)
    return x == line and y in _window_span(side, width, height)

def door_window(side: Side, width: int, height: int) -> Iterator[XY]:
    """All grid cells in the side's door window, clipped to the interior span."""
    line = door_line(side, width, height)
    for offset in _window_span(side, width, height):
        if side in (Side.NORTH, Side.SOUTH):
            yield (offset, line)
        else:
            yield (line, offset)

def door_mouth(side: Side, width: int, height: int) -> XY:
    """Interior cell directly behind the door centre; corridors start here."""
    cx, cy = width // 2, height // 2
    if side == Side.NORTH:
        return (cx, 0)
    if side == Side.SOUTH:
        return (cx, height - 1)
    if side == Side.WEST:
        return (0, cy)
    return (width - 1, cy)

def entry_cell(side: Side, width: int, height: int, inset: int) -> XY:
    """Interior cell an entity appears on after walking through `side`'s door.

    Sits on the door's centre line, `inset` cells inside the interior edge, and
    never past the interior centre so it stays inside the carved corridor.
    """
    cx, cy = width // 2, height // 2
    if side == Side.NORTH:
        return (cx, min(inset, cy))
    if side == Side.SOUTH:
        return (cx, max(height - 1 - inset, cy))
    if side == Side.WEST:
        return (min(inset, cx), cy)
    return (max(width - 1 - inset, cx), cy)
