"""Neighbour-pattern resolvers ("autotilers").

A pattern maps the 3×3 signature around a cell to a texture selector. The
signature is row-major, index = (dy+1)*3 + (dx+1), with 0 = open, 1 = solid
and -1 (UNKNOWN) for neighbours outside the grid. Both patterns are total
over every 9-tuple of those values.
"""

from typing import Dict, Sequence, Tuple

from .grid import UNKNOWN
from .tiles import GROUND_BASE, WALL_BASE

OPEN = 0
SOLID = 1

# 8-bit neighbour directions
N = 1
NE = 2
E = 4
SE = 8
S = 16
SW = 32
W = 64
NW = 128

CENTER = 4

# (signature index, direction bit)
_NEIGHBOUR_BITS: Tuple[Tuple[int, int], ...] = (
    (1, N), (2, NE), (5, E), (8, SE), (7, S), (6, SW), (3, W), (0, NW),
)


def reduce_bitmask(raw: int) -> int:
    """Zero out diagonal bits when adjacent cardinals are absent."""
    reduced = raw
    if not (raw & N and raw & E):
        reduced &= ~NE
    if not (raw & S and raw & E):
        reduced &= ~SE
    if not (raw & S and raw & W):
        reduced &= ~SW
    if not (raw & N and raw & W):
        reduced &= ~NW
    return reduced


# The 47 distinct reduced masks, in ascending order; position = variant index.
BLOB_MASKS: Tuple[int, ...] = tuple(sorted({reduce_bitmask(m) for m in range(256)}))
_BLOB_INDEX: Dict[int, int] = {m: i for i, m in enumerate(BLOB_MASKS)}

WALL_FALLBACK = WALL_BASE + _BLOB_INDEX[0]      # isolated pillar
WALL_SOLID = WALL_BASE + _BLOB_INDEX[0xFF]      # fully enclosed


def _check(neighbourhood: Sequence[int]) -> None:
    if len(neighbourhood) != 9:
        raise ValueError(f"neighbourhood must have 9 values, got {len(neighbourhood)}")


def wall_bitmask(neighbourhood: Sequence[int]) -> int:
    # Anything but an explicit open cell connects: walls run on past the grid edge.
    raw = 0
    for i, bit in _NEIGHBOUR_BITS:
        if neighbourhood[i] != OPEN:
            raw |= bit
    return reduce_bitmask(raw)


class TilePattern:
    def select_variant(self, neighbourhood: Sequence[int]) -> int:
        raise NotImplementedError


class WallTilePattern(TilePattern):
    """Picks one of the 47 blob wall variants so adjacent walls join up.

    A neighbourhood whose centre is open is not a wall; it resolves to
    WALL_FALLBACK rather than an error.
    """

    def select_variant(self, neighbourhood: Sequence[int]) -> int:
        _check(neighbourhood)
        if neighbourhood[CENTER] == OPEN:
            return WALL_FALLBACK
        return WALL_BASE + _BLOB_INDEX[wall_bitmask(neighbourhood)]


class GroundTilePattern(TilePattern):
    """Ground shading keyed by which cardinal neighbours are solid.

    Rooms pass an all-zero signature, which yields GROUND_BASE. UNKNOWN
    neighbours never shade.
    """

    def select_variant(self, neighbourhood: Sequence[int]) -> int:
        _check(neighbourhood)
        mask = 0
        for bit, i in enumerate((1, 5, 7, 3)):  # N, E, S, W
            v = neighbourhood[i]
            if v != OPEN and v != UNKNOWN:
                mask |= 1 << bit
        return GROUND_BASE + mask
