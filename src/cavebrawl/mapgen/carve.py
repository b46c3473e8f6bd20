# src/cavebrawl/mapgen/carve.py
# Cave carving primitives: random seeding, cellular smoothing, door corridors.
# All coordinates are interior (0-based, no room border).

from enum import IntEnum
from typing import Iterable

from ..doors import Side, door_mouth
from ..grid import Grid
from ..rng import PMRandom


class BinaryCell(IntEnum):
    OPEN = 0
    SOLID = 1


def empty_solid_grid(width: int, height: int) -> Grid:
    """Return a fresh width×height grid filled with SOLID."""
    return Grid.empty(width, height, BinaryCell.SOLID)


def seed_grid(width: int, height: int, fill: float, rng: PMRandom) -> Grid:
    """Each cell independently SOLID with probability `fill`, OPEN otherwise."""
    grid = empty_solid_grid(width, height)
    grid.buf = [BinaryCell.SOLID if rng.chance(fill) else BinaryCell.OPEN for _ in grid.buf]
    return grid


def solid_neighbours(grid: Grid, x: int, y: int) -> int:
    # Out-of-bounds neighbours count as SOLID so caves close up at the edges.
    count = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if not grid.in_bounds(nx, ny) or grid.buf[ny * grid.width + nx] == BinaryCell.SOLID:
                count += 1
    return count


def smooth(grid: Grid, threshold: int) -> Grid:
    """One cellular automata pass: SOLID iff solid neighbours exceed `threshold`."""
    out = grid.copy()
    for x, y, _ in grid.cells():
        out.buf[y * grid.width + x] = (
            BinaryCell.SOLID if solid_neighbours(grid, x, y) > threshold else BinaryCell.OPEN
        )
    return out


def carve_rect(grid: Grid, x0: int, y0: int, x1: int, y1: int) -> int:
    """Open every in-bounds cell of the inclusive rectangle; return cells changed."""
    opened = 0
    for y in range(min(y0, y1), max(y0, y1) + 1):
        for x in range(min(x0, x1), max(x0, x1) + 1):
            if grid.in_bounds(x, y) and grid.get(x, y) == BinaryCell.SOLID:
                grid.set(x, y, BinaryCell.OPEN)
                opened += 1
    return opened


def carve_corridor(grid: Grid, side: Side, corridor_width: int) -> int:
    """
    Straight corridor from the side's door mouth to the interior centre,
    `corridor_width` cells wide and centred on the door's centre line.
    Corridors from different sides therefore always meet at the centre.
    """
    mx, my = door_mouth(side, grid.width, grid.height)
    cx, cy = grid.width // 2, grid.height // 2
    lo = (corridor_width - 1) // 2
    hi = corridor_width - 1 - lo
    if side in (Side.NORTH, Side.SOUTH):
        return carve_rect(grid, mx - lo, my, mx + hi, cy)
    return carve_rect(grid, mx, my - lo, cx, my + hi)


def carve_doors(grid: Grid, sides: Iterable[Side], corridor_width: int) -> int:
    return sum(carve_corridor(grid, side, corridor_width) for side in sides)
