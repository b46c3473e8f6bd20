# src/cavebrawl/mapgen/connect.py
# Connectivity guarantees over a carved binary grid (4-neighbour flood fills).

import logging
from collections import deque
from typing import Iterable, List, Optional, Set, Tuple

from ..grid import Grid
from .carve import BinaryCell, carve_rect

logger = logging.getLogger(__name__)

XY = Tuple[int, int]


def is_open(grid: Grid, x: int, y: int) -> bool:
    return grid.get(x, y) == BinaryCell.OPEN


def flood(grid: Grid, starts: Iterable[XY]) -> Set[XY]:
    """Open cells reachable from any open start cell."""
    seen: Set[XY] = set()
    q = deque()
    for s in starts:
        if s not in seen and is_open(grid, *s):
            seen.add(s)
            q.append(s)
    while q:
        x, y = q.popleft()
        for n in grid.neighbours4(x, y):
            if n not in seen and is_open(grid, *n):
                seen.add(n)
                q.append(n)
    return seen


def open_regions(grid: Grid) -> List[Set[XY]]:
    """All open components, in row-major order of their first cell."""
    visited: Set[XY] = set()
    regions: List[Set[XY]] = []
    for x, y, v in grid.cells():
        if v != BinaryCell.OPEN or (x, y) in visited:
            continue
        comp = flood(grid, [(x, y)])
        visited |= comp
        regions.append(comp)
    return regions


def largest_region(grid: Grid) -> Set[XY]:
    best: Set[XY] = set()
    for comp in open_regions(grid):
        if len(comp) > len(best):
            best = comp
    return best


def carve_tunnel(grid: Grid, a: XY, b: XY) -> int:
    """Single-width L tunnel: horizontal along a's row, then vertical along b's column."""
    (ax, ay), (bx, by) = a, b
    opened = carve_rect(grid, ax, ay, bx, ay)
    opened += carve_rect(grid, bx, ay, bx, by)
    return opened


def _nearest(cells: Iterable[XY], target: XY) -> Optional[XY]:
    tx, ty = target
    # sorted() keeps ties deterministic: row-major first
    ordered = sorted(cells, key=lambda c: (abs(c[0] - tx) + abs(c[1] - ty), c[1], c[0]))
    return ordered[0] if ordered else None


def connect_mouths(grid: Grid, mouths: List[XY]) -> int:
    """Tunnel every door mouth not reachable from the first one back to it."""
    tunnels = 0
    if len(mouths) < 2:
        return tunnels
    reached = flood(grid, mouths[:1])
    for m in mouths[1:]:
        if m in reached:
            continue
        logger.warning("door mouth %s cut off from %s; carving tunnel", m, mouths[0])
        carve_tunnel(grid, m, mouths[0])
        tunnels += 1
        reached = flood(grid, mouths[:1])
    return tunnels


def join_main_body(grid: Grid, anchors: List[XY]) -> bool:
    """Tunnel the largest open region to the anchors' region if they are apart."""
    body = largest_region(grid)
    if not body or not anchors:
        return False
    reached = flood(grid, anchors)
    if body & reached:
        return False
    center = (grid.width // 2, grid.height // 2)
    target = center if center in reached else anchors[0]
    source = _nearest(body, target)
    logger.debug("joining cave body (%d cells) via %s -> %s", len(body), source, target)
    carve_tunnel(grid, source, target)
    return True


def prune_unreachable(grid: Grid, anchors: List[XY]) -> int:
    """Fill every open cell not connected to the anchors; return cells filled."""
    keep = flood(grid, anchors)
    filled = 0
    for x, y, v in grid.cells():
        if v == BinaryCell.OPEN and (x, y) not in keep:
            grid.set(x, y, BinaryCell.SOLID)
            filled += 1
    return filled


def ensure_open_cell(grid: Grid) -> bool:
    """Open a small chamber at the centre when no open cell exists."""
    if any(v == BinaryCell.OPEN for v in grid.buf):
        return False
    cx, cy = grid.width // 2, grid.height // 2
    logger.warning("map fully solid; opening centre chamber at (%d, %d)", cx, cy)
    carve_rect(grid, cx - 1, cy - 1, cx + 1, cy + 1)
    return True
