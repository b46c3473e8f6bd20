# src/cavebrawl/mapgen/generator.py
# Canonical binary map generator: seed -> smooth -> door corridors -> connectivity.

import logging
from typing import List, Optional, Sequence

from ..config import DEFAULTS, GenerationConfig
from ..doors import Side, door_mouth
from ..errors import InvalidDimension
from ..grid import Grid
from ..rng import PMRandom
from .carve import BinaryCell, carve_doors, seed_grid, smooth
from .connect import (
    connect_mouths,
    ensure_open_cell,
    join_main_body,
    largest_region,
    prune_unreachable,
)

logger = logging.getLogger(__name__)


def check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise InvalidDimension(f"room interior must be positive, got {width}x{height}")


def check_density(density: float) -> None:
    if not 0.0 <= density <= 1.0:
        raise InvalidDimension(f"cave density must be within [0, 1], got {density}")


class MapGenerator:
    def __init__(self, config: GenerationConfig = DEFAULTS, rng: Optional[PMRandom] = None):
        self.config = config
        self.rng = rng or PMRandom.from_seed(None)

    def generate(self, width: int, height: int, density: float, doors: Sequence[bool]) -> Grid:
        """
        Return a width×height Grid of BinaryCell with a single open region that
        touches every door mouth flagged in `doors` (indexed by Side).
        """
        check_dimensions(width, height)
        check_density(density)
        if len(doors) != 4:
            raise InvalidDimension(f"expected 4 door flags, got {len(doors)}")

        cfg = self.config
        grid = seed_grid(width, height, cfg.fill_probability(density), self.rng)
        for _ in range(cfg.smoothing_passes):
            grid = smooth(grid, cfg.solid_threshold)

        # Corridors go in after smoothing so no pass can seal them again.
        sides = [Side(i) for i, flag in enumerate(doors) if flag]
        carve_doors(grid, sides, cfg.corridor_width)

        mouths = [door_mouth(side, width, height) for side in sides]
        connect_mouths(grid, mouths)
        if mouths:
            join_main_body(grid, mouths)
            anchors: List = mouths
        else:
            ensure_open_cell(grid)
            body = largest_region(grid)
            anchors = [min(body, key=lambda c: (c[1], c[0]))]
        pruned = prune_unreachable(grid, anchors)

        logger.debug(
            "generated %dx%d map density=%.2f doors=%s open=%d pruned=%d",
            width, height, density, [s.name for s in sides],
            grid.count(lambda v: v == BinaryCell.OPEN), pruned,
        )
        return grid
