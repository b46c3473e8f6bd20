from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Sequence, Tuple

from .errors import InvalidDimension, OutOfBoundsAccess

XY = Tuple[int, int]

# Neighbourhood value for cells outside the grid (distinct from 0 and 1)
UNKNOWN = -1

_NEIGHBOURS4 = ((1, 0), (-1, 0), (0, 1), (0, -1))

@dataclass
class Grid:
    """Row-major width×height buffer with bounds-checked access.

    Coordinates are (x, y) with (0, 0) top-left. Out-of-range access raises
    OutOfBoundsAccess; nothing is ever clamped.
    """
    width: int
    height: int
    buf: List[Any]
    default: Any = None

    @classmethod
    def empty(cls, width: int, height: int, default: Any = None) -> "Grid":
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"grid size must be positive, got {width}x{height}")
        return cls(width=width, height=height, buf=[default] * (width * height), default=default)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], default: Any = None) -> "Grid":
        height = len(rows)
        width = len(rows[0]) if height else 0
        if any(len(r) != width for r in rows):
            raise InvalidDimension("rows must all have the same length")
        g = cls.empty(width, height, default)
        g.buf = [v for row in rows for v in row]
        return g

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def idx(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBoundsAccess(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return y * self.width + x

    def get(self, x: int, y: int) -> Any:
        return self.buf[self.idx(x, y)]

    def set(self, x: int, y: int, v: Any) -> None:
        self.buf[self.idx(x, y)] = v

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        for y in range(self.height):
            row = y * self.width
            for x in range(self.width):
                yield x, y, self.buf[row + x]

    def count(self, predicate: Callable[[Any], bool]) -> int:
        return sum(1 for v in self.buf if predicate(v))

    def neighbours4(self, x: int, y: int) -> Iterator[XY]:
        for dx, dy in _NEIGHBOURS4:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def neighbourhood(self, x: int, y: int, unknown: Any = UNKNOWN) -> Tuple[Any, ...]:
        """3×3 signature centred on (x, y), index = (dy+1)*3 + (dx+1)."""
        out = []
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                nx, ny = x + dx, y + dy
                out.append(self.buf[ny * self.width + nx] if self.in_bounds(nx, ny) else unknown)
        return tuple(out)

    def copy(self) -> "Grid":
        return type(self)(width=self.width, height=self.height, buf=self.buf[:], default=self.default)

    def as_matrix(self) -> List[List[Any]]:
        return [self.buf[y * self.width:(y + 1) * self.width] for y in range(self.height)]


class TileMap(Grid):
    """One render layer; cells hold shared Tile references or None."""

    @classmethod
    def blank(cls, width: int, height: int) -> "TileMap":
        return cls.empty(width, height, None)

    def occupied(self) -> Iterator[Tuple[int, int, Any]]:
        for x, y, t in self.cells():
            if t is not None:
                yield x, y, t
