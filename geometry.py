"""
Grid geometry: cardinal directions, signed deltas, addresses and the Grid container.

Coordinates are row-major with y increasing downward (terminal convention), so
North is (0, -1) and South is (0, 1).
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Generic, Iterable, Iterator, TypeVar


Tile = TypeVar("Tile")
Other = TypeVar("Other")


# =============================================================================
# Deltas and Addresses
# =============================================================================


@dataclass(frozen=True)
class GridDelta:
    """A signed displacement between two grid addresses."""

    dx: int
    dy: int

    UP: ClassVar[GridDelta]
    DOWN: ClassVar[GridDelta]
    LEFT: ClassVar[GridDelta]
    RIGHT: ClassVar[GridDelta]
    UP_RIGHT: ClassVar[GridDelta]
    UP_LEFT: ClassVar[GridDelta]
    DOWN_RIGHT: ClassVar[GridDelta]
    DOWN_LEFT: ClassVar[GridDelta]

    CARDINALS: ClassVar[tuple[GridDelta, ...]]
    DIAGONALS: ClassVar[tuple[GridDelta, ...]]
    CARDINALS_AND_DIAGONALS: ClassVar[tuple[GridDelta, ...]]

    def inverted(self) -> GridDelta:
        return GridDelta(-self.dx, -self.dy)

    @staticmethod
    def vector_between(start: GridAddress, end: GridAddress) -> GridDelta:
        """
        Signed displacement that moves `start` onto `end`.

        The magnitude is taken as an absolute difference first and the sign
        applied from the comparison, so no intermediate value is ever negative
        in unsigned terms.
        """
        dx_abs = abs(end.x - start.x)
        dy_abs = abs(end.y - start.y)
        dx = dx_abs if end.x > start.x else -dx_abs
        dy = dy_abs if end.y > start.y else -dy_abs
        return GridDelta(dx, dy)


GridDelta.UP = GridDelta(0, -1)
GridDelta.DOWN = GridDelta(0, 1)
GridDelta.LEFT = GridDelta(-1, 0)
GridDelta.RIGHT = GridDelta(1, 0)
GridDelta.UP_RIGHT = GridDelta(1, -1)
GridDelta.UP_LEFT = GridDelta(-1, -1)
GridDelta.DOWN_RIGHT = GridDelta(1, 1)
GridDelta.DOWN_LEFT = GridDelta(-1, 1)

GridDelta.CARDINALS = (GridDelta.UP, GridDelta.RIGHT, GridDelta.DOWN, GridDelta.LEFT)
GridDelta.DIAGONALS = (
    GridDelta.UP_RIGHT,
    GridDelta.DOWN_RIGHT,
    GridDelta.DOWN_LEFT,
    GridDelta.UP_LEFT,
)
GridDelta.CARDINALS_AND_DIAGONALS = (
    GridDelta.UP,
    GridDelta.UP_RIGHT,
    GridDelta.RIGHT,
    GridDelta.DOWN_RIGHT,
    GridDelta.DOWN,
    GridDelta.DOWN_LEFT,
    GridDelta.LEFT,
    GridDelta.UP_LEFT,
)


@dataclass(frozen=True, order=True)
class GridAddress:
    """
    An unsigned (x, y) coordinate into a grid.

    Validity against a particular grid's bounds is checked at lookup time,
    not here.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"GridAddress coordinates must be non-negative, got ({self.x}, {self.y})")

    def checked_add(self, delta: GridDelta | Cardinal) -> GridAddress | None:
        """Translate by `delta`, or return None if either axis would go below zero."""
        if isinstance(delta, Cardinal):
            delta = delta.delta
        x = self.x + delta.dx
        y = self.y + delta.dy
        if x < 0 or y < 0:
            return None
        return GridAddress(x, y)

    def manhattan(self, other: GridAddress) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __str__(self) -> str:
        return f"{self.x},{self.y}"


# =============================================================================
# Cardinal Directions
# =============================================================================


class Cardinal(Enum):
    """One of the four cardinal directions. Iteration order is clockwise from North."""

    NORTH = "N"  # Up (decreasing y)
    EAST = "E"  # Right (increasing x)
    SOUTH = "S"  # Down (increasing y)
    WEST = "W"  # Left (decreasing x)

    def turn_right(self) -> Cardinal:
        return _TURN_RIGHT[self]

    def turn_left(self) -> Cardinal:
        return _TURN_LEFT[self]

    def opposite(self) -> Cardinal:
        return _OPPOSITE[self]

    @property
    def delta(self) -> GridDelta:
        return _DELTAS[self]

    @staticmethod
    def between(start: GridAddress, end: GridAddress) -> Cardinal | None:
        """
        Direction of travel from `start` toward `end`.

        Horizontal offset wins over vertical; returns None if the addresses
        coincide.
        """
        if start.x > end.x:
            return Cardinal.WEST
        if start.x < end.x:
            return Cardinal.EAST
        if start.y > end.y:
            return Cardinal.NORTH
        if start.y < end.y:
            return Cardinal.SOUTH
        return None


_TURN_RIGHT = {
    Cardinal.NORTH: Cardinal.EAST,
    Cardinal.EAST: Cardinal.SOUTH,
    Cardinal.SOUTH: Cardinal.WEST,
    Cardinal.WEST: Cardinal.NORTH,
}
_TURN_LEFT = {after: before for before, after in _TURN_RIGHT.items()}
_OPPOSITE = {cardinal: _TURN_RIGHT[_TURN_RIGHT[cardinal]] for cardinal in Cardinal}
_DELTAS = {
    Cardinal.NORTH: GridDelta.UP,
    Cardinal.EAST: GridDelta.RIGHT,
    Cardinal.SOUTH: GridDelta.DOWN,
    Cardinal.WEST: GridDelta.LEFT,
}

_BITS = {
    Cardinal.NORTH: 0b1000,
    Cardinal.EAST: 0b0100,
    Cardinal.SOUTH: 0b0010,
    Cardinal.WEST: 0b0001,
}

# Light "Box Drawing" characters; each set direction is a segment leaving the
# center of the character cell.
_BOX_DRAWING = {
    0b1111: "┼",
    0b1110: "├",  # missing west
    0b1101: "┴",  # missing south
    0b1011: "┤",  # missing east
    0b0111: "┬",  # missing north
    0b1100: "└",  # north+east
    0b0110: "┌",  # east+south
    0b0011: "┐",  # south+west
    0b1001: "┘",  # west+north
    0b1010: "│",  # north+south
    0b0101: "─",  # east+west
    0b1000: "╵",
    0b0100: "╶",
    0b0010: "╷",
    0b0001: "╴",
    0b0000: " ",
}

UNKNOWN_GLYPH = "?"


@dataclass(frozen=True)
class CardinalSet:
    """An immutable set of cardinal directions stored as a 4-bit mask (N=8, E=4, S=2, W=1)."""

    bits: int = 0

    @staticmethod
    def of(*cardinals: Cardinal) -> CardinalSet:
        bits = 0
        for cardinal in cardinals:
            bits |= _BITS[cardinal]
        return CardinalSet(bits)

    def add(self, cardinal: Cardinal) -> CardinalSet:
        return CardinalSet(self.bits | _BITS[cardinal])

    def __or__(self, other: Cardinal | CardinalSet) -> CardinalSet:
        if isinstance(other, Cardinal):
            return self.add(other)
        return CardinalSet(self.bits | other.bits)

    def contains(self, cardinal: Cardinal) -> bool:
        return bool(self.bits & _BITS[cardinal])

    def __contains__(self, cardinal: object) -> bool:
        return isinstance(cardinal, Cardinal) and self.contains(cardinal)

    def __iter__(self) -> Iterator[Cardinal]:
        return (cardinal for cardinal in Cardinal if self.contains(cardinal))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def is_empty(self) -> bool:
        return self.bits == 0

    def to_box_drawing_char(self) -> str:
        """
        Render as a box-drawing glyph with one segment per contained direction.

        Total over the 4-bit domain; UNKNOWN_GLYPH only appears if `bits` was
        constructed outside 0..15.
        """
        return _BOX_DRAWING.get(self.bits, UNKNOWN_GLYPH)


# =============================================================================
# Grid Container
# =============================================================================


class GridIndexError(IndexError):
    """Raised when an address the caller asserted was valid lies outside the grid."""


class Grid(Generic[Tile]):
    """
    A rectangular 2D grid of tiles, stored as rows of equal width.

    Two access tiers:
    - get/get_at/set/set_at return None/False for out-of-range addresses
    - grid[address] raises GridIndexError, for callers that already know the
      address is in bounds

    Row widths are not revalidated; whoever builds the rows keeps them equal.
    """

    def __init__(self, rows: list[list[Tile]]) -> None:
        self.rows = rows

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Tile]]) -> Grid[Tile]:
        return cls([list(row) for row in rows])

    @classmethod
    def new_default(cls, width: int, height: int, default: Tile | Callable[[], Tile]) -> Grid[Tile]:
        """
        Build a width x height grid filled with `default`.

        A callable default is invoked once per tile, so mutable tiles are never
        shared between addresses.
        """
        if callable(default):
            factory = default
        else:
            factory = lambda: default  # noqa: E731
        return cls([[factory() for _ in range(width)] for _ in range(height)])

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def get(self, x: int, y: int) -> Tile | None:
        """
        Tile at (x, y), or None if out of range.

        None is ambiguous for grids whose tiles may themselves be None; use
        contains() with grid[address] there.
        """
        if x < 0 or y < 0 or y >= len(self.rows):
            return None
        row = self.rows[y]
        if x >= len(row):
            return None
        return row[x]

    def get_at(self, address: GridAddress) -> Tile | None:
        return self.get(address.x, address.y)

    def set(self, x: int, y: int, tile: Tile) -> bool:
        """Replace the tile at (x, y). Returns False if the address is out of range."""
        if x < 0 or y < 0 or y >= len(self.rows) or x >= len(self.rows[y]):
            return False
        self.rows[y][x] = tile
        return True

    def set_at(self, address: GridAddress, tile: Tile) -> bool:
        return self.set(address.x, address.y, tile)

    def contains(self, address: GridAddress) -> bool:
        return 0 <= address.y < len(self.rows) and 0 <= address.x < len(self.rows[address.y])

    def __getitem__(self, address: GridAddress) -> Tile:
        if not self.contains(address):
            raise GridIndexError(f"Illegal address for grid: {address!r} (size {self.width}x{self.height})")
        return self.rows[address.y][address.x]

    def __setitem__(self, address: GridAddress, tile: Tile) -> None:
        if not self.set_at(address, tile):
            raise GridIndexError(f"Illegal address for grid: {address!r} (size {self.width}x{self.height})")

    def addresses(self) -> Iterator[GridAddress]:
        """All addresses in row-major (raster) order."""
        for y, row in enumerate(self.rows):
            for x in range(len(row)):
                yield GridAddress(x, y)

    def items(self) -> Iterator[tuple[GridAddress, Tile]]:
        for y, row in enumerate(self.rows):
            for x, tile in enumerate(row):
                yield GridAddress(x, y), tile

    def neighbors(self, address: GridAddress) -> Iterator[tuple[Cardinal, GridAddress, Tile]]:
        """In-bounds cardinal neighbours of `address`, clockwise from North."""
        for cardinal in Cardinal:
            neighbor = address.checked_add(cardinal.delta)
            if neighbor is None:
                continue
            if self.contains(neighbor):
                yield cardinal, neighbor, self.rows[neighbor.y][neighbor.x]

    def find(self, predicate: Callable[[Tile], bool]) -> GridAddress | None:
        """First address in raster order whose tile satisfies `predicate`."""
        for address, tile in self.items():
            if predicate(tile):
                return address
        return None

    def map(self, fn: Callable[[Tile, GridAddress], Other]) -> Grid[Other]:
        return Grid(
            [[fn(tile, GridAddress(x, y)) for x, tile in enumerate(row)] for y, row in enumerate(self.rows)]
        )

    def copy(self) -> Grid[Tile]:
        """Deep, independent copy; mutating the copy never touches this grid."""
        return Grid(copy.deepcopy(self.rows))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
