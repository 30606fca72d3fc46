from enum import Enum
from typing import List, NamedTuple, Tuple

# Cell states
EMPTY = 0
OCCUPIED = 1


class GridCoord(NamedTuple):
    x: int
    y: int


class Direction(Enum):
    """Axis-aligned neighbor directions; ``UP`` is +y."""

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, 1)
    DOWN = (0, -1)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def step(self, coord: Tuple[int, int]) -> GridCoord:
        dx, dy = self.value
        return GridCoord(coord[0] + dx, coord[1] + dy)


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

# Expansion order used by the generator.
DIRECTIONS: Tuple[Direction, ...] = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)

# Door-opening order: walls below are opened before walls above.
DOOR_ORDER: Tuple[Direction, ...] = (Direction.LEFT, Direction.RIGHT, Direction.DOWN, Direction.UP)

Grid2D = List[List[int]]

__all__ = ["EMPTY", "OCCUPIED", "GridCoord", "Direction", "DIRECTIONS", "DOOR_ORDER", "Grid2D"]
