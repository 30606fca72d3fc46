from dataclasses import dataclass, field
from typing import Any, Iterator, Set, Tuple

from .cells import DIRECTIONS, Direction, GridCoord


@dataclass
class RoomRecord:
    coord: GridCoord
    name: str = ""
    position: Tuple[int, int] = (0, 0)
    handle: Any = None
    open_doors: Set[Direction] = field(default_factory=set)

    @property
    def x(self) -> int:
        return self.coord.x

    @property
    def y(self) -> int:
        return self.coord.y

    def open_door(self, direction: Direction) -> bool:
        """Mark ``direction`` open; return False if it already was."""
        if direction in self.open_doors:
            return False
        self.open_doors.add(direction)
        return True

    def has_door(self, direction: Direction) -> bool:
        return direction in self.open_doors

    def door_neighbors(self) -> Iterator[GridCoord]:
        for d in DIRECTIONS:
            if d in self.open_doors:
                yield d.step(self.coord)

    @property
    def door_count(self) -> int:
        return len(self.open_doors)
