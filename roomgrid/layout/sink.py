"""Room sink collaborators.

A sink receives the generator's output as it happens: one ``create_room`` per
placed room, one ``open_door`` per opened wall side, and ``clear_rooms`` when
an attempt is thrown away. Engines implement it to instantiate their own room
objects; the sinks below cover headless use, tests and the CLI preview.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, Set, Tuple

from .cells import Direction, GridCoord


class RoomSink(Protocol):
    def create_room(self, coord: GridCoord, position: Tuple[int, int]) -> Any: ...

    def open_door(self, coord: GridCoord, direction: Direction) -> None: ...

    def clear_rooms(self) -> None: ...


def grid_to_world(coord: Tuple[int, int], config) -> Tuple[int, int]:
    """Map a grid cell to a world position centered on the middle cell."""
    x, y = coord
    return (
        config.room_width * (x - config.grid_size_x // 2),
        config.room_height * (y - config.grid_size_y // 2),
    )


class NullSink:
    def create_room(self, coord, position):
        return None

    def open_door(self, coord, direction):
        pass

    def clear_rooms(self):
        pass


class RecordingSink:
    """In-memory sink keeping rooms, doors and an ordered event log."""

    def __init__(self):
        self.rooms: Dict[GridCoord, Tuple[int, int]] = {}
        self.doors: Dict[GridCoord, Set[Direction]] = {}
        self.events: List[tuple] = []
        self.clears = 0

    def create_room(self, coord, position):
        coord = GridCoord(*coord)
        self.rooms[coord] = tuple(position)
        self.doors.setdefault(coord, set())
        self.events.append(("create", coord))
        return f"Room-{len(self.rooms)}"

    def open_door(self, coord, direction):
        coord = GridCoord(*coord)
        opened = self.doors.setdefault(coord, set())
        if direction in opened:
            return
        opened.add(direction)
        self.events.append(("door", coord, direction))

    def clear_rooms(self):
        self.rooms.clear()
        self.doors.clear()
        self.clears += 1
        self.events.append(("clear",))

    def door_pairs(self) -> Set[Tuple[GridCoord, Direction]]:
        return {(c, d) for c, ds in self.doors.items() for d in ds}

    def render(self, width: int, height: int, mark: Optional[Tuple[int, int]] = None) -> str:
        """ASCII preview: ``#`` rooms, ``@`` the marked cell, ``-``/``|`` open doors.

        Rows are printed top-down, so the highest y comes first.
        """
        lines = []
        for y in range(height - 1, -1, -1):
            row = []
            for x in range(width):
                c = GridCoord(x, y)
                if c in self.rooms:
                    row.append("@" if mark is not None and tuple(mark) == c else "#")
                else:
                    row.append(".")
                if x < width - 1:
                    row.append("-" if Direction.RIGHT in self.doors.get(c, ()) else " ")
            lines.append("".join(row).rstrip())
            if y > 0:
                between = []
                for x in range(width):
                    c = GridCoord(x, y)
                    between.append("|" if Direction.DOWN in self.doors.get(c, ()) else " ")
                    if x < width - 1:
                        between.append(" ")
                lines.append("".join(between).rstrip())
        return "\n".join(lines)


__all__ = ["RoomSink", "NullSink", "RecordingSink", "grid_to_world"]
