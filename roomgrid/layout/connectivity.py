"""Door-graph connectivity checks.

Rooms are nodes and open doors are edges. A door only counts as a passage
when the neighbor it faces is also a room.
"""
from __future__ import annotations

from collections import deque
from typing import List, Mapping, Set, Tuple

from .cells import DIRECTIONS, Direction, GridCoord
from .rooms import RoomRecord

RoomMap = Mapping[GridCoord, RoomRecord]


def reachable_from(rooms: RoomMap, start: Tuple[int, int]) -> Set[GridCoord]:
    start = GridCoord(*start)
    if start not in rooms:
        return set()
    visited = {start}
    q = deque([start])
    while q:
        cur = q.popleft()
        for nxt in rooms[cur].door_neighbors():
            if nxt in rooms and nxt not in visited:
                visited.add(nxt)
                q.append(nxt)
    return visited


def unreachable_rooms(rooms: RoomMap, start: Tuple[int, int]) -> List[GridCoord]:
    reach = reachable_from(rooms, start)
    return sorted(c for c in rooms if c not in reach)


def one_way_doors(rooms: RoomMap) -> List[Tuple[GridCoord, Direction]]:
    """Doors whose reciprocal side is closed, or that open onto no room."""
    bad = []
    for coord, rec in rooms.items():
        for d in DIRECTIONS:
            if not rec.has_door(d):
                continue
            other = rooms.get(d.step(coord))
            if other is None or not other.has_door(d.opposite):
                bad.append((coord, d))
    return sorted(bad, key=lambda cd: (cd[0], DIRECTIONS.index(cd[1])))


def missing_doors(rooms: RoomMap) -> List[Tuple[GridCoord, Direction]]:
    """Grid-adjacent room pairs without an open door on ``coord``'s side."""
    bad = []
    for coord, rec in rooms.items():
        for d in DIRECTIONS:
            if d.step(coord) in rooms and not rec.has_door(d):
                bad.append((coord, d))
    return sorted(bad, key=lambda cd: (cd[0], DIRECTIONS.index(cd[1])))


__all__ = ["reachable_from", "unreachable_rooms", "one_way_doors", "missing_doors"]
