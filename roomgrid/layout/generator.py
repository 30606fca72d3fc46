"""
project: roomgrid
module: layout/generator.py
License: MIT

Breadth-first room grid generator.

High-level flow:
    * Place a seed room at the grid center.
    * Pop rooms off a FIFO frontier and try to place rooms at their four
      neighbors (left, right, up, down), so growth proceeds in rings.
    * A candidate is rejected when the room cap is reached, it is off-grid or
      already a room, a random draw falls under ``branch_probability``, or it
      already touches more than ``max_adjacency`` rooms.
    * Every accepted room opens doors to all occupied neighbors on both sides.
    * When the frontier runs dry below ``min_rooms`` the attempt is discarded
      and generation restarts from the seed.

The generator is step driven: hosts call ``step()`` once per tick, or
``run_to_completion()`` to finish in one go. Every step leaves the grid,
frontier and room count consistent.

The probabilistic rejection exempts the literal (0, 0) cell, not the seed
cell. With a centered seed that cell is rarely a candidate.
"""

from __future__ import annotations

import random
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Deque, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger
from .cells import DIRECTIONS, DOOR_ORDER, EMPTY, OCCUPIED, Direction, Grid2D, GridCoord
from .config import LayoutConfig
from .connectivity import unreachable_rooms
from .errors import GenerationFailed
from .metrics import init_metrics
from .random_source import RandomSource
from .rooms import RoomRecord
from .sink import NullSink, RoomSink, grid_to_world

log = get_logger("roomgrid.layout")

ORIGIN = GridCoord(0, 0)


class GenerationState(Enum):
    EXPANDING = "expanding"
    COMPLETE = "complete"


@dataclass(frozen=True)
class LayoutResult:
    rooms: FrozenSet[GridCoord]
    doors: FrozenSet[Tuple[GridCoord, Direction]]
    room_count: int
    attempts: int
    seed_cell: GridCoord
    state: GenerationState

    @property
    def complete(self) -> bool:
        return self.state is GenerationState.COMPLETE


class GridLayoutGenerator:
    def __init__(
        self,
        config: LayoutConfig | None = None,
        sink: RoomSink | None = None,
        rng: RandomSource | None = None,
    ):
        self.config = config if config is not None else LayoutConfig()
        self.sink = sink if sink is not None else NullSink()
        # Local RNG so outside random usage does not affect generation
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self.metrics: Dict[str, int | float] = init_metrics()
        self._grid: Grid2D = []
        self._frontier: Deque[GridCoord] = deque()
        self._rooms: Dict[GridCoord, RoomRecord] = {}
        self._room_count = 0
        self._state = GenerationState.EXPANDING
        self._initialized = False
        self._in_step = False
        self._in_sink = False
        self._started_at = 0.0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def room_count(self) -> int:
        return self._room_count

    @property
    def frontier(self) -> Tuple[GridCoord, ...]:
        return tuple(self._frontier)

    @property
    def rooms(self) -> Mapping[GridCoord, RoomRecord]:
        return MappingProxyType(self._rooms)

    @property
    def attempts(self) -> int:
        return int(self.metrics["attempts"])

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def seed_cell(self) -> GridCoord:
        return GridCoord(self.config.grid_size_x // 2, self.config.grid_size_y // 2)

    def in_bounds(self, coord: Tuple[int, int]) -> bool:
        x, y = coord
        return 0 <= x < self.config.grid_size_x and 0 <= y < self.config.grid_size_y

    def is_occupied(self, coord: Tuple[int, int]) -> bool:
        if not self._initialized or not self.in_bounds(coord):
            return False
        x, y = coord
        return self._grid[x][y] == OCCUPIED

    def occupied_cells(self) -> List[GridCoord]:
        return sorted(self._rooms)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Validate the config and start a fresh generation from the seed cell.

        Raises ConfigurationError before touching the sink or any state.
        """
        self._refuse_from_sink("initialize")
        self.config.validate()
        self.metrics = init_metrics()
        self._started_at = time.perf_counter()
        self._start_attempt()

    def reset_and_retry(self) -> None:
        """Discard the current attempt and restart from the seed cell.

        Raises GenerationFailed once ``max_retries`` resets have been spent; the
        sink is cleared first so no rooms remain emitted.
        """
        self._refuse_from_sink("reset_and_retry")
        self._require_initialized()
        cap = self.config.max_retries
        if cap is not None and self.metrics["resets"] >= cap:
            self._fail(
                f"no layout reached min_rooms={self.config.min_rooms} after {self.attempts} attempts",
                reason="retry_cap",
                max_retries=cap,
            )
        self.metrics["resets"] += 1
        log.info(
            event="layout_reset",
            room_count=self._room_count,
            min_rooms=self.config.min_rooms,
            attempt=self.attempts,
        )
        self._start_attempt()

    def step(self) -> GenerationState:
        """Run one unit of work: a frontier expansion, a reset, or completion."""
        self._refuse_from_sink("step")
        if self._in_step:
            raise RuntimeError("step() re-entered while a step is running")
        if not self._initialized:
            self.initialize()
        if self._state is GenerationState.COMPLETE:
            return self._state
        self._in_step = True
        try:
            self.metrics["steps"] += 1
            if self._frontier and self._room_count < self.config.max_rooms:
                current = self._frontier.popleft()
                for direction in DIRECTIONS:
                    self.try_place_room(direction.step(current))
            elif self._room_count < self.config.min_rooms:
                self.reset_and_retry()
            else:
                self._complete()
        finally:
            self._in_step = False
        return self._state

    def run_to_completion(self, max_steps: Optional[int] = None) -> LayoutResult:
        """Step until COMPLETE and return the result.

        ``max_steps`` bounds the number of steps; running out of them fails
        the generation the same way an exhausted retry cap does.
        """
        self._refuse_from_sink("run_to_completion")
        if not self._initialized:
            self.initialize()
        steps = 0
        while self._state is not GenerationState.COMPLETE:
            if max_steps is not None and steps >= max_steps:
                self._fail(
                    f"layout not complete after {steps} steps",
                    reason="step_cap",
                    max_steps=max_steps,
                )
            self.step()
            steps += 1
        return self.result()

    def result(self) -> LayoutResult:
        doors = frozenset((c, d) for c, rec in self._rooms.items() for d in rec.open_doors)
        return LayoutResult(
            rooms=frozenset(self._rooms),
            doors=doors,
            room_count=self._room_count,
            attempts=self.attempts,
            seed_cell=self.seed_cell,
            state=self._state,
        )

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------
    def try_place_room(self, coord: Tuple[int, int]) -> bool:
        self._refuse_from_sink("try_place_room")
        self._require_initialized()
        coord = GridCoord(*coord)
        cfg = self.config
        if self._room_count >= cfg.max_rooms:
            self.metrics["rejected_cap"] += 1
            return False
        if not self.in_bounds(coord):
            self.metrics["rejected_bounds"] += 1
            return False
        if self._grid[coord.x][coord.y] == OCCUPIED:
            self.metrics["rejected_occupied"] += 1
            return False
        if self._rng.random() < cfg.branch_probability and coord != ORIGIN:
            self.metrics["rejected_branch"] += 1
            return False
        if self.count_adjacent_occupied(coord) > cfg.max_adjacency:
            self.metrics["rejected_adjacency"] += 1
            return False
        self._occupy(coord)
        self.open_doors(coord)
        return True

    def open_doors(self, coord: Tuple[int, int]) -> int:
        """Open both sides of every wall between ``coord`` and an occupied neighbor.

        Walls are visited left, right, down, up. Returns the number of door
        sides newly opened.
        """
        self._refuse_from_sink("open_doors")
        self._require_initialized()
        coord = GridCoord(*coord)
        record = self._rooms[coord]
        opened = 0
        for direction in DOOR_ORDER:
            neighbor = direction.step(coord)
            if not self.is_occupied(neighbor):
                continue
            if record.open_door(direction):
                with self._sink_call():
                    self.sink.open_door(coord, direction)
                opened += 1
            if self._rooms[neighbor].open_door(direction.opposite):
                with self._sink_call():
                    self.sink.open_door(neighbor, direction.opposite)
                opened += 1
        self.metrics["doors_opened"] += opened
        return opened

    def count_adjacent_occupied(self, coord: Tuple[int, int]) -> int:
        self._require_initialized()
        return sum(1 for d in DIRECTIONS if self.is_occupied(d.step(coord)))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("generator not initialized; call initialize() first")

    def _refuse_from_sink(self, op: str) -> None:
        if self._in_sink:
            raise RuntimeError(f"{op}() called from a room sink callback")

    @contextmanager
    def _sink_call(self) -> Iterator[None]:
        self._in_sink = True
        try:
            yield
        finally:
            self._in_sink = False

    def _fail(self, message: str, reason: str, **fields) -> None:
        attempts = self.attempts
        room_count = self._room_count
        self._discard()
        self._initialized = False
        log.error(
            event="layout_failed",
            reason=reason,
            attempts=attempts,
            room_count=room_count,
            min_rooms=self.config.min_rooms,
            **fields,
        )
        raise GenerationFailed(message, attempts=attempts, room_count=room_count)

    def _discard(self) -> None:
        if self._rooms:
            with self._sink_call():
                self.sink.clear_rooms()
        cfg = self.config
        self._grid = [[EMPTY for _ in range(cfg.grid_size_y)] for _ in range(cfg.grid_size_x)]
        self._frontier.clear()
        self._rooms = {}
        self._room_count = 0

    def _start_attempt(self) -> None:
        self._discard()
        self._state = GenerationState.EXPANDING
        self._initialized = True
        self.metrics["attempts"] += 1
        seed = self.seed_cell
        log.debug(event="layout_initialized", seed_cell=f"{seed.x},{seed.y}", attempt=self.attempts)
        self._occupy(seed)

    def _occupy(self, coord: GridCoord) -> None:
        self._grid[coord.x][coord.y] = OCCUPIED
        self._room_count += 1
        self._frontier.append(coord)
        position = grid_to_world(coord, self.config)
        record = RoomRecord(coord, name=f"Room-{self._room_count}", position=position)
        self._rooms[coord] = record
        with self._sink_call():
            record.handle = self.sink.create_room(coord, position)
        self.metrics["rooms_created"] += 1
        log.debug(event="room_placed", room=record.name, x=coord.x, y=coord.y)

    def _complete(self) -> None:
        self._state = GenerationState.COMPLETE
        self.metrics["unreachable_rooms"] = len(unreachable_rooms(self._rooms, self.seed_cell))
        self.metrics["runtime_ms"] = round((time.perf_counter() - self._started_at) * 1000, 3)
        log.info(
            event="layout_complete",
            rooms=self._room_count,
            attempts=self.attempts,
            doors=sum(rec.door_count for rec in self._rooms.values()),
            runtime_ms=self.metrics["runtime_ms"],
        )


__all__ = ["GridLayoutGenerator", "GenerationState", "LayoutResult"]
