"""Public room layout interface."""

from .cells import DIRECTIONS, DOOR_ORDER, EMPTY, OCCUPIED, Direction, GridCoord
from .config import LayoutConfig
from .connectivity import missing_doors, one_way_doors, reachable_from, unreachable_rooms
from .errors import ConfigurationError, GenerationFailed, LayoutError
from .generator import GenerationState, GridLayoutGenerator, LayoutResult
from .metrics import init_metrics
from .random_source import RandomSource, RecordingRandom, SequenceRandom
from .rooms import RoomRecord
from .sink import NullSink, RecordingSink, RoomSink, grid_to_world

__all__ = [
    "DIRECTIONS",
    "DOOR_ORDER",
    "EMPTY",
    "OCCUPIED",
    "Direction",
    "GridCoord",
    "LayoutConfig",
    "missing_doors",
    "one_way_doors",
    "reachable_from",
    "unreachable_rooms",
    "ConfigurationError",
    "GenerationFailed",
    "LayoutError",
    "GenerationState",
    "GridLayoutGenerator",
    "LayoutResult",
    "init_metrics",
    "RandomSource",
    "RecordingRandom",
    "SequenceRandom",
    "RoomRecord",
    "NullSink",
    "RecordingSink",
    "RoomSink",
    "grid_to_world",
]
