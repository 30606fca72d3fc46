"""
project: roomgrid
module: __init__.py
License: MIT

Breadth-first room grid layout generation.

Settings can be supplied through ``ROOMGRID_*`` environment variables; a local
``.env`` file is loaded on import so they need not be exported by hand.
"""

from dotenv import load_dotenv

from .layout import (
    ConfigurationError,
    Direction,
    GenerationFailed,
    GenerationState,
    GridCoord,
    GridLayoutGenerator,
    LayoutConfig,
    LayoutResult,
    RecordingSink,
    RoomSink,
)

__version__ = "0.1.0"

load_dotenv()


def generate_layout(config: LayoutConfig | None = None, sink: RoomSink | None = None, rng=None) -> LayoutResult:
    """Run a generator to completion and return its result."""
    gen = GridLayoutGenerator(config, sink=sink, rng=rng)
    return gen.run_to_completion()


__all__ = [
    "__version__",
    "generate_layout",
    "ConfigurationError",
    "Direction",
    "GenerationFailed",
    "GenerationState",
    "GridCoord",
    "GridLayoutGenerator",
    "LayoutConfig",
    "LayoutResult",
    "RecordingSink",
    "RoomSink",
]
