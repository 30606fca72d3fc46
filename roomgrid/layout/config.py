import os
from dataclasses import dataclass, fields, replace
from typing import List, Optional

from .errors import ConfigurationError


@dataclass
class LayoutConfig:
    grid_size_x: int = 10
    grid_size_y: int = 10
    min_rooms: int = 10
    max_rooms: int = 15
    # World-space cell size; only used to map grid cells to positions
    room_width: int = 20
    room_height: int = 12
    branch_probability: float = 0.5
    max_adjacency: int = 1
    # None disables the cap (the generator may then retry forever)
    max_retries: Optional[int] = 1000
    seed: Optional[int] = None

    @property
    def cell_count(self) -> int:
        return self.grid_size_x * self.grid_size_y

    def problems(self) -> List[str]:
        """Return a list of human readable configuration problems (empty when valid)."""
        out = []
        for name in ("grid_size_x", "grid_size_y", "min_rooms", "max_rooms", "room_width", "room_height"):
            if getattr(self, name) <= 0:
                out.append(f"{name} must be > 0 (got {getattr(self, name)})")
        if self.min_rooms > self.max_rooms:
            out.append(f"min_rooms ({self.min_rooms}) exceeds max_rooms ({self.max_rooms})")
        if self.grid_size_x > 0 and self.grid_size_y > 0 and self.max_rooms > self.cell_count:
            out.append(f"max_rooms ({self.max_rooms}) exceeds grid capacity ({self.cell_count})")
        if not 0.0 <= self.branch_probability <= 1.0:
            out.append(f"branch_probability must be within [0, 1] (got {self.branch_probability})")
        if self.max_adjacency < 0:
            out.append(f"max_adjacency must be >= 0 (got {self.max_adjacency})")
        if self.max_retries is not None and self.max_retries < 0:
            out.append(f"max_retries must be >= 0 or None (got {self.max_retries})")
        return out

    def validate(self) -> "LayoutConfig":
        problems = self.problems()
        if problems:
            raise ConfigurationError(problems)
        return self

    @classmethod
    def from_env(cls, prefix: str = "ROOMGRID_", environ=None, **overrides) -> "LayoutConfig":
        """Build a config from ``<prefix>*`` environment variables.

        Explicit keyword overrides win over the environment; ``None`` overrides
        are ignored so argparse defaults can be passed straight through.
        """
        env = os.environ if environ is None else environ
        env_map = {
            "GRID_X": ("grid_size_x", int),
            "GRID_Y": ("grid_size_y", int),
            "MIN_ROOMS": ("min_rooms", int),
            "MAX_ROOMS": ("max_rooms", int),
            "ROOM_WIDTH": ("room_width", int),
            "ROOM_HEIGHT": ("room_height", int),
            "BRANCH_PROBABILITY": ("branch_probability", float),
            "MAX_ADJACENCY": ("max_adjacency", int),
            "MAX_RETRIES": ("max_retries", _optional_int),
            "SEED": ("seed", _optional_int),
        }
        values = {}
        bad = []
        for suffix, (attr, conv) in env_map.items():
            key = prefix + suffix
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                values[attr] = conv(raw.strip())
            except ValueError:
                bad.append(f"{key}={raw!r} is not a valid {attr}")
        if bad:
            raise ConfigurationError(bad)
        known = {f.name for f in fields(cls)}
        for k, v in overrides.items():
            if k not in known:
                raise TypeError(f"unknown LayoutConfig field: {k}")
            if v is not None:
                values[k] = v
        return cls(**values)

    def with_overrides(self, **changes) -> "LayoutConfig":
        return replace(self, **changes)


def _optional_int(raw: str) -> Optional[int]:
    if raw.lower() in ("none", "unbounded"):
        return None
    return int(raw)


__all__ = ["LayoutConfig"]
