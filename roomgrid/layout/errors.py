"""Layout generation errors.

Probing a neighbor outside the grid or next to too many rooms is routine and
never raises; only bad configuration and exhausted retries do.
"""

from typing import List, Optional


class LayoutError(Exception):
    """Base class for room layout errors."""


class ConfigurationError(LayoutError, ValueError):
    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("invalid layout configuration: " + "; ".join(self.problems))


class GenerationFailed(LayoutError, RuntimeError):
    def __init__(self, message: str, *, attempts: int = 0, room_count: Optional[int] = None):
        self.attempts = attempts
        self.room_count = room_count
        super().__init__(message)


__all__ = ["LayoutError", "ConfigurationError", "GenerationFailed"]
