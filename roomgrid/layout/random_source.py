"""Injectable randomness for layout generation.

The generator only ever needs ``random() -> float`` in ``[0, 1)``, so any
``random.Random`` instance satisfies :class:`RandomSource`. The two helpers
here make runs replayable in tests and diagnostics.
"""

from __future__ import annotations

from typing import Iterable, List, Protocol


class RandomSource(Protocol):
    def random(self) -> float: ...


class SequenceRandom:
    """Replay a fixed list of draws.

    With ``cycle=True`` the sequence wraps around, so ``SequenceRandom([0.99])``
    is a source that never draws below 0.99. Without cycling, running past the
    end raises ``IndexError``.
    """

    def __init__(self, values: Iterable[float], *, cycle: bool = True):
        self._values: List[float] = [float(v) for v in values]
        if not self._values:
            raise ValueError("SequenceRandom needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"draw {v} outside [0, 1)")
        self._cycle = cycle
        self._index = 0

    @property
    def consumed(self) -> int:
        return self._index

    def random(self) -> float:
        if self._index >= len(self._values):
            if not self._cycle:
                raise IndexError(f"SequenceRandom exhausted after {self._index} draws")
            value = self._values[self._index % len(self._values)]
        else:
            value = self._values[self._index]
        self._index += 1
        return value


class RecordingRandom:
    """Wrap another source and remember every draw it hands out."""

    def __init__(self, inner: RandomSource):
        self._inner = inner
        self.draws: List[float] = []

    def random(self) -> float:
        value = self._inner.random()
        self.draws.append(value)
        return value

    def replay(self) -> SequenceRandom:
        return SequenceRandom(self.draws, cycle=False)


__all__ = ["RandomSource", "SequenceRandom", "RecordingRandom"]
