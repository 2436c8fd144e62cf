"""
Random number generation for the simulation.

Provides consistent random number generation that can be seeded
for reproducibility or replayed from recorded values. Every stochastic
decision in a run draws from one RandomSource, in a fixed order.
"""

from __future__ import annotations

import numpy as np
from typing import List, MutableSequence, Optional, Sequence, Tuple, Union
from abc import ABC, abstractmethod


class RandomSource(ABC):
    """Abstract base class for random number sources."""

    @abstractmethod
    def next_uniform(self) -> float:
        """Get next uniform random number in [0, 1)."""
        pass

    @abstractmethod
    def next_int(self, low: int, high: int) -> int:
        """Get next random integer in [low, high)."""
        pass

    def next_bool(self) -> bool:
        """Get next fair coin flip."""
        return self.next_uniform() < 0.5

    def roll(self, probability: float) -> bool:
        """True with the given probability (0 never fires, 1 always does)."""
        return self.next_uniform() < probability

    def shuffle(self, items: MutableSequence) -> None:
        """Shuffle a sequence in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            items[i], items[j] = items[j], items[i]

    def next_uniform_array(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        """Array of uniform numbers in [0, 1), drawn in row-major order."""
        out = np.empty(shape, dtype=np.float64)
        flat = out.reshape(-1)
        for i in range(flat.size):
            flat[i] = self.next_uniform()
        return out


class GeneratedRandomSource(RandomSource):
    """
    Seeded source backed by a numpy Generator.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Create a source; the same seed gives the same stream of draws.

        Args:
            seed: Seed for numpy.random.default_rng (None for OS entropy)
        """
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def next_uniform(self) -> float:
        """Get next uniform random number in [0, 1)."""
        return float(self._rng.random())

    def next_int(self, low: int, high: int) -> int:
        """Get next random integer in [low, high)."""
        return int(self._rng.integers(low, high))

    def next_bool(self) -> bool:
        return bool(self._rng.integers(0, 2))

    def shuffle(self, items: MutableSequence) -> None:
        self._rng.shuffle(items)

    def next_uniform_array(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        return self._rng.random(shape)

class ReplayedRandomSource(RandomSource):
    """
    Replays a recorded list of uniform values.

    Integers and booleans are derived from the next recorded uniform, so a
    short list of values scripts every kind of draw. Useful for debugging a
    run and for forcing specific outcomes in tests.
    """

    def __init__(self, values: Sequence[float], cycle: bool = False):
        """
        Args:
            values: Recorded uniform values in [0, 1)
            cycle: Start over instead of failing when the values run out
        """
        self._values: List[float] = list(values)
        self._cycle = cycle
        self._drawn = 0

    def next_uniform(self) -> float:
        """Next recorded value."""
        count = len(self._values)
        if count == 0 or (self._drawn >= count and not self._cycle):
            raise RuntimeError(f"Replay exhausted after {self._drawn} draws")
        value = self._values[self._drawn % count]
        self._drawn += 1
        return value

    def next_int(self, low: int, high: int) -> int:
        """Integer in [low, high) scaled from the next recorded value."""
        scaled = low + int(self.next_uniform() * (high - low))
        return min(scaled, high - 1)

    @property
    def consumed(self) -> int:
        """Number of values drawn so far."""
        return self._drawn

    def rewind(self) -> None:
        """Replay from the first value again."""
        self._drawn = 0
