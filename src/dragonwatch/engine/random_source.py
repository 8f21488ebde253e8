"""Injectable randomness for DragonWatch.

Every random decision of a run (weighted card draws, event picks, randomized
costs, retreat areas, random hand slots) goes through one RandomSource, so a
seed reproduces a whole game.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from dragonwatch.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class RandomSource:
    """Uniform random numbers backed by a private :class:`random.Random`.

    Example:
        >>> rng = RandomSource(seed=42)
        >>> 0.0 <= rng.random() < 1.0
        True
        >>> rng.randint(3, 3)
        3
    """

    def __init__(self, *, seed: int | None = None) -> None:
        """Initialize the random source.

        Args:
            seed: Optional seed for reproducible runs.
        """
        self._seed = seed
        self._random = random.Random(seed)
        logger.debug("RandomSource initialized", seed=seed)

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        """Draw a float in [0, 1)."""
        return self._random.random()

    def uniform(self, low: float, high: float) -> float:
        """Draw a float in [low, high]."""
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """Draw an integer in [low, high], both ends included."""
        return self._random.randint(low, high)

    def randrange(self, stop: int) -> int:
        """Draw an integer in [0, stop)."""
        return self._random.randrange(stop)

    def choice(self, items: Sequence[T]) -> T:
        """Pick one element uniformly.

        Raises:
            ValueError: If ``items`` is empty.
        """
        return items[self.randrange(len(items))]


__all__ = ["RandomSource"]
