"""A seedable source of bounded random integers."""

from __future__ import annotations

import functools
import random
import time
from collections.abc import MutableSequence
from typing import TypeVar

T = TypeVar("T")

UINT_MAX = 0xFFFFFFFF


class Random:
    """Random integers in ``[0, maximum)`` and an in-place cyclic shuffle."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random()
        self.seed(int(time.time()) if seed is None else seed)

    def seed(self, seed: int) -> None:
        """Restart the sequence from ``seed``."""
        self._rng.seed(seed)

    def uniform(self, maximum: int = UINT_MAX) -> int:
        """Return an integer in ``[0, maximum)``, or 0 when ``maximum`` is 0."""
        if maximum < 0:
            raise ValueError("maximum must not be negative")
        if maximum == 0:
            return 0
        return self._rng.randrange(maximum)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Permute ``items`` in place into a single cycle."""
        for i in range(len(items) - 1, 0, -1):
            j = self.uniform(i)
            items[i], items[j] = items[j], items[i]


@functools.lru_cache(maxsize=None)
def get_instance() -> Random:
    """Return the process-wide shared generator."""
    return Random()