"""Seedable uniform integer sampling backing every simulated die.

A Sampler owns its own ``random.Random`` stream. Callers construct one per
top-level evaluation (or pass a fixed-seed instance in tests) so no random
state is shared between concurrent rolls.
"""

from __future__ import annotations

import random
import time


class Sampler:
    """Uniform integers in a closed range, with or without repetition.

    Args:
        seed: Seed for the underlying generator. Defaults to the current
            wall-clock time in nanoseconds.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = time.time_ns() if seed is None else seed
        self._random = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def reseed(self, seed: int) -> None:
        """Set a new seed and restart the stream from it."""
        self._seed = seed
        self.reset()

    def reset(self) -> None:
        """Restart the stream from the current seed."""
        self._random = random.Random(self._seed)

    def range(self, low: int, high: int) -> int:
        """Return a value in ``[low, high]``.

        ``low > high`` yields 0 and ``low == high`` yields ``low`` without
        consuming the stream.
        """
        if low > high:
            return 0
        if low == high:
            return low
        return self._random.randint(low, high)

    def n_range(self, count: int, low: int, high: int, unique: bool = False) -> list[int]:
        """Return ``count`` values in ``[low, high]``.

        With ``unique`` set, ``count`` is clamped to the number of distinct
        values available and values are drawn by rejection until that many
        distinct ones are collected, in first-seen order.

        Degenerate ranges (``low >= high``) collapse to a single value: 0 when
        ``low > high``, otherwise ``low``. A unique draw over a degenerate range
        returns that value once.
        """
        if count < 1:
            return []

        if low >= high:
            value = 0 if low > high else low
            return [value] if unique else [value] * count

        if not unique:
            return [self.range(low, high) for _ in range(count)]

        count = min(count, high - low + 1)
        seen: set[int] = set()
        results: list[int] = []
        while len(results) < count:
            value = self.range(low, high)
            if value not in seen:
                seen.add(value)
                results.append(value)
        return results
