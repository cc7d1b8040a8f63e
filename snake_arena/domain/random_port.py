"""Injected randomness.

Engine systems only ever draw through ``RandomPort`` so that a run is
reproducible from its seed.
"""

from __future__ import annotations

import math
from random import Random
from typing import Protocol, runtime_checkable

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


@runtime_checkable
class RandomPort(Protocol):
    def next(self) -> float:
        """Uniform float in ``[0, 1)``."""
        ...

    def next_int(self, max_value: int) -> int:
        """Uniform int in ``[0, max_value)``; 0 when ``max_value <= 0``."""
        ...


class SystemRandomPort:
    """``RandomPort`` backed by ``random.Random``."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = Random(seed)

    def next(self) -> float:
        return self._rng.random()

    def next_int(self, max_value: int) -> int:
        if max_value <= 0:
            return 0
        return self._rng.randrange(max_value)


class SeededRandom:
    """Linear congruential generator with a documented recurrence.

    ``state = (1664525 * state + 1013904223) mod 2**32``; the seed is
    truncated to unsigned 32 bits and a zero seed becomes 1.
    """

    def __init__(self, seed: int) -> None:
        state = int(seed) & 0xFFFFFFFF
        self._state = state if state != 0 else 1

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (_LCG_MULTIPLIER * self._state + _LCG_INCREMENT) % _LCG_MODULUS
        return self._state / _LCG_MODULUS

    def next_int(self, max_value: int) -> int:
        if max_value <= 0:
            return 0
        return math.floor(self.next() * max_value)
