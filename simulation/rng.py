"""simulation/rng.py — Deterministic RNG.

Thin wrapper over ``random.Random`` so every stream in the engine is
created from an explicit integer seed::

    rng = SeededRng(42)
    rng.next_int(0, 10)      # [0, 10)
    rng.next_float(20, 50)   # uniform
    rng.next_bool(0.15)      # True with probability 0.15

Same seed + same call sequence ⇒ same outputs.
"""

from __future__ import annotations
import random


class SeededRng:
    __slots__ = ("seed", "_random")

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        if max_exclusive <= min_inclusive:
            return min_inclusive
        return self._random.randrange(min_inclusive, max_exclusive)

    def next_float(self, min_value: float, max_value: float) -> float:
        return min_value + self._random.random() * (max_value - min_value)

    def next_bool(self, true_probability: float = 0.5) -> bool:
        return self._random.random() < true_probability

    def __repr__(self) -> str:
        return f"SeededRng(seed={self.seed})"
