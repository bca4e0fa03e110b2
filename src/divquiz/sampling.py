# sampling.py
from __future__ import annotations

import random
from bisect import bisect_right
from collections.abc import Mapping
from itertools import accumulate


class WeightedSampler:
    """
    Draw keys with probability proportional to their weight.

    The prefix sums are built once; each draw is a uniform value in
    [0, total) bisected against them, so the first key whose cumulative
    weight exceeds the draw is chosen.
    """

    def __init__(self, weights: Mapping[int, int]):
        if not weights:
            raise ValueError("weighted sampler needs at least one key")
        bad = [k for k, w in weights.items() if w <= 0]
        if bad:
            raise ValueError(f"weights must be positive, got non-positive weight for {bad}")
        self.keys: tuple[int, ...] = tuple(weights)
        self.cumulative: tuple[int, ...] = tuple(accumulate(weights.values()))
        self.total: int = self.cumulative[-1]

    def draw(self, rng: random.Random) -> int:
        x = rng.random() * self.total
        # random() < 1.0, but float rounding on large totals can land on total
        idx = min(bisect_right(self.cumulative, x), len(self.keys) - 1)
        return self.keys[idx]

    def probability(self, key: int) -> float:
        i = self.keys.index(key)
        lo = self.cumulative[i - 1] if i else 0
        return (self.cumulative[i] - lo) / self.total
