# -----------------------------------------------------------------------------
#  distractors.py
#  Wrong answers taken from numbers close to the target
# -----------------------------------------------------------------------------

from __future__ import annotations

import random

from divquiz.divisors import get_divisor_pairs
from divquiz.models import DivisorPair
from divquiz.runtime import resolve_rng

WRONG_CHOICES = 3
DISTRACTOR_WINDOW = 10
_MIN_CANDIDATE = 4  # 1..3 have no pair with both factors >= 2


def candidate_pool(target: int, window: int = DISTRACTOR_WINDOW) -> list[int]:
    """Neighbours target±1..window, dropping anything below 4."""
    return [
        target + off
        for off in range(-window, window + 1)
        if off != 0 and target + off >= _MIN_CANDIDATE
    ]


def generate_wrong_choices(
    target: int,
    rng: random.Random | None = None,
    *,
    window: int = DISTRACTOR_WINDOW,
) -> list[DivisorPair]:
    """
    Return up to three factor pairs of numbers near `target`.

    Each pair comes from a different neighbour, so no pair multiplies to
    `target` and no two pairs are equal. For an odd target the odd
    neighbours are tried first.

    With the default window every positive target gets all three: the
    window always holds at least three composites >= 4. A narrower window
    can come up short; the shorter list is returned as-is and the caller
    decides what to do with it.
    """
    rng = resolve_rng(rng)
    pool = candidate_pool(target, window)
    rng.shuffle(pool)
    if target % 2:
        # sorted() is stable: odd first, shuffled order kept within each half
        pool = sorted(pool, key=lambda c: c % 2 == 0)

    picks: list[DivisorPair] = []
    for cand in pool:
        pairs = get_divisor_pairs(cand)
        if not pairs:
            continue
        picks.append(rng.choice(pairs))
        if len(picks) == WRONG_CHOICES:
            break
    return picks
