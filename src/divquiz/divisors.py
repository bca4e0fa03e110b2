# -----------------------------------------------------------------------------
#  divisors.py
#  Non-trivial factor pairs of an integer
# -----------------------------------------------------------------------------

from __future__ import annotations

from math import isqrt

from divquiz.models import DivisorPair

SMALLEST_COMPOSITE = 4


def get_divisor_pairs(n: int) -> list[DivisorPair]:
    """
    Return every (a, b) with 2 <= a <= b and a*b == n, ascending by a.

    Scans a up to isqrt(n), so each pair shows up once; a perfect square
    contributes its (r, r) pair as well.
      36 → [(2, 18), (3, 12), (4, 9), (6, 6)]
      7  → []
    """
    if n < SMALLEST_COMPOSITE:
        return []
    return [DivisorPair(i, n // i) for i in range(2, isqrt(n) + 1) if n % i == 0]
