# -----------------------------------------------------------------------------
#  target.py
#  Target numbers with a controlled number of prime factors
# -----------------------------------------------------------------------------

from __future__ import annotations

import random

from divquiz.config import DifficultyConfig
from divquiz.runtime import resolve_rng

REPAIR_PRIMES = (2, 3)


def generate_answer_number(config: DifficultyConfig, rng: random.Random | None = None) -> int:
    """
    Multiply weighted-random primes into a composite target.

    Starts from one drawn prime and tries up to max_prime_factors - 1 more.
    A draw that would push the product over max_value ends the loop; after
    each committed factor the stop schedule may end it early. If nothing was
    ever multiplied in, a 2 or 3 is forced on (ignoring max_value) so the
    result always has a divisor pair.
    """
    rng = resolve_rng(rng)
    sampler = config.sampler

    product = sampler.draw(rng)
    factors = 1
    for _ in range(config.max_prime_factors - 1):
        tentative = product * sampler.draw(rng)
        if tentative > config.max_value:
            break
        product = tentative
        factors += 1
        if rng.random() < config.stop_probability(product):
            break

    if factors == 1:
        product *= rng.choice(REPAIR_PRIMES)
    return product
