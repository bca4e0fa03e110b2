from __future__ import annotations

import random

from divquiz.config import DifficultyConfig
from divquiz.distractors import generate_wrong_choices
from divquiz.divisors import get_divisor_pairs
from divquiz.models import Choice, Question
from divquiz.runtime import current, resolve_rng
from divquiz.target import generate_answer_number


def generate_question(config: DifficultyConfig | None = None, rng: random.Random | None = None) -> Question:
    """
    One round: a target, one of its divisor pairs as the answer and three
    distractors, in random display order.

    `config` defaults to the difficulty applied to the current runtime.
    """
    rng = resolve_rng(rng)
    if config is None:
        config = current().config
        if config is None:
            raise ValueError("no difficulty config given and none applied to the runtime")

    number = generate_answer_number(config, rng)
    correct = rng.choice(get_divisor_pairs(number))
    choices = [Choice(correct, is_correct=True)]
    choices += [Choice(pair) for pair in generate_wrong_choices(number, rng)]
    rng.shuffle(choices)
    return Question(number=number, choices=tuple(choices))
