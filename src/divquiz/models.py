from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


class DivisorPair(NamedTuple):
    a: int
    b: int

    @property
    def product(self) -> int:
        return self.a * self.b


@dataclass(frozen=True)
class Choice:
    pair: DivisorPair
    is_correct: bool = False


@dataclass(frozen=True)
class Question:
    number: int
    choices: tuple[Choice, ...]

    def __post_init__(self) -> None:
        n_correct = sum(1 for c in self.choices if c.is_correct)
        if n_correct != 1:
            raise ValueError(f"question for {self.number} has {n_correct} correct choices, expected 1")

    @property
    def correct(self) -> Choice:
        return next(c for c in self.choices if c.is_correct)

    @property
    def correct_index(self) -> int:
        return next(i for i, c in enumerate(self.choices) if c.is_correct)
