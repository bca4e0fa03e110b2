# session.py
"""
Round state for one quiz run.

The generators never see this object; the front end owns it, asks it for
questions and feeds the player's answers back in.
"""

from __future__ import annotations

import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import NamedTuple

from divquiz.config import DifficultyConfig
from divquiz.models import DivisorPair, Question
from divquiz.question import generate_question
from divquiz.runtime import resolve_rng
from divquiz.utility import UserInputError

DEFAULT_QUESTIONS = 10

# (minimum rate in %, message), checked top-down
RATE_MESSAGES: tuple[tuple[int, str], ...] = (
    (100, "Perfect! Outstanding!"),
    (80, "Excellent result!"),
    (50, "Well done, good effort!"),
    (30, "A bit more practice will help!"),
    (0, "Time to review your divisors!"),
)


class HistoryItem(NamedTuple):
    number: int
    user_answer: DivisorPair
    correct_answer: DivisorPair
    is_correct: bool
    seconds: float


@dataclass(frozen=True)
class Summary:
    correct: int
    wrong: int
    total: int
    elapsed: float

    @property
    def rate(self) -> int:
        """Percentage of correct answers, rounded; 0 before any answer."""
        if not self.total:
            return 0
        # half-up, so 1/8 shows 13%
        return int(self.correct * 100 / self.total + 0.5)

    @property
    def message(self) -> str:
        rate = self.rate
        return next(msg for floor, msg in RATE_MESSAGES if rate >= floor)


@dataclass
class QuizSession:
    config: DifficultyConfig
    max_questions: int = DEFAULT_QUESTIONS
    rng: random.Random | None = None
    clock: Callable[[], float] = time.perf_counter

    correct_count: int = 0
    wrong_count: int = 0
    history: list[HistoryItem] = field(default_factory=list)
    current: Question | None = None
    started_at: float | None = None
    finished_at: float | None = None
    _asked_at: float = 0.0

    def __post_init__(self) -> None:
        if self.max_questions < 1:
            raise UserInputError(f"Number of questions must be at least 1, got {self.max_questions}.")

    @property
    def total_questions(self) -> int:
        return self.correct_count + self.wrong_count

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None or self.total_questions >= self.max_questions

    @property
    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at if self.finished_at is not None else self.clock()
        return end - self.started_at

    def next_question(self) -> Question:
        if self.is_finished:
            raise UserInputError("The quiz is over; start a new session.")
        now = self.clock()
        if self.started_at is None:
            self.started_at = now
        self.current = generate_question(self.config, resolve_rng(self.rng))
        self._asked_at = now
        return self.current

    def answer(self, index: int) -> HistoryItem:
        """Score choice `index` (0-based) of the current question and record it."""
        q = self.current
        if q is None:
            raise UserInputError("No question is waiting for an answer.")
        if not 0 <= index < len(q.choices):
            raise UserInputError(f"Invalid input: choose a number from 1 to {len(q.choices)}.")

        picked = q.choices[index]
        now = self.clock()
        item = HistoryItem(
            number=q.number,
            user_answer=picked.pair,
            correct_answer=q.correct.pair,
            is_correct=picked.is_correct,
            seconds=now - self._asked_at,
        )
        self.history.append(item)
        if picked.is_correct:
            self.correct_count += 1
        else:
            self.wrong_count += 1
        self.current = None
        if self.total_questions >= self.max_questions:
            self.finished_at = now
        return item

    def finish(self) -> Summary:
        """End early (or confirm the end) and return the summary."""
        if self.finished_at is None:
            self.finished_at = self.clock()
        self.current = None
        return self.summary()

    def summary(self) -> Summary:
        return Summary(
            correct=self.correct_count,
            wrong=self.wrong_count,
            total=self.total_questions,
            elapsed=self.elapsed,
        )
