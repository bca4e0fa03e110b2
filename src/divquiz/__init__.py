from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("divquiz")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import PRESETS, DifficultyConfig, get_preset, load_config
from .distractors import generate_wrong_choices
from .divisors import get_divisor_pairs
from .models import Choice, DivisorPair, Question
from .question import generate_question
from .runtime import APPLY
from .session import QuizSession
from .target import generate_answer_number

__all__ = [
    "APPLY",
    "PRESETS",
    "Choice",
    "DifficultyConfig",
    "DivisorPair",
    "Question",
    "QuizSession",
    "__version__",
    "generate_answer_number",
    "generate_question",
    "generate_wrong_choices",
    "get_divisor_pairs",
    "get_preset",
    "load_config",
]
