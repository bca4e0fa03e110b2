# runtime.py
from __future__ import annotations

import random
from contextvars import ContextVar
from dataclasses import dataclass, field
from importlib.util import find_spec
from typing import TYPE_CHECKING

from colorama import Fore, Style

if TYPE_CHECKING:
    from divquiz.config import DifficultyConfig


@dataclass
class Runtime:
    profile_name: str = "beginner"
    config: DifficultyConfig | None = None
    debug: bool = False  # controls verbosity / tracebacks
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, config: DifficultyConfig) -> None:
        """Install a difficulty config wholesale; nothing from the previous one survives."""
        self.config = config
        self.profile_name = getattr(config, "name", None) or "custom"

    def seed(self, value: int | str | None) -> None:
        self.rng = random.Random(value)


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("divquiz_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def APPLY(config: DifficultyConfig) -> None:
    current().apply(config)


def resolve_rng(rng: random.Random | None) -> random.Random:
    """Explicit generator if given, else the one of the current runtime."""
    return rng if rng is not None else current().rng


# ---- Dependency check --------------------------------------------------------

def ensure_runtime_deps(strict: bool = True) -> bool:
    """
    Verify core runtime deps are available. Uses find_spec() to avoid importing
    inside this function.
    If strict=True, prints a friendly error and returns False when missing.
    """
    required = ("sympy",)
    missing = [name for name in required if find_spec(name) is None]

    if not missing:
        return True

    msg = (
        f"{Fore.RED}{Style.BRIGHT}\nMissing dependencies:{Style.RESET_ALL} "
        + ", ".join(missing)
        + "\nInstall with: "
        + f"{Fore.YELLOW}pip install " + " ".join(missing) + f"{Style.RESET_ALL}"
    )
    print(msg)
    return not strict
