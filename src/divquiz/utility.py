# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import shutil
import sys


class UserInputError(Exception):
    pass


class ConfigError(UserInputError):
    """Invalid difficulty configuration or unreadable profile."""


def clear_screen(keep_scrollback: bool = False) -> None:
    """
    Clear the terminal screen.
    - On Windows: uses 'cls'
    - On POSIX: ANSI sequences; optionally clear scrollback
    """
    try:
        if os.name == "nt":
            os.system("cls")
        else:
            seq = "\033[H\033[2J" if keep_scrollback else "\033[3J\033[H\033[2J"
            sys.stdout.write(seq)
            sys.stdout.flush()
    except Exception:
        try:
            os.system("cls" if os.name == "nt" else "clear")
        except Exception:
            pass


def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return default


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in (d or {}).items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out


def parse_choice_index(text: str, count: int) -> int:
    """Turn a 1-based menu answer into a 0-based index, or raise UserInputError."""
    s = (text or "").strip()
    try:
        k = int(s)
    except ValueError:
        raise UserInputError(f"Invalid input: '{s}' is not a choice number.") from None
    if not 1 <= k <= count:
        raise UserInputError(f"Invalid input: choose a number from 1 to {count}.")
    return k - 1
