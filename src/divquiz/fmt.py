# fmt.py
from __future__ import annotations

from divquiz.models import DivisorPair


def format_pair(pair: DivisorPair | tuple[int, int]) -> str:
    a, b = pair
    return f"{a} × {b}"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with one decimal if <60s; else mm:ss (and hh:mm:ss if ≥1h)."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.1f} s"
    m, s = divmod(int(seconds), MAX_SECONDS)
    if m < MAX_SECONDS:
        return f"{m}:{s:02d}"                       # mm:ss
    h, m = divmod(m, MAX_SECONDS)
    return f"{h}:{m:02d}:{s:02d}"                   # hh:mm:ss


def progress_bar(done: int, total: int, bar_len: int = 24) -> str:
    """'[#####-------]  3 / 10' style bar."""
    total = max(1, int(total))
    frac = min(max(done / total, 0.0), 1.0)
    fill = int(frac * bar_len)
    bar = "#" * fill + "-" * (bar_len - fill)
    return f"[{bar}] {done:>{len(str(total))}} / {total}"
