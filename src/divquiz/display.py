# display.py
from __future__ import annotations

import sys
from collections.abc import Sequence

from colorama import Fore, Style

from divquiz.config import DifficultyConfig, list_profiles_with_descriptions, read_current_profile
from divquiz.fmt import format_duration, format_pair, progress_bar
from divquiz.models import Question
from divquiz.session import HistoryItem, QuizSession, Summary
from divquiz.utility import flatten_dotted, get_terminal_width, typename

OK_MARK = f"{Fore.GREEN}○{Style.RESET_ALL}"
BAD_MARK = f"{Fore.RED}×{Style.RESET_ALL}"


def _rule(char: str = "─") -> str:
    return char * min(get_terminal_width(), 60)


def show_intro_help() -> None:
    print(_rule())
    print(f"{Style.BRIGHT}Which multiplication makes the number?{Style.RESET_ALL}")
    print("Each round shows a number and four products. Type 1-4 to pick one.")
    print("Commands during the quiz: q = quit early, h = this help.")
    print(_rule())


def print_question(question: Question, session: QuizSession) -> None:
    done = session.total_questions
    score = (
        f"{Fore.GREEN}{session.correct_count} correct{Style.RESET_ALL}  "
        f"{Fore.RED}{session.wrong_count} wrong{Style.RESET_ALL}"
    )
    print()
    print(f"{progress_bar(done, session.max_questions)}   {score}")
    print(f"\n  {Fore.YELLOW}{Style.BRIGHT}{question.number}{Style.RESET_ALL}\n")
    for i, choice in enumerate(question.choices, start=1):
        print(f"  {Fore.CYAN}{i}{Style.RESET_ALL})  {format_pair(choice.pair)}")


def print_feedback(item: HistoryItem) -> None:
    if item.is_correct:
        print(f"{Fore.GREEN}{Style.BRIGHT}Correct!{Style.RESET_ALL}  ({format_duration(item.seconds)})")
    else:
        print(
            f"{Fore.RED}{Style.BRIGHT}Wrong.{Style.RESET_ALL} "
            f"{item.number} = {Style.BRIGHT}{format_pair(item.correct_answer)}{Style.RESET_ALL}"
        )


def print_summary(summary: Summary) -> None:
    print()
    print(_rule("═"))
    print(f"{Style.BRIGHT}Result{Style.RESET_ALL}")
    print(f"  Correct:  {Fore.GREEN}{summary.correct}{Style.RESET_ALL}")
    print(f"  Wrong:    {Fore.RED}{summary.wrong}{Style.RESET_ALL}")
    print(f"  Rate:     {summary.rate}%")
    print(f"  Time:     {format_duration(summary.elapsed)}")
    print(f"\n  {summary.message}")
    print(_rule("═"))


def print_history(history: Sequence[HistoryItem]) -> None:
    if not history:
        print("No questions answered.")
        return
    width = max(len(str(h.number)) for h in history)
    for i, h in enumerate(history, start=1):
        mark = OK_MARK if h.is_correct else BAD_MARK
        line = f"{i:>3}. {h.number:>{width}}  {mark}  {format_pair(h.user_answer)}"
        if not h.is_correct:
            pad = " " * max(1, 12 - len(format_pair(h.user_answer)))
            line += f"{pad}(answer: {format_pair(h.correct_answer)})"
        print(line)


def print_sample(question: Question) -> None:
    """Show a question with the answer marked; for `divquiz sample`."""
    print(f"{Style.BRIGHT}{question.number}{Style.RESET_ALL}")
    for i, choice in enumerate(question.choices, start=1):
        mark = f"  {OK_MARK}" if choice.is_correct else ""
        print(f"  {i})  {format_pair(choice.pair)}{mark}")


def print_config_debug(config: DifficultyConfig) -> None:
    print(f"[debug] active profile: {config.name}", file=sys.stderr)
    if config._source:
        print(f"[debug] profile file: {config._source}", file=sys.stderr)
    flat = flatten_dotted(config.as_dict())
    for k in sorted(flat, key=str.lower):
        v = flat[k]
        print(f"        {k:.<40} {v!r} ({typename(v)})", file=sys.stderr)


def print_profiles_with_descriptions() -> None:
    pairs = list_profiles_with_descriptions()
    current = read_current_profile()

    lines = []
    for name, desc in pairs:
        mark = "🡆" if current and name == current else " "
        lines.append(f"{mark} {name:13} — {desc}")
    print("\nAvailable profiles:\n  " + "\n  ".join(lines))
