# src/divquiz/cli.py

"""
divquiz - which multiplication makes the number?

Description:
    Terminal quiz: each round shows a composite number and four products,
    one of which is a factor pair of it. Counts right and wrong answers,
    times the run and prints a summary with the full history.

usage: see divquiz -h
"""

from __future__ import annotations

import argparse
import sys
import textwrap
from collections.abc import Callable
from importlib.resources import files as pkg_files

from colorama import Fore, Style
from colorama import init as colorama_init

from divquiz import __version__ as _ver
from divquiz import config as CONFIG
from divquiz.display import (
    print_config_debug,
    print_feedback,
    print_history,
    print_profiles_with_descriptions,
    print_question,
    print_sample,
    print_summary,
    show_intro_help,
)
from divquiz.question import generate_question
from divquiz.runtime import APPLY, ensure_runtime_deps
from divquiz.runtime import current as _rt_current
from divquiz.session import DEFAULT_QUESTIONS, QuizSession, Summary
from divquiz.utility import UserInputError, clear_screen, parse_choice_index
from divquiz.workspace import ensure_workspace_seeded, seed_workspace, workspace_dir

COMMANDS = ("init", "list", "where", "sample")


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _debug(msg: str) -> None:
    if _rt_current().debug:
        print(f"[debug] {msg}", file=sys.stderr)


def _select_profile_name(explicit: str | None) -> str:
    """
    Precedence:
      1) explicit profile argument
      2) last used (from workspace)
      3) 'beginner'
    """
    if explicit:
        return explicit
    last = CONFIG.read_current_profile()
    if last and CONFIG.has_profile(last):
        return last
    return CONFIG.DEFAULT_PROFILE


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace folder and copy the sample profile if missing.

      list
          List built-in difficulties and workspace profiles.

      sample [profile]
          Print one generated question with its answer marked.

      where
          Show the workspace and package paths.
    """)

    p = argparse.ArgumentParser(
        prog="divquiz",
        description="divquiz — pick the multiplication that makes the number",
        usage=(
            "divquiz [profile] [-n QUESTIONS] [--seed SEED] [--debug]\n"
            "       divquiz {init,list,where} | sample [profile]\n"
            "       divquiz -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[command] [profile]",
                   help="optional command, then a difficulty profile (beginner, intermediate, advanced, ...)")
    p.add_argument("-n", "--questions", type=int, default=DEFAULT_QUESTIONS,
                   help=f"Number of questions per run (default {DEFAULT_QUESTIONS})")
    p.add_argument("--seed", default=None, help="Seed the random source for a reproducible run")
    p.add_argument("--debug", action="store_true", help="Show the active settings and internal trace info")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug = ("--debug" in (argv if argv is not None else sys.argv))
        if debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def run_quiz(session: QuizSession, read: Callable[[str], str] | None = None) -> Summary:
    """
    Interactive loop: ask until the session is finished or the player quits.
    Invalid answers are reported and asked again. `read` defaults to input().
    """
    read = read or input
    while not session.is_finished:
        question = session.next_question()
        _debug(f"target {question.number}, answer {question.correct.pair}")
        print_question(question, session)
        while True:
            try:
                raw = read("\nYour choice (1-4, q=Quit, h=Help): ").strip().lower()
            except EOFError:
                raw = "q"
            if raw in {"q", "quit"}:
                return session.finish()
            if raw in {"h", "help"}:
                show_intro_help()
                continue
            try:
                idx = parse_choice_index(raw, len(question.choices))
            except UserInputError as e:
                msg = str(e)
                prefix = f"{Fore.RED}Invalid input:{Style.RESET_ALL}"
                print(msg.replace("Invalid input:", prefix, 1), file=sys.stderr)
                continue
            print_feedback(session.answer(idx))
            break
    return session.finish()


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    if not ensure_runtime_deps(strict=True):
        return 1

    items = list(args.items)
    command = items.pop(0) if items and items[0] in COMMANDS else None
    if len(items) > 1:
        parser.error(f"unexpected arguments: {' '.join(items[1:])}")
    profile = items[0] if items else None

    if command == "init":
        ws, copied = ensure_workspace_seeded()
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied}")
        return 0
    if command == "where":
        print(f"Workspace: {workspace_dir()}")
        print(f"Package:   {pkg_files('divquiz')}")
        return 0

    # First run: put the sample profile where the user can find it
    try:
        seed_workspace(overwrite=False)
    except OSError as e:
        _debug(f"(warn) could not seed workspace: {e}")

    if command == "list":
        print_profiles_with_descriptions()
        return 0

    profile_name = _select_profile_name(profile)
    if profile and not CONFIG.has_profile(profile):
        print(f"Unknown profile: '{profile}'")
        print("Available profiles:", ", ".join(CONFIG.list_all_profiles()))
        return 2

    selected = CONFIG.load_config(profile_name)
    APPLY(selected)
    if args.seed is not None:
        rt.seed(args.seed)
    if rt.debug:
        print_config_debug(selected)
        if args.seed is not None:
            _debug(f"seed: {args.seed!r}")
        print(file=sys.stderr)

    if command == "sample":
        print_sample(generate_question(selected, rt.rng))
        return 0

    if profile:
        try:
            CONFIG.write_current_profile(selected.name if selected.name in CONFIG.PRESETS else profile_name)  # remember
        except OSError as e:
            _debug(f"(warn) could not remember profile: {e}")

    session = QuizSession(config=selected, max_questions=args.questions, rng=rt.rng)

    if not rt.debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}divquiz v{_ver} — {selected.name}: {selected.description}{Style.RESET_ALL}")
    print(f"{session.max_questions} questions. Which multiplication makes the number?")

    summary = run_quiz(session)
    print_summary(summary)
    print_history(session.history)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
