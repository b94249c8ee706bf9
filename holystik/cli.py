"""
HolyStik CLI
============
Command-line entry point for running scripts and evaluating expressions.

Usage:
    # Run a script and render its shapes
    holystik run examples/house.hstik
    holystik run examples/house.hstik --width 60 --height 20 --quiet-source

    # Calculator mode
    holystik calc "3 + 5 * (2 - 8)"

    # Interactive session
    holystik repl
"""

from __future__ import annotations

import argparse
import sys

from pydantic import ValidationError

from .config import CanvasSettings, RunSettings
from .errors import StikError
from .evaluator import calculate
from .interpreter import ERROR_PREFIX, Interpreter
from .rasterizer import render_text
from .values import format_value


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def run_file(filepath: str, settings: RunSettings | None = None) -> int:
    """
    Execute a .hstik script file and render its shapes.

    Args:
        filepath: Path to the script
        settings: Canvas size and echo options

    Returns:
        0 on success, 1 on error
    """
    settings = settings or RunSettings()

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"{ERROR_PREFIX}Failed to read file at path: {filepath}")
        print(f"{ERROR_PREFIX}{e}")
        return 1

    if settings.echo_source:
        print(f"Stik File contents:\n{source}\n")

    result = Interpreter().run(source)

    if result.shapes:
        canvas = settings.canvas
        print("\n--- Stik Terminal Graphics ---\n")
        print(render_text(result.shapes, canvas.width, canvas.height))
    else:
        print("Stik: No shapes were drawn.")

    return 0 if result.ok else 1


def run_calc(expression: str) -> int:
    """Evaluate a single expression and print the result."""
    try:
        value = calculate(expression)
    except StikError as e:
        print(f"Stik Calculator Error: {e}")
        return 1
    print(f"Stik Calculator Result: {format_value(value)}")
    return 0


def cmd_run(args) -> int:
    try:
        settings = RunSettings(
            canvas=CanvasSettings(width=args.width, height=args.height),
            echo_source=not args.quiet_source,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"])
            print(f"{ERROR_PREFIX}invalid {field}: {err['msg']}")
        return 1
    return run_file(args.file, settings)


def cmd_calc(args) -> int:
    return run_calc(" ".join(args.expression))


def cmd_repl(args) -> int:
    from .repl import run_repl
    run_repl()
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="holystik",
        description="HolyStik: a tiny drawing and calculator language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  holystik run examples/house.hstik\n"
            "  holystik calc \"3 + 5 * (2 - 8)\"\n"
            "  holystik repl\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # run
    p_run = subparsers.add_parser("run", help="Run a .hstik script and render its shapes")
    p_run.add_argument("file", help="Path to the script")
    p_run.add_argument("--width", type=int, default=CanvasSettings().width,
                       help="Canvas width in characters (default: 80)")
    p_run.add_argument("--height", type=int, default=CanvasSettings().height,
                       help="Canvas height in rows (default: 24)")
    p_run.add_argument("--quiet-source", action="store_true",
                       help="Don't echo the script before running it")

    # calc
    p_calc = subparsers.add_parser("calc", help="Evaluate an expression")
    p_calc.add_argument("expression", nargs="+", help="Expression (words are joined with spaces)")

    # repl
    subparsers.add_parser("repl", help="Start an interactive session")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "run": cmd_run,
        "calc": cmd_calc,
        "repl": cmd_repl,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
