"""
HolyStik REPL
=============
Interactive Read-Eval-Print Loop. Every line runs against one shared
program state, so variables and shapes carry over between lines.
"""
from typing import Callable

from .config import CanvasSettings
from .interpreter import Interpreter
from .keywords import describe_all
from .rasterizer import render_text
from .values import format_value


BANNER = r"""
╔══════════════════════════════════════════════════════════════╗
║                                                              ║
║     ─── HOLYSTIK ───                                         ║
║                                                              ║
║     Shapes, variables and a calculator on one line           ║
║     Type 'help' for the keyword reference                    ║
║     Type 'exit' or Ctrl+C to quit                            ║
║                                                              ║
╚══════════════════════════════════════════════════════════════╝
"""

HELP_TEXT = """
Examples:
  let r = 4 + 2
  circle 40 12 r
  color "red"
  rectangle 10 5 20 8
  r > 5 ? "big" : "small"
  stik 2 "hello"

Commands: help, vars, shapes, show, reset, exit
"""


def handle_command(line: str, interp: Interpreter, canvas: CanvasSettings,
                   out: Callable[[str], None] = print) -> bool:
    """Run a REPL meta-command. Returns False if ``line`` is not one."""
    command = line.lower()

    if command == "help":
        out(describe_all())
        out(HELP_TEXT)
    elif command == "vars":
        if interp.state.variables:
            out("  ─── Variables ───")
            for name, value in interp.state.variables.items():
                out(f"    {name} = {format_value(value)}")
        else:
            out("  (no variables)")
    elif command == "shapes":
        if interp.state.shapes:
            out("  ─── Shapes ───")
            for shape in interp.state.shapes:
                out(f"    [{shape.color}] {shape.geometry.describe()}")
        else:
            out("  (no shapes)")
    elif command == "show":
        out(render_text(interp.state.shapes, canvas.width, canvas.height))
    elif command == "reset":
        interp.reset()
        out("  State cleared.")
    else:
        return False
    return True


def run_repl(canvas: CanvasSettings | None = None):
    """Run the interactive HolyStik REPL."""
    canvas = canvas or CanvasSettings()
    print(BANNER)

    interp = Interpreter(output_fn=lambda s: print(f"  {s}"))

    while True:
        try:
            line = input("  stik> ")
        except (EOFError, KeyboardInterrupt):
            print("\n  Goodbye.")
            break

        line = line.strip()
        if not line:
            continue

        if line.lower() in ("exit", "quit"):
            print("  Goodbye.")
            break

        if handle_command(line, interp, canvas):
            continue

        # Errors are already reported by the interpreter as a Stik Error line
        interp.run_incremental(line)
