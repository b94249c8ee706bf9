"""
HolyStik CLI Tests
==================
File runner, calculator mode, argument parsing, settings validation and
the REPL meta-commands.

Usage:
    python -m unittest tests.test_cli -v
"""
import sys
import os
import io
import tempfile
import unittest
from contextlib import redirect_stdout

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from holystik.cli import build_parser, main, run_calc, run_file
from holystik.config import CanvasSettings, RunSettings
from holystik.interpreter import Interpreter
from holystik.repl import handle_command


def capture(fn, *args, **kwargs):
    buf = io.StringIO()
    with redirect_stdout(buf):
        code = fn(*args, **kwargs)
    return code, buf.getvalue()


class ScriptFileMixin:
    """Writes throwaway .hstik files into a temporary directory."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self._tmp.cleanup()

    def write_script(self, source: str, name: str = "script.hstik") -> str:
        path = os.path.join(self._tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(source)
        return path


# ─────────────────────────────────────────────
#  Settings
# ─────────────────────────────────────────────

class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = RunSettings()
        self.assertEqual((settings.canvas.width, settings.canvas.height), (80, 24))
        self.assertTrue(settings.echo_source)

    def test_rejects_non_positive_size(self):
        with self.assertRaises(ValidationError):
            CanvasSettings(width=0)
        with self.assertRaises(ValidationError):
            CanvasSettings(height=-3)

    def test_rejects_huge_size(self):
        with self.assertRaises(ValidationError):
            CanvasSettings(width=5000)


# ─────────────────────────────────────────────
#  File Runner
# ─────────────────────────────────────────────

class TestRunFile(ScriptFileMixin, unittest.TestCase):

    def test_renders_shapes(self):
        path = self.write_script("circle 5 5 2")
        settings = RunSettings(canvas=CanvasSettings(width=20, height=10))
        code, out = capture(run_file, path, settings)
        self.assertEqual(code, 0)
        self.assertIn("Stik File contents:\ncircle 5 5 2\n", out)
        self.assertIn("Stik: Circle drawn at (5, 5) with radius 2.", out)
        self.assertIn("--- Stik Terminal Graphics ---", out)
        self.assertIn("o", out.split("--- Stik Terminal Graphics ---")[1])

    def test_no_shapes(self):
        path = self.write_script('stik 1 "hi"')
        code, out = capture(run_file, path)
        self.assertEqual(code, 0)
        self.assertIn("hi", out)
        self.assertIn("Stik: No shapes were drawn.", out)
        self.assertNotIn("Terminal Graphics", out)

    def test_quiet_source(self):
        path = self.write_script("line 0 0 3 0")
        code, out = capture(run_file, path, RunSettings(echo_source=False))
        self.assertEqual(code, 0)
        self.assertNotIn("Stik File contents", out)

    def test_missing_file(self):
        missing = os.path.join(self._tmp.name, "nope.hstik")
        code, out = capture(run_file, missing)
        self.assertEqual(code, 1)
        self.assertIn(f"Stik Error: Failed to read file at path: {missing}", out)

    def test_script_error_exits_nonzero(self):
        path = self.write_script("circle 1 1 1\nlet x = 1 / 0")
        code, out = capture(run_file, path)
        self.assertEqual(code, 1)
        self.assertIn("Stik Error: Division By Zero", out)
        # Shapes drawn before the error are still rendered
        self.assertIn("--- Stik Terminal Graphics ---", out)


# ─────────────────────────────────────────────
#  Calculator
# ─────────────────────────────────────────────

class TestRunCalc(unittest.TestCase):

    def test_result(self):
        code, out = capture(run_calc, "3 + 5 * 2")
        self.assertEqual(code, 0)
        self.assertEqual(out, "Stik Calculator Result: 13\n")

    def test_negative_result(self):
        _, out = capture(run_calc, "3 + 5 * (2 - 8)")
        self.assertEqual(out, "Stik Calculator Result: -27\n")

    def test_comparison_result(self):
        _, out = capture(run_calc, "2 < 3")
        self.assertEqual(out, "Stik Calculator Result: true\n")

    def test_error(self):
        code, out = capture(run_calc, "1 / 0")
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Stik Calculator Error: Division By Zero"))

    def test_variables_are_undefined(self):
        code, out = capture(run_calc, "x * 2")
        self.assertEqual(code, 1)
        self.assertIn("Undefined Variable", out)


# ─────────────────────────────────────────────
#  Argument Parsing
# ─────────────────────────────────────────────

class TestMain(ScriptFileMixin, unittest.TestCase):

    def test_parser_defaults(self):
        args = build_parser().parse_args(["run", "a.hstik"])
        self.assertEqual((args.width, args.height, args.quiet_source), (80, 24, False))

    def test_calc_joins_words(self):
        code, out = capture(main, ["calc", "2", "*", "21"])
        self.assertEqual(code, 0)
        self.assertIn("Stik Calculator Result: 42", out)

    def test_run(self):
        path = self.write_script("rectangle 0 0 4 3")
        code, out = capture(main, ["run", path, "--width", "10", "--height", "5", "--quiet-source"])
        self.assertEqual(code, 0)
        self.assertIn("####", out)
        self.assertNotIn("Stik File contents", out)

    def test_run_invalid_canvas(self):
        path = self.write_script("circle 1 1 1")
        code, out = capture(main, ["run", path, "--width", "0"])
        self.assertEqual(code, 1)
        self.assertIn("Stik Error: invalid width", out)

    def test_no_command(self):
        code, out = capture(main, [])
        self.assertEqual(code, 1)
        self.assertIn("usage", out.lower())


# ─────────────────────────────────────────────
#  REPL Commands
# ─────────────────────────────────────────────

class TestReplCommands(unittest.TestCase):

    def setUp(self):
        self.interp = Interpreter(output_fn=lambda s: None)
        self.canvas = CanvasSettings(width=12, height=6)
        self.out = []

    def _command(self, line: str) -> bool:
        return handle_command(line, self.interp, self.canvas, out=self.out.append)

    def test_not_a_command(self):
        self.assertFalse(self._command("circle 1 1 1"))
        self.assertEqual(self.out, [])

    def test_vars(self):
        self.interp.run_incremental("let a = 2 * 3")
        self.assertTrue(self._command("vars"))
        self.assertIn("    a = 6", self.out)

    def test_vars_empty(self):
        self._command("vars")
        self.assertEqual(self.out, ["  (no variables)"])

    def test_shapes(self):
        self.interp.run_incremental('color "red"\ncircle 3 3 2')
        self._command("shapes")
        self.assertIn("    [red] Circle drawn at (3, 3) with radius 2.", self.out)

    def test_show(self):
        self.interp.run_incremental("line 0 0 2 0")
        self._command("show")
        self.assertEqual(self.out[0].split("\n")[0], "***         ")
        self.assertEqual(len(self.out[0].split("\n")), 6)

    def test_reset(self):
        self.interp.run_incremental("let a = 1\ncircle 1 1 1")
        self._command("reset")
        self.assertEqual(self.interp.state.variables, {})
        self.assertEqual(self.interp.state.shapes, [])

    def test_help_lists_keywords(self):
        self._command("HELP")
        self.assertIn("stik", "\n".join(self.out))


if __name__ == "__main__":
    unittest.main(verbosity=2)
