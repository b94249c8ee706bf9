"""
HolyStik Interpreter
====================
Statement interpreter that walks the flat token list with a single cursor.

There is no syntax tree: each iteration looks at the token under the
cursor, runs the matching statement handler, and moves the cursor past
whatever that statement consumed. Arithmetic and comparisons are handed
to the Evaluator.

Statement forms:
  - circle x y r / rectangle x y w h / line x1 y1 x2 y2
  - color "name"
  - clear
  - let name = expr        (or bare  name = expr)
  - expr                   (an expression led by a variable is echoed)
  - stik count "message"
  - condition ? a : b

Any other token under the cursor is skipped.
"""
import math
from dataclasses import dataclass, field
from typing import Callable

from .errors import StikError, StikRuntimeError, StikSyntaxError
from .evaluator import BINARY_OPERATORS, Evaluator
from .keywords import lookup
from .lexer import Token, TokenType, tokenize
from .shapes import ColoredShape, build_shape
from .state import ProgramState
from .values import Boolean, Number, Value, format_value, type_name

LOG_PREFIX = "Stik: "
ERROR_PREFIX = "Stik Error: "

# Skipped tokens that may lead into an identifier-led expression
PREFIX_TYPES = BINARY_OPERATORS | {TokenType.LPAREN, TokenType.RPAREN, TokenType.NUMBER, TokenType.STRING}


@dataclass
class RunResult:
    """Everything a script run produced."""
    lines: list[str] = field(default_factory=list)
    shapes: list[ColoredShape] = field(default_factory=list)
    error: StikError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Interpreter:
    """
    Cursor-driven interpreter for HolyStik programs.

    Usage:
        interp = Interpreter()
        result = interp.run(source)
        result.lines, result.shapes
    """

    def __init__(self, output_fn: Callable[[str], None] | None = None,
                 state: ProgramState | None = None):
        self.state = state if state is not None else ProgramState()
        self.evaluator = Evaluator(self.state)
        self.output_fn = output_fn or (lambda s: print(s))
        self.lines: list[str] = []
        self._handlers: dict[TokenType, Callable[[list[Token], int, int], tuple[int, bool]]] = {
            TokenType.KW_CIRCLE: self._exec_draw,
            TokenType.KW_RECTANGLE: self._exec_draw,
            TokenType.KW_LINE: self._exec_draw,
            TokenType.KW_COLOR: self._exec_color,
            TokenType.KW_CLEAR: self._exec_clear,
            TokenType.KW_LET: self._exec_let,
            TokenType.KW_STIK: self._exec_stik,
            TokenType.IDENTIFIER: self._exec_identifier,
            TokenType.TERNARY: self._exec_ternary,
        }

    # ─────────────────────────────────────────────────────────
    #  Entry Points
    # ─────────────────────────────────────────────────────────

    def run(self, source: str) -> RunResult:
        """Tokenize and execute ``source`` on a fresh program state.

        The first error stops the run. Lines emitted before it are kept
        and a single error line is appended.
        """
        self.reset()
        return self.run_incremental(source)

    def run_incremental(self, source: str) -> RunResult:
        """Like run(), but keeps the current program state (REPL use)."""
        start = len(self.lines)
        error = None
        try:
            self.execute(tokenize(source))
        except StikError as exc:
            error = exc
            self._emit(f"{ERROR_PREFIX}{exc}")
        return RunResult(self.lines[start:], list(self.state.shapes), error)

    def reset(self):
        """Start over with empty variables, shapes and output."""
        self.state = ProgramState()
        self.evaluator = Evaluator(self.state)
        self.lines = []

    def execute(self, tokens: list[Token]) -> list[str]:
        """Execute every statement in ``tokens``; return the lines emitted."""
        start = len(self.lines)
        index = 0
        window = 0  # first token of the statement being scanned

        while index < len(tokens):
            handler = self._handlers.get(tokens[index].type)
            if handler is None:
                index += 1
                continue
            index, completed = handler(tokens, index, window)
            if completed:
                window = index

        return self.lines[start:]

    def _emit(self, line: str):
        self.lines.append(line)
        self.output_fn(line)

    # ─────────────────────────────────────────────────────────
    #  Drawing
    # ─────────────────────────────────────────────────────────

    def _exec_draw(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """circle / rectangle / line: a fixed number of scalar arguments."""
        keyword = tokens[index]
        arity = lookup(keyword.value).arity
        arg_tokens = tokens[index + 1:index + 1 + arity]
        if len(arg_tokens) < arity:
            raise StikSyntaxError.at(
                keyword, f"'{keyword.value}' needs {arity} arguments",
                expected=f"{arity} arguments", found=str(len(arg_tokens)),
            )

        args = [self._scalar(token) for token in arg_tokens]
        shape = self.state.add_shape(build_shape(keyword.value, args))
        self._emit(LOG_PREFIX + shape.geometry.describe())
        return index + 1 + arity, True

    def _scalar(self, token: Token) -> float:
        value = self.evaluator.evaluate_operand(token)
        if not isinstance(value, Number):
            raise StikRuntimeError.at(
                token, "draw arguments must be numbers",
                expected="number", found=type_name(value),
            )
        if not math.isfinite(value.value):
            raise StikRuntimeError.at(
                token, "draw arguments must be finite",
                expected="finite number", found=format_value(value),
            )
        return value.value

    def _exec_color(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """color "name": set the color for subsequent shapes."""
        keyword = tokens[index]
        color = tokens[index + 1] if index + 1 < len(tokens) else None
        if color is None or color.type != TokenType.STRING:
            raise StikSyntaxError.at(
                color or keyword, "'color' expects a string literal",
                expected="string literal", found="end of input" if color is None else repr(color.value),
            )
        self.state.current_color = color.value
        self._emit(f"{LOG_PREFIX}Drawing color set to {color.value}.")
        return index + 2, True

    def _exec_clear(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """clear: drop every shape, keep the variables."""
        self.state.clear()
        self._emit(f"{LOG_PREFIX}Canvas cleared.")
        return index + 1, True

    # ─────────────────────────────────────────────────────────
    #  Bindings & Expressions
    # ─────────────────────────────────────────────────────────

    def _exec_let(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """let name = expr"""
        name = tokens[index + 1] if index + 1 < len(tokens) else None
        if name is None or name.type != TokenType.IDENTIFIER:
            raise StikSyntaxError.at(
                name or tokens[index], "invalid variable name",
                expected="identifier", found="end of input" if name is None else repr(name.value),
            )
        if index + 2 >= len(tokens) or tokens[index + 2].type != TokenType.ASSIGN:
            found = tokens[index + 2] if index + 2 < len(tokens) else None
            raise StikSyntaxError.at(
                found or name, f"expected '=' after variable name '{name.value}'",
                expected="'='", found="end of input" if found is None else repr(found.value),
            )
        return self._assign(tokens, index + 1), True

    def _exec_identifier(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """name = expr, or an expression statement led by a variable."""
        if index + 1 < len(tokens) and tokens[index + 1].type == TokenType.ASSIGN:
            return self._assign(tokens, index), True

        start = self._expression_start(tokens, window, index)
        value, consumed = self.evaluator.evaluate(tokens, start)
        end = start + consumed
        if end <= index:
            # The skipped tokens closed their own expression before the name.
            value, consumed = self.evaluator.evaluate(tokens, index)
            end = index + consumed
        if end < len(tokens) and tokens[end].type == TokenType.TERNARY:
            # The expression is a ternary condition; leave it to the '?'.
            return end, False
        self._emit(format_value(value))
        return end, True

    @staticmethod
    def _expression_start(tokens: list[Token], window: int, index: int) -> int:
        """Where an expression containing tokens[index] begins.

        Tokens skipped since the last statement (``(a > 1)``, ``2 * a``)
        belong to the expression when they open a group or end in an
        operator; otherwise the expression starts at the name.
        """
        prefix = tokens[window:index]
        if not prefix:
            return index
        if not all(t.type in PREFIX_TYPES for t in prefix):
            return index
        if prefix[0].type not in (TokenType.LPAREN, TokenType.NUMBER, TokenType.STRING):
            return index
        if prefix[-1].type not in BINARY_OPERATORS and prefix[-1].type != TokenType.LPAREN:
            return index
        return window

    def _assign(self, tokens: list[Token], index: int) -> int:
        """Bind tokens[index] to the expression after tokens[index + 1] ('=')."""
        name = tokens[index].value
        value, consumed = self.evaluator.evaluate(tokens, index + 2)
        self.state.set_variable(name, value)
        self._emit(f"{LOG_PREFIX}Variable {name} set to {format_value(value)}.")
        return index + 2 + consumed

    # ─────────────────────────────────────────────────────────
    #  Control Forms
    # ─────────────────────────────────────────────────────────

    def _exec_stik(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """stik count "message": emit the message count times."""
        if index + 2 >= len(tokens):
            raise StikSyntaxError.at(tokens[index], "incomplete stik statement",
                                     expected="count and message", found="end of input")

        count_token, message_token = tokens[index + 1], tokens[index + 2]
        if count_token.type != TokenType.NUMBER or not count_token.value.isdigit():
            raise StikSyntaxError.at(
                count_token, "loop count must be a non-negative integer",
                expected="non-negative integer literal", found=repr(count_token.value),
            )
        if message_token.type != TokenType.STRING:
            raise StikSyntaxError.at(
                message_token, "loop message must be a string",
                expected="string literal", found=repr(message_token.value),
            )

        for _ in range(int(count_token.value)):
            self._emit(message_token.value)
        return index + 3, True

    def _exec_ternary(self, tokens: list[Token], index: int, window: int) -> tuple[int, bool]:
        """condition ? a : b; the condition is the statement window before '?'."""
        question = tokens[index]
        if window >= index:
            raise StikSyntaxError.at(question, "invalid ternary expression: missing condition")
        if index + 3 >= len(tokens) or tokens[index + 2].type != TokenType.COLON:
            raise StikSyntaxError.at(question, "invalid ternary format",
                                     expected="'? value : value'")

        condition, consumed = self.evaluator.evaluate(tokens[window:index])
        if consumed < index - window:
            stray = tokens[window + consumed]
            raise StikSyntaxError.at(
                stray, "unexpected token in ternary condition",
                expected="'?'", found=repr(stray.value),
            )
        chosen = tokens[index + 1] if self._truthy(condition) else tokens[index + 3]
        self._emit(format_value(self.evaluator.evaluate_operand(chosen)))
        return index + 4, True

    @staticmethod
    def _truthy(value: Value) -> bool:
        """Ternary conditions: a Boolean decides; anything else counts as false."""
        match value:
            case Boolean(flag):
                return flag
        return False
