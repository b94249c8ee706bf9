"""
HolyStik Errors
===============
The closed set of failures a script run can end with. Every error is
fatal to the run that raised it; none of them is fatal to the host.

Each error carries structured context (kind, source position, and an
expected/found pair where one applies) so callers can branch on
``error.kind`` instead of matching message text.
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .lexer import Token


class ErrorKind(Enum):
    """Every way a HolyStik run can fail."""
    LEX                = "Lex Error"
    SYNTAX             = "Syntax Error"
    UNDEFINED_VARIABLE = "Undefined Variable"
    DIVISION_BY_ZERO   = "Division By Zero"
    RUNTIME            = "Runtime Error"


class StikError(Exception):
    """Base class for every HolyStik failure."""

    kind: ErrorKind = ErrorKind.RUNTIME

    def __init__(self, message: str, *, line: int | None = None, col: int | None = None,
                 expected: str | None = None, found: str | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col
        self.expected = expected
        self.found = found

    @classmethod
    def at(cls, token: Token | None, message: str, **context) -> StikError:
        """Build an error positioned at ``token`` (or unpositioned if None)."""
        if token is None:
            return cls(message, **context)
        return cls(message, line=token.line, col=token.col, **context)

    def __str__(self) -> str:
        text = f"{self.kind.value}: {self.message}"
        if self.expected is not None and self.found is not None:
            text += f" (expected {self.expected}, found {self.found})"
        if self.line is not None:
            text += f" at L{self.line}:{self.col}"
        return text


class LexError(StikError):
    """No token pattern matches the remaining input."""
    kind = ErrorKind.LEX

    def __init__(self, message: str, *, snippet: str = "", **context):
        super().__init__(message, **context)
        self.snippet = snippet


class StikSyntaxError(StikError):
    """Malformed statement or expression shape."""
    kind = ErrorKind.SYNTAX


class UndefinedVariable(StikError):
    """An identifier was read before it was assigned."""
    kind = ErrorKind.UNDEFINED_VARIABLE

    def __init__(self, name: str, **context):
        super().__init__(f"'{name}' is not defined", **context)
        self.name = name


class DivisionByZero(StikError):
    """The right operand of ``/`` evaluated to zero."""
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, message: str = "division by zero", **context):
        super().__init__(message, **context)


class StikRuntimeError(StikError):
    """An operator was applied to operands of the wrong types."""
    kind = ErrorKind.RUNTIME
