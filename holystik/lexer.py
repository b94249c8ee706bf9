"""
HolyStik Lexer
==============
Tokenizes HolyStik source into a flat list of typed tokens.

The lexer walks an ordered pattern table and takes the first pattern that
matches at the current position. Order matters: string and number literals
come first, keywords before the generic identifier, and two-character
comparisons before ``<``, ``>`` and ``=``. Whitespace (newlines included)
separates tokens and is otherwise discarded; statements are told apart
downstream by their leading keyword or identifier.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .errors import LexError
from .keywords import KEYWORD_REGISTRY


class TokenType(Enum):
    """All token types in the HolyStik language."""
    # Literals
    NUMBER       = auto()   # 42, -3, 2.5
    STRING       = auto()   # "..."
    IDENTIFIER   = auto()   # variable names

    # Keywords
    KW_CIRCLE    = auto()
    KW_RECTANGLE = auto()
    KW_LINE      = auto()
    KW_COLOR     = auto()
    KW_CLEAR     = auto()
    KW_LET       = auto()
    KW_STIK      = auto()

    # Arithmetic operators
    PLUS         = auto()   # +
    MINUS        = auto()   # -
    STAR         = auto()   # *
    SLASH        = auto()   # /

    # Comparison operators
    EQ           = auto()   # ==
    NEQ          = auto()   # !=
    LTE          = auto()   # <=
    GTE          = auto()   # >=
    LT           = auto()   # <
    GT           = auto()   # >

    # Punctuation
    TERNARY      = auto()   # ?
    COLON        = auto()   # :
    ASSIGN       = auto()   # =
    LPAREN       = auto()   # (
    RPAREN       = auto()   # )
    COMMA        = auto()   # ,


ARITHMETIC_OPERATORS = frozenset({
    TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
})

COMPARISON_OPERATORS = frozenset({
    TokenType.EQ, TokenType.NEQ, TokenType.LTE,
    TokenType.GTE, TokenType.LT, TokenType.GT,
})

KEYWORD_TYPES = frozenset(
    TokenType[info.token_name] for info in KEYWORD_REGISTRY.values()
)


@dataclass(frozen=True)
class Token:
    """A single token from HolyStik source."""
    type: TokenType
    value: str
    line: int = 1
    col: int = 1

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.col})"


# Ordered pattern table. The first entry that matches wins.
TOKEN_PATTERNS: list[tuple[TokenType, re.Pattern]] = [
    (TokenType.STRING, re.compile(r'"[^"]*"')),
    (TokenType.NUMBER, re.compile(r"-?\d+(\.\d+)?")),
    *[
        (TokenType[info.token_name], re.compile(re.escape(word) + r"\b"))
        for word, info in KEYWORD_REGISTRY.items()
    ],
    (TokenType.IDENTIFIER, re.compile(r"[A-Za-z_][A-Za-z0-9_]*")),
    (TokenType.EQ, re.compile(r"==")),
    (TokenType.NEQ, re.compile(r"!=")),
    (TokenType.LTE, re.compile(r"<=")),
    (TokenType.GTE, re.compile(r">=")),
    (TokenType.LT, re.compile(r"<")),
    (TokenType.GT, re.compile(r">")),
    (TokenType.ASSIGN, re.compile(r"=")),
    (TokenType.PLUS, re.compile(r"\+")),
    (TokenType.MINUS, re.compile(r"-")),
    (TokenType.STAR, re.compile(r"\*")),
    (TokenType.SLASH, re.compile(r"/")),
    (TokenType.TERNARY, re.compile(r"\?")),
    (TokenType.COLON, re.compile(r":")),
    (TokenType.LPAREN, re.compile(r"\(")),
    (TokenType.RPAREN, re.compile(r"\)")),
    (TokenType.COMMA, re.compile(r",")),
]

_WHITESPACE = re.compile(r"\s+")


class Lexer:
    """
    Tokenizes HolyStik source code.

    Usage:
        lexer = Lexer(source_code)
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1

    def _advance(self, length: int) -> str:
        """Consume ``length`` characters, keeping line/col in step."""
        text = self.source[self.pos:self.pos + length]
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.col = len(text) - text.rfind("\n")
        else:
            self.col += length
        self.pos += length
        return text

    def _skip_whitespace(self):
        match = _WHITESPACE.match(self.source, self.pos)
        if match:
            self._advance(match.end() - self.pos)

    def _snippet(self, width: int = 20) -> str:
        rest = self.source[self.pos:].split("\n", 1)[0]
        return rest if len(rest) <= width else rest[:width] + "..."

    def _read_token(self) -> Token:
        """Match the next token against the ordered pattern table."""
        for token_type, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.source, self.pos)
            if match is None:
                continue
            line, col = self.line, self.col
            text = self._advance(match.end() - self.pos)
            if token_type == TokenType.STRING:
                text = text[1:-1]
            return Token(token_type, text, line, col)

        snippet = self._snippet()
        raise LexError(
            f"invalid token at '{snippet}'",
            snippet=snippet, line=self.line, col=self.col,
        )

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source into a list of tokens."""
        return list(self._iter_tokens())

    def _iter_tokens(self) -> Iterator[Token]:
        """Generate tokens one at a time."""
        while self.pos < len(self.source):
            self._skip_whitespace()
            if self.pos >= len(self.source):
                break
            yield self._read_token()


def tokenize(source: str) -> list[Token]:
    """Tokenize ``source`` in one call."""
    return Lexer(source).tokenize()
