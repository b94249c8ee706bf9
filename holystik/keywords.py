"""
HolyStik Keyword Registry
=========================
Maps each statement keyword to its token type, arity and usage.
The lexer builds its keyword patterns from this table (in declaration
order) and the interpreter reads draw-command arity from it.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class KeywordKind(Enum):
    """The statement families a keyword can open."""
    DRAW     = auto()  # circle, rectangle, line
    STYLE    = auto()  # color
    CANVAS   = auto()  # clear
    BINDING  = auto()  # let
    LOOP     = auto()  # stik


@dataclass(frozen=True)
class KeywordInfo:
    """
    A HolyStik statement keyword.

    Each keyword carries:
      - word:        The source spelling
      - name:        Human-readable name
      - kind:        The statement family
      - token_name:  Name of the TokenType member the lexer emits
      - arity:       Number of single-token arguments that follow
      - usage:       Example form
      - intent:      What the statement does
    """
    word: str
    name: str
    kind: KeywordKind
    token_name: str
    arity: int
    usage: str
    intent: str
    description: Optional[str] = None


# ─────────────────────────────────────────────────────────────
#  THE KEYWORD REGISTRY
# ─────────────────────────────────────────────────────────────

KEYWORD_REGISTRY: dict[str, KeywordInfo] = {

    "circle": KeywordInfo(
        word="circle",
        name="Circle",
        kind=KeywordKind.DRAW,
        token_name="KW_CIRCLE",
        arity=3,
        usage="circle x y radius",
        intent="Draw a one-cell-thick ring around (x, y).",
    ),

    "rectangle": KeywordInfo(
        word="rectangle",
        name="Rectangle",
        kind=KeywordKind.DRAW,
        token_name="KW_RECTANGLE",
        arity=4,
        usage="rectangle x y width height",
        intent="Draw the outline of a box from its top-left corner.",
    ),

    "line": KeywordInfo(
        word="line",
        name="Line",
        kind=KeywordKind.DRAW,
        token_name="KW_LINE",
        arity=4,
        usage="line x1 y1 x2 y2",
        intent="Draw a straight segment between two points.",
    ),

    "color": KeywordInfo(
        word="color",
        name="Color",
        kind=KeywordKind.STYLE,
        token_name="KW_COLOR",
        arity=1,
        usage='color "red"',
        intent="Set the color tagged onto shapes drawn afterwards.",
        description="The argument must be a string literal.",
    ),

    "clear": KeywordInfo(
        word="clear",
        name="Clear",
        kind=KeywordKind.CANVAS,
        token_name="KW_CLEAR",
        arity=0,
        usage="clear",
        intent="Remove every shape drawn so far. Variables survive.",
    ),

    "let": KeywordInfo(
        word="let",
        name="Let",
        kind=KeywordKind.BINDING,
        token_name="KW_LET",
        arity=0,
        usage="let size = 5 + 10 * 2",
        intent="Bind a variable to the value of an expression.",
        description="The bare form `size = 5` is accepted as well.",
    ),

    "stik": KeywordInfo(
        word="stik",
        name="Stik",
        kind=KeywordKind.LOOP,
        token_name="KW_STIK",
        arity=2,
        usage='stik 3 "hello"',
        intent="Print a message a fixed number of times.",
        description="The count must be a non-negative integer literal.",
    ),
}



def lookup(word: str) -> KeywordInfo | None:
    """Look up a keyword by its source spelling."""
    return KEYWORD_REGISTRY.get(word)


def describe_all() -> str:
    """Return a formatted table of all keywords for REPL help."""
    lines = [
        "╔════════════╦══════════════════════════════╦══════════════════════════════════════════════╗",
        "║ Keyword    ║ Usage                        ║ Intent                                       ║",
        "╠════════════╬══════════════════════════════╬══════════════════════════════════════════════╣",
    ]
    for word, info in KEYWORD_REGISTRY.items():
        usage = info.usage[:28].ljust(28)
        intent = info.intent[:44].ljust(44)
        lines.append(f"║ {word.ljust(10)} ║ {usage} ║ {intent} ║")
    lines.append("╚════════════╩══════════════════════════════╩══════════════════════════════════════════════╝")
    return "\n".join(lines)
