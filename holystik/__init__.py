# HolyStik: a tiny drawing and calculator language
"""
HolyStik: lex a script, evaluate its expressions, run its drawing
statements and rasterize the shapes onto a character grid.
"""
from .keywords import KEYWORD_REGISTRY, KeywordInfo
from .lexer import Lexer, Token, TokenType, tokenize
from .errors import (
    ErrorKind, StikError, LexError, StikSyntaxError,
    UndefinedVariable, DivisionByZero, StikRuntimeError,
)
from .values import Value, Number, Text, Boolean, format_value
from .shapes import Point, Size, Circle, Rectangle, Line, ColoredShape
from .state import ProgramState
from .evaluator import Evaluator, calculate
from .interpreter import Interpreter, RunResult
from .rasterizer import render, render_text, grid_to_text
from .config import CanvasSettings, RunSettings

__version__ = "0.1.0"
__all__ = [
    "KEYWORD_REGISTRY", "KeywordInfo",
    "Lexer", "Token", "TokenType", "tokenize",
    "ErrorKind", "StikError", "LexError", "StikSyntaxError",
    "UndefinedVariable", "DivisionByZero", "StikRuntimeError",
    "Value", "Number", "Text", "Boolean", "format_value",
    "Point", "Size", "Circle", "Rectangle", "Line", "ColoredShape",
    "ProgramState",
    "Evaluator", "calculate",
    "Interpreter", "RunResult",
    "render", "render_text", "grid_to_text",
    "CanvasSettings", "RunSettings",
]
