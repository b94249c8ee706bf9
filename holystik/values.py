"""
HolyStik Values
===============
The three runtime value types. Every expression evaluates to exactly one
of them; operators match on the pair of operand types and reject any
pairing they do not define.
"""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Number:
    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Boolean:
    value: bool


Value = Number | Text | Boolean


def type_name(value: Value) -> str:
    """Name of a value's type as shown in error messages."""
    match value:
        case Number():
            return "number"
        case Text():
            return "string"
        case Boolean():
            return "boolean"
    raise TypeError(f"not a HolyStik value: {value!r}")


def format_number(number: float) -> str:
    """Natural form of a number: ``25`` rather than ``25.0``."""
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return str(number)


def format_value(value: Value) -> str:
    """Format a value for display."""
    match value:
        case Number(number):
            return format_number(number)
        case Text(text):
            return text
        case Boolean(flag):
            return "true" if flag else "false"
    raise TypeError(f"not a HolyStik value: {value!r}")
