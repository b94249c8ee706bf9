"""
HolyStik Program State
======================
The one mutable aggregate of an interpreter run: variable bindings, the
ordered shape list and the current drawing color.
"""
from dataclasses import dataclass, field

from .errors import UndefinedVariable
from .shapes import ColoredShape, Shape
from .values import Value

DEFAULT_COLOR = "black"


@dataclass
class ProgramState:
    """
    State owned by a single interpreter run.

    Invariants:
      - a variable always maps to the value most recently assigned to it
      - shapes keep insertion order and are never reordered
      - clear() empties the shapes but leaves the variables alone
    """
    variables: dict[str, Value] = field(default_factory=dict)
    shapes: list[ColoredShape] = field(default_factory=list)
    current_color: str = DEFAULT_COLOR

    def add_shape(self, geometry: Shape) -> ColoredShape:
        shape = ColoredShape(geometry, self.current_color)
        self.shapes.append(shape)
        return shape

    def clear(self):
        self.shapes.clear()

    def set_variable(self, name: str, value: Value):
        self.variables[name] = value

    def get_variable(self, name: str, line: int | None = None, col: int | None = None) -> Value:
        if name in self.variables:
            return self.variables[name]
        raise UndefinedVariable(name, line=line, col=col)
