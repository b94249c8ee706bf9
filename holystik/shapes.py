"""
HolyStik Shapes
===============
Immutable geometry produced by the draw statements. Coordinates are kept
as floats; the rasterizer truncates them when it stamps the grid.
"""
from dataclasses import dataclass

from .values import format_number


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __str__(self) -> str:
        return f"({format_number(self.x)}, {format_number(self.y)})"


@dataclass(frozen=True)
class Size:
    width: float
    height: float

    def __str__(self) -> str:
        return f"{format_number(self.width)}x{format_number(self.height)}"


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float

    def describe(self) -> str:
        return f"Circle drawn at {self.center} with radius {format_number(self.radius)}."


@dataclass(frozen=True)
class Rectangle:
    origin: Point
    size: Size

    def describe(self) -> str:
        return f"Rectangle drawn at {self.origin} with size {self.size}."


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point

    def describe(self) -> str:
        return f"Line drawn from {self.start} to {self.end}."


Shape = Circle | Rectangle | Line


@dataclass(frozen=True)
class ColoredShape:
    """A shape tagged with the drawing color current when it was added."""
    geometry: Shape
    color: str


def build_shape(keyword: str, args: list[float]) -> Shape:
    """Construct the geometry a draw keyword describes from its arguments."""
    match keyword, args:
        case "circle", [x, y, radius]:
            return Circle(Point(x, y), radius)
        case "rectangle", [x, y, width, height]:
            return Rectangle(Point(x, y), Size(width, height))
        case "line", [x1, y1, x2, y2]:
            return Line(Point(x1, y1), Point(x2, y2))
    raise ValueError(f"cannot build {keyword!r} from {len(args)} argument(s)")
