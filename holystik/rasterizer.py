"""
HolyStik Terminal Rasterizer
============================
Draws a shape list onto a fixed-size character grid.

    circle     'o'  cells whose distance from the center is within 1 of the radius
    rectangle  '#'  the four edges of the truncated box
    line       '*'  Bresenham steps between the truncated endpoints

Shapes are drawn in order and later marks overwrite earlier ones. Cells
outside the grid are skipped, never an error, and a shape with an
infinite or NaN coordinate draws nothing. Color is not rendered.
"""
import math
from typing import Iterable, Iterator

from .shapes import Circle, ColoredShape, Line, Rectangle, Shape

Grid = list[list[str]]

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24

CIRCLE_MARK = "o"
RECTANGLE_MARK = "#"
LINE_MARK = "*"
BLANK = " "


def make_grid(width: int, height: int) -> Grid:
    return [[BLANK] * width for _ in range(height)]


def _plot(grid: Grid, x: int, y: int, mark: str):
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        grid[y][x] = mark


def _grid_width(grid: Grid) -> int:
    return len(grid[0]) if grid else 0


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def draw_circle(circle: Circle, grid: Grid):
    """Mark every cell on the one-unit-thick ring around the center."""
    cx, cy, r = circle.center.x, circle.center.y, circle.radius
    if not _finite(cx, cy, r):
        return
    for y, row in enumerate(grid):
        for x in range(len(row)):
            if abs(math.hypot(x - cx, y - cy) - r) < 1.0:
                row[x] = CIRCLE_MARK


def draw_rectangle(rectangle: Rectangle, grid: Grid):
    """Stamp the border of the rectangle; the interior is left alone."""
    coords = (rectangle.origin.x, rectangle.origin.y, rectangle.size.width, rectangle.size.height)
    if not _finite(*coords):
        return
    x, y, w, h = (int(v) for v in coords)

    # Edges are walked only across the cells the grid has
    for i in range(max(x, 0), min(x + w, _grid_width(grid))):
        _plot(grid, i, y, RECTANGLE_MARK)
        _plot(grid, i, y + h - 1, RECTANGLE_MARK)
    for j in range(max(y, 0), min(y + h, len(grid))):
        _plot(grid, x, j, RECTANGLE_MARK)
        _plot(grid, x + w - 1, j, RECTANGLE_MARK)


def draw_line(line: Line, grid: Grid):
    """Bresenham line between the truncated endpoints; off-grid cells are skipped."""
    coords = (line.start.x, line.start.y, line.end.x, line.end.y)
    if not _finite(*coords):
        return
    x0, y0, x1, y1 = (int(v) for v in coords)

    if abs(x1 - x0) >= abs(y1 - y0):
        for x, y in _bresenham(x0, y0, x1, y1, _grid_width(grid)):
            _plot(grid, x, y, LINE_MARK)
    else:
        for y, x in _bresenham(y0, x0, y1, x1, len(grid)):
            _plot(grid, x, y, LINE_MARK)


def _bresenham(a0: int, b0: int, a1: int, b1: int, limit: int) -> Iterator[tuple[int, int]]:
    """
    Cells of a line along its major axis ``a`` (|da| >= |db|).

    Step i sits at a0 + i * sign(a1 - a0), and the minor axis takes
    the nearest cell to the ideal line, ties going toward the start. Only
    the steps with 0 <= a < limit are produced, so a far-off endpoint
    costs nothing.
    """
    da = abs(a1 - a0)
    db = abs(b1 - b0)
    sa = 1 if a1 >= a0 else -1
    sb = 1 if b1 >= b0 else -1

    if sa > 0:
        first, last = max(0, -a0), min(da, limit - 1 - a0)
    else:
        first, last = max(0, a0 - (limit - 1)), min(da, a0)

    for i in range(first, last + 1):
        offset = -((da - 2 * i * db) // (2 * da)) if da else 0
        yield a0 + sa * i, b0 + sb * offset


def draw_shape(shape: Shape, grid: Grid):
    match shape:
        case Circle():
            draw_circle(shape, grid)
        case Rectangle():
            draw_rectangle(shape, grid)
        case Line():
            draw_line(shape, grid)
        case _:
            raise TypeError(f"cannot draw {shape!r}")


def render(shapes: Iterable[ColoredShape | Shape],
           width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> Grid:
    """Draw ``shapes`` in order onto a fresh ``height`` x ``width`` grid."""
    grid = make_grid(width, height)
    for shape in shapes:
        geometry = shape.geometry if isinstance(shape, ColoredShape) else shape
        draw_shape(geometry, grid)
    return grid


def grid_to_text(grid: Grid) -> str:
    return "\n".join("".join(row) for row in grid)


def render_text(shapes: Iterable[ColoredShape | Shape],
                width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> str:
    """render() followed by grid_to_text()."""
    return grid_to_text(render(shapes, width, height))
