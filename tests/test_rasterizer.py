"""
HolyStik Rasterizer Tests
=========================
Grid marks for circles, rectangles and lines, clipping and draw order.

Usage:
    python -m unittest tests.test_rasterizer -v
"""
import sys
import os
import math
import unittest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from holystik.interpreter import Interpreter
from holystik.rasterizer import (
    BLANK, CIRCLE_MARK, LINE_MARK, RECTANGLE_MARK,
    grid_to_text, make_grid, render, render_text,
)
from holystik.shapes import Circle, ColoredShape, Line, Point, Rectangle, Size


def marked(grid, mark):
    return {(x, y) for y, row in enumerate(grid) for x, cell in enumerate(row) if cell == mark}


class TestGrid(unittest.TestCase):

    def test_default_size(self):
        grid = render([])
        self.assertEqual(len(grid), 24)
        self.assertTrue(all(len(row) == 80 for row in grid))
        self.assertEqual(marked(grid, BLANK), {(x, y) for x in range(80) for y in range(24)})

    def test_make_grid_rows_are_independent(self):
        grid = make_grid(3, 2)
        grid[0][0] = "x"
        self.assertEqual(grid[1][0], BLANK)

    def test_grid_to_text(self):
        text = grid_to_text(render([Line(Point(0, 0), Point(2, 0))], 4, 2))
        self.assertEqual(text, "*** \n    ")

    def test_render_text_matches_render(self):
        shapes = [Circle(Point(5, 5), 3), Rectangle(Point(1, 1), Size(4, 4))]
        self.assertEqual(render_text(shapes, 12, 10), grid_to_text(render(shapes, 12, 10)))


class TestCircle(unittest.TestCase):

    def test_ring_cells(self):
        grid = render([Circle(Point(40, 12), 10)])
        self.assertEqual(grid[12][50], CIRCLE_MARK)
        self.assertEqual(grid[12][30], CIRCLE_MARK)
        self.assertEqual(grid[2][40], CIRCLE_MARK)
        self.assertEqual(grid[22][40], CIRCLE_MARK)
        self.assertEqual(grid[12][40], BLANK)

    def test_every_mark_is_on_the_ring(self):
        grid = render([Circle(Point(40, 12), 10)])
        expected = {
            (x, y) for y in range(24) for x in range(80)
            if abs(math.hypot(x - 40, y - 12) - 10) < 1.0
        }
        self.assertEqual(marked(grid, CIRCLE_MARK), expected)

    def test_partially_off_grid(self):
        grid = render([Circle(Point(0, 0), 3)], 10, 10)
        self.assertEqual(grid[0][3], CIRCLE_MARK)
        self.assertEqual(grid[3][0], CIRCLE_MARK)

    def test_entirely_off_grid(self):
        grid = render([Circle(Point(-100, -100), 5)], 10, 10)
        self.assertEqual(marked(grid, CIRCLE_MARK), set())


class TestRectangle(unittest.TestCase):

    def test_border_only(self):
        grid = render([Rectangle(Point(2, 1), Size(5, 3))], 10, 6)
        expected = {(x, 1) for x in range(2, 7)} | {(x, 3) for x in range(2, 7)} | {(2, 2), (6, 2)}
        self.assertEqual(marked(grid, RECTANGLE_MARK), expected)
        self.assertEqual(grid[2][4], BLANK)

    def test_clipped(self):
        grid = render([Rectangle(Point(-2, -2), Size(5, 5))], 10, 10)
        expected = {(0, 2), (1, 2), (2, 2), (2, 0), (2, 1)}
        self.assertEqual(marked(grid, RECTANGLE_MARK), expected)

    def test_truncates_coordinates(self):
        grid = render([Rectangle(Point(1.9, 1.9), Size(3.7, 2.2))], 6, 5)
        expected = {(1, 1), (2, 1), (3, 1), (1, 2), (2, 2), (3, 2)}
        self.assertEqual(marked(grid, RECTANGLE_MARK), expected)


class TestLine(unittest.TestCase):

    def test_horizontal(self):
        grid = render([Line(Point(0, 0), Point(4, 0))], 6, 2)
        self.assertEqual(marked(grid, LINE_MARK), {(x, 0) for x in range(5)})

    def test_vertical(self):
        grid = render([Line(Point(1, 0), Point(1, 3))], 4, 4)
        self.assertEqual(marked(grid, LINE_MARK), {(1, y) for y in range(4)})

    def test_diagonal(self):
        grid = render([Line(Point(0, 0), Point(3, 3))], 5, 5)
        self.assertEqual(marked(grid, LINE_MARK), {(i, i) for i in range(4)})

    def test_reverse_direction(self):
        forward = render([Line(Point(0, 0), Point(3, 0))], 5, 2)
        backward = render([Line(Point(3, 0), Point(0, 0))], 5, 2)
        self.assertEqual(forward, backward)

    def test_single_point(self):
        grid = render([Line(Point(2, 2), Point(2, 2))], 4, 4)
        self.assertEqual(marked(grid, LINE_MARK), {(2, 2)})

    def test_clipped(self):
        grid = render([Line(Point(-5, 2), Point(5, 2))], 4, 4)
        self.assertEqual(marked(grid, LINE_MARK), {(x, 2) for x in range(4)})


class TestDegenerateInput(unittest.TestCase):
    """render() never raises; unusable shapes draw nothing."""

    INF = float("inf")
    NAN = float("nan")

    def test_infinite_rectangle(self):
        shapes = [
            Rectangle(Point(self.INF, 0), Size(1, 1)),
            Rectangle(Point(0, 0), Size(self.INF, 2)),
        ]
        grid = render(shapes, 8, 4)
        self.assertEqual(marked(grid, RECTANGLE_MARK), set())

    def test_nan_line(self):
        grid = render([Line(Point(self.NAN, 0), Point(1, 1))], 8, 4)
        self.assertEqual(marked(grid, LINE_MARK), set())

    def test_non_finite_circle(self):
        shapes = [Circle(Point(self.NAN, 2), 1), Circle(Point(2, 2), self.INF)]
        grid = render(shapes, 8, 4)
        self.assertEqual(marked(grid, CIRCLE_MARK), set())

    def test_finite_shapes_still_drawn(self):
        shapes = [Line(Point(self.INF, 0), Point(0, 0)), Line(Point(0, 1), Point(2, 1))]
        grid = render(shapes, 4, 3)
        self.assertEqual(marked(grid, LINE_MARK), {(0, 1), (1, 1), (2, 1)})

    def test_far_line_endpoint(self):
        grid = render([Line(Point(0, 0), Point(10**9, 0))], 80, 2)
        self.assertEqual(marked(grid, LINE_MARK), {(x, 0) for x in range(80)})

    def test_far_line_both_ends(self):
        grid = render([Line(Point(2, -10**9), Point(2, 10**9))], 5, 4)
        self.assertEqual(marked(grid, LINE_MARK), {(2, y) for y in range(4)})

    def test_far_rectangle_size(self):
        grid = render([Rectangle(Point(0, 0), Size(10**9, 3))], 5, 5)
        expected = {(x, 0) for x in range(5)} | {(x, 2) for x in range(5)} | {(0, 1)}
        self.assertEqual(marked(grid, RECTANGLE_MARK), expected)

    def test_empty_grid(self):
        self.assertEqual(render([Line(Point(0, 0), Point(3, 3))], 0, 0), [])


class TestDrawOrder(unittest.TestCase):

    def test_later_shape_wins(self):
        shapes = [Line(Point(0, 0), Point(4, 0)), Rectangle(Point(0, 0), Size(2, 2))]
        grid = render(shapes, 5, 3)
        self.assertEqual(grid[0][0], RECTANGLE_MARK)
        self.assertEqual(grid[0][3], LINE_MARK)

    def test_colored_shapes_render_like_bare(self):
        geometry = Circle(Point(5, 5), 3)
        self.assertEqual(
            render([ColoredShape(geometry, "red")], 12, 12),
            render([geometry], 12, 12),
        )

    def test_unknown_shape(self):
        with self.assertRaises(TypeError):
            render(["not a shape"], 4, 4)

    def test_interpreter_output_renders(self):
        result = Interpreter(output_fn=lambda s: None).run('color "blue"\ncircle 40 12 10')
        grid = render(result.shapes)
        self.assertEqual(grid[12][50], CIRCLE_MARK)


if __name__ == "__main__":
    unittest.main(verbosity=2)
