from __future__ import annotations

import unittest

from pathraster.recorder import PathRecorder
from pathraster.shapes import PARTIAL, line_to, point_at, polyline, square_at


class _CallLog:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[float, ...]]] = []

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move_to", (x, y)))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line_to", (x, y)))

    def cube_to(self, x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> None:
        self.calls.append(("cube_to", (x1, y1, x2, y2, x3, y3)))

    def close_path(self) -> None:
        self.calls.append(("close_path", ()))


class SquareTests(unittest.TestCase):
    def test_square_corners(self) -> None:
        log = _CallLog()
        square_at(log, 1, 2, 4)
        self.assertEqual(
            log.calls,
            [
                ("move_to", (-1.0, 0.0)),
                ("line_to", (3.0, 0.0)),
                ("line_to", (3.0, 4.0)),
                ("line_to", (-1.0, 4.0)),
                ("close_path", ()),
            ],
        )

    def test_non_positive_width_draws_nothing(self) -> None:
        for width in (0, -3.5):
            log = _CallLog()
            square_at(log, 1, 1, width)
            self.assertEqual(log.calls, [])
        r = PathRecorder.buffered()
        square_at(r, 1, 1, 0)
        self.assertEqual(r.entries, ())

    def test_non_positive_width_leaves_open_entry_untouched(self) -> None:
        r = PathRecorder.buffered()
        r.move_to(0, 0)
        r.line_to(2, 3)
        square_at(r, 50, 50, 0)
        square_at(r, -50, -50, -4)
        (entry,) = r.entries
        self.assertEqual(entry.bounds, (0.0, 0.0, 2.0, 3.0))
        self.assertEqual(len(entry.path), 2)
        self.assertFalse(entry.closed)


class LineTests(unittest.TestCase):
    def test_coincident_points_draw_nothing(self) -> None:
        log = _CallLog()
        line_to(log, True, 3, 4, 3, 4, 2)
        line_to(log, False, 3, 4, 3, 4, 2)
        self.assertEqual(log.calls, [])

    def test_uncapped_line_is_a_rectangle(self) -> None:
        log = _CallLog()
        line_to(log, False, 0, 0, 10, 0, 2)
        self.assertEqual(
            log.calls,
            [
                ("move_to", (0.0, 1.0)),
                ("line_to", (0.0, -1.0)),
                ("line_to", (10.0, -1.0)),
                ("line_to", (10.0, 1.0)),
                ("close_path", ()),
            ],
        )

    def test_capped_line_box_includes_caps(self) -> None:
        r = PathRecorder.buffered()
        line_to(r, True, 0, 0, 10, 0, 2)
        (entry,) = r.entries
        self.assertTrue(entry.closed)
        self.assertEqual([str(s.op) for s in entry.path], ["MoveTo", "CubeTo", "CubeTo", "LineTo", "CubeTo", "CubeTo"])
        min_x, min_y, max_x, max_y = entry.bounds
        self.assertAlmostEqual(min_x, -1.0)
        self.assertAlmostEqual(max_x, 11.0)
        self.assertAlmostEqual(min_y, -1.0)
        self.assertAlmostEqual(max_y, 1.0)

    def test_width_is_perpendicular_for_diagonal_lines(self) -> None:
        r = PathRecorder.buffered()
        line_to(r, False, 0, 0, 3, 4, 10)
        (entry,) = r.entries
        self.assertAlmostEqual(entry.path[0].x, -4.0)
        self.assertAlmostEqual(entry.path[0].y, 3.0)


class PointTests(unittest.TestCase):
    def test_circle_is_four_quadrants(self) -> None:
        log = _CallLog()
        point_at(log, 5, 5, 4)
        names = [name for name, _ in log.calls]
        self.assertEqual(names, ["move_to", "cube_to", "cube_to", "cube_to", "cube_to", "close_path"])
        self.assertEqual(log.calls[0][1], (7.0, 5.0))
        self.assertEqual(log.calls[1][1], (7.0, 5.0 + 2 * PARTIAL, 5.0 + 2 * PARTIAL, 7.0, 5.0, 7.0))
        self.assertEqual(log.calls[4][1][4:], (7.0, 5.0))

    def test_circle_box_is_diameter_square(self) -> None:
        r = PathRecorder.buffered()
        point_at(r, -2, 3, 6)
        (entry,) = r.entries
        self.assertEqual(entry.bounds, (-5.0, 0.0, 1.0, 6.0))


class PolylineTests(unittest.TestCase):
    def test_one_entry_per_segment(self) -> None:
        r = PathRecorder.buffered()
        polyline(r, True, [(0, 0), (5, 0), (5, 5), (5, 5), (0, 5)], 1)
        self.assertEqual(len(r.entries), 3)
        self.assertTrue(all(entry.closed for entry in r.entries))

    def test_single_point_draws_nothing(self) -> None:
        r = PathRecorder.buffered()
        polyline(r, False, [(1, 1)], 1)
        self.assertEqual(r.entries, ())


if __name__ == "__main__":
    unittest.main()
