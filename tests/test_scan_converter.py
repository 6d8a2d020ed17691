from __future__ import annotations

import math
import unittest

import numpy as np

from pathraster.canvas import new_canvas
from pathraster.scan import ScanConverter
from pathraster.shapes import point_at, square_at


def _rect(sc: ScanConverter, x0: float, y0: float, x1: float, y1: float) -> None:
    sc.move_to(x0, y0)
    sc.line_to(x1, y0)
    sc.line_to(x1, y1)
    sc.line_to(x0, y1)
    sc.close_path()


class ScanConverterTests(unittest.TestCase):
    def test_rejects_non_positive_size(self) -> None:
        with self.assertRaises(ValueError):
            ScanConverter(0, 10)
        with self.assertRaises(ValueError):
            ScanConverter(10, -1)
        with self.assertRaises(ValueError):
            ScanConverter(10, 10, flatness=0.0)

    def test_pixel_aligned_rectangle_has_full_coverage(self) -> None:
        sc = ScanConverter(10, 10)
        _rect(sc, 2, 2, 6, 6)
        cov = sc.coverage()
        self.assertEqual(cov.shape, (10, 10))
        expected = np.zeros((10, 10), dtype=np.float32)
        expected[2:6, 2:6] = 1.0
        np.testing.assert_allclose(cov, expected, atol=1e-6)

    def test_winding_direction_does_not_matter(self) -> None:
        sc = ScanConverter(8, 8)
        sc.move_to(1, 1)
        sc.line_to(1, 5)
        sc.line_to(5, 5)
        sc.line_to(5, 1)
        sc.close_path()
        self.assertAlmostEqual(float(sc.coverage().sum()), 16.0, places=5)

    def test_partial_pixel_coverage_is_antialiased(self) -> None:
        sc = ScanConverter(6, 2)
        _rect(sc, 2.5, 0, 4, 1)
        cov = sc.coverage()
        self.assertAlmostEqual(float(cov[0, 2]), 0.5, places=5)
        self.assertAlmostEqual(float(cov[0, 3]), 1.0, places=5)
        self.assertEqual(float(cov[0, 4]), 0.0)
        self.assertEqual(float(cov[1].sum()), 0.0)

    def test_circle_area_is_close_to_pi_r_squared(self) -> None:
        sc = ScanConverter(20, 20)
        point_at(sc, 10, 10, 10)
        self.assertAlmostEqual(float(sc.coverage().sum()), math.pi * 25.0, delta=2.5)
        self.assertAlmostEqual(float(sc.coverage()[10, 10]), 1.0, places=5)

    def test_geometry_outside_grid_is_clipped(self) -> None:
        sc = ScanConverter(4, 4)
        _rect(sc, -5, -5, 2, 2)
        _rect(sc, 10, 10, 20, 20)
        cov = sc.coverage()
        expected = np.zeros((4, 4), dtype=np.float32)
        expected[0:2, 0:2] = 1.0
        np.testing.assert_allclose(cov, expected, atol=1e-6)

    def test_reset_clears_and_resizes(self) -> None:
        sc = ScanConverter(5, 5)
        square_at(sc, 2.5, 2.5, 3)
        self.assertGreater(float(sc.coverage().sum()), 0.0)
        sc.reset(7, 3)
        self.assertEqual(sc.size, (7, 3))
        self.assertEqual(sc.coverage().shape, (3, 7))
        self.assertEqual(float(sc.coverage().sum()), 0.0)

    def test_identical_input_is_deterministic(self) -> None:
        masks = []
        for _ in range(2):
            sc = ScanConverter(16, 16)
            point_at(sc, 7.3, 8.1, 9.5)
            masks.append(sc.mask())
        np.testing.assert_array_equal(masks[0], masks[1])

    def test_draw_composites_at_offset(self) -> None:
        sc = ScanConverter(4, 4)
        _rect(sc, 0, 0, 4, 4)
        im = new_canvas(10, 10, color=(255, 255, 255, 255))
        sc.draw(im, 3, 5, (0, 0, 0, 255))
        self.assertTrue(np.all(im[5:9, 3:7, :3] == 0))
        untouched = np.ones((10, 10), dtype=bool)
        untouched[5:9, 3:7] = False
        self.assertTrue(np.all(im[untouched][:, :3] == 255))


if __name__ == "__main__":
    unittest.main()
