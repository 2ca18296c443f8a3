from __future__ import annotations

import unittest

from tdbalance.scaling import (
    clamp,
    clamp_percent,
    ensure_building_growth_floor,
    growth_floor,
    round2,
    round_half_up,
    round_int,
    scale_multiply,
    scale_reduce,
    scale_interval,
)


class ScalingHelperTests(unittest.TestCase):
    def test_clamp_bounds(self) -> None:
        self.assertEqual(clamp(5.0, 0.0, 1.0), 1.0)
        self.assertEqual(clamp(-5.0, 0.0, 1.0), 0.0)
        self.assertEqual(clamp(0.4, 0.0, 1.0), 0.4)

    def test_rounding_is_half_up(self) -> None:
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(-0.5), 0)
        self.assertEqual(round2(0.125), 0.13)
        self.assertAlmostEqual(round2(1.234), 1.23)

    def test_round_int_keeps_minimum_of_one(self) -> None:
        self.assertEqual(round_int(0.2), 1)
        self.assertEqual(round_int(-4.0), 1)
        self.assertEqual(round_int(7.5), 8)

    def test_scale_multiply_scales_deviation_from_center(self) -> None:
        self.assertAlmostEqual(scale_multiply(1.2, 1.0), 1.2)
        self.assertAlmostEqual(scale_multiply(1.2, 2.0), 1.4)
        self.assertAlmostEqual(scale_multiply(1.2, 0.0), 1.0)
        self.assertAlmostEqual(scale_multiply(0.8, 2.0), 0.6)

    def test_scale_reduce_and_interval(self) -> None:
        self.assertAlmostEqual(scale_reduce(0.8, 2.0), 0.6)
        self.assertAlmostEqual(scale_reduce(0.8, 1.0), 0.8)
        self.assertAlmostEqual(scale_interval(1.0, 1.0, 0.9, 0.1), 1.0)
        self.assertLess(scale_interval(1.0, 2.0, 0.9, 0.1), 1.0)

    def test_clamp_percent(self) -> None:
        self.assertAlmostEqual(clamp_percent(0.5, 3.0, 0.1, 0.9), 0.9)
        self.assertAlmostEqual(clamp_percent(0.05, 1.0, 0.1, 0.9), 0.1)
        self.assertAlmostEqual(clamp_percent(0.4, 1.0, 0.1, 0.9), 0.4)

    def test_growth_floor(self) -> None:
        self.assertAlmostEqual(growth_floor(0.1), 1.13)
        self.assertAlmostEqual(growth_floor(-0.2), 1.03)
        self.assertGreaterEqual(ensure_building_growth_floor(1.05, 0.1), 1.0 + 0.1 + 0.03)
        self.assertAlmostEqual(ensure_building_growth_floor(1.5, 0.1), 1.5)


if __name__ == "__main__":
    unittest.main()
