from __future__ import annotations

import math
import unittest

from tdbalance.lanes import DEFAULT_LANE_MODEL, LANE_NAMES, LaneGeometryModel
from tdbalance.models import LanePolyline, ModelError


class LaneGeometryTests(unittest.TestCase):
    def test_default_lanes_have_positive_length(self) -> None:
        lengths = DEFAULT_LANE_MODEL.lane_lengths()
        self.assertEqual(set(lengths), set(LANE_NAMES))
        for name, length in lengths.items():
            with self.subTest(lane=name):
                self.assertGreater(length, 0.0)

    def test_canonical_length_is_mean_of_lanes(self) -> None:
        lengths = list(DEFAULT_LANE_MODEL.lane_lengths().values())
        self.assertAlmostEqual(DEFAULT_LANE_MODEL.canonical_path_length(), sum(lengths) / len(lengths))

    def test_mid_lane_is_map_diagonal(self) -> None:
        mid = DEFAULT_LANE_MODEL.lane("mid")
        self.assertAlmostEqual(DEFAULT_LANE_MODEL.lane_length(mid), 45.0 * math.sqrt(2.0), places=6)

    def test_to_world_maps_normalized_corners(self) -> None:
        self.assertEqual(DEFAULT_LANE_MODEL.to_world(0.0, 1.0), (-25.0, -25.0))
        self.assertEqual(DEFAULT_LANE_MODEL.to_world(1.0, 0.0), (25.0, 25.0))

    def test_custom_lane_model(self) -> None:
        model = LaneGeometryModel(
            half_width=10.0,
            half_height=10.0,
            lanes=(LanePolyline.from_points("straight", [(0.0, 0.5), (1.0, 0.5)]),),
        )
        self.assertAlmostEqual(model.canonical_path_length(), 20.0)

    def test_invalid_lanes_are_rejected(self) -> None:
        with self.assertRaises(ModelError):
            LanePolyline.from_points("short", [(0.1, 0.1)])
        with self.assertRaises(ModelError):
            LanePolyline.from_points("broken", [(0.1, 0.1), ("x", 0.2)])
        with self.assertRaises(ModelError):
            LaneGeometryModel(half_width=0.0)
        with self.assertRaises(ModelError):
            LaneGeometryModel(lanes=())
        with self.assertRaises(ModelError):
            DEFAULT_LANE_MODEL.lane("missing")


if __name__ == "__main__":
    unittest.main()
