from __future__ import annotations

import unittest

from tdbalance.models import ModelError
from tdbalance.presets import BALANCE_ASSUMPTIONS
from tdbalance.sensitivity import sensitivity_analysis


class SensitivityTests(unittest.TestCase):
    def test_sweep_reports_points_against_baseline(self) -> None:
        result = sensitivity_analysis(
            "standard",
            BALANCE_ASSUMPTIONS["standard"],
            "enemy_power_scale",
            [0.8, 1.0, 1.4],
        )
        self.assertEqual(result["preset_id"], "standard")
        self.assertEqual(result["parameter"], "enemy_power_scale")
        self.assertEqual(result["wave"], 10)
        self.assertEqual(result["baseline"]["value"], 1.0)
        self.assertEqual([point["value"] for point in result["points"]], [0.8, 1.0, 1.4])

        neutral = result["points"][1]
        self.assertEqual(neutral["delta_risk_vs_baseline"], 0.0)
        self.assertEqual(neutral["risk_score"], result["baseline"]["risk_score"])
        self.assertLessEqual(result["points"][0]["risk_score"], result["points"][2]["risk_score"])

    def test_unknown_parameter_is_rejected(self) -> None:
        with self.assertRaises(ModelError):
            sensitivity_analysis("standard", BALANCE_ASSUMPTIONS["standard"], "tower_count_scale", [1.0])

    def test_non_positive_value_is_rejected(self) -> None:
        with self.assertRaises(ModelError):
            sensitivity_analysis("standard", BALANCE_ASSUMPTIONS["standard"], "economy_scale", [0.0])


if __name__ == "__main__":
    unittest.main()
