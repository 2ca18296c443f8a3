from __future__ import annotations

import unittest

from tdbalance.config import ConfigError
from tdbalance.models import PRESET_IDS, BalanceAssumptions
from tdbalance.registry import PresetRegistry, default_registry


class PresetRegistryTests(unittest.TestCase):
    def test_builds_every_preset(self) -> None:
        registry = PresetRegistry()
        self.assertEqual(registry.active_id, "standard")
        self.assertEqual(registry.active().id, "standard")
        self.assertEqual([profile.id for profile in registry.profiles()], list(PRESET_IDS))
        self.assertIs(registry.get("hardcore"), registry.get("hardcore"))

    def test_active_preset_is_explicit(self) -> None:
        registry = PresetRegistry("casual")
        self.assertEqual(registry.active().label, "Casual")

    def test_unknown_ids_raise(self) -> None:
        with self.assertRaises(ConfigError):
            PresetRegistry("nightmare")
        with self.assertRaises(ConfigError):
            PresetRegistry().get("nightmare")

    def test_custom_assumptions_replace_builtin(self) -> None:
        custom = BalanceAssumptions(label="Spicy", enemy_power_scale=1.6)
        registry = PresetRegistry("hardcore", {"hardcore": custom})
        self.assertEqual(registry.active().label, "Spicy")
        self.assertEqual(registry.get("casual").label, "Casual")

    def test_overflowing_assumptions_are_a_config_error(self) -> None:
        huge = BalanceAssumptions(label="Huge", economy_scale=1e308)
        with self.assertRaises(ConfigError):
            PresetRegistry(assumptions={"standard": huge})

    def test_summary_shape(self) -> None:
        summary = PresetRegistry().build_balance_scheme_summary(10)
        self.assertEqual([entry["id"] for entry in summary], list(PRESET_IDS))
        for entry in summary:
            with self.subTest(preset=entry["id"]):
                self.assertEqual(set(entry), {"id", "label", "assumptions", "snapshot", "route_snapshot"})
                self.assertEqual(entry["snapshot"]["wave"], 10)
                self.assertEqual(entry["route_snapshot"]["wave"], 10)

    def test_default_registry_reads_environment(self) -> None:
        registry = default_registry({"TDBALANCE_PRESET": "casual"})
        self.assertEqual(registry.active_id, "casual")


if __name__ == "__main__":
    unittest.main()
