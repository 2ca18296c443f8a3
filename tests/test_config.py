from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from tdbalance.config import ConfigError, load_assumptions, load_settings, parse_assumptions
from tdbalance.presets import BALANCE_ASSUMPTIONS


class ConfigLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, text: str) -> Path:
        path = self.tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    def test_json_overrides_merge_over_builtins(self) -> None:
        path = self._write("presets.json", json.dumps({"hardcore": {"enemy_power_scale": 1.5}}))
        table = load_assumptions(path)
        self.assertEqual(table["hardcore"].enemy_power_scale, 1.5)
        self.assertEqual(table["hardcore"].label, "Hardcore")
        self.assertEqual(table["hardcore"].economy_scale, 1.0)
        self.assertEqual(table["casual"], BALANCE_ASSUMPTIONS["casual"])

    def test_yaml_overrides(self) -> None:
        path = self._write("presets.yaml", "casual:\n  label: Relaxed\n  enemyCountScale: 0.5\n")
        table = load_assumptions(path)
        self.assertEqual(table["casual"].label, "Relaxed")
        self.assertEqual(table["casual"].enemy_count_scale, 0.5)

    def test_unknown_preset_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            parse_assumptions({"nightmare": {"enemy_power_scale": 2.0}})

    def test_non_positive_scale_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            parse_assumptions({"standard": {"economy_scale": -1}})

    def test_bad_files_are_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            load_assumptions(self.tmp_path / "missing.json")
        with self.assertRaises(ConfigError):
            load_assumptions(self._write("presets.toml", "x = 1"))
        with self.assertRaises(ConfigError):
            load_assumptions(self._write("broken.json", "{not json"))
        with self.assertRaises(ConfigError):
            load_assumptions(self._write("list.json", "[1, 2]"))

    def test_non_finite_or_overflowing_scale_is_rejected(self) -> None:
        with self.assertRaises(ConfigError):
            load_assumptions(self._write("inf.json", json.dumps({"standard": {"enemy_power_scale": "inf"}})))
        with self.assertRaises(ConfigError):
            load_assumptions(self._write("nan.yaml", "standard:\n  economy_scale: .nan\n"))

    def test_settings_from_environment(self) -> None:
        settings = load_settings({})
        self.assertEqual(settings.active_preset, "standard")
        self.assertEqual(settings.assumptions, BALANCE_ASSUMPTIONS)

        path = self._write("presets.json", json.dumps({"standard": {"player_power_scale": 1.1}}))
        settings = load_settings({"TDBALANCE_PRESET": "Hardcore", "TDBALANCE_ASSUMPTIONS": str(path)})
        self.assertEqual(settings.active_preset, "hardcore")
        self.assertEqual(settings.assumptions["standard"].player_power_scale, 1.1)

        with self.assertRaises(ConfigError):
            load_settings({"TDBALANCE_PRESET": "nightmare"})


if __name__ == "__main__":
    unittest.main()
