from __future__ import annotations

import unittest

from tdbalance.compiler import build_profile
from tdbalance.models import PRESET_IDS
from tdbalance.presets import BALANCE_ASSUMPTIONS
from tdbalance.waves import (
    calculate_wave_snapshot,
    enemy_count_for_wave,
    normalize_wave,
    resolve_elite_count,
    spawn_interval_for_wave,
)


class WaveSnapshotTests(unittest.TestCase):
    def setUp(self) -> None:
        self.profiles = {
            preset_id: build_profile(preset_id, BALANCE_ASSUMPTIONS[preset_id]) for preset_id in PRESET_IDS
        }
        self.standard = self.profiles["standard"]

    def test_wave_normalization(self) -> None:
        self.assertEqual(normalize_wave(0), 1)
        self.assertEqual(normalize_wave(-7), 1)
        self.assertEqual(normalize_wave(4.9), 4)

    def test_first_wave_uses_base_count(self) -> None:
        snapshot = calculate_wave_snapshot(self.standard, 1)
        self.assertEqual(snapshot.enemy_count, self.standard.wave_infinite.base_count)
        self.assertEqual(snapshot.enemy_hp_multiplier, 1.0)
        self.assertEqual(snapshot.enemy_unit_hp, self.standard.enemy.base_hp)

    def test_count_step_bonus(self) -> None:
        # wave 4: index 3 crosses the first three-wave step
        self.assertEqual(enemy_count_for_wave(self.standard, 4), 30 + 3 * 6 + 8)

    def test_multipliers_are_monotonic(self) -> None:
        for preset_id, profile in self.profiles.items():
            previous = calculate_wave_snapshot(profile, 1)
            for wave in range(2, 61):
                current = calculate_wave_snapshot(profile, wave)
                with self.subTest(preset=preset_id, wave=wave):
                    self.assertGreaterEqual(current.enemy_hp_multiplier, previous.enemy_hp_multiplier)
                    self.assertGreaterEqual(current.enemy_attack_multiplier, previous.enemy_attack_multiplier)
                    self.assertGreaterEqual(current.enemy_count, previous.enemy_count)
                previous = current

    def test_speed_multiplier_is_capped(self) -> None:
        for preset_id, profile in self.profiles.items():
            with self.subTest(preset=preset_id):
                snapshot = calculate_wave_snapshot(profile, 200)
                self.assertLessEqual(snapshot.enemy_speed_multiplier, profile.wave_infinite.max_speed_mult)

    def test_snapshot_is_deterministic(self) -> None:
        self.assertEqual(calculate_wave_snapshot(self.standard, 10), calculate_wave_snapshot(self.standard, 10))

    def test_elite_cadence(self) -> None:
        counts = {wave: resolve_elite_count(self.standard, wave) for wave in range(1, 12)}
        self.assertEqual(counts[1], 0)
        self.assertEqual(counts[2], 0)
        self.assertEqual(counts[3], 1)
        self.assertEqual(counts[4], 0)
        self.assertEqual(counts[5], 1)
        self.assertEqual(counts[7], 2)
        self.assertLessEqual(resolve_elite_count(self.standard, 301), self.standard.wave_director.elite.max_count)

    def test_spawn_interval_floor(self) -> None:
        waves = self.standard.wave_infinite
        self.assertAlmostEqual(spawn_interval_for_wave(self.standard, 1), waves.base_spawn_interval)
        self.assertAlmostEqual(spawn_interval_for_wave(self.standard, 500), waves.min_spawn_interval)


if __name__ == "__main__":
    unittest.main()
