from __future__ import annotations

import unittest
from dataclasses import replace
from unittest import mock

from tdbalance.analytics import (
    ANALYTICS_HORIZON_WAVES,
    BREACH_RATE_THRESHOLD,
    compare_profiles,
    evaluate_profile_analytics,
)
from tdbalance.compiler import build_profile
from tdbalance.lanes import DEFAULT_LANE_MODEL
from tdbalance.models import PRESET_IDS, BalanceAssumptions, DefenseAssumptions
from tdbalance.presets import BALANCE_ASSUMPTIONS
from tdbalance.routes import DEFAULT_DEFENSE, route_estimate
from tdbalance.waves import calculate_wave_snapshot


class ProfileAnalyticsTests(unittest.TestCase):
    def setUp(self) -> None:
        self.profiles = [build_profile(preset_id, BALANCE_ASSUMPTIONS[preset_id]) for preset_id in PRESET_IDS]

    def test_collapse_implies_earlier_breach(self) -> None:
        for profile in self.profiles:
            analytics = profile.analytics
            with self.subTest(preset=profile.id):
                self.assertGreaterEqual(analytics.first_breach_wave, 0)
                self.assertLessEqual(analytics.first_base_collapse_wave, ANALYTICS_HORIZON_WAVES)
                if analytics.first_base_collapse_wave:
                    self.assertGreater(analytics.first_breach_wave, 0)
                    self.assertLessEqual(analytics.first_breach_wave, analytics.first_base_collapse_wave)

    def test_checkpoint_matches_wave_ten(self) -> None:
        profile = self.profiles[1]
        snapshot = calculate_wave_snapshot(profile, 10)
        self.assertEqual(profile.analytics.wave10_enemy_count, snapshot.enemy_count)
        self.assertEqual(profile.analytics.wave10_enemy_hp, snapshot.enemy_unit_hp)
        self.assertEqual(profile.analytics.wave10_coin_budget, snapshot.predicted_coin_income)
        self.assertEqual(profile.analytics.suggested_hero_dps, snapshot.suggested_hero_dps)

    def test_defenseless_base_collapses_early(self) -> None:
        defense = DefenseAssumptions(
            tower_slots=0.0,
            frost_tower_slots=0.0,
            lightning_tower_slots=0.0,
            hero_uptime=0.0,
            soldier_in_range_ratio=0.0,
        )
        analytics = evaluate_profile_analytics(self.profiles[1], defense=defense)
        self.assertEqual(analytics.first_breach_wave, 1)
        self.assertGreaterEqual(analytics.first_base_collapse_wave, 1)
        self.assertLessEqual(analytics.first_base_collapse_wave, 3)

    def test_overwhelming_defense_never_collapses(self) -> None:
        profile = build_profile("easy", BalanceAssumptions(label="Easy", enemy_power_scale=0.2, player_power_scale=4.0))
        defense = DefenseAssumptions(tower_slots=400.0, base_hp=1_000_000)
        analytics = evaluate_profile_analytics(profile, defense=defense, horizon=20)
        self.assertEqual(analytics.first_base_collapse_wave, 0)

    def test_first_breach_falls_back_to_first_hp_loss_on_collapse(self) -> None:
        path_length = DEFAULT_LANE_MODEL.canonical_path_length()
        for profile in self.profiles:
            analytics = profile.analytics
            with self.subTest(preset=profile.id):
                first_loss_wave = 0
                for wave in range(1, ANALYTICS_HORIZON_WAVES + 1):
                    route, _ = route_estimate(profile, wave, path_length, DEFAULT_DEFENSE)
                    if route.predicted_base_hp_loss > 0:
                        first_loss_wave = wave
                        break
                if analytics.first_threshold_breach_wave:
                    self.assertEqual(analytics.first_breach_wave, analytics.first_threshold_breach_wave)
                    _, breach_rate = route_estimate(
                        profile, analytics.first_threshold_breach_wave, path_length, DEFAULT_DEFENSE
                    )
                    self.assertGreaterEqual(breach_rate, BREACH_RATE_THRESHOLD)
                elif analytics.first_base_collapse_wave:
                    self.assertEqual(analytics.first_breach_wave, first_loss_wave)
                else:
                    self.assertEqual(analytics.first_breach_wave, 0)

    def test_standard_preset_breach_is_first_hp_loss(self) -> None:
        profile = self.profiles[PRESET_IDS.index("standard")]
        path_length = DEFAULT_LANE_MODEL.canonical_path_length()
        losses = [
            route_estimate(profile, wave, path_length, DEFAULT_DEFENSE)[0].predicted_base_hp_loss
            for wave in range(1, profile.analytics.first_breach_wave + 1)
        ]
        self.assertGreater(profile.analytics.first_breach_wave, 0)
        self.assertGreater(losses[-1], 0)
        self.assertTrue(all(loss == 0 for loss in losses[:-1]))

    def test_threshold_uses_unrounded_breach_rate(self) -> None:
        raw_rates = {1: 0.0, 2: 0.046, 3: 0.05}

        def fake_estimate(profile, wave, path_length, defense):
            route, _ = route_estimate(profile, wave, path_length, defense)
            rate = raw_rates.get(wave, 0.0)
            return replace(route, breach_rate=round(rate, 2), predicted_base_hp_loss=0), rate

        with mock.patch("tdbalance.analytics.route_estimate", side_effect=fake_estimate):
            analytics = evaluate_profile_analytics(self.profiles[1], horizon=5)

        # Wave 2 rounds to 0.05 but stays below the threshold unrounded.
        self.assertEqual(analytics.first_threshold_breach_wave, 3)
        self.assertEqual(analytics.first_breach_wave, 3)
        self.assertEqual(analytics.first_base_collapse_wave, 0)

    def test_no_threshold_wave_without_collapse_reports_no_breach(self) -> None:
        def quiet_estimate(profile, wave, path_length, defense):
            route, _ = route_estimate(profile, wave, path_length, defense)
            return replace(route, breach_rate=0.04, predicted_base_hp_loss=1), 0.04

        with mock.patch("tdbalance.analytics.route_estimate", side_effect=quiet_estimate):
            analytics = evaluate_profile_analytics(self.profiles[1], horizon=5)

        self.assertEqual(analytics.first_threshold_breach_wave, 0)
        self.assertEqual(analytics.first_breach_wave, 0)
        self.assertEqual(analytics.first_base_collapse_wave, 0)

    def test_compare_ranks_by_risk(self) -> None:
        result = compare_profiles(self.profiles, wave=30)
        self.assertEqual(result["wave"], 30)
        ranked = result["ranked"]
        self.assertEqual({entry["id"] for entry in ranked}, set(PRESET_IDS))
        scores = [entry["risk_score"] for entry in ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))


if __name__ == "__main__":
    unittest.main()
