from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from .lanes import DEFAULT_LANE_MODEL, LaneGeometryModel
from .models import BalanceProfile, DefenseAssumptions, ProfileAnalytics
from .routes import DEFAULT_DEFENSE, estimate_route_snapshot, route_estimate
from .waves import calculate_wave_snapshot

ANALYTICS_CHECKPOINT_WAVE = 10
ANALYTICS_HORIZON_WAVES = 60
# Breach rate from which a wave counts as a real breach (hand-tuned).
BREACH_RATE_THRESHOLD = 0.05


def evaluate_profile_analytics(
    profile: BalanceProfile,
    lane_model: Optional[LaneGeometryModel] = None,
    defense: Optional[DefenseAssumptions] = None,
    horizon: int = ANALYTICS_HORIZON_WAVES,
) -> ProfileAnalytics:
    """Summarize a profile: wave-10 checkpoint plus first breach/collapse waves.

    Waves are played in order against a base-HP pool; the loop stops at the first
    collapse. ``first_threshold_breach_wave`` is the first wave whose unrounded
    breach rate reaches ``BREACH_RATE_THRESHOLD``. ``first_breach_wave`` equals it,
    except when the base collapses without any wave reaching the threshold: then
    it is the first wave that lost base HP. All markers stay 0 when nothing
    triggers inside ``horizon``.
    """
    defense = defense or DEFAULT_DEFENSE
    path_length = (lane_model or DEFAULT_LANE_MODEL).canonical_path_length()

    checkpoint = calculate_wave_snapshot(profile, ANALYTICS_CHECKPOINT_WAVE)
    checkpoint_route = estimate_route_snapshot(profile, ANALYTICS_CHECKPOINT_WAVE, path_length, defense)

    base_hp = defense.base_hp
    first_threshold_wave = 0
    first_loss_wave = 0
    first_collapse_wave = 0
    for wave in range(1, max(1, horizon) + 1):
        route, breach_rate = route_estimate(profile, wave, path_length, defense)
        if route.predicted_base_hp_loss > 0 and first_loss_wave == 0:
            first_loss_wave = wave
        base_hp -= route.predicted_base_hp_loss
        if first_threshold_wave == 0 and breach_rate >= BREACH_RATE_THRESHOLD:
            first_threshold_wave = wave
        if base_hp <= 0:
            first_collapse_wave = wave
            break

    first_breach_wave = first_threshold_wave
    if first_collapse_wave and not first_threshold_wave:
        # Trickle losses below the threshold still broke through first.
        first_breach_wave = first_loss_wave

    return ProfileAnalytics(
        wave10_enemy_count=checkpoint.enemy_count,
        wave10_enemy_hp=checkpoint.enemy_unit_hp,
        wave10_enemy_attack=checkpoint.enemy_unit_attack,
        wave10_coin_budget=checkpoint.predicted_coin_income,
        suggested_hero_dps=checkpoint.suggested_hero_dps,
        wave10_breach_rate=checkpoint_route.breach_rate,
        wave10_risk_score=checkpoint_route.risk_score,
        first_breach_wave=first_breach_wave,
        first_base_collapse_wave=first_collapse_wave,
        first_threshold_breach_wave=first_threshold_wave,
    )


def compare_profiles(
    profiles: Sequence[BalanceProfile],
    wave: int = ANALYTICS_CHECKPOINT_WAVE,
    lane_model: Optional[LaneGeometryModel] = None,
    defense: Optional[DefenseAssumptions] = None,
) -> Dict[str, Any]:
    path_length = (lane_model or DEFAULT_LANE_MODEL).canonical_path_length()
    entries: List[Dict[str, Any]] = []
    for profile in profiles:
        route = estimate_route_snapshot(profile, wave, path_length, defense or DEFAULT_DEFENSE)
        entries.append(
            {
                "id": profile.id,
                "label": profile.label,
                "risk_score": route.risk_score,
                "breach_rate": route.breach_rate,
                "predicted_base_hp_loss": route.predicted_base_hp_loss,
                "first_breach_wave": profile.analytics.first_breach_wave,
                "first_base_collapse_wave": profile.analytics.first_base_collapse_wave,
            }
        )

    entries.sort(key=lambda item: item["risk_score"], reverse=True)
    return {"wave": wave, "ranked": entries}
