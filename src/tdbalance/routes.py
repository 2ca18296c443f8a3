from __future__ import annotations

from typing import List, Optional, Tuple

from .lanes import DEFAULT_LANE_MODEL, LaneGeometryModel
from .models import BalanceProfile, DefenseAssumptions, RouteBalanceSnapshot
from .scaling import clamp, round2, round_half_up
from .waves import calculate_wave_snapshot, normalize_wave, resolve_elite_count

DEFAULT_DEFENSE = DefenseAssumptions()

MIN_TRAVEL_SECONDS = 0.5
MIN_ENEMY_SPEED = 0.25
MIN_KILL_PROGRESS = 0.001

BUILD_UP_FLOOR = 0.35
BUILD_UP_WAVES = 20.0

# Enemy count above which the defense starts to saturate (hand-tuned).
SATURATION_ENEMY_THRESHOLD = 40
SATURATION_ENEMY_SPAN = 120.0
SATURATION_PENALTY_CAP = 0.35

# Above this kill progress only stragglers get through (hand-tuned).
OVERKILL_KILL_PROGRESS = 1.25
OVERKILL_BREACH_DISCOUNT = 0.35

RISK_BREACH_WEIGHT = 70.0
RISK_DISTANCE_WEIGHT = 30.0


def _defense_dps(profile: BalanceProfile, wave: int, defense: DefenseAssumptions) -> float:
    building = profile.building
    build_up = clamp(BUILD_UP_FLOOR + wave / BUILD_UP_WAVES, BUILD_UP_FLOOR, 1.0)

    tower_dps = building.tower.dps * defense.tower_slots * build_up
    frost_dps = building.frost_tower.dps * defense.frost_tower_slots * build_up
    lightning_dps = building.lightning_tower.dps * defense.lightning_tower_slots * build_up
    soldier_dps = profile.soldier.dps * building.barracks.max_units * defense.soldier_in_range_ratio
    hero_dps = profile.hero.dps * defense.hero_uptime
    return tower_dps + frost_dps + lightning_dps + soldier_dps + hero_dps


def route_estimate(
    profile: BalanceProfile,
    wave: float,
    path_length: float,
    defense: DefenseAssumptions = DEFAULT_DEFENSE,
) -> Tuple[RouteBalanceSnapshot, float]:
    """Estimate how far a wave's enemies get along a lane of ``path_length``.

    Idealized: aggregate defense DPS against the wave's enemy pool, diminished by
    crowd pressure, over the time an average enemy spends walking the lane.
    Returns the snapshot together with the unrounded breach rate.
    """
    wave_number = normalize_wave(wave)
    snapshot = calculate_wave_snapshot(profile, wave_number)
    enemy = profile.enemy

    regular_count = snapshot.enemy_count
    elite_count = resolve_elite_count(profile, wave_number)
    total_count = regular_count + elite_count

    elite_hp = snapshot.enemy_unit_hp * enemy.elite.hp_multiplier
    elite_attack = snapshot.enemy_unit_attack * enemy.elite.attack_multiplier
    elite_share = elite_count / max(1, total_count)
    avg_enemy_hp = snapshot.enemy_unit_hp * (1.0 - elite_share) + elite_hp * elite_share
    avg_enemy_attack = snapshot.enemy_unit_attack * (1.0 - elite_share) + elite_attack * elite_share

    enemy_speed = enemy.move_speed * snapshot.enemy_speed_multiplier
    travel_seconds = max(MIN_TRAVEL_SECONDS, path_length / max(MIN_ENEMY_SPEED, enemy_speed))

    lane_coverage = clamp(
        defense.base_coverage_ratio * (0.94 + profile.assumptions.player_power_scale * 0.06),
        0.35,
        0.95,
    )
    tower_uptime = clamp(defense.base_fire_uptime * lane_coverage, 0.2, 0.95)
    # Crowd control multiplies the whole lane's output.
    control_bonus = 1.0 + defense.control_slow_bonus * profile.building.frost_tower.bullet_slow_percent
    effective_lane_dps = _defense_dps(profile, wave_number, defense) * tower_uptime * control_bonus

    pressure_index = (
        total_count / defense.pressure_divisor_base
        + avg_enemy_attack / defense.attack_pressure_divisor
        + wave_number / defense.wave_growth_soft_cap
    )
    focus_dps = effective_lane_dps / (1.0 + pressure_index)
    damage_on_route = focus_dps * travel_seconds
    kill_progress = damage_on_route / max(1.0, avg_enemy_hp)
    kill_distance = clamp(1.0 - 1.0 / max(MIN_KILL_PROGRESS, kill_progress), 0.0, 1.0)

    saturation_penalty = clamp(
        (total_count - SATURATION_ENEMY_THRESHOLD) / SATURATION_ENEMY_SPAN,
        0.0,
        SATURATION_PENALTY_CAP,
    )
    breach_rate = clamp(
        clamp(1.0 - kill_progress, 0.0, 1.0) + saturation_penalty * (1.0 - kill_distance),
        0.0,
        1.0,
    )
    if kill_progress > OVERKILL_KILL_PROGRESS:
        breach_rate *= OVERKILL_BREACH_DISCOUNT

    predicted_loss = round_half_up(total_count * breach_rate * enemy.base_reach_damage)
    risk_score = clamp(
        breach_rate * RISK_BREACH_WEIGHT + (1.0 - kill_distance) * RISK_DISTANCE_WEIGHT,
        0.0,
        100.0,
    )

    route = RouteBalanceSnapshot(
        wave=wave_number,
        regular_enemy_count=regular_count,
        elite_enemy_count=elite_count,
        total_enemy_count=total_count,
        path_length=round2(path_length),
        enemy_travel_seconds=round2(travel_seconds),
        avg_enemy_hp=round2(avg_enemy_hp),
        avg_enemy_attack=round2(avg_enemy_attack),
        effective_lane_dps=round2(effective_lane_dps),
        focus_dps_per_enemy=round2(focus_dps),
        damage_per_enemy_on_route=round2(damage_on_route),
        kill_progress=round2(kill_progress),
        kill_distance_to_base_normalized=round2(kill_distance),
        breach_rate=round2(breach_rate),
        predicted_base_hp_loss=max(0, predicted_loss),
        risk_score=round2(risk_score),
    )
    return route, breach_rate


def estimate_route_snapshot(
    profile: BalanceProfile,
    wave: float,
    path_length: float,
    defense: DefenseAssumptions = DEFAULT_DEFENSE,
) -> RouteBalanceSnapshot:
    return route_estimate(profile, wave, path_length, defense)[0]


def calculate_route_balance_snapshot(
    profile: BalanceProfile,
    wave: float,
    lane_model: Optional[LaneGeometryModel] = None,
    defense: Optional[DefenseAssumptions] = None,
) -> RouteBalanceSnapshot:
    lanes = lane_model or DEFAULT_LANE_MODEL
    return estimate_route_snapshot(
        profile,
        wave,
        lanes.canonical_path_length(),
        defense or DEFAULT_DEFENSE,
    )


def build_route_risk_timeline(
    profile: BalanceProfile,
    start_wave: float,
    end_wave: float,
    lane_model: Optional[LaneGeometryModel] = None,
    defense: Optional[DefenseAssumptions] = None,
) -> List[RouteBalanceSnapshot]:
    first = normalize_wave(min(start_wave, end_wave))
    last = normalize_wave(max(start_wave, end_wave))
    path_length = (lane_model or DEFAULT_LANE_MODEL).canonical_path_length()
    resolved_defense = defense or DEFAULT_DEFENSE
    return [
        estimate_route_snapshot(profile, wave, path_length, resolved_defense)
        for wave in range(first, last + 1)
    ]
