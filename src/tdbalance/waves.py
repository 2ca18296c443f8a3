from __future__ import annotations

import math

from .models import BalanceProfile, WaveBalanceSnapshot
from .scaling import round2, round_int

# Share of spawned enemies the player is expected to kill for loot (hand-tuned).
COIN_INCOME_KILL_RATIO = 0.28
# Seconds allotted to clear a whole wave's HP pool when sizing hero DPS (hand-tuned).
HERO_DPS_CLEAR_BUDGET_SECONDS = 65.0


def normalize_wave(wave: float) -> int:
    return max(1, int(math.floor(wave)))


def enemy_count_for_wave(profile: BalanceProfile, wave: float) -> int:
    waves = profile.wave_infinite
    wave_index = normalize_wave(wave) - 1
    step_bonus = (wave_index // max(1, waves.count_growth_step_waves)) * waves.count_growth_step_bonus
    return waves.base_count + wave_index * waves.count_per_wave + step_bonus


def calculate_wave_snapshot(profile: BalanceProfile, wave: float) -> WaveBalanceSnapshot:
    wave_number = normalize_wave(wave)
    wave_index = wave_number - 1
    waves = profile.wave_infinite

    enemy_count = enemy_count_for_wave(profile, wave_number)
    hp_multiplier = 1.0 + wave_index * waves.hp_mult_per_wave
    attack_multiplier = 1.0 + wave_index * waves.attack_mult_per_wave
    speed_multiplier = min(waves.max_speed_mult, 1.0 + wave_index * waves.speed_mult_per_wave)

    enemy_unit_hp = round_int(profile.enemy.base_hp * hp_multiplier)
    enemy_unit_attack = round_int(profile.enemy.base_attack * attack_multiplier)

    predicted_coin_income = (
        round_int(profile.economy.enemy_coin_drop * enemy_count * COIN_INCOME_KILL_RATIO)
        + waves.bonus_per_wave
        + wave_index * waves.bonus_growth_per_wave
    )

    return WaveBalanceSnapshot(
        wave=wave_number,
        enemy_count=enemy_count,
        enemy_hp_multiplier=round2(hp_multiplier),
        enemy_attack_multiplier=round2(attack_multiplier),
        enemy_speed_multiplier=round2(speed_multiplier),
        enemy_unit_hp=enemy_unit_hp,
        enemy_unit_attack=enemy_unit_attack,
        predicted_coin_income=predicted_coin_income,
        suggested_hero_dps=round_int(enemy_unit_hp * enemy_count / HERO_DPS_CLEAR_BUDGET_SECONDS),
    )


def resolve_elite_count(profile: BalanceProfile, wave: float) -> int:
    elite = profile.wave_director.elite
    wave_number = normalize_wave(wave)
    if wave_number < elite.start_wave:
        return 0
    offset = wave_number - elite.start_wave
    if offset % max(1, elite.interval) != 0:
        return 0
    growth = offset // max(1, elite.count_growth_step_waves)
    return min(elite.max_count, elite.base_count + growth)


def spawn_interval_for_wave(profile: BalanceProfile, wave: float) -> float:
    waves = profile.wave_infinite
    wave_index = normalize_wave(wave) - 1
    return round2(
        max(waves.min_spawn_interval, waves.base_spawn_interval - wave_index * waves.spawn_interval_decay_per_wave)
    )
