"""Level-based readers over a compiled profile (hero XP, soldier growth, upgrade costs)."""

from __future__ import annotations

import math
from typing import Dict, List, Tuple

from .models import BalanceProfile, ModelError

HERO_MAX_LEVEL = 30
BUILDING_MAX_LEVEL = 5
BASE_MAX_LEVEL = 5

_HERO_MULTIPLY_STATS = {
    "max_hp": "max_hp_multiply",
    "attack": "attack_multiply",
    "move_speed": "move_speed_multiply",
    "attack_range": "attack_range_multiply",
    "attack_interval": "attack_interval_multiply",
}
_HERO_ADD_STATS = {
    "crit_rate": "crit_rate_add",
    "crit_damage": "crit_damage_add",
}

UPGRADABLE_BUILDINGS = ("barracks", "tower", "frost_tower", "lightning_tower", "farm", "wall")


def hero_xp_for_level(profile: BalanceProfile, level: int) -> int:
    if level <= 0:
        return 0
    hero_level = profile.hero_level
    return max(1, int(math.floor(hero_level.xp_base * hero_level.xp_growth ** (level - 1))))


def hero_xp_table(profile: BalanceProfile, max_level: int = HERO_MAX_LEVEL) -> List[int]:
    return [hero_xp_for_level(profile, level) for level in range(1, max(0, max_level) + 1)]


def hero_stat_growth(profile: BalanceProfile, stat: str, level: int) -> Tuple[float, float]:
    """Return the cumulative ``(multiplier, additive)`` growth of a hero stat at ``level``."""
    growth = profile.hero_level.growth
    levels = max(0, level - 1)
    if stat in _HERO_MULTIPLY_STATS:
        return getattr(growth, _HERO_MULTIPLY_STATS[stat]) ** levels, 0.0
    if stat in _HERO_ADD_STATS:
        return 1.0, getattr(growth, _HERO_ADD_STATS[stat]) * levels
    raise ModelError(f"Unknown hero stat: {stat}")


def soldier_level_multipliers(profile: BalanceProfile, level: int) -> Dict[str, float]:
    growth = profile.soldier.growth
    n = max(0, level - 1)
    return {
        "hp": 1.0 + growth.hp_linear * n + growth.hp_quadratic * n * n,
        "attack": 1.0 + growth.attack_linear * n + growth.attack_quadratic * n * n,
        "attack_interval": max(
            growth.attack_interval_min_multiplier,
            1.0 - growth.attack_interval_decay_per_level * n,
        ),
        "attack_range": 1.0 + growth.attack_range_linear * n,
        "move_speed": 1.0 + growth.move_speed_linear * n,
        "size": min(
            growth.size_max_multiplier,
            1.0 + growth.size_linear * n + growth.size_quadratic * n * n,
        ),
    }


def upgrade_cost_schedule(start_cost: int, multiplier: float, levels: int) -> List[int]:
    """Costs of successive upgrades, each ``ceil`` of the previous times ``multiplier``."""
    costs: List[int] = []
    cost = start_cost
    for _ in range(max(0, levels)):
        cost = int(math.ceil(cost * multiplier))
        costs.append(cost)
    return costs


def building_upgrade_costs(
    profile: BalanceProfile,
    building: str,
    max_level: int = BUILDING_MAX_LEVEL,
) -> List[int]:
    if building not in UPGRADABLE_BUILDINGS:
        raise ModelError(f"Unknown upgradable building: {building}")
    build_cost = getattr(profile.building.costs, building)
    multiplier = getattr(profile.building.upgrade_cost_multiplier, building)
    return upgrade_cost_schedule(build_cost, multiplier, max_level - 1)


def base_upgrade_costs(profile: BalanceProfile, max_level: int = BASE_MAX_LEVEL) -> List[int]:
    base_upgrade = profile.building.base_upgrade
    if max_level <= 1:
        return []
    # The first upgrade is charged at the start cost itself.
    return [base_upgrade.start_cost] + upgrade_cost_schedule(
        base_upgrade.start_cost,
        base_upgrade.cost_multiplier,
        max_level - 2,
    )
