from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Iterable, Literal, Tuple

PresetId = Literal["casual", "standard", "hardcore"]
PRESET_IDS: Tuple[str, ...] = ("casual", "standard", "hardcore")

SCALE_FIELDS: Tuple[str, ...] = (
    "enemy_count_scale",
    "enemy_power_scale",
    "enemy_speed_scale",
    "player_power_scale",
    "economy_scale",
    "upgrade_cost_scale",
    "farm_income_scale",
    "hero_growth_scale",
    "hero_skill_scale",
)


class ModelError(ValueError):
    """Raised for malformed balance records."""


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _stable_float(value: float, digits: int = 10) -> float:
    rounded = round(float(value), digits)
    # Normalize signed zero to keep deterministic JSON across runtimes.
    return 0.0 if rounded == 0.0 else rounded


def stabilize_numeric_payload(payload: Any, digits: int = 10) -> Any:
    if isinstance(payload, bool):
        return payload
    if isinstance(payload, float):
        return _stable_float(payload, digits=digits)
    if isinstance(payload, (list, tuple)):
        return [stabilize_numeric_payload(item, digits=digits) for item in payload]
    if isinstance(payload, dict):
        return {key: stabilize_numeric_payload(value, digits=digits) for key, value in payload.items()}
    return payload


@dataclass(slots=True, frozen=True)
class BalanceAssumptions:
    label: str
    enemy_count_scale: float = 1.0
    enemy_power_scale: float = 1.0
    enemy_speed_scale: float = 1.0
    player_power_scale: float = 1.0
    economy_scale: float = 1.0
    upgrade_cost_scale: float = 1.0
    farm_income_scale: float = 1.0
    hero_growth_scale: float = 1.0
    hero_skill_scale: float = 1.0

    def __post_init__(self) -> None:
        for name in SCALE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ModelError(f"Scale '{name}' must be a number, got {value!r}.")
            if not math.isfinite(value) or not value > 0.0:
                raise ModelError(f"Scale '{name}' must be a positive finite number, got {value}.")

    @classmethod
    def from_dict(cls, payload: Dict[str, Any], default_label: str = "") -> "BalanceAssumptions":
        if not isinstance(payload, dict):
            raise ModelError("Assumptions must be a mapping of scale factors.")
        values: Dict[str, Any] = {}
        for name in SCALE_FIELDS:
            raw = payload.get(name, payload.get(camel_case(name), 1.0))
            try:
                values[name] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ModelError(f"Invalid value for '{name}': {raw!r}") from exc
        label = str(payload.get("label", default_label))
        return cls(label=label, **values)

    def scales(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in SCALE_FIELDS}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Economy and waves
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class EconomyProfile:
    initial_coins: int
    enemy_coin_drop: int
    enemy_coin_drop_variance: int
    wave_bonus_base: int
    wave_bonus_growth: int


@dataclass(slots=True, frozen=True)
class WaveInfiniteProfile:
    base_count: int
    count_per_wave: int
    count_growth_step_waves: int
    count_growth_step_bonus: int
    hp_mult_per_wave: float
    attack_mult_per_wave: float
    speed_mult_per_wave: float
    max_speed_mult: float
    base_spawn_interval: float
    spawn_interval_decay_per_wave: float
    min_spawn_interval: float
    spawn_range: float
    bonus_per_wave: int
    bonus_growth_per_wave: int


@dataclass(slots=True, frozen=True)
class SpawnPortalProfile:
    open_wave2: int
    open_wave3: int
    edge_margin: float
    distance_factor: float
    jitter_radius: float


@dataclass(slots=True, frozen=True)
class EliteWaveProfile:
    start_wave: int
    interval: int
    base_count: int
    count_growth_step_waves: int
    max_count: int
    spawn_every: int


@dataclass(slots=True, frozen=True)
class RandomizerProfile:
    pick_types_per_wave: int
    combo_memory_waves: int
    recent_type_penalty_waves: int
    recent_type_penalty: float
    recent_window_waves: int
    tag_dominance_window_waves: int
    tag_dominance_threshold: float
    tag_dominance_penalty: float
    min_weight_floor: float


@dataclass(slots=True, frozen=True)
class BossEchoProfile:
    start_delay_waves: int
    bonus_weight_min: float
    bonus_weight_max: float
    bonus_duration_min: int
    bonus_duration_max: int
    base_weight_min: float
    base_weight_max: float
    base_duration_waves: int


@dataclass(slots=True, frozen=True)
class BossEventProfile:
    interval_min_waves: int
    interval_max_waves: int
    boss_cooldown_waves: int
    boss_only_wave: bool
    additional_enemy_count: int
    boss_hp_multiplier: float
    boss_attack_multiplier: float
    boss_speed_multiplier: float
    boss_scale_multiplier: float
    boss_coin_multiplier: float
    minion_scale_ratio: float
    echo: BossEchoProfile


@dataclass(slots=True, frozen=True)
class WaveDirectorProfile:
    spawn_portals: SpawnPortalProfile
    elite: EliteWaveProfile
    randomizer: RandomizerProfile
    boss_event: BossEventProfile


# ---------------------------------------------------------------------------
# Enemies
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class EliteEnemyProfile:
    hp_multiplier: float
    attack_multiplier: float
    speed_multiplier: float
    scale_multiplier: float
    coin_drop_multiplier: float


@dataclass(slots=True, frozen=True)
class FlyingRangedProfile:
    attack_range: float
    aggro_range: float
    projectile_speed: float
    projectile_lifetime: float
    projectile_hit_radius: float
    projectile_spawn_offset_y: float


@dataclass(slots=True, frozen=True)
class EnemyProfile:
    move_speed: float
    base_attack: int
    base_hp: int
    attack_interval: float
    attack_range: float
    aggro_range: float
    base_reach_damage: int
    elite: EliteEnemyProfile
    flying_ranged: FlyingRangedProfile


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class BuildingCosts:
    barracks: int
    base: int
    tower: int
    frost_tower: int
    lightning_tower: int
    farm: int
    wall: int


@dataclass(slots=True, frozen=True)
class UpgradeCostMultipliers:
    barracks: float
    tower: float
    frost_tower: float
    lightning_tower: float
    farm: float
    wall: float


@dataclass(slots=True, frozen=True)
class HeroBuffProfile:
    hp_multiplier: float
    attack_multiplier: float
    attack_interval_multiplier: float
    move_speed_multiplier: float
    attack_range_bonus: float
    heal_percent: float


@dataclass(slots=True, frozen=True)
class BaseUpgradeProfile:
    start_cost: int
    cost_multiplier: float
    hp_multiplier: float
    collect_radius: float
    collect_rate: int
    collect_interval: float
    soldier_batch_base: int
    soldier_batch_bonus_per_level: int
    soldier_batch_max: int
    hero_buff: HeroBuffProfile


@dataclass(slots=True, frozen=True)
class BarracksProfile:
    hp: int
    spawn_interval: float
    max_units: int
    spawn_batch_per_level: int
    stat_multiplier: float
    spawn_interval_multiplier: float
    max_units_per_level: int


@dataclass(slots=True, frozen=True)
class MachineGunProfile:
    bullet_spawn_y: float
    bullet_width_base: float
    bullet_length_base: float
    bullet_width_per_level: float
    bullet_length_per_level: float
    bullet_spread_deg: float
    bullet_max_lifetime: float
    burst_base: int
    burst_angle_step_deg: float
    model_node_name: str
    muzzle_fallback_y: float
    muzzle_top_inset: float


@dataclass(slots=True, frozen=True)
class TowerProfile:
    hp: int
    attack_range: float
    attack_damage: int
    attack_interval: float
    stat_multiplier: float
    attack_multiplier: float
    range_multiplier: float
    interval_multiplier: float
    machine_gun: MachineGunProfile

    @property
    def dps(self) -> float:
        return self.attack_damage / max(0.01, self.attack_interval)


@dataclass(slots=True, frozen=True)
class FrostTowerProfile:
    hp: int
    attack_range: float
    attack_damage: int
    attack_interval: float
    bullet_explosion_radius: float
    bullet_slow_percent: float
    bullet_slow_duration: float
    stat_multiplier: float
    attack_multiplier: float
    range_multiplier: float
    interval_multiplier: float

    @property
    def dps(self) -> float:
        return self.attack_damage / max(0.01, self.attack_interval)


@dataclass(slots=True, frozen=True)
class LightningTowerProfile:
    hp: int
    attack_range: float
    attack_damage: int
    attack_interval: float
    chain_count: int
    chain_range: float
    stat_multiplier: float
    attack_multiplier: float
    range_multiplier: float
    interval_multiplier: float
    chain_range_per_level: float

    @property
    def dps(self) -> float:
        return self.attack_damage / max(0.01, self.attack_interval)


@dataclass(slots=True, frozen=True)
class FarmStackProfile:
    base_y: float
    max_height: int
    coin_value: int


@dataclass(slots=True, frozen=True)
class FarmProfile:
    hp: int
    income_per_tick: int
    income_interval: float
    stat_multiplier: float
    income_multiplier: float
    stack: FarmStackProfile


@dataclass(slots=True, frozen=True)
class SpaProfile:
    hp: int
    heal_radius: float
    heal_percent_per_second: float
    heal_interval: float
    stat_multiplier: float


@dataclass(slots=True, frozen=True)
class WallProfile:
    hp: int
    taunt_range: float
    stat_multiplier: float


@dataclass(slots=True, frozen=True)
class BuildingProfile:
    default_cost_multiplier: float
    costs: BuildingCosts
    upgrade_cost_multiplier: UpgradeCostMultipliers
    base_upgrade: BaseUpgradeProfile
    barracks: BarracksProfile
    tower: TowerProfile
    frost_tower: FrostTowerProfile
    lightning_tower: LightningTowerProfile
    farm: FarmProfile
    spa: SpaProfile
    wall: WallProfile

    def growth_multipliers(self) -> Dict[str, float]:
        """Per-upgrade-level power multipliers that must outgrow enemy attack."""
        return {
            "barracks.stat_multiplier": self.barracks.stat_multiplier,
            "tower.stat_multiplier": self.tower.stat_multiplier,
            "tower.attack_multiplier": self.tower.attack_multiplier,
            "frost_tower.stat_multiplier": self.frost_tower.stat_multiplier,
            "frost_tower.attack_multiplier": self.frost_tower.attack_multiplier,
            "lightning_tower.stat_multiplier": self.lightning_tower.stat_multiplier,
            "lightning_tower.attack_multiplier": self.lightning_tower.attack_multiplier,
            "farm.stat_multiplier": self.farm.stat_multiplier,
            "spa.stat_multiplier": self.spa.stat_multiplier,
            "wall.stat_multiplier": self.wall.stat_multiplier,
            "base_upgrade.hp_multiplier": self.base_upgrade.hp_multiplier,
        }


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class SoldierGrowthProfile:
    hp_linear: float
    hp_quadratic: float
    attack_linear: float
    attack_quadratic: float
    attack_interval_decay_per_level: float
    attack_interval_min_multiplier: float
    attack_range_linear: float
    move_speed_linear: float
    size_linear: float
    size_quadratic: float
    size_max_multiplier: float


@dataclass(slots=True, frozen=True)
class SoldierProfile:
    move_speed: float
    base_attack: int
    base_hp: int
    attack_interval: float
    attack_range: float
    growth: SoldierGrowthProfile

    @property
    def dps(self) -> float:
        return self.base_attack / max(0.01, self.attack_interval)


@dataclass(slots=True, frozen=True)
class HeroProfile:
    base_hp: int
    base_attack: int
    attack_interval: float
    attack_range: float
    move_speed: float
    crit_rate: float
    crit_damage: float

    @property
    def dps(self) -> float:
        crit_factor = (1.0 - self.crit_rate) + self.crit_rate * self.crit_damage
        return self.base_attack / max(0.01, self.attack_interval) * crit_factor


@dataclass(slots=True, frozen=True)
class HeroGrowthProfile:
    max_hp_multiply: float
    attack_multiply: float
    crit_rate_add: float
    crit_damage_add: float
    move_speed_multiply: float
    attack_range_multiply: float
    attack_interval_multiply: float


@dataclass(slots=True, frozen=True)
class HeroLevelProfile:
    xp_base: int
    xp_growth: float
    xp_per_kill: int
    xp_per_elite_kill: int
    growth: HeroGrowthProfile


@dataclass(slots=True, frozen=True)
class WeaponTypeDamageScale:
    machine_gun: float
    flamethrower: float
    cannon: float
    glitch_wave: float


@dataclass(slots=True, frozen=True)
class BuffRarityScale:
    blue: float
    purple: float
    gold: float


@dataclass(slots=True, frozen=True)
class HeroSkillProfile:
    weapon_damage_multiplier: float
    weapon_attack_interval_multiplier: float
    weapon_range_multiplier: float
    weapon_type_damage_scale: WeaponTypeDamageScale
    buff_multiply_scale: float
    buff_add_scale: float
    buff_rarity_scale: BuffRarityScale


@dataclass(slots=True, frozen=True)
class ProfileAnalytics:
    wave10_enemy_count: int = 0
    wave10_enemy_hp: int = 0
    wave10_enemy_attack: int = 0
    wave10_coin_budget: int = 0
    suggested_hero_dps: int = 0
    wave10_breach_rate: float = 0.0
    wave10_risk_score: float = 0.0
    first_breach_wave: int = 0
    first_base_collapse_wave: int = 0
    first_threshold_breach_wave: int = 0


@dataclass(slots=True, frozen=True)
class BalanceBaseline:
    """Authored baseline tables, compiled per preset by ``build_profile``."""

    economy: EconomyProfile
    wave_infinite: WaveInfiniteProfile
    wave_director: WaveDirectorProfile
    enemy: EnemyProfile
    building: BuildingProfile
    soldier: SoldierProfile
    hero: HeroProfile
    hero_level: HeroLevelProfile


@dataclass(slots=True, frozen=True)
class BalanceProfile:
    id: str
    label: str
    assumptions: BalanceAssumptions
    economy: EconomyProfile
    wave_infinite: WaveInfiniteProfile
    wave_director: WaveDirectorProfile
    enemy: EnemyProfile
    building: BuildingProfile
    soldier: SoldierProfile
    hero: HeroProfile
    hero_level: HeroLevelProfile
    hero_skill: HeroSkillProfile
    analytics: ProfileAnalytics = field(default_factory=ProfileAnalytics)

    def to_dict(self) -> Dict[str, Any]:
        return stabilize_numeric_payload(asdict(self))


# ---------------------------------------------------------------------------
# Per-wave results
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class WaveBalanceSnapshot:
    wave: int
    enemy_count: int
    enemy_hp_multiplier: float
    enemy_attack_multiplier: float
    enemy_speed_multiplier: float
    enemy_unit_hp: int
    enemy_unit_attack: int
    predicted_coin_income: int
    suggested_hero_dps: int

    def to_dict(self) -> Dict[str, Any]:
        return stabilize_numeric_payload(asdict(self))


@dataclass(slots=True, frozen=True)
class RouteBalanceSnapshot:
    wave: int
    regular_enemy_count: int
    elite_enemy_count: int
    total_enemy_count: int
    path_length: float
    enemy_travel_seconds: float
    avg_enemy_hp: float
    avg_enemy_attack: float
    effective_lane_dps: float
    focus_dps_per_enemy: float
    damage_per_enemy_on_route: float
    kill_progress: float
    kill_distance_to_base_normalized: float
    breach_rate: float
    predicted_base_hp_loss: int
    risk_score: float

    def to_dict(self) -> Dict[str, Any]:
        return stabilize_numeric_payload(asdict(self))


# ---------------------------------------------------------------------------
# Simulation inputs
# ---------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class LanePolyline:
    name: str
    points: Tuple[Tuple[float, float], ...]

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ModelError(f"Lane '{self.name}' needs at least 2 points, got {len(self.points)}.")

    @classmethod
    def from_points(cls, name: str, points: Iterable[Iterable[float]]) -> "LanePolyline":
        normalized = []
        for item in points:
            try:
                x, z = (float(value) for value in item)
            except (TypeError, ValueError) as exc:
                raise ModelError(f"Lane '{name}' has a malformed point: {item!r}") from exc
            normalized.append((x, z))
        return cls(name=name, points=tuple(normalized))


_DEFENSE_DIVISORS = ("pressure_divisor_base", "attack_pressure_divisor", "wave_growth_soft_cap")


@dataclass(slots=True, frozen=True)
class DefenseAssumptions:
    """Idealized defensive capacity used only by the route risk estimate."""

    tower_slots: float = 4.0
    frost_tower_slots: float = 2.0
    lightning_tower_slots: float = 2.0
    base_fire_uptime: float = 0.82
    base_coverage_ratio: float = 0.72
    control_slow_bonus: float = 0.35
    hero_uptime: float = 0.6
    soldier_in_range_ratio: float = 0.55
    pressure_divisor_base: float = 36.0
    attack_pressure_divisor: float = 85.0
    wave_growth_soft_cap: float = 45.0
    base_hp: int = 100

    def __post_init__(self) -> None:
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ModelError(f"Defense assumption '{item.name}' must be a finite number, got {value!r}.")
            if item.name in _DEFENSE_DIVISORS and not value > 0.0:
                raise ModelError(f"Defense assumption '{item.name}' must be positive, got {value}.")
            if value < 0.0:
                raise ModelError(f"Defense assumption '{item.name}' cannot be negative, got {value}.")
        if self.base_hp < 1:
            raise ModelError(f"Defense assumption 'base_hp' must be at least 1, got {self.base_hp}.")

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DefenseAssumptions":
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(payload) - known)
        if unknown:
            raise ModelError(f"Unknown defense assumption fields: {', '.join(unknown)}")
        values: Dict[str, Any] = {}
        for key, raw in payload.items():
            try:
                values[key] = int(raw) if key == "base_hp" else float(raw)
            except (TypeError, ValueError, OverflowError) as exc:
                raise ModelError(f"Invalid value for defense assumption '{key}': {raw!r}") from exc
        return cls(**values)
