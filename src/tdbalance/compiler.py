from __future__ import annotations

from dataclasses import replace

from .analytics import evaluate_profile_analytics
from .models import (
    BalanceAssumptions,
    BalanceBaseline,
    BalanceProfile,
    BarracksProfile,
    BaseUpgradeProfile,
    BossEventProfile,
    BuffRarityScale,
    BuildingCosts,
    BuildingProfile,
    EconomyProfile,
    EliteEnemyProfile,
    EliteWaveProfile,
    EnemyProfile,
    FarmProfile,
    FrostTowerProfile,
    HeroBuffProfile,
    HeroGrowthProfile,
    HeroLevelProfile,
    HeroProfile,
    HeroSkillProfile,
    LightningTowerProfile,
    ModelError,
    SoldierGrowthProfile,
    SoldierProfile,
    SpaProfile,
    TowerProfile,
    UpgradeCostMultipliers,
    WallProfile,
    WaveDirectorProfile,
    WaveInfiniteProfile,
    WeaponTypeDamageScale,
)
from .presets import BASELINE
from .scaling import (
    clamp_percent,
    ensure_building_growth_floor,
    round2,
    round_half_up,
    round_int,
    scale_interval,
    scale_multiply,
    scale_reduce,
)


def _compile_economy(base: EconomyProfile, a: BalanceAssumptions) -> EconomyProfile:
    return EconomyProfile(
        initial_coins=round_int(base.initial_coins * a.economy_scale),
        enemy_coin_drop=round_int(base.enemy_coin_drop * a.economy_scale),
        enemy_coin_drop_variance=round_int(base.enemy_coin_drop_variance * (0.7 + a.economy_scale * 0.3)),
        wave_bonus_base=round_int(base.wave_bonus_base * a.economy_scale),
        wave_bonus_growth=round_int(base.wave_bonus_growth * a.economy_scale),
    )


def _compile_wave_infinite(base: WaveInfiniteProfile, a: BalanceAssumptions) -> WaveInfiniteProfile:
    return WaveInfiniteProfile(
        base_count=round_int(base.base_count * a.enemy_count_scale),
        count_per_wave=round_int(base.count_per_wave * a.enemy_count_scale),
        count_growth_step_waves=base.count_growth_step_waves,
        count_growth_step_bonus=round_int(base.count_growth_step_bonus * a.enemy_count_scale),
        hp_mult_per_wave=round2(base.hp_mult_per_wave * a.enemy_power_scale),
        attack_mult_per_wave=round2(base.attack_mult_per_wave * a.enemy_power_scale),
        speed_mult_per_wave=round2(base.speed_mult_per_wave * a.enemy_speed_scale),
        max_speed_mult=round2(base.max_speed_mult * (0.92 + a.enemy_speed_scale * 0.08)),
        base_spawn_interval=scale_interval(base.base_spawn_interval, a.enemy_count_scale, 0.85, 0.15),
        spawn_interval_decay_per_wave=round2(base.spawn_interval_decay_per_wave * a.enemy_count_scale),
        min_spawn_interval=scale_interval(base.min_spawn_interval, a.enemy_count_scale, 0.9, 0.1),
        spawn_range=base.spawn_range,
        bonus_per_wave=round_int(base.bonus_per_wave * a.economy_scale),
        bonus_growth_per_wave=round_int(base.bonus_growth_per_wave * a.economy_scale),
    )


def _compile_wave_director(base: WaveDirectorProfile, a: BalanceAssumptions) -> WaveDirectorProfile:
    elite = base.elite
    boss = base.boss_event
    return WaveDirectorProfile(
        spawn_portals=base.spawn_portals,
        elite=EliteWaveProfile(
            start_wave=elite.start_wave,
            interval=elite.interval,
            base_count=round_int(elite.base_count),
            count_growth_step_waves=elite.count_growth_step_waves,
            max_count=round_int(elite.max_count * (0.92 + a.enemy_count_scale * 0.08)),
            spawn_every=elite.spawn_every,
        ),
        randomizer=base.randomizer,
        boss_event=BossEventProfile(
            interval_min_waves=boss.interval_min_waves,
            interval_max_waves=boss.interval_max_waves,
            boss_cooldown_waves=boss.boss_cooldown_waves,
            boss_only_wave=boss.boss_only_wave,
            additional_enemy_count=max(0, round_half_up(boss.additional_enemy_count * a.enemy_count_scale)),
            boss_hp_multiplier=round2(boss.boss_hp_multiplier * a.enemy_power_scale),
            boss_attack_multiplier=round2(boss.boss_attack_multiplier * a.enemy_power_scale),
            boss_speed_multiplier=round2(boss.boss_speed_multiplier * a.enemy_speed_scale),
            boss_scale_multiplier=boss.boss_scale_multiplier,
            boss_coin_multiplier=round2(boss.boss_coin_multiplier * a.economy_scale),
            minion_scale_ratio=boss.minion_scale_ratio,
            echo=boss.echo,
        ),
    )


def _compile_enemy(base: EnemyProfile, a: BalanceAssumptions) -> EnemyProfile:
    return EnemyProfile(
        move_speed=round2(base.move_speed * a.enemy_speed_scale),
        base_attack=round_int(base.base_attack * a.enemy_power_scale),
        base_hp=round_int(base.base_hp * a.enemy_power_scale),
        attack_interval=scale_interval(base.attack_interval, a.enemy_power_scale, 0.95, 0.05),
        attack_range=round2(base.attack_range * (0.95 + a.enemy_speed_scale * 0.05)),
        aggro_range=round2(base.aggro_range * (0.96 + a.enemy_speed_scale * 0.04)),
        base_reach_damage=round_int(base.base_reach_damage * a.enemy_power_scale),
        elite=EliteEnemyProfile(
            hp_multiplier=scale_multiply(base.elite.hp_multiplier, a.enemy_power_scale),
            attack_multiplier=scale_multiply(base.elite.attack_multiplier, a.enemy_power_scale),
            speed_multiplier=scale_multiply(base.elite.speed_multiplier, a.enemy_speed_scale),
            scale_multiplier=base.elite.scale_multiplier,
            coin_drop_multiplier=scale_multiply(base.elite.coin_drop_multiplier, a.economy_scale),
        ),
        flying_ranged=base.flying_ranged,
    )


def _compile_building(
    base: BuildingProfile,
    a: BalanceAssumptions,
    enemy_attack_growth: float,
) -> BuildingProfile:
    cost_factor = a.upgrade_cost_scale / a.economy_scale
    power = a.player_power_scale

    def grow(multiplier: float, scale: float) -> float:
        return ensure_building_growth_floor(scale_multiply(multiplier, scale), enemy_attack_growth)

    costs = base.costs
    upgrade = base.upgrade_cost_multiplier
    base_upgrade = base.base_upgrade
    buff = base_upgrade.hero_buff
    barracks = base.barracks
    tower = base.tower
    frost = base.frost_tower
    lightning = base.lightning_tower
    farm = base.farm
    spa = base.spa
    wall = base.wall

    return BuildingProfile(
        default_cost_multiplier=scale_multiply(base.default_cost_multiplier, a.upgrade_cost_scale),
        costs=BuildingCosts(
            barracks=round_int(costs.barracks * cost_factor),
            base=round_int(costs.base * cost_factor),
            tower=round_int(costs.tower * cost_factor),
            frost_tower=round_int(costs.frost_tower * cost_factor),
            lightning_tower=round_int(costs.lightning_tower * cost_factor),
            farm=round_int(costs.farm * cost_factor),
            wall=round_int(costs.wall * cost_factor),
        ),
        upgrade_cost_multiplier=UpgradeCostMultipliers(
            barracks=scale_multiply(upgrade.barracks, a.upgrade_cost_scale),
            tower=scale_multiply(upgrade.tower, a.upgrade_cost_scale),
            frost_tower=scale_multiply(upgrade.frost_tower, a.upgrade_cost_scale),
            lightning_tower=scale_multiply(upgrade.lightning_tower, a.upgrade_cost_scale),
            farm=scale_multiply(upgrade.farm, a.upgrade_cost_scale),
            wall=scale_multiply(upgrade.wall, a.upgrade_cost_scale),
        ),
        base_upgrade=BaseUpgradeProfile(
            start_cost=round_int(base_upgrade.start_cost * cost_factor),
            cost_multiplier=scale_multiply(base_upgrade.cost_multiplier, a.upgrade_cost_scale),
            hp_multiplier=grow(base_upgrade.hp_multiplier, 0.94 + power * 0.06),
            collect_radius=round2(base_upgrade.collect_radius * (0.96 + power * 0.04)),
            collect_rate=round_int(base_upgrade.collect_rate * (0.9 + a.economy_scale * 0.1)),
            collect_interval=scale_interval(base_upgrade.collect_interval, a.economy_scale, 0.95, 0.05),
            soldier_batch_base=base_upgrade.soldier_batch_base,
            soldier_batch_bonus_per_level=base_upgrade.soldier_batch_bonus_per_level,
            soldier_batch_max=round_int(base_upgrade.soldier_batch_max * (0.88 + power * 0.12)),
            hero_buff=HeroBuffProfile(
                hp_multiplier=scale_multiply(buff.hp_multiplier, power),
                attack_multiplier=scale_multiply(buff.attack_multiplier, power),
                attack_interval_multiplier=scale_reduce(buff.attack_interval_multiplier, power),
                move_speed_multiplier=scale_multiply(buff.move_speed_multiplier, power),
                attack_range_bonus=round2(buff.attack_range_bonus * power),
                heal_percent=clamp_percent(buff.heal_percent, power, 0.1, 0.8),
            ),
        ),
        barracks=BarracksProfile(
            hp=round_int(barracks.hp * power),
            spawn_interval=scale_interval(barracks.spawn_interval, power, 0.9, 0.1),
            max_units=round_int(barracks.max_units * power),
            spawn_batch_per_level=round_int(barracks.spawn_batch_per_level * (0.9 + power * 0.1)),
            stat_multiplier=grow(barracks.stat_multiplier, power),
            spawn_interval_multiplier=scale_reduce(barracks.spawn_interval_multiplier, power),
            max_units_per_level=round_int(barracks.max_units_per_level),
        ),
        tower=TowerProfile(
            hp=round_int(tower.hp * power),
            attack_range=round2(tower.attack_range * power),
            attack_damage=round_int(tower.attack_damage * power),
            attack_interval=scale_interval(tower.attack_interval, power, 0.92, 0.08),
            stat_multiplier=grow(tower.stat_multiplier, power),
            attack_multiplier=grow(tower.attack_multiplier, power),
            range_multiplier=scale_multiply(tower.range_multiplier, power),
            interval_multiplier=scale_reduce(tower.interval_multiplier, power),
            machine_gun=tower.machine_gun,
        ),
        frost_tower=FrostTowerProfile(
            hp=round_int(frost.hp * power),
            attack_range=round2(frost.attack_range * power),
            attack_damage=round_int(frost.attack_damage * power),
            attack_interval=scale_interval(frost.attack_interval, power, 0.95, 0.05),
            bullet_explosion_radius=round2(frost.bullet_explosion_radius * power),
            bullet_slow_percent=clamp_percent(frost.bullet_slow_percent, power, 0.15, 0.75),
            bullet_slow_duration=round2(frost.bullet_slow_duration * power),
            stat_multiplier=grow(frost.stat_multiplier, power),
            attack_multiplier=grow(frost.attack_multiplier, power),
            range_multiplier=scale_multiply(frost.range_multiplier, power),
            interval_multiplier=scale_reduce(frost.interval_multiplier, power),
        ),
        lightning_tower=LightningTowerProfile(
            hp=round_int(lightning.hp * power),
            attack_range=round2(lightning.attack_range * power),
            attack_damage=round_int(lightning.attack_damage * power),
            attack_interval=scale_interval(lightning.attack_interval, power, 0.95, 0.05),
            chain_count=round_int(lightning.chain_count * (0.9 + power * 0.1)),
            chain_range=round2(lightning.chain_range * power),
            stat_multiplier=grow(lightning.stat_multiplier, power),
            attack_multiplier=grow(lightning.attack_multiplier, power),
            range_multiplier=scale_multiply(lightning.range_multiplier, power),
            interval_multiplier=scale_reduce(lightning.interval_multiplier, power),
            chain_range_per_level=round2(lightning.chain_range_per_level * power),
        ),
        farm=FarmProfile(
            hp=round_int(farm.hp),
            income_per_tick=round_int(farm.income_per_tick * a.economy_scale * a.farm_income_scale),
            income_interval=scale_interval(
                farm.income_interval, a.farm_income_scale * a.economy_scale, 0.9, 0.1
            ),
            stat_multiplier=grow(farm.stat_multiplier, power),
            income_multiplier=scale_multiply(farm.income_multiplier, a.farm_income_scale),
            stack=farm.stack,
        ),
        spa=SpaProfile(
            hp=round_int(spa.hp * power),
            heal_radius=round2(spa.heal_radius * (0.95 + power * 0.05)),
            heal_percent_per_second=round2(spa.heal_percent_per_second * power),
            heal_interval=scale_interval(spa.heal_interval, power, 0.95, 0.05),
            stat_multiplier=grow(spa.stat_multiplier, power),
        ),
        wall=WallProfile(
            hp=round_int(wall.hp * power),
            taunt_range=round2(wall.taunt_range),
            stat_multiplier=grow(wall.stat_multiplier, power),
        ),
    )


def _compile_soldier(base: SoldierProfile, a: BalanceAssumptions) -> SoldierProfile:
    power = a.player_power_scale
    growth = base.growth
    return SoldierProfile(
        move_speed=round2(base.move_speed * power),
        base_attack=round_int(base.base_attack * power),
        base_hp=round_int(base.base_hp * power),
        attack_interval=scale_interval(base.attack_interval, power, 0.94, 0.06),
        attack_range=round2(base.attack_range * power),
        growth=SoldierGrowthProfile(
            hp_linear=round2(growth.hp_linear * power),
            hp_quadratic=round2(growth.hp_quadratic * power),
            attack_linear=round2(growth.attack_linear * power),
            attack_quadratic=round2(growth.attack_quadratic * power),
            attack_interval_decay_per_level=round2(growth.attack_interval_decay_per_level * power),
            attack_interval_min_multiplier=scale_reduce(growth.attack_interval_min_multiplier, power),
            attack_range_linear=round2(growth.attack_range_linear * power),
            move_speed_linear=round2(growth.move_speed_linear * power),
            size_linear=growth.size_linear,
            size_quadratic=growth.size_quadratic,
            size_max_multiplier=growth.size_max_multiplier,
        ),
    )


def _compile_hero(base: HeroProfile, a: BalanceAssumptions) -> HeroProfile:
    power = a.player_power_scale
    return HeroProfile(
        base_hp=round_int(base.base_hp * power),
        base_attack=round_int(base.base_attack * power),
        attack_interval=scale_interval(base.attack_interval, power, 0.94, 0.06),
        attack_range=round2(base.attack_range * power),
        move_speed=round2(base.move_speed * power),
        crit_rate=clamp_percent(base.crit_rate, power, 0.01, 0.5),
        crit_damage=round2(base.crit_damage * power),
    )


def _compile_hero_level(base: HeroLevelProfile, a: BalanceAssumptions) -> HeroLevelProfile:
    growth = base.growth
    scale = a.hero_growth_scale
    return HeroLevelProfile(
        xp_base=round_int(base.xp_base * a.enemy_power_scale),
        xp_growth=scale_multiply(base.xp_growth, a.enemy_power_scale),
        xp_per_kill=round_int(base.xp_per_kill * a.economy_scale),
        xp_per_elite_kill=round_int(base.xp_per_elite_kill * a.economy_scale),
        growth=HeroGrowthProfile(
            max_hp_multiply=scale_multiply(growth.max_hp_multiply, scale),
            attack_multiply=scale_multiply(growth.attack_multiply, scale),
            crit_rate_add=round2(growth.crit_rate_add * scale),
            crit_damage_add=round2(growth.crit_damage_add * scale),
            move_speed_multiply=scale_multiply(growth.move_speed_multiply, scale),
            attack_range_multiply=scale_multiply(growth.attack_range_multiply, scale),
            attack_interval_multiply=scale_reduce(growth.attack_interval_multiply, scale),
        ),
    )


def _compile_hero_skill(a: BalanceAssumptions) -> HeroSkillProfile:
    skill = a.hero_skill_scale
    weapon_scale = round2(skill)
    return HeroSkillProfile(
        weapon_damage_multiplier=weapon_scale,
        weapon_attack_interval_multiplier=round2(1.0 - (skill - 1.0) * 0.35),
        weapon_range_multiplier=round2(1.0 + (skill - 1.0) * 0.22),
        weapon_type_damage_scale=WeaponTypeDamageScale(
            machine_gun=weapon_scale,
            flamethrower=weapon_scale,
            cannon=weapon_scale,
            glitch_wave=weapon_scale,
        ),
        buff_multiply_scale=weapon_scale,
        buff_add_scale=weapon_scale,
        buff_rarity_scale=BuffRarityScale(
            blue=round2(0.95 + skill * 0.05),
            purple=round2(0.9 + skill * 0.1),
            gold=round2(0.85 + skill * 0.15),
        ),
    )


def build_profile(
    preset_id: str,
    assumptions: BalanceAssumptions,
    baseline: BalanceBaseline = BASELINE,
) -> BalanceProfile:
    """Compile one preset's scale factors into a frozen ``BalanceProfile``.

    Pure and deterministic: the same assumptions always produce an equal profile.
    Analytics are simulated on the default lane model and defense assumptions.
    Scale factors too large for the integer tables raise ``ModelError``.
    """
    try:
        profile = _compile_profile(preset_id, assumptions, baseline)
        return replace(profile, analytics=evaluate_profile_analytics(profile))
    except ModelError:
        raise
    except (OverflowError, ZeroDivisionError, ValueError) as exc:
        # int() of an infinite or NaN intermediate
        raise ModelError(f"Assumptions for preset '{preset_id}' overflow the balance tables: {exc}") from exc


def _compile_profile(
    preset_id: str,
    assumptions: BalanceAssumptions,
    baseline: BalanceBaseline,
) -> BalanceProfile:
    wave_infinite = _compile_wave_infinite(baseline.wave_infinite, assumptions)
    return BalanceProfile(
        id=preset_id,
        label=assumptions.label,
        assumptions=assumptions,
        economy=_compile_economy(baseline.economy, assumptions),
        wave_infinite=wave_infinite,
        wave_director=_compile_wave_director(baseline.wave_director, assumptions),
        enemy=_compile_enemy(baseline.enemy, assumptions),
        building=_compile_building(baseline.building, assumptions, wave_infinite.attack_mult_per_wave),
        soldier=_compile_soldier(baseline.soldier, assumptions),
        hero=_compile_hero(baseline.hero, assumptions),
        hero_level=_compile_hero_level(baseline.hero_level, assumptions),
        hero_skill=_compile_hero_skill(assumptions),
    )
