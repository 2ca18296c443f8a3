"""Authored baseline tables and the fixed difficulty preset registry."""

from __future__ import annotations

from typing import Dict

from .models import (
    BalanceAssumptions,
    BalanceBaseline,
    BarracksProfile,
    BaseUpgradeProfile,
    BossEchoProfile,
    BossEventProfile,
    BuildingCosts,
    BuildingProfile,
    EconomyProfile,
    EliteEnemyProfile,
    EliteWaveProfile,
    EnemyProfile,
    FarmProfile,
    FarmStackProfile,
    FlyingRangedProfile,
    FrostTowerProfile,
    HeroBuffProfile,
    HeroGrowthProfile,
    HeroLevelProfile,
    HeroProfile,
    LightningTowerProfile,
    MachineGunProfile,
    RandomizerProfile,
    SoldierGrowthProfile,
    SoldierProfile,
    SpaProfile,
    SpawnPortalProfile,
    TowerProfile,
    UpgradeCostMultipliers,
    WallProfile,
    WaveDirectorProfile,
    WaveInfiniteProfile,
)

DEFAULT_PRESET_ID = "standard"

BASELINE = BalanceBaseline(
    economy=EconomyProfile(
        initial_coins=100,
        enemy_coin_drop=5,
        enemy_coin_drop_variance=3,
        wave_bonus_base=20,
        wave_bonus_growth=4,
    ),
    wave_infinite=WaveInfiniteProfile(
        base_count=30,
        count_per_wave=6,
        count_growth_step_waves=3,
        count_growth_step_bonus=8,
        hp_mult_per_wave=0.18,
        attack_mult_per_wave=0.1,
        speed_mult_per_wave=0.015,
        max_speed_mult=1.55,
        base_spawn_interval=0.35,
        spawn_interval_decay_per_wave=0.02,
        min_spawn_interval=0.12,
        spawn_range=8,
        bonus_per_wave=20,
        bonus_growth_per_wave=4,
    ),
    wave_director=WaveDirectorProfile(
        spawn_portals=SpawnPortalProfile(
            open_wave2=4,
            open_wave3=8,
            edge_margin=4,
            distance_factor=0.96,
            jitter_radius=0.85,
        ),
        elite=EliteWaveProfile(
            start_wave=3,
            interval=2,
            base_count=1,
            count_growth_step_waves=4,
            max_count=6,
            spawn_every=4,
        ),
        randomizer=RandomizerProfile(
            pick_types_per_wave=3,
            combo_memory_waves=4,
            recent_type_penalty_waves=2,
            recent_type_penalty=0.42,
            recent_window_waves=8,
            tag_dominance_window_waves=3,
            tag_dominance_threshold=0.62,
            tag_dominance_penalty=0.55,
            min_weight_floor=0.01,
        ),
        boss_event=BossEventProfile(
            interval_min_waves=6,
            interval_max_waves=8,
            boss_cooldown_waves=12,
            boss_only_wave=True,
            additional_enemy_count=0,
            boss_hp_multiplier=14,
            boss_attack_multiplier=3.2,
            boss_speed_multiplier=1,
            boss_scale_multiplier=1.75,
            boss_coin_multiplier=6,
            minion_scale_ratio=0.6,
            echo=BossEchoProfile(
                start_delay_waves=2,
                bonus_weight_min=0.05,
                bonus_weight_max=0.1,
                bonus_duration_min=3,
                bonus_duration_max=5,
                base_weight_min=0.02,
                base_weight_max=0.04,
                base_duration_waves=12,
            ),
        ),
    ),
    enemy=EnemyProfile(
        move_speed=2.5,
        base_attack=8,
        base_hp=30,
        attack_interval=1.2,
        attack_range=0.85,
        aggro_range=3.0,
        base_reach_damage=10,
        elite=EliteEnemyProfile(
            hp_multiplier=3.2,
            attack_multiplier=1.4,
            speed_multiplier=1.1,
            scale_multiplier=1.35,
            coin_drop_multiplier=3.0,
        ),
        flying_ranged=FlyingRangedProfile(
            attack_range=5.8,
            aggro_range=8.0,
            projectile_speed=11,
            projectile_lifetime=2.2,
            projectile_hit_radius=0.42,
            projectile_spawn_offset_y=0.9,
        ),
    ),
    building=BuildingProfile(
        default_cost_multiplier=1.45,
        costs=BuildingCosts(
            barracks=6,
            base=20,
            tower=12,
            frost_tower=12,
            lightning_tower=12,
            farm=18,
            wall=6,
        ),
        upgrade_cost_multiplier=UpgradeCostMultipliers(
            barracks=1.4,
            tower=1.5,
            frost_tower=1.5,
            lightning_tower=1.5,
            farm=1.42,
            wall=1.35,
        ),
        base_upgrade=BaseUpgradeProfile(
            start_cost=20,
            cost_multiplier=1.6,
            hp_multiplier=1.45,
            collect_radius=3.0,
            collect_rate=2,
            collect_interval=0.1,
            soldier_batch_base=1,
            soldier_batch_bonus_per_level=1,
            soldier_batch_max=5,
            hero_buff=HeroBuffProfile(
                hp_multiplier=1.12,
                attack_multiplier=1.12,
                attack_interval_multiplier=0.97,
                move_speed_multiplier=1.03,
                attack_range_bonus=0.1,
                heal_percent=0.35,
            ),
        ),
        barracks=BarracksProfile(
            hp=180,
            spawn_interval=4.5,
            max_units=3,
            spawn_batch_per_level=1,
            stat_multiplier=1.18,
            spawn_interval_multiplier=0.92,
            max_units_per_level=1,
        ),
        tower=TowerProfile(
            hp=300,
            attack_range=18,
            attack_damage=26,
            attack_interval=0.32,
            stat_multiplier=1.2,
            attack_multiplier=1.22,
            range_multiplier=1.03,
            interval_multiplier=0.92,
            machine_gun=MachineGunProfile(
                bullet_spawn_y=1.5,
                bullet_width_base=0.3,
                bullet_length_base=0.48,
                bullet_width_per_level=0.03,
                bullet_length_per_level=0.05,
                bullet_spread_deg=2.2,
                bullet_max_lifetime=1.4,
                burst_base=2,
                burst_angle_step_deg=0.9,
                model_node_name="RifleTowerModel",
                muzzle_fallback_y=1.9,
                muzzle_top_inset=0.12,
            ),
        ),
        frost_tower=FrostTowerProfile(
            hp=280,
            attack_range=16,
            attack_damage=12,
            attack_interval=0.8,
            bullet_explosion_radius=2.8,
            bullet_slow_percent=0.45,
            bullet_slow_duration=2.2,
            stat_multiplier=1.18,
            attack_multiplier=1.15,
            range_multiplier=1.03,
            interval_multiplier=0.96,
        ),
        lightning_tower=LightningTowerProfile(
            hp=260,
            attack_range=17,
            attack_damage=12,
            attack_interval=0.95,
            chain_count=3,
            chain_range=6,
            stat_multiplier=1.2,
            attack_multiplier=1.2,
            range_multiplier=1.03,
            interval_multiplier=0.95,
            chain_range_per_level=0.5,
        ),
        farm=FarmProfile(
            hp=150,
            income_per_tick=1,
            income_interval=6,
            stat_multiplier=1.18,
            income_multiplier=1.25,
            stack=FarmStackProfile(base_y=0.09, max_height=12, coin_value=1),
        ),
        spa=SpaProfile(
            hp=800,
            heal_radius=5,
            heal_percent_per_second=0.1,
            heal_interval=1,
            stat_multiplier=1.2,
        ),
        wall=WallProfile(hp=1100, taunt_range=15, stat_multiplier=1.25),
    ),
    soldier=SoldierProfile(
        move_speed=3.5,
        base_attack=10,
        base_hp=50,
        attack_interval=1,
        attack_range=1.5,
        growth=SoldierGrowthProfile(
            hp_linear=0.2,
            hp_quadratic=0.015,
            attack_linear=0.12,
            attack_quadratic=0.02,
            attack_interval_decay_per_level=0.05,
            attack_interval_min_multiplier=0.72,
            attack_range_linear=0.03,
            move_speed_linear=0.035,
            size_linear=0.08,
            size_quadratic=0.008,
            size_max_multiplier=1.55,
        ),
    ),
    hero=HeroProfile(
        base_hp=60,
        base_attack=12,
        attack_interval=0.9,
        attack_range=2.5,
        move_speed=5.5,
        crit_rate=0.05,
        crit_damage=1.5,
    ),
    hero_level=HeroLevelProfile(
        xp_base=20,
        xp_growth=1.18,
        xp_per_kill=5,
        xp_per_elite_kill=20,
        growth=HeroGrowthProfile(
            max_hp_multiply=1.03,
            attack_multiply=1.08,
            crit_rate_add=0.012,
            crit_damage_add=0.06,
            move_speed_multiply=1.015,
            attack_range_multiply=1.005,
            attack_interval_multiply=0.985,
        ),
    ),
)

BALANCE_ASSUMPTIONS: Dict[str, BalanceAssumptions] = {
    "casual": BalanceAssumptions(
        label="Casual",
        enemy_count_scale=0.86,
        enemy_power_scale=0.84,
        enemy_speed_scale=0.95,
        player_power_scale=1.14,
        economy_scale=1.22,
        upgrade_cost_scale=0.88,
        farm_income_scale=1.3,
        hero_growth_scale=1.12,
        hero_skill_scale=1.12,
    ),
    "standard": BalanceAssumptions(label="Standard"),
    "hardcore": BalanceAssumptions(
        label="Hardcore",
        enemy_count_scale=1.2,
        enemy_power_scale=1.24,
        enemy_speed_scale=1.08,
        player_power_scale=0.93,
        economy_scale=0.9,
        upgrade_cost_scale=1.22,
        farm_income_scale=0.84,
        hero_growth_scale=0.92,
        hero_skill_scale=0.9,
    ),
}
