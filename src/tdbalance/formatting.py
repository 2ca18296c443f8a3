from __future__ import annotations

from typing import Any, Dict, List, Sequence

from .models import BalanceProfile, RouteBalanceSnapshot, WaveBalanceSnapshot


def summarize_assumptions(profile: BalanceProfile) -> str:
    parts = [
        f"{name.replace('_scale', '')} x{value:.2f}"
        for name, value in profile.assumptions.scales().items()
        if value != 1.0
    ]
    return ", ".join(parts) if parts else "baseline"


def format_summary_table(entries: Sequence[Dict[str, Any]]) -> str:
    header = (
        f"{'Preset':<10}{'Enemies':<9}{'Unit HP':<9}{'Coins':<8}"
        f"{'Hero DPS':<10}{'Breach':<8}{'Risk':<8}HP loss"
    )
    lines = [header, "-" * len(header)]
    for entry in entries:
        snapshot = entry["snapshot"]
        route = entry["route_snapshot"]
        lines.append(
            f"{entry['id']:<10}{route['total_enemy_count']:<9}{snapshot['enemy_unit_hp']:<9}"
            f"{snapshot['predicted_coin_income']:<8}{snapshot['suggested_hero_dps']:<10}"
            f"{route['breach_rate']:<8.2f}{route['risk_score']:<8.2f}{route['predicted_base_hp_loss']}"
        )
    return "\n".join(lines)


def format_profile_details(profile: BalanceProfile) -> str:
    analytics = profile.analytics
    building = profile.building
    lines: List[str] = []
    lines.append(f"{profile.label} ({profile.id})")
    lines.append(f"  Assumptions: {summarize_assumptions(profile)}")
    lines.append(
        f"  Enemy      : hp {profile.enemy.base_hp}, attack {profile.enemy.base_attack}, "
        f"speed {profile.enemy.move_speed:.2f}"
    )
    lines.append(
        f"  Waves      : base count {profile.wave_infinite.base_count}, "
        f"+{profile.wave_infinite.count_per_wave}/wave, hp +{profile.wave_infinite.hp_mult_per_wave:.3f}/wave"
    )
    lines.append(
        f"  Towers DPS : tower {building.tower.dps:.2f}, frost {building.frost_tower.dps:.2f}, "
        f"lightning {building.lightning_tower.dps:.2f}"
    )
    lines.append(f"  Units DPS  : soldier {profile.soldier.dps:.2f}, hero {profile.hero.dps:.2f}")
    lines.append("")
    lines.append("  Wave 10 checkpoint")
    lines.append(
        f"    enemies {analytics.wave10_enemy_count}, unit hp {analytics.wave10_enemy_hp}, "
        f"unit attack {analytics.wave10_enemy_attack}, coins {analytics.wave10_coin_budget}"
    )
    lines.append(
        f"    breach {analytics.wave10_breach_rate:.2f}, risk {analytics.wave10_risk_score:.2f}, "
        f"suggested hero dps {analytics.suggested_hero_dps}"
    )
    lines.append(f"  First breach wave   : {analytics.first_breach_wave or 'none'}")
    lines.append(f"  Threshold breach    : {analytics.first_threshold_breach_wave or 'none'}")
    lines.append(f"  First collapse wave : {analytics.first_base_collapse_wave or 'none'}")
    return "\n".join(lines)


def format_wave_details(snapshot: WaveBalanceSnapshot, route: RouteBalanceSnapshot) -> str:
    lines = [
        f"Wave {snapshot.wave}",
        f"  Enemies     : {route.regular_enemy_count} regular + {route.elite_enemy_count} elite",
        f"  Multipliers : hp x{snapshot.enemy_hp_multiplier:.2f}, attack x{snapshot.enemy_attack_multiplier:.2f}, "
        f"speed x{snapshot.enemy_speed_multiplier:.2f}",
        f"  Unit stats  : hp {snapshot.enemy_unit_hp}, attack {snapshot.enemy_unit_attack}",
        f"  Economy     : {snapshot.predicted_coin_income} coins, hero dps {snapshot.suggested_hero_dps}",
        f"  Route       : {route.path_length:.2f} units in {route.enemy_travel_seconds:.2f}s",
        f"  Defense     : lane dps {route.effective_lane_dps:.2f}, per enemy {route.focus_dps_per_enemy:.2f}",
        f"  Outcome     : kill progress {route.kill_progress:.2f}, breach {route.breach_rate:.2f}, "
        f"risk {route.risk_score:.2f}, hp loss {route.predicted_base_hp_loss}",
    ]
    return "\n".join(lines)


def format_timeline_table(routes: Sequence[RouteBalanceSnapshot]) -> str:
    header = f"{'Wave':<6}{'Enemies':<9}{'Kill':<8}{'Breach':<8}{'Risk':<8}HP loss"
    lines = [header, "-" * len(header)]
    for route in routes:
        lines.append(
            f"{route.wave:<6}{route.total_enemy_count:<9}{route.kill_progress:<8.2f}"
            f"{route.breach_rate:<8.2f}{route.risk_score:<8.2f}{route.predicted_base_hp_loss}"
        )
    return "\n".join(lines)


def format_sensitivity_table(result: Dict[str, Any]) -> str:
    baseline = result["baseline"]
    lines = [
        f"{result['preset_id']} / {result['parameter']} at wave {result['wave']}"
        f" (baseline {baseline['value']:.2f}, risk {baseline['risk_score']:.2f})",
    ]
    header = f"{'Value':<8}{'Risk':<8}{'Delta':<9}{'Breach':<8}{'First breach':<14}Collapse"
    lines.append(header)
    lines.append("-" * len(header))
    for point in result["points"]:
        lines.append(
            f"{point['value']:<8.2f}{point['risk_score']:<8.2f}{point['delta_risk_vs_baseline']:<+9.2f}"
            f"{point['breach_rate']:<8.2f}{point['first_breach_wave'] or '-':<14}"
            f"{point['first_base_collapse_wave'] or '-'}"
        )
    return "\n".join(lines)
