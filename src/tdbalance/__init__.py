"""Tower-defense balance preset compiler and wave route risk estimator."""

from .analytics import compare_profiles, evaluate_profile_analytics
from .compiler import build_profile
from .config import ConfigError, Settings, load_assumptions, load_settings
from .lanes import DEFAULT_LANE_MODEL, LaneGeometryModel
from .models import (
    PRESET_IDS,
    BalanceAssumptions,
    BalanceProfile,
    DefenseAssumptions,
    LanePolyline,
    ModelError,
    ProfileAnalytics,
    RouteBalanceSnapshot,
    WaveBalanceSnapshot,
)
from .presets import BALANCE_ASSUMPTIONS, DEFAULT_PRESET_ID
from .progression import (
    base_upgrade_costs,
    building_upgrade_costs,
    hero_stat_growth,
    hero_xp_table,
    soldier_level_multipliers,
)
from .registry import PresetRegistry, build_balance_scheme_summary, default_registry
from .routes import build_route_risk_timeline, calculate_route_balance_snapshot
from .sensitivity import sensitivity_analysis
from .waves import calculate_wave_snapshot

__all__ = [
    "build_profile",
    "calculate_wave_snapshot",
    "calculate_route_balance_snapshot",
    "build_route_risk_timeline",
    "build_balance_scheme_summary",
    "evaluate_profile_analytics",
    "compare_profiles",
    "sensitivity_analysis",
    "hero_xp_table",
    "hero_stat_growth",
    "soldier_level_multipliers",
    "building_upgrade_costs",
    "base_upgrade_costs",
    "PresetRegistry",
    "default_registry",
    "load_assumptions",
    "load_settings",
    "Settings",
    "ConfigError",
    "ModelError",
    "PRESET_IDS",
    "DEFAULT_PRESET_ID",
    "BALANCE_ASSUMPTIONS",
    "BalanceAssumptions",
    "BalanceProfile",
    "DefenseAssumptions",
    "LanePolyline",
    "LaneGeometryModel",
    "DEFAULT_LANE_MODEL",
    "ProfileAnalytics",
    "RouteBalanceSnapshot",
    "WaveBalanceSnapshot",
]
