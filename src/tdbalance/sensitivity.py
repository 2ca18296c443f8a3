from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Iterable, List

from .compiler import build_profile
from .models import SCALE_FIELDS, BalanceAssumptions, ModelError
from .routes import calculate_route_balance_snapshot
from .analytics import ANALYTICS_CHECKPOINT_WAVE


def sensitivity_analysis(
    preset_id: str,
    assumptions: BalanceAssumptions,
    parameter: str,
    values: Iterable[float],
    wave: int = ANALYTICS_CHECKPOINT_WAVE,
) -> Dict[str, Any]:
    """Recompile a preset with one scale factor swept over ``values``."""
    if parameter not in SCALE_FIELDS:
        raise ModelError(f"Unknown scale parameter: {parameter}")

    baseline = build_profile(preset_id, assumptions)
    baseline_risk = calculate_route_balance_snapshot(baseline, wave).risk_score

    points: List[Dict[str, Any]] = []
    for value in values:
        factor = float(value)
        adjusted = build_profile(preset_id, replace(assumptions, **{parameter: factor}))
        route = calculate_route_balance_snapshot(adjusted, wave)
        points.append(
            {
                "value": factor,
                "risk_score": route.risk_score,
                "delta_risk_vs_baseline": round(route.risk_score - baseline_risk, 2),
                "breach_rate": route.breach_rate,
                "first_breach_wave": adjusted.analytics.first_breach_wave,
                "first_base_collapse_wave": adjusted.analytics.first_base_collapse_wave,
            }
        )

    return {
        "preset_id": preset_id,
        "parameter": parameter,
        "wave": wave,
        "baseline": {
            "value": getattr(assumptions, parameter),
            "risk_score": baseline_risk,
            "first_breach_wave": baseline.analytics.first_breach_wave,
            "first_base_collapse_wave": baseline.analytics.first_base_collapse_wave,
        },
        "points": points,
    }
