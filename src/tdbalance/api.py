from __future__ import annotations

from functools import lru_cache
import logging
from typing import Any, Dict, List, Literal

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from .analytics import ANALYTICS_CHECKPOINT_WAVE, compare_profiles
from .compiler import build_profile
from .config import ConfigError
from .models import SCALE_FIELDS, BalanceAssumptions, BalanceProfile, ModelError, camel_case
from .registry import PresetRegistry, default_registry
from .routes import build_route_risk_timeline, calculate_route_balance_snapshot
from .sensitivity import sensitivity_analysis
from .waves import calculate_wave_snapshot

logger = logging.getLogger(__name__)

app = FastAPI(
    title="TD Balance API",
    description="Compiled balance presets, wave snapshots and route risk estimates.",
    version="1.0.0",
)

ScaleName = Literal[
    "enemy_count_scale",
    "enemy_power_scale",
    "enemy_speed_scale",
    "player_power_scale",
    "economy_scale",
    "upgrade_cost_scale",
    "farm_income_scale",
    "hero_growth_scale",
    "hero_skill_scale",
]
PresetName = Literal["casual", "standard", "hardcore"]

MAX_API_WAVE = 1000
MAX_SENSITIVITY_VALUES = 50


@lru_cache(maxsize=1)
def get_registry() -> PresetRegistry:
    return default_registry()


class CompileRequest(BaseModel):
    preset_id: str = Field("custom", description="Id stamped on the compiled profile.")
    label: str = Field("Custom", description="Display label.")
    assumptions: Dict[str, float] = Field(default_factory=dict, description="Scale factors; missing ones are 1.0.")
    wave: int = Field(ANALYTICS_CHECKPOINT_WAVE, le=MAX_API_WAVE, description="Wave for the returned snapshots.")


class SensitivityRequest(BaseModel):
    preset_id: PresetName = "standard"
    parameter: ScaleName = "enemy_power_scale"
    values: List[float] = Field(
        default_factory=lambda: [0.8, 0.9, 1.0, 1.1, 1.2],
        min_length=1,
        max_length=MAX_SENSITIVITY_VALUES,
    )
    wave: int = Field(ANALYTICS_CHECKPOINT_WAVE, le=MAX_API_WAVE)


def _profile(preset_id: str) -> BalanceProfile:
    try:
        return get_registry().get(preset_id)
    except ConfigError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _preset_payload(profile: BalanceProfile) -> Dict[str, Any]:
    return {
        "id": profile.id,
        "label": profile.label,
        "assumptions": profile.assumptions.to_dict(),
        "analytics": profile.to_dict()["analytics"],
    }


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/v1/presets")
def list_presets():
    registry = get_registry()
    return {
        "active": registry.active_id,
        "presets": [_preset_payload(profile) for profile in registry.profiles()],
    }


@app.get("/api/v1/presets/{preset_id}/profile")
def preset_profile(preset_id: str):
    return _profile(preset_id).to_dict()


@app.get("/api/v1/presets/{preset_id}/waves/{wave}")
def preset_wave(preset_id: str, wave: int):
    profile = _profile(preset_id)
    return {"preset_id": profile.id, "snapshot": calculate_wave_snapshot(profile, wave).to_dict()}


@app.get("/api/v1/presets/{preset_id}/route/{wave}")
def preset_route(preset_id: str, wave: int):
    profile = _profile(preset_id)
    return {"preset_id": profile.id, "route_snapshot": calculate_route_balance_snapshot(profile, wave).to_dict()}


@app.get("/api/v1/presets/{preset_id}/timeline")
def preset_timeline(
    preset_id: str,
    start: int = Query(1, le=MAX_API_WAVE),
    end: int = Query(30, le=MAX_API_WAVE),
):
    profile = _profile(preset_id)
    routes = build_route_risk_timeline(profile, start, end)
    return {"preset_id": profile.id, "timeline": [route.to_dict() for route in routes]}


@app.get("/api/v1/summary")
def summary(wave: int = Query(ANALYTICS_CHECKPOINT_WAVE, le=MAX_API_WAVE)):
    registry = get_registry()
    return {
        "active": registry.active_id,
        "wave": wave,
        "presets": registry.build_balance_scheme_summary(wave),
        "comparison": compare_profiles(registry.profiles(), wave),
    }


@app.post("/api/v1/analytics/sensitivity")
def analytics_sensitivity(payload: SensitivityRequest):
    profile = _profile(payload.preset_id)
    try:
        result = sensitivity_analysis(
            preset_id=profile.id,
            assumptions=profile.assumptions,
            parameter=payload.parameter,
            values=payload.values,
            wave=payload.wave,
        )
    except ModelError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"result": result}


@app.post("/api/v1/profiles/compile")
def compile_profile(payload: CompileRequest):
    known = set(SCALE_FIELDS) | {camel_case(name) for name in SCALE_FIELDS}
    unknown = sorted(set(payload.assumptions) - known)
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown scale factors: {', '.join(unknown)}")
    try:
        assumptions = BalanceAssumptions.from_dict(dict(payload.assumptions), default_label=payload.label)
    except ModelError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid assumptions: {exc}") from exc

    try:
        profile = build_profile(payload.preset_id, assumptions)
    except ModelError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid assumptions: {exc}") from exc
    logger.debug("Compiled ad-hoc profile %s", payload.preset_id)
    return {
        "profile": profile.to_dict(),
        "snapshot": calculate_wave_snapshot(profile, payload.wave).to_dict(),
        "route_snapshot": calculate_route_balance_snapshot(profile, payload.wave).to_dict(),
    }
