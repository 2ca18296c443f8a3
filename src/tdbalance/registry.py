from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .analytics import ANALYTICS_CHECKPOINT_WAVE
from .compiler import build_profile
from .config import ConfigError, load_settings, validate_preset_id
from .models import PRESET_IDS, BalanceAssumptions, BalanceProfile, ModelError
from .presets import BALANCE_ASSUMPTIONS, DEFAULT_PRESET_ID
from .routes import calculate_route_balance_snapshot
from .waves import calculate_wave_snapshot

logger = logging.getLogger(__name__)


class PresetRegistry:
    """All compiled presets plus the one currently selected.

    Profiles are built eagerly on construction and never change afterwards.
    """

    def __init__(
        self,
        active_id: str = DEFAULT_PRESET_ID,
        assumptions: Optional[Mapping[str, BalanceAssumptions]] = None,
    ) -> None:
        self._active_id = validate_preset_id(active_id)
        table = dict(BALANCE_ASSUMPTIONS)
        if assumptions:
            for preset_id, value in assumptions.items():
                table[validate_preset_id(preset_id)] = value

        self._profiles: Dict[str, BalanceProfile] = {}
        for preset_id in PRESET_IDS:
            try:
                self._profiles[preset_id] = build_profile(preset_id, table[preset_id])
            except ModelError as exc:
                raise ConfigError(f"Invalid balance preset '{preset_id}': {exc}") from exc
            logger.debug("Compiled balance preset %s", preset_id)

    @property
    def active_id(self) -> str:
        return self._active_id

    def ids(self) -> Tuple[str, ...]:
        return PRESET_IDS

    def get(self, preset_id: str) -> BalanceProfile:
        try:
            return self._profiles[preset_id]
        except KeyError as exc:
            raise ConfigError(f"Unknown balance preset '{preset_id}'.") from exc

    def active(self) -> BalanceProfile:
        return self._profiles[self._active_id]

    def profiles(self) -> List[BalanceProfile]:
        return [self._profiles[preset_id] for preset_id in PRESET_IDS]

    def build_balance_scheme_summary(self, wave: int = ANALYTICS_CHECKPOINT_WAVE) -> List[Dict[str, Any]]:
        summary: List[Dict[str, Any]] = []
        for profile in self.profiles():
            summary.append(
                {
                    "id": profile.id,
                    "label": profile.label,
                    "assumptions": profile.assumptions.to_dict(),
                    "snapshot": calculate_wave_snapshot(profile, wave).to_dict(),
                    "route_snapshot": calculate_route_balance_snapshot(profile, wave).to_dict(),
                }
            )
        return summary


def default_registry(environ: Optional[Mapping[str, str]] = None) -> PresetRegistry:
    settings = load_settings(environ)
    logger.info("Building preset registry (active=%s)", settings.active_preset)
    return PresetRegistry(settings.active_preset, settings.assumptions)


def build_balance_scheme_summary(wave: int = ANALYTICS_CHECKPOINT_WAVE) -> List[Dict[str, Any]]:
    return default_registry().build_balance_scheme_summary(wave)
