from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .models import PRESET_IDS, BalanceAssumptions, ModelError
from .presets import BALANCE_ASSUMPTIONS, DEFAULT_PRESET_ID

logger = logging.getLogger(__name__)

PRESET_ENV = "TDBALANCE_PRESET"
ASSUMPTIONS_ENV = "TDBALANCE_ASSUMPTIONS"


class ConfigError(RuntimeError):
    """Raised when preset configuration is invalid."""


def _read_raw(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Assumptions file not found: {path}")

    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc

    if suffix in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:  # pragma: no cover - broken install
            raise ConfigError("YAML assumptions requested, but PyYAML is not installed.") from exc

        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    raise ConfigError(f"Unsupported assumptions format '{suffix}'. Use .json or .yaml/.yml.")


def validate_preset_id(preset_id: str) -> str:
    normalized = str(preset_id).strip().lower()
    if normalized not in PRESET_IDS:
        raise ConfigError(
            f"Unknown balance preset '{preset_id}'. Expected one of: {', '.join(PRESET_IDS)}."
        )
    return normalized


def parse_assumptions(payload: Mapping[str, Any]) -> Dict[str, BalanceAssumptions]:
    """Merge a ``preset_id -> scales`` mapping over the built-in presets."""
    if not isinstance(payload, Mapping):
        raise ConfigError("Assumptions root must be an object (JSON/YAML mapping).")

    table: Dict[str, BalanceAssumptions] = dict(BALANCE_ASSUMPTIONS)
    for raw_id, raw in payload.items():
        preset_id = validate_preset_id(raw_id)
        try:
            table[preset_id] = BalanceAssumptions.from_dict(raw, default_label=table[preset_id].label)
        except ModelError as exc:
            raise ConfigError(f"Invalid assumptions for preset '{preset_id}': {exc}") from exc
    return table


def load_assumptions(path: Path | str) -> Dict[str, BalanceAssumptions]:
    path = Path(path)
    table = parse_assumptions(_read_raw(path))
    logger.info("Loaded balance assumptions from %s", path)
    return table


@dataclass(slots=True, frozen=True)
class Settings:
    active_preset: str = DEFAULT_PRESET_ID
    assumptions: Dict[str, BalanceAssumptions] = field(default_factory=lambda: dict(BALANCE_ASSUMPTIONS))


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    active = validate_preset_id(env.get(PRESET_ENV, "").strip() or DEFAULT_PRESET_ID)
    assumptions_path = env.get(ASSUMPTIONS_ENV, "").strip()
    if assumptions_path:
        table = load_assumptions(Path(assumptions_path).expanduser())
    else:
        table = dict(BALANCE_ASSUMPTIONS)
    return Settings(active_preset=active, assumptions=table)
