from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .analytics import ANALYTICS_CHECKPOINT_WAVE
from .config import ConfigError, load_assumptions, load_settings
from .formatting import (
    format_profile_details,
    format_sensitivity_table,
    format_summary_table,
    format_timeline_table,
    format_wave_details,
)
from .models import PRESET_IDS, SCALE_FIELDS, ModelError
from .registry import PresetRegistry
from .routes import build_route_risk_timeline, calculate_route_balance_snapshot
from .sensitivity import sensitivity_analysis
from .waves import calculate_wave_snapshot


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="td-balance",
        description="Compile tower-defense balance presets and estimate wave route risk.",
    )
    parser.add_argument(
        "--preset",
        choices=PRESET_IDS,
        default=None,
        help="Preset to inspect (default: TDBALANCE_PRESET or 'standard').",
    )
    parser.add_argument(
        "--assumptions",
        default=None,
        help="JSON/YAML file overriding preset scale factors.",
    )
    parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    sub = parser.add_subparsers(dest="command", required=True)

    summary = sub.add_parser("summary", help="Compare all presets at one wave.")
    summary.add_argument("--wave", type=int, default=ANALYTICS_CHECKPOINT_WAVE)

    sub.add_parser("profile", help="Show the compiled profile of a preset.")

    wave = sub.add_parser("wave", help="Wave and route snapshot of a preset.")
    wave.add_argument("wave", type=int)

    timeline = sub.add_parser("timeline", help="Route risk over a wave range.")
    timeline.add_argument("--start", type=int, default=1)
    timeline.add_argument("--end", type=int, default=30)

    sensitivity = sub.add_parser("sensitivity", help="Sweep one scale factor of a preset.")
    sensitivity.add_argument("parameter", choices=SCALE_FIELDS)
    sensitivity.add_argument(
        "--values",
        type=float,
        nargs="+",
        default=[0.8, 0.9, 1.0, 1.1, 1.2],
    )
    sensitivity.add_argument("--wave", type=int, default=ANALYTICS_CHECKPOINT_WAVE)
    return parser


def _build_registry(args: argparse.Namespace) -> PresetRegistry:
    settings = load_settings()
    assumptions = settings.assumptions
    if args.assumptions:
        assumptions = load_assumptions(args.assumptions)
    return PresetRegistry(args.preset or settings.active_preset, assumptions)


def _print_json(payload: Any) -> None:
    json.dump(payload, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def _run(args: argparse.Namespace, registry: PresetRegistry) -> None:
    as_json = args.format == "json"
    profile = registry.active()

    if args.command == "summary":
        entries = registry.build_balance_scheme_summary(args.wave)
        if as_json:
            _print_json(entries)
        else:
            print(format_summary_table(entries))
    elif args.command == "profile":
        if as_json:
            _print_json(profile.to_dict())
        else:
            print(format_profile_details(profile))
    elif args.command == "wave":
        snapshot = calculate_wave_snapshot(profile, args.wave)
        route = calculate_route_balance_snapshot(profile, args.wave)
        if as_json:
            _print_json({"preset_id": profile.id, "snapshot": snapshot.to_dict(), "route_snapshot": route.to_dict()})
        else:
            print(format_wave_details(snapshot, route))
    elif args.command == "timeline":
        routes = build_route_risk_timeline(profile, args.start, args.end)
        if as_json:
            _print_json({"preset_id": profile.id, "timeline": [route.to_dict() for route in routes]})
        else:
            print(format_timeline_table(routes))
    elif args.command == "sensitivity":
        result = sensitivity_analysis(profile.id, profile.assumptions, args.parameter, args.values, wave=args.wave)
        if as_json:
            _print_json(result)
        else:
            print(format_sensitivity_table(result))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        registry = _build_registry(args)
    except ConfigError as exc:
        parser.error(str(exc))

    try:
        _run(args, registry)
    except ModelError as exc:
        parser.error(f"Calculation failed: {exc}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
