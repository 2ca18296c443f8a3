from __future__ import annotations

import math

GROWTH_FLOOR_MARGIN = 0.03


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    # Game tables were authored with half-up rounding; Python's round() is half-even.
    return int(math.floor(value + 0.5))


def round_int(value: float) -> int:
    """Round half-up and keep counts/costs at a minimum of 1."""
    return max(1, round_half_up(value))


def round2(value: float) -> float:
    return math.floor(value * 100.0 + 0.5) / 100.0


def scale_multiply(base: float, scale: float, center: float = 1.0) -> float:
    """Scale the deviation of a ``x1.xx`` multiplier from ``center``.

    A neutral scale of 1.0 reproduces ``base``; a scale of 0 collapses it to ``center``.
    """
    return round2(center + (base - center) * scale)


def scale_reduce(base: float, scale: float) -> float:
    """Reciprocal form of :func:`scale_multiply` for lower-is-better multipliers."""
    return round2(1.0 - (1.0 - base) * scale)


def scale_interval(base: float, scale: float, bias: float, weight: float) -> float:
    """Inverse scale for time costs: larger ``scale`` shortens the interval."""
    return round2(base / (bias + scale * weight))


def clamp_percent(base: float, scale: float, low: float, high: float) -> float:
    return round2(clamp(base * scale, low, high))


def growth_floor(enemy_attack_mult_per_wave: float) -> float:
    return 1.0 + max(0.0, enemy_attack_mult_per_wave) + GROWTH_FLOOR_MARGIN


def ensure_building_growth_floor(multiplier: float, enemy_attack_mult_per_wave: float) -> float:
    """Keep per-level building growth ahead of per-wave enemy attack growth."""
    # The floor itself is not rounded so the guarantee holds exactly.
    return max(round2(multiplier), growth_floor(enemy_attack_mult_per_wave))
