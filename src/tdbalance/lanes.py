from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .models import LanePolyline, ModelError

MAP_HALF_WIDTH = 25.0
MAP_HALF_HEIGHT = 25.0

LANE_NAMES: Tuple[str, ...] = ("top", "mid", "bottom")

# Normalized (x, z) control points; every lane starts at the base corner.
DEFAULT_LANES: Tuple[LanePolyline, ...] = (
    LanePolyline.from_points(
        "top",
        [(0.05, 0.95), (0.12, 0.91), (0.26, 0.915), (0.47, 0.905), (0.69, 0.918), (0.95, 0.92)],
    ),
    LanePolyline.from_points(
        "mid",
        [(0.05, 0.95), (0.35, 0.65), (0.5, 0.5), (0.65, 0.35), (0.95, 0.05)],
    ),
    LanePolyline.from_points(
        "bottom",
        [(0.05, 0.95), (0.082, 0.9), (0.074, 0.72), (0.088, 0.52), (0.072, 0.3), (0.084, 0.05)],
    ),
)


@dataclass(slots=True, frozen=True)
class LaneGeometryModel:
    """Static enemy lanes and the canonical travel distance derived from them."""

    half_width: float = MAP_HALF_WIDTH
    half_height: float = MAP_HALF_HEIGHT
    lanes: Tuple[LanePolyline, ...] = field(default=DEFAULT_LANES)

    def __post_init__(self) -> None:
        if self.half_width <= 0.0 or self.half_height <= 0.0:
            raise ModelError("Map half-extents must be positive.")
        if not self.lanes:
            raise ModelError("Lane model needs at least one lane.")

    def to_world(self, x: float, z: float) -> Tuple[float, float]:
        world_x = x * (self.half_width * 2.0) - self.half_width
        world_z = (1.0 - z) * (self.half_height * 2.0) - self.half_height
        return world_x, world_z

    def world_points(self, lane: LanePolyline) -> Tuple[Tuple[float, float], ...]:
        return tuple(self.to_world(x, z) for x, z in lane.points)

    def lane_length(self, lane: LanePolyline) -> float:
        points = self.world_points(lane)
        return sum(math.dist(start, end) for start, end in zip(points, points[1:]))

    def lane(self, name: str) -> LanePolyline:
        for lane in self.lanes:
            if lane.name == name:
                return lane
        raise ModelError(f"Unknown lane: {name}")

    def lane_lengths(self) -> Dict[str, float]:
        return {lane.name: self.lane_length(lane) for lane in self.lanes}

    def canonical_path_length(self) -> float:
        # Mean across lanes; per-lane divergence in risk is not modelled.
        lengths = [self.lane_length(lane) for lane in self.lanes]
        return sum(lengths) / len(lengths)


DEFAULT_LANE_MODEL = LaneGeometryModel()
