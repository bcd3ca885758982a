"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...models.domain import Stop, Tour


@dataclass(frozen=True, slots=True)
class LegEstimate:
    distance_m: float
    duration_s: float
    geometry: tuple[tuple[float, float], ...] = ()  # (lat, lon) along the road


@dataclass(frozen=True, slots=True)
class LegMetrics:
    origin_id: str
    destination_id: str
    distance_m: float
    duration_s: float
    ok: bool
    error: Optional[str] = None
    geometry: tuple[tuple[float, float], ...] = ()


@dataclass(slots=True)
class RouteMetrics:
    total_distance_m: float = 0.0
    total_duration_s: float = 0.0
    legs: list[LegMetrics] = field(default_factory=list)
    failed_legs: int = 0

    @property
    def partial(self) -> bool:
        """True when at least one leg failed and the totals understate the route."""
        return self.failed_legs > 0


@dataclass(frozen=True, slots=True)
class OptimizationResult:
    tour: Tour
    excluded: tuple[Stop, ...] = ()
