"""Single entry point for ordering a set of stops."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Stop, Tour
from ..geospatial import closed_tour_length_m
from .base import CoordinateResolver, LegScorer
from .construction import nearest_neighbor_tour
from .errors import InsufficientStopsError, ResolutionError
from .metrics import accumulate_route_metrics
from .models import OptimizationResult, RouteMetrics
from .pacing import NoPacing, RequestPacer
from .refinement import two_opt

logger = logging.getLogger(__name__)

MIN_STOPS = 2


class RouteOptimizer:
    """Locates stops, then orders them by nearest-neighbour and 2-opt.

    The caller's ``Stop`` objects are never modified: resolved stops are
    copies, and the published ``Tour`` is built only once ordering is done.
    """

    def __init__(
        self,
        resolver: Optional[CoordinateResolver] = None,
        pacer: Optional[RequestPacer] = None,
    ) -> None:
        self.resolver = resolver
        self.pacer = pacer or NoPacing()

    def _locate(self, stops: Sequence[Stop]) -> tuple[list[Stop], list[Stop]]:
        located: list[Stop] = []
        excluded: list[Stop] = []
        for stop in stops:
            if stop.coordinate is not None:
                located.append(stop)
                continue
            if self.resolver is None:
                logger.warning(f"Stop {stop.name!r} has no coordinate and no resolver is configured; skipping")
                excluded.append(stop)
                continue
            self.pacer.wait()
            try:
                coordinate = self.resolver.resolve(stop.lookup_query)
            except ResolutionError as exc:
                logger.warning(f"Could not locate stop {stop.name!r}: {exc}")
                excluded.append(stop)
                continue
            located.append(stop.with_coordinate(coordinate))
        return located, excluded

    def optimize(self, stops: Sequence[Stop]) -> OptimizationResult:
        located, excluded = self._locate(stops)
        if len(located) < MIN_STOPS:
            raise InsufficientStopsError(len(located), excluded)

        logger.info(f"Ordering {len(located)} stops ({len(excluded)} excluded)")
        initial = nearest_neighbor_tour(located)
        refined = two_opt(initial)
        tour = Tour.of(refined)
        logger.info(
            f"Straight-line loop length {closed_tour_length_m([stop.coordinate for stop in initial]):.0f}m -> {closed_tour_length_m(tour.coordinates()):.0f}m"
        )
        return OptimizationResult(tour=tour, excluded=tuple(excluded))

    def measure(
        self,
        tour: Tour,
        scorer: LegScorer,
        pacer: Optional[RequestPacer] = None,
    ) -> RouteMetrics:
        return accumulate_route_metrics(tour, scorer, pacer)
