"""Accumulation of travel metrics along an ordered tour."""

from __future__ import annotations

import logging
from typing import Optional

from ...models.domain import Tour
from .base import LegScorer
from .errors import LegScoringError
from .models import LegMetrics, RouteMetrics
from .pacing import NoPacing, RequestPacer

logger = logging.getLogger(__name__)


def accumulate_route_metrics(
    tour: Tour,
    scorer: LegScorer,
    pacer: Optional[RequestPacer] = None,
) -> RouteMetrics:
    """Score each consecutive pair of the tour in order and sum the results.

    A leg the scorer cannot handle adds nothing to the totals; it is kept
    in ``legs`` with ``ok=False`` and counted in ``failed_legs``.
    """
    pacer = pacer or NoPacing()
    metrics = RouteMetrics()
    for origin, destination in tour.legs():
        pacer.wait()
        try:
            estimate = scorer.score(origin.coordinate, destination.coordinate)
        except LegScoringError as exc:
            logger.warning(f"Could not score leg {origin.name!r} -> {destination.name!r}: {exc}")
            metrics.failed_legs += 1
            metrics.legs.append(
                LegMetrics(
                    origin_id=origin.stop_id,
                    destination_id=destination.stop_id,
                    distance_m=0.0,
                    duration_s=0.0,
                    ok=False,
                    error=str(exc),
                )
            )
            continue
        metrics.total_distance_m += estimate.distance_m
        metrics.total_duration_s += estimate.duration_s
        metrics.legs.append(
            LegMetrics(
                origin_id=origin.stop_id,
                destination_id=destination.stop_id,
                distance_m=estimate.distance_m,
                duration_s=estimate.duration_s,
                ok=True,
                geometry=estimate.geometry,
            )
        )

    if metrics.partial:
        logger.warning(
            f"Route metrics are partial: {metrics.failed_legs} of {len(metrics.legs)} legs failed to score."
        )
    return metrics
