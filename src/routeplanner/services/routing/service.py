"""Routing orchestration service."""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict
from typing import Optional, Sequence

from ...config import settings
from ...data.stops_csv import default_stop_name, parse_lat_lon, parse_stops_csv
from ...models.domain import Coordinate, Stop
from ...schemas.routing import (
    CsvImportRequest,
    CsvImportResponse,
    LegModel,
    NavigationModel,
    OptimizeRequest,
    OptimizeResponse,
    OrderedStopModel,
    RouteMetricsModel,
    StopInput,
    StopModel,
)
from ..export.geojson import tour_to_feature_collection
from ..export.navigation import google_maps_links
from ..geospatial import count_self_crossings
from .geocoding import NominatimGeocoder
from .models import OptimizationResult, RouteMetrics
from .optimizer import RouteOptimizer
from .osrm_client import OSRMClient, OSRMLegScorer
from .pacing import RequestPacer

logger = logging.getLogger(__name__)


def _build_stops(inputs: Sequence[StopInput]) -> list[Stop]:
    stops: list[Stop] = []
    for position, item in enumerate(inputs, start=1):
        name = (item.name or "").strip() or (item.address or "").strip() or default_stop_name(position)
        coordinate = None
        if item.latitude is not None and item.longitude is not None:
            coordinate = Coordinate(latitude=item.latitude, longitude=item.longitude)
        elif item.address:
            # "lat, lon" typed into the address field needs no lookup
            coordinate = parse_lat_lon(item.address)
        stops.append(
            Stop(
                name=name,
                address=(item.address or "").strip() or None,
                coordinate=coordinate,
                stop_id=item.id or str(uuid.uuid4()),
            )
        )
    return stops


def _stop_model(stop: Stop) -> StopModel:
    return StopModel(
        id=stop.stop_id,
        name=stop.name,
        address=stop.address,
        latitude=stop.coordinate.latitude if stop.coordinate else None,
        longitude=stop.coordinate.longitude if stop.coordinate else None,
    )


def _build_optimizer(payload: OptimizeRequest) -> RouteOptimizer:
    resolver = None
    if payload.resolve_missing and settings.geocoding_enabled:
        resolver = NominatimGeocoder()
    return RouteOptimizer(resolver=resolver, pacer=RequestPacer(settings.geocode_delay_seconds))


def _measure(optimizer: RouteOptimizer, result: OptimizationResult) -> Optional[RouteMetrics]:
    try:
        client = OSRMClient()
    except ValueError as exc:
        logger.info(f"Skipping route metrics: {exc}")
        return None
    return optimizer.measure(
        result.tour,
        OSRMLegScorer(client),
        RequestPacer(settings.directions_delay_seconds),
    )


def _summary(stop_count: int, metrics: Optional[RouteMetrics]) -> str:
    if metrics is None:
        return f"OK: {stop_count} stops"
    summary = f"OK: {stop_count} stops - {int(metrics.total_distance_m / 1000)} km, {int(metrics.total_duration_s / 60)} min"
    if metrics.partial:
        summary += f" ({metrics.failed_legs} leg(s) could not be scored)"
    return summary


def optimize_stops(payload: OptimizeRequest) -> OptimizeResponse:
    stops = _build_stops(payload.stops)
    optimizer = _build_optimizer(payload)
    result = optimizer.optimize(stops)

    metrics = _measure(optimizer, result) if payload.compute_metrics else None

    links = google_maps_links(result.tour)
    metadata = {
        "status": "partial" if metrics is not None and metrics.partial else "complete",
        "requested_stops": len(stops),
        "ordered_stops": len(result.tour),
        "excluded_stops": len(result.excluded),
        "crossings": count_self_crossings(result.tour.coordinates()),
        "summary": _summary(len(result.tour), metrics),
    }
    if result.excluded:
        logger.warning(
            f"{len(result.excluded)} stop(s) excluded from the route: "
            + ", ".join(stop.name for stop in result.excluded)
        )

    return OptimizeResponse(
        stops=[
            OrderedStopModel(sequence=sequence, **_stop_model(stop).model_dump())
            for sequence, stop in enumerate(result.tour, start=1)
        ],
        excluded=[_stop_model(stop) for stop in result.excluded],
        metrics=RouteMetricsModel(
            total_distance_m=metrics.total_distance_m,
            total_duration_s=metrics.total_duration_s,
            failed_legs=metrics.failed_legs,
            partial=metrics.partial,
            legs=[LegModel(**asdict(leg)) for leg in metrics.legs],
        )
        if metrics is not None
        else None,
        navigation=NavigationModel(**asdict(links)) if links else None,
        geojson=tour_to_feature_collection(result.tour, metrics),
        metadata=metadata,
    )


def import_stops_csv(payload: CsvImportRequest) -> CsvImportResponse:
    stops = parse_stops_csv(payload.content, start_index=payload.start_index)
    logger.info(f"Imported {len(stops)} stops from CSV")
    return CsvImportResponse(stops=[_stop_model(stop) for stop in stops])
