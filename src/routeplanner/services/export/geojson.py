"""GeoJSON export of an ordered tour."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from shapely.geometry import LineString, MultiLineString, Point, mapping

from ...models.domain import Tour
from ..routing.models import RouteMetrics


def _leg_features(tour: Tour, metrics: RouteMetrics) -> List[Dict[str, Any]]:
    """One LineString per leg: the road path when the leg was scored with a
    geometry, otherwise the straight segment between the two stops."""
    features: List[Dict[str, Any]] = []
    for sequence, ((origin, destination), leg) in enumerate(zip(tour.legs(), metrics.legs), start=1):
        if leg.ok and len(leg.geometry) >= 2:
            path = [(lon, lat) for lat, lon in leg.geometry]
            source = "road"
        else:
            path = [
                (origin.coordinate.longitude, origin.coordinate.latitude),
                (destination.coordinate.longitude, destination.coordinate.latitude),
            ]
            source = "straight"
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(LineString(path)),
                "properties": {
                    "kind": "leg",
                    "sequence": sequence,
                    "origin_id": origin.stop_id,
                    "destination_id": destination.stop_id,
                    "source": source,
                    "distance_m": leg.distance_m,
                    "duration_s": leg.duration_s,
                },
            }
        )
    return features


def tour_to_feature_collection(tour: Tour, metrics: Optional[RouteMetrics] = None) -> Dict[str, Any]:
    """Convert a tour into a FeatureCollection ready for a map layer.

    Without metrics the route is a single straight LineString in visiting
    order. With metrics each leg gets its own LineString following the
    road when the directions service returned one. Lines are in lon/lat,
    as GeoJSON requires, and are followed by one Point per stop. Tours
    with fewer than two stops have no line and no bbox.
    """
    features: List[Dict[str, Any]] = []
    coords = tour.coordinates()
    collection: Dict[str, Any] = {"type": "FeatureCollection", "features": features}

    if len(coords) >= 2:
        if metrics is not None and metrics.legs:
            features.extend(_leg_features(tour, metrics))
        else:
            features.append(
                {
                    "type": "Feature",
                    "geometry": mapping(LineString([(c.longitude, c.latitude) for c in coords])),
                    "properties": {"kind": "route", "stop_count": len(coords)},
                }
            )
        lines = MultiLineString([feature["geometry"]["coordinates"] for feature in features])
        collection["bbox"] = list(lines.bounds)

    for sequence, stop in enumerate(tour, start=1):
        point = Point(stop.coordinate.longitude, stop.coordinate.latitude)
        features.append(
            {
                "type": "Feature",
                "geometry": mapping(point),
                "properties": {
                    "kind": "stop",
                    "sequence": sequence,
                    "name": stop.name,
                    "stop_id": stop.stop_id,
                },
            }
        )

    if coords:
        collection["center"] = [coords[0].latitude, coords[0].longitude]
    return collection
