"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import LineString

from ..models.domain import Coordinate

EARTH_RADIUS_M = 6_371_000.0
EARTH_RADIUS_KM = EARTH_RADIUS_M / 1000.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # rounding can push a just past 1 for antipodal points
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_m(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in meters between two coordinates."""

    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude) * 1000.0


def closed_tour_length_m(points: Sequence[Coordinate]) -> float:
    """Sum of haversine legs including the edge from the last point back to the first."""

    count = len(points)
    if count < 2:
        return 0.0
    return sum(haversine_m(points[i], points[(i + 1) % count]) for i in range(count))


def count_self_crossings(points: Sequence[Coordinate]) -> int:
    """Count pairs of non-adjacent edges of the closed loop that cross.

    Edges are compared in planar lon/lat space, which is adequate for
    spotting the tangles 2-opt removes over city-sized areas.
    """

    count = len(points)
    if count < 4:
        return 0
    edges = [
        LineString(
            [
                (points[i].longitude, points[i].latitude),
                (points[(i + 1) % count].longitude, points[(i + 1) % count].latitude),
            ]
        )
        for i in range(count)
    ]
    crossings = 0
    for i in range(count):
        for j in range(i + 2, count):
            if i == 0 and j == count - 1:
                continue  # these two edges share the first point
            if edges[i].crosses(edges[j]):
                crossings += 1
    return crossings
