"""Nearest-neighbour construction of an initial visiting order."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Stop
from ..geospatial import haversine_m


def nearest_neighbor_tour(stops: Sequence[Stop]) -> list[Stop]:
    """Build a greedy tour starting from the first stop.

    Each step moves to the closest unvisited stop. On equal distances the
    stop listed earliest among the remaining ones wins, so the result is
    deterministic for a given input order.
    """
    for stop in stops:
        if stop.coordinate is None:
            raise ValueError(f"Stop '{stop.name}' has no coordinate; resolve it before ordering.")

    remaining = list(stops)
    if not remaining:
        return []

    current = remaining.pop(0)
    route = [current]
    while remaining:
        best_index = 0
        best_distance = float("inf")
        for index, candidate in enumerate(remaining):
            distance = haversine_m(current.coordinate, candidate.coordinate)
            if distance < best_distance:
                best_distance = distance
                best_index = index
        current = remaining.pop(best_index)
        route.append(current)
    return route
