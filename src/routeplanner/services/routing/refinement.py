"""2-opt local search over a visiting order."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Stop
from ..geospatial import haversine_m

IMPROVEMENT_EPSILON_M = 1e-6


def _reversal_delta(route: Sequence[Stop], i: int, j: int) -> float:
    """Length change from reversing route[i+1..j], scoring the loop edge j -> (j+1) mod n."""
    count = len(route)
    a = route[i].coordinate
    b = route[i + 1].coordinate
    c = route[j].coordinate
    d = route[(j + 1) % count].coordinate
    return (haversine_m(a, c) + haversine_m(b, d)) - (haversine_m(a, b) + haversine_m(c, d))


def two_opt(stops: Sequence[Stop]) -> list[Stop]:
    """Remove crossings by reversing segments until no move helps.

    Moves are scored as if the route closed back on its first stop, but
    the returned order stays open. Scanning is first-improvement: the
    first improving j for a given i is applied and the scan moves on to
    the next i. Passes repeat until one completes without a change.
    """
    route = list(stops)
    count = len(route)
    if count <= 3:
        return route

    improved = True
    while improved:
        improved = False
        for i in range(count - 2):
            for j in range(i + 2, count):
                if i == 0 and j == count - 1:
                    continue
                if _reversal_delta(route, i, j) < -IMPROVEMENT_EPSILON_M:
                    route[i + 1 : j + 1] = reversed(route[i + 1 : j + 1])
                    improved = True
                    break
    return route
