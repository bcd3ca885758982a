"""Contracts for the external collaborators used by the optimizer."""

from __future__ import annotations

from typing import Protocol

from ...models.domain import Coordinate
from .models import LegEstimate


class CoordinateResolver(Protocol):
    """Turns free text into a coordinate, raising ``ResolutionError`` on failure."""

    def resolve(self, query: str) -> Coordinate:
        ...


class LegScorer(Protocol):
    """Scores a single leg along real roads, raising ``LegScoringError`` on failure."""

    def score(self, origin: Coordinate, destination: Coordinate) -> LegEstimate:
        ...
