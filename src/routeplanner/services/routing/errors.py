"""Exceptions raised by the routing pipeline."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Stop


class InsufficientStopsError(ValueError):
    """Fewer than two stops could be located, so there is nothing to order."""

    def __init__(self, located: int, excluded: Sequence[Stop] = ()) -> None:
        self.located = located
        self.excluded = tuple(excluded)
        message = f"At least 2 located stops are required to build a route, got {located}."
        if self.excluded:
            message += f" {len(self.excluded)} stop(s) could not be located."
        super().__init__(message)


class ResolutionError(LookupError):
    """A stop's address or name could not be turned into a coordinate."""


class LegScoringError(RuntimeError):
    """The directions service could not score a leg between two stops."""
