"""Domain models for stops and visiting orders."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional, Sequence


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A validated WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(f"Coordinate values must be finite, got ({self.latitude}, {self.longitude}).")
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude {self.latitude} is outside [-90, 90].")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude {self.longitude} is outside [-180, 180].")

    def as_lat_lon(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Stop:
    """A named place to visit, optionally already located.

    The coordinate is a single optional value so a stop can never carry only
    half of a latitude/longitude pair.
    """

    name: str
    address: Optional[str] = None
    coordinate: Optional[Coordinate] = None
    stop_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValueError("Stop name must be a non-empty string.")

    @property
    def is_located(self) -> bool:
        return self.coordinate is not None

    @property
    def lookup_query(self) -> str:
        """Text handed to the geocoder: the address when known, else the name."""
        return self.address or self.name

    def with_coordinate(self, coordinate: Coordinate) -> "Stop":
        return replace(self, coordinate=coordinate)


@dataclass(frozen=True, slots=True)
class Tour:
    """An immutable visiting order over located, distinct stops."""

    stops: tuple[Stop, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for stop in self.stops:
            if stop.coordinate is None:
                raise ValueError(f"Stop '{stop.name}' has no coordinate and cannot be part of a tour.")
            if stop.stop_id in seen:
                raise ValueError(f"Stop '{stop.stop_id}' appears more than once in the tour.")
            seen.add(stop.stop_id)

    @classmethod
    def of(cls, stops: Sequence[Stop]) -> "Tour":
        return cls(stops=tuple(stops))

    def __len__(self) -> int:
        return len(self.stops)

    def __iter__(self) -> Iterator[Stop]:
        return iter(self.stops)

    def __getitem__(self, index: int) -> Stop:
        return self.stops[index]

    def coordinates(self) -> list[Coordinate]:
        return [stop.coordinate for stop in self.stops]  # type: ignore[misc]

    def legs(self) -> list[tuple[Stop, Stop]]:
        """Consecutive (from, to) pairs in visiting order."""
        return list(zip(self.stops, self.stops[1:]))
