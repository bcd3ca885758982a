"""Parsing of loosely formatted stop lists."""

from __future__ import annotations

from typing import Optional

from ..models.domain import Coordinate, Stop


def _coerce_float(value: Optional[str]) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _coordinate(lat: float, lon: float, line_number: int) -> Coordinate:
    try:
        return Coordinate(latitude=lat, longitude=lon)
    except ValueError as exc:
        raise ValueError(f"Line {line_number}: {exc}") from exc


def parse_lat_lon(text: str) -> Optional[Coordinate]:
    """Read free text of the form ``"lat, lon"`` as a coordinate.

    Anything else, including a pair outside the valid ranges, yields None so
    the text can still go to the geocoder.
    """
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 2:
        return None
    lat, lon = _coerce_float(parts[0]), _coerce_float(parts[1])
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(latitude=lat, longitude=lon)
    except ValueError:
        return None


def default_stop_name(position: int) -> str:
    return f"Stop {position}"


def parse_stops_csv(text: str, *, start_index: int = 0) -> list[Stop]:
    """Parse one stop per line.

    Accepted shapes, fields separated by commas:

    * ``name, ..., lat, lon`` - the last two fields are numbers; every
      field before them forms the name (commas kept).
    * ``lat, lon`` - an unnamed located stop.
    * ``name, address...`` - anything else; the stop is located later.

    ``start_index`` is the number of stops already present, so generated
    names continue the existing numbering.
    """
    stops: list[Stop] = []
    lines = [line.strip() for line in text.splitlines()]
    for line_number, line in enumerate(lines, start=1):
        if not line:
            continue
        parts = [part.strip() for part in line.split(",")]
        position = start_index + len(stops) + 1

        if len(parts) >= 3:
            lat, lon = _coerce_float(parts[-2]), _coerce_float(parts[-1])
            if lat is not None and lon is not None:
                name = ",".join(parts[:-2]).strip() or default_stop_name(position)
                stops.append(Stop(name=name, coordinate=_coordinate(lat, lon, line_number)))
                continue
        elif len(parts) == 2:
            lat, lon = _coerce_float(parts[0]), _coerce_float(parts[1])
            if lat is not None and lon is not None:
                stops.append(Stop(name=default_stop_name(position), coordinate=_coordinate(lat, lon, line_number)))
                continue

        name = parts[0] or default_stop_name(position)
        address = ",".join(parts[1:]).strip()
        stops.append(Stop(name=name, address=address or name))
    return stops
