"""Deep links that hand a visiting order to a navigation app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from ...models.domain import Coordinate, Tour

GOOGLE_MAPS_APP_BASE = "comgooglemaps://"
GOOGLE_MAPS_WEB_BASE = "https://www.google.com/maps/dir/"


@dataclass(frozen=True, slots=True)
class NavigationLinks:
    google_maps_app: str
    google_maps_web: str


def _lat_lon(coordinate: Coordinate) -> str:
    return f"{coordinate.latitude},{coordinate.longitude}"


def google_maps_links(tour: Tour) -> Optional[NavigationLinks]:
    """Driving directions through the tour in order, or None for fewer than 2 stops."""

    if len(tour) < 2:
        return None
    coords = tour.coordinates()
    origin = _lat_lon(coords[0])
    destination = _lat_lon(coords[-1])
    waypoints = "|".join(_lat_lon(c) for c in coords[1:-1])

    app_url = f"{GOOGLE_MAPS_APP_BASE}?directionsmode=driving&origin={origin}&destination={destination}"
    if waypoints:
        app_url += f"&waypoints={waypoints}"

    web_url = f"{GOOGLE_MAPS_WEB_BASE}?api=1&travelmode=driving&origin={origin}&destination={destination}"
    if waypoints:
        web_url += f"&waypoints={quote(waypoints, safe=',')}"

    return NavigationLinks(google_maps_app=app_url, google_maps_web=web_url)
