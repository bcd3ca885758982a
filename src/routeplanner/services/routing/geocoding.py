"""Nominatim-backed coordinate resolution."""

from __future__ import annotations

import logging

import httpx

from ...config import settings
from ...models.domain import Coordinate
from .errors import ResolutionError

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """``CoordinateResolver`` that asks a Nominatim search endpoint for the best match.

    One request per query, no retries: a failed lookup only excludes the
    stop from ordering.
    """

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.geocoder_base_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout_seconds
        self._transport = transport

    def resolve(self, query: str) -> Coordinate:
        query = query.strip()
        if not query:
            raise ResolutionError("Empty geocoding query.")

        params = {"q": query, "format": "jsonv2", "limit": 1}
        headers = {"User-Agent": self.user_agent}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.get(f"{self.base_url}/search", params=params, headers=headers)
                response.raise_for_status()
                results = response.json()
        except httpx.HTTPError as exc:
            raise ResolutionError(f"Geocoding request for {query!r} failed: {exc}") from exc
        except ValueError as exc:
            raise ResolutionError(f"Geocoder returned an unreadable response for {query!r}.") from exc

        if not isinstance(results, list) or not results:
            raise ResolutionError(f"No match found for {query!r}.")

        best = results[0]
        try:
            coordinate = Coordinate(latitude=float(best["lat"]), longitude=float(best["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ResolutionError(f"Geocoder match for {query!r} has no usable coordinate.") from exc
        logger.debug(f"Resolved {query!r} to ({coordinate.latitude:.6f}, {coordinate.longitude:.6f})")
        return coordinate
