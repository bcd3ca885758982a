"""Export services."""

from .geojson import tour_to_feature_collection
from .navigation import NavigationLinks, google_maps_links

__all__ = [
    "tour_to_feature_collection",
    "google_maps_links",
    "NavigationLinks",
]
