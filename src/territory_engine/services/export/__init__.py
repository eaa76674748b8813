"""Export services."""

from .geojson import (
    clusters_to_geojson,
    polygon_to_wkt,
    territories_to_geojson,
    trip_to_geojson,
)

__all__ = [
    "territories_to_geojson",
    "clusters_to_geojson",
    "trip_to_geojson",
    "polygon_to_wkt",
]
