"""GeoJSON/WKT export utilities for territories, clusters and trips."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ...models.domain import Cluster, Coordinate, DeliveryTrip, Territory


def generate_site_color(index: int) -> str:
    """Generate distinct colors for sites."""
    colors = [
        "#E2231A", "#3B82F6", "#10B981", "#F59E0B", "#8B5CF6",
        "#EC4899", "#02d8e0", "#611cc7", "#e0af00", "#13aae0",
    ]
    return colors[index % len(colors)]


def polygon_to_wkt(coordinates: Sequence[Coordinate]) -> str:
    """Convert a (lon, lat) ring to a WKT POLYGON string.

    Raises:
        ValueError: if fewer than 3 coordinates are supplied.
    """
    if not coordinates or len(coordinates) < 3:
        raise ValueError("Polygon must have at least 3 coordinates")

    coordinates = list(coordinates)
    if coordinates[0] != coordinates[-1]:
        coordinates = coordinates + [coordinates[0]]

    coord_pairs = [f"{lon} {lat}" for lon, lat in coordinates]
    return f"POLYGON(({','.join(coord_pairs)}))"


def linestring_to_wkt(coordinates: Sequence[Coordinate]) -> str:
    if not coordinates or len(coordinates) < 2:
        raise ValueError("LineString must have at least 2 coordinates")

    coord_pairs = [f"{lon} {lat}" for lon, lat in coordinates]
    return f"LINESTRING({','.join(coord_pairs)})"


def territories_to_geojson(territories: Sequence[Territory]) -> Dict[str, Any]:
    """Territories as a FeatureCollection; empty territories are skipped."""
    features: List[Dict[str, Any]] = []
    for idx, territory in enumerate(territories):
        if len(territory.polygon) < 4:
            continue
        features.append(
            {
                "type": "Feature",
                "id": str(territory.site_id),
                "geometry": {
                    "type": "Polygon",
                    "coordinates": [[list(point) for point in territory.polygon]],
                },
                "properties": {
                    "site_id": territory.site_id,
                    "area_km2": territory.area_km2,
                    "daily_orders": territory.daily_orders,
                    "constrained": territory.constrained,
                    "wkt": polygon_to_wkt(territory.polygon),
                    "fillColor": generate_site_color(idx),
                    "fillOpacity": 0.33,
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}


def clusters_to_geojson(clusters: Sequence[Cluster]) -> Dict[str, Any]:
    """Clusters as Point features carrying their radius for circle rendering."""
    return {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "id": cluster.cluster_id,
                "geometry": {"type": "Point", "coordinates": [cluster.longitude, cluster.latitude]},
                "properties": {
                    "cluster_id": cluster.cluster_id,
                    "count": cluster.count,
                    "radius_m": round(cluster.radius_m, 1),
                },
            }
            for cluster in clusters
        ],
    }


def trip_to_geojson(trip: DeliveryTrip) -> Dict[str, Any]:
    """Both orderings of a trip as LineString features."""
    features = []
    for label, path, minutes in (
        ("executed", trip.executed_path, trip.executed_minutes),
        ("optimized", trip.optimized_path, trip.optimized_minutes),
    ):
        if len(path) < 2:
            continue
        features.append(
            {
                "type": "Feature",
                "id": f"{trip.trip_id}_{label}",
                "geometry": {"type": "LineString", "coordinates": [list(point) for point in path]},
                "properties": {
                    "trip_id": trip.trip_id,
                    "ordering": label,
                    "duration_minutes": round(minutes, 2),
                    "wkt": linestring_to_wkt(path),
                },
            }
        )
    return {"type": "FeatureCollection", "features": features}
