"""Geospatial helper functions.

Distances and areas use a local equirectangular approximation: one degree of
longitude and one degree of latitude are scaled by independent constants chosen
for the deployment latitude. This is only valid for small regions near that
latitude; it is a known limitation rather than a bug.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from ..config import settings
from ..models.domain import Coordinate, Ring, Site


def _scales(lon_scale: float | None, lat_scale: float | None) -> tuple[float, float]:
    return (
        settings.lon_km_per_degree if lon_scale is None else lon_scale,
        settings.lat_km_per_degree if lat_scale is None else lat_scale,
    )


def distance_km(
    a: Coordinate,
    b: Coordinate,
    *,
    lon_scale: float | None = None,
    lat_scale: float | None = None,
) -> float:
    """Euclidean distance between two (lon, lat) points in locally scaled km."""

    kx, ky = _scales(lon_scale, lat_scale)
    return math.hypot((b[0] - a[0]) * kx, (b[1] - a[1]) * ky)


def offset_km(origin: Coordinate, east_km: float, north_km: float) -> Coordinate:
    """Move a coordinate by the given east/north offsets in kilometers."""

    kx, ky = _scales(None, None)
    return (origin[0] + east_km / kx, origin[1] + north_km / ky)


def close_ring(coords: Iterable[Sequence[float]]) -> Ring:
    """Return the coordinates as an explicitly closed ring of float tuples."""

    ring = [(float(point[0]), float(point[1])) for point in coords]
    if ring and ring[0] != ring[-1]:
        ring.append(ring[0])
    return tuple(ring)


def open_ring(ring: Sequence[Coordinate]) -> list[Coordinate]:
    """Drop the duplicated closing vertex, if present."""

    vertices = list(ring)
    if len(vertices) > 1 and vertices[0] == vertices[-1]:
        vertices.pop()
    return vertices


def vertex_count(ring: Sequence[Coordinate]) -> int:
    """Number of vertices excluding the closing duplicate."""

    return len(open_ring(ring))


def is_degenerate(ring: Sequence[Coordinate]) -> bool:
    """True when the ring has fewer than three distinct vertices."""

    return len(set(open_ring(ring))) < 3


def round_ring(ring: Sequence[Coordinate], precision: int) -> Ring:
    return tuple((round(lon, precision), round(lat, precision)) for lon, lat in ring)


def shoelace(ring: Sequence[Coordinate]) -> float:
    """Signed shoelace sum (twice the signed area) in square degrees."""

    vertices = open_ring(ring)
    total = 0.0
    for index, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(index + 1) % len(vertices)]
        total += x1 * y2 - x2 * y1
    return total


def planar_area_km2(
    ring: Sequence[Coordinate],
    *,
    lon_scale: float | None = None,
    lat_scale: float | None = None,
) -> float:
    """Unsigned polygon area in square kilometers."""

    if is_degenerate(ring):
        return 0.0
    kx, ky = _scales(lon_scale, lat_scale)
    return abs(shoelace(ring)) / 2.0 * kx * ky


def nearest_site(point: Coordinate, sites: Sequence[Site]) -> Site | None:
    """Closest site to the point, first in roster order on ties."""

    if not sites:
        return None
    return min(sites, key=lambda site: distance_km(point, site.position))
