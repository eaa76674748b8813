"""Shapely-backed polygon operations.

Only two operations cross into the numerical backend: intersecting two rings
while keeping the largest component, and simplifying a ring to a tolerance.
Everything else in the engine works on plain coordinate tuples.
"""

from __future__ import annotations

from typing import Sequence

from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

from ..models.domain import Coordinate, Ring
from .geospatial import close_ring, is_degenerate, planar_area_km2


def to_polygon(ring: Sequence[Coordinate]) -> Polygon:
    """Build a valid shapely polygon, repairing self-intersections with buffer(0)."""

    polygon = Polygon(ring)
    if not polygon.is_valid:
        repaired = polygon.buffer(0)
        if isinstance(repaired, MultiPolygon):
            repaired = max(repaired.geoms, key=lambda part: part.area)
        polygon = repaired
    return polygon


def to_ring(polygon: Polygon) -> Ring:
    """Counter-clockwise exterior ring of a polygon, holes discarded."""

    if polygon.is_empty:
        return ()
    return close_ring(orient(polygon, sign=1.0).exterior.coords)


def polygon_parts(geometry: BaseGeometry) -> list[Polygon]:
    """Polygonal components of an arbitrary geometry result."""

    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    if hasattr(geometry, "geoms"):
        parts: list[Polygon] = []
        for part in geometry.geoms:
            parts.extend(polygon_parts(part))
        return parts
    return []


def intersect_largest(a: Sequence[Coordinate], b: Sequence[Coordinate]) -> Ring | None:
    """Intersect two rings and return the largest resulting component.

    Returns None when the rings do not overlap in any area. Backend errors
    propagate to the caller.
    """

    result = to_polygon(a).intersection(to_polygon(b))
    candidates = [to_ring(part) for part in polygon_parts(result)]
    candidates = [ring for ring in candidates if not is_degenerate(ring)]
    if not candidates:
        return None
    largest = max(candidates, key=planar_area_km2)
    if planar_area_km2(largest) <= 0.0:
        return None
    return largest


def simplify_ring(ring: Sequence[Coordinate], tolerance: float) -> Ring:
    """Douglas-Peucker simplification that keeps the ring a valid polygon."""

    simplified = to_polygon(ring).simplify(tolerance, preserve_topology=True)
    parts = polygon_parts(simplified)
    if not parts:
        return close_ring(ring)
    return to_ring(max(parts, key=lambda part: part.area))
