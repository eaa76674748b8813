"""Resample polygons into a fixed vertex-count band."""

from __future__ import annotations

import logging
from typing import Sequence

from shapely.errors import ShapelyError

from ...config import settings
from ...errors import ConfigurationError
from ...models.domain import Coordinate, Ring
from ..geometry import simplify_ring
from ..geospatial import close_ring, distance_km, is_degenerate, open_ring, vertex_count


def validate_band(min_points: int, max_points: int) -> None:
    if min_points < 3:
        raise ConfigurationError(f"min_points must be >= 3, got {min_points}")
    if min_points >= max_points:
        raise ConfigurationError(
            f"min_points must be below max_points, got [{min_points}, {max_points}]"
        )


def interpolate_ring(ring: Sequence[Coordinate], target_points: int) -> Ring:
    """Insert evenly spaced points along the edges until the ring has target_points vertices.

    Each edge receives either floor(k / n) or floor(k / n) + 1 new points, where k
    is the number of insertions and n the number of edges. Longer edges take the
    extra point first; equal lengths fall back to edge order.
    """

    vertices = open_ring(close_ring(ring))
    edge_count = len(vertices)
    to_insert = target_points - edge_count
    if to_insert <= 0:
        return close_ring(vertices)

    base, extra = divmod(to_insert, edge_count)
    lengths = [
        distance_km(vertices[index], vertices[(index + 1) % edge_count])
        for index in range(edge_count)
    ]
    per_edge = [base] * edge_count
    for index in sorted(range(edge_count), key=lambda i: (-lengths[i], i))[:extra]:
        per_edge[index] += 1

    result: list[Coordinate] = []
    for index, (x1, y1) in enumerate(vertices):
        x2, y2 = vertices[(index + 1) % edge_count]
        result.append((x1, y1))
        inserts = per_edge[index]
        for step in range(1, inserts + 1):
            t = step / (inserts + 1)
            result.append((x1 + (x2 - x1) * t, y1 + (y2 - y1) * t))
    return close_ring(result)


def _triangle_area(a: Coordinate, b: Coordinate, c: Coordinate) -> float:
    return abs((b[0] - a[0]) * (c[1] - a[1]) - (c[0] - a[0]) * (b[1] - a[1])) / 2.0


def eliminate_vertices(ring: Sequence[Coordinate], max_points: int) -> Ring:
    """Drop the vertex with the smallest effective area until max_points remain."""

    vertices = open_ring(close_ring(ring))
    while len(vertices) > max_points:
        count = len(vertices)
        areas = [
            _triangle_area(vertices[index - 1], vertices[index], vertices[(index + 1) % count])
            for index in range(count)
        ]
        del vertices[min(range(count), key=lambda i: (areas[i], i))]
    return close_ring(vertices)


def _simplify_into_band(
    ring: Ring,
    max_points: int,
    *,
    initial_tolerance: float,
    escalation: float,
    max_tolerance: float,
) -> Ring:
    best = ring
    best_count = vertex_count(ring)
    tolerance = initial_tolerance
    while best_count > max_points and tolerance < max_tolerance:
        try:
            candidate = simplify_ring(ring, tolerance)
        except (ShapelyError, ValueError) as exc:
            logging.warning(f"Polygon simplification failed at tolerance {tolerance:g}: {exc}")
            break
        if not is_degenerate(candidate):
            best, best_count = candidate, vertex_count(candidate)
        tolerance *= escalation

    if best_count > max_points:
        logging.warning(
            f"Simplification stopped at {best_count} vertices (tolerance ceiling {max_tolerance:g}); "
            f"eliminating least significant vertices down to {max_points}"
        )
        best = eliminate_vertices(best, max_points)
    return best


def normalize(
    polygon: Sequence[Coordinate],
    min_points: int | None = None,
    max_points: int | None = None,
    *,
    initial_tolerance: float | None = None,
    escalation: float | None = None,
    max_tolerance: float | None = None,
) -> Ring:
    """Return a closed ring whose vertex count lies within [min_points, max_points].

    Rings already inside the band come back unchanged, which makes the
    operation idempotent. Degenerate rings are returned closed but otherwise
    untouched.
    """

    min_points = settings.min_polygon_points if min_points is None else min_points
    max_points = settings.max_polygon_points if max_points is None else max_points
    initial_tolerance = settings.simplify_initial_tolerance if initial_tolerance is None else initial_tolerance
    escalation = settings.simplify_escalation if escalation is None else escalation
    max_tolerance = settings.simplify_max_tolerance if max_tolerance is None else max_tolerance

    validate_band(min_points, max_points)
    if initial_tolerance <= 0 or max_tolerance <= 0:
        raise ConfigurationError("Simplification tolerances must be positive.")
    if escalation <= 1:
        raise ConfigurationError(f"Tolerance escalation factor must exceed 1, got {escalation}")

    ring = close_ring(polygon)
    if is_degenerate(ring):
        return ring

    count = vertex_count(ring)
    if min_points <= count <= max_points:
        return ring

    if count > max_points:
        ring = _simplify_into_band(
            ring,
            max_points,
            initial_tolerance=initial_tolerance,
            escalation=escalation,
            max_tolerance=max_tolerance,
        )
    if vertex_count(ring) < min_points:
        ring = interpolate_ring(ring, min_points)
    return ring
