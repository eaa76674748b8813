"""High-level orchestration for territory computation."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from ...config import settings
from ...models.domain import Coordinate, Ring, Site, Territory, Window
from ..geospatial import is_degenerate, planar_area_km2, round_ring
from .boolean import intersect
from .normalizer import validate_band, normalize
from .partition import build_partition

AREA_EPSILON_KM2 = 1e-9


def compute_territories(
    sites: Sequence[Site],
    window: Window | None = None,
    reachability: Mapping[int, Sequence[Coordinate]] | None = None,
    *,
    min_points: int | None = None,
    max_points: int | None = None,
    precision: int | None = None,
) -> list[Territory]:
    """Build one territory per site: partition cell, reachability cut, vertex band.

    Sites without a reachability polygon keep their unconstrained cell.
    Colocated sites beyond the first receive an empty polygon and zero area.
    """

    window = tuple(window or settings.default_window)
    reachability = reachability or {}
    min_points = settings.min_polygon_points if min_points is None else min_points
    max_points = settings.max_polygon_points if max_points is None else max_points
    precision = settings.coordinate_precision if precision is None else precision
    validate_band(min_points, max_points)

    cells = build_partition([site.position for site in sites], window)

    territories: list[Territory] = []
    for site, cell in zip(sites, cells):
        if is_degenerate(cell):
            logging.warning(f"Site {site.site_id} has an empty partition cell")
            territories.append(
                Territory(site_id=site.site_id, polygon=(), area_km2=0.0, daily_orders=site.daily_orders)
            )
            continue

        reach = reachability.get(site.site_id)
        constrained = intersect(cell, reach)
        # The intersection never grows the cell, so equal area means an equal region.
        was_cut = planar_area_km2(cell) - planar_area_km2(constrained) > AREA_EPSILON_KM2
        polygon = normalize(constrained, min_points, max_points)
        if is_degenerate(polygon):
            polygon = constrained

        serialized = round_ring(polygon, precision)
        territories.append(
            Territory(
                site_id=site.site_id,
                polygon=serialized,
                area_km2=round(planar_area_km2(serialized), 2),
                daily_orders=site.daily_orders,
                constrained=was_cut,
            )
        )

    logging.info(
        f"Computed {len(territories)} territories "
        f"({sum(1 for t in territories if t.constrained)} constrained by reachability)"
    )
    return territories


def partition_cells(sites: Sequence[Site], window: Window | None = None) -> dict[int, Ring]:
    """Raw partition cells keyed by site id, before any reachability constraint."""

    window = tuple(window or settings.default_window)
    cells = build_partition([site.position for site in sites], window)
    return {site.site_id: cell for site, cell in zip(sites, cells)}
