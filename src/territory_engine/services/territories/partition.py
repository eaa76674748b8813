"""Nearest-site partition of a bounding window."""

from __future__ import annotations

import logging
from typing import Sequence

from shapely.geometry import MultiPoint, Point, Polygon, box
from shapely.ops import voronoi_diagram

from ...errors import ConfigurationError
from ...models.domain import Coordinate, Ring, Window
from ..geometry import polygon_parts, to_ring


def window_polygon(window: Window) -> Polygon:
    min_lon, min_lat, max_lon, max_lat = window
    if not (min_lon < max_lon and min_lat < max_lat):
        raise ConfigurationError(f"Invalid bounding window {window!r}: min must be below max.")
    return box(min_lon, min_lat, max_lon, max_lat)


def _unique_positions(positions: Sequence[Coordinate]) -> dict[Coordinate, int]:
    """Map each distinct position to the first input index holding it."""

    owners: dict[Coordinate, int] = {}
    for index, position in enumerate(positions):
        key = (float(position[0]), float(position[1]))
        owners.setdefault(key, index)
    return owners


def _cell_for(point: Point, cells: Sequence[Polygon]) -> Polygon | None:
    for cell in cells:
        if cell.contains(point):
            return cell
    for cell in cells:
        if cell.covers(point):
            return cell
    return None


def build_partition(positions: Sequence[Coordinate], window: Window) -> list[Ring]:
    """Return one nearest-site cell per position, clipped to the window.

    The output list follows the input order. Every point of the window belongs
    to the cell of its closest site in (lon, lat) space. Sites outside the
    window still act as generators, so their clipped cell may be empty.
    Colocated positions yield the cell for the first occurrence and an empty
    ring for every later duplicate.
    """

    if not positions:
        raise ConfigurationError("At least one site is required to build a partition.")
    bounds = window_polygon(window)
    owners = _unique_positions(positions)
    cells: list[Ring] = [() for _ in positions]

    if len(positions) != len(owners):
        logging.warning(
            f"{len(positions) - len(owners)} colocated site position(s) received empty partition cells"
        )

    if len(owners) == 1:
        cells[next(iter(owners.values()))] = to_ring(bounds)
        return cells

    # The diagram must reach past both the window and every generator.
    all_points = MultiPoint(list(owners))
    min_x = min(bounds.bounds[0], all_points.bounds[0])
    min_y = min(bounds.bounds[1], all_points.bounds[1])
    max_x = max(bounds.bounds[2], all_points.bounds[2])
    max_y = max(bounds.bounds[3], all_points.bounds[3])
    margin = max(max_x - min_x, max_y - min_y)
    envelope = box(min_x - margin, min_y - margin, max_x + margin, max_y + margin)

    diagram = polygon_parts(voronoi_diagram(all_points, envelope=envelope))

    for position, index in owners.items():
        raw_cell = _cell_for(Point(position), diagram)
        if raw_cell is None:
            logging.warning(f"No Voronoi cell found for site position {position}")
            continue
        clipped = polygon_parts(raw_cell.intersection(bounds))
        if not clipped:
            continue
        cells[index] = to_ring(max(clipped, key=lambda part: part.area))
    return cells
