"""Constrain partition cells with reachability polygons."""

from __future__ import annotations

import logging
from typing import Sequence

from shapely.errors import ShapelyError

from ...models.domain import Coordinate, Ring
from ..geometry import intersect_largest
from ..geospatial import close_ring, is_degenerate


def intersect(cell: Sequence[Coordinate], reach: Sequence[Coordinate] | None) -> Ring:
    """Intersect a cell with a reachability polygon, keeping one connected piece.

    The closed cell is returned unchanged when the reachability polygon is
    missing or degenerate, when the two shapes do not overlap, or when the
    geometry backend fails. A site therefore always keeps a non-empty shape.
    """

    cell_ring = close_ring(cell)
    reach_ring = close_ring(reach or ())
    if is_degenerate(cell_ring):
        return cell_ring
    if is_degenerate(reach_ring):
        logging.info("Reachability polygon missing or degenerate; keeping partition cell")
        return cell_ring

    try:
        piece = intersect_largest(cell_ring, reach_ring)
    except (ShapelyError, ValueError) as exc:
        logging.warning(f"Polygon intersection failed, keeping partition cell: {exc}")
        return cell_ring

    if piece is None:
        logging.info("Reachability polygon does not overlap partition cell; keeping partition cell")
        return cell_ring
    return piece
