"""Greedy nearest-neighbor tours and the linear timing model."""

from __future__ import annotations

from typing import Sequence

from ...config import settings
from ...errors import ConfigurationError
from ...models.domain import Coordinate
from ..geospatial import distance_km


def greedy_tour(start: Coordinate, stops: Sequence[Coordinate]) -> list[Coordinate]:
    """Visit every stop once, always moving to the nearest unvisited one.

    The start point is the first element of the returned path. Ties go to the
    stop listed first. The result is a heuristic, not an optimal tour.
    """

    path = [tuple(start)]
    remaining = [tuple(stop) for stop in stops]
    if len(remaining) <= 1:
        return path + remaining

    current = path[0]
    while remaining:
        nearest = min(range(len(remaining)), key=lambda i: distance_km(current, remaining[i]))
        current = remaining.pop(nearest)
        path.append(current)
    return path


def path_distance_km(path: Sequence[Coordinate]) -> float:
    return sum(distance_km(path[index - 1], path[index]) for index in range(1, len(path)))


def tour_duration(
    path: Sequence[Coordinate],
    *,
    speed_kmh: float | None = None,
    stop_minutes: float | None = None,
) -> float:
    """Travel minutes at a constant speed plus a fixed handling time per path point."""

    speed_kmh = settings.average_speed_kmh if speed_kmh is None else speed_kmh
    stop_minutes = settings.stop_handling_minutes if stop_minutes is None else stop_minutes
    if speed_kmh <= 0:
        raise ConfigurationError(f"speed_kmh must be positive, got {speed_kmh}")
    return path_distance_km(path) / speed_kmh * 60.0 + len(path) * stop_minutes
