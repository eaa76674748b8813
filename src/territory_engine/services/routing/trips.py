"""Compare as-executed stop orders with their greedy reordering."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Coordinate, DeliveryTrip
from .tour import greedy_tour, tour_duration


def compare_trip(
    start: Coordinate,
    stops: Sequence[Coordinate],
    *,
    trip_id: str = "",
    site_id: int = 0,
    speed_kmh: float | None = None,
    stop_minutes: float | None = None,
) -> DeliveryTrip:
    """Build both orderings of a trip and time each from its own path.

    The saving may be negative for an individual trip: the greedy order is a
    heuristic and can lose to the original order on unlucky layouts.
    """

    start = tuple(start)
    stops = tuple(tuple(stop) for stop in stops)
    executed = (start, *stops)
    optimized = tuple(greedy_tour(start, stops))
    return DeliveryTrip(
        trip_id=trip_id,
        site_id=site_id,
        stops=stops,
        executed_path=executed,
        executed_minutes=tour_duration(executed, speed_kmh=speed_kmh, stop_minutes=stop_minutes),
        optimized_path=optimized,
        optimized_minutes=tour_duration(optimized, speed_kmh=speed_kmh, stop_minutes=stop_minutes),
    )
