"""Synthetic failure events and delivery trips.

Every generator takes an explicit ``numpy.random.Generator`` so callers control
reproducibility; there is no module-level seed state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...config import settings
from ...models.domain import Coordinate, DeliveryTrip, FailureEvent, Site
from ..geospatial import offset_km
from ..routing.trips import compare_trip

SPORADIC_CAUSES = ("Long delivery distance", "Customer not home", "Hard-to-find parking garage")


@dataclass(slots=True, frozen=True)
class ProblemArea:
    """A small area where deliveries repeatedly run late for one reason."""

    name: str
    longitude: float
    latitude: float
    cause: str
    cause_category: str
    count: int


def default_problem_areas(sites: Sequence[Site]) -> list[ProblemArea]:
    """Two problem areas: a gated compound near the first site, an office tower near the fourth."""

    areas: list[ProblemArea] = []
    if sites:
        first = sites[0]
        areas.append(
            ProblemArea(
                name="Gated residential compound",
                longitude=first.longitude + 0.012,
                latitude=first.latitude + 0.015,
                cause="Compound access control",
                cause_category="access",
                count=8,
            )
        )
    if len(sites) >= 4:
        fourth = sites[3]
        areas.append(
            ProblemArea(
                name="Office tower",
                longitude=fourth.longitude - 0.010,
                latitude=fourth.latitude - 0.008,
                cause="Long elevator waits",
                cause_category="waiting",
                count=5,
            )
        )
    return areas


def _polar_offset(origin: Coordinate, distance: float, angle: float) -> Coordinate:
    return offset_km(origin, distance * math.sin(angle), distance * math.cos(angle))


def generate_failure_events(
    sites: Sequence[Site],
    rng: np.random.Generator,
    problem_areas: Sequence[ProblemArea] | None = None,
    *,
    sporadic_probability: float = 0.3,
) -> list[FailureEvent]:
    """Timed-out deliveries concentrated in problem areas plus a few scattered ones."""

    timeout = settings.delivery_timeout_minutes
    areas = default_problem_areas(sites) if problem_areas is None else problem_areas
    events: list[FailureEvent] = []

    for area_index, area in enumerate(areas):
        for number in range(1, area.count + 1):
            lon, lat = _polar_offset(
                (area.longitude, area.latitude),
                0.1 + rng.random() * 0.2,
                rng.random() * 2 * math.pi,
            )
            duration = float(35 + rng.integers(0, 12))
            events.append(
                FailureEvent(
                    event_id=f"TO{area_index}{number:03d}",
                    longitude=lon,
                    latitude=lat,
                    duration_minutes=duration,
                    overdue_minutes=duration - timeout,
                    cause=area.cause,
                    cause_category=area.cause_category,
                )
            )

    for site_index, site in enumerate(sites):
        if rng.random() >= sporadic_probability:
            continue
        lon, lat = _polar_offset(site.position, 1.5 + rng.random() * 1.5, rng.random() * 2 * math.pi)
        duration = float(32 + rng.integers(0, 8))
        events.append(
            FailureEvent(
                event_id=f"TOS{site_index}001",
                longitude=lon,
                latitude=lat,
                duration_minutes=duration,
                overdue_minutes=duration - timeout,
                cause=SPORADIC_CAUSES[int(rng.integers(0, len(SPORADIC_CAUSES)))],
                cause_category="other",
            )
        )
    return events


def generate_trip_stops(site: Site, rng: np.random.Generator) -> list[Coordinate]:
    """Three or four drop-off points between 0.5 and 2.5 km from the site."""

    count = 3 + int(rng.integers(0, 2))
    return [
        _polar_offset(site.position, 0.5 + rng.random() * 2, rng.random() * 2 * math.pi)
        for _ in range(count)
    ]


def generate_delivery_trips(site: Site, rng: np.random.Generator, count: int | None = None) -> list[DeliveryTrip]:
    count = settings.trips_per_site if count is None else count
    return [
        compare_trip(
            site.position,
            generate_trip_stops(site, rng),
            trip_id=f"T{site.site_id:02d}{number:02d}",
            site_id=site.site_id,
        )
        for number in range(1, count + 1)
    ]
