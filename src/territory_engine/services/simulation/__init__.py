"""Synthetic operational data."""

from .events import (
    ProblemArea,
    default_problem_areas,
    generate_delivery_trips,
    generate_failure_events,
    generate_trip_stops,
)

__all__ = [
    "ProblemArea",
    "default_problem_areas",
    "generate_failure_events",
    "generate_trip_stops",
    "generate_delivery_trips",
]
