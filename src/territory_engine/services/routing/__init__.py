"""Route heuristics and timing."""

from .tour import greedy_tour, path_distance_km, tour_duration
from .trips import compare_trip

__all__ = ["greedy_tour", "path_distance_km", "tour_duration", "compare_trip"]
