"""Route group exports."""

from . import clusters, health, insights, routes, sites, territories

__all__ = ["health", "sites", "territories", "clusters", "routes", "insights"]
