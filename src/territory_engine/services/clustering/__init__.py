"""Failure event clustering."""

from .grid import cluster_events, dominant_cause, events_within, worst_cluster

__all__ = ["cluster_events", "worst_cluster", "events_within", "dominant_cause"]
