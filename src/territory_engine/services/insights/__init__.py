"""Insight ranking services."""

from .service import generate_insights, summarize_sites

__all__ = ["generate_insights", "summarize_sites"]
