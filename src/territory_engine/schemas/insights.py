"""Insight schemas."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel


class InsightModel(BaseModel):
    insight_id: str
    kind: Literal["warning", "success", "suggestion"]
    title: str
    description: str
    priority: Literal["high", "medium", "low"]
    site_id: Optional[int] = None


class InsightResponse(BaseModel):
    seed: int
    insights: list[InsightModel]
    metadata: dict
