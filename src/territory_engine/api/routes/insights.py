"""Insight endpoints backed by synthetic operational data."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from fastapi import APIRouter, HTTPException, Query, status

from ...config import settings
from ...data.sites_repository import load_sites
from ...schemas.insights import InsightModel, InsightResponse
from ...services.insights import generate_insights
from ...services.simulation import generate_delivery_trips, generate_failure_events

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=InsightResponse, status_code=status.HTTP_200_OK)
def get_insights(
    seed: Optional[int] = Query(default=None, ge=0, description="Seed for the synthetic events and trips"),
    limit: Optional[int] = Query(default=None, ge=1),
) -> InsightResponse:
    seed = settings.simulation_seed if seed is None else seed
    try:
        sites = list(load_sites())
        rng = np.random.default_rng(seed)
        events = generate_failure_events(sites, rng)
        trips = [trip for site in sites for trip in generate_delivery_trips(site, rng)]
        insights = generate_insights(sites, events, trips, limit=limit)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating insights: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate insights: {exc}",
        ) from exc

    return InsightResponse(
        seed=seed,
        insights=[
            InsightModel(
                insight_id=insight.insight_id,
                kind=insight.kind,
                title=insight.title,
                description=insight.description,
                priority=insight.priority,
                site_id=insight.site_id,
            )
            for insight in insights
        ],
        metadata={"event_count": len(events), "trip_count": len(trips)},
    )
