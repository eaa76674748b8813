"""Site roster endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...data.sites_repository import load_sites
from ...schemas.sites import SiteModel, SiteSummaryResponse
from ...services.insights import summarize_sites

router = APIRouter(prefix="/sites", tags=["sites"])


def _load_roster():
    try:
        return load_sites()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        logging.exception(f"Invalid site roster: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Invalid site roster: {exc}",
        ) from exc


@router.get("", response_model=List[SiteModel], status_code=status.HTTP_200_OK)
def list_sites() -> List[SiteModel]:
    return [SiteModel.from_domain(site) for site in _load_roster()]


@router.get("/summary", response_model=SiteSummaryResponse, status_code=status.HTTP_200_OK)
def get_site_summary() -> SiteSummaryResponse:
    return SiteSummaryResponse(**summarize_sites(_load_roster()))
