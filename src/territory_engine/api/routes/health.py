"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/data", status_code=status.HTTP_200_OK)
def health_data() -> dict:
    """Report whether the roster and reachability files are present."""
    return {
        "sites_file": str(settings.sites_file),
        "sites_file_exists": settings.sites_file.exists(),
        "reachability_file": str(settings.reachability_file),
        "reachability_file_exists": settings.reachability_file.exists(),
    }
