import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from privalytics_app.dependencies import get_json_body, get_site_service, get_stats_service
from privalytics_app.schemas.site import SiteCreate, SiteResponse
from privalytics_app.schemas.stats import PageViews, SiteStats, TimeseriesPoint
from privalytics_app.services.site_service import SiteService
from privalytics_app.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sites", tags=["sites"])


def _server_error(message: str) -> HTTPException:
    # Details stay in the log, the caller only gets the generic message
    logger.exception(message)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message
    )


@router.get("", response_model=List[SiteResponse])
async def list_sites(site_service: SiteService = Depends(get_site_service)):
    """List all sites, newest first"""
    try:
        return await site_service.list_sites()
    except Exception:
        raise _server_error("Failed to fetch sites")


@router.post("", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_site(
    payload: Dict[str, Any] = Depends(get_json_body),
    site_service: SiteService = Depends(get_site_service)
):
    """Register a new site"""
    try:
        site_data = SiteCreate.model_validate(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and domain required"
        )
    
    try:
        return await site_service.create_site(site_data.name, site_data.domain)
    except Exception:
        raise _server_error("Failed to create site")


@router.get("/{site_id}/stats", response_model=SiteStats)
async def get_site_stats(
    site_id: str,
    stats_service: StatsService = Depends(get_stats_service)
):
    """Unique visitors and total views"""
    try:
        return await stats_service.get_stats(site_id)
    except Exception:
        raise _server_error("Failed to fetch stats")


@router.get("/{site_id}/timeseries", response_model=List[TimeseriesPoint])
async def get_site_timeseries(
    site_id: str,
    stats_service: StatsService = Depends(get_stats_service)
):
    """Daily views for the last 30 days with data, oldest first"""
    try:
        return await stats_service.get_timeseries(site_id)
    except Exception:
        raise _server_error("Failed to fetch timeseries")


@router.get("/{site_id}/pages", response_model=List[PageViews])
async def get_site_pages(
    site_id: str,
    stats_service: StatsService = Depends(get_stats_service)
):
    """Top 10 pages by views"""
    try:
        return await stats_service.get_top_pages(site_id)
    except Exception:
        raise _server_error("Failed to fetch pages")
