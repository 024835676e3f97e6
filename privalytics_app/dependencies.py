"""
FastAPI dependencies for dependency injection.

This module provides the single Database instance and the services built
on it. Tests swap the database through app.dependency_overrides[get_database].
"""

import json
from functools import lru_cache
from typing import Any, Dict

from fastapi import Depends, HTTPException, Request, status

from privalytics_app.config import settings
from privalytics_app.database.connection import Database
from privalytics_app.persistence.factory import PersistenceFactory, PersistenceBackend
from privalytics_app.services.fingerprint import UNKNOWN_ADDRESS


@lru_cache()
def get_database() -> Database:
    """
    Get database instance (singleton).
    
    Loads the saved snapshot on first call. @lru_cache ensures this runs once.
    """
    backend = PersistenceBackend(settings.persistence_backend)
    return Database(PersistenceFactory.create(backend))


def get_site_service(db: Database = Depends(get_database)):
    from privalytics_app.services.site_service import SiteService
    return SiteService(db=db)


def get_tracking_service(db: Database = Depends(get_database)):
    from privalytics_app.services.tracking_service import TrackingService
    return TrackingService(db=db)


def get_stats_service(db: Database = Depends(get_database)):
    from privalytics_app.services.stats_service import StatsService
    return StatsService(db=db)


def get_client_address(request: Request) -> str:
    """
    Visitor address: proxy-forwarded address if present, else the
    connection peer, else "unknown".
    """
    if settings.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    
    if request.client and request.client.host:
        return request.client.host
    
    return UNKNOWN_ADDRESS


async def get_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object, whatever the Content-Type.
    
    navigator.sendBeacon() with a string payload sends text/plain, so the
    header cannot be relied on. An empty body counts as {}.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    
    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON body"
        )
    
    if not isinstance(payload, dict):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid JSON body"
        )
    
    return payload
