import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import ValidationError

from privalytics_app.dependencies import get_client_address, get_json_body, get_tracking_service
from privalytics_app.schemas.event import TrackRequest
from privalytics_app.services.tracking_service import TrackingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tracking"])


@router.post("/track", status_code=status.HTTP_204_NO_CONTENT)
async def track_pageview(
    payload: Dict[str, Any] = Depends(get_json_body),
    address: str = Depends(get_client_address),
    tracking_service: TrackingService = Depends(get_tracking_service)
):
    """
    Record a pageview beacon.
    
    The caller is a fire-and-forget beacon, so both success (204) and
    storage failure (500) answer with an empty body.
    """
    try:
        beacon = TrackRequest.model_validate(payload)
    except ValidationError as e:
        fields = {err["loc"][0] for err in e.errors() if err["loc"]}
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Site ID required" if "siteId" in fields else "Invalid tracking payload"
        )
    
    try:
        await tracking_service.track(beacon.site_id, beacon.path, address)
    except Exception:
        logger.exception("Tracking error")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    
    return Response(status_code=status.HTTP_204_NO_CONTENT)
