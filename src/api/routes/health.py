"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import check_storage, get_settings
from utils.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health(settings: Settings = Depends(get_settings)):
    """Health check endpoint with credential store status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    storage = settings.storage_backend
    if check_storage(settings):
        health_status["services"][storage] = {
            "status": "healthy",
            "message": "Connection successful"
        }
        return health_status

    health_status["status"] = "unhealthy"
    health_status["services"][storage] = {
        "status": "unhealthy",
        "message": "Connection failed or not configured"
    }
    logger.warning("Health check failed", extra={"storage": storage})
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=health_status)
