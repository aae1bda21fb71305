"""Health check endpoint."""
import logging
from fastapi import APIRouter, Depends, Request

from food_ordering.core.bootstrap import Storage
from food_ordering.core.dependencies import get_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(request: Request, storage: Storage = Depends(get_storage)):
    """Health check endpoint."""
    logger.debug(
        f"[HEALTH] Health check requested - Client: {request.client.host if request.client else 'unknown'}"
    )
    return {
        "status": "healthy",
        "backend": storage.backend,
        "storage_available": storage.available,
    }
