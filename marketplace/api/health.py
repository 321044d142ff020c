"""Health check endpoint."""
import logging
from fastapi import APIRouter, Request

from marketplace.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check(request: Request):
    """Report liveness and the service name."""
    logger.debug(
        f"[HEALTH] Requested by {request.client.host if request.client else 'unknown'}"
    )
    return {"status": "healthy", "service": settings.app_name}
