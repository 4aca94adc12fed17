# routers/health.py

from fastapi import APIRouter, Depends

from core.config import settings
from dependencies.auth import get_storage
from storage.base import Storage

router = APIRouter(
    prefix="/api/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /api/health
# Simple API health check for uptime monitors
# -----------------------------------------------------
@router.get("", summary="App health check")
def health_app(storage: Storage = Depends(get_storage)):
    """
    Lightweight health check. Reports which storage adapter is serving.
    No auth required.
    """
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
        "storage": type(storage).__name__,
    }
