"""Health check endpoint with a storage availability check."""

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.store import JsonRecordStore, get_record_store
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(store: JsonRecordStore = Depends(get_record_store)) -> HealthResponse:
    """
    Return service health status and whether the data directory is writable.
    Used by load balancers and monitoring.
    """
    storage = "available" if store.is_available() else "unavailable"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        storage=storage,
    )
