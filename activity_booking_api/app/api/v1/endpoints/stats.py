"""Store statistics endpoint for API v1."""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.common import DataResponse
from activity_booking_api.app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("", response_model=DataResponse[Dict[str, Any]])
async def get_stats(store: MemoryDataStore = Depends(get_store)) -> DataResponse[Dict[str, Any]]:
    """Return record counts per resource and bookings per status."""
    return DataResponse[Dict[str, Any]](data=StatisticsService(store).overview())
