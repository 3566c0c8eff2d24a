"""
Agency unavailable schedule endpoints for API v1.

A schedule marks one date on which an agency does not operate.  Only
one active schedule may exist per agency and date (HTTP 409 otherwise).
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.agency_schedule import (
    AgencyScheduleCreate,
    AgencyScheduleUpdate,
    AgencyUnavailableSchedule,
)
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.agency_schedule_service import AgencyScheduleService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_schedule_service(store: MemoryDataStore = Depends(get_store)) -> AgencyScheduleService:
    return AgencyScheduleService(store)


@router.get("", response_model=PageResponse[AgencyUnavailableSchedule])
async def list_schedules(
    agency_id: Optional[str] = Query(None),
    date: Optional[str] = Query(None, description="Exact date (YYYY-MM-DD)"),
    date_from: Optional[str] = Query(None, description="Earliest date, inclusive"),
    date_to: Optional[str] = Query(None, description="Latest date, inclusive"),
    is_active: Optional[bool] = Query(None),
    search: Optional[str] = Query(None, description="Search in reason"),
    paging: PageRequest = Depends(PageParams(50)),
    service: AgencyScheduleService = Depends(get_schedule_service),
) -> PageResponse[AgencyUnavailableSchedule]:
    schedules = service.list_schedules(
        agency_id=agency_id,
        date=date,
        date_from=date_from,
        date_to=date_to,
        is_active=is_active,
        search=search,
    )
    page = paging.apply(schedules)
    return PageResponse[AgencyUnavailableSchedule](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[AgencyUnavailableSchedule], status_code=status.HTTP_201_CREATED)
async def create_schedule(
    schedule_in: AgencyScheduleCreate,
    service: AgencyScheduleService = Depends(get_schedule_service),
) -> DataResponse[AgencyUnavailableSchedule]:
    """Mark an agency unavailable on a date.

    Returns HTTP 404 when the agency does not exist.
    """
    try:
        return DataResponse[AgencyUnavailableSchedule](data=service.create_schedule(schedule_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{schedule_id}", response_model=DataResponse[AgencyUnavailableSchedule])
async def get_schedule(
    schedule_id: str,
    service: AgencyScheduleService = Depends(get_schedule_service),
) -> DataResponse[AgencyUnavailableSchedule]:
    try:
        return DataResponse[AgencyUnavailableSchedule](data=service.get_schedule(schedule_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{schedule_id}", response_model=DataResponse[AgencyUnavailableSchedule])
async def update_schedule(
    schedule_id: str,
    schedule_in: AgencyScheduleUpdate,
    service: AgencyScheduleService = Depends(get_schedule_service),
) -> DataResponse[AgencyUnavailableSchedule]:
    try:
        return DataResponse[AgencyUnavailableSchedule](data=service.update_schedule(schedule_id, schedule_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{schedule_id}", response_model=MessageResponse)
async def delete_schedule(
    schedule_id: str,
    service: AgencyScheduleService = Depends(get_schedule_service),
) -> MessageResponse:
    try:
        service.delete_schedule(schedule_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Agency unavailable schedule deleted successfully")
