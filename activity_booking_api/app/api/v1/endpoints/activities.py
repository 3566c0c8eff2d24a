"""
Activity endpoints for API v1.

These routes manage activities and their slots and expose the
availability reports built on top of the bookings:

* ``GET /activities/{id}/availability?date=&participants=`` – per‑slot
  capacity for one date.  ``participants`` narrows the returned slots
  to those that can still take that many people; the summary always
  covers every slot.
* ``GET /activities/{id}/utilization?start_date=&end_date=`` – share
  of booked slots and of used capacity over an inclusive date range.
* ``/activities/{id}/unavailable-dates`` – dates on which the activity
  does not operate (same verbs as for activity staff).
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.activity import (
    Activity,
    ActivityCreate,
    ActivityUnavailableDates,
    ActivityUpdate,
)
from activity_booking_api.app.schemas.activity_staff import UnavailableDateRequest, UnavailableDatesReplace
from activity_booking_api.app.schemas.availability import ActivityAvailability, UtilizationStats
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.activity_service import ActivityService
from activity_booking_api.app.services.availability_service import SlotAvailabilityService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_activity_service(store: MemoryDataStore = Depends(get_store)) -> ActivityService:
    return ActivityService(store)


def get_availability_service(
    request: Request, store: MemoryDataStore = Depends(get_store)
) -> SlotAvailabilityService:
    return SlotAvailabilityService(store, max_range_days=request.app.state.settings.max_utilization_days)


def _dates_response(activity_id: str, dates: List[str]) -> DataResponse[ActivityUnavailableDates]:
    return DataResponse[ActivityUnavailableDates](
        data=ActivityUnavailableDates(activity_id=activity_id, unavailable_dates=dates)
    )


@router.get("", response_model=PageResponse[Activity])
async def list_activities(
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    search: Optional[str] = Query(None, description="Search in name and description"),
    category: Optional[str] = Query(None, description="Exact category match"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price in USD"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price in USD"),
    paging: PageRequest = Depends(PageParams(10)),
    service: ActivityService = Depends(get_activity_service),
) -> PageResponse[Activity]:
    """Return a paginated list of activities.

    All supplied filters must match; price bounds are inclusive.
    """
    activities = service.list_activities(
        is_active=is_active,
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
    )
    page = paging.apply(activities)
    return PageResponse[Activity](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[Activity], status_code=status.HTTP_201_CREATED)
async def create_activity(
    activity_in: ActivityCreate,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[Activity]:
    """Create an activity.

    Slots submitted without an ``id`` are given one; duplicate slot ids
    are rejected with HTTP 400.
    """
    try:
        return DataResponse[Activity](data=service.create_activity(activity_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{activity_id}", response_model=DataResponse[Activity])
async def get_activity(
    activity_id: str,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[Activity]:
    try:
        return DataResponse[Activity](data=service.get_activity(activity_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{activity_id}", response_model=DataResponse[Activity])
async def update_activity(
    activity_id: str,
    activity_in: ActivityUpdate,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[Activity]:
    """Partially update an activity.

    A ``slots`` list in the body replaces the stored slots entirely.
    """
    try:
        return DataResponse[Activity](data=service.update_activity(activity_id, activity_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    activity_id: str,
    service: ActivityService = Depends(get_activity_service),
) -> MessageResponse:
    try:
        service.delete_activity(activity_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Activity deleted successfully")


@router.get("/{activity_id}/availability", response_model=DataResponse[ActivityAvailability])
async def get_activity_availability(
    activity_id: str,
    date: Optional[str] = Query(None, description="Date to check (YYYY-MM-DD)"),
    participants: Optional[int] = Query(None, description="Only slots with at least this much room"),
    service: SlotAvailabilityService = Depends(get_availability_service),
) -> DataResponse[ActivityAvailability]:
    """Return slot availability for an activity on a given date.

    Returns HTTP 400 for a missing or malformed date, an invalid
    participant count or an inactive activity, and HTTP 404 when the
    activity does not exist.
    """
    try:
        return DataResponse[ActivityAvailability](
            data=service.get_availability(activity_id, date, participants)
        )
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{activity_id}/utilization", response_model=DataResponse[UtilizationStats])
async def get_activity_utilization(
    activity_id: str,
    start_date: str = Query(..., description="First date of the range (YYYY-MM-DD)"),
    end_date: str = Query(..., description="Last date of the range (YYYY-MM-DD)"),
    service: SlotAvailabilityService = Depends(get_availability_service),
) -> DataResponse[UtilizationStats]:
    try:
        return DataResponse[UtilizationStats](
            data=service.get_utilization_stats(activity_id, start_date, end_date)
        )
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{activity_id}/unavailable-dates", response_model=DataResponse[ActivityUnavailableDates])
async def get_unavailable_dates(
    activity_id: str,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[ActivityUnavailableDates]:
    try:
        return _dates_response(activity_id, service.unavailable_dates.get(activity_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.post(
    "/{activity_id}/unavailable-dates",
    response_model=DataResponse[ActivityUnavailableDates],
    status_code=status.HTTP_201_CREATED,
)
async def add_unavailable_date(
    activity_id: str,
    body: UnavailableDateRequest,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[ActivityUnavailableDates]:
    try:
        return _dates_response(activity_id, service.unavailable_dates.add(activity_id, body.date))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{activity_id}/unavailable-dates", response_model=DataResponse[ActivityUnavailableDates])
async def remove_unavailable_date(
    activity_id: str,
    date: Optional[str] = Query(None, description="Date to remove (YYYY-MM-DD)"),
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[ActivityUnavailableDates]:
    try:
        return _dates_response(activity_id, service.unavailable_dates.remove(activity_id, date))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{activity_id}/unavailable-dates", response_model=DataResponse[ActivityUnavailableDates])
async def replace_unavailable_dates(
    activity_id: str,
    body: UnavailableDatesReplace,
    service: ActivityService = Depends(get_activity_service),
) -> DataResponse[ActivityUnavailableDates]:
    try:
        return _dates_response(activity_id, service.unavailable_dates.replace(activity_id, body.dates))
    except ServiceError as e:
        raise http_error(e) from e
