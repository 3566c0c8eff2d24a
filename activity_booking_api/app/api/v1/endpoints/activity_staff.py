"""
Activity staff endpoints for API v1.

Besides CRUD, every staff member exposes an ``/unavailable-dates``
sub‑resource:

* ``GET``    – current list;
* ``POST``   – add one date (body ``{"date": "YYYY-MM-DD"}``);
* ``DELETE`` – remove one date (query ``?date=YYYY-MM-DD``);
* ``PUT``    – replace the list (body ``{"dates": [...]}``).

Dates are always returned sorted and without duplicates.  Bookings
assigned to a staff member are refused on that member's unavailable
dates.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.activity_staff import (
    ActivityStaff,
    ActivityStaffCreate,
    ActivityStaffUpdate,
    StaffUnavailableDates,
    UnavailableDateRequest,
    UnavailableDatesReplace,
)
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.activity_staff_service import ActivityStaffService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_staff_service(store: MemoryDataStore = Depends(get_store)) -> ActivityStaffService:
    return ActivityStaffService(store)


def _dates_response(staff_id: str, dates) -> DataResponse[StaffUnavailableDates]:
    return DataResponse[StaffUnavailableDates](
        data=StaffUnavailableDates(activity_staff_id=staff_id, unavailable_dates=dates)
    )


@router.get("", response_model=PageResponse[ActivityStaff])
async def list_activity_staff(
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    search: Optional[str] = Query(None, description="Search in name, email and bio"),
    agency_id: Optional[str] = Query(None, description="Only staff of this agency"),
    paging: PageRequest = Depends(PageParams(10)),
    service: ActivityStaffService = Depends(get_staff_service),
) -> PageResponse[ActivityStaff]:
    """Return a paginated list of activity staff."""
    staff = service.list_people(is_active=is_active, search=search, agency_id=agency_id)
    page = paging.apply(staff)
    return PageResponse[ActivityStaff](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[ActivityStaff], status_code=status.HTTP_201_CREATED)
async def create_activity_staff(
    staff_in: ActivityStaffCreate,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[ActivityStaff]:
    """Create a staff member; HTTP 409 if the email is already taken."""
    try:
        return DataResponse[ActivityStaff](data=service.create_activity_staff(staff_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{staff_id}", response_model=DataResponse[ActivityStaff])
async def get_activity_staff(
    staff_id: str,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[ActivityStaff]:
    try:
        return DataResponse[ActivityStaff](data=service.get_person(staff_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{staff_id}", response_model=DataResponse[ActivityStaff])
async def update_activity_staff(
    staff_id: str,
    staff_in: ActivityStaffUpdate,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[ActivityStaff]:
    try:
        return DataResponse[ActivityStaff](data=service.update_activity_staff(staff_id, staff_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{staff_id}", response_model=MessageResponse)
async def delete_activity_staff(
    staff_id: str,
    service: ActivityStaffService = Depends(get_staff_service),
) -> MessageResponse:
    try:
        service.delete_person(staff_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Activity staff deleted successfully")


@router.get("/{staff_id}/unavailable-dates", response_model=DataResponse[StaffUnavailableDates])
async def get_unavailable_dates(
    staff_id: str,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[StaffUnavailableDates]:
    try:
        return _dates_response(staff_id, service.get_unavailable_dates(staff_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.post(
    "/{staff_id}/unavailable-dates",
    response_model=DataResponse[StaffUnavailableDates],
    status_code=status.HTTP_201_CREATED,
)
async def add_unavailable_date(
    staff_id: str,
    body: UnavailableDateRequest,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[StaffUnavailableDates]:
    """Add one unavailable date; HTTP 409 if it is already listed."""
    try:
        return _dates_response(staff_id, service.unavailable_dates.add(staff_id, body.date))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{staff_id}/unavailable-dates", response_model=DataResponse[StaffUnavailableDates])
async def remove_unavailable_date(
    staff_id: str,
    date: Optional[str] = Query(None, description="Date to remove (YYYY-MM-DD)"),
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[StaffUnavailableDates]:
    try:
        return _dates_response(staff_id, service.unavailable_dates.remove(staff_id, date))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{staff_id}/unavailable-dates", response_model=DataResponse[StaffUnavailableDates])
async def replace_unavailable_dates(
    staff_id: str,
    body: UnavailableDatesReplace,
    service: ActivityStaffService = Depends(get_staff_service),
) -> DataResponse[StaffUnavailableDates]:
    try:
        return _dates_response(staff_id, service.unavailable_dates.replace(staff_id, body.dates))
    except ServiceError as e:
        raise http_error(e) from e
