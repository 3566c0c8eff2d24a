"""
Booking endpoints for API v1.

These routes handle creating, listing, updating and cancelling
bookings.  They rely on ``BookingService`` for the business rules
(reference checks, unavailable dates, participant limits and slot
capacity).  Whether an over‑capacity booking is rejected with HTTP 409
or only logged depends on the ``enforce_slot_capacity`` setting of the
running application.

``POST /bookings/validate`` runs the same checks as creation, with
capacity always enforced, without storing anything.  Cancelling is the
normal way to release a booking; ``DELETE`` removes the record
entirely.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.booking import (
    Booking,
    BookingCreate,
    BookingStatus,
    BookingUpdate,
    BookingValidation,
)
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.booking_service import BookingService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_booking_service(request: Request, store: MemoryDataStore = Depends(get_store)) -> BookingService:
    return BookingService(store, enforce_capacity=request.app.state.settings.enforce_slot_capacity)


@router.get("", response_model=PageResponse[Booking])
async def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status", description="Booking status"),
    activity_id: Optional[str] = Query(None),
    slot_id: Optional[str] = Query(None),
    agent_id: Optional[str] = Query(None),
    activity_staff_id: Optional[str] = Query(None),
    date: Optional[str] = Query(None, description="Exact date (YYYY-MM-DD)"),
    date_from: Optional[str] = Query(None, description="Earliest date, inclusive"),
    date_to: Optional[str] = Query(None, description="Latest date, inclusive"),
    search: Optional[str] = Query(None, description="Search in customer name, email and notes"),
    paging: PageRequest = Depends(PageParams(50)),
    service: BookingService = Depends(get_booking_service),
) -> PageResponse[Booking]:
    """Return a paginated list of bookings matching every supplied filter."""
    bookings = service.list_bookings(
        status=status_filter,
        activity_id=activity_id,
        slot_id=slot_id,
        agent_id=agent_id,
        activity_staff_id=activity_staff_id,
        date=date,
        date_from=date_from,
        date_to=date_to,
        search=search,
    )
    page = paging.apply(bookings)
    return PageResponse[Booking](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[Booking], status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_in: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> DataResponse[Booking]:
    """Create a booking.

    Returns HTTP 404 when the activity, slot, agent or staff member does
    not exist and HTTP 400 when the activity is inactive, the date is
    blocked or the participant count is outside the activity's limits.
    """
    try:
        return DataResponse[Booking](data=service.create_booking(booking_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.post("/validate", response_model=DataResponse[BookingValidation])
async def validate_booking(
    booking_in: BookingCreate,
    service: BookingService = Depends(get_booking_service),
) -> DataResponse[BookingValidation]:
    """Check whether a booking could be created right now.

    A full slot yields HTTP 409 with the slots that could still take the
    party listed in ``details``.
    """
    try:
        return DataResponse[BookingValidation](data=service.validate_booking(booking_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{booking_id}", response_model=DataResponse[Booking])
async def get_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> DataResponse[Booking]:
    try:
        return DataResponse[Booking](data=service.get_booking(booking_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{booking_id}", response_model=DataResponse[Booking])
async def update_booking(
    booking_id: str,
    booking_in: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
) -> DataResponse[Booking]:
    """Partially update a booking.

    Moving the booking to another activity, slot, date or party size
    repeats the creation checks.
    """
    try:
        return DataResponse[Booking](data=service.update_booking(booking_id, booking_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.post("/{booking_id}/cancel", response_model=DataResponse[Booking])
async def cancel_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> DataResponse[Booking]:
    """Mark a booking as cancelled, releasing its seats."""
    try:
        return DataResponse[Booking](data=service.cancel_booking(booking_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{booking_id}", response_model=MessageResponse)
async def delete_booking(
    booking_id: str,
    service: BookingService = Depends(get_booking_service),
) -> MessageResponse:
    try:
        service.delete_booking(booking_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Booking deleted successfully")
