"""
Business logic for bookings.

A booking references an activity, one of its slots and a date.  The
checks applied on creation (and again when a booking is moved) are:

1. the activity, the slot and any referenced agent or staff member
   exist (404 otherwise);
2. the activity is active and the date is not blocked by the activity,
   the staff member or the handling agency (400 otherwise);
3. the participant count respects the activity's min/max participants;
4. the slot has room for the participants.

The capacity check only rejects (409) when ``enforce_slot_capacity``
is enabled.  Otherwise an overbooking is accepted, logged as a warning
and shows up as a fully booked slot in availability reports.
Cancelling a booking is a status change; the record is kept.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.config import settings
from ..core.errors import ConflictError, NotFoundError, PreconditionError
from ..core.store import MemoryDataStore
from ..schemas.activity import Activity
from ..schemas.booking import (
    Booking,
    BookingCreate,
    BookingStatus,
    BookingUpdate,
    BookingValidation,
    CAPACITY_RELEASING_STATUSES,
)
from .agency_schedule_service import AgencyScheduleService
from .availability_service import SlotAvailabilityService
from .pagination import build_filters, equals_filter, range_filter, search_filter

logger = logging.getLogger(__name__)

# Fields whose change requires the booking to be checked again.
PLACEMENT_FIELDS = frozenset(
    {"activity_id", "slot_id", "date", "participant_count", "agent_id", "activity_staff_id"}
)


class BookingService:
    """Service for managing bookings."""

    def __init__(self, store: MemoryDataStore, enforce_capacity: Optional[bool] = None) -> None:
        self.store = store
        self.enforce_capacity = settings.enforce_slot_capacity if enforce_capacity is None else enforce_capacity
        self.availability = SlotAvailabilityService(store)
        self.schedules = AgencyScheduleService(store)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def list_bookings(
        self,
        status: Optional[BookingStatus] = None,
        activity_id: Optional[str] = None,
        slot_id: Optional[str] = None,
        agent_id: Optional[str] = None,
        activity_staff_id: Optional[str] = None,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Booking]:
        """Bookings matching all supplied filters, in creation order.

        ``search`` looks at the customer name and email and the notes.
        ``date_from``/``date_to`` are inclusive.
        """
        filters = build_filters(
            equals_filter("status", status),
            equals_filter("activity_id", activity_id),
            equals_filter("slot_id", slot_id),
            equals_filter("agent_id", agent_id),
            equals_filter("activity_staff_id", activity_staff_id),
            equals_filter("date", date),
            range_filter("date", date_from or None, date_to or None),
            search_filter(search, "customer_name", "customer_email", "notes"),
        )
        return self.store.bookings.list(*filters)

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.store.bookings.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def _check_placement(self, values: Dict[str, Any]) -> Activity:
        """Reference, status, date and participant checks; returns the activity."""
        activity = self.store.activities.get(values["activity_id"])
        if activity is None:
            raise NotFoundError("Activity not found")
        if activity.get_slot(values["slot_id"]) is None:
            raise NotFoundError("Slot not found for this activity")

        agency_ids = []
        agent_id = values.get("agent_id")
        if agent_id:
            agent = self.store.agents.get(agent_id)
            if agent is None:
                raise NotFoundError("Agent not found")
            agency_ids.append(agent.agency_id)
        staff_id = values.get("activity_staff_id")
        staff = None
        if staff_id:
            staff = self.store.activity_staff.get(staff_id)
            if staff is None:
                raise NotFoundError("Activity staff not found")
            agency_ids.append(staff.agency_id)

        if not activity.is_active:
            raise PreconditionError("Activity is not active")

        date = values["date"]
        if date in activity.unavailable_dates:
            raise PreconditionError(f"Booking is not possible on {date}: the activity does not operate that day")
        if staff is not None and date in staff.unavailable_dates:
            raise PreconditionError(f"Booking is not possible on {date}: {staff.name} is unavailable")
        for agency_id in agency_ids:
            if agency_id and self.schedules.is_agency_date_unavailable(agency_id, date):
                raise PreconditionError(f"Booking is not possible on {date}: the agency is closed")

        participants = values["participant_count"]
        if activity.max_participants is not None and participants > activity.max_participants:
            raise PreconditionError(
                f"Participants ({participants}) exceed activity maximum ({activity.max_participants})"
            )
        if participants < activity.min_participants:
            raise PreconditionError(
                f"Participants ({participants}) below activity minimum ({activity.min_participants})"
            )
        return activity

    def _check_capacity(
        self,
        activity: Activity,
        values: Dict[str, Any],
        exclude_booking_id: Optional[str] = None,
        enforce: Optional[bool] = None,
    ) -> None:
        enforce = self.enforce_capacity if enforce is None else enforce
        check = self.availability.check_booking_capacity(
            activity,
            values["slot_id"],
            values["date"],
            values["participant_count"],
            exclude_booking_id=exclude_booking_id,
        )
        if check.is_valid:
            return
        if enforce:
            raise ConflictError(
                check.message,
                details=[slot.model_dump() for slot in check.suggested_slots],
            )
        logger.warning(
            "Overbooking activity %s slot %s on %s: %s",
            activity.id,
            values["slot_id"],
            values["date"],
            check.message,
        )

    def validate_booking(self, data: BookingCreate) -> BookingValidation:
        """Run every creation check, capacity included, without storing anything."""
        values = data.model_dump()
        activity = self._check_placement(values)
        self._check_capacity(activity, values, enforce=True)
        slots = self.availability.get_slot_availability_for_date(activity.id, data.date)
        slot = next((s for s in slots if s.slot_id == data.slot_id), None)
        alternatives = [
            s
            for s in slots
            if s.slot_id != data.slot_id and s.is_available and s.remaining_capacity >= data.participant_count
        ]
        return BookingValidation(
            slot=slot,
            capacity_after_booking=slot.remaining_capacity - data.participant_count if slot else None,
            alternative_slots=alternatives[:3],
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_booking(self, data: BookingCreate) -> Booking:
        values = data.model_dump()
        with self.store.write_lock:
            activity = self._check_placement(values)
            if data.status not in CAPACITY_RELEASING_STATUSES:
                self._check_capacity(activity, values)
            booking = self.store.bookings.create(values)
        logger.info(
            "Created booking %s: activity %s slot %s on %s for %d participant(s)",
            booking.id,
            booking.activity_id,
            booking.slot_id,
            booking.date,
            booking.participant_count,
        )
        return booking

    def update_booking(self, booking_id: str, updates: BookingUpdate) -> Booking:
        """Partially update a booking.

        Moving the booking (activity, slot, date, participants, agent or
        staff) re-runs the creation checks, and so does re-activating a
        cancelled booking, since it starts consuming capacity again.
        """
        changes = updates.model_dump(exclude_unset=True)
        with self.store.write_lock:
            existing = self.get_booking(booking_id)
            merged = {**existing.model_dump(), **changes}
            status = BookingStatus(merged["status"])
            moved = any(
                changes[field] != getattr(existing, field) for field in changes if field in PLACEMENT_FIELDS
            )
            reactivated = (
                existing.status in CAPACITY_RELEASING_STATUSES and status not in CAPACITY_RELEASING_STATUSES
            )
            if moved or reactivated:
                activity = self._check_placement(merged)
                if status not in CAPACITY_RELEASING_STATUSES:
                    self._check_capacity(activity, merged, exclude_booking_id=booking_id)
            booking = self.store.bookings.update(booking_id, changes)
        if booking is None:
            raise NotFoundError("Booking not found")
        if "status" in changes and existing.status != booking.status:
            logger.info("Booking %s status %s -> %s", booking_id, existing.status.value, booking.status.value)
        else:
            logger.info("Updated booking %s", booking_id)
        return booking

    def cancel_booking(self, booking_id: str) -> Booking:
        """Mark a booking cancelled; cancelling twice is a no-op."""
        booking = self.get_booking(booking_id)
        if booking.status == BookingStatus.CANCELLED:
            return booking
        return self.update_booking(booking_id, BookingUpdate(status=BookingStatus.CANCELLED))

    def delete_booking(self, booking_id: str) -> None:
        if not self.store.bookings.delete(booking_id):
            raise NotFoundError("Booking not found")
        logger.info("Deleted booking %s", booking_id)
