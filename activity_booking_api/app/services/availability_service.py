"""
Slot availability and capacity calculations.

The calculation itself is a pure function of an activity and the
bookings that reference it: nothing is cached, so a booking that is
cancelled or moved is reflected on the very next query.

``SlotAvailabilityService`` wraps the pure functions with the lookups
and precondition checks the HTTP layer needs (date format, activity
existence and activity status) and adds the capacity check used when
validating bookings plus a utilisation report over a date range.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date as date_type, timedelta
from typing import Iterable, List, Optional

from ..core.config import settings
from ..core.errors import InvalidInputError, NotFoundError, PreconditionError
from ..core.store import MemoryDataStore
from ..schemas.activity import Activity
from ..schemas.availability import (
    ActivityAvailability,
    AvailabilitySummary,
    SlotAvailability,
    UtilizationStats,
)
from ..schemas.booking import Booking

logger = logging.getLogger(__name__)

DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
INVALID_DATE_MESSAGE = "Invalid date format. Use YYYY-MM-DD"


def is_valid_date(value: Optional[str]) -> bool:
    """Format-only check; calendar validity is not enforced."""
    return bool(value) and DATE_RE.fullmatch(value) is not None


def booked_participants(bookings: Iterable[Booking], activity_id: str, slot_id: str, date: str) -> int:
    """Sum of ``participant_count`` for capacity-consuming bookings of one slot and date."""
    return sum(
        booking.participant_count
        for booking in bookings
        if booking.activity_id == activity_id
        and booking.slot_id == slot_id
        and booking.date == date
        and booking.consumes_capacity
    )


def calculate_slot_availability(activity: Activity, bookings: Iterable[Booking], date: str) -> List[SlotAvailability]:
    """Compute per-slot capacity for ``activity`` on ``date``.

    Slots are returned in the activity's defined order.  A date the
    activity has blocked via ``unavailable_dates`` has no slots at all.
    ``remaining_capacity`` is clamped at zero so an overbooked slot is
    reported as full, never negative.
    """
    if date in activity.unavailable_dates:
        return []
    bookings = list(bookings)
    result: List[SlotAvailability] = []
    for slot in activity.slots:
        current = booked_participants(bookings, activity.id, slot.id, date)
        remaining = max(0, slot.max_capacity - current)
        result.append(
            SlotAvailability(
                slot_id=slot.id,
                start_time=slot.start_time,
                end_time=slot.end_time,
                max_capacity=slot.max_capacity,
                current_bookings=current,
                remaining_capacity=remaining,
                is_available=remaining > 0 and activity.is_active and slot.is_available,
            )
        )
    return result


def summarize(slots: List[SlotAvailability]) -> AvailabilitySummary:
    return AvailabilitySummary(
        total_slots=len(slots),
        available_slots=sum(1 for slot in slots if slot.is_available),
        fully_booked_slots=sum(1 for slot in slots if slot.remaining_capacity == 0),
        total_capacity=sum(slot.max_capacity for slot in slots),
        total_bookings=sum(slot.current_bookings for slot in slots),
    )


def filter_by_participants(slots: List[SlotAvailability], participants: int) -> List[SlotAvailability]:
    """Slots that can still take ``participants`` more people."""
    return [slot for slot in slots if slot.is_available and slot.remaining_capacity >= participants]


@dataclass
class CapacityCheck:
    is_valid: bool
    requested: int
    current: int
    maximum: int
    suggested_slots: List[SlotAvailability] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Slot capacity exceeded. Current: {self.current}, "
            f"Requested: {self.requested}, Maximum: {self.maximum}"
        )


class SlotAvailabilityService:
    """Availability queries backed by a data store."""

    def __init__(self, store: MemoryDataStore, max_range_days: Optional[int] = None) -> None:
        self.store = store
        self.max_range_days = settings.max_utilization_days if max_range_days is None else max_range_days

    def _bookings_for(self, activity_id: str, date: Optional[str] = None) -> List[Booking]:
        predicates = [lambda booking: booking.activity_id == activity_id]
        if date is not None:
            predicates.append(lambda booking: booking.date == date)
        return self.store.bookings.list(*predicates)

    def get_slot_availability_for_date(self, activity_id: str, date: str) -> List[SlotAvailability]:
        """Per-slot availability; an unknown activity has no slots."""
        activity = self.store.activities.get(activity_id)
        if activity is None:
            return []
        return calculate_slot_availability(activity, self._bookings_for(activity_id, date), date)

    def get_availability(
        self, activity_id: str, date: Optional[str], participants: Optional[int] = None
    ) -> ActivityAvailability:
        """Availability report for one activity and date.

        The summary always describes every slot of the date; only the
        returned ``slots`` list is narrowed by ``participants``.
        """
        if not date:
            raise InvalidInputError("Date parameter is required")
        if not is_valid_date(date):
            raise InvalidInputError(INVALID_DATE_MESSAGE)
        activity = self.store.activities.get(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found")
        if not activity.is_active:
            raise PreconditionError("Activity is not active")
        if participants is not None and participants < 1:
            raise InvalidInputError("Invalid participants number")

        slots = self.get_slot_availability_for_date(activity_id, date)
        visible = filter_by_participants(slots, participants) if participants is not None else slots
        return ActivityAvailability(
            activity_id=activity_id,
            date=date,
            slots=visible,
            summary=summarize(slots),
        )

    def check_booking_capacity(
        self,
        activity: Activity,
        slot_id: str,
        date: str,
        participants: int,
        exclude_booking_id: Optional[str] = None,
    ) -> CapacityCheck:
        """Would ``participants`` more people fit into the slot on ``date``?"""
        slot = activity.get_slot(slot_id)
        maximum = slot.max_capacity if slot is not None else 0
        bookings = [
            booking
            for booking in self._bookings_for(activity.id, date)
            if booking.id != exclude_booking_id
        ]
        current = booked_participants(bookings, activity.id, slot_id, date)
        is_valid = current + participants <= maximum
        suggestions: List[SlotAvailability] = []
        if not is_valid:
            slots = calculate_slot_availability(activity, bookings, date)
            suggestions = filter_by_participants(slots, participants)
        return CapacityCheck(
            is_valid=is_valid,
            requested=participants,
            current=current,
            maximum=maximum,
            suggested_slots=suggestions,
        )

    def get_utilization_stats(self, activity_id: str, start_date: str, end_date: str) -> UtilizationStats:
        """Share of slots with any booking, and of capacity used, over a date range (inclusive)."""
        for value in (start_date, end_date):
            if not is_valid_date(value):
                raise InvalidInputError(INVALID_DATE_MESSAGE)
        activity = self.store.activities.get(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found")
        try:
            first = date_type.fromisoformat(start_date)
            last = date_type.fromisoformat(end_date)
        except ValueError as e:
            raise InvalidInputError(f"Invalid date: {e}") from e
        if last < first:
            raise InvalidInputError("end_date must not be before start_date")
        days = (last - first).days + 1
        if days > self.max_range_days:
            raise InvalidInputError(f"Date range cannot exceed {self.max_range_days} days")

        bookings = self._bookings_for(activity_id)
        total_slots = booked_slots = capacity_used = max_capacity = 0
        # Offsets stay within [first, last], so date.max never overflows.
        for offset in range(days):
            day = first + timedelta(days=offset)
            for slot in calculate_slot_availability(activity, bookings, day.isoformat()):
                total_slots += 1
                max_capacity += slot.max_capacity
                capacity_used += slot.current_bookings
                if slot.current_bookings > 0:
                    booked_slots += 1

        utilization = (booked_slots / total_slots) * 100 if total_slots else 0.0
        average_used = (capacity_used / max_capacity) * 100 if max_capacity else 0.0
        return UtilizationStats(
            activity_id=activity_id,
            start_date=start_date,
            end_date=end_date,
            total_slots=total_slots,
            booked_slots=booked_slots,
            utilization_rate=round(utilization, 2),
            average_capacity_used=round(average_used, 2),
        )
