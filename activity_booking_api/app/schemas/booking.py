"""
Pydantic models for bookings.

A booking reserves ``participant_count`` places in one slot of an
activity on one date.  Cancelling a booking is a status transition
(``cancelled``); the record is kept so capacity accounting stays
auditable.
"""

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from .availability import SlotAvailability
from .common import DateStr, EmailStr, reject_null


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


# Statuses whose participants no longer occupy a slot.
CAPACITY_RELEASING_STATUSES = frozenset({BookingStatus.CANCELLED})


class BookingBase(BaseModel):
    activity_id: str = Field(..., min_length=1)
    slot_id: str = Field(..., min_length=1)
    date: DateStr
    participant_count: int = Field(
        ...,
        ge=1,
        le=1000,
        validation_alias=AliasChoices("participant_count", "participants"),
        examples=[2],
    )
    agent_id: Optional[str] = Field(None, min_length=1)
    activity_staff_id: Optional[str] = Field(None, min_length=1)
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, max_length=50)
    total_price_usd: Optional[float] = Field(None, ge=0, le=999999.99)
    notes: Optional[str] = Field(None, max_length=1000)


class BookingCreate(BookingBase):
    """Schema for creating a booking."""

    status: BookingStatus = BookingStatus.PENDING


class BookingUpdate(BaseModel):
    """Schema for updating a booking.

    All fields are optional; only provided fields will be updated.
    Moving a booking to another activity, slot or date re-runs the
    same checks as creation.
    """

    activity_id: Optional[str] = Field(None, min_length=1)
    slot_id: Optional[str] = Field(None, min_length=1)
    date: Optional[DateStr] = None
    participant_count: Optional[int] = Field(
        None,
        ge=1,
        le=1000,
        validation_alias=AliasChoices("participant_count", "participants"),
    )
    status: Optional[BookingStatus] = None
    agent_id: Optional[str] = Field(None, min_length=1)
    activity_staff_id: Optional[str] = Field(None, min_length=1)
    customer_name: Optional[str] = Field(None, min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(None, max_length=50)
    total_price_usd: Optional[float] = Field(None, ge=0, le=999999.99)
    notes: Optional[str] = Field(None, max_length=1000)

    _required = reject_null("activity_id", "slot_id", "date", "participant_count", "status")


class Booking(BookingBase):
    """Stored booking as returned by the API."""

    id: str
    status: BookingStatus = BookingStatus.PENDING
    created_at: str
    updated_at: str

    @property
    def consumes_capacity(self) -> bool:
        return self.status not in CAPACITY_RELEASING_STATUSES


class BookingValidation(BaseModel):
    """Outcome of a successful dry-run booking validation."""

    is_valid: bool = True
    message: str = "Booking can be created successfully"
    slot: Optional[SlotAvailability] = None
    capacity_after_booking: Optional[int] = None
    alternative_slots: List[SlotAvailability] = Field(default_factory=list)
