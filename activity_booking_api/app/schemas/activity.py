"""
Pydantic models for activities and their bookable time slots.

Each activity defines an ordered list of ``ActivitySlot`` entries.  A
slot has a start time, an optional end time (derived from
``duration_minutes`` when omitted) and a ``max_capacity`` that caps the
number of participants that can be booked into it on any single date.
Slot ids are assigned by the service when a client does not supply
them.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .common import DateStr, TimeStr, normalize_dates, reject_null

MINUTES_PER_DAY = 24 * 60


def _to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def _from_minutes(total: int) -> str:
    return f"{total // 60:02d}:{total % 60:02d}"


class ActivitySlot(BaseModel):
    id: Optional[str] = Field(None, min_length=1)
    start_time: TimeStr
    end_time: Optional[TimeStr] = None
    duration_minutes: Optional[int] = Field(None, gt=0, le=MINUTES_PER_DAY)
    max_capacity: int = Field(..., ge=0, le=1000)
    is_available: bool = True

    @model_validator(mode="after")
    def _derive_end_time(self) -> "ActivitySlot":
        start = _to_minutes(self.start_time)
        if self.duration_minutes is not None:
            end = start + self.duration_minutes
            if end > MINUTES_PER_DAY:
                raise ValueError("Start time plus duration cannot exceed 24 hours")
            if self.end_time is None:
                self.end_time = _from_minutes(end % MINUTES_PER_DAY)
        # An end time of 00:00 means the slot runs until midnight.
        if self.end_time is not None:
            end_minutes = _to_minutes(self.end_time) or MINUTES_PER_DAY
            if end_minutes <= start:
                raise ValueError("Slot end time must be after its start time")
        return self


class ActivityBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Reef Snorkelling"])
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = Field(None, max_length=500)
    price_usd: float = Field(0.0, ge=0, le=999999.99)
    duration_minutes: Optional[int] = Field(None, gt=0, le=MINUTES_PER_DAY)
    max_participants: Optional[int] = Field(None, gt=0, le=1000)
    min_participants: int = Field(1, gt=0)
    tags: List[str] = Field(default_factory=list)
    slots: List[ActivitySlot] = Field(default_factory=list)
    unavailable_dates: List[DateStr] = Field(default_factory=list)

    @field_validator("unavailable_dates")
    @classmethod
    def _normalize_dates(cls, value: List[str]) -> List[str]:
        return normalize_dates(value)

    @model_validator(mode="after")
    def _check_participant_bounds(self):
        if self.max_participants is not None and self.min_participants > self.max_participants:
            raise ValueError("Min participants cannot exceed max participants")
        return self


class ActivityCreate(ActivityBase):
    """Schema for creating an activity."""

    is_active: bool = True


class ActivityUpdate(BaseModel):
    """Schema for updating an activity.

    All fields are optional; only provided fields will be updated.  A
    supplied ``slots`` list replaces the existing one entirely.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = Field(None, max_length=500)
    price_usd: Optional[float] = Field(None, ge=0, le=999999.99)
    duration_minutes: Optional[int] = Field(None, gt=0, le=MINUTES_PER_DAY)
    max_participants: Optional[int] = Field(None, gt=0, le=1000)
    min_participants: Optional[int] = Field(None, gt=0)
    tags: Optional[List[str]] = None
    slots: Optional[List[ActivitySlot]] = None
    unavailable_dates: Optional[List[DateStr]] = None
    is_active: Optional[bool] = None

    _required = reject_null(
        "name", "price_usd", "min_participants", "tags", "slots", "unavailable_dates", "is_active"
    )

    @field_validator("unavailable_dates")
    @classmethod
    def _normalize_dates(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_dates(value) if value is not None else None


class Activity(ActivityBase):
    """Stored activity as returned by the API."""

    id: str
    is_active: bool = True
    created_at: str
    updated_at: str

    def get_slot(self, slot_id: str) -> Optional[ActivitySlot]:
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None


class ActivityUnavailableDates(BaseModel):
    activity_id: str
    unavailable_dates: List[str]
