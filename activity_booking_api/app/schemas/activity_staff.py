"""
Pydantic models for activity staff (guides, instructors).

Activity staff carry the same profile as agents plus a list of dates
on which they cannot work.  Dates are kept de-duplicated and sorted.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .agent import StaffProfile, StaffProfileUpdate
from .common import DateStr, normalize_dates, reject_null


class ActivityStaffCreate(StaffProfile):
    """Schema for creating an activity staff member."""

    is_active: bool = True
    unavailable_dates: List[DateStr] = Field(default_factory=list)

    @field_validator("unavailable_dates")
    @classmethod
    def _normalize_dates(cls, value: List[str]) -> List[str]:
        return normalize_dates(value)


class ActivityStaffUpdate(StaffProfileUpdate):
    unavailable_dates: Optional[List[DateStr]] = None

    _no_null_dates = reject_null("unavailable_dates")

    @field_validator("unavailable_dates")
    @classmethod
    def _normalize_dates(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        return normalize_dates(value) if value is not None else None


class ActivityStaff(StaffProfile):
    """Stored activity staff member as returned by the API."""

    id: str
    is_active: bool = True
    unavailable_dates: List[str] = Field(default_factory=list)
    created_at: str
    updated_at: str


class UnavailableDateRequest(BaseModel):
    """Body for adding or removing a single unavailable date."""

    date: str = Field(..., min_length=1, examples=["2024-06-01"])


class UnavailableDatesReplace(BaseModel):
    """Body for replacing the whole unavailable date list."""

    dates: List[str]


class StaffUnavailableDates(BaseModel):
    activity_staff_id: str
    unavailable_dates: List[str]
