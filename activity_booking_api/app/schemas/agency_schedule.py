"""
Pydantic models for agency unavailable schedules.

A schedule marks one calendar date on which an agency does not
operate.  Bookings handled by the agency's agents or staff are refused
on such dates.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import DateStr, reject_null


class AgencyScheduleCreate(BaseModel):
    agency_id: str = Field(..., min_length=1)
    date: DateStr
    reason: Optional[str] = Field(None, max_length=500, examples=["Public holiday"])
    is_active: bool = True


class AgencyScheduleUpdate(BaseModel):
    date: Optional[DateStr] = None
    reason: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    _required = reject_null("date", "is_active")


class AgencyUnavailableSchedule(BaseModel):
    id: str
    agency_id: str
    date: str
    reason: Optional[str] = None
    is_active: bool = True
    created_at: str
    updated_at: str
