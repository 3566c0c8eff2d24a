"""
Pydantic models for agents.

Agents and activity staff share the same personal profile, so the
profile fields live in ``StaffProfile`` and are reused by
``activity_staff``.  Email addresses are unique across both kinds of
people; that rule is enforced by the service layer, not here.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import EmailStr, reject_null


class StaffProfile(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Mina Park"])
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    avatar_url: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=1000)
    languages: List[str] = Field(default_factory=list)
    specialties: List[str] = Field(default_factory=list)
    hourly_rate: Optional[float] = Field(None, gt=0)
    max_hours_per_day: int = Field(8, ge=1, le=24)
    agency_id: Optional[str] = Field(None, min_length=1)


class StaffProfileUpdate(BaseModel):
    """Optional counterpart of ``StaffProfile`` used for partial updates."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    avatar_url: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=1000)
    languages: Optional[List[str]] = None
    specialties: Optional[List[str]] = None
    hourly_rate: Optional[float] = Field(None, gt=0)
    max_hours_per_day: Optional[int] = Field(None, ge=1, le=24)
    agency_id: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None

    _required = reject_null(
        "name", "email", "languages", "specialties", "max_hours_per_day", "is_active"
    )


class AgentCreate(StaffProfile):
    """Schema for creating an agent."""

    is_active: bool = True


class AgentUpdate(StaffProfileUpdate):
    pass


class Agent(StaffProfile):
    """Stored agent as returned by the API."""

    id: str
    is_active: bool = True
    created_at: str
    updated_at: str
