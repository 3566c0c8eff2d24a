"""
Pydantic models for agencies.

An agency is an independent organisation that agents and activity
staff may belong to (via their ``agency_id``).  ``AgencyUpdate`` holds
only optional fields; services apply the fields a client actually
sent and leave everything else untouched.
"""

from typing import Optional

from pydantic import BaseModel, Field

from .common import EmailStr, reject_null


class AgencyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, examples=["Island Adventures"])
    description: Optional[str] = Field(None, max_length=2000)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=500)
    logo_url: Optional[str] = Field(None, max_length=500)


class AgencyCreate(AgencyBase):
    """Schema for creating an agency."""

    is_active: bool = True


class AgencyUpdate(BaseModel):
    """Schema for updating an agency.

    All fields are optional; only provided fields will be updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(None, max_length=500)
    logo_url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None

    _required = reject_null("name", "is_active")


class Agency(AgencyBase):
    """Stored agency as returned by the API."""

    id: str
    is_active: bool = True
    created_at: str
    updated_at: str
