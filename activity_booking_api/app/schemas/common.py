"""
Shared schema building blocks.

Defines the response envelope used by every endpoint together with
reusable constrained string types for calendar dates, times of day and
email addresses.
"""

from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator

DATE_PATTERN = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"
TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

DateStr = Annotated[str, Field(pattern=DATE_PATTERN, examples=["2024-06-01"])]
TimeStr = Annotated[str, Field(pattern=TIME_PATTERN, examples=["09:00"])]
EmailStr = Annotated[str, Field(pattern=EMAIL_PATTERN, max_length=320, examples=["guide@example.com"])]

T = TypeVar("T")


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class DataResponse(BaseModel, Generic[T]):
    """Envelope for a single payload."""

    success: bool = True
    data: T


class PageResponse(BaseModel, Generic[T]):
    """Envelope for a paginated list payload."""

    success: bool = True
    data: List[T]
    pagination: Pagination


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Documented shape of every failure response."""

    success: bool = False
    error: str
    details: Optional[list] = None


def normalize_dates(dates: Optional[List[str]]) -> List[str]:
    """Return ``dates`` de-duplicated and sorted ascending."""
    return sorted(set(dates or []))


def reject_null(*fields: str):
    """Field validator refusing an explicit ``null`` for fields that cannot be cleared.

    Update models declare every field optional so that omitted fields
    stay untouched; this keeps ``{"name": null}`` from erasing a
    required value.
    """

    def _check(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    return field_validator(*fields, mode="before")(_check)
