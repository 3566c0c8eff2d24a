"""Pydantic models for slot availability and utilisation reports."""

from typing import List, Optional

from pydantic import BaseModel


class SlotAvailability(BaseModel):
    slot_id: Optional[str] = None
    start_time: str
    end_time: Optional[str] = None
    max_capacity: int
    current_bookings: int
    remaining_capacity: int
    is_available: bool


class AvailabilitySummary(BaseModel):
    total_slots: int = 0
    available_slots: int = 0
    fully_booked_slots: int = 0
    total_capacity: int = 0
    total_bookings: int = 0


class ActivityAvailability(BaseModel):
    activity_id: str
    date: str
    slots: List[SlotAvailability]
    summary: AvailabilitySummary


class UtilizationStats(BaseModel):
    activity_id: str
    start_date: str
    end_date: str
    total_slots: int
    booked_slots: int
    utilization_rate: float
    average_capacity_used: float
