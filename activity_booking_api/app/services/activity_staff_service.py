"""Business logic for activity staff (guides and instructors)."""

from typing import List

from ..core.store import Repository
from ..schemas.activity_staff import ActivityStaff, ActivityStaffCreate, ActivityStaffUpdate
from .agent_service import StaffService
from .unavailable_dates import UnavailableDates


class ActivityStaffService(StaffService[ActivityStaff]):
    """Service for managing activity staff and their unavailable dates."""

    label = "Activity staff"

    @property
    def repository(self) -> Repository[ActivityStaff]:
        return self.store.activity_staff

    @property
    def unavailable_dates(self) -> UnavailableDates:
        return UnavailableDates(self.store.activity_staff, "Activity staff not found")

    def create_activity_staff(self, data: ActivityStaffCreate) -> ActivityStaff:
        return self.create_person(data)

    def update_activity_staff(self, staff_id: str, updates: ActivityStaffUpdate) -> ActivityStaff:
        return self.update_person(staff_id, updates)

    def get_unavailable_dates(self, staff_id: str) -> List[str]:
        return self.unavailable_dates.get(staff_id)
