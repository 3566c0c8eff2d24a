"""
Business logic for agency unavailable schedules.

Only one *active* schedule may exist per agency and date; inactive
schedules are kept for reference and do not block new ones.
"""

import logging
from typing import List, Optional

from ..core.errors import ConflictError, NotFoundError
from ..core.store import MemoryDataStore
from ..schemas.agency_schedule import AgencyScheduleCreate, AgencyScheduleUpdate, AgencyUnavailableSchedule
from .pagination import build_filters, equals_filter, is_active_filter, range_filter, search_filter

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Unavailable schedule already exists for this agency and date"


class AgencyScheduleService:
    """Service for managing dates on which an agency does not operate."""

    def __init__(self, store: MemoryDataStore) -> None:
        self.store = store

    def list_schedules(
        self,
        agency_id: Optional[str] = None,
        date: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> List[AgencyUnavailableSchedule]:
        filters = build_filters(
            equals_filter("agency_id", agency_id),
            equals_filter("date", date),
            range_filter("date", date_from or None, date_to or None),
            is_active_filter(is_active),
            search_filter(search, "reason"),
        )
        return self.store.agency_schedules.list(*filters)

    def get_schedule(self, schedule_id: str) -> AgencyUnavailableSchedule:
        schedule = self.store.agency_schedules.get(schedule_id)
        if schedule is None:
            raise NotFoundError("Agency unavailable schedule not found")
        return schedule

    def _has_active(self, agency_id: str, date: str, exclude_id: Optional[str] = None) -> bool:
        return bool(
            self.store.agency_schedules.list(
                lambda s: s.agency_id == agency_id and s.date == date and s.is_active and s.id != exclude_id
            )
        )

    def is_agency_date_unavailable(self, agency_id: str, date: str) -> bool:
        return self._has_active(agency_id, date)

    def create_schedule(self, data: AgencyScheduleCreate) -> AgencyUnavailableSchedule:
        if not self.store.agencies.exists(data.agency_id):
            raise NotFoundError("Agency not found")
        with self.store.write_lock:
            if data.is_active and self._has_active(data.agency_id, data.date):
                raise ConflictError(DUPLICATE_MESSAGE)
            schedule = self.store.agency_schedules.create(data.model_dump())
        logger.info("Agency %s unavailable on %s (schedule %s)", schedule.agency_id, schedule.date, schedule.id)
        return schedule

    def update_schedule(self, schedule_id: str, updates: AgencyScheduleUpdate) -> AgencyUnavailableSchedule:
        changes = updates.model_dump(exclude_unset=True)
        with self.store.write_lock:
            existing = self.get_schedule(schedule_id)
            date = changes.get("date", existing.date)
            is_active = changes.get("is_active", existing.is_active)
            if is_active and self._has_active(existing.agency_id, date, exclude_id=schedule_id):
                raise ConflictError(DUPLICATE_MESSAGE)
            schedule = self.store.agency_schedules.update(schedule_id, changes)
        if schedule is None:
            raise NotFoundError("Agency unavailable schedule not found")
        logger.info("Updated agency unavailable schedule %s", schedule_id)
        return schedule

    def delete_schedule(self, schedule_id: str) -> None:
        if not self.store.agency_schedules.delete(schedule_id):
            raise NotFoundError("Agency unavailable schedule not found")
        logger.info("Deleted agency unavailable schedule %s", schedule_id)
