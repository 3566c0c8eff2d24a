"""
Business logic for activities.

Besides plain CRUD this service owns the activity's slot list: slots
submitted without an id get a fresh one, and ids must be unique within
an activity because bookings refer to slots by id.  Replacing the slot
list does not touch existing bookings; bookings for a slot that no
longer exists simply stop showing up in availability reports.
"""

import logging
from typing import Any, Dict, List, Optional

from ..core.errors import InvalidInputError, NotFoundError
from ..core.store import MemoryDataStore, generate_id
from ..schemas.activity import Activity, ActivityCreate, ActivitySlot, ActivityUpdate
from .pagination import build_filters, equals_filter, is_active_filter, range_filter, search_filter
from .unavailable_dates import UnavailableDates

logger = logging.getLogger(__name__)


def assign_slot_ids(slots: List[ActivitySlot]) -> List[Dict[str, Any]]:
    """Give every slot an id and reject duplicates."""
    seen = set()
    result = []
    for slot in slots:
        data = slot.model_dump()
        if not data.get("id"):
            data["id"] = generate_id()
        if data["id"] in seen:
            raise InvalidInputError(f"Duplicate slot id: {data['id']}")
        seen.add(data["id"])
        result.append(data)
    return result


class ActivityService:
    """Service for managing activities and their slots."""

    def __init__(self, store: MemoryDataStore) -> None:
        self.store = store

    @property
    def unavailable_dates(self) -> UnavailableDates:
        return UnavailableDates(self.store.activities, "Activity not found")

    def list_activities(
        self,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> List[Activity]:
        filters = build_filters(
            is_active_filter(is_active),
            search_filter(search, "name", "description"),
            equals_filter("category", category),
            range_filter("price_usd", min_price, max_price),
        )
        return self.store.activities.list(*filters)

    def get_activity(self, activity_id: str) -> Activity:
        activity = self.store.activities.get(activity_id)
        if activity is None:
            raise NotFoundError("Activity not found")
        return activity

    def create_activity(self, data: ActivityCreate) -> Activity:
        values = data.model_dump()
        values["slots"] = assign_slot_ids(data.slots)
        activity = self.store.activities.create(values)
        logger.info("Created activity %s (%s) with %d slot(s)", activity.id, activity.name, len(activity.slots))
        return activity

    def update_activity(self, activity_id: str, updates: ActivityUpdate) -> Activity:
        existing = self.get_activity(activity_id)
        changes = updates.model_dump(exclude_unset=True)
        if updates.slots is not None:
            changes["slots"] = assign_slot_ids(updates.slots)

        min_participants = changes.get("min_participants", existing.min_participants)
        max_participants = changes.get("max_participants", existing.max_participants)
        if max_participants is not None and min_participants > max_participants:
            raise InvalidInputError("Min participants cannot exceed max participants")

        activity = self.store.activities.update(activity_id, changes)
        if activity is None:
            raise NotFoundError("Activity not found")
        logger.info("Updated activity %s", activity_id)
        return activity

    def delete_activity(self, activity_id: str) -> None:
        """Remove an activity; its bookings are kept and left dangling."""
        if not self.store.activities.delete(activity_id):
            raise NotFoundError("Activity not found")
        logger.info("Deleted activity %s", activity_id)
