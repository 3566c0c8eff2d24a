"""
Business logic for agencies.

Agencies are referenced by agents, activity staff and unavailable
schedules through a plain ``agency_id``.  Deleting an agency leaves
those references in place; they simply resolve to "not found" later.
"""

import logging
from typing import List, Optional

from ..core.errors import NotFoundError
from ..core.store import MemoryDataStore
from ..schemas.agency import Agency, AgencyCreate, AgencyUpdate
from .pagination import build_filters, is_active_filter, search_filter

logger = logging.getLogger(__name__)


class AgencyService:
    """Service for managing agencies."""

    def __init__(self, store: MemoryDataStore) -> None:
        self.store = store

    def list_agencies(self, is_active: Optional[bool] = None, search: Optional[str] = None) -> List[Agency]:
        """Agencies matching all supplied filters, in creation order.

        ``search`` is matched case-insensitively against the name and
        description.
        """
        filters = build_filters(
            is_active_filter(is_active),
            search_filter(search, "name", "description"),
        )
        return self.store.agencies.list(*filters)

    def get_agency(self, agency_id: str) -> Agency:
        agency = self.store.agencies.get(agency_id)
        if agency is None:
            raise NotFoundError("Agency not found")
        return agency

    def create_agency(self, data: AgencyCreate) -> Agency:
        agency = self.store.agencies.create(data.model_dump())
        logger.info("Created agency %s (%s)", agency.id, agency.name)
        return agency

    def update_agency(self, agency_id: str, updates: AgencyUpdate) -> Agency:
        changes = updates.model_dump(exclude_unset=True)
        agency = self.store.agencies.update(agency_id, changes)
        if agency is None:
            raise NotFoundError("Agency not found")
        logger.info("Updated agency %s", agency_id)
        return agency

    def delete_agency(self, agency_id: str) -> None:
        if not self.store.agencies.delete(agency_id):
            raise NotFoundError("Agency not found")
        logger.info("Deleted agency %s", agency_id)
