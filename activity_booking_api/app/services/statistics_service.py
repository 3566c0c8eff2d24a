"""
Service layer for store statistics.

Provides the record counts shown on the administration dashboard.
All figures are computed on request from the current store contents.
"""

from typing import Any, Dict

from ..core.store import MemoryDataStore
from ..schemas.booking import BookingStatus


class StatisticsService:
    """Aggregated counts across every resource."""

    def __init__(self, store: MemoryDataStore) -> None:
        self.store = store

    def overview(self) -> Dict[str, Any]:
        """Record count per resource plus a breakdown of bookings by status."""
        stats: Dict[str, Any] = self.store.get_stats()
        by_status = {status.value: 0 for status in BookingStatus}
        for booking in self.store.bookings.list():
            by_status[booking.status.value] += 1
        stats["bookings_by_status"] = by_status
        stats["active_activities"] = len(self.store.activities.list(lambda a: a.is_active))
        return stats
