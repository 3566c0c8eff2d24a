"""
Unavailable date list management.

Activities and activity staff both keep a sorted, de-duplicated list of
``YYYY-MM-DD`` dates on which they cannot be booked.  The helpers here
operate on any repository whose records carry ``unavailable_dates``.
"""

import logging
from typing import List, Optional

from ..core.errors import ConflictError, InvalidInputError, NotFoundError
from ..core.store import Repository
from ..schemas.common import normalize_dates
from .availability_service import INVALID_DATE_MESSAGE, is_valid_date

logger = logging.getLogger(__name__)


def _check_date(date: Optional[str]) -> None:
    if not date:
        raise InvalidInputError("Date parameter is required")
    if not is_valid_date(date):
        raise InvalidInputError(INVALID_DATE_MESSAGE)


class UnavailableDates:
    """Unavailable date operations bound to one repository."""

    def __init__(self, repository: Repository, not_found_message: str) -> None:
        self.repository = repository
        self.not_found_message = not_found_message

    def _dates(self, record_id: str) -> List[str]:
        record = self.repository.get(record_id)
        if record is None:
            raise NotFoundError(self.not_found_message)
        return list(record.unavailable_dates)

    def get(self, record_id: str) -> List[str]:
        return self._dates(record_id)

    def add(self, record_id: str, date: Optional[str]) -> List[str]:
        dates = self._dates(record_id)
        _check_date(date)
        if date in dates:
            raise ConflictError("Date is already in unavailable dates list")
        return self._save(record_id, dates + [date])

    def remove(self, record_id: str, date: Optional[str]) -> List[str]:
        dates = self._dates(record_id)
        _check_date(date)
        if date not in dates:
            raise NotFoundError("Date is not in unavailable dates list")
        return self._save(record_id, [d for d in dates if d != date])

    def replace(self, record_id: str, dates: List[str]) -> List[str]:
        self._dates(record_id)
        for date in dates:
            if not is_valid_date(date):
                raise InvalidInputError(f"Invalid date format: {date}. Use YYYY-MM-DD")
        return self._save(record_id, dates)

    def _save(self, record_id: str, dates: List[str]) -> List[str]:
        record = self.repository.update(record_id, {"unavailable_dates": normalize_dates(dates)})
        if record is None:
            raise NotFoundError(self.not_found_message)
        logger.info("Set %d unavailable date(s) on %s %s", len(record.unavailable_dates), self.repository.name, record_id)
        return list(record.unavailable_dates)
