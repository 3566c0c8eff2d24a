"""
In‑memory data store.

``MemoryDataStore`` keeps every resource in its own ``Repository``.
The store is an ordinary object: ``create_app`` builds one instance and
places it on ``app.state.store`` so that endpoints receive it through
the :func:`get_store` dependency and tests can construct as many
isolated stores as they need.  Data lives only for the lifetime of the
process.

Repositories hand out deep copies of their records, so callers can
never mutate stored state behind the store's back.  Absence is
reported with sentinel values (``None`` / ``False``) rather than
exceptions; the service layer decides what a missing record means.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel

from ..schemas.activity import Activity
from ..schemas.activity_staff import ActivityStaff
from ..schemas.agency import Agency
from ..schemas.agency_schedule import AgencyUnavailableSchedule
from ..schemas.agent import Agent
from ..schemas.booking import Booking

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Predicate = Callable[[Any], bool]


def generate_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> str:
    """Current UTC time as an ISO‑8601 string."""
    return datetime.now(timezone.utc).isoformat()


class Repository(Generic[ModelT]):
    """Insertion-ordered collection of one resource type.

    Mutations are serialised with a per‑collection lock so concurrent
    requests served from a thread pool can never allocate the same id
    or interleave a read‑modify‑write.
    """

    def __init__(self, model: Type[ModelT], name: str) -> None:
        self.model = model
        self.name = name
        self._items: Dict[str, ModelT] = {}
        self._lock = threading.RLock()

    def create(self, values: Dict[str, Any]) -> ModelT:
        with self._lock:
            record_id = generate_id()
            while record_id in self._items:
                record_id = generate_id()
            now = utc_now()
            record = self.model.model_validate(
                {**values, "id": record_id, "created_at": now, "updated_at": now}
            )
            self._items[record_id] = record
        logger.debug("Created %s %s", self.name, record_id)
        return record.model_copy(deep=True)

    def get(self, record_id: str) -> Optional[ModelT]:
        record = self._items.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def exists(self, record_id: str) -> bool:
        return record_id in self._items

    def list(self, *predicates: Predicate) -> List[ModelT]:
        """Return records matching every predicate, in insertion order."""
        with self._lock:
            records = list(self._items.values())
        return [
            record.model_copy(deep=True)
            for record in records
            if all(predicate(record) for predicate in predicates)
        ]

    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[ModelT]:
        """Apply ``changes`` field by field; ``None`` when the id is unknown."""
        with self._lock:
            current = self._items.get(record_id)
            if current is None:
                return None
            data = current.model_dump()
            for field, value in changes.items():
                if field in ("id", "created_at", "updated_at"):
                    continue
                data[field] = value
            data["updated_at"] = utc_now()
            updated = self.model.model_validate(data)
            self._items[record_id] = updated
        logger.debug("Updated %s %s (%s)", self.name, record_id, ", ".join(sorted(changes)))
        return updated.model_copy(deep=True)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            removed = self._items.pop(record_id, None)
        return removed is not None

    def count(self) -> int:
        return len(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class MemoryDataStore:
    """Container for all resource repositories."""

    def __init__(self, seed: bool = False) -> None:
        self.agencies: Repository[Agency] = Repository(Agency, "agency")
        self.agents: Repository[Agent] = Repository(Agent, "agent")
        self.activity_staff: Repository[ActivityStaff] = Repository(ActivityStaff, "activity staff")
        self.activities: Repository[Activity] = Repository(Activity, "activity")
        self.bookings: Repository[Booking] = Repository(Booking, "booking")
        self.agency_schedules: Repository[AgencyUnavailableSchedule] = Repository(
            AgencyUnavailableSchedule, "agency unavailable schedule"
        )
        self._seed = seed
        # Guards check-then-create sequences spanning several repositories
        # (email uniqueness, slot capacity).
        self.write_lock = threading.RLock()
        if seed:
            seed_demo_data(self)

    def _repositories(self) -> List[Repository]:
        return [
            self.agencies,
            self.agents,
            self.activity_staff,
            self.activities,
            self.bookings,
            self.agency_schedules,
        ]

    def is_email_exists(self, email: str, exclude_id: Optional[str] = None) -> bool:
        """Check ``email`` against agents and activity staff (exact match)."""
        for repository in (self.agents, self.activity_staff):
            for person in repository.list():
                if person.email == email and person.id != exclude_id:
                    return True
        return False

    def reset(self) -> None:
        """Drop all records and re-seed when the store was created seeded."""
        for repository in self._repositories():
            repository.clear()
        if self._seed:
            seed_demo_data(self)
        logger.info("Data store reset")

    def get_stats(self) -> Dict[str, int]:
        return {
            "agencies": self.agencies.count(),
            "agents": self.agents.count(),
            "activity_staff": self.activity_staff.count(),
            "activities": self.activities.count(),
            "bookings": self.bookings.count(),
            "agency_unavailable_schedules": self.agency_schedules.count(),
        }


def seed_demo_data(store: MemoryDataStore) -> None:
    """Load a small demo data set."""
    agency = store.agencies.create(
        {
            "name": "Island Adventures",
            "description": "Snorkelling and hiking tours",
            "email": "hello@island-adventures.example",
            "phone": "+1-555-0100",
        }
    )
    store.agents.create(
        {
            "name": "Mina Park",
            "email": "mina.park@island-adventures.example",
            "languages": ["en", "ko"],
            "specialties": ["reservations"],
            "agency_id": agency.id,
        }
    )
    store.activity_staff.create(
        {
            "name": "Leo Santos",
            "email": "leo.santos@island-adventures.example",
            "languages": ["en", "pt"],
            "specialties": ["snorkelling"],
            "hourly_rate": 35.0,
            "agency_id": agency.id,
        }
    )
    activity = store.activities.create(
        {
            "name": "Reef Snorkelling",
            "description": "Guided morning snorkel over the coral reef",
            "category": "water",
            "price_usd": 89.0,
            "duration_minutes": 120,
            "max_participants": 12,
            "slots": [
                {"id": generate_id(), "start_time": "09:00", "end_time": "11:00", "max_capacity": 12},
                {"id": generate_id(), "start_time": "13:00", "end_time": "15:00", "max_capacity": 8},
            ],
        }
    )
    store.bookings.create(
        {
            "activity_id": activity.id,
            "slot_id": activity.slots[0].id,
            "date": datetime.now(timezone.utc).date().isoformat(),
            "participant_count": 2,
            "status": "confirmed",
            "customer_name": "Ana Lopez",
            "customer_email": "ana@example.com",
        }
    )
    logger.info("Seeded demo data")


def get_store(request: Request) -> MemoryDataStore:
    """FastAPI dependency returning the application's data store."""
    return request.app.state.store
