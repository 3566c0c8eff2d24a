"""
Business logic for agents and activity staff.

Both kinds of people share one email namespace: an address used by an
agent cannot be reused by an activity staff member and vice versa.
The uniqueness check and the insert run under the store's write lock
so two concurrent creates cannot both pass the check.  Matching is
exact (case-sensitive).
"""

import logging
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from ..core.errors import ConflictError, NotFoundError
from ..core.store import MemoryDataStore, Repository
from ..schemas.agent import Agent, AgentCreate, AgentUpdate
from .pagination import build_filters, equals_filter, is_active_filter, search_filter

logger = logging.getLogger(__name__)

PersonT = TypeVar("PersonT", bound=BaseModel)


class StaffService(Generic[PersonT]):
    """CRUD shared by agents and activity staff.

    Subclasses set ``label`` (used in messages) and implement
    the ``repository`` property.
    """

    label = "Person"

    def __init__(self, store: MemoryDataStore) -> None:
        self.store = store

    @property
    def repository(self) -> Repository[PersonT]:
        raise NotImplementedError

    def _duplicate_email(self) -> ConflictError:
        return ConflictError(f"{self.label} with this email already exists")

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.label} not found")

    def list_people(
        self,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
        agency_id: Optional[str] = None,
    ) -> List[PersonT]:
        """Records matching all supplied filters, in creation order.

        ``search`` is matched case-insensitively against name, email and
        bio.
        """
        filters = build_filters(
            is_active_filter(is_active),
            search_filter(search, "name", "email", "bio"),
            equals_filter("agency_id", agency_id),
        )
        return self.repository.list(*filters)

    def get_person(self, person_id: str) -> PersonT:
        person = self.repository.get(person_id)
        if person is None:
            raise self._not_found()
        return person

    def create_person(self, data: BaseModel) -> PersonT:
        with self.store.write_lock:
            if self.store.is_email_exists(data.email):
                logger.info("Rejected %s create: email %s already in use", self.label.lower(), data.email)
                raise self._duplicate_email()
            person = self.repository.create(data.model_dump())
        logger.info("Created %s %s (%s)", self.label.lower(), person.id, person.email)
        return person

    def update_person(self, person_id: str, updates: BaseModel) -> PersonT:
        changes = updates.model_dump(exclude_unset=True)
        with self.store.write_lock:
            existing = self.repository.get(person_id)
            if existing is None:
                raise self._not_found()
            email = changes.get("email")
            if email and email != existing.email and self.store.is_email_exists(email, exclude_id=person_id):
                raise self._duplicate_email()
            person = self.repository.update(person_id, changes)
        if person is None:
            raise self._not_found()
        logger.info("Updated %s %s", self.label.lower(), person_id)
        return person

    def delete_person(self, person_id: str) -> None:
        if not self.repository.delete(person_id):
            raise self._not_found()
        logger.info("Deleted %s %s", self.label.lower(), person_id)


class AgentService(StaffService[Agent]):
    """Service for managing agents."""

    label = "Agent"

    @property
    def repository(self) -> Repository[Agent]:
        return self.store.agents

    def create_agent(self, data: AgentCreate) -> Agent:
        return self.create_person(data)

    def update_agent(self, agent_id: str, updates: AgentUpdate) -> Agent:
        return self.update_person(agent_id, updates)
