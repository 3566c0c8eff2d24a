"""
Agent endpoints for API v1.

Agents share their email namespace with activity staff: creating or
renaming an agent to an address already used by any agent or staff
member returns HTTP 409.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.agent import Agent, AgentCreate, AgentUpdate
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.agent_service import AgentService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_agent_service(store: MemoryDataStore = Depends(get_store)) -> AgentService:
    return AgentService(store)


@router.get("", response_model=PageResponse[Agent])
async def list_agents(
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    search: Optional[str] = Query(None, description="Search in name, email and bio"),
    agency_id: Optional[str] = Query(None, description="Only agents of this agency"),
    paging: PageRequest = Depends(PageParams(10)),
    service: AgentService = Depends(get_agent_service),
) -> PageResponse[Agent]:
    """Return a paginated list of agents."""
    agents = service.list_people(is_active=is_active, search=search, agency_id=agency_id)
    page = paging.apply(agents)
    return PageResponse[Agent](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[Agent], status_code=status.HTTP_201_CREATED)
async def create_agent(
    agent_in: AgentCreate,
    service: AgentService = Depends(get_agent_service),
) -> DataResponse[Agent]:
    """Create an agent; HTTP 409 if the email is already taken."""
    try:
        return DataResponse[Agent](data=service.create_agent(agent_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.get("/{agent_id}", response_model=DataResponse[Agent])
async def get_agent(
    agent_id: str,
    service: AgentService = Depends(get_agent_service),
) -> DataResponse[Agent]:
    try:
        return DataResponse[Agent](data=service.get_person(agent_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{agent_id}", response_model=DataResponse[Agent])
async def update_agent(
    agent_id: str,
    agent_in: AgentUpdate,
    service: AgentService = Depends(get_agent_service),
) -> DataResponse[Agent]:
    try:
        return DataResponse[Agent](data=service.update_agent(agent_id, agent_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{agent_id}", response_model=MessageResponse)
async def delete_agent(
    agent_id: str,
    service: AgentService = Depends(get_agent_service),
) -> MessageResponse:
    try:
        service.delete_person(agent_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Agent deleted successfully")
