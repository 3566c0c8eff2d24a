"""
Agency endpoints for API v1.

Standard CRUD over agencies.  Lists default to 50 records per page and
can be narrowed by ``is_active`` and a free‑text ``search`` over the
agency name and description.  ``PUT`` is a partial update: fields left
out of the body keep their stored values.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from activity_booking_api.app.core.errors import ServiceError, http_error
from activity_booking_api.app.core.store import MemoryDataStore, get_store
from activity_booking_api.app.schemas.agency import Agency, AgencyCreate, AgencyUpdate
from activity_booking_api.app.schemas.common import DataResponse, MessageResponse, PageResponse
from activity_booking_api.app.services.agency_service import AgencyService
from activity_booking_api.app.services.pagination import PageParams, PageRequest

router = APIRouter()


def get_agency_service(store: MemoryDataStore = Depends(get_store)) -> AgencyService:
    return AgencyService(store)


@router.get("", response_model=PageResponse[Agency])
async def list_agencies(
    is_active: Optional[bool] = Query(None, description="Filter by active flag"),
    search: Optional[str] = Query(None, description="Search in name and description"),
    paging: PageRequest = Depends(PageParams(50)),
    service: AgencyService = Depends(get_agency_service),
) -> PageResponse[Agency]:
    """Return a paginated list of agencies in creation order."""
    page = paging.apply(service.list_agencies(is_active=is_active, search=search))
    return PageResponse[Agency](data=page.items, pagination=page.pagination())


@router.post("", response_model=DataResponse[Agency], status_code=status.HTTP_201_CREATED)
async def create_agency(
    agency_in: AgencyCreate,
    service: AgencyService = Depends(get_agency_service),
) -> DataResponse[Agency]:
    """Create a new agency."""
    return DataResponse[Agency](data=service.create_agency(agency_in))


@router.get("/{agency_id}", response_model=DataResponse[Agency])
async def get_agency(
    agency_id: str,
    service: AgencyService = Depends(get_agency_service),
) -> DataResponse[Agency]:
    try:
        return DataResponse[Agency](data=service.get_agency(agency_id))
    except ServiceError as e:
        raise http_error(e) from e


@router.put("/{agency_id}", response_model=DataResponse[Agency])
async def update_agency(
    agency_id: str,
    agency_in: AgencyUpdate,
    service: AgencyService = Depends(get_agency_service),
) -> DataResponse[Agency]:
    """Update an existing agency.

    Returns HTTP 404 if the agency does not exist.
    """
    try:
        return DataResponse[Agency](data=service.update_agency(agency_id, agency_in))
    except ServiceError as e:
        raise http_error(e) from e


@router.delete("/{agency_id}", response_model=MessageResponse)
async def delete_agency(
    agency_id: str,
    service: AgencyService = Depends(get_agency_service),
) -> MessageResponse:
    """Delete an agency.

    Agents, staff and schedules that reference the agency are left
    untouched.
    """
    try:
        service.delete_agency(agency_id)
    except ServiceError as e:
        raise http_error(e) from e
    return MessageResponse(message="Agency deleted successfully")
