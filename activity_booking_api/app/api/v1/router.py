"""
Top‑level router for version 1 of the API.

This router aggregates the resource routers under a unified prefix.
When new resources are introduced, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import (
    activities,
    activity_staff,
    agencies,
    agency_schedules,
    agents,
    bookings,
    stats,
)

# Create a router for version 1 and include sub‑routers for each resource.
router = APIRouter()

router.include_router(agencies.router, prefix="/agencies", tags=["agencies"])
router.include_router(agents.router, prefix="/agents", tags=["agents"])
router.include_router(activity_staff.router, prefix="/activity-staff", tags=["activity-staff"])
router.include_router(activities.router, prefix="/activities", tags=["activities"])
router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(
    agency_schedules.router,
    prefix="/agency-unavailable-schedules",
    tags=["agency-unavailable-schedules"],
)
router.include_router(stats.router, prefix="/stats", tags=["stats"])
