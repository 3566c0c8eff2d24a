"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each resource (agencies, agents, activity staff,
activities, bookings, agency schedules) has its own schema module,
service and router in ``api/v1/endpoints``.  Versioning is handled by
grouping routers under the ``api/<version>/`` hierarchy.
"""

from .main import app  # noqa: F401
