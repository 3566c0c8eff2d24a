"""
Pydantic schema definitions for API payloads.

Each resource (agencies, agents, activity staff, activities, bookings,
agency schedules) defines its own models for request bodies and for
the stored representation returned by the API.  The in‑memory store
keeps instances of the stored models directly.
"""
