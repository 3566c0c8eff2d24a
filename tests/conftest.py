"""Shared test fixtures and helpers."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from activity_booking_api.app.core.config import Settings
from activity_booking_api.app.core.store import MemoryDataStore
from activity_booking_api.app.main import create_app

API = "/api/v1"
DAY = "2024-06-01"


@pytest.fixture
def store():
    return MemoryDataStore()


@pytest.fixture
def client(store):
    return TestClient(create_app(settings=Settings(enforce_slot_capacity=False), store=store))


@pytest.fixture
def strict_client(store):
    """Client for an application that rejects over-capacity bookings."""
    return TestClient(create_app(settings=Settings(enforce_slot_capacity=True), store=store))


def create(client: TestClient, resource: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """POST ``payload`` and return the created record, asserting success."""
    response = client.post(f"{API}/{resource}", json=payload)
    assert response.status_code == 201, response.json()
    body = response.json()
    assert body["success"] is True
    return body["data"]


def make_activity(
    client: TestClient,
    capacities: Optional[List[int]] = None,
    **overrides: Any,
) -> Dict[str, Any]:
    """Create an activity with one slot per entry in ``capacities``."""
    capacities = capacities if capacities is not None else [5]
    slots = [
        {"start_time": f"{9 + 2 * index:02d}:00", "duration_minutes": 90, "max_capacity": capacity}
        for index, capacity in enumerate(capacities)
    ]
    payload = {"name": "Reef Snorkelling", "category": "water", "price_usd": 89.0, "slots": slots}
    payload.update(overrides)
    return create(client, "activities", payload)


def make_booking(client: TestClient, activity: Dict[str, Any], participants: int = 2, **overrides: Any):
    """POST a booking for the activity's first slot and return the raw response."""
    payload = {
        "activity_id": activity["id"],
        "slot_id": activity["slots"][0]["id"],
        "date": DAY,
        "participant_count": participants,
        "customer_name": "Ana Lopez",
        "customer_email": "ana@example.com",
    }
    payload.update(overrides)
    return client.post(f"{API}/bookings", json=payload)


def person(name: str = "Mina Park", email: str = "mina@example.com", **extra: Any) -> Dict[str, Any]:
    return {"name": name, "email": email, **extra}
