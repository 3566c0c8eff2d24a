"""Tests for agencies, agency schedules and activities."""

import pytest

from conftest import API, DAY, create, make_activity, make_booking


class TestAgencies:

    def test_crud(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures", "phone": "+1-555-0100"})
        assert agency["is_active"] is True

        updated = client.put(f"{API}/agencies/{agency['id']}", json={"description": "Reef tours"}).json()["data"]
        assert updated["description"] == "Reef tours"
        assert updated["phone"] == "+1-555-0100"
        assert updated["updated_at"] >= agency["updated_at"]

        assert client.delete(f"{API}/agencies/{agency['id']}").status_code == 200
        response = client.get(f"{API}/agencies/{agency['id']}")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Agency not found"}

    def test_delete_leaves_references(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures"})
        agent = create(client, "agents", {"name": "Mina", "email": "mina@example.com", "agency_id": agency["id"]})

        client.delete(f"{API}/agencies/{agency['id']}")

        assert client.get(f"{API}/agents/{agent['id']}").json()["data"]["agency_id"] == agency["id"]

    def test_missing_name(self, client):
        response = client.post(f"{API}/agencies", json={"description": "No name"})

        assert response.status_code == 400
        assert response.json()["details"][0]["loc"] == ["body", "name"]

    def test_clearing_optional_fields(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures", "website": "https://example.com"})

        response = client.put(f"{API}/agencies/{agency['id']}", json={"website": None})

        assert response.status_code == 200
        assert response.json()["data"]["website"] is None
        assert response.json()["data"]["name"] == "Island Adventures"

    def test_name_cannot_be_nulled(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures"})

        response = client.put(f"{API}/agencies/{agency['id']}", json={"name": None})

        assert response.status_code == 400
        assert response.json()["details"][0]["loc"] == ["body", "name"]
        assert client.get(f"{API}/agencies/{agency['id']}").json()["data"]["name"] == "Island Adventures"


class TestAgencySchedules:

    @pytest.fixture
    def agency(self, client):
        return create(client, "agencies", {"name": "Island Adventures"})

    def test_create_requires_agency(self, client):
        response = client.post(f"{API}/agency-unavailable-schedules", json={"agency_id": "missing", "date": DAY})

        assert response.status_code == 404

    def test_one_active_schedule_per_date(self, client, agency):
        payload = {"agency_id": agency["id"], "date": DAY}
        first = create(client, "agency-unavailable-schedules", payload)

        assert client.post(f"{API}/agency-unavailable-schedules", json=payload).status_code == 409

        client.put(f"{API}/agency-unavailable-schedules/{first['id']}", json={"is_active": False})
        assert client.post(f"{API}/agency-unavailable-schedules", json=payload).status_code == 201

    def test_list_and_delete(self, client, agency):
        for day, reason in (("2024-06-01", "Holiday"), ("2024-06-10", "Staff training"), ("2024-07-01", "Holiday")):
            create(client, "agency-unavailable-schedules", {"agency_id": agency["id"], "date": day, "reason": reason})

        def dates(**params):
            body = client.get(f"{API}/agency-unavailable-schedules", params=params).json()
            return [s["date"] for s in body["data"]]

        assert dates(agency_id=agency["id"]) == ["2024-06-01", "2024-06-10", "2024-07-01"]
        assert dates(date_from="2024-06-05", date_to="2024-06-30") == ["2024-06-10"]
        assert dates(search="holiday") == ["2024-06-01", "2024-07-01"]

        schedule = client.get(f"{API}/agency-unavailable-schedules").json()["data"][0]
        assert client.delete(f"{API}/agency-unavailable-schedules/{schedule['id']}").status_code == 200
        assert client.get(f"{API}/agency-unavailable-schedules/{schedule['id']}").status_code == 404

    def test_clearing_reason(self, client, agency):
        schedule = create(
            client, "agency-unavailable-schedules", {"agency_id": agency["id"], "date": DAY, "reason": "Holiday"}
        )
        url = f"{API}/agency-unavailable-schedules/{schedule['id']}"

        assert client.put(url, json={"reason": None}).json()["data"]["reason"] is None
        assert client.put(url, json={"date": None}).status_code == 400


class TestActivities:

    def test_slot_ids_and_end_times(self, client):
        activity = make_activity(client, [5, 8])

        first, second = activity["slots"]
        assert first["id"] and second["id"] and first["id"] != second["id"]
        assert first["end_time"] == "10:30"
        assert activity["min_participants"] == 1

    def test_duplicate_slot_ids(self, client):
        slots = [
            {"id": "morning", "start_time": "09:00", "end_time": "10:00", "max_capacity": 5},
            {"id": "morning", "start_time": "11:00", "end_time": "12:00", "max_capacity": 5},
        ]

        response = client.post(f"{API}/activities", json={"name": "Kayak", "slots": slots})

        assert response.status_code == 400
        assert "Duplicate slot id" in response.json()["error"]

    @pytest.mark.parametrize(
        "slot",
        [
            {"start_time": "10:00", "end_time": "09:00", "max_capacity": 5},
            {"start_time": "23:00", "duration_minutes": 120, "max_capacity": 5},
            {"start_time": "25:00", "max_capacity": 5},
            {"start_time": "09:00", "max_capacity": -1},
        ],
    )
    def test_invalid_slots(self, client, slot):
        response = client.post(f"{API}/activities", json={"name": "Kayak", "slots": [slot]})

        assert response.status_code == 400

    def test_participant_bounds(self, client):
        response = client.post(f"{API}/activities", json={"name": "Kayak", "min_participants": 5, "max_participants": 2})
        assert response.status_code == 400

        activity = make_activity(client, [5], max_participants=4)
        response = client.put(f"{API}/activities/{activity['id']}", json={"min_participants": 6})
        assert response.status_code == 400

    def test_clearing_optional_fields(self, client):
        activity = make_activity(client, [5], description="Calm bay", max_participants=4)
        url = f"{API}/activities/{activity['id']}"

        updated = client.put(url, json={"description": None, "max_participants": None}).json()["data"]

        assert updated["description"] is None
        assert updated["max_participants"] is None
        assert len(updated["slots"]) == 1
        assert client.put(url, json={"slots": None}).status_code == 400
        assert client.put(url, json={"min_participants": None}).status_code == 400

    def test_list_filters(self, client):
        make_activity(client, [5], name="Reef Snorkel", category="water", price_usd=80)
        make_activity(client, [5], name="Night Dive", category="water", price_usd=150)
        make_activity(client, [5], name="Ridge Hike", category="land", price_usd=40)

        def names(**params):
            return [a["name"] for a in client.get(f"{API}/activities", params=params).json()["data"]]

        assert names(category="water") == ["Reef Snorkel", "Night Dive"]
        assert names(min_price=50, max_price=100) == ["Reef Snorkel"]
        assert names(search="hike") == ["Ridge Hike"]
        assert names(category="water", max_price=100) == ["Reef Snorkel"]

    def test_replacing_slots(self, client):
        activity = make_activity(client, [5])

        response = client.put(
            f"{API}/activities/{activity['id']}",
            json={"slots": [{"start_time": "14:00", "end_time": "00:00", "max_capacity": 3}]},
        )

        (slot,) = response.json()["data"]["slots"]
        assert slot["start_time"] == "14:00"
        assert slot["end_time"] == "00:00"
        assert activity["name"] == response.json()["data"]["name"]

    def test_unavailable_dates(self, client):
        activity = make_activity(client, [5])
        url = f"{API}/activities/{activity['id']}/unavailable-dates"

        assert client.post(url, json={"date": DAY}).status_code == 201
        assert client.post(url, json={"date": DAY}).status_code == 409
        body = client.get(url).json()["data"]
        assert body == {"activity_id": activity["id"], "unavailable_dates": [DAY]}

        availability = client.get(f"{API}/activities/{activity['id']}/availability", params={"date": DAY}).json()
        assert availability["data"]["slots"] == []

        assert client.delete(url, params={"date": DAY}).json()["data"]["unavailable_dates"] == []
        assert client.delete(url, params={"date": DAY}).status_code == 404

    def test_delete_keeps_bookings(self, client):
        activity = make_activity(client, [5])
        booking = make_booking(client, activity, 2).json()["data"]

        assert client.delete(f"{API}/activities/{activity['id']}").status_code == 200
        assert client.get(f"{API}/activities/{activity['id']}").status_code == 404
        assert client.get(f"{API}/bookings/{booking['id']}").status_code == 200
