"""Tests for agents, activity staff and their shared email namespace."""

import pytest

from conftest import API, create, person


class TestEmailUniqueness:

    @pytest.mark.parametrize(
        "first, second",
        [("agents", "activity-staff"), ("activity-staff", "agents"), ("agents", "agents")],
    )
    def test_second_create_conflicts(self, client, first, second):
        create(client, first, person(email="shared@example.com"))

        response = client.post(f"{API}/{second}", json=person(name="Other", email="shared@example.com"))

        assert response.status_code == 409
        assert response.json()["success"] is False
        assert "email already exists" in response.json()["error"]

    def test_matching_is_case_sensitive(self, client):
        create(client, "agents", person(email="Mina@example.com"))

        response = client.post(f"{API}/activity-staff", json=person(email="mina@example.com"))

        assert response.status_code == 201

    def test_update_to_taken_email(self, client):
        create(client, "activity-staff", person(email="taken@example.com"))
        agent = create(client, "agents", person(name="Jo", email="jo@example.com"))

        response = client.put(f"{API}/agents/{agent['id']}", json={"email": "taken@example.com"})

        assert response.status_code == 409

    def test_update_keeping_own_email(self, client):
        agent = create(client, "agents", person(email="jo@example.com"))

        response = client.put(f"{API}/agents/{agent['id']}", json={"email": "jo@example.com", "bio": "Hi"})

        assert response.status_code == 200
        assert response.json()["data"]["bio"] == "Hi"


class TestAgents:

    def test_defaults(self, client):
        agent = create(client, "agents", person())

        assert agent["languages"] == []
        assert agent["specialties"] == []
        assert agent["max_hours_per_day"] == 8
        assert agent["is_active"] is True

    @pytest.mark.parametrize(
        "extra",
        [{"email": "not-an-email"}, {"max_hours_per_day": 25}, {"hourly_rate": 0}, {"name": ""}],
    )
    def test_invalid_payload(self, client, extra):
        response = client.post(f"{API}/agents", json={**person(), **extra})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_partial_update(self, client):
        agent = create(client, "agents", person(phone="+1-555-0100", languages=["en"]))

        updated = client.put(f"{API}/agents/{agent['id']}", json={"is_active": False}).json()["data"]

        assert updated["is_active"] is False
        assert updated["phone"] == "+1-555-0100"
        assert updated["languages"] == ["en"]

    def test_clearing_agency(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures"})
        agent = create(client, "agents", person(agency_id=agency["id"], bio="Guide"))

        updated = client.put(f"{API}/agents/{agent['id']}", json={"agency_id": None}).json()["data"]

        assert updated["agency_id"] is None
        assert updated["bio"] == "Guide"
        assert client.get(f"{API}/agents", params={"agency_id": agency["id"]}).json()["data"] == []

    @pytest.mark.parametrize("field", ["name", "email", "languages", "max_hours_per_day", "is_active"])
    def test_required_fields_cannot_be_nulled(self, client, field):
        agent = create(client, "agents", person())

        response = client.put(f"{API}/agents/{agent['id']}", json={field: None})

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_list_filters(self, client):
        agency = create(client, "agencies", {"name": "Island Adventures"})
        create(client, "agents", person(name="Mina Park", email="mina@example.com", agency_id=agency["id"]))
        create(client, "agents", person(name="Jo Kim", email="jo@example.com", bio="Speaks Korean"))

        by_agency = client.get(f"{API}/agents", params={"agency_id": agency["id"]}).json()["data"]
        by_bio = client.get(f"{API}/agents", params={"search": "korean"}).json()["data"]

        assert [a["name"] for a in by_agency] == ["Mina Park"]
        assert [a["name"] for a in by_bio] == ["Jo Kim"]

    def test_not_found(self, client):
        assert client.get(f"{API}/agents/missing").json() == {"success": False, "error": "Agent not found"}
        assert client.put(f"{API}/agents/missing", json={"bio": "x"}).status_code == 404
        assert client.delete(f"{API}/agents/missing").status_code == 404

    def test_delete(self, client):
        agent = create(client, "agents", person())

        assert client.delete(f"{API}/agents/{agent['id']}").json()["success"] is True
        assert client.get(f"{API}/agents/{agent['id']}").status_code == 404
        # The address is free again once the agent is gone.
        assert client.post(f"{API}/activity-staff", json=person()).status_code == 201


class TestStaffUnavailableDates:

    @pytest.fixture
    def staff(self, client):
        return create(client, "activity-staff", person(unavailable_dates=["2024-06-03", "2024-06-01", "2024-06-03"]))

    def url(self, staff):
        return f"{API}/activity-staff/{staff['id']}/unavailable-dates"

    def test_dates_are_sorted_and_unique(self, client, staff):
        assert staff["unavailable_dates"] == ["2024-06-01", "2024-06-03"]

        body = client.get(self.url(staff)).json()

        assert body["data"] == {"activity_staff_id": staff["id"], "unavailable_dates": ["2024-06-01", "2024-06-03"]}

    def test_add(self, client, staff):
        response = client.post(self.url(staff), json={"date": "2024-06-02"})

        assert response.status_code == 201
        assert response.json()["data"]["unavailable_dates"] == ["2024-06-01", "2024-06-02", "2024-06-03"]

    def test_add_duplicate_or_malformed(self, client, staff):
        assert client.post(self.url(staff), json={"date": "2024-06-01"}).status_code == 409
        assert client.post(self.url(staff), json={"date": "June 1st"}).status_code == 400
        assert client.post(self.url(staff), json={"date": "2024-06-02\n"}).status_code == 400
        assert client.post(self.url(staff), json={"date": "٢٠٢٤-٠٦-٠٢"}).status_code == 400
        assert client.post(self.url(staff), json={}).status_code == 400

    def test_remove(self, client, staff):
        response = client.delete(self.url(staff), params={"date": "2024-06-01"})

        assert response.status_code == 200
        assert response.json()["data"]["unavailable_dates"] == ["2024-06-03"]

    def test_remove_unlisted_or_missing_date(self, client, staff):
        assert client.delete(self.url(staff), params={"date": "2024-07-01"}).status_code == 404
        assert client.delete(self.url(staff)).json()["error"] == "Date parameter is required"
        assert client.delete(self.url(staff), params={"date": "2024-06-01\n"}).status_code == 400

    def test_replace(self, client, staff):
        response = client.put(self.url(staff), json={"dates": ["2024-08-02", "2024-08-01", "2024-08-02"]})

        assert response.json()["data"]["unavailable_dates"] == ["2024-08-01", "2024-08-02"]
        assert client.put(self.url(staff), json={"dates": ["2024-08-1"]}).status_code == 400

    def test_unknown_staff(self, client):
        url = f"{API}/activity-staff/missing/unavailable-dates"

        assert client.get(url).status_code == 404
        assert client.post(url, json={"date": "2024-06-01"}).status_code == 404
