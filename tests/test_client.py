"""Tests for the requests-based API client, using a stub session."""

import json

import pytest
import requests

from activity_booking_client import ActivityBookingClient, ListResult


class StubResponse:

    def __init__(self, status_code, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else (json.dumps(body) if body is not None else "")
        self.content = self.text.encode()

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class StubSession:
    """Records requests and replays queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_client(*responses, **kwargs):
    session = StubSession(*responses)
    return ActivityBookingClient(base_url="http://api.test/", session=session, **kwargs), session


class TestClientRequests:

    def test_list_returns_items_and_pagination(self):
        pagination = {"page": 1, "limit": 10, "total": 1, "totalPages": 1}
        client, session = make_client(StubResponse(200, {"success": True, "data": [{"id": "a"}], "pagination": pagination}))

        result, error = client.list("agencies", search="reef", is_active=True, page=None)

        assert error is None
        assert result == ListResult(items=[{"id": "a"}], pagination=pagination)
        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "http://api.test/api/v1/agencies"
        assert call["params"] == {"search": "reef", "is_active": "true"}

    def test_get_unwraps_envelope(self):
        client, session = make_client(StubResponse(200, {"success": True, "data": {"id": "b1", "status": "pending"}}))

        data, error = client.get("bookings", "b1")

        assert error is None
        assert data == {"id": "b1", "status": "pending"}

    def test_api_key_header(self):
        client, session = make_client(StubResponse(200, {"success": True, "data": {}}), api_key="secret")

        client.get_stats()

        assert session.calls[0]["headers"] == {"Authorization": "Bearer secret"}

    def test_error_message_from_envelope(self):
        client, _ = make_client(StubResponse(409, {"success": False, "error": "Agent with this email already exists"}))

        data, error = client.create("agents", {"name": "Mina", "email": "mina@example.com"})

        assert data is None
        assert error == {"status_code": 409, "message": "Agent with this email already exists"}

    def test_non_json_error_body(self):
        client, _ = make_client(StubResponse(502, text="Bad gateway"))

        _, error = client.get("agencies", "a1")

        assert error == {"status_code": 502, "message": "Bad gateway"}

    def test_transport_failure(self):
        client, _ = make_client(requests.ConnectionError("connection refused"))

        data, error = client.get_availability("act-1", "2024-06-01", participants=2)

        assert data is None
        assert error["status_code"] is None
        assert "connection refused" in error["message"]

    def test_availability_params(self):
        client, session = make_client(StubResponse(200, {"success": True, "data": {"slots": []}}))

        client.get_availability("act-1", "2024-06-01")

        assert session.calls[0]["url"].endswith("/activities/act-1/availability")
        assert session.calls[0]["params"] == {"date": "2024-06-01"}

    def test_delete_and_booking_actions(self):
        client, session = make_client(
            StubResponse(200, {"success": True, "message": "Booking deleted successfully"}),
            StubResponse(200, {"success": True, "data": {"status": "cancelled"}}),
            StubResponse(201, {"success": True, "data": {"unavailable_dates": ["2024-06-01"]}}),
        )

        assert client.delete("bookings", "b1") == (True, None)
        assert client.cancel_booking("b2") == ({"status": "cancelled"}, None)
        data, _ = client.add_unavailable_date("activity-staff", "s1", "2024-06-01")

        assert data == {"unavailable_dates": ["2024-06-01"]}
        assert [call["method"] for call in session.calls] == ["DELETE", "POST", "POST"]
        assert session.calls[2]["json"] == {"date": "2024-06-01"}

    def test_unknown_resource(self):
        client, _ = make_client()

        with pytest.raises(ValueError):
            client.list("events")
        with pytest.raises(ValueError):
            client.get_unavailable_dates("agents", "a1")
