"""Activity booking API client.

This module defines a small synchronous client for the activity booking
administration API.  It is meant for scripts and back‑office tools that
need to manage agencies, staff, activities and bookings without going
through the web interface.  The client uses the ``requests`` library
internally.

Every call returns a tuple ``(data, error)``:

* on success ``data`` is the ``data`` member of the response envelope
  (or a :class:`ListResult` for list calls) and ``error`` is ``None``;
* on failure ``data`` is ``None`` and ``error`` is a dictionary with the
  keys ``status_code`` and ``message``.  ``message`` is taken from the
  envelope's ``error`` field; transport failures have a ``status_code``
  of ``None``.

Resources are addressed by their URL segment, see :data:`RESOURCES`::

    client = ActivityBookingClient(base_url="http://localhost:8000")
    page, error = client.list("bookings", status="confirmed", limit=20)
    availability, error = client.get_availability(activity_id, "2024-06-01", participants=2)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

RESOURCES = (
    "agencies",
    "agents",
    "activity-staff",
    "activities",
    "bookings",
    "agency-unavailable-schedules",
)

# Resources that expose an ``/unavailable-dates`` sub-resource.
DATED_RESOURCES = ("activities", "activity-staff")

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


@dataclass
class ListResult:
    """One page of a list endpoint.

    Attributes:
        items: Records on this page.
        pagination: ``page``, ``limit``, ``total`` and ``totalPages``.
    """

    items: List[Dict[str, Any]] = field(default_factory=list)
    pagination: Dict[str, Any] = field(default_factory=dict)


class ActivityBookingClient:
    """Client for the activity booking administration API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_prefix: str = "/api/v1",
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the server, e.g. ``http://localhost:8000``.
            api_prefix: Path under which the versioned API is mounted.
            api_key: Optional API key.  If set, an ``Authorization``
                header with the value ``Bearer <api_key>`` is included in
                all requests (for deployments behind an authenticating
                proxy).
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/") + api_prefix
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request and return ``(envelope, error)``."""
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("message") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def _data(self, method: str, path: str, **kwargs: Any) -> Result:
        envelope, error = self._request(method, path, **kwargs)
        if error:
            return None, error
        if isinstance(envelope, dict):
            return envelope.get("data", envelope), None
        return envelope, None

    @staticmethod
    def _check_resource(resource: str, allowed: Tuple[str, ...] = RESOURCES) -> None:
        if resource not in allowed:
            raise ValueError(f"Unknown resource: {resource}")

    # ------------------------------------------------------------------
    # Generic CRUD
    # ------------------------------------------------------------------
    def list(self, resource: str, **params: Any) -> Result:
        """List records of ``resource``.

        Keyword arguments are passed as query parameters (``page``,
        ``limit``, ``search``, ``is_active`` and the resource's own
        filters); ``None`` values are dropped.
        """
        self._check_resource(resource)
        if isinstance(params.get("is_active"), bool):
            params["is_active"] = "true" if params["is_active"] else "false"
        envelope, error = self._request("GET", f"/{resource}", params=params)
        if error:
            return None, error
        envelope = envelope or {}
        return ListResult(items=envelope.get("data", []), pagination=envelope.get("pagination", {})), None

    def get(self, resource: str, record_id: str) -> Result:
        self._check_resource(resource)
        return self._data("GET", f"/{resource}/{record_id}")

    def create(self, resource: str, payload: Dict[str, Any]) -> Result:
        self._check_resource(resource)
        return self._data("POST", f"/{resource}", json_body=payload)

    def update(self, resource: str, record_id: str, changes: Dict[str, Any]) -> Result:
        """Partially update a record; only keys present in ``changes`` are sent."""
        self._check_resource(resource)
        return self._data("PUT", f"/{resource}/{record_id}", json_body=changes)

    def delete(self, resource: str, record_id: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        self._check_resource(resource)
        envelope, error = self._request("DELETE", f"/{resource}/{record_id}")
        if error:
            return False, error
        return bool(envelope and envelope.get("success")), None

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------
    def get_availability(self, activity_id: str, date: str, participants: Optional[int] = None) -> Result:
        """Per-slot availability of an activity on ``date``."""
        params = {"date": date, "participants": participants}
        return self._data("GET", f"/activities/{activity_id}/availability", params=params)

    def get_utilization(self, activity_id: str, start_date: str, end_date: str) -> Result:
        params = {"start_date": start_date, "end_date": end_date}
        return self._data("GET", f"/activities/{activity_id}/utilization", params=params)

    # ------------------------------------------------------------------
    # Unavailable dates (activities and activity staff)
    # ------------------------------------------------------------------
    def get_unavailable_dates(self, resource: str, record_id: str) -> Result:
        self._check_resource(resource, DATED_RESOURCES)
        return self._data("GET", f"/{resource}/{record_id}/unavailable-dates")

    def add_unavailable_date(self, resource: str, record_id: str, date: str) -> Result:
        self._check_resource(resource, DATED_RESOURCES)
        return self._data("POST", f"/{resource}/{record_id}/unavailable-dates", json_body={"date": date})

    def remove_unavailable_date(self, resource: str, record_id: str, date: str) -> Result:
        self._check_resource(resource, DATED_RESOURCES)
        return self._data("DELETE", f"/{resource}/{record_id}/unavailable-dates", params={"date": date})

    def set_unavailable_dates(self, resource: str, record_id: str, dates: List[str]) -> Result:
        self._check_resource(resource, DATED_RESOURCES)
        return self._data("PUT", f"/{resource}/{record_id}/unavailable-dates", json_body={"dates": dates})

    # ------------------------------------------------------------------
    # Booking operations
    # ------------------------------------------------------------------
    def cancel_booking(self, booking_id: str) -> Result:
        return self._data("POST", f"/bookings/{booking_id}/cancel")

    def validate_booking(self, payload: Dict[str, Any]) -> Result:
        """Dry-run a booking; a full slot comes back as a 409 error."""
        return self._data("POST", "/bookings/validate", json_body=payload)

    def get_stats(self) -> Result:
        return self._data("GET", "/stats")
