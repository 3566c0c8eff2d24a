"""
Error taxonomy shared by services and endpoints.

Services raise subclasses of ``ServiceError`` (itself a ``ValueError``)
when an operation cannot proceed.  Endpoints catch them and convert
them into ``HTTPException`` via :func:`http_error`, which keeps the
mapping from outcome to status code in a single place.  The exception
handlers installed in ``main.py`` then render every failure in the
``{"success": false, "error": ...}`` envelope.
"""

from typing import Any, List, Optional

from fastapi import HTTPException, status


class ServiceError(ValueError):
    """Base class for expected, client-facing failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, details: Optional[List[Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(ServiceError):
    """Malformed value that slipped past schema validation (bad date, etc.)."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """The operation clashes with existing state (duplicate email, full slot)."""

    status_code = status.HTTP_409_CONFLICT


class PreconditionError(ServiceError):
    """The entity exists but is not in a state that allows the operation."""

    status_code = status.HTTP_400_BAD_REQUEST


class EnvelopeHTTPException(HTTPException):
    """``HTTPException`` that also carries a validation ``details`` list."""

    def __init__(self, status_code: int, detail: str, details: Optional[List[Any]] = None) -> None:
        super().__init__(status_code=status_code, detail=detail)
        self.details = details


def http_error(exc: ServiceError) -> HTTPException:
    """Translate a service failure into the matching ``HTTPException``."""
    return EnvelopeHTTPException(status_code=exc.status_code, detail=exc.message, details=exc.details)
