"""
Main entrypoint for the Activity Booking API.

This module assembles the FastAPI application, sets up logging,
creates the data store and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Importing the app here
makes it easy to run with uvicorn or another ASGI server, e.g.::

    uvicorn activity_booking_api.app.main:app --reload

Every response uses the same envelope.  Successful handlers return
``{"success": true, "data": ...}`` models themselves; the exception
handlers registered below render failures as
``{"success": false, "error": ..., "details": ...}``.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.store import MemoryDataStore
from .schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


def _error_body(message: str, details=None) -> dict:
    error = ErrorResponse(error=message, details=jsonable_encoder(details) if details is not None else None)
    return error.model_dump(exclude_none=True)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), getattr(exc, "details", None)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Validation failed", exc.errors()),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # The traceback goes to the log only; clients get a generic message.
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error"),
    )


def create_app(settings: Optional[Settings] = None, store: Optional[MemoryDataStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings:
        Configuration to use instead of the process‑wide ``settings``.
    store:
        Data store to serve.  A new, empty (or demo‑seeded, see
        ``Settings.seed_demo_data``) store is created when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so that the setup below
    # can safely log messages.  DEBUG only raises verbosity; tracebacks
    # never reach clients.
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    # Each application owns its store; endpoints reach it through the
    # ``get_store`` dependency.
    if store is None:
        store = MemoryDataStore(seed=settings.seed_demo_data)
    app.state.settings = settings
    app.state.store = store

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    logger.info(
        "%s %s ready (slot capacity %s)",
        settings.project_name,
        settings.api_version,
        "enforced" if settings.enforce_slot_capacity else "not enforced",
    )
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
