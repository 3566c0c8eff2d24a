"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API starts with an empty in‑memory store and no extra setup.  In a
production deployment you should override these via environment
variables or a dedicated configuration service.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Activity Booking API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_bool("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file.  Leave empty to log to the console only.
    log_file: str = os.getenv("LOG_FILE", "")
    log_format: str = os.getenv("LOG_FORMAT", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Page size used by list endpoints that do not define their own
    # default, and the largest ``limit`` a client may request.
    default_page_limit: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "10"))
    max_page_limit: int = int(os.getenv("MAX_PAGE_LIMIT", "100"))

    # Longest inclusive date range, in days, a utilisation report covers.
    max_utilization_days: int = int(os.getenv("MAX_UTILIZATION_DAYS", "366"))

    # When enabled, creating or updating a booking that would push a slot
    # past its ``max_capacity`` is rejected with HTTP 409.  When disabled
    # the booking is stored and the overbooking is only logged and
    # reported by the availability endpoint.
    enforce_slot_capacity: bool = _env_bool("ENFORCE_SLOT_CAPACITY")

    # Populate the store with a handful of demo records at start up.
    seed_demo_data: bool = _env_bool("SEED_DEMO_DATA")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Because the dataclass
# computes values at class definition time, environment variables should
# be set before importing this module.
settings = Settings()
