"""
Logging set-up driven by :class:`~.config.Settings`.

``setup_logging`` attaches a console handler, plus a file handler when
``Settings.log_file`` is set, to the root logger.  ``DEBUG=true``
forces the ``DEBUG`` level regardless of ``LOG_LEVEL``.  The root
logger is configured once per process; later calls (another
``create_app`` in the test suite, for instance) only adjust the level.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(settings: Settings) -> int:
    """Numeric level for ``settings``; unknown names fall back to INFO."""
    if settings.debug:
        return logging.DEBUG
    level = logging.getLevelName(settings.log_level.upper())
    return level if isinstance(level, int) else logging.INFO


def _handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))
    return handlers


def setup_logging(settings: Settings) -> None:
    root = logging.getLogger()
    root.setLevel(resolve_level(settings))
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=settings.log_format, datefmt=DATE_FORMAT)
    for handler in _handlers(settings):
        handler.setFormatter(formatter)
        root.addHandler(handler)
