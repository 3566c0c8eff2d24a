"""
Top‑level package for the Activity Booking API.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
