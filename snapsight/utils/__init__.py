"""Utility modules for the SnapSight application."""

from .datetime_utils import utc_now, ensure_utc, parse_iso, to_iso

__all__ = [
    "utc_now",
    "ensure_utc",
    "parse_iso",
    "to_iso",
]
