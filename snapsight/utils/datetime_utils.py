"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the application.
Everything is kept in UTC: MongoDB stores BSON dates as UTC and the API
serializes timestamps as ISO 8601 strings with a "Z" suffix.

Functions:
- utc_now(): Returns timezone-aware UTC datetime
- ensure_utc(): Normalize naive/aware datetimes to UTC
- to_iso(): Convert datetime object to ISO 8601 string
- parse_iso(): Safely parse ISO 8601 string to datetime
"""
from datetime import datetime, timezone as dt_timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    Naive datetimes are treated as UTC.
    
    Args:
        dt: datetime object (timezone-aware or naive)
    
    Returns:
        ISO 8601 formatted string with millisecond precision
        (e.g., "2025-12-24T10:30:00.123Z"), or None if dt is None
    """
    if dt is None:
        return None
    
    dt = ensure_utc(dt)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to a UTC datetime object.
    
    Args:
        dt_str: ISO 8601 string (e.g., "2025-12-24T10:30:00Z" or "2025-12-24T10:30:00+05:30")
    
    Returns:
        timezone-aware UTC datetime object, or None if parsing fails
    """
    if not dt_str:
        return None
    
    try:
        # Replace 'Z' with '+00:00' for parsing
        normalized = dt_str.replace("Z", "+00:00")
        return ensure_utc(datetime.fromisoformat(normalized))
    except (TypeError, ValueError):
        return None
