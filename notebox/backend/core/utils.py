"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import clock and identifier helpers from this module.
"""

from datetime import datetime, timezone
from uuid import uuid4


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    Used for database bookkeeping columns. Note timestamps use
    utc_now_iso() instead.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_timestamp(value: datetime) -> str:
    """
    Format a datetime as an ISO 8601 UTC string with millisecond precision.

    Naive datetimes are assumed to be UTC.

    Example:
        2023-01-01T10:00:00.000Z
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp into a timezone-aware UTC datetime.

    Accepts the trailing 'Z' designator. Naive values are assumed UTC.

    Raises:
        ValueError: If the value is not a valid ISO 8601 timestamp
    """
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def utc_now_iso() -> str:
    """Return the current instant as an ISO 8601 UTC string (ms precision)."""
    return format_timestamp(datetime.now(timezone.utc))


def generate_id() -> str:
    """Return a new collision-resistant opaque identifier (UUID4)."""
    return str(uuid4())
