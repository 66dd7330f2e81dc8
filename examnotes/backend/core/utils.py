"""
Core Utilities.

Shared helpers used by the server and the local store.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    Used for durations and response metadata, where the UTC assumption
    is implicit.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_timestamp() -> str:
    """
    Return the current instant as an ISO 8601 UTC string.

    Millisecond precision with a trailing "Z", e.g. "2025-01-05T09:30:00.123Z".
    Strings in this form sort chronologically.
    """
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse a timestamp produced by utc_timestamp() into an aware datetime."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
