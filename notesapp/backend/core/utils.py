"""
Core Utilities.

Small helpers shared by the backend and the client layer.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Current UTC time, timezone-naive.

    Timestamps are stored naive and read as UTC, so SQLite and other
    backends round-trip them identically.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def elapsed_ms(start: datetime) -> int:
    """Whole milliseconds since `start` (a utc_now() value)."""
    return int((utc_now() - start).total_seconds() * 1000)


def empty_to_none(value: str | None) -> str | None:
    """Note titles and content are stored as NULL rather than ''."""
    return value or None
