"""Timestamp helpers shared by the models."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO timestamp, passing datetimes and None through."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def format_timestamp(value: datetime | None) -> str | None:
    """Format a datetime as ISO 8601, or None."""
    return value.isoformat() if value else None
