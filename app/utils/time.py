"""Time helpers shared by services and analytics."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

RANGE_WINDOWS: dict[str, timedelta] = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
    "year": timedelta(days=365),
}


def utcnow() -> datetime:
    """Return the current timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps read back from SQLite.

    Timestamps are always written in UTC, but SQLite drops the offset, so
    values loaded from the database come back naive.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def range_start(range_name: str | None, now: datetime | None = None) -> datetime | None:
    """Return the lower bound for a week/month/year analytics window."""
    if not range_name:
        return None
    window = RANGE_WINDOWS.get(range_name)
    if window is None:
        raise ValueError(f"Unknown range: {range_name}")
    return (now or utcnow()) - window
