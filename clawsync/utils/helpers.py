"""Utility functions for clawsync."""

import hashlib
from datetime import date, datetime, timedelta, timezone


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(timezone.utc)


def hash_content(content: str) -> str:
    """Generate SHA256 hash of content. Used for change detection only."""
    return hashlib.sha256(content.encode()).hexdigest()


def daily_note_dates(now: datetime | None = None) -> list[date]:
    """Return yesterday, today and tomorrow as UTC calendar dates.

    Naive datetimes are taken to already be in UTC.
    """
    current = now or now_utc()
    if current.tzinfo is not None:
        current = current.astimezone(timezone.utc)
    today = current.date()
    return [today - timedelta(days=1), today, today + timedelta(days=1)]
