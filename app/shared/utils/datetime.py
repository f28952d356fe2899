"""UTC datetime helpers.

Deadlines, sweeps and audit timestamps are all compared as timezone-aware
UTC values. SQLite hands back naive datetimes, so repositories pass every
stored value through ensure_utc().
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalise a datetime to aware UTC.

    None stays None. Naive values are taken to already be UTC; aware values
    are converted.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def days_after(start: datetime, days: int) -> datetime:
    """Return the UTC instant `days` whole days after `start` (plan deadlines)."""
    base = ensure_utc(start)
    assert base is not None
    return base + timedelta(days=days)
