"""Timestamp helpers shared by the repositories."""
from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Current UTC time, strictly later than *previous*.
    Two mutations landing in the same clock tick get one microsecond apart.
    """
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
