"""
Time helpers for price samples.

Quote payloads carry no timestamp, so samples are stamped with wall-clock
UTC time at the moment the quote is applied.
"""

from datetime import datetime, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_epoch_ms(ts: datetime) -> int:
    """
    Convert a datetime to integer milliseconds since the epoch.

    Naive datetimes are treated as UTC.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return int(ts.timestamp() * 1000)


def format_timestamp(ts: Optional[datetime] = None) -> str:
    """Format a timestamp the way chart tooltips show it."""
    if ts is None:
        ts = now_utc()
    return ts.strftime("%Y-%m-%d %H:%M:%S")
