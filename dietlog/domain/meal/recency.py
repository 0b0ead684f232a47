"""
Relative time labels.

Single implementation used by both the dashboard and the log listing.
`now` is always passed in, never read from the clock here.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo

MINUTE = timedelta(minutes=1)
HOUR = timedelta(hours=1)
DAY = timedelta(days=1)
WEEK = timedelta(days=7)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"


def format_absolute_date(timestamp: datetime, tz: tzinfo = timezone.utc) -> str:
    """US locale short date, e.g. '1/15/2024'."""
    local = timestamp.astimezone(tz)
    return f"{local.month}/{local.day}/{local.year}"


def format_recency(timestamp: datetime, now: datetime, tz: tzinfo = timezone.utc) -> str:
    """Map a timestamp to a recency label relative to `now`.

    Buckets, first match wins: under a minute is 'just now', then whole
    minutes, hours and days; a week or older shows the absolute date.
    Naive datetimes are taken as UTC.

    Example:
        >>> now = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        >>> format_recency(now - timedelta(minutes=45), now)
        '45 minutes ago'
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    elapsed = now - timestamp

    if elapsed < MINUTE:
        return "just now"
    if elapsed < HOUR:
        return _plural(elapsed // MINUTE, "minute")
    if elapsed < DAY:
        return _plural(elapsed // HOUR, "hour")
    if elapsed < WEEK:
        return _plural(elapsed // DAY, "day")
    return format_absolute_date(timestamp, tz)


__all__ = ["format_absolute_date", "format_recency"]
