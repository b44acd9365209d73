"""Week window calculation.

Weeks run Monday 00:00:00 UTC to the next Monday 00:00:00 UTC, half-open.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

WEEK = timedelta(days=7)


@dataclass(frozen=True)
class WeekWindow:
    """Half-open time range [start, end)."""

    start: datetime
    end: datetime


def ensure_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def week_start_for(now: datetime) -> datetime:
    """Monday 00:00:00 UTC on or before ``now``."""
    now = ensure_utc(now)
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight - timedelta(days=now.weekday())


def last_completed_week(now: datetime) -> WeekWindow:
    """The most recent full week that ended at or before ``now``."""
    end = week_start_for(now)
    return WeekWindow(start=end - WEEK, end=end)


def current_week_so_far(now: datetime) -> WeekWindow:
    """From this week's Monday up to ``now``."""
    now = ensure_utc(now)
    return WeekWindow(start=week_start_for(now), end=now)
