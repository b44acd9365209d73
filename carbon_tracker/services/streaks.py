"""Seven-day activity streaks."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from carbon_tracker.models.activity import Activity
from carbon_tracker.services.week_window import ensure_utc

STREAK_DAYS = 7


@dataclass(frozen=True)
class StreakResult:
    days: list[dict]
    current_streak: int


def active_days(user_id: int, db: Session, since: date, until: date) -> set[date]:
    """Distinct UTC dates in [since, until] on which the user logged anything."""
    start = datetime.combine(since, time.min, tzinfo=timezone.utc)
    end = datetime.combine(until + timedelta(days=1), time.min, tzinfo=timezone.utc)
    rows = db.execute(
        select(Activity.occurred_at).where(
            Activity.user_id == user_id,
            Activity.occurred_at >= start,
            Activity.occurred_at < end,
        )
    ).scalars()
    return {ensure_utc(occurred_at).date() for occurred_at in rows}


def build_streak(days_with_activity: set[date], today: date) -> StreakResult:
    """Lay out the last seven days and count the run of active days ending today."""
    first = today - timedelta(days=STREAK_DAYS - 1)
    days = []
    for offset in range(STREAK_DAYS):
        day = first + timedelta(days=offset)
        days.append({"date": day.isoformat(), "active": day in days_with_activity})

    current = 0
    for entry in reversed(days):
        if not entry["active"]:
            break
        current += 1

    return StreakResult(days=days, current_streak=current)


def get_streak(user_id: int, db: Session, today: date | None = None) -> StreakResult:
    today = today or datetime.now(timezone.utc).date()
    since = today - timedelta(days=STREAK_DAYS - 1)
    return build_streak(active_days(user_id, db, since, today), today)
