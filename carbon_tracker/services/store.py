"""Storage access used by the weekly analysis engine.

``AnalysisStore`` is everything the analysis needs from persistence. The
SQLAlchemy implementation opens a short-lived session per call and runs it
on a worker thread, so awaiting a store call never blocks the event loop.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from carbon_tracker.models.activity import Activity
from carbon_tracker.models.mixins import utcnow
from carbon_tracker.models.reduction_target import ReductionTarget
from carbon_tracker.models.weekly_summary import WeeklySummary
from carbon_tracker.services.week_window import WeekWindow, ensure_utc

logger = logging.getLogger(__name__)

SUMMARY_FIELDS = (
    "week_end",
    "total_value",
    "activities_count",
    "by_category_totals",
    "by_category_counts",
    "highest_emission_category",
    "lowest_emission_category",
    "personalized_tip",
    "reduction_target",
    "generated_at",
)


@dataclass(frozen=True)
class CategoryAggregate:
    category: str
    total: float
    count: int


@dataclass
class UserAggregate:
    """One user's activities in a window, grouped by category."""

    user_id: int
    by_category: list[CategoryAggregate] = field(default_factory=list)
    total_value: float = 0.0
    activities_count: int = 0


@dataclass(frozen=True)
class ActivityRecord:
    id: int
    user_id: int
    category: str
    activity: str
    value: float
    occurred_at: datetime


@dataclass(frozen=True)
class TargetRecord:
    user_id: int
    target_period: str
    target_type: str
    target_value: float


class AnalysisStore(Protocol):
    """Persistence operations consumed by the weekly analysis."""

    async def query_activity_aggregates(
        self, window: WeekWindow, user_id: int | None = None
    ) -> list[UserAggregate]: ...

    async def find_top_activity(
        self, user_id: int, category: str, window: WeekWindow
    ) -> ActivityRecord | None: ...

    async def get_active_target(self, user_id: int, period: str) -> TargetRecord | None: ...

    async def get_summary(self, user_id: int, week_start: datetime) -> dict[str, Any] | None: ...

    async def upsert_summary(
        self, user_id: int, week_start: datetime, fields: dict[str, Any]
    ) -> None: ...


def summary_to_dict(summary: WeeklySummary) -> dict[str, Any]:
    """Convert a weekly summary row to a plain document."""
    return {
        "user_id": summary.user_id,
        "week_start": ensure_utc(summary.week_start),
        "week_end": ensure_utc(summary.week_end),
        "total_value": summary.total_value,
        "activities_count": summary.activities_count,
        "by_category_totals": dict(summary.by_category_totals or {}),
        "by_category_counts": dict(summary.by_category_counts or {}),
        "highest_emission_category": summary.highest_emission_category,
        "lowest_emission_category": summary.lowest_emission_category,
        "personalized_tip": summary.personalized_tip,
        "reduction_target": summary.reduction_target,
        "generated_at": ensure_utc(summary.generated_at),
    }


def group_aggregate_rows(rows: list[tuple[int, str, float, int]]) -> list[UserAggregate]:
    """Regroup (user_id, category, total, count) rows by user, keeping row order."""
    by_user: dict[int, UserAggregate] = {}
    for user_id, category, total, count in rows:
        aggregate = by_user.setdefault(user_id, UserAggregate(user_id=user_id))
        aggregate.by_category.append(
            CategoryAggregate(category=category, total=float(total or 0.0), count=int(count))
        )
        aggregate.total_value += float(total or 0.0)
        aggregate.activities_count += int(count)
    return list(by_user.values())


class SqlAnalysisStore:
    """AnalysisStore backed by SQLAlchemy sessions."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def query_activity_aggregates(
        self, window: WeekWindow, user_id: int | None = None
    ) -> list[UserAggregate]:
        return await asyncio.to_thread(self._query_activity_aggregates, window, user_id)

    async def find_top_activity(
        self, user_id: int, category: str, window: WeekWindow
    ) -> ActivityRecord | None:
        return await asyncio.to_thread(self._find_top_activity, user_id, category, window)

    async def get_active_target(self, user_id: int, period: str) -> TargetRecord | None:
        return await asyncio.to_thread(self._get_active_target, user_id, period)

    async def get_summary(self, user_id: int, week_start: datetime) -> dict[str, Any] | None:
        return await asyncio.to_thread(self._get_summary, user_id, week_start)

    async def upsert_summary(
        self, user_id: int, week_start: datetime, fields: dict[str, Any]
    ) -> None:
        await asyncio.to_thread(self._upsert_summary, user_id, week_start, fields)

    def _query_activity_aggregates(
        self, window: WeekWindow, user_id: int | None
    ) -> list[UserAggregate]:
        stmt = (
            select(
                Activity.user_id,
                Activity.category,
                func.sum(Activity.value),
                func.count(Activity.id),
            )
            .where(Activity.occurred_at >= window.start, Activity.occurred_at < window.end)
            .group_by(Activity.user_id, Activity.category)
            .order_by(Activity.user_id, Activity.category)
        )
        if user_id is not None:
            stmt = stmt.where(Activity.user_id == user_id)

        with self.session_factory() as db:
            rows = [tuple(row) for row in db.execute(stmt).all()]
        return group_aggregate_rows(rows)

    def _find_top_activity(
        self, user_id: int, category: str, window: WeekWindow
    ) -> ActivityRecord | None:
        stmt = (
            select(Activity)
            .where(
                Activity.user_id == user_id,
                Activity.category == category,
                Activity.occurred_at >= window.start,
                Activity.occurred_at < window.end,
            )
            .order_by(Activity.value.desc(), Activity.id.asc())
            .limit(1)
        )
        with self.session_factory() as db:
            activity = db.execute(stmt).scalar_one_or_none()
            if activity is None:
                return None
            return ActivityRecord(
                id=activity.id,
                user_id=activity.user_id,
                category=activity.category,
                activity=activity.activity,
                value=activity.value,
                occurred_at=ensure_utc(activity.occurred_at),
            )

    def _get_active_target(self, user_id: int, period: str) -> TargetRecord | None:
        stmt = select(ReductionTarget).where(
            ReductionTarget.user_id == user_id,
            ReductionTarget.target_period == period,
            ReductionTarget.is_active.is_(True),
        )
        with self.session_factory() as db:
            target = db.execute(stmt).scalars().first()
            if target is None:
                return None
            return TargetRecord(
                user_id=target.user_id,
                target_period=target.target_period,
                target_type=target.target_type,
                target_value=target.target_value,
            )

    def _get_summary(self, user_id: int, week_start: datetime) -> dict[str, Any] | None:
        stmt = select(WeeklySummary).where(
            WeeklySummary.user_id == user_id,
            WeeklySummary.week_start == week_start,
        )
        with self.session_factory() as db:
            summary = db.execute(stmt).scalar_one_or_none()
            return summary_to_dict(summary) if summary is not None else None

    def _upsert_summary(self, user_id: int, week_start: datetime, fields: dict[str, Any]) -> None:
        values = {name: fields[name] for name in SUMMARY_FIELDS}
        values["updated_at"] = utcnow()

        with self.session_factory() as db:
            dialect = db.get_bind().dialect.name
            if dialect in ("postgresql", "sqlite"):
                if dialect == "postgresql":
                    from sqlalchemy.dialects.postgresql import insert
                else:
                    from sqlalchemy.dialects.sqlite import insert

                stmt = insert(WeeklySummary).values(user_id=user_id, week_start=week_start, **values)
                stmt = stmt.on_conflict_do_update(
                    index_elements=["user_id", "week_start"],
                    set_={name: stmt.excluded[name] for name in values},
                )
                db.execute(stmt)
            else:
                existing = db.execute(
                    select(WeeklySummary).where(
                        WeeklySummary.user_id == user_id,
                        WeeklySummary.week_start == week_start,
                    )
                ).scalar_one_or_none()
                if existing is None:
                    db.add(WeeklySummary(user_id=user_id, week_start=week_start, **values))
                else:
                    for name, value in values.items():
                        setattr(existing, name, value)
            db.commit()

        logger.debug(f"Upserted weekly summary for user {user_id} week {week_start.isoformat()}")
