"""Weekly analysis service.

Rolls raw activities up into per-user weekly summaries. One aggregation
query is issued per run; every user in the result is then analyzed and
upserted concurrently, each independently of the others.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import Session

from carbon_tracker.services.category_analysis import analyze_categories
from carbon_tracker.services.reduction_progress import ReductionProgressCalculator
from carbon_tracker.services.store import AnalysisStore, SqlAnalysisStore, UserAggregate
from carbon_tracker.services.tips import TipSelector
from carbon_tracker.services.week_window import (
    WeekWindow,
    current_week_so_far,
    ensure_utc,
    last_completed_week,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisRunResult:
    start: datetime
    end: datetime
    processed_users: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "processed_users": self.processed_users,
        }


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeeklyAnalysisService:
    """Computes and stores weekly summaries."""

    def __init__(
        self,
        store: AnalysisStore,
        tip_selector: TipSelector | None = None,
        progress_calculator: ReductionProgressCalculator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.store = store
        self.tip_selector = tip_selector or TipSelector(store)
        self.progress_calculator = progress_calculator or ReductionProgressCalculator(store)
        self.clock = clock or _utcnow

    async def run_last_week_analysis(
        self, reference_time: datetime | None = None
    ) -> AnalysisRunResult:
        """Summarize the last completed week for every user with activity."""
        now = ensure_utc(reference_time) if reference_time is not None else self.clock()
        return await self._run(last_completed_week(now))

    async def run_current_week_analysis(
        self, user_id: int | None = None, reference_time: datetime | None = None
    ) -> AnalysisRunResult:
        """Summarize the current week so far, for one user or for everyone."""
        now = ensure_utc(reference_time) if reference_time is not None else self.clock()
        return await self._run(current_week_so_far(now), user_id=user_id)

    async def _run(self, window: WeekWindow, user_id: int | None = None) -> AnalysisRunResult:
        scope = f"user {user_id}" if user_id is not None else "all users"
        logger.info(
            f"Starting weekly analysis for {scope}: "
            f"{window.start.isoformat()} to {window.end.isoformat()}"
        )

        # A failing aggregation query aborts the whole run
        aggregates = await self.store.query_activity_aggregates(window, user_id)

        generated_at = self.clock()
        outcomes = await asyncio.gather(
            *(self._process_user(aggregate, window, generated_at) for aggregate in aggregates),
            return_exceptions=True,
        )

        failed = 0
        for aggregate, outcome in zip(aggregates, outcomes):
            if isinstance(outcome, BaseException):
                failed += 1
                logger.error(
                    f"Failed to write weekly summary for user {aggregate.user_id}: {outcome}"
                )

        logger.info(
            f"Completed weekly analysis for {scope}: "
            f"{len(aggregates) - failed}/{len(aggregates)} summaries written"
        )
        return AnalysisRunResult(start=window.start, end=window.end, processed_users=len(aggregates))

    async def _process_user(
        self, aggregate: UserAggregate, window: WeekWindow, generated_at: datetime
    ) -> None:
        user_id = aggregate.user_id
        totals = {entry.category: entry.total for entry in aggregate.by_category}
        counts = {entry.category: entry.count for entry in aggregate.by_category}

        categories = analyze_categories(totals, counts)

        progress = await self.progress_calculator.calculate(
            user_id, aggregate.total_value, window.start
        )

        tip = None
        if categories.highest is not None:
            try:
                tip = await self.tip_selector.select(
                    user_id, categories.highest.category, window, progress
                )
            except Exception as e:
                logger.warning(f"Could not select a tip for user {user_id}: {e}")

        fields = {
            "week_end": window.end,
            "total_value": aggregate.total_value,
            "activities_count": aggregate.activities_count,
            "by_category_totals": totals,
            "by_category_counts": counts,
            "highest_emission_category": (
                categories.highest.to_dict() if categories.highest else None
            ),
            "lowest_emission_category": (
                categories.lowest.to_dict() if categories.lowest else None
            ),
            "personalized_tip": tip.to_dict() if tip else None,
            "reduction_target": progress.to_dict() if progress else None,
            "generated_at": generated_at,
        }
        await self.store.upsert_summary(user_id, window.start, fields)


def get_weekly_analysis_service(
    session_factory: Callable[[], Session] | None = None,
) -> WeeklyAnalysisService:
    """Build an analysis service over the SQL store."""
    if session_factory is None:
        from carbon_tracker.database import SessionLocal

        session_factory = SessionLocal
    return WeeklyAnalysisService(SqlAnalysisStore(session_factory))
