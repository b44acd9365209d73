"""Weekly summary API endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from carbon_tracker.api.dependencies import get_analysis_service
from carbon_tracker.database import get_db
from carbon_tracker.exceptions import NotFoundError
from carbon_tracker.models.weekly_summary import WeeklySummary as SummaryModel
from carbon_tracker.schemas.summary import AnalysisRun, WeeklySummary
from carbon_tracker.services.store import summary_to_dict
from carbon_tracker.services.week_window import ensure_utc, week_start_for
from carbon_tracker.services.weekly_analysis import WeeklyAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/summaries", tags=["summaries"])


def _find_summary(db: Session, user_id: int, week_start: datetime) -> dict | None:
    summary = (
        db.query(SummaryModel)
        .filter(SummaryModel.user_id == user_id, SummaryModel.week_start == week_start)
        .first()
    )
    return summary_to_dict(summary) if summary else None


@router.get("/current", response_model=WeeklySummary)
def get_current_summary(
    user_id: int = Query(..., description="User ID to fetch the summary for"),
    db: Session = Depends(get_db),
) -> dict:
    """Get the stored summary for the current week.

    The current week summary is refreshed on login; it does not exist until
    the user has logged an activity this week and signed in.
    """
    week_start = week_start_for(datetime.now(timezone.utc))
    summary = _find_summary(db, user_id, week_start)
    if summary is None:
        raise NotFoundError(
            "No summary exists for the current week. Try logging in again to generate it."
        )
    return summary


@router.post("/refresh", response_model=AnalysisRun)
async def refresh_current_week(
    user_id: int | None = Query(None, description="Restrict the refresh to one user"),
    analysis: WeeklyAnalysisService = Depends(get_analysis_service),
) -> dict:
    """Recompute current week summaries now."""
    try:
        result = await analysis.run_current_week_analysis(user_id)
    except Exception as e:
        logger.error(f"Current week refresh failed (user={user_id}): {e}")
        raise HTTPException(status_code=500, detail="Weekly analysis failed") from e
    return result.to_dict()


@router.get("/{week_start}", response_model=WeeklySummary)
def get_summary_for_week(
    week_start: str,
    user_id: int = Query(..., description="User ID to fetch the summary for"),
    db: Session = Depends(get_db),
) -> dict:
    """Get the summary for the week starting at ``week_start`` (YYYY-MM-DD)."""
    try:
        start = ensure_utc(datetime.fromisoformat(week_start))
    except ValueError:
        raise HTTPException(
            status_code=400, detail="Week start date must be in ISO format (YYYY-MM-DD)."
        ) from None

    summary = _find_summary(db, user_id, start)
    if summary is None:
        raise NotFoundError("No summary exists for the specified week.")
    return summary
