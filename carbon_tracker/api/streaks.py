"""Streak API endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from carbon_tracker.database import get_db
from carbon_tracker.schemas.summary import Streak
from carbon_tracker.services.streaks import get_streak

router = APIRouter(prefix="/api/v1/streaks", tags=["streaks"])


@router.get("/", response_model=Streak)
def get_user_streak(
    user_id: int = Query(..., description="User ID"),
    db: Session = Depends(get_db),
) -> dict:
    """Get which of the last seven days had activity, and the current streak."""
    result = get_streak(user_id, db)
    return {"streak": result.days, "current_streak": result.current_streak}
