"""Activity API endpoints."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from carbon_tracker.data.catalog import catalog_as_dict, emission_value, parse_category
from carbon_tracker.database import get_db
from carbon_tracker.models.activity import Activity as ActivityModel
from carbon_tracker.models.user import User as UserModel
from carbon_tracker.schemas.activity import Activity, ActivityCreate
from carbon_tracker.services.week_window import ensure_utc
from carbon_tracker.tasks.notification_tasks import send_tip_for_activity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/activities", tags=["activities"])


@router.get("/catalog")
def get_catalog() -> dict[str, dict[str, float]]:
    """List every loggable activity with its emission value (kg CO2e)."""
    return catalog_as_dict()


@router.post("/", response_model=Activity, status_code=201)
def log_activity(activity: ActivityCreate, db: Session = Depends(get_db)) -> ActivityModel:
    """Log an activity.

    The emission value is filled in from the catalog; an unknown category or
    an activity outside its category is rejected. A tip for the activity is
    pushed to the user in the background.
    """
    user = db.query(UserModel).filter(UserModel.id == activity.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    category = parse_category(activity.category)
    value = emission_value(category, activity.activity)

    occurred_at = ensure_utc(activity.occurred_at or datetime.now(timezone.utc))

    db_activity = ActivityModel(
        user_id=activity.user_id,
        category=category.value,
        activity=activity.activity,
        value=value,
        occurred_at=occurred_at,
    )
    db.add(db_activity)
    db.commit()
    db.refresh(db_activity)

    try:
        send_tip_for_activity.delay(activity.user_id, category.value, activity.activity)
    except Exception as e:
        logger.warning(f"Could not queue tip notification for user {activity.user_id}: {e}")

    return db_activity


@router.get("/", response_model=list[Activity])
def list_activities(
    user_id: int = Query(..., description="User ID to list activities for"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
) -> list[ActivityModel]:
    """List a user's activities, newest first."""
    return (
        db.query(ActivityModel)
        .filter(ActivityModel.user_id == user_id)
        .order_by(ActivityModel.occurred_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


@router.delete("/{activity_id}", status_code=204)
def delete_activity(
    activity_id: int,
    user_id: int = Query(..., description="Owner of the activity"),
    db: Session = Depends(get_db),
) -> None:
    """Delete a single activity."""
    activity = (
        db.query(ActivityModel)
        .filter(ActivityModel.id == activity_id, ActivityModel.user_id == user_id)
        .first()
    )
    if not activity:
        raise HTTPException(status_code=404, detail="Activity not found")

    db.delete(activity)
    db.commit()


@router.delete("/", status_code=204)
def delete_all_activities(
    user_id: int = Query(..., description="User whose activities to delete"),
    db: Session = Depends(get_db),
) -> None:
    """Delete all of a user's activities."""
    db.query(ActivityModel).filter(ActivityModel.user_id == user_id).delete()
    db.commit()
