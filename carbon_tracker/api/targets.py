"""Reduction target API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from carbon_tracker.database import get_db
from carbon_tracker.models.reduction_target import ReductionTarget as TargetModel
from carbon_tracker.models.reduction_target import TargetPeriod, TargetType
from carbon_tracker.models.user import User as UserModel
from carbon_tracker.schemas.reduction_target import (
    ReductionTarget,
    ReductionTargetCreate,
    ReductionTargetUpdate,
)

router = APIRouter(prefix="/api/v1/targets", tags=["targets"])


def _deactivate_active_targets(
    db: Session, user_id: int, period: str, keep_id: int | None = None
) -> None:
    """Deactivate the user's active target for a period, except ``keep_id``."""
    query = db.query(TargetModel).filter(
        TargetModel.user_id == user_id,
        TargetModel.target_period == period,
        TargetModel.is_active.is_(True),
    )
    if keep_id is not None:
        query = query.filter(TargetModel.id != keep_id)
    for target in query.all():
        target.is_active = False
    db.flush()


@router.get("/", response_model=ReductionTarget)
def get_active_target(
    user_id: int = Query(..., description="User ID"),
    period: TargetPeriod = TargetPeriod.WEEKLY,
    db: Session = Depends(get_db),
) -> TargetModel:
    """Get the user's active reduction target for a period."""
    target = (
        db.query(TargetModel)
        .filter(
            TargetModel.user_id == user_id,
            TargetModel.target_period == period.value,
            TargetModel.is_active.is_(True),
        )
        .first()
    )
    if not target:
        raise HTTPException(status_code=404, detail="No active reduction target found")
    return target


@router.get("/history", response_model=list[ReductionTarget])
def get_target_history(
    user_id: int = Query(..., description="User ID"),
    period: TargetPeriod = TargetPeriod.WEEKLY,
    db: Session = Depends(get_db),
) -> list[TargetModel]:
    """List all of the user's targets for a period, including inactive ones."""
    return (
        db.query(TargetModel)
        .filter(TargetModel.user_id == user_id, TargetModel.target_period == period.value)
        .order_by(TargetModel.created_at.desc(), TargetModel.id.desc())
        .all()
    )


@router.post("/", response_model=ReductionTarget, status_code=201)
def create_target(target: ReductionTargetCreate, db: Session = Depends(get_db)) -> TargetModel:
    """Create a target, replacing any active target for the same period."""
    user = db.query(UserModel).filter(UserModel.id == target.user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    _deactivate_active_targets(db, target.user_id, target.target_period.value)

    db_target = TargetModel(
        user_id=target.user_id,
        target_type=target.target_type.value,
        target_value=target.target_value,
        description=target.description,
        target_period=target.target_period.value,
        categories=[category.value for category in target.categories],
        is_active=True,
    )
    db.add(db_target)
    db.commit()
    db.refresh(db_target)
    return db_target


@router.patch("/{target_id}", response_model=ReductionTarget)
def update_target(
    target_id: int,
    target_update: ReductionTargetUpdate,
    user_id: int = Query(..., description="Owner of the target"),
    db: Session = Depends(get_db),
) -> TargetModel:
    """Update a target. Activating it deactivates the others for its period."""
    target = (
        db.query(TargetModel)
        .filter(TargetModel.id == target_id, TargetModel.user_id == user_id)
        .first()
    )
    if not target:
        raise HTTPException(status_code=404, detail="Reduction target not found")

    update_data = target_update.model_dump(exclude_unset=True)

    target_type = update_data.get("target_type") or target.target_type
    target_value = update_data.get("target_value") or target.target_value
    if target_type == TargetType.PERCENTAGE and target_value > 100:
        raise HTTPException(status_code=400, detail="Percentage target cannot exceed 100%")

    period = update_data.get("target_period") or target.target_period
    if update_data.get("is_active") is True or (target.is_active and "target_period" in update_data):
        _deactivate_active_targets(db, user_id, TargetPeriod(period).value, keep_id=target.id)

    for field, value in update_data.items():
        if field == "categories" and value is not None:
            value = [category.value for category in value]
        elif isinstance(value, (TargetType, TargetPeriod)):
            value = value.value
        setattr(target, field, value)

    db.commit()
    db.refresh(target)
    return target


@router.delete("/{target_id}", status_code=204)
def deactivate_target(
    target_id: int,
    user_id: int = Query(..., description="Owner of the target"),
    db: Session = Depends(get_db),
) -> None:
    """Deactivate a target. Targets are kept for history, never deleted."""
    target = (
        db.query(TargetModel)
        .filter(TargetModel.id == target_id, TargetModel.user_id == user_id)
        .first()
    )
    if not target:
        raise HTTPException(status_code=404, detail="Reduction target not found")

    target.is_active = False
    db.commit()
