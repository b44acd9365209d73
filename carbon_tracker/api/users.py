"""User API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from carbon_tracker.api.dependencies import get_analysis_service
from carbon_tracker.config import get_app_config
from carbon_tracker.database import get_db
from carbon_tracker.models.user import User as UserModel
from carbon_tracker.schemas.user import LoginResult, User, UserCreate
from carbon_tracker.services.weekly_analysis import WeeklyAnalysisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _get_user_or_404(user_id: int, db: Session) -> UserModel:
    user = db.query(UserModel).filter(UserModel.id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/", response_model=User, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)) -> UserModel:
    """Create a new user."""
    if user.email:
        existing = db.query(UserModel).filter(UserModel.email == user.email).first()
        if existing:
            raise HTTPException(status_code=400, detail="User with this email already exists")

    db_user = UserModel(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get("/{user_id}", response_model=User)
def get_user(user_id: int, db: Session = Depends(get_db)) -> UserModel:
    """Get a user by ID."""
    return _get_user_or_404(user_id, db)


@router.post("/{user_id}/login", response_model=LoginResult)
async def login(
    user_id: int,
    db: Session = Depends(get_db),
    analysis: WeeklyAnalysisService = Depends(get_analysis_service),
) -> LoginResult:
    """Start a session for an already identified user.

    Refreshes the user's current week summary so it is ready to view. A
    failed refresh is logged and never fails the login.
    """
    user = _get_user_or_404(user_id, db)

    refreshed = False
    if get_app_config().analysis["refresh_on_login"]:
        try:
            await analysis.run_current_week_analysis(user_id)
            refreshed = True
            logger.info(f"Current week summary generated for user {user_id} on login")
        except Exception as e:
            logger.error(f"Failed to generate current week summary for user {user_id}: {e}")

    return LoginResult(user=User.model_validate(user), summary_refreshed=refreshed)
