"""Pydantic schemas for request/response validation."""

from carbon_tracker.schemas.activity import Activity, ActivityCreate
from carbon_tracker.schemas.reduction_target import (
    ReductionTarget,
    ReductionTargetCreate,
    ReductionTargetUpdate,
)
from carbon_tracker.schemas.summary import AnalysisRun, Streak, WeeklySummary
from carbon_tracker.schemas.user import LoginResult, User, UserCreate

__all__ = [
    "Activity",
    "ActivityCreate",
    "AnalysisRun",
    "LoginResult",
    "ReductionTarget",
    "ReductionTargetCreate",
    "ReductionTargetUpdate",
    "Streak",
    "User",
    "UserCreate",
    "WeeklySummary",
]
