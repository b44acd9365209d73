"""SQLAlchemy ORM models."""

from carbon_tracker.models.activity import Activity
from carbon_tracker.models.reduction_target import ReductionTarget, TargetPeriod, TargetType
from carbon_tracker.models.user import User
from carbon_tracker.models.weekly_summary import WeeklySummary

__all__ = [
    "Activity",
    "ReductionTarget",
    "TargetPeriod",
    "TargetType",
    "User",
    "WeeklySummary",
]
