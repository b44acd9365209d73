"""Celery tasks for carbon-tracker."""

from carbon_tracker.tasks.analysis_tasks import run_current_week_analysis, run_last_week_analysis
from carbon_tracker.tasks.notification_tasks import send_tip_for_activity

__all__ = [
    "run_current_week_analysis",
    "run_last_week_analysis",
    "send_tip_for_activity",
]
