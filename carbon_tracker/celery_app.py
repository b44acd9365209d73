"""Celery application configuration."""

from celery import Celery
from celery.schedules import crontab

from carbon_tracker.config import get_app_config, get_settings

settings = get_settings()
analysis_config = get_app_config().analysis

app = Celery(
    "carbon_tracker",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["carbon_tracker.tasks.analysis_tasks", "carbon_tracker.tasks.notification_tasks"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",  # Week boundaries are UTC
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Result expiration
    result_expires=3600,  # 1 hour
    # Beat schedule for periodic tasks
    beat_schedule={
        "run-last-week-analysis-weekly": {
            "task": "analysis_tasks.run_last_week_analysis",
            "schedule": crontab(
                day_of_week=analysis_config["weekly_run_day_of_week"],
                hour=analysis_config["weekly_run_hour"],
                minute=analysis_config["weekly_run_minute"],
            ),
        },
    },
)
