"""Celery tasks for the weekly analysis."""

import asyncio
import logging
from datetime import datetime

from carbon_tracker.celery_app import app
from carbon_tracker.database import SessionLocal
from carbon_tracker.services.weekly_analysis import get_weekly_analysis_service

logger = logging.getLogger(__name__)


def run_async(coro):
    """Run an async coroutine in a sync context."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _parse_reference_time(reference_time: str | None) -> datetime | None:
    return datetime.fromisoformat(reference_time) if reference_time else None


@app.task(name="analysis_tasks.run_last_week_analysis")
def run_last_week_analysis(reference_time: str | None = None) -> dict:
    """Summarize the last completed week for all users.

    Scheduled weekly by celery beat. A failed run is logged and re-raised;
    the next scheduled run starts from scratch.

    Args:
        reference_time: Optional ISO timestamp to compute the week from
    """
    logger.info("Starting last week analysis")
    service = get_weekly_analysis_service(SessionLocal)
    try:
        result = run_async(
            service.run_last_week_analysis(_parse_reference_time(reference_time))
        )
    except Exception as e:
        logger.error(f"Last week analysis failed: {e}")
        raise

    logger.info(f"Last week analysis processed {result.processed_users} users")
    return result.to_dict()


@app.task(name="analysis_tasks.run_current_week_analysis")
def run_current_week_analysis(user_id: int | None = None, reference_time: str | None = None) -> dict:
    """Refresh current week summaries, for one user or for everyone.

    Args:
        user_id: Restrict the refresh to this user
        reference_time: Optional ISO timestamp to use as "now"
    """
    logger.info(f"Starting current week analysis (user={user_id})")
    service = get_weekly_analysis_service(SessionLocal)
    try:
        result = run_async(
            service.run_current_week_analysis(user_id, _parse_reference_time(reference_time))
        )
    except Exception as e:
        logger.error(f"Current week analysis failed (user={user_id}): {e}")
        raise

    return result.to_dict()
