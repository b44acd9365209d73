"""Celery tasks for realtime tip notifications."""

import logging

from carbon_tracker.celery_app import app
from carbon_tracker.services.notifications import get_notification_service
from carbon_tracker.services.tips import format_tip_response
from carbon_tracker.tasks.analysis_tasks import run_async

logger = logging.getLogger(__name__)


@app.task(
    name="notification_tasks.send_tip_for_activity",
    bind=True,
    max_retries=3,
    default_retry_delay=30,
)
def send_tip_for_activity(self, user_id: int, category: str, activity: str) -> dict:
    """Push a tip for an activity the user just logged.

    Args:
        user_id: User who logged the activity
        category: Activity category
        activity: Activity label
    """
    tip = format_tip_response(category, activity, user_id)
    if tip is None:
        logger.info(f"No tip available for {category} - {activity}")
        return {"success": False, "error": "No tips available"}

    try:
        result = run_async(get_notification_service().send_tip_notification(user_id, tip))
    except Exception as e:
        logger.error(f"Error sending tip notification for user {user_id}: {e}")
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e)
        return {"success": False, "error": str(e)}

    if not result["success"]:
        logger.warning(f"Failed to send tip notification: {result.get('error')}")
    return result
