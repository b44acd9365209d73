"""Notification service for pushing eco tips via ntfy."""

import logging
from typing import Any

import httpx

from carbon_tracker.config import get_app_config, get_settings

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for sending push notifications via ntfy.sh."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.server = self.settings.ntfy_server
        self.topic = self.settings.ntfy_topic
        self.enabled = self.settings.notifications_enabled
        self.options = get_app_config().notifications
        self.timeout = 10.0

    def _get_notification_url(self) -> str:
        """Get the full ntfy URL for publishing."""
        return f"{self.server}/{self.topic}"

    async def send_tip_notification(self, user_id: int, tip: dict[str, Any]) -> dict[str, Any]:
        """Push a tip for a freshly logged activity.

        Args:
            user_id: ID of the user who logged the activity
            tip: Tip payload as built by ``format_tip_response``

        Returns:
            dict with success status and any error info
        """
        if not self.enabled:
            logger.debug(f"Notifications disabled, skipping tip for user {user_id}")
            return {"success": False, "user_id": user_id, "error": "Notifications disabled"}

        headers = {
            "Title": self.options["title"],
            "Priority": str(self.options["priority"]),
            "Tags": "seedling" if tip["tip_type"] == "positive" else "bulb",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self._get_notification_url(),
                    content=tip["message"],
                    headers=headers,
                )
                response.raise_for_status()

                logger.info(f"Sent {tip['tip_type']} tip notification to user {user_id}")
                return {"success": True, "user_id": user_id, "message": tip["message"]}

        except httpx.HTTPError as e:
            logger.error(f"Failed to send tip notification for user {user_id}: {e}")
            return {"success": False, "user_id": user_id, "error": str(e)}


def get_notification_service() -> NotificationService:
    """Get a notification service instance."""
    return NotificationService()
