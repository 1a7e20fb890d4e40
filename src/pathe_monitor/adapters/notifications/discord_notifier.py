"""Discord notification adapter."""

import json
import logging

import httpx

from pathe_monitor.core import Notification, NotificationService

logger = logging.getLogger(__name__)


class DiscordNotifier(NotificationService):
    """Send notifications to a Discord channel via webhook."""

    def __init__(self, webhook_url: str, timeout: float = 30.0) -> None:
        """Initialize Discord notifier.

        Args:
            webhook_url: Discord webhook URL, validated at startup
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send(self, notification: Notification) -> bool:
        """Post notification to the webhook.

        Failures are logged and reported as False; they never propagate,
        so a broken webhook cannot stop the monitor.

        Args:
            notification: Message to deliver

        Returns:
            True if the webhook accepted the message
        """
        payload = notification.to_payload()
        logger.info(
            f"Calling Discord webhook with payload:\n"
            f"{json.dumps(payload, indent=2, ensure_ascii=False)}"
        )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                logger.error(f"error calling webhook: {e}")
                return False

        logger.debug(f"webhook answered HTTP {response.status_code}")
        return True
