"""
Discord webhook client.

Sends notifications as rich embeds via a Discord webhook.
https://discord.com/developers/docs/resources/webhook#execute-webhook
"""

import logging
from typing import Optional

import requests

from mbkm_notifier.config import Settings, get_settings
from mbkm_notifier.notify.formatters import MessageFormatter

logger = logging.getLogger(__name__)

# Discord answers 204 by default and 200 when ?wait=true is set
SUCCESS_STATUS_CODES = (200, 204)


class DiscordNotifier:
    """
    Discord webhook client for sending notifications.
    
    Each notification is a single embed with a title, a description and
    an optional image. Delivery failures are logged and reported through
    the return value, never raised.
    """
    
    def __init__(
        self,
        webhook_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize Discord notifier.
        
        Args:
            webhook_url: Discord webhook URL, defaults to the configured one
            settings: Optional settings instance, will use default if not provided
            session: Optional requests session, a new one is created if not provided
        """
        self.settings = settings or get_settings()
        
        self.webhook_url = webhook_url or self.settings.discord_webhook
        self.timeout = self.settings.request_timeout
        self.formatter = MessageFormatter()
        self.session = session or requests.Session()
    
    def build_payload(
        self,
        message: str,
        image_url: Optional[str] = None,
        title: Optional[str] = None,
    ) -> dict:
        """
        Build the webhook body for a single embed.
        
        Args:
            message: Embed description
            image_url: Optional image shown in the embed
            title: Embed title, defaults to the configured notification title
            
        Returns:
            dict: JSON-serialisable webhook payload
        """
        embed = {
            "title": title or self.settings.notification_title,
            "description": self.formatter.format_description(message),
        }
        if image_url:
            embed["image"] = {"url": image_url}
        
        return {"embeds": [embed]}
    
    def send_embed(
        self,
        message: str,
        image_url: Optional[str] = None,
        title: Optional[str] = None,
    ) -> bool:
        """
        Post an embed to the webhook.
        
        Args:
            message: The message text to send; nothing is sent if empty
            image_url: Optional image shown in the embed
            title: Embed title, defaults to the configured notification title
            
        Returns:
            bool: True if Discord accepted the message
        """
        if not message:
            logger.debug("Empty message, skipping Discord notification")
            return False
        
        payload = self.build_payload(message, image_url, title)
        
        try:
            response = self.session.post(self.webhook_url, json=payload, timeout=self.timeout)
            
            if response.status_code in SUCCESS_STATUS_CODES:
                logger.info("Discord notification sent successfully")
                return True
            else:
                logger.error(
                    f"Discord webhook error: {response.status_code} - {response.text}"
                )
                return False
                
        except requests.exceptions.Timeout:
            logger.error("Discord webhook request timed out")
            return False
        except requests.exceptions.RequestException as e:
            logger.error(f"Discord webhook request failed: {e}")
            return False
    
    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
