"""
Message formatters for Discord notifications.

Formats activity status changes into short, readable embed descriptions.
"""

from typing import Optional

from mbkm_notifier.models import Activity


class MessageFormatter:
    """
    Formats notification content for Discord embeds.
    
    Each changed activity becomes a three-line block with its name,
    partner and new status.
    """
    
    # Discord rejects embed descriptions longer than 4096 characters
    MAX_DESCRIPTION_LENGTH = 4096
    
    @staticmethod
    def _truncate(text: str, max_length: int) -> str:
        """Truncate text with ellipsis if too long."""
        if len(text) <= max_length:
            return text
        return text[:max_length - 3].rstrip() + "..."
    
    @staticmethod
    def _display(value: Optional[str]) -> str:
        return value if value else "-"
    
    @classmethod
    def format_activity(cls, activity: Activity) -> str:
        """
        Format a single activity's status change.
        
        Args:
            activity: The activity whose status changed
            
        Returns:
            str: Formatted block
        """
        lines = [
            f"🎯 Activity: {cls._display(activity.name)}",
            f"🏢 Partner: {cls._display(activity.partner_name)}",
            f"📋 Status: {activity.status}",
        ]
        return "\n".join(lines)
    
    @classmethod
    def format_description(cls, message: str) -> str:
        """Fit a message into a single embed description."""
        return cls._truncate(message.strip(), cls.MAX_DESCRIPTION_LENGTH)
