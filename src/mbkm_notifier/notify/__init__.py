"""Discord notification module for the MBKM Activity Notifier."""

from mbkm_notifier.notify.discord import DiscordNotifier
from mbkm_notifier.notify.formatters import MessageFormatter

__all__ = ["DiscordNotifier", "MessageFormatter"]
