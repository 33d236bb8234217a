"""
MBKM Activity Notifier

Polls the Kampus Merdeka student activities API, detects status changes
for each activity, and posts notifications to a Discord webhook.
"""

__version__ = "1.0.0"
