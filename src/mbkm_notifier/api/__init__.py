"""Kampus Merdeka API access for the MBKM Activity Notifier."""

from mbkm_notifier.api.client import ActivityClient

__all__ = ["ActivityClient"]
