"""
Main orchestrator for the MBKM Activity Notifier.

Runs the polling loop:
1. Send a one-time startup notification
2. Fetch the student's activities
3. Detect status changes
4. Send a Discord notification when something changed
5. Wait for the next tick, or stop when asked to
"""

import logging
import signal
import sys
import threading
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from mbkm_notifier.api import ActivityClient
from mbkm_notifier.config import Settings, get_settings, setup_logging
from mbkm_notifier.detector import ChangeDetector
from mbkm_notifier.exceptions import FetchError, FormatError
from mbkm_notifier.notify import DiscordNotifier

logger = logging.getLogger(__name__)


class MonitorState(str, Enum):
    """Lifecycle of the monitor."""
    STARTUP_PENDING = "startup_pending"
    STEADY = "steady"


class ActivityMonitor:
    """
    Polls the activities API and notifies Discord about status changes.
    
    A tick never raises: every failure is logged and counted, and the
    next tick runs as scheduled.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[ActivityClient] = None,
        detector: Optional[ChangeDetector] = None,
        notifier: Optional[DiscordNotifier] = None,
    ):
        """Initialize the monitor with all components."""
        self.settings = settings or get_settings()
        self.client = client or ActivityClient(self.settings)
        self.detector = detector or ChangeDetector()
        self.notifier = notifier or DiscordNotifier(settings=self.settings)
        
        self.state = MonitorState.STARTUP_PENDING
        
        # Track stats
        self.stats = {
            "ticks": 0,
            "changes_detected": 0,
            "notifications_sent": 0,
            "errors": 0,
        }
    
    def tick(self) -> bool:
        """
        Run one fetch, detect and notify cycle.
        
        Returns:
            bool: True if the cycle completed without errors
        """
        self.stats["ticks"] += 1
        
        if self.state is MonitorState.STARTUP_PENDING:
            try:
                self._send_startup_notification()
            except Exception as e:
                logger.error(f"Error sending initial notification: {e}", exc_info=True)
                self.stats["errors"] += 1
            self.state = MonitorState.STEADY
        
        try:
            raw = self.client.fetch()
            changes = self.detector.detect(raw)
        except FetchError as e:
            logger.error(f"Error fetching activities: {e}")
            self.stats["errors"] += 1
            return False
        except FormatError as e:
            logger.error(f"Error reading activities payload: {e}")
            self.stats["errors"] += 1
            return False
        except Exception as e:
            logger.error(f"Unexpected error during poll: {e}", exc_info=True)
            self.stats["errors"] += 1
            return False
        
        if not changes.has_changes:
            logger.debug("No activity status changes")
            return True
        
        self.stats["changes_detected"] += len(changes.changes)
        
        try:
            sent = self.notifier.send_embed(changes.message, changes.image_url)
        except Exception as e:
            logger.error(f"Error sending notification: {e}", exc_info=True)
            sent = False
        
        if sent:
            self.stats["notifications_sent"] += 1
            logger.info("Notification sent!")
            return True
        
        self.stats["errors"] += 1
        return False
    
    def run_forever(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Tick once per poll interval until the stop event is set.
        
        Args:
            stop_event: Event that ends the loop; waiting on it also
                replaces a plain sleep so shutdown is immediate
        """
        stop_event = stop_event or threading.Event()
        interval = self.settings.poll_interval_seconds
        
        logger.info("=" * 50)
        logger.info(f"Starting MBKM Activity Notifier (polling every {interval:g}s)")
        logger.info("=" * 50)
        
        while not stop_event.is_set():
            self.tick()
            stop_event.wait(interval)
        
        self._log_summary()
    
    def close(self) -> None:
        """Release HTTP sessions."""
        self.client.close()
        self.notifier.close()
    
    def _send_startup_notification(self) -> None:
        """Announce that the monitor is running."""
        sent = self.notifier.send_embed(
            self.settings.startup_message,
            self.settings.startup_image_url,
        )
        if sent:
            self.stats["notifications_sent"] += 1
            logger.info("Initial notification sent!")
        else:
            self.stats["errors"] += 1
            logger.warning("Initial notification could not be sent")
    
    def _log_summary(self) -> None:
        """Log run summary."""
        logger.info("=" * 50)
        logger.info("Monitor stopped - Summary")
        logger.info("=" * 50)
        logger.info(f"Ticks run:            {self.stats['ticks']}")
        logger.info(f"Changes detected:     {self.stats['changes_detected']}")
        logger.info(f"Notifications sent:   {self.stats['notifications_sent']}")
        logger.info(f"Errors:               {self.stats['errors']}")
        logger.info(f"Activities tracked:   {len(self.detector.tracker)}")
        logger.info("=" * 50)


def install_signal_handlers(stop_event: threading.Event) -> None:
    """Set the stop event on SIGINT and SIGTERM."""
    def _handle(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, stopping after current tick")
        stop_event.set()
    
    signal.signal(signal.SIGINT, _handle)
    signal.signal(signal.SIGTERM, _handle)


def main() -> int:
    """
    Entry point for the MBKM Activity Notifier.
    
    Returns:
        int: Exit code (0 after a clean shutdown, 1 on configuration errors)
    """
    try:
        # Validate configuration early
        settings = get_settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Configuration error: {e}")
        logger.error("Please check your environment variables or .env file.")
        return 1
    
    setup_logging(settings)
    logger.debug(f"Loaded configuration for {settings.api_url}")
    
    stop_event = threading.Event()
    install_signal_handlers(stop_event)
    
    monitor = ActivityMonitor(settings)
    try:
        monitor.run_forever(stop_event)
    finally:
        monitor.close()
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
