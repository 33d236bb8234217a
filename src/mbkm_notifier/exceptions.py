"""Exceptions raised by the MBKM Activity Notifier."""

from typing import Optional


class MonitorError(Exception):
    """Base class for errors raised during a polling cycle."""
    pass


class FetchError(MonitorError):
    """Raised when the activities endpoint cannot be reached or rejects the request."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FormatError(MonitorError):
    """Raised when the activities payload does not have the expected shape."""
    pass
