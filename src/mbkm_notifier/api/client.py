"""
Kampus Merdeka activities API client.

Fetches the raw activities listing for the student that owns the
configured bearer token.
"""

import logging
from typing import Optional

import requests

from mbkm_notifier.config import Settings, get_settings
from mbkm_notifier.exceptions import FetchError

logger = logging.getLogger(__name__)


class ActivityClient:
    """
    Authenticated client for the student activities endpoint.
    
    Every request carries ``Authorization: Bearer <token>``. Failures are
    raised as FetchError and never retried; the next poll is the retry.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the API client.
        
        Args:
            settings: Optional settings instance, will use default if not provided
            session: Optional requests session, a new one is created if not provided
        """
        self.settings = settings or get_settings()
        self.api_url = self.settings.api_url
        self.timeout = self.settings.request_timeout
        
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {self.settings.bearer_token}",
            "Accept": "application/json",
        })
    
    def fetch(self) -> str:
        """
        Fetch the activities listing.
        
        Returns:
            str: Raw response body
            
        Raises:
            FetchError: On transport errors or a non-2xx response
        """
        try:
            response = self.session.get(self.api_url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise FetchError(f"Request to {self.api_url} timed out")
        except requests.exceptions.RequestException as e:
            raise FetchError(f"Request to {self.api_url} failed: {e}")
        
        if not response.ok:
            if response.status_code == 401:
                logger.warning("Activities API rejected the bearer token; it may have expired")
            raise FetchError(
                f"Activities API error: {response.status_code} - {response.text[:200]}",
                status_code=response.status_code,
            )
        
        logger.debug(f"Fetched {len(response.text)} bytes from {self.api_url}")
        return response.text
    
    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
