"""
Configuration management for the MBKM Activity Notifier.

Loads and validates all required environment variables with clear error messages.
Uses Pydantic Settings for type safety and validation.
"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.kampusmerdeka.kemdikbud.go.id/mbkm/mahasiswa/activities/my"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    
    The bearer token and webhook URL must be set, or the application will
    fail fast with a clear error message indicating which variables are missing.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
    
    # Kampus Merdeka API Configuration
    bearer_token: str = Field(
        ...,
        description="Bearer token of the student's Kampus Merdeka session"
    )
    api_url: str = Field(
        default=DEFAULT_API_URL,
        description="Endpoint listing the student's activities"
    )
    
    # Discord Configuration
    discord_webhook: str = Field(
        ...,
        description="Discord webhook URL notifications are posted to"
    )
    
    # Optional Configuration
    poll_interval_seconds: float = Field(
        default=60,
        gt=0,
        description="Seconds to wait between two polls"
    )
    request_timeout: float = Field(
        default=30,
        gt=0,
        description="Timeout in seconds for outbound HTTP requests"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    notification_title: str = Field(
        default="New Activity Update",
        description="Embed title used for status change notifications"
    )
    startup_message: str = Field(
        default="Your Bot is UP!",
        description="Message sent once when the monitor starts"
    )
    startup_image_url: Optional[str] = Field(
        default=None,
        description="Image attached to the startup message"
    )
    
    @field_validator("bearer_token", "discord_webhook")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty secrets so a blank .env entry fails at startup."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v
    
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return upper


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Returns:
        Settings: Validated application settings
        
    Raises:
        ValidationError: If required environment variables are missing or invalid
    """
    return Settings()


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure application logging.
    
    Args:
        settings: Optional settings instance, will be loaded if not provided
        
    Returns:
        logging.Logger: Configured logger instance
    """
    if settings is None:
        settings = get_settings()
    
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    
    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    
    return logging.getLogger("mbkm_notifier")
