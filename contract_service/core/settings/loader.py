"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from contract_service.core.settings import get_twilio_settings

    settings = get_twilio_settings()  # First call: loads and validates

Testing:
    In tests, clear the cache to force reload:
    get_twilio_settings.cache_clear()

    Or construct settings directly and inject them:
    settings = TwilioSettings(account_sid="AC123", ...)
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .logs import LoggingSettings
from .notifications import NotificationSettings
from .twilio import TwilioSettings
from .workflows import WorkflowSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> DatabaseSettings:
    """Get cached database settings."""
    return DatabaseSettings()


@lru_cache(maxsize=1)
def get_email_settings() -> EmailSettings:
    """Get cached email provider settings."""
    return EmailSettings()


@lru_cache(maxsize=1)
def get_twilio_settings() -> TwilioSettings:
    """Get cached SMS/WhatsApp provider settings."""
    return TwilioSettings()


@lru_cache(maxsize=1)
def get_notification_settings() -> NotificationSettings:
    """Get cached notification dispatch settings."""
    return NotificationSettings()


@lru_cache(maxsize=1)
def get_workflow_settings() -> WorkflowSettings:
    """Get cached workflow engine settings."""
    return WorkflowSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


def clear_settings_cache() -> None:
    """Clear all cached settings (tests and config reloads)."""
    for loader in (
        get_app_settings,
        get_db_settings,
        get_email_settings,
        get_twilio_settings,
        get_notification_settings,
        get_workflow_settings,
        get_logging_settings,
    ):
        loader.cache_clear()
