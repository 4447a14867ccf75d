"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/email/twilio/notifications/workflows/logging),
read from environment variables or a local .env file, validated once and cached.

Import settings via cached loaders:
    from contract_service.core.settings import get_workflow_settings
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .email import EmailSettings
from .loader import (
    clear_settings_cache,
    get_app_settings,
    get_db_settings,
    get_email_settings,
    get_logging_settings,
    get_notification_settings,
    get_twilio_settings,
    get_workflow_settings,
)
from .logs import LoggingSettings
from .notifications import NotificationSettings
from .twilio import TwilioSettings
from .workflows import WorkflowSettings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "EmailSettings",
    "LoggingSettings",
    "NotificationSettings",
    "TwilioSettings",
    "WorkflowSettings",
    "clear_settings_cache",
    "get_app_settings",
    "get_db_settings",
    "get_email_settings",
    "get_logging_settings",
    "get_notification_settings",
    "get_twilio_settings",
    "get_workflow_settings",
]
