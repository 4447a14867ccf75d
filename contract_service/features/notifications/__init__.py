"""Multi-channel notification dispatch (email, SMS, WhatsApp, in-app)."""

from __future__ import annotations

from .dispatcher import NotificationDispatcher, build_notification_dispatcher
from .schemas import (
    NotificationChannel,
    NotificationContent,
    NotificationPriority,
    NotificationRecipient,
    NotificationResult,
    SendResult,
)

__all__ = [
    "NotificationChannel",
    "NotificationContent",
    "NotificationDispatcher",
    "NotificationPriority",
    "NotificationRecipient",
    "NotificationResult",
    "SendResult",
    "build_notification_dispatcher",
]
