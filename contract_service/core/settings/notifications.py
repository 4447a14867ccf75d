"""Notification dispatch settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotificationSettings(BaseSettings):
    """Settings shared by the notification channels.

    Environment variables use NOTIFICATION_ prefix; the business name also
    honours WHATSAPP_BUSINESS_NAME.
    """

    business_name: str = Field(
        default="SmartPRO Business Hub",
        alias="WHATSAPP_BUSINESS_NAME",
        min_length=1,
        max_length=100,
        description="Display name prepended to SMS and WhatsApp bodies",
    )
    batch_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Recipients per batch for bulk SMS/WhatsApp sends",
    )
    batch_pause_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Pause between bulk-send batches (provider rate limits)",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTIFICATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        env_ignore_empty=True,
    )


__all__ = ["NotificationSettings"]
