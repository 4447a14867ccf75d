"""Value types and API schemas for notification dispatch.

Dataclasses are used inside the pipeline (senders, dispatcher, workflow
steps); the Pydantic models at the bottom define the HTTP request/response
shapes and convert to and from them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationChannel(StrEnum):
    """Delivery channel, in dispatch order."""

    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"
    IN_APP = "in_app"


class NotificationPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Fixed per-recipient iteration order
CHANNEL_ORDER: tuple[NotificationChannel, ...] = (
    NotificationChannel.EMAIL,
    NotificationChannel.SMS,
    NotificationChannel.WHATSAPP,
    NotificationChannel.IN_APP,
)


@dataclass
class NotificationRecipient:
    """One addressable target. A channel fires only when its address is set."""

    user_id: str | None = None
    email: str | None = None
    phone: str | None = None
    name: str | None = None


@dataclass
class NotificationContent:
    """Content payload shared by every channel in one dispatch call."""

    title: str
    message: str
    html: str | None = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    category: str | None = None
    action_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class SendResult:
    """Outcome of a single channel send.

    Attributes:
        success: Whether the provider accepted the message
        message_id: Provider message id (or in-app row id)
        error: Error description if failed
    """

    success: bool
    message_id: str | None = None
    error: str | None = None


@dataclass
class ChannelCounters:
    """Per-channel counters for sent or failed deliveries."""

    email: int = 0
    sms: int = 0
    whatsapp: int = 0
    in_app: int = 0

    def increment(self, channel: NotificationChannel) -> None:
        attr = channel.value
        setattr(self, attr, getattr(self, attr) + 1)

    @property
    def total(self) -> int:
        return self.email + self.sms + self.whatsapp + self.in_app


@dataclass
class NotificationResult:
    """Aggregated outcome of one send_notification call.

    success is true iff every failed counter is zero.
    """

    success: bool = True
    sent: ChannelCounters = field(default_factory=ChannelCounters)
    failed: ChannelCounters = field(default_factory=ChannelCounters)
    errors: list[str] = field(default_factory=list)
    notification_id: str | None = None


@dataclass
class BatchSendSummary:
    """Outcome of a throttled bulk send through one channel."""

    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)


# ============================================================================
# HTTP Schemas
# ============================================================================


class RecipientSchema(BaseModel):
    """Recipient addresses accepted by the send endpoint."""

    user_id: str | None = Field(default=None, description="Internal user (profile) id")
    email: str | None = Field(default=None, max_length=320, description="Email address")
    phone: str | None = Field(default=None, max_length=32, description="Phone number")
    name: str | None = Field(default=None, max_length=255, description="Display name")

    def to_recipient(self) -> NotificationRecipient:
        return NotificationRecipient(
            user_id=self.user_id,
            email=self.email,
            phone=self.phone,
            name=self.name,
        )


class ContentSchema(BaseModel):
    """Notification content accepted by the send endpoint."""

    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., description="Plain-text body")
    html: str | None = Field(default=None, description="Pre-rendered HTML body for email")
    priority: NotificationPriority = Field(default=NotificationPriority.MEDIUM)
    category: str | None = Field(default=None, max_length=100)
    action_url: str | None = Field(default=None, max_length=2048)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_content(self) -> NotificationContent:
        return NotificationContent(
            title=self.title,
            message=self.message,
            html=self.html,
            priority=self.priority,
            category=self.category,
            action_url=self.action_url,
            metadata=dict(self.metadata),
        )


class SendNotificationRequest(BaseModel):
    """Payload for POST /notifications/send."""

    recipients: list[RecipientSchema] = Field(..., min_length=1)
    content: ContentSchema
    channels: list[NotificationChannel] = Field(
        default_factory=list,
        description="Requested channels; gated by priority before sending",
    )


class ChannelCountersResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    email: int
    sms: int
    whatsapp: int
    in_app: int


class NotificationResultResponse(BaseModel):
    """Response for POST /notifications/send."""

    model_config = ConfigDict(from_attributes=True)

    success: bool
    sent: ChannelCountersResponse
    failed: ChannelCountersResponse
    errors: list[str]
    notification_id: str | None = None


__all__ = [
    "CHANNEL_ORDER",
    "BatchSendSummary",
    "ChannelCounters",
    "ChannelCountersResponse",
    "ContentSchema",
    "NotificationChannel",
    "NotificationContent",
    "NotificationPriority",
    "NotificationRecipient",
    "NotificationResult",
    "NotificationResultResponse",
    "RecipientSchema",
    "SendNotificationRequest",
    "SendResult",
]
