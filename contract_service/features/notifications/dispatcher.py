"""Notification dispatcher coordinating all channels."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract_service.features.notifications.channels import (
    InAppSender,
    ResendEmailSender,
    TwilioSmsSender,
    TwilioWhatsAppSender,
)
from contract_service.features.notifications.schemas import (
    CHANNEL_ORDER,
    NotificationChannel,
    NotificationPriority,
    NotificationResult,
)
from contract_service.infra.logging import get_lazy_logger
from contract_service.infra.metrics import notification_sent_total

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.core.settings import EmailSettings, NotificationSettings, TwilioSettings
    from contract_service.features.notifications.channels import ChannelSender
    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

_ESCALATED = (NotificationPriority.HIGH, NotificationPriority.URGENT)
_CHANNEL_NAMES = frozenset(channel.value for channel in NotificationChannel)

# Prefixes used in NotificationResult.errors
_ERROR_LABELS = {
    NotificationChannel.EMAIL: "Email",
    NotificationChannel.SMS: "SMS",
    NotificationChannel.WHATSAPP: "WhatsApp",
    NotificationChannel.IN_APP: "In-app",
}


class NotificationDispatcher:
    """Dispatcher fanning one notification out to recipients and channels.

    Channel selection is decided once per call from the content priority and
    the requested channels. Every (recipient, channel) pair whose address is
    present is attempted exactly once; failures are counted and collected as
    error strings, never raised.
    """

    def __init__(
        self,
        email: ChannelSender,
        sms: ChannelSender,
        whatsapp: ChannelSender,
        in_app: ChannelSender,
    ) -> None:
        """Initialize with one sender per channel."""
        self._channels: dict[NotificationChannel, ChannelSender] = {
            NotificationChannel.EMAIL: email,
            NotificationChannel.SMS: sms,
            NotificationChannel.WHATSAPP: whatsapp,
            NotificationChannel.IN_APP: in_app,
        }

    def determine_channels(
        self,
        requested: Iterable[NotificationChannel | str],
        priority: NotificationPriority,
    ) -> list[NotificationChannel]:
        """Gate the requested channels by priority.

        - in_app: always
        - email: priority is not low, and email requested or nothing requested
        - sms: priority high/urgent and requested
        - whatsapp: priority high/urgent, requested, and the sender is configured

        Unknown channel names are ignored, but still count as a request, so
        `["push"]` does not fall back to email.
        """
        requested = list(requested)
        requested_set = {
            NotificationChannel(channel)
            for channel in requested
            if isinstance(channel, str) and channel in _CHANNEL_NAMES
        }
        selected = {NotificationChannel.IN_APP}

        if priority != NotificationPriority.LOW and (
            NotificationChannel.EMAIL in requested_set or not requested
        ):
            selected.add(NotificationChannel.EMAIL)

        if priority in _ESCALATED and NotificationChannel.SMS in requested_set:
            selected.add(NotificationChannel.SMS)

        if (
            priority in _ESCALATED
            and NotificationChannel.WHATSAPP in requested_set
            and self._channels[NotificationChannel.WHATSAPP].is_configured
        ):
            selected.add(NotificationChannel.WHATSAPP)

        return [channel for channel in CHANNEL_ORDER if channel in selected]

    async def send_notification(
        self,
        recipients: Sequence[NotificationRecipient],
        content: NotificationContent,
        channels: Iterable[NotificationChannel | str] = (),
    ) -> NotificationResult:
        """Send content to every recipient over the effective channel set.

        Args:
            recipients: Targets; a channel is skipped for recipients without its address
            content: Notification content (priority drives channel gating)
            channels: Requested channels (empty means the defaults)

        Returns:
            NotificationResult; success is true iff no attempt failed
        """
        effective = self.determine_channels(channels, content.priority)
        result = NotificationResult()

        lazy_logger.debug(
            lambda: f"Dispatching '{content.title}' to {len(recipients)} recipient(s) via {[c.value for c in effective]}"
        )

        for recipient in recipients:
            for channel in effective:
                address = _address_for(recipient, channel)
                if not address:
                    continue
                await self._attempt(channel, recipient, content, address, result)

        result.success = result.failed.total == 0

        logger.info(
            "Notification dispatched",
            extra={
                "title": content.title,
                "priority": content.priority.value,
                "channels": [c.value for c in effective],
                "recipients": len(recipients),
                "sent": result.sent.total,
                "failed": result.failed.total,
                "operation": "notifications.send_notification",
            },
        )
        return result

    async def _attempt(
        self,
        channel: NotificationChannel,
        recipient: NotificationRecipient,
        content: NotificationContent,
        address: str,
        result: NotificationResult,
    ) -> None:
        sender = self._channels[channel]
        label = _ERROR_LABELS[channel]

        try:
            outcome = await sender.send(recipient, content)
        except Exception as exc:
            logger.exception(
                "Channel sender raised",
                extra={"channel": channel.value, "operation": "notifications.send_notification"},
            )
            result.failed.increment(channel)
            result.errors.append(f"{label} error: {exc}")
            notification_sent_total.labels(channel=channel.value, status="error").inc()
            return

        if outcome.success:
            result.sent.increment(channel)
            if channel is NotificationChannel.IN_APP and result.notification_id is None:
                result.notification_id = outcome.message_id
            notification_sent_total.labels(channel=channel.value, status="sent").inc()
            return

        result.failed.increment(channel)
        if channel is NotificationChannel.IN_APP:
            result.errors.append(f"In-app notification: {outcome.error}")
        else:
            result.errors.append(f"{label} to {address}: {outcome.error}")
        notification_sent_total.labels(channel=channel.value, status="failed").inc()

        logger.warning(
            "Notification delivery failed",
            extra={
                "channel": channel.value,
                "error": outcome.error,
                "operation": "notifications.send_notification",
            },
        )


def _address_for(recipient: NotificationRecipient, channel: NotificationChannel) -> str | None:
    if channel is NotificationChannel.EMAIL:
        return recipient.email
    if channel in (NotificationChannel.SMS, NotificationChannel.WHATSAPP):
        return recipient.phone
    return recipient.user_id


def build_notification_dispatcher(
    session_factory: async_sessionmaker[AsyncSession],
    *,
    email_settings: EmailSettings,
    twilio_settings: TwilioSettings,
    notification_settings: NotificationSettings,
) -> NotificationDispatcher:
    """Wire the production senders from settings."""
    return NotificationDispatcher(
        email=ResendEmailSender(email_settings),
        sms=TwilioSmsSender(twilio_settings, notification_settings),
        whatsapp=TwilioWhatsAppSender(twilio_settings, notification_settings),
        in_app=InAppSender(session_factory),
    )


__all__ = ["NotificationDispatcher", "build_notification_dispatcher"]
