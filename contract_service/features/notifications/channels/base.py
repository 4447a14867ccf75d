"""Base protocol for channel senders."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
        SendResult,
    )


class ChannelSender(Protocol):
    """Protocol for channel-specific senders.

    Each channel (email, sms, whatsapp, in_app) implements this protocol so
    the dispatcher and bulk sender can treat them uniformly. Configuration
    and provider failures are returned as ``SendResult(success=False)``;
    only unexpected errors raise.
    """

    @property
    def is_configured(self) -> bool:
        """Whether provider credentials and sender addresses are present."""
        ...

    async def send(
        self,
        recipient: NotificationRecipient,
        content: NotificationContent,
    ) -> SendResult:
        """Send one message to one recipient.

        Args:
            recipient: Target addresses (the channel reads the one it needs)
            content: Notification content

        Returns:
            SendResult with provider message id on success
        """
        ...

    def get_channel_name(self) -> str:
        """Channel identifier (email, sms, whatsapp, in_app)."""
        ...
