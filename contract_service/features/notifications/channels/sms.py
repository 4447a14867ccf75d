"""SMS channel sender using the Twilio Messages API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract_service.features.notifications.channels.phone import normalize_phone
from contract_service.features.notifications.channels.twilio import TwilioMessagesClient
from contract_service.features.notifications.rendering import (
    SMS_MAX_LENGTH,
    build_sms_message,
    with_business_name,
)
from contract_service.features.notifications.schemas import NotificationChannel, SendResult

if TYPE_CHECKING:
    import httpx

    from contract_service.core.settings import NotificationSettings, TwilioSettings
    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )

INVALID_PHONE = "Invalid phone number format"
NOT_CONFIGURED = "SMS service not configured"
NO_SENDER = "SMS sender number not configured"


class TwilioSmsSender:
    """Sender for SMS messages.

    The phone number is validated before anything else so malformed numbers
    never reach the provider.
    """

    def __init__(
        self,
        settings: TwilioSettings,
        notification_settings: NotificationSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._business_name = notification_settings.business_name
        self._client = TwilioMessagesClient(settings, transport=transport)

    @property
    def is_configured(self) -> bool:
        return self._settings.has_credentials and bool(self._settings.phone_number)

    def get_channel_name(self) -> str:
        return NotificationChannel.SMS.value

    def build_body(self, content: NotificationContent) -> str:
        return with_business_name(build_sms_message(content), self._business_name)[:SMS_MAX_LENGTH]

    async def send(
        self,
        recipient: NotificationRecipient,
        content: NotificationContent,
    ) -> SendResult:
        to_number = normalize_phone(recipient.phone, self._settings.default_region)
        if to_number is None:
            return SendResult(success=False, error=INVALID_PHONE)
        if not self._settings.has_credentials:
            return SendResult(success=False, error=NOT_CONFIGURED)
        if not self._settings.phone_number:
            return SendResult(success=False, error=NO_SENDER)

        form = {
            "To": to_number,
            "From": self._settings.phone_number,
            "Body": self.build_body(content),
        }
        return await self._client.create_message(form, channel=self.get_channel_name())


__all__ = ["TwilioSmsSender"]
