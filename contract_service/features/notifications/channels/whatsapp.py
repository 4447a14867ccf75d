"""WhatsApp channel sender using the Twilio Messages API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract_service.features.notifications.channels.phone import normalize_phone
from contract_service.features.notifications.channels.twilio import TwilioMessagesClient
from contract_service.features.notifications.rendering import (
    build_sms_message,
    build_whatsapp_variables,
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
NOT_CONFIGURED = "WhatsApp service not configured"
WHATSAPP_PREFIX = "whatsapp:"


def _whatsapp_address(number: str) -> str:
    return number if number.startswith(WHATSAPP_PREFIX) else f"{WHATSAPP_PREFIX}{number}"


class TwilioWhatsAppSender:
    """Sender for WhatsApp messages.

    When a default content template is configured, messages are sent in
    template mode (``ContentSid`` + ``ContentVariables``) and carry no free-form
    body; otherwise the SMS-style text is sent with the business name
    prepended.
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
        return self._settings.has_credentials and bool(self._settings.whatsapp_number)

    @property
    def template_mode(self) -> bool:
        return bool(self._settings.whatsapp_template_sid)

    def get_channel_name(self) -> str:
        return NotificationChannel.WHATSAPP.value

    def build_form(self, to_number: str, content: NotificationContent) -> dict[str, str]:
        form = {
            "To": _whatsapp_address(to_number),
            "From": _whatsapp_address(self._settings.whatsapp_number or ""),
        }
        if self.template_mode:
            form["ContentSid"] = self._settings.whatsapp_template_sid or ""
            form["ContentVariables"] = build_whatsapp_variables(content)
        else:
            form["Body"] = with_business_name(build_sms_message(content), self._business_name)
        return form

    async def send(
        self,
        recipient: NotificationRecipient,
        content: NotificationContent,
    ) -> SendResult:
        to_number = normalize_phone(recipient.phone, self._settings.default_region)
        if to_number is None:
            return SendResult(success=False, error=INVALID_PHONE)
        if not self.is_configured:
            return SendResult(success=False, error=NOT_CONFIGURED)

        return await self._client.create_message(
            self.build_form(to_number, content),
            channel=self.get_channel_name(),
        )


__all__ = ["TwilioWhatsAppSender"]
