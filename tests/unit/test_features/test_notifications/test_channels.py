"""Unit tests for the provider-backed channel senders.

Provider HTTP calls are served by ``httpx.MockTransport``.
"""

from __future__ import annotations

import json
from urllib.parse import parse_qs

import httpx
import pytest

from contract_service.core.settings import EmailSettings, TwilioSettings
from contract_service.features.notifications.channels import (
    ResendEmailSender,
    TwilioSmsSender,
    TwilioWhatsAppSender,
)
from contract_service.features.notifications.schemas import (
    NotificationContent,
    NotificationPriority,
    NotificationRecipient,
)

RECIPIENT = NotificationRecipient(email="employee@example.com", phone="+968 9123 4567")
CONTENT = NotificationContent(
    title="Contract expiring",
    message="Your contract expires in 7 days",
    priority=NotificationPriority.HIGH,
    action_url="https://portal.example.com/contracts/1",
)


def _capture(status_code: int, body: dict, captured: list[httpx.Request]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status_code, json=body)

    return httpx.MockTransport(handler)


def _form(request: httpx.Request) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


class TestResendEmailSender:
    """Tests for ResendEmailSender."""

    @pytest.mark.asyncio
    async def test_send_success(self, email_settings) -> None:
        captured: list[httpx.Request] = []
        sender = ResendEmailSender(email_settings, transport=_capture(200, {"id": "email-1"}, captured))

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is True
        assert result.message_id == "email-1"
        request = captured[0]
        assert request.url == "https://api.resend.com/emails"
        assert request.headers["Authorization"] == "Bearer re_test_key"
        payload = json.loads(request.content)
        assert payload["to"] == ["employee@example.com"]
        assert payload["subject"] == "Contract expiring"
        assert payload["text"] == "Your contract expires in 7 days"
        assert "Take Action" in payload["html"]

    @pytest.mark.asyncio
    async def test_provider_error_message(self, email_settings) -> None:
        sender = ResendEmailSender(
            email_settings,
            transport=_capture(422, {"message": "Invalid `to` field"}, []),
        )

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is False
        assert result.error == "Invalid `to` field"

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        captured: list[httpx.Request] = []
        sender = ResendEmailSender(EmailSettings(api_key=None), transport=_capture(200, {}, captured))

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is False
        assert result.error == "Email service not configured"
        assert captured == []

    @pytest.mark.asyncio
    async def test_missing_email(self, email_settings) -> None:
        sender = ResendEmailSender(email_settings, transport=_capture(200, {}, []))

        result = await sender.send(NotificationRecipient(phone="+96891234567"), CONTENT)

        assert result.success is False
        assert result.error == "No email address"

    @pytest.mark.asyncio
    async def test_network_error(self, email_settings) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sender = ResendEmailSender(email_settings, transport=httpx.MockTransport(handler))

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is False
        assert "connection refused" in result.error


class TestTwilioSmsSender:
    """Tests for TwilioSmsSender."""

    @pytest.mark.asyncio
    async def test_send_success(self, twilio_settings, notification_settings) -> None:
        captured: list[httpx.Request] = []
        sender = TwilioSmsSender(
            twilio_settings,
            notification_settings,
            transport=_capture(201, {"sid": "SM123", "status": "queued"}, captured),
        )

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is True
        assert result.message_id == "SM123"
        request = captured[0]
        assert request.url == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
        assert request.headers["Authorization"].startswith("Basic ")
        form = _form(request)
        assert form["To"] == "+96891234567"
        assert form["From"] == "+15005550006"
        assert form["Body"].startswith("SmartPRO Business Hub: Contract expiring")
        assert len(form["Body"]) <= 160

    @pytest.mark.asyncio
    async def test_invalid_phone_checked_first(self, notification_settings) -> None:
        captured: list[httpx.Request] = []
        sender = TwilioSmsSender(TwilioSettings(), notification_settings, transport=_capture(201, {}, captured))

        result = await sender.send(NotificationRecipient(phone="not-a-phone"), CONTENT)

        assert result.success is False
        assert result.error == "Invalid phone number format"
        assert captured == []

    @pytest.mark.asyncio
    async def test_not_configured(self, notification_settings) -> None:
        sender = TwilioSmsSender(TwilioSettings(), notification_settings, transport=_capture(201, {}, []))

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.error == "SMS service not configured"

    @pytest.mark.asyncio
    async def test_missing_sender_number(self, notification_settings) -> None:
        settings = TwilioSettings(account_sid="AC123", auth_token="secret-token")
        sender = TwilioSmsSender(settings, notification_settings, transport=_capture(201, {}, []))

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.error == "SMS sender number not configured"

    @pytest.mark.asyncio
    async def test_provider_rejection(self, twilio_settings, notification_settings) -> None:
        sender = TwilioSmsSender(
            twilio_settings,
            notification_settings,
            transport=_capture(400, {"code": 21211, "message": "Invalid 'To' Phone Number"}, []),
        )

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is False
        assert result.error == "Invalid 'To' Phone Number"


class TestTwilioWhatsAppSender:
    """Tests for TwilioWhatsAppSender."""

    @pytest.mark.asyncio
    async def test_free_form_body(self, twilio_settings, notification_settings) -> None:
        captured: list[httpx.Request] = []
        sender = TwilioWhatsAppSender(
            twilio_settings,
            notification_settings,
            transport=_capture(201, {"sid": "WA1"}, captured),
        )

        result = await sender.send(RECIPIENT, CONTENT)

        assert result.success is True
        form = _form(captured[0])
        assert form["To"] == "whatsapp:+96891234567"
        assert form["From"] == "whatsapp:+14155238886"
        assert form["Body"].startswith("SmartPRO Business Hub: ")
        assert "ContentSid" not in form

    @pytest.mark.asyncio
    async def test_template_mode_sends_content_variables_only(self, notification_settings) -> None:
        settings = TwilioSettings(
            account_sid="AC123",
            auth_token="secret-token",
            whatsapp_number="+14155238886",
            whatsapp_template_sid="HX0001",
        )
        captured: list[httpx.Request] = []
        sender = TwilioWhatsAppSender(settings, notification_settings, transport=_capture(201, {"sid": "WA2"}, captured))
        content = NotificationContent(title="Reminder", message="x" * 80)

        result = await sender.send(RECIPIENT, content)

        assert result.success is True
        form = _form(captured[0])
        assert form["ContentSid"] == "HX0001"
        assert json.loads(form["ContentVariables"]) == {"1": "Reminder", "2": "x" * 50 + "..."}
        assert "Body" not in form

    @pytest.mark.asyncio
    async def test_not_configured_without_sender_number(self, notification_settings) -> None:
        settings = TwilioSettings(account_sid="AC123", auth_token="secret-token")
        sender = TwilioWhatsAppSender(settings, notification_settings, transport=_capture(201, {}, []))

        result = await sender.send(RECIPIENT, CONTENT)

        assert sender.is_configured is False
        assert result.error == "WhatsApp service not configured"
