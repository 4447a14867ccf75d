"""Shared Twilio Messages API call for the SMS and WhatsApp senders."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx

from contract_service.features.notifications.schemas import SendResult

if TYPE_CHECKING:
    from contract_service.core.settings import TwilioSettings

logger = logging.getLogger(__name__)


class TwilioMessagesClient:
    """Creates one message via ``POST /Accounts/{sid}/Messages.json``.

    Request body is form-encoded; authentication is HTTP basic with the
    account SID and auth token.
    """

    def __init__(
        self,
        settings: TwilioSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def messages_url(self) -> str:
        base = self._settings.api_base.rstrip("/")
        return f"{base}/Accounts/{self._settings.account_sid}/Messages.json"

    async def create_message(self, form: dict[str, str], *, channel: str) -> SendResult:
        """Submit the message and map the provider response to a SendResult."""
        auth_token = (
            self._settings.auth_token.get_secret_value() if self._settings.auth_token else ""
        )
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.timeout,
            ) as client:
                response = await client.post(
                    self.messages_url,
                    data=form,
                    auth=(self._settings.account_sid or "", auth_token),
                )
        except httpx.TimeoutException:
            logger.warning(
                "Twilio request timeout",
                extra={
                    "channel": channel,
                    "timeout_seconds": self._settings.timeout,
                    "operation": "twilio.create_message",
                },
            )
            return SendResult(success=False, error=f"Request timeout after {self._settings.timeout}s")
        except httpx.RequestError as exc:
            logger.warning(
                "Twilio request failed",
                extra={"channel": channel, "error": str(exc), "operation": "twilio.create_message"},
            )
            return SendResult(success=False, error=str(exc) or exc.__class__.__name__)

        elapsed_ms = int((time.time() - start_time) * 1000)
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_success:
            logger.info(
                "Twilio message created",
                extra={
                    "channel": channel,
                    "message_sid": body.get("sid"),
                    "provider_status": body.get("status"),
                    "response_time_ms": elapsed_ms,
                    "operation": "twilio.create_message",
                },
            )
            sid = body.get("sid")
            return SendResult(success=True, message_id=str(sid) if sid else None)

        error = str(body.get("message") or f"HTTP {response.status_code}")
        logger.warning(
            "Twilio rejected message",
            extra={
                "channel": channel,
                "status_code": response.status_code,
                "error_code": body.get("code"),
                "error": error,
                "operation": "twilio.create_message",
            },
        )
        return SendResult(success=False, error=error)


__all__ = ["TwilioMessagesClient"]
