"""Email channel sender using the Resend HTTP API."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import httpx

from contract_service.features.notifications.rendering import render_email_html
from contract_service.features.notifications.schemas import NotificationChannel, SendResult
from contract_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from contract_service.core.settings import EmailSettings
    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

NOT_CONFIGURED = "Email service not configured"


class ResendEmailSender:
    """Sender for transactional email via Resend.

    Posts ``{from, to, subject, html, text}`` to ``{api_base}/emails`` with a
    bearer API key. Content without its own HTML gets the default
    notification template.
    """

    def __init__(
        self,
        settings: EmailSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize with provider settings.

        Args:
            settings: Email provider settings
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self._settings = settings
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    def get_channel_name(self) -> str:
        return NotificationChannel.EMAIL.value

    async def send(
        self,
        recipient: NotificationRecipient,
        content: NotificationContent,
    ) -> SendResult:
        if not recipient.email:
            return SendResult(success=False, error="No email address")
        if not self.is_configured:
            return SendResult(success=False, error=NOT_CONFIGURED)

        html = content.html or render_email_html(content)
        payload = {
            "from": self._settings.from_email,
            "to": [recipient.email],
            "subject": content.title,
            "html": html,
            "text": content.message,
        }
        api_key = self._settings.api_key.get_secret_value() if self._settings.api_key else ""
        start_time = time.time()

        lazy_logger.debug(lambda: f"email.send: to={recipient.email}, subject={content.title!r}")

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._settings.timeout,
            ) as client:
                response = await client.post(
                    f"{self._settings.api_base.rstrip('/')}/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {api_key}"},
                )
        except httpx.TimeoutException:
            logger.warning(
                "Email provider timeout",
                extra={"timeout_seconds": self._settings.timeout, "operation": "email.send"},
            )
            return SendResult(success=False, error=f"Request timeout after {self._settings.timeout}s")
        except httpx.RequestError as exc:
            logger.warning(
                "Email provider request failed",
                extra={"error": str(exc), "operation": "email.send"},
            )
            return SendResult(success=False, error=str(exc) or exc.__class__.__name__)

        elapsed_ms = int((time.time() - start_time) * 1000)

        if response.is_success:
            message_id = _json_field(response, "id")
            logger.info(
                "Email sent",
                extra={
                    "message_id": message_id,
                    "response_time_ms": elapsed_ms,
                    "operation": "email.send",
                },
            )
            return SendResult(success=True, message_id=message_id)

        error = _json_field(response, "message") or f"HTTP {response.status_code}"
        logger.warning(
            "Email provider rejected message",
            extra={
                "status_code": response.status_code,
                "error": error,
                "response_time_ms": elapsed_ms,
                "operation": "email.send",
            },
        )
        return SendResult(success=False, error=error)


def _json_field(response: httpx.Response, key: str) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get(key) is not None:
        return str(body[key])
    return None


__all__ = ["ResendEmailSender"]
