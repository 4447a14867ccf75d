"""Tests for throttled bulk sends."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from contract_service.features.notifications.channels import send_in_batches
from contract_service.features.notifications.schemas import (
    NotificationContent,
    NotificationRecipient,
    SendResult,
)

CONTENT = NotificationContent(title="Reminder", message="Submit your documents")


class FlakySender:
    """Fails for one phone number and raises for another."""

    def __init__(self) -> None:
        self.sent_to: list[str] = []

    @property
    def is_configured(self) -> bool:
        return True

    def get_channel_name(self) -> str:
        return "sms"

    async def send(self, recipient: NotificationRecipient, content: NotificationContent) -> SendResult:
        self.sent_to.append(recipient.phone)
        if recipient.phone == "+96890000002":
            return SendResult(success=False, error="Invalid phone number format")
        if recipient.phone == "+96890000003":
            raise RuntimeError("provider down")
        return SendResult(success=True, message_id="SM1")


def _recipients(count: int) -> list[NotificationRecipient]:
    return [NotificationRecipient(phone=f"+9689000000{i}") for i in range(count)]


@pytest.mark.asyncio
async def test_counts_and_errors() -> None:
    sender = FlakySender()

    summary = await send_in_batches(sender, _recipients(5), CONTENT, batch_size=2, pause_seconds=0)

    assert summary.sent == 3
    assert summary.failed == 2
    assert summary.errors == [
        "+96890000002: Invalid phone number format",
        "+96890000003: provider down",
    ]
    assert len(sender.sent_to) == 5


@pytest.mark.asyncio
async def test_pauses_between_batches_only() -> None:
    sender = FlakySender()

    with patch(
        "contract_service.features.notifications.channels.batch.asyncio.sleep",
        new_callable=AsyncMock,
    ) as mock_sleep:
        await send_in_batches(sender, _recipients(5), CONTENT, batch_size=2, pause_seconds=1.5)

    # 3 batches -> 2 pauses
    assert mock_sleep.await_count == 2
    mock_sleep.assert_awaited_with(1.5)


@pytest.mark.asyncio
async def test_rejects_non_positive_batch_size() -> None:
    with pytest.raises(ValueError, match="batch_size"):
        await send_in_batches(FlakySender(), _recipients(1), CONTENT, batch_size=0)
