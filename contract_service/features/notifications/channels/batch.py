"""Throttled bulk sends through a single channel.

Recipients are sent to in fixed-size batches. Sends within a batch run
concurrently; a fixed pause separates batches to stay under provider rate
limits. There is no retry and no persistence of progress.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from contract_service.features.notifications.schemas import BatchSendSummary, SendResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contract_service.features.notifications.channels.base import ChannelSender
    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )

logger = logging.getLogger(__name__)


def _address(recipient: NotificationRecipient) -> str:
    return recipient.phone or recipient.email or recipient.user_id or "unknown"


async def send_in_batches(
    sender: ChannelSender,
    recipients: Sequence[NotificationRecipient],
    content: NotificationContent,
    *,
    batch_size: int = 10,
    pause_seconds: float = 1.0,
) -> BatchSendSummary:
    """Send ``content`` to every recipient through ``sender``.

    Args:
        sender: Channel sender to use for every recipient
        recipients: Targets; the sender picks the address it needs
        content: Shared content
        batch_size: Recipients per concurrent batch
        pause_seconds: Sleep between consecutive batches

    Returns:
        BatchSendSummary with sent/failed counts and per-recipient errors
    """
    if batch_size < 1:
        msg = "batch_size must be at least 1"
        raise ValueError(msg)

    summary = BatchSendSummary()
    channel = sender.get_channel_name()

    for start in range(0, len(recipients), batch_size):
        if start and pause_seconds > 0:
            await asyncio.sleep(pause_seconds)

        batch = recipients[start : start + batch_size]
        outcomes = await asyncio.gather(
            *(sender.send(recipient, content) for recipient in batch),
            return_exceptions=True,
        )

        for recipient, outcome in zip(batch, outcomes, strict=True):
            if isinstance(outcome, SendResult) and outcome.success:
                summary.sent += 1
                continue
            summary.failed += 1
            error = str(outcome) if isinstance(outcome, BaseException) else outcome.error
            summary.errors.append(f"{_address(recipient)}: {error}")

    logger.info(
        "Bulk send finished",
        extra={
            "channel": channel,
            "recipients": len(recipients),
            "sent": summary.sent,
            "failed": summary.failed,
            "operation": "notifications.send_in_batches",
        },
    )
    return summary


__all__ = ["send_in_batches"]
