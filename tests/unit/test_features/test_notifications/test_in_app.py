"""Tests for InAppSender against an in-memory database."""

from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from sqlalchemy import select

from contract_service.features.notifications.channels import InAppSender
from contract_service.features.notifications.models import Notification
from contract_service.features.notifications.schemas import (
    NotificationContent,
    NotificationPriority,
    NotificationRecipient,
)


@pytest.mark.asyncio
async def test_inserts_unread_notification(session_factory) -> None:
    user_id = uuid4()
    sender = InAppSender(session_factory)
    content = NotificationContent(
        title="Document expiring",
        message="Passport expires soon",
        priority=NotificationPriority.HIGH,
        category="documents",
        action_url="/documents/1",
        metadata={"document_id": "1"},
    )

    result = await sender.send(NotificationRecipient(user_id=str(user_id)), content)

    assert result.success is True
    async with session_factory() as session:
        row = (await session.execute(select(Notification))).scalar_one()
    assert str(row.id) == result.message_id
    assert row.user_id == user_id
    assert row.type == "documents"
    assert row.priority == "high"
    assert row.read is False
    assert row.extra_data == {"document_id": "1"}


@pytest.mark.asyncio
async def test_category_defaults_to_general(session_factory) -> None:
    sender = InAppSender(session_factory)

    result = await sender.send(
        NotificationRecipient(user_id=str(uuid4())),
        NotificationContent(title="Hello", message="World"),
    )

    async with session_factory() as session:
        row = await session.get(Notification, UUID(result.message_id))
    assert row.type == "general"


@pytest.mark.asyncio
async def test_invalid_user_id_fails_without_insert(session_factory) -> None:
    sender = InAppSender(session_factory)

    result = await sender.send(NotificationRecipient(user_id="not-a-uuid"), NotificationContent(title="t", message="m"))

    assert result.success is False
    assert result.error == "Invalid user id: not-a-uuid"
    async with session_factory() as session:
        assert (await session.execute(select(Notification))).first() is None


@pytest.mark.asyncio
async def test_missing_table_reports_unavailable(db_engine, session_factory) -> None:
    async with db_engine.begin() as conn:
        await conn.run_sync(Notification.__table__.drop)
    sender = InAppSender(session_factory)

    result = await sender.send(NotificationRecipient(user_id=str(uuid4())), NotificationContent(title="t", message="m"))

    assert result.success is False
    assert result.error == "Notifications table not available"
