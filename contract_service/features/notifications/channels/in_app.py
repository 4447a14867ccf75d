"""In-app channel sender (database-only notifications)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from contract_service.features.notifications.repository import (
    NotificationRepository,
    get_notification_repository,
    parse_uuid,
)
from contract_service.features.notifications.schemas import NotificationChannel, SendResult
from contract_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

TABLE_UNAVAILABLE = "Notifications table not available"
DEFAULT_CATEGORY = "general"


class InAppSender:
    """Sender for in-app notifications.

    Delivery means inserting an unread ``notifications`` row for the
    recipient's user id; the row itself is what the UI displays. Each insert
    is committed on its own session.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repository: NotificationRepository | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._repository = repository or get_notification_repository()

    @property
    def is_configured(self) -> bool:
        return True

    def get_channel_name(self) -> str:
        return NotificationChannel.IN_APP.value

    async def send(
        self,
        recipient: NotificationRecipient,
        content: NotificationContent,
    ) -> SendResult:
        user_id = parse_uuid(recipient.user_id)
        if user_id is None:
            return SendResult(success=False, error=f"Invalid user id: {recipient.user_id}")

        try:
            async with self._session_factory() as session:
                notification = await self._repository.create_for_user(
                    session,
                    user_id=user_id,
                    title=content.title,
                    message=content.message,
                    type=content.category or DEFAULT_CATEGORY,
                    priority=content.priority.value,
                    action_url=content.action_url,
                    extra_data=content.metadata or None,
                )
                await session.commit()
        except SQLAlchemyError as exc:
            logger.warning(
                "In-app notification insert failed",
                extra={"user_id": str(user_id), "error": str(exc), "operation": "in_app.send"},
            )
            return SendResult(success=False, error=TABLE_UNAVAILABLE)

        lazy_logger.debug(lambda: f"in_app.send: notification {notification.id} for user {user_id}")
        return SendResult(success=True, message_id=str(notification.id))


__all__ = ["InAppSender"]
