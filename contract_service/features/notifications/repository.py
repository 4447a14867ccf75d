"""Repositories for notification rows and recipient profiles."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from contract_service.core.database import BaseRepository
from contract_service.features.notifications.models import Notification, Profile

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


def parse_uuid(value: Any) -> UUID | None:
    """Coerce an id from execution data or an API payload, None if malformed."""
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class NotificationRepository(BaseRepository[Notification]):
    """Data access for in-app notifications."""

    def __init__(self) -> None:
        super().__init__(Notification)

    async def create_for_user(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        title: str,
        message: str,
        type: str,  # noqa: A002
        priority: str,
        action_url: str | None = None,
        extra_data: dict[str, Any] | None = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            title=title,
            message=message,
            type=type,
            priority=priority,
            action_url=action_url,
            extra_data=extra_data,
            read=False,
        )
        return await self.create(session, notification)


class ProfileRepository(BaseRepository[Profile]):
    """Read-only access to profiles for recipient resolution."""

    def __init__(self) -> None:
        super().__init__(Profile)

    async def get_by_any_id(self, session: AsyncSession, value: Any) -> Profile | None:
        """Look up a profile by an id that may arrive as a string."""
        profile_id = parse_uuid(value)
        if profile_id is None:
            return None
        return await self.get(session, profile_id)


_notification_repository: NotificationRepository | None = None
_profile_repository: ProfileRepository | None = None


def get_notification_repository() -> NotificationRepository:
    """Get NotificationRepository singleton instance."""
    global _notification_repository
    if _notification_repository is None:
        _notification_repository = NotificationRepository()
    return _notification_repository


def get_profile_repository() -> ProfileRepository:
    """Get ProfileRepository singleton instance."""
    global _profile_repository
    if _profile_repository is None:
        _profile_repository = ProfileRepository()
    return _profile_repository


__all__ = [
    "NotificationRepository",
    "ProfileRepository",
    "get_notification_repository",
    "get_profile_repository",
    "parse_uuid",
]
