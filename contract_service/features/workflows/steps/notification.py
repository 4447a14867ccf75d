"""Notification step: resolve a recipient from the context and dispatch."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from contract_service.features.notifications.repository import (
    ProfileRepository,
    get_profile_repository,
)
from contract_service.features.notifications.schemas import (
    NotificationChannel,
    NotificationContent,
    NotificationPriority,
    NotificationRecipient,
)
from contract_service.features.workflows.schemas import StepResult

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.features.notifications.dispatcher import NotificationDispatcher
    from contract_service.features.workflows.models import WorkflowStep

logger = logging.getLogger(__name__)

DEFAULT_CHANNELS = (NotificationChannel.EMAIL, NotificationChannel.IN_APP)
DEFAULT_CATEGORY = "workflow"


class NotificationStepExecutor:
    """Sends a notification to the employee or employer named in the context.

    ``step_config`` keys: recipient (employee|employer), title, message, html,
    priority, category, action_url, channels.
    """

    def __init__(
        self,
        dispatcher: NotificationDispatcher,
        session_factory: async_sessionmaker[AsyncSession],
        profiles: ProfileRepository | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._session_factory = session_factory
        self._profiles = profiles or get_profile_repository()

    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        config = step.step_config or {}
        recipients = await self._resolve_recipients(config.get("recipient"), execution_data)
        if not recipients:
            return StepResult(success=False, error="No recipients found")

        content = NotificationContent(
            title=config.get("title") or execution_data.get("title") or "Notification",
            message=config.get("message") or execution_data.get("message") or "",
            html=config.get("html"),
            priority=_priority(config.get("priority"), execution_id),
            category=config.get("category") or DEFAULT_CATEGORY,
            action_url=config.get("action_url"),
            metadata=dict(execution_data),
        )
        channels = config.get("channels") or list(DEFAULT_CHANNELS)

        result = await self._dispatcher.send_notification(recipients, content, channels)

        logger.info(
            "Workflow notification sent",
            extra={
                "execution_id": execution_id,
                "sent": result.sent.total,
                "failed": result.failed.total,
                "operation": "workflows.step.notification",
            },
        )
        return StepResult(
            success=result.success,
            data={"notifications_sent": result.sent.total},
            error="; ".join(result.errors) or None,
        )

    async def _resolve_recipients(
        self,
        recipient_type: str | None,
        execution_data: dict[str, Any],
    ) -> list[NotificationRecipient]:
        if recipient_type == "employee":
            profile_ref = execution_data.get("employee_id")
        elif recipient_type == "employer":
            profile_ref = execution_data.get("employer_id")
        else:
            return []
        if not profile_ref:
            return []

        async with self._session_factory() as session:
            profile = await self._profiles.get_by_any_id(session, profile_ref)
        if profile is None:
            return []

        return [
            NotificationRecipient(
                user_id=str(profile.id),
                email=profile.email,
                # Employer lookups deliberately carry no phone number
                phone=profile.phone if recipient_type == "employee" else None,
                name=profile.full_name,
            )
        ]


def _priority(value: Any, execution_id: str) -> NotificationPriority:
    """Configured priority; unknown values are sent as medium."""
    if not value:
        return NotificationPriority.MEDIUM
    try:
        return NotificationPriority(value)
    except ValueError:
        logger.warning(
            "Unknown notification priority, using medium",
            extra={"execution_id": execution_id, "priority": value, "operation": "workflows.step.notification"},
        )
        return NotificationPriority.MEDIUM


__all__ = ["NotificationStepExecutor"]
