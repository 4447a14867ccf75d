"""Default step registry wiring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from contract_service.features.workflows.schemas import StepType
from contract_service.features.workflows.steps.base import StepRegistry
from contract_service.features.workflows.steps.condition import ConditionStepExecutor
from contract_service.features.workflows.steps.data_update import DataUpdateStepExecutor
from contract_service.features.workflows.steps.delay import DelayStepExecutor
from contract_service.features.workflows.steps.notification import NotificationStepExecutor
from contract_service.features.workflows.steps.webhook import WebhookStepExecutor

if TYPE_CHECKING:
    import httpx
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.core.settings import WorkflowSettings
    from contract_service.features.notifications.dispatcher import NotificationDispatcher


def build_default_registry(
    session_factory: async_sessionmaker[AsyncSession],
    dispatcher: NotificationDispatcher,
    settings: WorkflowSettings,
    *,
    webhook_transport: httpx.AsyncBaseTransport | None = None,
) -> StepRegistry:
    """Registry with the built-in notification, data_update, condition, delay and webhook steps."""
    registry = StepRegistry()
    registry.register(StepType.NOTIFICATION, NotificationStepExecutor(dispatcher, session_factory))
    registry.register(StepType.DATA_UPDATE, DataUpdateStepExecutor(session_factory))
    registry.register(StepType.CONDITION, ConditionStepExecutor(session_factory))
    registry.register(StepType.DELAY, DelayStepExecutor())
    registry.register(
        StepType.WEBHOOK,
        WebhookStepExecutor(settings.webhook_timeout_seconds, transport=webhook_transport),
    )
    return registry


__all__ = ["build_default_registry"]
