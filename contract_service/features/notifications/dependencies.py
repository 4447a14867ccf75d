"""FastAPI dependencies for the notifications feature.

Example usage:
    @router.post("/notifications/send")
    async def send(payload: SendNotificationRequest, dispatcher: NotificationDispatcherDep):
        result = await dispatcher.send_notification(...)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from contract_service.core.dependencies import SessionFactoryDep
from contract_service.core.settings import (
    get_email_settings,
    get_notification_settings,
    get_twilio_settings,
)
from contract_service.features.notifications.dispatcher import (
    NotificationDispatcher,
    build_notification_dispatcher,
)


def get_notification_dispatcher(session_factory: SessionFactoryDep) -> NotificationDispatcher:
    """Build a dispatcher wired to the configured providers."""
    return build_notification_dispatcher(
        session_factory,
        email_settings=get_email_settings(),
        twilio_settings=get_twilio_settings(),
        notification_settings=get_notification_settings(),
    )


NotificationDispatcherDep = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]

__all__ = ["NotificationDispatcherDep", "get_notification_dispatcher"]
