"""API router for the notifications feature.

Endpoints:
- POST /notifications/send - Dispatch a notification to recipients
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from contract_service.core.exceptions import BadRequestException
from contract_service.features.notifications.dependencies import NotificationDispatcherDep
from contract_service.features.notifications.schemas import (
    NotificationResultResponse,
    SendNotificationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post(
    "/send",
    response_model=NotificationResultResponse,
    summary="Send a notification",
    description="Dispatch content to recipients; channels are gated by priority.",
    responses={400: {"description": "A recipient has no address"}},
)
async def send_notification(
    payload: SendNotificationRequest,
    dispatcher: NotificationDispatcherDep,
) -> NotificationResultResponse:
    unreachable = [
        index
        for index, recipient in enumerate(payload.recipients)
        if not (recipient.email or recipient.phone or recipient.user_id)
    ]
    if unreachable:
        raise BadRequestException(
            detail="Each recipient needs an email, phone or user_id",
            type="recipient-without-address",
            extra={"recipients": unreachable},
        )

    result = await dispatcher.send_notification(
        [recipient.to_recipient() for recipient in payload.recipients],
        payload.content.to_content(),
        payload.channels,
    )
    return NotificationResultResponse.model_validate(result)
