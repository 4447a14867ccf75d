"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine and session factory with all tables
    - Notification Fixtures: recording channel senders and provider settings
    - Workflow Fixtures: helpers to seed workflows and steps
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from contract_service.core.settings import (
    EmailSettings,
    NotificationSettings,
    TwilioSettings,
    WorkflowSettings,
)
from contract_service.features.notifications.schemas import SendResult
from contract_service.infra.database import build_session_factory

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

    from contract_service.features.notifications.schemas import (
        NotificationContent,
        NotificationRecipient,
    )
    from contract_service.features.workflows.models import Workflow, WorkflowStep

# Ensure tests run without external providers
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite and all tables.

    A single shared connection keeps the in-memory database alive across the
    sessions the services open for each write.
    """
    from sqlalchemy.pool import StaticPool

    from contract_service.core.database import Base

    import contract_service.features.notifications.models  # noqa: F401
    import contract_service.features.workflows.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory test database."""
    return build_session_factory(db_engine)


# ============================================================================
# Notification Fixtures
# ============================================================================


class RecordingSender:
    """Channel sender double that records calls and returns a fixed result."""

    def __init__(
        self,
        name: str,
        *,
        configured: bool = True,
        result: SendResult | None = None,
        raises: Exception | None = None,
    ) -> None:
        self.name = name
        self.configured = configured
        self.result = result or SendResult(success=True, message_id=f"{name}-id")
        self.raises = raises
        self.calls: list[tuple[NotificationRecipient, NotificationContent]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def get_channel_name(self) -> str:
        return self.name

    async def send(self, recipient: NotificationRecipient, content: NotificationContent) -> SendResult:
        self.calls.append((recipient, content))
        if self.raises is not None:
            raise self.raises
        return self.result


@pytest.fixture
def recording_senders() -> dict[str, RecordingSender]:
    """One recording sender per channel, all configured and succeeding."""
    return {
        "email": RecordingSender("email"),
        "sms": RecordingSender("sms"),
        "whatsapp": RecordingSender("whatsapp"),
        "in_app": RecordingSender("in_app"),
    }


@pytest.fixture
def email_settings() -> EmailSettings:
    return EmailSettings(api_key="re_test_key", from_email="Contracts <noreply@example.com>")


@pytest.fixture
def twilio_settings() -> TwilioSettings:
    return TwilioSettings(
        account_sid="AC123",
        auth_token="secret-token",
        phone_number="+15005550006",
        whatsapp_number="+14155238886",
    )


@pytest.fixture
def notification_settings() -> NotificationSettings:
    return NotificationSettings(business_name="SmartPRO Business Hub")


@pytest.fixture
def workflow_settings() -> WorkflowSettings:
    return WorkflowSettings()


# ============================================================================
# Workflow Fixtures
# ============================================================================


@pytest.fixture
def seed_workflow(session_factory: async_sessionmaker[AsyncSession]):
    """Insert a workflow and its steps; returns (workflow, steps).

    Example:
        workflow, steps = await seed_workflow([
            {"step_type": "delay", "step_config": {"delay_seconds": 0}},
        ])
    """
    from contract_service.features.workflows.models import Workflow, WorkflowStep

    async def _seed(
        step_specs: list[dict[str, Any]],
        *,
        is_active: bool = True,
        name: str = "Test workflow",
    ) -> tuple[Workflow, list[WorkflowStep]]:
        async with session_factory() as session:
            workflow = Workflow(name=name, is_active=is_active, trigger_type="manual")
            session.add(workflow)
            await session.flush()

            steps = []
            for order, fields in enumerate(step_specs, start=1):
                step = WorkflowStep(workflow_id=workflow.id, step_order=fields.pop("step_order", order), **fields)
                session.add(step)
                steps.append(step)
            await session.commit()
        return workflow, steps

    return _seed
