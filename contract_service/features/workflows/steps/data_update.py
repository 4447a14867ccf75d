"""Data-update step: one of a fixed set of named write actions."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from contract_service.features.notifications.repository import parse_uuid
from contract_service.features.workflows.models import EmployeeTask
from contract_service.features.workflows.repository import (
    EmployeeDocumentRepository,
    EmployeeTaskRepository,
)
from contract_service.features.workflows.schemas import StepResult

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.features.workflows.models import WorkflowStep

logger = logging.getLogger(__name__)


class DataUpdateStepExecutor:
    """Runs ``step_config["action"]``.

    Actions:
        create_onboarding_tasks: insert ``step_config["tasks"]`` as pending
            tasks for the context's employer_employee_id
        update_document_status: set the context document's status to
            ``step_config["status"]``
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._tasks = EmployeeTaskRepository()
        self._documents = EmployeeDocumentRepository()

    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        config = step.step_config or {}
        action = config.get("action")

        if action == "create_onboarding_tasks":
            return await self._create_onboarding_tasks(config, execution_data)
        if action == "update_document_status":
            return await self._update_document_status(config, execution_data)
        return StepResult(success=False, error=f"Unknown action: {action}")

    async def _create_onboarding_tasks(
        self,
        config: dict[str, Any],
        execution_data: dict[str, Any],
    ) -> StepResult:
        if not (execution_data.get("employee_id") and execution_data.get("employer_id")):
            return StepResult(success=True, data={"tasks_created": 0})

        employer_employee_id = parse_uuid(execution_data.get("employer_employee_id"))
        if employer_employee_id is None:
            return StepResult(success=False, error="Missing employer_employee_id in execution data")

        now = datetime.now(UTC)
        tasks = [
            EmployeeTask(
                employer_employee_id=employer_employee_id,
                title=item["title"],
                description=item.get("description"),
                priority=item.get("priority") or "medium",
                status="pending",
                task_type=item.get("task_type") or "training",
                due_date=(
                    now + timedelta(days=int(item["due_in_days"]))
                    if item.get("due_in_days") is not None
                    else None
                ),
            )
            for item in config.get("tasks") or []
        ]

        if tasks:
            async with self._session_factory() as session:
                await self._tasks.create_many(session, tasks)
                await session.commit()

        logger.info(
            "Onboarding tasks created",
            extra={
                "employer_employee_id": str(employer_employee_id),
                "count": len(tasks),
                "operation": "workflows.step.data_update",
            },
        )
        return StepResult(success=True, data={"tasks_created": len(tasks)})

    async def _update_document_status(
        self,
        config: dict[str, Any],
        execution_data: dict[str, Any],
    ) -> StepResult:
        document_id = parse_uuid(execution_data.get("document_id"))
        if document_id is None:
            return StepResult(success=True, data={"document_updated": False})

        async with self._session_factory() as session:
            document = await self._documents.get(session, document_id)
            if document is None:
                return StepResult(success=True, data={"document_updated": False})
            document.status = config.get("status") or document.status
            await session.commit()

        return StepResult(success=True, data={"document_updated": True})


__all__ = ["DataUpdateStepExecutor"]
