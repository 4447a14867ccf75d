"""Condition step: one of a fixed set of named read-only checks."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

from contract_service.features.workflows.repository import (
    EmployeeDocumentRepository,
    EmployeeTaskRepository,
)
from contract_service.features.workflows.schemas import StepResult

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.features.workflows.models import WorkflowStep

DEFAULT_EXPIRY_WARNING_DAYS = (30, 14, 7)


class ConditionStepExecutor:
    """Runs ``step_config["condition"]`` and returns the query result as context data.

    Conditions:
        find_overdue_tasks: pending tasks past their due date
        check_expiring_documents: documents expiring within the largest
            of ``step_config["days_before"]`` (default 30, 14, 7) days
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
        condition = config.get("condition")

        if condition == "find_overdue_tasks":
            return await self._find_overdue_tasks()
        if condition == "check_expiring_documents":
            return await self._check_expiring_documents(config)
        return StepResult(success=False, error=f"Unknown condition: {condition}")

    async def _find_overdue_tasks(self) -> StepResult:
        async with self._session_factory() as session:
            tasks = await self._tasks.find_overdue(session, datetime.now(UTC))

        overdue = [
            {
                "id": str(task.id),
                "title": task.title,
                "employer_employee_id": str(task.employer_employee_id),
            }
            for task in tasks
        ]
        return StepResult(success=True, data={"overdue_tasks": overdue})

    async def _check_expiring_documents(self, config: dict[str, Any]) -> StepResult:
        window_days = max(int(days) for days in config.get("days_before") or DEFAULT_EXPIRY_WARNING_DAYS)
        now = datetime.now(UTC)

        async with self._session_factory() as session:
            documents = await self._documents.find_expiring(session, now, now + timedelta(days=window_days))

        expiring = [
            {
                "id": str(document.id),
                "employee_id": str(document.employee_id),
                "document_type": document.document_type,
                "expiry_date": document.expiry_date.isoformat() if document.expiry_date else None,
            }
            for document in documents
        ]
        return StepResult(
            success=True,
            data={"documents_checked": True, "expiring_documents": expiring},
        )


__all__ = ["ConditionStepExecutor"]
