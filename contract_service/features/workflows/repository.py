"""Repositories for workflow definitions, executions and step targets."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from contract_service.core.database import BaseRepository
from contract_service.features.workflows.models import (
    EmployeeDocument,
    EmployeeTask,
    Workflow,
    WorkflowExecution,
    WorkflowStep,
    WorkflowStepExecution,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession


class WorkflowRepository(BaseRepository[Workflow]):
    def __init__(self) -> None:
        super().__init__(Workflow)

    async def get_active(self, session: AsyncSession, workflow_id: UUID) -> Workflow | None:
        """Return the workflow only if it exists and is active."""
        stmt = select(Workflow).where(Workflow.id == workflow_id, Workflow.is_active.is_(True))
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


class WorkflowStepRepository(BaseRepository[WorkflowStep]):
    def __init__(self) -> None:
        super().__init__(WorkflowStep)

    async def list_for_workflow(
        self,
        session: AsyncSession,
        workflow_id: UUID,
    ) -> Sequence[WorkflowStep]:
        """Steps in execution order; equal step_order keeps insertion order."""
        stmt = (
            select(WorkflowStep)
            .where(WorkflowStep.workflow_id == workflow_id)
            .order_by(WorkflowStep.step_order, WorkflowStep.created_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class WorkflowExecutionRepository(BaseRepository[WorkflowExecution]):
    def __init__(self) -> None:
        super().__init__(WorkflowExecution)

    async def list_for_workflow(
        self,
        session: AsyncSession,
        workflow_id: UUID,
        *,
        limit: int = 50,
    ) -> Sequence[WorkflowExecution]:
        """Most recent executions first."""
        stmt = (
            select(WorkflowExecution)
            .where(WorkflowExecution.workflow_id == workflow_id)
            .order_by(WorkflowExecution.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class WorkflowStepExecutionRepository(BaseRepository[WorkflowStepExecution]):
    def __init__(self) -> None:
        super().__init__(WorkflowStepExecution)

    async def list_for_execution(
        self,
        session: AsyncSession,
        execution_id: UUID,
    ) -> Sequence[WorkflowStepExecution]:
        """Step log in the order it was written."""
        stmt = (
            select(WorkflowStepExecution)
            .where(WorkflowStepExecution.execution_id == execution_id)
            .order_by(WorkflowStepExecution.created_at, WorkflowStepExecution.started_at)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class EmployeeTaskRepository(BaseRepository[EmployeeTask]):
    def __init__(self) -> None:
        super().__init__(EmployeeTask)

    async def find_overdue(self, session: AsyncSession, now: datetime) -> Sequence[EmployeeTask]:
        """Pending tasks whose due date has passed."""
        stmt = (
            select(EmployeeTask)
            .where(EmployeeTask.due_date < now, EmployeeTask.status == "pending")
            .order_by(EmployeeTask.due_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


class EmployeeDocumentRepository(BaseRepository[EmployeeDocument]):
    def __init__(self) -> None:
        super().__init__(EmployeeDocument)

    async def find_expiring(
        self,
        session: AsyncSession,
        now: datetime,
        until: datetime,
    ) -> Sequence[EmployeeDocument]:
        """Documents expiring between now and ``until`` (inclusive)."""
        stmt = (
            select(EmployeeDocument)
            .where(EmployeeDocument.expiry_date >= now, EmployeeDocument.expiry_date <= until)
            .order_by(EmployeeDocument.expiry_date)
        )
        result = await session.execute(stmt)
        return result.scalars().all()


__all__ = [
    "EmployeeDocumentRepository",
    "EmployeeTaskRepository",
    "WorkflowExecutionRepository",
    "WorkflowRepository",
    "WorkflowStepExecutionRepository",
    "WorkflowStepRepository",
]
