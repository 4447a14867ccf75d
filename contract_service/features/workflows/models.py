"""SQLAlchemy models for workflow definitions, executions and their targets."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from contract_service.core.database import AuditColumnsMixin, JSONType, UUIDTimestampedBase


class Workflow(UUIDTimestampedBase):
    """A named, versioned workflow definition.

    Read-only at execution time; the engine never mutates it.
    """

    __tablename__ = "workflows"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    trigger_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="manual",
        comment="event, schedule, manual, condition",
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class WorkflowStep(UUIDTimestampedBase):
    """One step of a workflow.

    ``on_success_action`` / ``on_failure_action`` hold ``stop``, ``continue``,
    ``retry`` or the id of another step of the same workflow. Retry and
    timeout columns are stored for the definition but not acted on by the
    engine.
    """

    __tablename__ = "workflow_steps"

    workflow_id: Mapped[UUID] = mapped_column(
        ForeignKey("workflows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_order: Mapped[int] = mapped_column(Integer, nullable=False)
    step_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="notification, data_update, condition, delay, webhook",
    )
    step_config: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    conditions: Mapped[list[dict[str, Any]] | None] = mapped_column(JSONType, nullable=True)
    on_success_action: Mapped[str] = mapped_column(String(100), nullable=False, default="continue")
    on_failure_action: Mapped[str] = mapped_column(String(100), nullable=False, default="stop")
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    retry_delay_seconds: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timeout_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (Index("ix_workflow_steps_workflow_order", "workflow_id", "step_order"),)


class WorkflowExecution(UUIDTimestampedBase, AuditColumnsMixin):
    """One run of a workflow.

    Created as ``running`` and updated exactly once more when the run ends.
    ``execution_data`` is the context accumulated across steps.
    """

    __tablename__ = "workflow_executions"

    workflow_id: Mapped[UUID] = mapped_column(
        ForeignKey("workflows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    trigger_event: Mapped[str | None] = mapped_column(String(100), nullable=True)
    trigger_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        comment="pending, running, completed, failed, cancelled, paused",
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text(), nullable=True)
    execution_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)

    __table_args__ = (Index("ix_workflow_executions_workflow_created", "workflow_id", "created_at"),)


class WorkflowStepExecution(UUIDTimestampedBase):
    """Append-only log entry for one step invocation within an execution."""

    __tablename__ = "workflow_step_executions"

    execution_id: Mapped[UUID] = mapped_column(
        ForeignKey("workflow_executions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_id: Mapped[UUID] = mapped_column(
        ForeignKey("workflow_steps.id", ondelete="CASCADE"),
        nullable=False,
    )
    step_order: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="completed, failed, skipped",
    )
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    result_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text(), nullable=True)


class EmployeeTask(UUIDTimestampedBase):
    """Task assigned to an employer-employee relationship (e.g., onboarding)."""

    __tablename__ = "employee_tasks"

    employer_employee_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    task_type: Mapped[str] = mapped_column(String(50), nullable=False, default="training")
    due_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class EmployeeDocument(UUIDTimestampedBase):
    """Employee document (passport, visa, work permit, ...) with expiry tracking."""

    __tablename__ = "employee_documents"

    employee_id: Mapped[UUID] = mapped_column(nullable=False, index=True)
    document_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


__all__ = [
    "EmployeeDocument",
    "EmployeeTask",
    "Workflow",
    "WorkflowExecution",
    "WorkflowStep",
    "WorkflowStepExecution",
]
