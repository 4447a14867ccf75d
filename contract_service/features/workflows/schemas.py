"""Value types and API schemas for workflow execution."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TriggerType(StrEnum):
    EVENT = "event"
    SCHEDULE = "schedule"
    MANUAL = "manual"
    CONDITION = "condition"


class StepType(StrEnum):
    NOTIFICATION = "notification"
    DATA_UPDATE = "data_update"
    CONDITION = "condition"
    DELAY = "delay"
    WEBHOOK = "webhook"


class ExecutionStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    PAUSED = "paused"


class StepExecutionStatus(StrEnum):
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class StepAction(StrEnum):
    """Reserved values of on_success_action / on_failure_action.

    Any other value is interpreted as the id of a step to jump to.
    """

    STOP = "stop"
    CONTINUE = "continue"
    RETRY = "retry"


@dataclass
class StepResult:
    """Outcome of one step executor call.

    Attributes:
        success: Whether the step did its work
        data: Keys shallow-merged into the execution context
        error: Error description if failed
        next_step: Id of the step to jump to instead of advancing
    """

    success: bool
    data: dict[str, Any] | None = None
    error: str | None = None
    next_step: str | None = None


@dataclass
class WorkflowRunResult:
    """Outcome of execute_workflow."""

    success: bool
    execution_id: str | None = None
    error: str | None = None


# ============================================================================
# HTTP Schemas
# ============================================================================


class ExecuteWorkflowRequest(BaseModel):
    """Payload for POST /workflows/{workflow_id}/execute."""

    trigger_data: dict[str, Any] = Field(
        default_factory=dict,
        description="Input payload; seeds the execution context",
    )
    trigger_event: str | None = Field(
        default=None,
        max_length=100,
        description="Event name; defaults to the workflow's trigger type",
    )
    user_id: str | None = Field(default=None, max_length=255, description="Initiating user")


class WorkflowRunResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    execution_id: str | None = None
    error: str | None = None


class WorkflowExecutionResponse(BaseModel):
    """One workflow execution as returned by the history endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workflow_id: UUID
    trigger_event: str | None
    trigger_data: dict[str, Any] | None
    status: str
    started_at: datetime | None
    completed_at: datetime | None
    error_message: str | None
    execution_data: dict[str, Any] | None
    created_by: str | None
    created_at: datetime


class WorkflowStepExecutionResponse(BaseModel):
    """One entry of an execution's step log."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    execution_id: UUID
    step_id: UUID
    step_order: int
    status: str
    started_at: datetime | None
    completed_at: datetime | None
    result_data: dict[str, Any] | None
    error_message: str | None


__all__ = [
    "ExecuteWorkflowRequest",
    "ExecutionStatus",
    "StepAction",
    "StepExecutionStatus",
    "StepResult",
    "StepType",
    "TriggerType",
    "WorkflowExecutionResponse",
    "WorkflowRunResponse",
    "WorkflowRunResult",
    "WorkflowStepExecutionResponse",
]
