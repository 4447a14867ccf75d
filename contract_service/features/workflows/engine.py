"""Workflow engine: runs a workflow's steps and records the execution.

Flow of one run:
1. Load the active workflow and its ordered steps (no execution row if either is missing)
2. Insert a ``running`` execution seeded with the trigger data
3. Walk the steps with a cursor: evaluate guards, call the step executor,
   append a step-execution row, apply the failure policy, merge result data,
   follow ``next_step`` jumps
4. Mark the execution ``completed`` or ``failed``

Every write is committed on its own session; there is no enclosing
transaction across steps.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import SQLAlchemyError

from contract_service.features.notifications.repository import parse_uuid
from contract_service.features.workflows.conditions import evaluate_conditions
from contract_service.features.workflows.models import WorkflowExecution, WorkflowStepExecution
from contract_service.features.workflows.repository import (
    WorkflowExecutionRepository,
    WorkflowRepository,
    WorkflowStepExecutionRepository,
    WorkflowStepRepository,
)
from contract_service.features.workflows.schemas import (
    ExecutionStatus,
    StepAction,
    StepExecutionStatus,
    StepResult,
    WorkflowRunResult,
)
from contract_service.infra.logging import get_lazy_logger, remove_from_log_context, set_log_context
from contract_service.infra.metrics import workflow_executions_total, workflow_steps_total

if TYPE_CHECKING:
    from collections.abc import Sequence
    from uuid import UUID

    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    from contract_service.core.settings import WorkflowSettings
    from contract_service.features.workflows.models import Workflow, WorkflowStep
    from contract_service.features.workflows.steps import StepRegistry

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

WORKFLOW_NOT_FOUND = "Workflow not found or inactive"
WORKFLOW_HAS_NO_STEPS = "Workflow has no steps"
STEP_LIMIT_EXCEEDED = "Step limit exceeded"


class WorkflowEngine:
    """Executes database-defined workflows.

    Example:
        engine = WorkflowEngine(session_factory, registry, get_workflow_settings())
        result = await engine.execute_workflow(workflow_id, {"employee_id": "..."})
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registry: StepRegistry,
        settings: WorkflowSettings,
    ) -> None:
        self._session_factory = session_factory
        self._registry = registry
        self._settings = settings
        self._workflows = WorkflowRepository()
        self._steps = WorkflowStepRepository()
        self._executions = WorkflowExecutionRepository()
        self._step_executions = WorkflowStepExecutionRepository()

    async def execute_workflow(
        self,
        workflow_id: UUID | str,
        trigger_data: dict[str, Any] | None = None,
        user_id: str | None = None,
        trigger_event: str | None = None,
    ) -> WorkflowRunResult:
        """Run a workflow to completion.

        Args:
            workflow_id: Workflow to run
            trigger_data: Input payload, also the initial execution context
            user_id: Initiating user, stored as the execution's created_by
            trigger_event: Event name; defaults to the workflow's trigger type

        Returns:
            WorkflowRunResult; failures are reported here, never raised
        """
        workflow_uuid = parse_uuid(workflow_id)
        if workflow_uuid is None:
            return WorkflowRunResult(success=False, error=WORKFLOW_NOT_FOUND)

        execution: WorkflowExecution | None = None
        try:
            async with self._session_factory() as session:
                workflow = await self._workflows.get_active(session, workflow_uuid)
                if workflow is None:
                    logger.info(
                        "Workflow not runnable",
                        extra={"workflow_id": str(workflow_uuid), "operation": "workflows.execute"},
                    )
                    return WorkflowRunResult(success=False, error=WORKFLOW_NOT_FOUND)

                steps = list(await self._steps.list_for_workflow(session, workflow_uuid))
                if not steps:
                    return WorkflowRunResult(success=False, error=WORKFLOW_HAS_NO_STEPS)

                execution = await self._executions.create(
                    session,
                    WorkflowExecution(
                        workflow_id=workflow.id,
                        trigger_event=trigger_event or workflow.trigger_type,
                        trigger_data=dict(trigger_data or {}),
                        status=ExecutionStatus.RUNNING.value,
                        started_at=_now(),
                        execution_data=dict(trigger_data or {}),
                        created_by=user_id,
                    ),
                )
                await session.commit()

            set_log_context(workflow_id=str(workflow.id), execution_id=str(execution.id))
            logger.info(
                "Workflow execution started",
                extra={"steps": len(steps), "operation": "workflows.execute"},
            )
            return await self._run_steps(workflow, steps, execution, dict(trigger_data or {}))

        except Exception as exc:
            logger.exception(
                "Workflow execution crashed",
                extra={"workflow_id": str(workflow_uuid), "operation": "workflows.execute"},
            )
            error = str(exc) or exc.__class__.__name__
            if execution is not None:
                await self._mark_failed(execution.id, error)
            workflow_executions_total.labels(status=ExecutionStatus.FAILED.value).inc()
            return WorkflowRunResult(
                success=False,
                execution_id=str(execution.id) if execution is not None else None,
                error=error,
            )
        finally:
            remove_from_log_context("workflow_id", "execution_id", "step_id")

    async def _run_steps(
        self,
        workflow: Workflow,
        steps: Sequence[WorkflowStep],
        execution: WorkflowExecution,
        context: dict[str, Any],
    ) -> WorkflowRunResult:
        positions = {str(step.id): index for index, step in enumerate(steps)}
        execution_id = str(execution.id)
        invocations = 0
        index = 0

        while index < len(steps):
            if invocations >= self._settings.max_step_invocations:
                logger.warning(
                    "Workflow exceeded step limit",
                    extra={
                        "max_step_invocations": self._settings.max_step_invocations,
                        "operation": "workflows.execute",
                    },
                )
                return await self._finish(execution, ExecutionStatus.FAILED, context, STEP_LIMIT_EXCEEDED)
            invocations += 1

            step = steps[index]
            set_log_context(step_id=str(step.id))
            started_at = _now()

            if evaluate_conditions(step.conditions, context):
                result = await self._registry.execute(step, execution_id, dict(context))
                status = StepExecutionStatus.COMPLETED if result.success else StepExecutionStatus.FAILED
            else:
                result = StepResult(success=True, data={"skipped": True}, next_step=step.on_failure_action)
                status = StepExecutionStatus.SKIPPED

            await self._record_step(execution.id, step, status, started_at, result)

            lazy_logger.debug(
                lambda step=step, status=status: f"Step {step.step_order} ({step.step_type}) -> {status.value}"
            )

            if not result.success and self._is_fatal(step):
                return await self._finish(execution, ExecutionStatus.FAILED, context, result.error)

            if result.data:
                context.update(result.data)

            if result.next_step and result.next_step in positions:
                index = positions[result.next_step]
            else:
                index += 1

        return await self._finish(execution, ExecutionStatus.COMPLETED, context)

    @staticmethod
    def _is_fatal(step: WorkflowStep) -> bool:
        """Whether a failure of this step ends the run.

        ``retry`` with a positive retry_count also ends the run: retries are
        declared on steps but not performed.
        """
        action = step.on_failure_action
        if action == StepAction.STOP:
            return True
        return action == StepAction.RETRY and (step.retry_count or 0) > 0

    async def _record_step(
        self,
        execution_id: UUID,
        step: WorkflowStep,
        status: StepExecutionStatus,
        started_at: datetime,
        result: StepResult,
    ) -> None:
        async with self._session_factory() as session:
            await self._step_executions.create(
                session,
                WorkflowStepExecution(
                    execution_id=execution_id,
                    step_id=step.id,
                    step_order=step.step_order,
                    status=status.value,
                    started_at=started_at,
                    completed_at=_now(),
                    result_data=result.data,
                    error_message=result.error,
                ),
            )
            await session.commit()

        workflow_steps_total.labels(step_type=step.step_type, status=status.value).inc()
        if status is StepExecutionStatus.FAILED:
            logger.warning(
                "Workflow step failed",
                extra={
                    "step_type": step.step_type,
                    "step_order": step.step_order,
                    "error": result.error,
                    "on_failure_action": step.on_failure_action,
                    "operation": "workflows.execute_step",
                },
            )

    async def _finish(
        self,
        execution: WorkflowExecution,
        status: ExecutionStatus,
        context: dict[str, Any],
        error: str | None = None,
    ) -> WorkflowRunResult:
        async with self._session_factory() as session:
            row = await self._executions.get_or_raise(session, execution.id)
            row.status = status.value
            row.completed_at = _now()
            row.error_message = error
            row.execution_data = context
            await session.commit()

        workflow_executions_total.labels(status=status.value).inc()
        success = status is ExecutionStatus.COMPLETED
        logger.log(
            logging.INFO if success else logging.WARNING,
            "Workflow execution finished",
            extra={"status": status.value, "error": error, "operation": "workflows.execute"},
        )
        return WorkflowRunResult(success=success, execution_id=str(execution.id), error=error)

    async def _mark_failed(self, execution_id: UUID, error: str) -> None:
        """Best-effort failure marking after an unexpected crash."""
        try:
            async with self._session_factory() as session:
                row = await self._executions.get(session, execution_id)
                if row is None:
                    return
                row.status = ExecutionStatus.FAILED.value
                row.completed_at = _now()
                row.error_message = error
                await session.commit()
        except SQLAlchemyError:
            logger.exception(
                "Could not mark execution as failed",
                extra={"execution_id": str(execution_id), "operation": "workflows.execute"},
            )

    async def get_execution_history(
        self,
        workflow_id: UUID | str,
        limit: int | None = None,
    ) -> Sequence[WorkflowExecution]:
        """Executions of a workflow, newest first."""
        workflow_uuid = parse_uuid(workflow_id)
        if workflow_uuid is None:
            return []
        async with self._session_factory() as session:
            return await self._executions.list_for_workflow(
                session,
                workflow_uuid,
                limit=limit or self._settings.history_limit,
            )

    async def get_execution(self, execution_id: UUID | str) -> WorkflowExecution | None:
        execution_uuid = parse_uuid(execution_id)
        if execution_uuid is None:
            return None
        async with self._session_factory() as session:
            return await self._executions.get(session, execution_uuid)

    async def get_step_executions(self, execution_id: UUID | str) -> Sequence[WorkflowStepExecution]:
        """Step log of one execution in write order."""
        execution_uuid = parse_uuid(execution_id)
        if execution_uuid is None:
            return []
        async with self._session_factory() as session:
            return await self._step_executions.list_for_execution(session, execution_uuid)


def _now() -> datetime:
    return datetime.now(UTC)


__all__ = ["STEP_LIMIT_EXCEEDED", "WORKFLOW_HAS_NO_STEPS", "WORKFLOW_NOT_FOUND", "WorkflowEngine"]
