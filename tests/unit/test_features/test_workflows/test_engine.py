"""Tests for WorkflowEngine step sequencing, failure policy and persistence."""

from __future__ import annotations

from uuid import uuid4

import httpx
import pytest
from sqlalchemy import select

from contract_service.core.settings import WorkflowSettings
from contract_service.features.notifications.dispatcher import NotificationDispatcher
from contract_service.features.workflows.engine import (
    STEP_LIMIT_EXCEEDED,
    WORKFLOW_HAS_NO_STEPS,
    WORKFLOW_NOT_FOUND,
    WorkflowEngine,
)
from contract_service.features.workflows.models import WorkflowExecution
from contract_service.features.workflows.schemas import StepResult
from contract_service.features.workflows.steps import StepRegistry, WebhookStepExecutor, build_default_registry


class RecordingExecutor:
    """Step executor double returning a fixed result and recording its inputs."""

    def __init__(self, result: StepResult | None = None) -> None:
        self.result = result or StepResult(success=True)
        self.calls: list[dict] = []

    async def execute(self, step, execution_id, execution_data) -> StepResult:
        self.calls.append({"step_order": step.step_order, "context": execution_data})
        return self.result


class JumpOnceExecutor(RecordingExecutor):
    """Returns ``next_step=target`` on its first call only, then plain success."""

    def __init__(self, target: str) -> None:
        super().__init__()
        self.target = target

    async def execute(self, step, execution_id, execution_data) -> StepResult:
        await super().execute(step, execution_id, execution_data)
        if len(self.calls) == 1:
            return StepResult(success=True, next_step=self.target)
        return StepResult(success=True)


@pytest.fixture
def ok_executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def failing_executor() -> RecordingExecutor:
    return RecordingExecutor(StepResult(success=False, error="step exploded"))


@pytest.fixture
def registry(ok_executor, failing_executor) -> StepRegistry:
    registry = StepRegistry()
    registry.register("ok", ok_executor)
    registry.register("fail", failing_executor)
    return registry


@pytest.fixture
def engine(session_factory, registry, workflow_settings) -> WorkflowEngine:
    return WorkflowEngine(session_factory, registry, workflow_settings)


async def _executions(session_factory) -> list[WorkflowExecution]:
    async with session_factory() as session:
        return list((await session.execute(select(WorkflowExecution))).scalars().all())


class TestExecuteWorkflow:
    @pytest.mark.asyncio
    async def test_all_steps_complete_in_order(self, engine, seed_workflow, ok_executor) -> None:
        workflow, _ = await seed_workflow([{"step_type": "ok"}, {"step_type": "ok"}, {"step_type": "ok"}])

        result = await engine.execute_workflow(workflow.id, {"employee_id": "e1"}, user_id="admin")

        assert result.success is True
        assert result.error is None
        assert [call["step_order"] for call in ok_executor.calls] == [1, 2, 3]

        steps = await engine.get_step_executions(result.execution_id)
        assert [step.step_order for step in steps] == [1, 2, 3]
        assert all(step.status == "completed" for step in steps)

        history = await engine.get_execution_history(workflow.id)
        execution = history[0]
        assert execution.status == "completed"
        assert execution.completed_at is not None
        assert execution.trigger_event == "manual"
        assert execution.created_by == "admin"
        assert execution.execution_data == {"employee_id": "e1"}

    @pytest.mark.asyncio
    async def test_stop_on_failure_ends_run(self, engine, seed_workflow, ok_executor, session_factory) -> None:
        workflow, _ = await seed_workflow(
            [{"step_type": "ok"}, {"step_type": "fail", "on_failure_action": "stop"}, {"step_type": "ok"}]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is False
        assert result.error == "step exploded"
        steps = await engine.get_step_executions(result.execution_id)
        assert [(step.step_order, step.status) for step in steps] == [(1, "completed"), (2, "failed")]
        assert len(ok_executor.calls) == 1
        [execution] = await _executions(session_factory)
        assert execution.status == "failed"
        assert execution.error_message == "step exploded"

    @pytest.mark.asyncio
    async def test_continue_on_failure_keeps_going(self, engine, seed_workflow) -> None:
        workflow, _ = await seed_workflow(
            [{"step_type": "fail", "on_failure_action": "continue"}, {"step_type": "ok"}]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is True
        steps = await engine.get_step_executions(result.execution_id)
        assert [step.status for step in steps] == ["failed", "completed"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("retry_count", "expected_success"), [(0, True), (2, False)])
    async def test_retry_policy(self, engine, seed_workflow, retry_count, expected_success) -> None:
        workflow, _ = await seed_workflow(
            [{"step_type": "fail", "on_failure_action": "retry", "retry_count": retry_count}, {"step_type": "ok"}]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is expected_success

    @pytest.mark.asyncio
    async def test_unknown_step_type_fails_run(self, engine, seed_workflow) -> None:
        workflow, _ = await seed_workflow([{"step_type": "teleport"}])

        result = await engine.execute_workflow(workflow.id)

        assert result.success is False
        assert result.error == "Unknown step type: teleport"

    @pytest.mark.asyncio
    async def test_result_data_merged_into_context(self, session_factory, seed_workflow, workflow_settings) -> None:
        producer = RecordingExecutor(StepResult(success=True, data={"tasks_created": 3}))
        consumer = RecordingExecutor()
        registry = StepRegistry()
        registry.register("produce", producer)
        registry.register("consume", consumer)
        engine = WorkflowEngine(session_factory, registry, workflow_settings)
        workflow, _ = await seed_workflow([{"step_type": "produce"}, {"step_type": "consume"}])

        result = await engine.execute_workflow(workflow.id, {"employee_id": "e1"})

        assert consumer.calls[0]["context"] == {"employee_id": "e1", "tasks_created": 3}
        [execution] = await _executions(session_factory)
        assert execution.id is not None
        assert execution.execution_data == {"employee_id": "e1", "tasks_created": 3}
        assert execution.trigger_data == {"employee_id": "e1"}
        assert result.success is True

    @pytest.mark.asyncio
    async def test_false_guard_skips_webhook(self, session_factory, seed_workflow, workflow_settings) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        registry = StepRegistry()
        registry.register("webhook", WebhookStepExecutor(transport=httpx.MockTransport(handler)))
        engine = WorkflowEngine(session_factory, registry, workflow_settings)
        workflow, _ = await seed_workflow(
            [
                {
                    "step_type": "webhook",
                    "step_config": {"url": "https://hooks.example.com/in"},
                    "conditions": [{"field": "status", "operator": "equals", "value": "active"}],
                }
            ]
        )

        result = await engine.execute_workflow(workflow.id, {"status": "inactive"})

        assert result.success is True
        assert requests == []
        [step] = await engine.get_step_executions(result.execution_id)
        assert step.status == "skipped"
        assert step.result_data == {"skipped": True}

    @pytest.mark.asyncio
    async def test_self_jump_hits_step_limit(self, session_factory, registry, seed_workflow) -> None:
        step_id = uuid4()
        engine = WorkflowEngine(session_factory, registry, WorkflowSettings(max_step_invocations=5))
        workflow, _ = await seed_workflow(
            [
                {
                    "id": step_id,
                    "step_type": "ok",
                    "conditions": [{"field": "never", "operator": "equals", "value": "set"}],
                    "on_failure_action": str(step_id),
                }
            ]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is False
        assert result.error == STEP_LIMIT_EXCEEDED
        steps = await engine.get_step_executions(result.execution_id)
        assert len(steps) == 5
        assert {step.status for step in steps} == {"skipped"}

    @pytest.mark.asyncio
    async def test_unknown_workflow(self, engine, session_factory) -> None:
        result = await engine.execute_workflow(uuid4())

        assert result.success is False
        assert result.execution_id is None
        assert result.error == WORKFLOW_NOT_FOUND
        assert await _executions(session_factory) == []

    @pytest.mark.asyncio
    async def test_inactive_workflow(self, engine, seed_workflow, session_factory) -> None:
        workflow, _ = await seed_workflow([{"step_type": "ok"}], is_active=False)

        result = await engine.execute_workflow(workflow.id)

        assert result.error == WORKFLOW_NOT_FOUND
        assert await _executions(session_factory) == []

    @pytest.mark.asyncio
    async def test_workflow_without_steps(self, engine, seed_workflow, session_factory) -> None:
        workflow, _ = await seed_workflow([])

        result = await engine.execute_workflow(str(workflow.id))

        assert result.success is False
        assert result.error == WORKFLOW_HAS_NO_STEPS
        assert await _executions(session_factory) == []

    @pytest.mark.asyncio
    async def test_unexpected_crash_marks_execution_failed(
        self, session_factory, seed_workflow, workflow_settings
    ) -> None:
        class BrokenRegistry(StepRegistry):
            async def execute(self, step, execution_id, execution_data) -> StepResult:
                raise RuntimeError("registry offline")

        engine = WorkflowEngine(session_factory, BrokenRegistry(), workflow_settings)
        workflow, _ = await seed_workflow([{"step_type": "ok"}])

        result = await engine.execute_workflow(workflow.id)

        assert result.success is False
        assert result.error == "registry offline"
        assert result.execution_id is not None
        [execution] = await _executions(session_factory)
        assert execution.status == "failed"
        assert execution.error_message == "registry offline"


class TestStepJumps:
    @pytest.fixture
    def jump_engine(self, session_factory, registry, workflow_settings):
        def _build(jumper: RecordingExecutor) -> WorkflowEngine:
            registry.register("jump", jumper)
            return WorkflowEngine(session_factory, registry, workflow_settings)

        return _build

    @pytest.mark.asyncio
    async def test_forward_jump_skips_intermediate_step(self, jump_engine, seed_workflow, ok_executor) -> None:
        target = uuid4()
        engine = jump_engine(RecordingExecutor(StepResult(success=True, next_step=str(target))))
        workflow, _ = await seed_workflow(
            [{"step_type": "jump"}, {"step_type": "ok"}, {"id": target, "step_type": "ok"}]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is True
        assert [call["step_order"] for call in ok_executor.calls] == [3]
        steps = await engine.get_step_executions(result.execution_id)
        assert [step.step_order for step in steps] == [1, 3]

    @pytest.mark.asyncio
    async def test_backward_jump_reruns_earlier_steps(self, jump_engine, seed_workflow, ok_executor) -> None:
        first = uuid4()
        engine = jump_engine(JumpOnceExecutor(str(first)))
        workflow, _ = await seed_workflow(
            [{"id": first, "step_type": "ok"}, {"step_type": "jump"}, {"step_type": "ok"}]
        )

        result = await engine.execute_workflow(workflow.id)

        assert result.success is True
        steps = await engine.get_step_executions(result.execution_id)
        assert [step.step_order for step in steps] == [1, 2, 1, 2, 3]
        assert [call["step_order"] for call in ok_executor.calls] == [1, 1, 3]

    @pytest.mark.asyncio
    async def test_unknown_jump_target_advances_by_one(self, jump_engine, seed_workflow, ok_executor) -> None:
        engine = jump_engine(RecordingExecutor(StepResult(success=True, next_step=str(uuid4()))))
        workflow, _ = await seed_workflow([{"step_type": "jump"}, {"step_type": "ok"}])

        result = await engine.execute_workflow(workflow.id)

        assert result.success is True
        steps = await engine.get_step_executions(result.execution_id)
        assert [step.step_order for step in steps] == [1, 2]
        assert len(ok_executor.calls) == 1


class TestBuiltInSteps:
    @pytest.mark.asyncio
    async def test_unresolved_recipient_stops_before_delay_and_webhook(
        self, session_factory, seed_workflow, workflow_settings, recording_senders
    ) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={})

        dispatcher = NotificationDispatcher(**recording_senders)
        registry = build_default_registry(
            session_factory,
            dispatcher,
            workflow_settings,
            webhook_transport=httpx.MockTransport(handler),
        )
        engine = WorkflowEngine(session_factory, registry, workflow_settings)
        workflow, _ = await seed_workflow(
            [
                {
                    "step_type": "notification",
                    "step_config": {"recipient": "employee", "title": "Welcome"},
                    "on_failure_action": "stop",
                },
                {"step_type": "delay", "step_config": {"delay_seconds": 5}},
                {"step_type": "webhook", "step_config": {"url": "https://hooks.example.com/in"}},
            ]
        )

        result = await engine.execute_workflow(workflow.id, {"contract_id": "c1"})

        assert result.success is False
        assert result.error == "No recipients found"
        [step] = await engine.get_step_executions(result.execution_id)
        assert (step.step_order, step.status) == (1, "failed")
        assert requests == []
        assert all(sender.calls == [] for sender in recording_senders.values())
        [execution] = await _executions(session_factory)
        assert execution.status == "failed"
        assert execution.error_message == "No recipients found"


class TestHistory:
    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self, engine, seed_workflow) -> None:
        workflow, _ = await seed_workflow([{"step_type": "ok"}])
        run_ids = [(await engine.execute_workflow(workflow.id)).execution_id for _ in range(3)]

        history = await engine.get_execution_history(workflow.id, limit=2)

        assert [str(execution.id) for execution in history] == [run_ids[2], run_ids[1]]

    @pytest.mark.asyncio
    async def test_malformed_ids_return_empty(self, engine) -> None:
        assert await engine.get_execution_history("nope") == []
        assert await engine.get_step_executions("nope") == []
