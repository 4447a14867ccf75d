"""Step executor protocol and registry."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Protocol

from contract_service.features.workflows.schemas import StepResult
from contract_service.infra.metrics import workflow_step_duration_seconds

if TYPE_CHECKING:
    from contract_service.features.workflows.models import WorkflowStep

logger = logging.getLogger(__name__)


class StepExecutor(Protocol):
    """Handler for one step type.

    Executors report failures through ``StepResult``; anything they raise is
    converted to a failed result by the registry.
    """

    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        """Run the step against the current execution context.

        Args:
            step: Step definition (``step_config`` holds type-specific settings)
            execution_id: Id of the running execution
            execution_data: Copy of the accumulated context

        Returns:
            StepResult; ``data`` is merged into the context by the engine
        """
        ...


class StepRegistry:
    """Maps step-type tags to executors.

    New step types are added with ``register`` without touching the engine.
    """

    def __init__(self) -> None:
        self._executors: dict[str, StepExecutor] = {}

    def register(self, step_type: str, executor: StepExecutor) -> None:
        self._executors[step_type] = executor

    def get(self, step_type: str) -> StepExecutor | None:
        return self._executors.get(step_type)

    @property
    def step_types(self) -> list[str]:
        return sorted(self._executors)

    def __contains__(self, step_type: object) -> bool:
        return step_type in self._executors

    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        """Dispatch to the executor for ``step.step_type``."""
        executor = self.get(step.step_type)
        if executor is None:
            return StepResult(success=False, error=f"Unknown step type: {step.step_type}")

        start = time.perf_counter()
        try:
            return await executor.execute(step, execution_id, execution_data)
        except Exception as exc:
            logger.exception(
                "Step executor raised",
                extra={
                    "step_id": str(step.id),
                    "step_type": step.step_type,
                    "operation": "workflows.execute_step",
                },
            )
            return StepResult(success=False, error=str(exc) or exc.__class__.__name__)
        finally:
            workflow_step_duration_seconds.labels(step_type=step.step_type).observe(
                time.perf_counter() - start
            )


__all__ = ["StepExecutor", "StepRegistry"]
