"""Delay step: sleep for ``step_config["delay_seconds"]``."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from contract_service.features.workflows.schemas import StepResult

if TYPE_CHECKING:
    from contract_service.features.workflows.models import WorkflowStep


class DelayStepExecutor:
    async def execute(
        self,
        step: WorkflowStep,
        execution_id: str,
        execution_data: dict[str, Any],
    ) -> StepResult:
        delay_seconds = float((step.step_config or {}).get("delay_seconds") or 0)
        await asyncio.sleep(max(delay_seconds, 0.0))
        return StepResult(success=True)


__all__ = ["DelayStepExecutor"]
