"""API router for the workflows feature.

Endpoints:
- POST /workflows/{workflow_id}/execute - Run a workflow
- GET /workflows/{workflow_id}/executions - Execution history, newest first
- GET /workflows/executions/{execution_id}/steps - Step log of one execution
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from contract_service.core.exceptions import NotFoundException
from contract_service.features.workflows.dependencies import WorkflowEngineDep
from contract_service.features.workflows.schemas import (
    ExecuteWorkflowRequest,
    WorkflowExecutionResponse,
    WorkflowRunResponse,
    WorkflowStepExecutionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.post(
    "/{workflow_id}/execute",
    response_model=WorkflowRunResponse,
    summary="Execute a workflow",
    responses={422: {"model": WorkflowRunResponse, "description": "Workflow run failed"}},
)
async def execute_workflow(
    workflow_id: UUID,
    payload: ExecuteWorkflowRequest,
    engine: WorkflowEngineDep,
    response: Response,
) -> WorkflowRunResponse:
    result = await engine.execute_workflow(
        workflow_id,
        payload.trigger_data,
        user_id=payload.user_id,
        trigger_event=payload.trigger_event,
    )
    if not result.success:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return WorkflowRunResponse.model_validate(result)


@router.get(
    "/{workflow_id}/executions",
    response_model=list[WorkflowExecutionResponse],
    summary="List workflow executions",
)
async def list_executions(
    workflow_id: UUID,
    engine: WorkflowEngineDep,
    limit: int = Query(default=50, ge=1, le=1000),
) -> list[WorkflowExecutionResponse]:
    executions = await engine.get_execution_history(workflow_id, limit=limit)
    return [WorkflowExecutionResponse.model_validate(execution) for execution in executions]


@router.get(
    "/executions/{execution_id}/steps",
    response_model=list[WorkflowStepExecutionResponse],
    summary="List step executions",
    responses={404: {"description": "Execution not found"}},
)
async def list_step_executions(
    execution_id: UUID,
    engine: WorkflowEngineDep,
) -> list[WorkflowStepExecutionResponse]:
    if await engine.get_execution(execution_id) is None:
        raise NotFoundException(
            detail=f"Workflow execution {execution_id} not found",
            type="workflow-execution-not-found",
            extra={"execution_id": str(execution_id)},
        )
    steps = await engine.get_step_executions(execution_id)
    return [WorkflowStepExecutionResponse.model_validate(step) for step in steps]
