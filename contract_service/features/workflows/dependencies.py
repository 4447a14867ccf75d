"""FastAPI dependencies for the workflows feature."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from contract_service.core.dependencies import SessionFactoryDep
from contract_service.core.settings import get_workflow_settings
from contract_service.features.notifications.dependencies import NotificationDispatcherDep
from contract_service.features.workflows.engine import WorkflowEngine
from contract_service.features.workflows.steps import build_default_registry


def get_workflow_engine(
    session_factory: SessionFactoryDep,
    dispatcher: NotificationDispatcherDep,
) -> WorkflowEngine:
    """Build an engine with the default step registry."""
    settings = get_workflow_settings()
    registry = build_default_registry(session_factory, dispatcher, settings)
    return WorkflowEngine(session_factory, registry, settings)


WorkflowEngineDep = Annotated[WorkflowEngine, Depends(get_workflow_engine)]

__all__ = ["WorkflowEngineDep", "get_workflow_engine"]
