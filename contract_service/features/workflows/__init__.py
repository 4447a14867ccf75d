"""Database-defined workflows: step executors, engine and execution history."""

from __future__ import annotations

from .engine import WorkflowEngine
from .schemas import StepResult, WorkflowRunResult
from .steps import StepRegistry, build_default_registry

__all__ = ["StepRegistry", "StepResult", "WorkflowEngine", "WorkflowRunResult", "build_default_registry"]
