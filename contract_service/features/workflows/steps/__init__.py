"""Workflow step executors and the step-type registry."""

from __future__ import annotations

from .base import StepExecutor, StepRegistry
from .condition import ConditionStepExecutor
from .data_update import DataUpdateStepExecutor
from .delay import DelayStepExecutor
from .notification import NotificationStepExecutor
from .registry import build_default_registry
from .webhook import WebhookStepExecutor

__all__ = [
    "ConditionStepExecutor",
    "DataUpdateStepExecutor",
    "DelayStepExecutor",
    "NotificationStepExecutor",
    "StepExecutor",
    "StepRegistry",
    "WebhookStepExecutor",
    "build_default_registry",
]
