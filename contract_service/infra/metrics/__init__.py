"""Prometheus metrics."""

from __future__ import annotations

from .prometheus import (
    REGISTRY,
    notification_sent_total,
    workflow_executions_total,
    workflow_step_duration_seconds,
    workflow_steps_total,
)

__all__ = [
    "REGISTRY",
    "notification_sent_total",
    "workflow_executions_total",
    "workflow_step_duration_seconds",
    "workflow_steps_total",
]
