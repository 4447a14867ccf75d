"""Prometheus metrics for notification delivery and workflow runs."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Histogram

# Custom registry so the /metrics endpoint only exposes service metrics
REGISTRY = CollectorRegistry()

STEP_LATENCY_BUCKETS = (
    0.005,
    0.01,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
)

notification_sent_total = Counter(
    "notification_sent_total",
    "Notification delivery attempts by channel and outcome",
    ["channel", "status"],
    registry=REGISTRY,
)

workflow_executions_total = Counter(
    "workflow_executions_total",
    "Workflow executions by final status",
    ["status"],
    registry=REGISTRY,
)

workflow_steps_total = Counter(
    "workflow_steps_total",
    "Workflow step executions by step type and status",
    ["step_type", "status"],
    registry=REGISTRY,
)

workflow_step_duration_seconds = Histogram(
    "workflow_step_duration_seconds",
    "Workflow step execution time in seconds",
    ["step_type"],
    buckets=STEP_LATENCY_BUCKETS,
    registry=REGISTRY,
)
