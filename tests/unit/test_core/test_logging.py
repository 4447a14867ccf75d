"""Tests for log context propagation and the JSON formatter."""

from __future__ import annotations

import json
import logging

from contract_service.infra.logging import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from contract_service.infra.logging.formatters import JSONFormatter


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("contract_service.test", logging.INFO, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_context_set_and_remove() -> None:
    clear_log_context()
    set_log_context(workflow_id="wf-1", execution_id="ex-1", step_id="st-1")

    remove_from_log_context("step_id")

    assert get_log_context() == {"workflow_id": "wf-1", "execution_id": "ex-1"}
    clear_log_context()


def test_filter_injects_without_overwriting_extra() -> None:
    clear_log_context()
    set_log_context(execution_id="ex-1", operation="from-context")
    record = _record(operation="from-extra")

    assert ContextInjectingFilter().filter(record) is True

    assert record.execution_id == "ex-1"
    assert record.operation == "from-extra"
    clear_log_context()


def test_json_formatter_includes_extra_fields() -> None:
    formatter = JSONFormatter(
        fmt_keys={"level": "levelname", "logger": "name", "message": "message"},
        static={"service": "contract-service"},
    )

    line = formatter.format(_record("Workflow execution started", steps=3, operation="workflows.execute"))
    payload = json.loads(line)

    assert payload["message"] == "Workflow execution started"
    assert payload["level"] == "INFO"
    assert payload["service"] == "contract-service"
    assert payload["steps"] == 3
    assert payload["operation"] == "workflows.execute"


def test_logging_config_selects_formatter_and_filter() -> None:
    from contract_service.infra.logging.config import build_logging_config

    config = build_logging_config(log_level="debug", json_logs=False, include_context=False, service_name="svc")

    assert config["root"]["level"] == "DEBUG"
    assert config["handlers"]["console"]["formatter"] == "text"
    assert config["handlers"]["console"]["filters"] == []
    assert config["formatters"]["json"]["static"] == {"service": "svc"}
