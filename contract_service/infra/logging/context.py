"""Per-task log context.

Workflow runs bind ``workflow_id``, ``execution_id`` and ``step_id`` here so
every record logged during the run carries them. The dict lives in a
ContextVar and is replaced rather than mutated, so concurrent asyncio tasks
never see each other's keys.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Bind fields to every subsequent record in the current task.

    Example:
        set_log_context(workflow_id=str(workflow.id), execution_id=str(execution.id))
    """
    _log_context.set({**_log_context.get(), **kwargs})


def get_log_context() -> dict[str, Any]:
    return dict(_log_context.get())


def clear_log_context() -> None:
    _log_context.set({})


def remove_from_log_context(*keys: str) -> None:
    """Unbind ``keys``; missing keys are ignored."""
    _log_context.set({key: value for key, value in _log_context.get().items() if key not in keys})


class ContextInjectingFilter(logging.Filter):
    """Copy the bound context onto each record.

    Attributes already on the record, such as values passed via ``extra=``,
    take precedence over bound context.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _log_context.get().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


__all__ = [
    "ContextInjectingFilter",
    "clear_log_context",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
]
