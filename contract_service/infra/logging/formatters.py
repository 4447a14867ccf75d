"""JSON Lines formatter with OpenTelemetry trace correlation."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from opentelemetry import trace

# Attributes every LogRecord has; anything else on the record came from
# ``extra=`` or the context filter and is emitted as a top-level field.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object on one line.

    Example output:
        {"level": "INFO", "logger": "contract_service.features.workflows.engine",
         "message": "Workflow execution finished", "timestamp": "2026-01-01T00:00:00.123Z",
         "service": "contract-service", "execution_id": "...", "status": "completed"}
    """

    def __init__(
        self,
        fmt_keys: dict[str, str] | None = None,
        static: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            fmt_keys: Output key -> LogRecord attribute.
            static: Fields added to every record.
        """
        super().__init__()
        self.fmt_keys = fmt_keys or {"level": "levelname", "logger": "name", "message": "message"}
        self.static = static or {}

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()
        data: dict[str, Any] = {key: getattr(record, attr, None) for key, attr in self.fmt_keys.items()}
        data["timestamp"] = _iso_utc(record.created)
        data.update(_trace_fields())
        data.update(self.static)

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            data["stack_trace"] = self.formatStack(record.stack_info)

        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and key not in data:
                data[key] = value

        # json.dumps escapes embedded newlines, keeping tracebacks on one line
        return json.dumps(data, ensure_ascii=False, default=str)


def _iso_utc(created: float) -> str:
    return datetime.fromtimestamp(created, tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _trace_fields() -> dict[str, str]:
    context = trace.get_current_span().get_span_context()
    if not context.is_valid:
        return {}
    return {"trace_id": format(context.trace_id, "032x"), "span_id": format(context.span_id, "016x")}


__all__ = ["JSONFormatter"]
