"""Process-wide logging setup.

One stderr handler on the root logger, formatted as JSON Lines (or text for
local runs) and filtered through ContextInjectingFilter. Application loggers
have no handlers of their own and propagate to root.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contract_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)

_configured = False

# Capped at WARNING; their INFO output is per-request noise
_QUIET_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "aiosqlite", "uvicorn.access")


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    **overrides: Any,
) -> None:
    """Configure logging from settings, once per process.

    Both the API lifespan and the CLI entry point call this; later calls are
    no-ops unless ``force`` is set.
    """
    global _configured
    if _configured and not force:
        return

    if log_settings is None:
        from contract_service.core.settings import get_logging_settings

        log_settings = get_logging_settings()

    configure_logging(**{**log_settings.to_logging_kwargs(), **overrides})
    _configured = True


def build_logging_config(
    *,
    log_level: str,
    json_logs: bool,
    include_context: bool,
    service_name: str,
) -> dict[str, Any]:
    """The dictConfig schema used by configure_logging()."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "contract_service.infra.logging.formatters.JSONFormatter",
                "fmt_keys": {"level": "levelname", "logger": "name", "message": "message"},
                "static": {"service": service_name},
            },
            "text": {
                "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "filters": {
            "context": {"()": "contract_service.infra.logging.context.ContextInjectingFilter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "json" if json_logs else "text",
                "filters": ["context"] if include_context else [],
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in _QUIET_LOGGERS},
        "root": {"level": log_level.upper(), "handlers": ["console"]},
    }


def configure_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    include_context: bool = True,
    capture_warnings: bool = True,
    service_name: str = "contract-service",
    **unused: Any,
) -> None:
    """Apply the logging configuration unconditionally.

    Args:
        log_level: Root level name.
        json_logs: JSON Lines output instead of text.
        include_context: Install the ContextVar context filter.
        capture_warnings: Route ``warnings.warn`` through logging.
        service_name: Static ``service`` field on JSON records.
    """
    logging.captureWarnings(capture_warnings)
    logging.config.dictConfig(
        build_logging_config(
            log_level=log_level,
            json_logs=json_logs,
            include_context=include_context,
            service_name=service_name,
        )
    )
    if unused:
        logger.debug("Ignoring unknown logging options: %s", ", ".join(sorted(unused)))
