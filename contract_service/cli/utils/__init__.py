"""CLI utilities for running async operations and formatting output."""

from contract_service.cli.utils.async_runner import coro
from contract_service.cli.utils.formatters import error, header, info, print_json, success

__all__ = [
    "coro",
    "error",
    "header",
    "info",
    "print_json",
    "success",
]
