"""Colored status lines and JSON dumps for command output.

Errors go to stderr so ``contract-service workflows run ... > out.txt``
still shows failures on the terminal.
"""

import json
from typing import Any

import click

_MARKS = {
    "success": ("✓", "green"),
    "error": ("✗", "red"),
    "info": ("ℹ", "blue"),
}


def _status(kind: str, message: str, *, err: bool = False) -> None:
    mark, color = _MARKS[kind]
    click.secho(f"{mark} {message}", fg=color, err=err)


def success(message: str) -> None:
    _status("success", message)


def error(message: str) -> None:
    _status("error", message, err=True)


def info(message: str) -> None:
    _status("info", message)


def header(message: str) -> None:
    """Section title, preceded by a blank line."""
    click.secho(f"\n{message}", fg="cyan", bold=True)


def print_json(data: Any, *, indent: int = 2) -> None:
    """Dump ``data`` as JSON; datetimes and UUIDs are rendered with ``str``."""
    click.echo(json.dumps(data, indent=indent, default=str, ensure_ascii=False))
