"""CLI command groups."""

from contract_service.cli.commands import db, server, workflows

__all__ = ["db", "server", "workflows"]
