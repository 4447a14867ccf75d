"""Main CLI entry point for contract-service management commands."""

import click

from contract_service.cli.commands import db, server, workflows
from contract_service.infra.logging import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="contract-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Contract Service CLI - notification dispatch and workflow execution.

    \b
    Command Groups:
      db         Database setup and connectivity
      workflows  Run workflows and inspect executions
      server     Run the API server

    \b
    Quick Start:
      contract-service db init
      contract-service workflows run WORKFLOW_ID --data '{"employee_id": "..."}'
      contract-service workflows history WORKFLOW_ID
    """
    ctx.ensure_object(dict)


cli.add_command(db.db)
cli.add_command(workflows.workflows)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
