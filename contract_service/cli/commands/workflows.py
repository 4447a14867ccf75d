"""Workflow commands.

Example:bash
    # Run a workflow with trigger data
    contract-service workflows run 3f1c... --data '{"employee_id": "..."}'

    # Show recent executions
    contract-service workflows history 3f1c... --limit 10
"""

import json
import sys

import click

from contract_service.cli.utils import coro, error, header, info, print_json, success
from contract_service.core.settings import (
    get_email_settings,
    get_notification_settings,
    get_twilio_settings,
    get_workflow_settings,
)
from contract_service.features.notifications.dispatcher import build_notification_dispatcher
from contract_service.features.workflows.engine import WorkflowEngine
from contract_service.features.workflows.steps import build_default_registry
from contract_service.infra.database import close_database, get_session_factory


def build_engine() -> WorkflowEngine:
    """Wire a workflow engine against the configured database and providers."""
    session_factory = get_session_factory()
    settings = get_workflow_settings()
    dispatcher = build_notification_dispatcher(
        session_factory,
        email_settings=get_email_settings(),
        twilio_settings=get_twilio_settings(),
        notification_settings=get_notification_settings(),
    )
    registry = build_default_registry(session_factory, dispatcher, settings)
    return WorkflowEngine(session_factory, registry, settings)


def _parse_data(raw: str | None) -> dict:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--data") from e
    if not isinstance(data, dict):
        raise click.BadParameter("Trigger data must be a JSON object", param_hint="--data")
    return data


@click.group(name="workflows")
def workflows() -> None:
    """Workflow execution commands."""


@workflows.command()
@click.argument("workflow_id")
@click.option("--data", "raw_data", default=None, help="Trigger data as a JSON object")
@click.option("--event", "trigger_event", default=None, help="Trigger event name")
@click.option("--user", "user_id", default=None, help="Initiating user id")
@coro
async def run(workflow_id: str, raw_data: str | None, trigger_event: str | None, user_id: str | None) -> None:
    """Execute WORKFLOW_ID and report the outcome."""
    trigger_data = _parse_data(raw_data)
    info(f"Running workflow {workflow_id}")

    try:
        result = await build_engine().execute_workflow(
            workflow_id,
            trigger_data,
            user_id=user_id,
            trigger_event=trigger_event,
        )
    finally:
        await close_database()

    if result.success:
        success(f"Workflow completed (execution {result.execution_id})")
        return

    if result.execution_id:
        info(f"Execution: {result.execution_id}")
    error(f"Workflow failed: {result.error}")
    sys.exit(1)


@workflows.command()
@click.argument("workflow_id")
@click.option("--limit", default=50, show_default=True, type=click.IntRange(1, 1000))
@click.option("--steps/--no-steps", default=False, help="Include each execution's step log")
@coro
async def history(workflow_id: str, limit: int, steps: bool) -> None:
    """Show recent executions of WORKFLOW_ID, newest first."""
    engine = build_engine()
    try:
        executions = await engine.get_execution_history(workflow_id, limit=limit)
        if not executions:
            info("No executions found")
            return

        header(f"{len(executions)} execution(s)")
        for execution in executions:
            click.echo(
                f"{execution.id}  {execution.status:<10} "
                f"{execution.started_at or '-'}  {execution.error_message or ''}".rstrip()
            )
            if steps:
                for step in await engine.get_step_executions(execution.id):
                    click.echo(f"    #{step.step_order} {step.status:<10} {step.error_message or ''}".rstrip())
                    if step.result_data:
                        print_json(step.result_data)
    finally:
        await close_database()
