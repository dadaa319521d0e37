#!/usr/bin/env python3
"""
Lifecycle Control CLI - Command Line Interface for the Lifecycle Engine.

Provides commands for calling workflow tools, inspecting onboarding and
offboarding records, reviewing audit trails and running the API server.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import CONFIG_ENV_VAR, STATE_DIR_ENV_VAR, configure_logging, load_config
from ..exceptions import LifecycleEngineError
from ..lifecycle import LifecycleEngine
from ..models import WorkflowKind
from ..tools import ToolDispatcher

logger = logging.getLogger(__name__)

# Rich console for pretty output
console = Console()

DEFAULT_STATE_DIR = ".lifecycle"


class LifecycleController:
    """Main controller for Lifecycle Engine operations."""

    def __init__(self, config_path: Optional[str] = None, state_dir: Optional[str] = None):
        """Initialize the lifecycle controller."""
        self.config_path = config_path
        self.config = load_config(config_path)

        # The CLI is one process per command, so records must live on disk
        if state_dir:
            self.config["state_dir"] = state_dir
        elif not self.config.get("state_dir"):
            self.config["state_dir"] = DEFAULT_STATE_DIR

        configure_logging(self.config.get("log_level", "INFO"))

        self.engine = LifecycleEngine.from_config(self.config)
        self.dispatcher = ToolDispatcher(self.engine)


def parse_arguments(pairs: Tuple[str, ...]) -> Dict[str, Any]:
    """
    Turn ``key=value`` pairs into tool arguments.

    Values are decoded as JSON where possible so that ``approved=true`` and
    ``systems=["email","hrms"]`` arrive as a bool and a list.
    """
    arguments: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'", param_hint="--arg")
        try:
            arguments[key] = json.loads(raw)
        except ValueError:
            arguments[key] = raw
    return arguments


@click.group()
@click.option('--config', '-c', help='Path to configuration file (YAML or JSON)')
@click.option('--state-dir', '-s', help='Directory holding the record stores')
@click.pass_context
def cli(ctx, config, state_dir):
    """Lifecycle Engine Control CLI - Employee Onboarding and Offboarding"""
    ctx.ensure_object(dict)
    try:
        ctx.obj['controller'] = LifecycleController(config, state_dir)
    except LifecycleEngineError as e:
        raise click.ClickException(str(e)) from e


@cli.command()
@click.pass_context
def tools(ctx):
    """List available workflow tools."""
    controller = ctx.obj['controller']

    table = Table(title="Lifecycle Tools")
    table.add_column("Tool", style="cyan")
    table.add_column("Required Arguments", style="green")
    table.add_column("Description", style="white")

    for tool in controller.dispatcher.list_tools():
        required = ", ".join(tool["inputSchema"]["required"]) or "-"
        table.add_row(tool["name"], required, tool["description"])

    console.print(table)


@cli.command()
@click.argument('tool_name')
@click.option('--arg', '-a', 'pairs', multiple=True, help='Tool argument as key=value (repeatable)')
@click.option('--json', 'json_args', help='Tool arguments as a JSON object')
@click.pass_context
def call(ctx, tool_name, pairs, json_args):
    """Call a workflow tool and print its result."""
    controller = ctx.obj['controller']

    arguments: Dict[str, Any] = {}
    if json_args:
        try:
            arguments = json.loads(json_args)
        except ValueError as e:
            raise click.BadParameter(f"Invalid JSON: {e}", param_hint="--json") from e
        if not isinstance(arguments, dict):
            raise click.BadParameter("Arguments must be a JSON object", param_hint="--json")
    arguments.update(parse_arguments(pairs))

    result = controller.dispatcher.dispatch(tool_name, arguments)

    if result.get("success"):
        console.print(f"[green]✓ {tool_name} succeeded[/green]")
    else:
        console.print(f"[red]✗ {tool_name} failed: {escape(str(result.get('error', 'unknown error')))}[/red]")

    console.print_json(json.dumps(result))

    if not result.get("success"):
        ctx.exit(1)


@cli.command()
@click.argument('employee_id')
@click.option('--kind', type=click.Choice([k.value for k in WorkflowKind]), default=WorkflowKind.ONBOARDING.value,
              help='Workflow to look up')
@click.pass_context
def status(ctx, employee_id, kind):
    """Show the status of an onboarding or offboarding record."""
    controller = ctx.obj['controller']

    result = controller.engine.queries.get_status(WorkflowKind(kind), employee_id)
    if not result.get("success"):
        console.print(f"[red]{escape(result['error'])}[/red]")
        ctx.exit(1)

    if kind == WorkflowKind.ONBOARDING.value:
        title = f"{result['employee']['name']}\n{result['employee']['email']}"
    else:
        title = f"{result['employeeName']}\nLast working day: {result['lastWorkingDay']}"
    console.print(Panel.fit(f"[bold blue]{title}[/bold blue]"))
    console.print(f"Status: {result['status']}")
    console.print(f"Initiated by: {result['initiatedBy']} on {result['initiatedDate']}")

    table = Table(title="Approvals")
    table.add_column("Role", style="cyan")
    table.add_column("Approved", style="green")
    table.add_column("Approver", style="yellow")
    table.add_column("Date", style="magenta")

    for role, slot in result["approvals"].items():
        table.add_row(role, "✓" if slot["approved"] else "✗", slot.get("approver") or "N/A", slot.get("date") or "N/A")

    console.print(table)

    checklist_keys = [key for key, value in result.items() if isinstance(value, dict) and key not in ("approvals", "employee")]
    for key in checklist_keys:
        items = ", ".join(f"{name}={'✓' if done else '✗'}" for name, done in result[key].items())
        console.print(f"{key}: {items}")


@cli.command()
@click.option('--type', 'approval_type', type=click.Choice(['onboarding', 'offboarding', 'all']), default='all',
              help='Which approvals to list')
@click.pass_context
def pending(ctx, approval_type):
    """List records waiting on approvals."""
    controller = ctx.obj['controller']

    result = controller.engine.queries.list_pending_approvals(approval_type)
    entries = result.get("pendingOnboarding", []) + result.get("pendingOffboarding", [])

    if not entries:
        console.print("[yellow]No pending approvals[/yellow]")
        return

    table = Table(title=f"Pending Approvals ({result['totalPending']})")
    table.add_column("Employee ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Type", style="blue")
    table.add_column("Status", style="yellow")
    table.add_column("Waiting On", style="magenta")

    for entry in entries:
        waiting = ", ".join(role for role, is_pending in entry["pendingApprovals"].items() if is_pending)
        table.add_row(entry["employeeId"], entry["employeeName"], entry["type"], entry["status"], waiting or "-")

    console.print(table)


@cli.command()
@click.argument('employee_id')
@click.option('--kind', type=click.Choice([k.value for k in WorkflowKind]), default=WorkflowKind.ONBOARDING.value,
              help='Workflow to look up')
@click.pass_context
def audit_trail(ctx, employee_id, kind):
    """Show the audit trail of a record."""
    controller = ctx.obj['controller']

    result = controller.engine.queries.get_status(WorkflowKind(kind), employee_id)
    if not result.get("success"):
        console.print(f"[red]{escape(result['error'])}[/red]")
        ctx.exit(1)

    audit_records = result.get("auditTrail", [])
    if not audit_records:
        console.print(f"[yellow]No audit records found for {employee_id}[/yellow]")
        return

    table = Table(title=f"Audit Trail for {employee_id}")
    table.add_column("Timestamp", style="cyan")
    table.add_column("Action", style="green")
    table.add_column("Actor", style="yellow")
    table.add_column("Details", style="magenta")

    for record in audit_records:
        table.add_row(record["date"], escape(record["action"]), escape(record["actor"]), escape(record["details"]))

    console.print(table)


@cli.command()
@click.option('--port', default=None, type=int, help='Port to run the API server on')
@click.option('--host', default=None, help='Host to bind the API server to')
@click.pass_context
def serve(ctx, port, host):
    """Start the Lifecycle Engine API server."""
    from ..api.server import start_server

    controller = ctx.obj['controller']
    api_config = controller.config.get("api", {})

    # The server process builds its own engine from the same config file
    # and the same record store directory
    if controller.config_path:
        os.environ[CONFIG_ENV_VAR] = controller.config_path
    os.environ[STATE_DIR_ENV_VAR] = str(controller.config["state_dir"])
    host = host or api_config.get("host", "127.0.0.1")
    port = port or api_config.get("port", 8000)

    console.print(f"[green]Starting Lifecycle Engine API server on {host}:{port}[/green]")
    console.print("[blue]Press Ctrl+C to stop[/blue]")

    try:
        start_server(host=host, port=port, reload=False)
    except KeyboardInterrupt:
        console.print("[yellow]Server stopped[/yellow]")


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
