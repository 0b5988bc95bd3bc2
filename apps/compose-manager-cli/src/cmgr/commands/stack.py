"""Docker Compose stack lifecycle and status commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cm_common import Project, load_update_status
from cm_common.summary import collect_stack_rows, collect_summary

from cmgr.audit import audit, recent_events
from cmgr.config import get_config, get_registry
from cmgr.errors import CmError, StackNotFoundError
from cmgr.services import docker

app = typer.Typer(no_args_is_help=True)
console = Console()

_STATUS_STYLES = {
    "status-running": "green",
    "status-stopped": "dim",
    "status-exited": "red",
    "status-paused": "yellow",
    "status-partial": "yellow",
    "status-restarting": "magenta",
    "status-mixed": "cyan",
}

_NEW_STACK_COMPOSE = """services:
  app:
    image: nginx:alpine
    restart: unless-stopped
"""


def _resolve_stack(folder: str) -> Project:
    """Load a stack by folder name or raise StackNotFoundError."""
    registry = get_registry()
    if not registry.is_valid_stack(folder):
        raise StackNotFoundError(f"Stack not found: {registry.project_dir(folder)}")
    compose = registry.compose_file(folder)
    if not compose.is_file():
        raise StackNotFoundError(f"Compose file not found at {compose}")
    return registry.load_project(folder)


def _perform(action: str, folder: str, fn: Callable[[Project], None]) -> None:
    project = _resolve_stack(folder)
    with audit(f"stack.{action}", target=folder, project=project.project_key):
        fn(project)


def _dispatch(action: str, folder: str, fn: Callable[[Project], None]) -> None:
    try:
        _perform(action, folder, fn)
    except CmError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(exc.exit_code)


def _start(project: Project) -> None:
    registry = get_registry()
    docker.compose_up(registry.compose_file(project.folder), project.project_key)
    registry.mark_started(project.folder)


@app.command()
def up(folder: str = typer.Argument(help="Stack folder name")) -> None:
    """Start a stack (docker compose up -d)."""
    _dispatch("up", folder, _start)
    console.print(f"[green]Stack started: {folder}[/green]")


@app.command()
def down(folder: str = typer.Argument(help="Stack folder name")) -> None:
    """Stop a stack (docker compose down)."""

    def _stop(project: Project) -> None:
        registry = get_registry()
        docker.compose_down(registry.compose_file(project.folder), project.project_key)
        registry.clear_started(project.folder)

    _dispatch("down", folder, _stop)
    console.print(f"[yellow]Stack stopped: {folder}[/yellow]")


@app.command()
def pull(folder: str = typer.Argument(help="Stack folder name")) -> None:
    """Pull the latest images for a stack."""

    def _pull(project: Project) -> None:
        docker.compose_pull(get_registry().compose_file(project.folder), project.project_key)

    _dispatch("pull", folder, _pull)
    console.print(f"[green]Images pulled: {folder}[/green]")


@app.command()
def update(folder: str = typer.Argument(help="Stack folder name")) -> None:
    """Pull images and recreate the stack."""

    def _update(project: Project) -> None:
        docker.compose_pull(get_registry().compose_file(project.folder), project.project_key)
        _start(project)

    _dispatch("update", folder, _update)
    console.print(f"[green]Stack updated: {folder}[/green]")


@app.command()
def autostart() -> None:
    """Start every stack flagged for autostart."""
    started = failed = 0
    for project in get_registry().projects():
        if not project.autostart:
            continue
        try:
            _perform("autostart", project.folder, _start)
        except CmError as exc:
            failed += 1
            console.print(f"[red]{project.name}: {exc}[/red]")
            continue
        started += 1
        console.print(f"[green]Autostarted: {project.name}[/green]")
    if failed:
        raise typer.Exit(1)
    if not started:
        console.print("[yellow]No stacks flagged for autostart.[/yellow]")


@app.command("list")
def list_stacks() -> None:
    """Show every stack with its status and uptime."""
    cfg = get_config()
    rows = collect_stack_rows(
        get_registry(),
        docker.list_containers,
        load_update_status(cfg.update_status_path),
    )
    if not rows:
        console.print(f"[yellow]No stacks found in {cfg.compose_root}[/yellow]")
        return

    table = Table(title="Compose Stacks")
    table.add_column("Stack", style="bold")
    table.add_column("Folder")
    table.add_column("Status")
    table.add_column("Containers", justify="right")
    table.add_column("Uptime")
    table.add_column("Update")
    table.add_column("Autostart", justify="right")

    for row in rows:
        style = _STATUS_STYLES.get(row.status.css_class, "white")
        update_text = {True: "[yellow]available[/yellow]", False: "up-to-date"}.get(row.has_update, "")
        table.add_row(
            row.name,
            row.folder,
            f"[{style}]{row.status.text}[/{style}]",
            f"{row.running}/{row.total}",
            f"Uptime: {row.uptime}" if row.uptime else "",
            update_text,
            "yes" if row.autostart else "no",
        )
    console.print(table)


@app.command()
def summary() -> None:
    """Print the dashboard summary as JSON."""
    result = collect_summary(get_registry(), docker.list_containers)
    console.print_json(result.model_dump_json())


@app.command()
def new(name: str = typer.Argument(help="Stack display name")) -> None:
    """Create a new stack skeleton in the projects folder."""
    registry = get_registry()
    with audit("stack.new", target=name):
        try:
            path = registry.create_stack(name, _NEW_STACK_COMPOSE)
        except FileExistsError:
            console.print(f"[red]Stack directory already exists for {name!r}[/red]")
            raise typer.Exit(1)
        except ValueError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(1)
    console.print(f"[green]Stack created at {path}[/green]")


@app.command()
def history(
    folder: Optional[str] = typer.Argument(None, help="Limit to one stack folder"),
    limit: int = typer.Option(20, help="Number of entries to show"),
) -> None:
    """Show recent stack actions."""
    events = recent_events(get_config().audit_db_path, stack=folder, limit=limit)
    if not events:
        console.print("[yellow]No recorded actions.[/yellow]")
        return

    table = Table(title="Stack Actions")
    table.add_column("Time")
    table.add_column("Actor")
    table.add_column("Action", style="bold")
    table.add_column("Stack")
    table.add_column("Result")
    table.add_column("ms", justify="right")
    for e in events:
        result_style = "green" if e["result"] == "success" else "red"
        table.add_row(
            e["timestamp"],
            e["actor"],
            e["action"],
            e["stack"],
            f"[{result_style}]{e['result']}[/{result_style}]",
            str(e["duration_ms"] or ""),
        )
    console.print(table)
