"""nodeplat CLI — operator access to the platform layer.

`nodeplat children PID` and `nodeplat kill PID` work on process trees.
`nodeplat user ...` and `nodeplat group ...` provision identities.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.table import Table

from nodeplat.cli import identity
from nodeplat.cli.context import PlatformContext
from nodeplat.config import settings
from nodeplat.exceptions import NodeplatError

console = Console()

_app = typer.Typer(
    name="nodeplat",
    help="nodeplat -- users, groups and process trees for isolated components.",
    no_args_is_help=True,
)

_app.add_typer(identity.user_app, name="user", help="Manage users (create)")
_app.add_typer(identity.group_app, name="group", help="Manage groups (create, add-user)")


@_app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@_app.command("children")
def children(pid: int = typer.Argument(help="Root process id")):
    """List every descendant of a process."""
    plat = PlatformContext.get().platform
    try:
        pids = plat.get_child_pids(pid)
    except NodeplatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not pids:
        console.print(f"[dim]No child processes of {pid}.[/dim]")
        return

    console.print(f"[bold]Descendants of {pid}[/bold]")
    table = Table()
    table.add_column("PID", justify="right", style="cyan")
    for child in sorted(pids):
        table.add_row(str(child))
    console.print(table)


@_app.command("kill")
def kill(
    pid: int = typer.Argument(help="Root process id"),
    force: bool = typer.Option(False, "--force", "-f", help="Send SIGKILL instead of SIGTERM"),
):
    """Terminate a process and all of its descendants."""
    plat = PlatformContext.get().platform
    try:
        signalled = plat.kill_process_and_children(pid, force=force)
    except NodeplatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Signalled {len(signalled)} process(es)[/green]")


@_app.command("privileged-group")
def privileged_group():
    """Show the group whose members may run privileged operations."""
    console.print(PlatformContext.get().platform.get_privileged_group())


@_app.command("version")
def version_cmd():
    """Show nodeplat version."""
    from nodeplat import __version__
    console.print(f"nodeplat v{__version__}")


def main() -> None:
    _app()
