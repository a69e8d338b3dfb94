"""Identity commands — nodeplat user create, nodeplat group create/add-user."""

from __future__ import annotations

import typer
from rich.console import Console

from nodeplat.cli.context import PlatformContext
from nodeplat.exceptions import NodeplatError

user_app = typer.Typer(help="Manage component users")
group_app = typer.Typer(help="Manage component groups")
console = Console()


@user_app.command("create")
def create_user(name: str = typer.Argument(help="User name to create")):
    """Create a user with the next free uid and a private group."""
    plat = PlatformContext.get().platform
    try:
        ident = plat.create_user(name)
    except NodeplatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(
        f"[green]Created user {ident.name}[/green] uid={ident.uid} gid={ident.gid} shell={ident.shell}"
    )


@group_app.command("create")
def create_group(name: str = typer.Argument(help="Group name to create")):
    """Create a group with the next free gid."""
    plat = PlatformContext.get().platform
    try:
        ident = plat.create_group(name)
    except NodeplatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Created group {ident.name}[/green] gid={ident.gid}")


@group_app.command("add-user")
def add_user(
    user: str = typer.Argument(help="Existing user"),
    group: str = typer.Argument(help="Existing group"),
):
    """Add a user to a group's membership list."""
    plat = PlatformContext.get().platform
    try:
        plat.add_user_to_group(user, group)
    except NodeplatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Added {user} to {group}[/green]")
