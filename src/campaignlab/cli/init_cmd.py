# Copyright (c) Syntropy Systems
"""campaignlab init command."""

from pathlib import Path

import typer

from campaignlab.cli.common import console
from campaignlab.workspace import init_workspace


def init(
    path: Path = typer.Argument(
        Path(),
        help="Directory to initialize (default: current directory)",
    ),
) -> None:
    """Initialize a new campaignlab workspace.

    Creates a .campaignlab directory with configuration and empty
    experiment and profile files.
    """
    target = path.resolve()
    workspace_dir = init_workspace(target)

    if workspace_dir is None:
        console.print(f"[yellow]Already initialized:[/yellow] {target / '.campaignlab'}")
        return

    console.print(f"[green]Initialized campaignlab workspace:[/green] {workspace_dir}")
    console.print(f"  [dim]config:[/dim] {workspace_dir / 'config.yaml'}")
    console.print(f"  [dim]experiments:[/dim] {workspace_dir / 'experiments.yaml'}")
    console.print(f"  [dim]profiles:[/dim] {workspace_dir / 'profiles.yaml'}")
