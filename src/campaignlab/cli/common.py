# Copyright (c) Syntropy Systems
"""Shared helpers for campaignlab commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import typer
from rich.console import Console

from campaignlab.config import (
    CampaignLabConfig,
    load_config,
    require_workspace_dir,
    resolve_now,
)
from campaignlab.dates import UrgencyTier
from campaignlab.errors import WorkspaceError
from campaignlab.scoring import SuccessStatus
from campaignlab.workspace import load_workspace

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from campaignlab.models import Workspace

console = Console()

STATUS_STYLES = {
    "active": "blue",
    "paused": "yellow",
    "completed": "green",
    "failed": "red",
}

SUCCESS_STYLES = {
    SuccessStatus.EXCELLENT: "green",
    SuccessStatus.GOOD: "cyan",
    SuccessStatus.FAIR: "yellow",
    SuccessStatus.POOR: "red",
}

URGENCY_STYLES = {
    UrgencyTier.NEUTRAL: "dim",
    UrgencyTier.CRITICAL: "red",
    UrgencyTier.WARNING: "dark_orange",
    UrgencyTier.CAUTION: "yellow",
}


class Session(NamedTuple):
    """Everything a command needs to render a workspace."""

    workspace_dir: Path
    config: CampaignLabConfig
    workspace: Workspace
    now: datetime


def open_session() -> Session:
    """Load the current workspace or exit with an error."""
    try:
        workspace_dir = require_workspace_dir()
        config = load_config(workspace_dir)
        workspace = load_workspace(workspace_dir, config)
    except WorkspaceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    try:
        now = resolve_now()
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid CAMPAIGNLAB_NOW: {e}")
        raise typer.Exit(1) from e

    return Session(workspace_dir, config, workspace, now)


def styled(value: str, style: str) -> str:
    """Wrap text in rich markup."""
    return f"[{style}]{value}[/{style}]"


def format_metric(value: float) -> str:
    """Render a metric without a trailing .0 for whole numbers."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"
