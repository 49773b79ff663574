# Copyright (c) Syntropy Systems
"""campaignlab roi command."""

import typer

from campaignlab.cli.common import console
from campaignlab.config import load_config
from campaignlab.scoring import compute_roi


def roi(
    meetings: float = typer.Argument(..., help="Meetings booked"),
    cost: float = typer.Argument(..., help="Total spend"),
) -> None:
    """Compute ROI from meetings booked and spend.

    Each meeting is valued at value_per_meeting from config (7200 by default).

    Example:
        campaignlab roi 5 7200

    """
    config = load_config()
    value = compute_roi(meetings, cost, config.value_per_meeting)
    console.print(f"ROI: [bold]{value:.2f}x[/bold]")
    if cost <= 0:
        console.print("[dim]No spend recorded, ROI is 0[/dim]")
