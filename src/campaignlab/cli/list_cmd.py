# Copyright (c) Syntropy Systems
"""campaignlab list command."""

from typing import Optional

import typer
from rich.table import Table

from campaignlab.cli.common import (
    STATUS_STYLES,
    SUCCESS_STYLES,
    URGENCY_STYLES,
    console,
    open_session,
    styled,
)
from campaignlab.dates import (
    countdown_label,
    is_overdue,
    should_show_countdown,
    urgency_tier,
)
from campaignlab.filters import ExperimentFilters, filter_experiments, status_counts
from campaignlab.scoring import compute_success


def _split(values: Optional[list[str]]) -> list[str]:
    items: list[str] = []
    for value in values or []:
        items.extend(part.strip() for part in value.split(",") if part.strip())
    return items


def list_experiments(
    status: Optional[list[str]] = typer.Option(
        None,
        "--status",
        "-s",
        help="Only show these statuses (repeatable or comma-separated)",
    ),
    channel: Optional[list[str]] = typer.Option(
        None,
        "--channel",
        "-c",
        help="Only show these distribution channels",
    ),
    tag: Optional[list[str]] = typer.Option(
        None,
        "--tag",
        "-t",
        help="Only show experiments with any of these tags",
    ),
    performance: Optional[str] = typer.Option(
        None,
        "--performance",
        "-p",
        help="Score band: high (80+), medium (60-79) or low (<60)",
    ),
    search: Optional[str] = typer.Option(
        None,
        "--search",
        "-q",
        help="Match name or description",
    ),
) -> None:
    """List experiments with their success score and end-date countdown.

    Example:
        campaignlab list --status active --performance high

    """
    if performance is not None and performance not in ("high", "medium", "low"):
        console.print(f"[red]Error:[/red] Unknown performance band '{performance}'")
        raise typer.Exit(1)

    session = open_session()
    filters = ExperimentFilters(
        search=search,
        status=_split(status),
        channel=_split(channel),
        tags=_split(tag),
        performance=performance,
    )
    experiments = filter_experiments(
        session.workspace.experiments, filters, session.now, session.workspace.profiles
    )

    if not experiments:
        if filters.is_empty():
            console.print("[dim]No experiments yet[/dim]")
        else:
            console.print("[dim]No experiments match. Try adjusting your filters.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name")
    table.add_column("Channel")
    table.add_column("Status", no_wrap=True)
    table.add_column("Score", justify="right", no_wrap=True)
    table.add_column("Tier", no_wrap=True)
    table.add_column("Ends", no_wrap=True)

    for experiment in experiments:
        result = compute_success(experiment, session.now)

        if is_overdue(experiment.status, experiment.end_date, session.now):
            ends = styled("Overdue", "bold red")
        elif experiment.status == "active" and should_show_countdown(
            experiment.end_date, session.now, session.config.countdown_window_days
        ):
            tier = urgency_tier(experiment.end_date, session.now)
            ends = styled(
                countdown_label(experiment.end_date, session.now), URGENCY_STYLES[tier]
            )
        else:
            ends = f"{experiment.end_date:%Y-%m-%d}"

        table.add_row(
            experiment.id[:12],
            experiment.name,
            experiment.distribution_channel or "-",
            styled(experiment.status, STATUS_STYLES.get(experiment.status, "white")),
            str(result.score),
            styled(result.status.value, SUCCESS_STYLES[result.status]),
            ends,
        )

    console.print(table)

    counts = status_counts(experiments)
    console.print(
        "[dim]"
        + ", ".join(f"{name}: {count}" for name, count in sorted(counts.items()))
        + "[/dim]"
    )
