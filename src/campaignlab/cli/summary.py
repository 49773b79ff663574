# Copyright (c) Syntropy Systems
"""campaignlab summary command."""

from campaignlab.cli.common import console, format_metric, open_session
from campaignlab.filters import status_counts
from campaignlab.summary import summarize


def summary() -> None:
    """Show dashboard totals for the workspace."""
    session = open_session()
    experiments = session.workspace.experiments
    totals = summarize(experiments, session.now)

    console.print("\n[bold]Experiments[/bold]")
    console.print(f"  [dim]total:[/dim] {totals.total_experiments}")
    console.print(f"  [dim]active:[/dim] {totals.active_experiments}")
    if totals.overdue_experiments:
        console.print(f"  [dim]overdue:[/dim] [red]{totals.overdue_experiments}[/red]")
    for status_name, count in sorted(status_counts(experiments).items()):
        console.print(f"  [dim]{status_name}:[/dim] {count}")

    console.print("\n[bold]Performance[/bold]")
    console.print(f"  [dim]success rate:[/dim] {totals.success_rate:.1f}%")
    console.print(
        f"  [dim]meetings booked:[/dim] {format_metric(totals.total_meetings_booked)}"
    )
    console.print(f"  [dim]average ROI:[/dim] {totals.avg_roi:.2f}x")
    console.print(f"  [dim]top channel:[/dim] {totals.top_channel or '-'}")
