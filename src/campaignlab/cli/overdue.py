# Copyright (c) Syntropy Systems
"""campaignlab overdue command."""

from rich.table import Table

from campaignlab.cli.common import console, open_session
from campaignlab.dates import days_remaining, format_date
from campaignlab.filters import overdue_experiments


def overdue() -> None:
    """List active experiments that have run past their end date."""
    session = open_session()
    experiments = overdue_experiments(session.workspace.experiments, session.now)

    if not experiments:
        console.print("[green]No overdue experiments[/green]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name")
    table.add_column("Ended")
    table.add_column("Days over", justify="right")

    # End dates may mix naive and aware datetimes; sort by calendar day
    by_end = sorted(experiments, key=lambda e: days_remaining(e.end_date, session.now))
    for experiment in by_end:
        table.add_row(
            experiment.id[:12],
            experiment.name,
            format_date(experiment.end_date),
            f"[red]{-days_remaining(experiment.end_date, session.now)}[/red]",
        )

    console.print(table)
    console.print(
        f"[yellow]{len(experiments)} overdue experiment(s).[/yellow] "
        "Mark them completed or failed, or extend their end date."
    )
