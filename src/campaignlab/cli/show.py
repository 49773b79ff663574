# Copyright (c) Syntropy Systems
"""campaignlab show command."""

import typer
from rich.table import Table

from campaignlab.channels import applicable_metrics, success_metric_keys
from campaignlab.cli.common import (
    STATUS_STYLES,
    SUCCESS_STYLES,
    URGENCY_STYLES,
    console,
    format_metric,
    open_session,
    styled,
)
from campaignlab.dates import (
    countdown_label,
    days_remaining,
    format_date,
    format_date_with_time,
    is_overdue,
    should_show_countdown,
    urgency_tier,
)
from campaignlab.errors import ExperimentNotFoundError
from campaignlab.scoring import compute_success
from campaignlab.targeting import describe_targeting, resolve_targeting, targeting_details
from campaignlab.workspace import get_experiment


def show(
    experiment_id: str = typer.Argument(..., help="Experiment ID (or unique prefix)"),
) -> None:
    """Show an experiment's targeting, metrics and success breakdown.

    Example:
        campaignlab show exp-001

    """
    session = open_session()
    now = session.now

    try:
        experiment = get_experiment(session.workspace, experiment_id)
    except ExperimentNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    status_style = STATUS_STYLES.get(experiment.status, "white")

    console.print(f"\n[bold]{experiment.name}[/bold] [dim]({experiment.id})[/dim]")
    if experiment.description:
        console.print(f"  {experiment.description}")
    console.print(f"  [dim]status:[/dim] {styled(experiment.status, status_style)}")
    console.print(f"  [dim]channel:[/dim] {experiment.distribution_channel or '-'}")
    if experiment.tags:
        console.print(f"  [dim]tags:[/dim] {', '.join(experiment.tags)}")

    # Dates
    console.print()
    console.print(f"  [dim]created:[/dim] {format_date_with_time(experiment.created_at)}")
    if experiment.started_at:
        console.print(f"  [dim]started:[/dim] {format_date(experiment.started_at)}")
    console.print(f"  [dim]ends:[/dim] {format_date(experiment.end_date)}")
    if experiment.completed_at:
        console.print(f"  [dim]completed:[/dim] {format_date(experiment.completed_at)}")

    if is_overdue(experiment.status, experiment.end_date, now):
        overdue_days = -days_remaining(experiment.end_date, now)
        console.print(f"  [bold red]Overdue by {overdue_days} day(s)[/bold red]")
    elif experiment.status == "active" and should_show_countdown(
        experiment.end_date, now, session.config.countdown_window_days
    ):
        tier = urgency_tier(experiment.end_date, now)
        label = countdown_label(experiment.end_date, now)
        console.print(f"  [dim]countdown:[/dim] {styled(label, URGENCY_STYLES[tier])}")

    # Targeting
    targeting = resolve_targeting(experiment)
    console.print(
        f"\n[bold]Targeting[/bold] "
        f"{describe_targeting(targeting, session.workspace.profiles)}"
    )
    for label, values in targeting_details(targeting, session.workspace.profiles).items():
        console.print(f"  [dim]{label}:[/dim] {', '.join(values)}")

    # Success
    criteria = experiment.success_criteria
    result = compute_success(experiment, now)
    console.print(
        f"\n[bold]Success[/bold] {result.score}/100 "
        f"{styled(result.status.value, SUCCESS_STYLES[result.status])}"
    )
    console.print(f"  [dim]primary goal:[/dim] {criteria.primary_goal}")
    console.print(f"  [dim]time frame:[/dim] {criteria.time_frame} days")
    console.print(
        f"  [dim]threshold:[/dim] {criteria.success_threshold:g}% "
        + ("[green]met[/green]" if result.threshold_met else "[dim]not met[/dim]")
    )
    if criteria.secondary_goals:
        console.print(f"  [dim]secondary goals:[/dim] {', '.join(criteria.secondary_goals)}")

    breakdown = Table(show_header=True, header_style="bold")
    breakdown.add_column("Category", style="dim")
    breakdown.add_column("Score", justify="right")
    breakdown.add_row("Primary goal", f"{result.breakdown.primary_goal:.1f}")
    breakdown.add_row("Secondary goals", f"{result.breakdown.secondary_goals:.1f}")
    breakdown.add_row("Efficiency", f"{result.breakdown.efficiency:.1f}")
    console.print(breakdown)

    # Metrics
    success_keys = success_metric_keys(criteria)
    channel_keys = [
        key
        for key in applicable_metrics(experiment.distribution_channel)
        if key not in success_keys
    ]
    other_keys = [
        key
        for key in experiment.metrics.keys()
        if key not in success_keys and key not in channel_keys
    ]

    metrics_table = Table(title="Metrics", show_header=True, header_style="bold")
    metrics_table.add_column("Metric", style="dim")
    metrics_table.add_column("Actual", justify="right")
    metrics_table.add_column("Target", justify="right")

    for key in [*success_keys, *channel_keys, *other_keys]:
        actual = experiment.metrics.get(key)
        target = criteria.target_metrics.get(key)
        metrics_table.add_row(
            key,
            format_metric(actual) if actual is not None else "-",
            format_metric(target) if target is not None else "-",
        )

    console.print(metrics_table)
