# Copyright (c) Syntropy Systems
"""campaignlab metrics command."""

import typer

from campaignlab.cli.common import console, format_metric, open_session
from campaignlab.errors import ExperimentNotFoundError, WorkspaceError
from campaignlab.models import ExperimentMetrics
from campaignlab.scoring import apply_metric_update, compute_success
from campaignlab.workspace import get_experiment, save_experiments


def parse_assignments(assignments: list[str]) -> dict[str, float]:
    """Parse key=value pairs into metric updates.

    Raises ValueError on a missing '=' or a non-numeric value.
    """
    updates: dict[str, float] = {}
    for assignment in assignments:
        key, sep, raw = assignment.partition("=")
        key = key.strip()
        if not sep or not key:
            msg = f"Expected key=value, got '{assignment}'"
            raise ValueError(msg)
        try:
            updates[key] = float(raw)
        except ValueError as e:
            msg = f"Value for '{key}' is not a number: '{raw}'"
            raise ValueError(msg) from e
    return updates


def metrics(
    experiment_id: str = typer.Argument(..., help="Experiment ID (or unique prefix)"),
    assignments: list[str] = typer.Argument(
        ..., help="Metric updates as key=value, e.g. meetingsBooked=8 cost=4000"
    ),
) -> None:
    """Update an experiment's metrics.

    ROI is recalculated whenever meetingsBooked or cost changes.

    Example:
        campaignlab metrics exp-001 meetingsBooked=8 cost=4000

    """
    try:
        updates = parse_assignments(assignments)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    session = open_session()

    try:
        experiment = get_experiment(session.workspace, experiment_id)
    except ExperimentNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    merged = apply_metric_update(
        experiment.metrics.values, updates, session.config.value_per_meeting
    )
    updated = experiment.model_copy(update={"metrics": ExperimentMetrics(values=merged)})
    experiments = [
        updated if e.id == experiment.id else e for e in session.workspace.experiments
    ]

    try:
        _ = save_experiments(session.workspace_dir, experiments, session.config)
    except (OSError, WorkspaceError) as e:
        console.print(f"[red]Error:[/red] Could not save experiments: {e}")
        raise typer.Exit(1) from e

    console.print(f"[green]Updated metrics for[/green] {updated.name}")
    for key in sorted(updates):
        console.print(f"  [dim]{key}:[/dim] {format_metric(merged[key])}")
    if "roi" in merged and ("meetingsBooked" in updates or "cost" in updates):
        console.print(f"  [dim]roi:[/dim] {merged['roi']:.2f}x [dim](recalculated)[/dim]")

    result = compute_success(updated, session.now)
    console.print(f"  [dim]success score:[/dim] {result.score} ({result.status.value})")
