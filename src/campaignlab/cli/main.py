# Copyright (c) Syntropy Systems
"""Main CLI entry point for campaignlab."""

import logging
from typing import Optional

import typer

from campaignlab.cli.init_cmd import init
from campaignlab.cli.list_cmd import list_experiments
from campaignlab.cli.metrics import metrics
from campaignlab.cli.overdue import overdue
from campaignlab.cli.roi import roi
from campaignlab.cli.show import show
from campaignlab.cli.summary import summary
from campaignlab.config import load_config

app = typer.Typer(
    name="campaignlab",
    help=(
        "Track outreach experiments. Score success, watch end dates, "
        "keep ROI in sync."
    ),
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: log_level from config, else WARNING)",
    ),
) -> None:
    """Configure logging before running a command."""
    level_name = (log_level or load_config().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


# Register commands
_ = app.command()(init)
_ = app.command(name="list")(list_experiments)
_ = app.command()(show)
_ = app.command()(overdue)
_ = app.command()(summary)
_ = app.command()(roi)
_ = app.command()(metrics)


if __name__ == "__main__":
    app()
