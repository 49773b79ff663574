# Copyright (c) Syntropy Systems
"""Errors raised at the workspace boundary.

Scoring and date helpers never raise for well-typed records; these cover
locating, reading and writing workspace files.
"""


class WorkspaceError(RuntimeError):
    """A workspace could not be located, read or written."""


class WorkspaceNotFoundError(WorkspaceError):
    """No .campaignlab directory exists above the working directory."""


class ExperimentNotFoundError(WorkspaceError, LookupError):
    """No experiment matches the requested id."""

    def __init__(self, experiment_id: str) -> None:
        super().__init__(f"Experiment '{experiment_id}' not found")
        self.experiment_id = experiment_id
