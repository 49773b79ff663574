# Copyright (c) Syntropy Systems
"""Read and write the experiment and profile files of a workspace.

Records live in YAML (or JSON, which YAML also reads) files inside the
.campaignlab directory. This is the only module that touches them; the
scoring and date helpers only ever see validated models.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import yaml
from pydantic import TypeAdapter, ValidationError

from campaignlab.config import WORKSPACE_DIRNAME, CampaignLabConfig, load_config
from campaignlab.errors import ExperimentNotFoundError, WorkspaceError
from campaignlab.models import ExperimentRecord, ICPProfile, Workspace

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

logger = logging.getLogger(__name__)

_EXPERIMENTS_ADAPTER = TypeAdapter(list[ExperimentRecord])
_PROFILES_ADAPTER = TypeAdapter(list[ICPProfile])

DEFAULT_CONFIG: dict[str, object] = {
    "value_per_meeting": 7200,
    "countdown_window_days": 5,
    "experiments_file": "experiments.yaml",
    "profiles_file": "profiles.yaml",
    "log_level": "WARNING",
}


def _read_records(path: Path, key: str) -> list[object]:
    if not path.exists():
        logger.debug("No %s file at %s", key, path)
        return []

    logger.debug("Reading %s from %s", key, path)
    try:
        with path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        msg = f"Could not parse {path.name}: {e}"
        raise WorkspaceError(msg) from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = cast("dict[str, object]", data).get(key, [])
    if not isinstance(data, list):
        msg = f"Expected a list of {key} in {path.name}"
        raise WorkspaceError(msg)
    return cast("list[object]", data)


def load_workspace(
    workspace_dir: Path, config: CampaignLabConfig | None = None
) -> Workspace:
    """Load every experiment and profile in a workspace."""
    if config is None:
        config = load_config(workspace_dir)

    experiments_path = workspace_dir / config.experiments_file
    profiles_path = workspace_dir / config.profiles_file

    try:
        experiments = _EXPERIMENTS_ADAPTER.validate_python(
            _read_records(experiments_path, "experiments")
        )
    except ValidationError as e:
        msg = f"Invalid experiment record in {experiments_path.name}:\n{e}"
        raise WorkspaceError(msg) from e

    try:
        profiles = _PROFILES_ADAPTER.validate_python(
            _read_records(profiles_path, "profiles")
        )
    except ValidationError as e:
        msg = f"Invalid profile record in {profiles_path.name}:\n{e}"
        raise WorkspaceError(msg) from e

    return Workspace(experiments=experiments, profiles=profiles)


def get_experiment(workspace: Workspace, experiment_id: str) -> ExperimentRecord:
    """Get an experiment by id or unique id prefix."""
    experiment = workspace.get_experiment(experiment_id)
    if experiment is None:
        raise ExperimentNotFoundError(experiment_id)
    return experiment


def save_experiments(
    workspace_dir: Path,
    experiments: Sequence[ExperimentRecord],
    config: CampaignLabConfig | None = None,
) -> Path:
    """Write experiments back to the workspace's experiments file."""
    if config is None:
        config = load_config(workspace_dir)

    path = workspace_dir / config.experiments_file
    records = [
        experiment.model_dump(mode="json", by_alias=True, exclude_none=True)
        for experiment in experiments
    ]
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        yaml.safe_dump({"experiments": records}, f, sort_keys=False)
    logger.debug("Wrote %d experiments to %s", len(records), path)
    return path


def init_workspace(target: Path) -> Path | None:
    """Create a .campaignlab directory under ``target``.

    Returns the new directory, or None if it already exists.
    """
    workspace_dir = target / WORKSPACE_DIRNAME
    if workspace_dir.exists():
        return None

    workspace_dir.mkdir(parents=True)

    with (workspace_dir / "config.yaml").open("w") as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)
    with (workspace_dir / "experiments.yaml").open("w") as f:
        yaml.safe_dump({"experiments": []}, f)
    with (workspace_dir / "profiles.yaml").open("w") as f:
        yaml.safe_dump({"profiles": []}, f)

    return workspace_dir
