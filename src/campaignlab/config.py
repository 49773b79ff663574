# Copyright (c) Syntropy Systems
"""Configuration management for campaignlab."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import cast

import yaml

from campaignlab.errors import WorkspaceNotFoundError

WORKSPACE_DIRNAME = ".campaignlab"

# Pins "now" for the CLI, e.g. CAMPAIGNLAB_NOW=2026-10-19
NOW_ENV_VAR = "CAMPAIGNLAB_NOW"


@dataclass
class CampaignLabConfig:
    """Configuration for campaignlab."""

    # Currency value credited per booked meeting when computing ROI
    value_per_meeting: float = 7200.0

    # Days before the end date during which a countdown is shown
    countdown_window_days: int = 5

    # Record files, relative to the workspace directory
    experiments_file: str = "experiments.yaml"
    profiles_file: str = "profiles.yaml"

    log_level: str = "WARNING"


def _find_upwards(name: str, start_path: Path) -> Path | None:
    current = start_path.resolve()
    for directory in (current, *current.parents):
        candidate = directory / name
        if candidate.is_dir():
            return candidate
    return None


def find_workspace_dir(start_path: Path | None = None) -> Path | None:
    """Nearest .campaignlab directory at or above start_path (default: cwd)."""
    return _find_upwards(WORKSPACE_DIRNAME, start_path or Path.cwd())


def global_config_path() -> Path:
    """Path of the user-wide config file, ~/.campaignlab/config.yaml."""
    return Path.home() / WORKSPACE_DIRNAME / "config.yaml"


def load_config(workspace_dir: Path | None = None) -> CampaignLabConfig:
    """Load configuration from .campaignlab/config.yaml or defaults.

    Looks for config in:
    1. Provided workspace_dir
    2. Nearest .campaignlab directory walking up
    3. ~/.campaignlab/config.yaml
    4. Defaults
    """
    config = CampaignLabConfig()

    config_path = None

    if workspace_dir is not None:
        config_path = workspace_dir / "config.yaml"
    else:
        found_dir = find_workspace_dir()
        if found_dir is not None:
            config_path = found_dir / "config.yaml"
        else:
            global_config = global_config_path()
            if global_config.exists():
                config_path = global_config

    if config_path is not None and config_path.exists():
        with config_path.open() as f:
            data = cast("dict[str, object]", yaml.safe_load(f) or {})

        value_per_meeting = data.get("value_per_meeting")
        if isinstance(value_per_meeting, (int, float)):
            config.value_per_meeting = float(value_per_meeting)
        countdown_window_days = data.get("countdown_window_days")
        if isinstance(countdown_window_days, (int, float)):
            config.countdown_window_days = int(countdown_window_days)
        experiments_file = data.get("experiments_file")
        if isinstance(experiments_file, str):
            config.experiments_file = experiments_file
        profiles_file = data.get("profiles_file")
        if isinstance(profiles_file, str):
            config.profiles_file = profiles_file
        log_level = data.get("log_level")
        if isinstance(log_level, str):
            config.log_level = log_level.upper()

    return config


def require_workspace_dir() -> Path:
    """Get workspace directory or raise an error if not found."""
    workspace_dir = find_workspace_dir()
    if workspace_dir is None:
        msg = "No .campaignlab directory found. Run 'campaignlab init' first."
        raise WorkspaceNotFoundError(msg)
    return workspace_dir


def resolve_now() -> datetime:
    """Current time for CLI commands, honouring CAMPAIGNLAB_NOW."""
    pinned = os.environ.get(NOW_ENV_VAR)
    if pinned:
        return datetime.fromisoformat(pinned)
    return datetime.now(timezone.utc)
