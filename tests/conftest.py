# Copyright (c) Syntropy Systems
"""Pytest fixtures for campaignlab tests."""

import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
import yaml

from campaignlab.models import ExperimentRecord

# Store original cwd at module load time
_original_cwd = Path.cwd()

NOW = datetime(2026, 10, 19, 15, 30, tzinfo=timezone.utc)

ExperimentFactory = Callable[..., ExperimentRecord]


def experiment_data(**overrides: Any) -> dict[str, Any]:
    """Raw camelCase record as stored in experiments.yaml."""
    data: dict[str, Any] = {
        "id": "exp-001",
        "name": "LinkedIn CFO outreach",
        "description": "Direct messages to finance leaders",
        "status": "active",
        "createdAt": NOW - timedelta(days=12),
        "startedAt": NOW - timedelta(days=10),
        "endDate": NOW + timedelta(days=10),
        "distributionChannel": "LinkedIn",
        "targetAudience": "Finance leaders",
        "successCriteria": {
            "primaryGoal": "meetings",
            "timeFrame": 20,
            "targetMetrics": {"meetingsBooked": 10},
            "successThreshold": 80,
        },
        "metrics": {"meetingsBooked": 8, "cost": 4000},
    }
    data.update(overrides)
    return data


@pytest.fixture
def now() -> datetime:
    """Fixed current time shared by tests."""
    return NOW


@pytest.fixture
def make_experiment() -> ExperimentFactory:
    """Build an ExperimentRecord from the default record plus overrides."""

    def _make(**overrides: Any) -> ExperimentRecord:
        return ExperimentRecord.model_validate(experiment_data(**overrides))

    return _make


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Temporary directory for testing."""
    return tmp_path


@pytest.fixture
def campaign_project(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Create a workspace with a few experiments and one ICP profile."""
    from campaignlab.workspace import init_workspace

    workspace_dir = init_workspace(temp_dir)
    assert workspace_dir is not None

    experiments = [
        experiment_data(icpProfileId="icp-cfo"),
        experiment_data(
            id="exp-002",
            name="Email webinar invite",
            description="Sequence promoting the Q4 webinar",
            distributionChannel="Email Outreach",
            endDate=NOW - timedelta(days=3),
            metrics={"meetingsBooked": 1, "cost": 2000},
            tags=["webinar"],
        ),
        experiment_data(
            id="exp-003",
            name="Content syndication",
            description="Blog posts for awareness",
            status="completed",
            distributionChannel="Content",
            completedAt=NOW - timedelta(days=1),
            endDate=NOW - timedelta(days=1),
            successCriteria={
                "primaryGoal": "awareness",
                "timeFrame": 30,
                "targetMetrics": {"impressions": 10000},
                "successThreshold": 100,
            },
            metrics={"impressions": 12000, "cost": 1000},
        ),
    ]
    profiles = [
        {
            "id": "icp-cfo",
            "name": "Mid-market CFOs",
            "jobTitles": ["CFO", "VP Finance"],
            "industries": ["SaaS"],
            "companySizes": ["200-1000"],
            "painPoints": ["Manual close"],
        }
    ]

    records = [
        ExperimentRecord.model_validate(e).model_dump(mode="json", by_alias=True)
        for e in experiments
    ]
    with (workspace_dir / "experiments.yaml").open("w") as f:
        yaml.safe_dump({"experiments": records}, f, sort_keys=False)
    with (workspace_dir / "profiles.yaml").open("w") as f:
        yaml.safe_dump({"profiles": profiles}, f, sort_keys=False)

    monkeypatch.setenv("CAMPAIGNLAB_NOW", NOW.isoformat())
    os.chdir(temp_dir)

    yield temp_dir

    # Always return to original cwd
    os.chdir(_original_cwd)
