# Copyright (c) Syntropy Systems
"""Pydantic models for experiment records and targeting profiles."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, cast

from pydantic import Field, field_validator, model_serializer, model_validator

from .base import CampaignBaseModel, ExtraAllowModel

if TYPE_CHECKING:
    from collections.abc import ItemsView, KeysView

STATUS_ACTIVE = "active"
STATUS_PAUSED = "paused"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

EXPERIMENT_STATUSES = (STATUS_ACTIVE, STATUS_PAUSED, STATUS_COMPLETED, STATUS_FAILED)
TERMINAL_STATUSES = frozenset({STATUS_COMPLETED, STATUS_FAILED})

PRIMARY_GOALS = ("meetings", "leads", "revenue", "engagement", "awareness")


class MetricValues(CampaignBaseModel):
    """Sparse mapping of metric name to numeric value.

    Which keys are present depends on the experiment's channel and goals,
    so the payload is a plain mapping rather than a fixed set of fields.
    """

    values: dict[str, float] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _wrap_values(cls, data: object) -> object:
        if isinstance(data, MetricValues):
            return data
        if data is None:
            return {"values": {}}
        if isinstance(data, dict) and "values" not in data:
            return {"values": cast("dict[str, float]", data)}
        return cast("object", data)

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, float]:
        return self.values

    def items(self) -> ItemsView[str, float]:
        """Return the mapping's items view."""
        return self.values.items()

    def keys(self) -> KeysView[str]:
        """Return the mapping's keys view."""
        return self.values.keys()

    def get(self, key: str, default: float | None = None) -> float | None:
        """Return a value by key or the provided default."""
        return self.values.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self.values


class ExperimentMetrics(MetricValues):
    """Current metric values recorded for an experiment."""


class TargetMetrics(MetricValues):
    """Target values an experiment is measured against."""


class SuccessCriteria(ExtraAllowModel):
    """What success looks like for an experiment."""

    primary_goal: str
    time_frame: int = Field(gt=0)
    target_metrics: TargetMetrics = Field(default_factory=TargetMetrics)
    secondary_goals: list[str] | None = None
    success_threshold: float = Field(default=100.0, ge=0, le=100)


class CustomTargeting(ExtraAllowModel):
    """Inline targeting values used instead of a saved ICP profile."""

    job_titles: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    company_sizes: list[str] = Field(default_factory=list)
    pain_points: list[str] | None = None


class ICPProfile(ExtraAllowModel):
    """Reusable ideal customer profile."""

    id: str
    name: str
    description: str = ""
    job_titles: list[str] = Field(default_factory=list)
    industries: list[str] = Field(default_factory=list)
    company_sizes: list[str] = Field(default_factory=list)
    pain_points: list[str] = Field(default_factory=list)


class ExperimentRecord(ExtraAllowModel):
    """A tracked outreach experiment.

    ``status`` and ``success_criteria.primary_goal`` are kept as plain
    strings: scoring and date helpers classify unknown values themselves.
    """

    id: str
    name: str
    description: str = ""
    status: str = STATUS_ACTIVE
    created_at: datetime
    started_at: datetime | None = None
    end_date: datetime
    completed_at: datetime | None = None
    distribution_channel: str = ""
    tags: list[str] = Field(default_factory=list)
    icp_profile_id: str | None = None
    custom_targeting: CustomTargeting | None = None
    target_audience: str = ""
    success_criteria: SuccessCriteria
    metrics: ExperimentMetrics = Field(default_factory=ExperimentMetrics)

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return cast("list[str]", value)

    @model_validator(mode="after")
    def _check_completion(self) -> ExperimentRecord:
        if self.completed_at is not None and self.status != STATUS_COMPLETED:
            msg = (
                f"Experiment '{self.id}' has completed_at set "
                f"but status is '{self.status}'"
            )
            raise ValueError(msg)
        return self

    @property
    def is_terminal(self) -> bool:
        """Whether the experiment reached a state it cannot leave."""
        return self.status in TERMINAL_STATUSES


class Workspace(CampaignBaseModel):
    """Snapshot of every experiment and profile in a workspace."""

    experiments: list[ExperimentRecord] = Field(default_factory=list)
    profiles: list[ICPProfile] = Field(default_factory=list)

    def get_experiment(self, experiment_id: str) -> ExperimentRecord | None:
        """Return the experiment with a matching id or id prefix."""
        for experiment in self.experiments:
            if experiment.id == experiment_id:
                return experiment
        matches = [e for e in self.experiments if e.id.startswith(experiment_id)]
        if len(matches) == 1:
            return matches[0]
        return None
