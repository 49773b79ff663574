# Copyright (c) Syntropy Systems
"""Search and filter experiment listings."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Literal

from pydantic import Field

from campaignlab.dates import is_overdue
from campaignlab.models.base import CampaignBaseModel
from campaignlab.scoring import compute_success
from campaignlab.targeting import describe_targeting, resolve_targeting

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from datetime import datetime

    from campaignlab.models import ExperimentRecord, ICPProfile

Performance = Literal["high", "medium", "low"]

# Score bands for the performance filter
HIGH_PERFORMANCE_SCORE = 80
MEDIUM_PERFORMANCE_SCORE = 60


class ExperimentFilters(CampaignBaseModel):
    """Listing filters. Empty lists and None match everything."""

    search: str | None = None
    status: list[str] = Field(default_factory=list)
    channel: list[str] = Field(default_factory=list)
    icp: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    performance: Performance | None = None

    def is_empty(self) -> bool:
        """Whether no filter is set."""
        return not (
            self.search
            or self.status
            or self.channel
            or self.icp
            or self.tags
            or self.performance
        )


def performance_band(score: int) -> Performance:
    """Band a success score for the performance filter."""
    if score >= HIGH_PERFORMANCE_SCORE:
        return "high"
    if score >= MEDIUM_PERFORMANCE_SCORE:
        return "medium"
    return "low"


def matches_search(experiment: ExperimentRecord, search: str) -> bool:
    """Case-insensitive match on name or description."""
    needle = search.lower()
    return needle in experiment.name.lower() or needle in experiment.description.lower()


def filter_experiments(
    experiments: Iterable[ExperimentRecord],
    filters: ExperimentFilters,
    now: datetime,
    profiles: Sequence[ICPProfile] = (),
) -> list[ExperimentRecord]:
    """Return the experiments matching every filter that is set.

    The performance filter scores each experiment at ``now``; the ICP
    filter compares against the resolved targeting description.
    """
    matched: list[ExperimentRecord] = []
    for experiment in experiments:
        if filters.search and not matches_search(experiment, filters.search):
            continue
        if filters.status and experiment.status not in filters.status:
            continue
        if filters.channel and experiment.distribution_channel not in filters.channel:
            continue
        if filters.tags and not set(filters.tags) & set(experiment.tags):
            continue
        if filters.icp:
            label = describe_targeting(resolve_targeting(experiment), profiles)
            if label not in filters.icp:
                continue
        if filters.performance:
            score = compute_success(experiment, now).score
            if performance_band(score) != filters.performance:
                continue
        matched.append(experiment)
    return matched


def status_counts(experiments: Iterable[ExperimentRecord]) -> dict[str, int]:
    """Count experiments per status."""
    return dict(Counter(experiment.status for experiment in experiments))


def overdue_experiments(
    experiments: Iterable[ExperimentRecord], now: datetime
) -> list[ExperimentRecord]:
    """Active experiments whose end date has passed."""
    return [e for e in experiments if is_overdue(e.status, e.end_date, now)]


def overdue_count(experiments: Iterable[ExperimentRecord], now: datetime) -> int:
    """Number of overdue experiments."""
    return len(overdue_experiments(experiments, now))
