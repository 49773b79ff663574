# Copyright (c) Syntropy Systems
"""Dashboard totals across a set of experiments."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from campaignlab.filters import overdue_count
from campaignlab.models import STATUS_ACTIVE, STATUS_COMPLETED
from campaignlab.models.base import CampaignBaseModel
from campaignlab.scoring import compute_success, is_successful

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

    from campaignlab.models import ExperimentRecord


class DashboardSummary(CampaignBaseModel):
    """Aggregate figures for the dashboard header."""

    total_experiments: int = 0
    active_experiments: int = 0
    overdue_experiments: int = 0
    success_rate: float = 0.0
    total_meetings_booked: float = 0.0
    avg_roi: float = 0.0
    top_channel: str | None = None


def summarize(experiments: Sequence[ExperimentRecord], now: datetime) -> DashboardSummary:
    """Summarize experiments as of ``now``.

    Success rate is the percentage of completed experiments whose score is
    good or excellent. Average ROI covers experiments that record one.
    The top channel is the one with the most meetings booked, or None
    while no channel has booked any.
    """
    summary = DashboardSummary(
        total_experiments=len(experiments),
        active_experiments=sum(1 for e in experiments if e.status == STATUS_ACTIVE),
        overdue_experiments=overdue_count(experiments, now),
    )
    if not experiments:
        return summary

    completed = [e for e in experiments if e.status == STATUS_COMPLETED]
    if completed:
        successes = sum(1 for e in completed if is_successful(compute_success(e, now)))
        summary.success_rate = 100.0 * successes / len(completed)

    meetings_by_channel: defaultdict[str, float] = defaultdict(float)
    rois: list[float] = []
    for experiment in experiments:
        meetings = experiment.metrics.get("meetingsBooked") or 0.0
        summary.total_meetings_booked += meetings
        if experiment.distribution_channel:
            meetings_by_channel[experiment.distribution_channel] += meetings
        roi = experiment.metrics.get("roi")
        if roi is not None:
            rois.append(roi)

    if rois:
        summary.avg_roi = sum(rois) / len(rois)
    if meetings_by_channel:
        top = max(meetings_by_channel, key=lambda c: meetings_by_channel[c])
        if meetings_by_channel[top] > 0:
            summary.top_channel = top
    return summary
