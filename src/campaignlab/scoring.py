# Copyright (c) Syntropy Systems
"""Success scoring and ROI for experiments.

The success score blends three categories:

- primary goal attainment (50%): the goal's metric against its target
- secondary goals (30%): share of declared secondary goals that are met
- efficiency (20%): attainment relative to the share of the time frame used

Everything here is a pure function of the record and ``now``; results are
never stored back on the record.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from campaignlab.dates import days_since
from campaignlab.models.base import CampaignBaseModel

if TYPE_CHECKING:
    from collections.abc import Mapping

    from campaignlab.models import ExperimentRecord

logger = logging.getLogger(__name__)

# Currency value attributed to one booked meeting (3% of a 240k deal)
VALUE_PER_MEETING = 7200.0

PRIMARY_WEIGHT = 0.5
SECONDARY_WEIGHT = 0.3
EFFICIENCY_WEIGHT = 0.2

# Lower bound (inclusive) of each status tier
EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 65
FAIR_THRESHOLD = 40

# Primary attainment is reported up to this value, blended up to 100
PRIMARY_SCORE_CEILING = 150.0
PACE_EPSILON = 1e-6

GOAL_METRICS: dict[str, str] = {
    "meetings": "meetingsBooked",
    "leads": "leadsGenerated",
    "revenue": "revenueGenerated",
    "engagement": "responseRate",
    "awareness": "impressions",
}

# Checked in order: "cost per lead" must resolve to cost before lead
SECONDARY_GOAL_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("cost", "costPerLead"),
    ("efficiency", "costPerLead"),
    ("roi", "roi"),
    ("revenue", "revenueGenerated"),
    ("meeting", "meetingsBooked"),
    ("lead", "leadsGenerated"),
    ("conversion", "conversionRate"),
    ("click", "clicks"),
    ("response", "responseRate"),
    ("engagement", "responseRate"),
    ("reach", "impressions"),
    ("impression", "impressions"),
    ("awareness", "impressions"),
)

LOWER_IS_BETTER = frozenset({"costPerLead", "cost", "cpc", "cpm", "bounceRate"})


class SuccessStatus(str, Enum):
    """Qualitative tier for a success score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ScoreBreakdown(CampaignBaseModel):
    """Per-category scores behind a success score."""

    primary_goal: float
    secondary_goals: float
    efficiency: float


class SuccessScore(CampaignBaseModel):
    """Derived success score for one experiment at one point in time."""

    experiment_id: str
    calculated_at: datetime
    score: int
    breakdown: ScoreBreakdown
    status: SuccessStatus
    threshold_met: bool = False


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def goal_metric_key(primary_goal: str) -> str | None:
    """Return the metric key measured by a primary goal, if it is known."""
    key = GOAL_METRICS.get(primary_goal)
    if key is None:
        logger.debug("Unrecognized primary goal %r scores 0", primary_goal)
    return key


def primary_attainment(experiment: ExperimentRecord) -> float | None:
    """Return the unclamped percentage of the primary target reached.

    None when the goal is unrecognized or its target is missing or zero.
    """
    criteria = experiment.success_criteria
    key = goal_metric_key(criteria.primary_goal)
    if key is None:
        return None

    target = criteria.target_metrics.get(key)
    if not target:
        return None

    actual = experiment.metrics.get(key) or 0.0
    return 100.0 * actual / target


def primary_goal_score(experiment: ExperimentRecord) -> float:
    """Primary attainment clamped to [0, PRIMARY_SCORE_CEILING]."""
    attainment = primary_attainment(experiment)
    if attainment is None:
        return 0.0
    return _clamp(attainment, 0.0, PRIMARY_SCORE_CEILING)


def _goal_tokens(goal: str) -> list[str]:
    return re.findall(r"[a-z]+", goal.lower())


def match_goal_metric(goal: str, experiment: ExperimentRecord) -> str | None:
    """Resolve a free-text secondary goal to a metric key.

    An exact name match against a recorded metric or target wins
    ("meetings booked" -> meetingsBooked), then the keyword table.
    """
    tokens = _goal_tokens(goal)
    if not tokens:
        return None

    joined = "".join(tokens)
    targets = experiment.success_criteria.target_metrics
    for key in [*experiment.metrics.keys(), *targets.keys()]:
        if key.lower() == joined:
            return key

    for keyword, key in SECONDARY_GOAL_KEYWORDS:
        if any(token.startswith(keyword) for token in tokens):
            return key
    return None


def _metric_value(key: str, metrics: Mapping[str, float]) -> float | None:
    value = metrics.get(key)
    if value is None and key == "costPerLead":
        cost = metrics.get("cost")
        leads = metrics.get("leadsGenerated") or metrics.get("conversions")
        if cost is not None and leads:
            return cost / leads
    return value


def is_goal_met(goal: str, experiment: ExperimentRecord) -> bool:
    """Whether a secondary goal's metric reaches its implicit target.

    The target is the matching entry in ``target_metrics``. Without one,
    a higher-is-better metric counts as met once it is positive and a
    lower-is-better metric has no bar to clear.
    """
    key = match_goal_metric(goal, experiment)
    if key is None:
        return False

    value = _metric_value(key, experiment.metrics.values)
    if value is None:
        return False

    lower_is_better = key in LOWER_IS_BETTER
    target = experiment.success_criteria.target_metrics.get(key)
    if not target:
        return not lower_is_better and value > 0
    if lower_is_better:
        return value <= target
    return value >= target


def secondary_goals_score(experiment: ExperimentRecord) -> float:
    """Percentage of declared secondary goals met; 100 when none are declared."""
    goals = experiment.success_criteria.secondary_goals
    if not goals:
        return 100.0

    met = sum(1 for goal in goals if is_goal_met(goal, experiment))
    return 100.0 * met / len(goals)


def efficiency_score(
    experiment: ExperimentRecord, primary_score: float, now: datetime
) -> float:
    """Score attainment against the share of the time frame already used.

    Once the primary target is reached the score is the share of time left;
    before that it is the pace of attainment relative to elapsed time.
    """
    start = experiment.started_at or experiment.created_at
    elapsed = max(0, days_since(start, now))
    time_frame = experiment.success_criteria.time_frame
    if time_frame <= 0:
        time_frame = 1
    elapsed_share = elapsed / time_frame

    if primary_score >= 100:
        score = 100.0 * (1 - elapsed_share)
    else:
        score = 100.0 * (primary_score / 100) / max(elapsed_share, PACE_EPSILON)
    return _clamp(score, 0.0, 100.0)


def success_status(score: float) -> SuccessStatus:
    """Map a 0-100 score to its status tier."""
    if score >= EXCELLENT_THRESHOLD:
        return SuccessStatus.EXCELLENT
    if score >= GOOD_THRESHOLD:
        return SuccessStatus.GOOD
    if score >= FAIR_THRESHOLD:
        return SuccessStatus.FAIR
    return SuccessStatus.POOR


def compute_success(experiment: ExperimentRecord, now: datetime) -> SuccessScore:
    """Compute the weighted success score for an experiment."""
    primary = primary_goal_score(experiment)
    secondary = secondary_goals_score(experiment)
    efficiency = efficiency_score(experiment, primary, now)

    total = _round_half_up(
        PRIMARY_WEIGHT * min(primary, 100.0)
        + SECONDARY_WEIGHT * secondary
        + EFFICIENCY_WEIGHT * efficiency
    )
    score = int(_clamp(total, 0, 100))

    attainment = primary_attainment(experiment)
    threshold_met = (
        attainment is not None
        and attainment >= experiment.success_criteria.success_threshold
    )

    return SuccessScore(
        experiment_id=experiment.id,
        calculated_at=now,
        score=score,
        breakdown=ScoreBreakdown(
            primary_goal=primary,
            secondary_goals=secondary,
            efficiency=efficiency,
        ),
        status=success_status(score),
        threshold_met=threshold_met,
    )


def is_successful(result: SuccessScore) -> bool:
    """Whether a score lands in the good or excellent tier."""
    return result.status in (SuccessStatus.EXCELLENT, SuccessStatus.GOOD)


def compute_roi(
    meetings_booked: float,
    cost: float,
    value_per_meeting: float = VALUE_PER_MEETING,
) -> float:
    """Return meeting value divided by spend.

    Zero when there are no meetings or no spend; a non-positive cost is
    treated as no spend. Otherwise not clamped, so negative meeting
    corrections give a negative ROI.
    """
    if cost <= 0 or meetings_booked == 0:
        return 0.0
    return meetings_booked * value_per_meeting / cost


def apply_metric_update(
    metrics: Mapping[str, float],
    updates: Mapping[str, float],
    value_per_meeting: float = VALUE_PER_MEETING,
) -> dict[str, float]:
    """Merge metric edits into a new mapping, keeping ``roi`` in sync.

    ROI is recomputed whenever the edit touches meetingsBooked or cost.
    The caller decides whether to persist the result.
    """
    merged = dict(metrics)
    merged.update(updates)

    if "meetingsBooked" in updates or "cost" in updates:
        merged["roi"] = compute_roi(
            merged.get("meetingsBooked", 0.0),
            merged.get("cost", 0.0),
            value_per_meeting,
        )
    return merged
