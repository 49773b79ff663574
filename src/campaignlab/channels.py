# Copyright (c) Syntropy Systems
"""Which metrics apply to a distribution channel."""

from __future__ import annotations

from typing import TYPE_CHECKING

from campaignlab.scoring import GOAL_METRICS

if TYPE_CHECKING:
    from campaignlab.models import SuccessCriteria

# Channel label keywords for each category
CHANNEL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "social": ("linkedin", "social", "paid"),
    "email": ("email",),
    "web": ("landing", "website"),
    "webinar": ("webinar",),
    "content": ("content", "blog"),
}

CHANNEL_METRICS: dict[str, tuple[str, ...]] = {
    "social": ("impressions", "clicks", "ctr", "cpc", "cpm", "conversions"),
    "email": ("clicks", "ctr", "conversions", "openRate", "bounceRate"),
    "web": ("clicks", "ctr", "conversionRate", "timeOnPage"),
    "webinar": ("registrations", "attendanceRate", "engagement"),
    "content": ("impressions", "clicks", "ctr", "timeOnPage"),
}

# Tracked for every channel
COMMON_METRICS = ("cost",)


def channel_categories(channel: str) -> list[str]:
    """Classify a free-text channel label into known categories."""
    label = channel.lower()
    return [
        category
        for category, keywords in CHANNEL_KEYWORDS.items()
        if any(keyword in label for keyword in keywords)
    ]


def applicable_metrics(channel: str) -> list[str]:
    """Metric keys worth recording for a channel, in display order."""
    metrics: list[str] = []
    for category in channel_categories(channel):
        metrics.extend(CHANNEL_METRICS[category])
    metrics.extend(COMMON_METRICS)
    return list(dict.fromkeys(metrics))


def success_metric_keys(criteria: SuccessCriteria) -> list[str]:
    """Metric keys tied to success criteria.

    The primary goal's key comes first when it has a target, followed by
    every other key that has a target set.
    """
    keys: list[str] = []
    primary_key = GOAL_METRICS.get(criteria.primary_goal)
    if primary_key is not None and primary_key in criteria.target_metrics:
        keys.append(primary_key)
    keys.extend(key for key in criteria.target_metrics.keys() if key not in keys)
    return keys
