# Copyright (c) Syntropy Systems
"""Day-count helpers for experiment end dates.

Every function takes the current time as an explicit ``now`` argument and
works on calendar days: the time of day is discarded before subtracting.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from enum import Enum

from campaignlab.models import EXPERIMENT_STATUSES, STATUS_ACTIVE

logger = logging.getLogger(__name__)

# Countdown is shown for end dates at most this many days away
COUNTDOWN_WINDOW_DAYS = 5


class UrgencyTier(str, Enum):
    """Display emphasis for an approaching end date."""

    NEUTRAL = "neutral"
    CRITICAL = "critical"
    WARNING = "warning"
    CAUTION = "caution"


def _to_day(value: date | datetime, now: date | datetime) -> date:
    if isinstance(value, datetime):
        if (
            isinstance(now, datetime)
            and value.tzinfo is not None
            and now.tzinfo is not None
        ):
            value = value.astimezone(now.tzinfo)
        return value.date()
    return value


def days_remaining(end_date: date | datetime, now: date | datetime) -> int:
    """Return whole calendar days from ``now`` until ``end_date``.

    Negative when the end date has passed, zero when it is today.
    Aware datetimes are converted to ``now``'s timezone before truncation.
    """
    today = now.date() if isinstance(now, datetime) else now
    return (_to_day(end_date, now) - today).days


def days_since(start: date | datetime, now: date | datetime) -> int:
    """Return whole calendar days elapsed from ``start`` to ``now``."""
    return -days_remaining(start, now)


def should_show_countdown(
    end_date: date | datetime,
    now: date | datetime,
    window: int = COUNTDOWN_WINDOW_DAYS,
) -> bool:
    """Whether the end date is today or within the countdown window."""
    remaining = days_remaining(end_date, now)
    return 0 <= remaining <= window


def countdown_label(end_date: date | datetime, now: date | datetime) -> str:
    """Short countdown text such as "Ends tomorrow" or "4 days left".

    Callers should check should_show_countdown() first; labels outside the
    window are defined but not meant for display.
    """
    remaining = days_remaining(end_date, now)

    if remaining < 0:
        return "Ended"
    if remaining == 0:
        return "Ends today"
    if remaining == 1:
        return "Ends tomorrow"
    return f"{remaining} days left"


def urgency_tier(end_date: date | datetime, now: date | datetime) -> UrgencyTier:
    """Classify how close the end date is."""
    remaining = days_remaining(end_date, now)

    if remaining < 0:
        return UrgencyTier.NEUTRAL
    if remaining == 0:
        return UrgencyTier.CRITICAL
    if remaining <= 2:
        return UrgencyTier.WARNING
    return UrgencyTier.CAUTION


def is_overdue(status: str, end_date: date | datetime, now: date | datetime) -> bool:
    """Whether an active experiment has run past its end date.

    Only ``active`` experiments can be overdue; paused, terminal and
    unrecognized statuses never are.
    """
    if status != STATUS_ACTIVE:
        if status not in EXPERIMENT_STATUSES:
            logger.debug("Unrecognized status %r treated as not overdue", status)
        return False
    return days_remaining(end_date, now) < 0


def format_date(value: date | datetime) -> str:
    """Format a date as e.g. "Oct 19, 2026"."""
    return f"{value:%b} {value.day}, {value.year}"


def format_date_with_time(value: datetime) -> str:
    """Format a timestamp as e.g. "Oct 19, 2026, 09:05 AM"."""
    return f"{format_date(value)}, {value:%I:%M %p}"
