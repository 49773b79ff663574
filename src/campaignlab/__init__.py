"""
campaignlab - Outreach experiment tracking.

Score experiment success, watch end dates, keep ROI in sync.
"""

from campaignlab.dates import (
    UrgencyTier,
    countdown_label,
    days_remaining,
    is_overdue,
    should_show_countdown,
    urgency_tier,
)
from campaignlab.scoring import SuccessScore, SuccessStatus, compute_roi, compute_success

__version__ = "0.1.0"
__all__ = [
    "SuccessScore",
    "SuccessStatus",
    "UrgencyTier",
    "__version__",
    "compute_roi",
    "compute_success",
    "countdown_label",
    "days_remaining",
    "is_overdue",
    "should_show_countdown",
    "urgency_tier",
]
