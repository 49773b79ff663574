# Copyright (c) Syntropy Systems
"""Pydantic models for campaignlab records."""

from .experiment import (
    EXPERIMENT_STATUSES,
    PRIMARY_GOALS,
    STATUS_ACTIVE,
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PAUSED,
    TERMINAL_STATUSES,
    CustomTargeting,
    ExperimentMetrics,
    ExperimentRecord,
    ICPProfile,
    SuccessCriteria,
    TargetMetrics,
    Workspace,
)

__all__ = [
    "EXPERIMENT_STATUSES",
    "PRIMARY_GOALS",
    "STATUS_ACTIVE",
    "STATUS_COMPLETED",
    "STATUS_FAILED",
    "STATUS_PAUSED",
    "TERMINAL_STATUSES",
    "CustomTargeting",
    "ExperimentMetrics",
    "ExperimentRecord",
    "ICPProfile",
    "SuccessCriteria",
    "TargetMetrics",
    "Workspace",
]
