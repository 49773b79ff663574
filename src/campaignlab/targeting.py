# Copyright (c) Syntropy Systems
"""Resolve which targeting mode an experiment uses.

An experiment may carry an ICP profile reference, inline custom targeting
and legacy audience text at the same time. Exactly one is authoritative,
by precedence: ICP reference, then custom targeting, then legacy text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import Field
from typing_extensions import TypeAlias

from campaignlab.models import CustomTargeting, ICPProfile
from campaignlab.models.base import CampaignBaseModel

if TYPE_CHECKING:
    from collections.abc import Iterable

    from campaignlab.models import ExperimentRecord


class IcpTargeting(CampaignBaseModel):
    """Targeting by reference to a saved ICP profile."""

    kind: Literal["icp"] = "icp"
    profile_id: str


class CustomAudience(CampaignBaseModel):
    """Targeting defined inline on the experiment."""

    kind: Literal["custom"] = "custom"
    targeting: CustomTargeting


class LegacyAudience(CampaignBaseModel):
    """Free-text audience from records created before profiles existed."""

    kind: Literal["legacy"] = "legacy"
    audience: str = ""


Targeting: TypeAlias = Annotated[
    Union[IcpTargeting, CustomAudience, LegacyAudience],
    Field(discriminator="kind"),
]


def resolve_targeting(experiment: ExperimentRecord) -> Targeting:
    """Return the authoritative targeting for an experiment."""
    if experiment.icp_profile_id:
        return IcpTargeting(profile_id=experiment.icp_profile_id)
    if experiment.custom_targeting is not None:
        return CustomAudience(targeting=experiment.custom_targeting)
    return LegacyAudience(audience=experiment.target_audience)


def find_profile(profile_id: str, profiles: Iterable[ICPProfile]) -> ICPProfile | None:
    """Look up a profile by id."""
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    return None


def describe_targeting(targeting: Targeting, profiles: Iterable[ICPProfile] = ()) -> str:
    """Short one-line description of a targeting choice for listings."""
    if isinstance(targeting, IcpTargeting):
        profile = find_profile(targeting.profile_id, profiles)
        if profile is None:
            return f"ICP Profile ({targeting.profile_id[:8]}...)"
        return f"ICP Profile: {profile.name}"

    if isinstance(targeting, CustomAudience):
        job_titles = ", ".join(targeting.targeting.job_titles[:2])
        industries = ", ".join(targeting.targeting.industries[:1])
        parts = [part for part in (job_titles, industries) if part]
        return f"Custom: {' in '.join(parts)}" if parts else "Custom targeting"

    return targeting.audience or "-"


def targeting_details(
    targeting: Targeting, profiles: Iterable[ICPProfile] = ()
) -> dict[str, list[str]]:
    """Return labelled value lists for a detail view.

    Unknown profile references yield an empty mapping.
    """
    if isinstance(targeting, IcpTargeting):
        profile = find_profile(targeting.profile_id, profiles)
        if profile is None:
            return {}
        source: CustomTargeting | ICPProfile = profile
    elif isinstance(targeting, CustomAudience):
        source = targeting.targeting
    else:
        return {"Audience": [targeting.audience]} if targeting.audience else {}

    details = {
        "Job Titles": list(source.job_titles),
        "Industries": list(source.industries),
        "Company Sizes": list(source.company_sizes),
    }
    if source.pain_points:
        details["Pain Points"] = list(source.pain_points)
    return details
