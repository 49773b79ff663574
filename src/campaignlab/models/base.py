# Copyright (c) Syntropy Systems
"""Shared Pydantic model helpers for campaignlab."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CampaignBaseModel(BaseModel):
    """Base model with shared config for campaignlab schemas.

    Fields accept both snake_case names and the camelCase keys used by
    exported experiment records.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class ExtraAllowModel(CampaignBaseModel):
    """Base model that preserves extra fields for flexible schemas.

    Records written back to disk keep keys this package does not model.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )
