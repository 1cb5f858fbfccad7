# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Tag payload types.

Quinyx tags (cost centers, projects, accounts, extended tags) grouped into
tag categories. API docs:
https://api.quinyx.com/v2/docs/swagger-ui.html?urls.primaryName=tags#/
"""

from enum import Enum
from typing import Annotated

from pydantic import Field

from ..codec import enum_decoder, wire_validator
from .base import QuinyxModel
from .timestamp import Timestamp


class TagType(str, Enum):
    """Kind of tag held by a category."""

    COST_CENTER = "COST_CENTER"
    PROJECT = "PROJECT"
    ACCOUNT = "ACCOUNT"
    EXTENDED = "EXTENDED"


class PeriodType(str, Enum):
    """Unit of a tag Period."""

    PERIOD = "PERIOD"
    DAYS = "DAYS"
    WEEKS = "WEEKS"


enum_decoder(TagType)
enum_decoder(PeriodType)

TagTypeField = Annotated[TagType, wire_validator(TagType)]
PeriodTypeField = Annotated[PeriodType, wire_validator(PeriodType)]


class Coordinate(QuinyxModel):
    """Geofence centre and radius."""

    latitude: float | None = None
    longitude: float | None = None
    radius: int | None = None


class CustomField(QuinyxModel):
    label: str | None = None
    value: str | None = None


class Period(QuinyxModel):
    """A span of time a tag applies to."""

    from_: Timestamp | None = Field(default=None, alias="from")
    to: Timestamp | None = None
    hours: float | None = None
    type: PeriodTypeField | None = None
    count: float | None = None


class Tag(QuinyxModel):
    """A tag within a tag category."""

    category_external_id: str | None = None
    code: str | None = None
    coordinates: list[Coordinate] | None = None
    custom_fields: list[CustomField] | None = None
    end_date: Timestamp | None = None
    external_id: str | None = None
    information: str | None = None
    name: str | None = None
    periods: list[Period] | None = None
    start_date: Timestamp | None = None
    unique_scheduling: bool | None = None
    unit_external_id: str | None = None


class TagCategory(QuinyxModel):
    """A category grouping tags of one TagType."""

    color: str | None = None
    external_id: str | None = None
    tag_id: int | None = Field(default=None, alias="id")
    name: str | None = None
    tag_type: TagTypeField | None = None


__all__ = [
    "Coordinate",
    "CustomField",
    "Period",
    "PeriodType",
    "Tag",
    "TagCategory",
    "TagType",
]
