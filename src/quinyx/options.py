# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Per-call options and their precondition validators.

Options objects are validated before any request is built. Validation
returns a ValidationResult rather than raising, and an absent options
object is its own variant (ABSENT) instead of a special case at each call
site. The ``require_*`` helpers turn failed checks into ValidationError
subclasses for the services.
"""

import math
from collections.abc import Sized
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Protocol, TypeVar

from .exceptions import (
    BatchTooLargeError,
    DateRangeTooWideError,
    RequiredFieldsMissingError,
)
from .query import QueryField
from .types.timestamp import Timestamp

MAX_ROWS_PER_CALL = 366
"""Maximum rows accepted by a single upload call."""

MAX_DAYS_RANGE = 120
"""Maximum whole days between start and end of a range-bounded query."""


class ValidationStatus(Enum):
    """Outcome of validating an options object."""

    VALID = "valid"
    INCOMPLETE = "incomplete"
    ABSENT = "absent"


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating an options object.

    Attributes:
        status: VALID, INCOMPLETE (fields missing) or ABSENT (no options)
        missing: Attribute names of required fields that were not set
    """

    status: ValidationStatus
    missing: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.status is ValidationStatus.VALID

    @classmethod
    def absent(cls) -> "ValidationResult":
        return cls(ValidationStatus.ABSENT)

    @classmethod
    def from_missing(cls, missing: tuple[str, ...]) -> "ValidationResult":
        if missing:
            return cls(ValidationStatus.INCOMPLETE, missing)
        return cls(ValidationStatus.VALID)


class Validatable(Protocol):
    def validate(self) -> ValidationResult: ...


V = TypeVar("V", bound=Validatable)


def _as_datetime(value: datetime | Timestamp) -> datetime:
    if isinstance(value, Timestamp):
        return value.time
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class RequestOptions:
    """
    Options for unit-scoped forecast calls (rules, forecast edits).

    Attributes:
        external_unit_id: Required external id of the unit
        external_section_id: Optional external id of the section
    """

    external_unit_id: str | None = None
    external_section_id: str | None = None

    __query_fields__: ClassVar[tuple[QueryField, ...]] = (
        QueryField("externalSectionId", "external_section_id"),
        QueryField("externalUnitId", "external_unit_id", omit_empty=False),
    )

    def validate(self) -> ValidationResult:
        if self.external_unit_id is None:
            return ValidationResult.from_missing(("external_unit_id",))
        return ValidationResult.from_missing(())


@dataclass
class RequestRangeOptions:
    """
    Options for range-bounded forecast queries.

    The span between ``start_time`` and ``end_time`` may not exceed
    MAX_DAYS_RANGE days; that check runs separately from ``validate()``.

    Attributes:
        start_time: Required start of the range
        end_time: Required end of the range
        external_section_id: Optional external id of the section
        external_unit_id: Required external id of the unit
    """

    start_time: datetime | Timestamp | None = None
    end_time: datetime | Timestamp | None = None
    external_section_id: str | None = None
    external_unit_id: str | None = None

    __query_fields__: ClassVar[tuple[QueryField, ...]] = (
        QueryField("startTime", "start_time", omit_empty=False),
        QueryField("endTime", "end_time", omit_empty=False),
        QueryField("externalSectionId", "external_section_id"),
        QueryField("externalUnitId", "external_unit_id", omit_empty=False),
    )

    def validate(self) -> ValidationResult:
        missing = []
        if self.external_unit_id is None:
            missing.append("external_unit_id")
        if self.start_time is None:
            missing.append("start_time")
        if self.end_time is None:
            missing.append("end_time")
        return ValidationResult.from_missing(tuple(missing))

    def day_distance(self) -> int:
        """Whole days between start and end, floor of elapsed hours / 24."""
        if self.start_time is None or self.end_time is None:
            raise ValueError("day_distance requires both start_time and end_time")
        elapsed = _as_datetime(self.end_time) - _as_datetime(self.start_time)
        return math.floor(elapsed.total_seconds() / 3600 / 24)


@dataclass
class DynamicRuleDeleteParams:
    """Query parameters for deleting a dynamic rule."""

    external_dynamic_rule_id: str
    external_section_id: str | None = None
    external_unit_id: str | None = None

    __query_fields__: ClassVar[tuple[QueryField, ...]] = (
        QueryField("externalDynamicRuleId", "external_dynamic_rule_id", omit_empty=False),
        QueryField("externalSectionId", "external_section_id"),
        QueryField("externalUnitId", "external_unit_id", omit_empty=False),
    )


@dataclass
class StaticRuleDeleteParams:
    """Query parameters for deleting a static rule."""

    external_static_rule_id: str
    external_section_id: str | None = None
    external_unit_id: str | None = None

    __query_fields__: ClassVar[tuple[QueryField, ...]] = (
        QueryField("externalStaticRuleId", "external_static_rule_id", omit_empty=False),
        QueryField("externalSectionId", "external_section_id"),
        QueryField("externalUnitId", "external_unit_id", omit_empty=False),
    )


@dataclass
class AppendDataParams:
    """Query parameters for actual/budget data uploads."""

    append_data: bool = False

    __query_fields__: ClassVar[tuple[QueryField, ...]] = (
        QueryField("appendData", "append_data", omit_empty=False),
    )


def validate_options(options: Validatable | None) -> ValidationResult:
    """Validate ``options``; None yields the ABSENT variant."""
    if options is None:
        return ValidationResult.absent()
    return options.validate()


def is_valid(options: Validatable | None) -> bool:
    """True only when ``options`` is present and has every required field."""
    return validate_options(options).is_valid


def day_distance(options: RequestRangeOptions) -> int:
    """Whole days spanned by ``options`` (floor of elapsed hours / 24)."""
    return options.day_distance()


def require_valid(options: V | None) -> V:
    """
    Return ``options`` once it is known to be present and complete.

    Raises:
        RequiredFieldsMissingError: If ``options`` is absent or incomplete.
    """
    result = validate_options(options)
    if not result.is_valid:
        raise RequiredFieldsMissingError(missing=result.missing)
    return options  # type: ignore[return-value]


def require_range_within(
    options: RequestRangeOptions, max_days: int = MAX_DAYS_RANGE
) -> None:
    """
    Check the span of already-valid range options.

    Raises:
        DateRangeTooWideError: If the range covers more than ``max_days``.
    """
    days = options.day_distance()
    if days > max_days:
        raise DateRangeTooWideError(days, max_days)


def require_batch_size(rows: Sized | None, limit: int = MAX_ROWS_PER_CALL) -> None:
    """
    Check an upload batch against the per-call row limit.

    A None batch is accepted; the request is then sent without rows.

    Raises:
        BatchTooLargeError: If ``rows`` holds more than ``limit`` entries.
    """
    if rows is not None and len(rows) > limit:
        raise BatchTooLargeError(len(rows), limit)


__all__ = [
    "MAX_DAYS_RANGE",
    "MAX_ROWS_PER_CALL",
    "AppendDataParams",
    "DynamicRuleDeleteParams",
    "RequestOptions",
    "RequestRangeOptions",
    "StaticRuleDeleteParams",
    "ValidationResult",
    "ValidationStatus",
    "day_distance",
    "is_valid",
    "require_batch_size",
    "require_range_within",
    "require_valid",
    "validate_options",
]
