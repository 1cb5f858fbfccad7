# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Payload types and the timestamp codec."""

from .base import QuinyxModel
from .forecast import (
    AggregatedPayload,
    CalculatedForecast,
    CalculatedPayload,
    DataProvider,
    DataProviderInput,
    DataProviderInputList,
    DynamicRule,
    EditCalculatedRequest,
    ForecastPrediction,
    LocalTime,
    Payload,
    PredictedDataInputList,
    ShiftType,
    StaticRule,
    Weekday,
)
from .tags import (
    Coordinate,
    CustomField,
    Period,
    PeriodType,
    Tag,
    TagCategory,
    TagType,
)
from .timestamp import (
    Timestamp,
    decode_timestamp,
    decode_timestamp_token,
    format_query_time,
    parse_rfc3339,
)

__all__ = [
    # Forecast payloads
    "AggregatedPayload",
    "CalculatedForecast",
    "CalculatedPayload",
    # Tag payloads
    "Coordinate",
    "CustomField",
    "DataProvider",
    "DataProviderInput",
    "DataProviderInputList",
    "DynamicRule",
    "EditCalculatedRequest",
    "ForecastPrediction",
    "LocalTime",
    "Payload",
    "Period",
    "PeriodType",
    "PredictedDataInputList",
    "QuinyxModel",
    "ShiftType",
    "StaticRule",
    "Tag",
    "TagCategory",
    "TagType",
    # Timestamp codec
    "Timestamp",
    "Weekday",
    "decode_timestamp",
    "decode_timestamp_token",
    "format_query_time",
    "parse_rfc3339",
]
