# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Forecast payload types.

Actual, budget, predicted and calculated forecast data plus the dynamic and
static staffing rules. API docs:
https://api.quinyx.com/v2/docs/swagger-ui.html?urls.primaryName=forecast#/
"""

from enum import Enum
from typing import Annotated

from pydantic import Field

from ..codec import enum_decoder, wire_validator
from .base import QuinyxModel
from .timestamp import Timestamp


class Weekday(str, Enum):
    """Weekday as numbered by the forecast API (Monday is "0")."""

    MONDAY = "0"
    TUESDAY = "1"
    WEDNESDAY = "2"
    THURSDAY = "3"
    FRIDAY = "4"
    SATURDAY = "5"
    SUNDAY = "6"


enum_decoder(Weekday)

WeekdayField = Annotated[Weekday, wire_validator(Weekday)]


class Payload(QuinyxModel):
    """A single raw data point."""

    data: float | None = None
    timestamp: Timestamp | None = None


class AggregatedPayload(QuinyxModel):
    """A data point aggregated over a time span."""

    data: float | None = None
    end_time: Timestamp | None = None
    start_time: Timestamp | None = None


class DataProviderInput(QuinyxModel):
    """One row of actual or budget data to upload."""

    external_forecast_variable_id: str | None = None
    external_unit_id: str | None = None
    external_section_id: str | None = None
    data_payload: list[Payload] | None = Field(default=None, alias="forecastDataPayload")


class DataProviderInputList(QuinyxModel):
    """Upload body for actual and budget data."""

    data_provider_inputs: list[DataProviderInput] = Field(
        default_factory=list, alias="requests"
    )


class DataProvider(QuinyxModel):
    """Previously uploaded data returned by the forecast API."""

    external_forecast_variable_id: str | None = None
    external_unit_id: str | None = None
    external_section_id: str | None = None
    data_payload: list[Payload] | None = None


class ForecastPrediction(QuinyxModel):
    """One row of generated prediction data."""

    external_forecast_variable_id: str | None = None
    external_forecast_configuration_id: str | None = None
    external_unit_id: str | None = None
    external_section_id: str | None = None
    run_identifier: str | None = None
    run_timestamp: Timestamp | None = None
    payloads: list[Payload] = Field(default_factory=list, alias="forecastDataPayload")


class PredictedDataInputList(QuinyxModel):
    """Upload body for predicted data."""

    forecast_predictions: list[ForecastPrediction] = Field(
        default_factory=list, alias="requests"
    )


class CalculatedPayload(QuinyxModel):
    data: float | None = None
    edited_data: float | None = None
    start_time: Timestamp | None = None
    end_time: Timestamp | None = None


class CalculatedForecast(QuinyxModel):
    """Forecast calculated by Quinyx for a forecast configuration."""

    data_payload: list[CalculatedPayload] | None = None
    external_forecast_configuration_id: str | None = None
    external_section_id: str | None = None
    external_unit_id: str | None = None


class EditCalculatedRequest(QuinyxModel):
    """Body of an edit to the calculated forecast."""

    repetition_setup: bool = False
    start_time: Timestamp
    end_time: Timestamp
    percentage_modification: float = 0.0
    new_value_for_period: float = 0.0
    week_days: list[WeekdayField] = Field(default_factory=list, alias="weekdays")
    repetition_end_date: Timestamp | None = None
    week_pattern: int = 0


class LocalTime(QuinyxModel):
    """Time of day without a date."""

    hour: int = 0
    minute: int = 0
    nano: int = 0
    second: int = 0


class ShiftType(QuinyxModel):
    amount: int = 0
    shift_type_id: str = Field(default="", alias="externalShiftTypeId")


class DynamicRule(QuinyxModel):
    """Staffing rule driven by a forecast variable."""

    amount: int = 0
    end_time: LocalTime = Field(default_factory=LocalTime)
    start_time: LocalTime = Field(default_factory=LocalTime)
    external_id: str = ""
    external_forecast_variable_id: str = Field(
        default="", alias="forecastExternalVariableId"
    )
    shift_types: list[ShiftType] = Field(default_factory=list)
    weekdays: list[WeekdayField] = Field(default_factory=list)


class StaticRule(QuinyxModel):
    """Fixed staffing rule repeating over a date range."""

    comment: str = ""
    start_date: Timestamp | None = None
    end_date: Timestamp | None = None
    start_time: LocalTime = Field(default_factory=LocalTime)
    end_time: LocalTime = Field(default_factory=LocalTime)
    external_id: str = ""
    repeat_period: int = 0
    shift_type: ShiftType = Field(default_factory=ShiftType)
    weekdays: list[WeekdayField] = Field(default_factory=list)


__all__ = [
    "AggregatedPayload",
    "CalculatedForecast",
    "CalculatedPayload",
    "DataProvider",
    "DataProviderInput",
    "DataProviderInputList",
    "DynamicRule",
    "EditCalculatedRequest",
    "ForecastPrediction",
    "LocalTime",
    "Payload",
    "PredictedDataInputList",
    "ShiftType",
    "StaticRule",
    "Weekday",
]
