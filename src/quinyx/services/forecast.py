# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Forecast service.

Uploads and queries of forecast data plus the dynamic and static staffing
rules. Every call validates its options before a request is built:

* unit-scoped calls need RequestOptions with ``external_unit_id``;
* range-bounded calls need complete RequestRangeOptions spanning at most
  MAX_DAYS_RANGE days;
* uploads accept at most MAX_ROWS_PER_CALL rows.

Quinyx API docs:
https://api.quinyx.com/v2/docs/swagger-ui.html?urls.primaryName=forecast#/
"""

import logging
from typing import TYPE_CHECKING, Any

from ..options import (
    AppendDataParams,
    DynamicRuleDeleteParams,
    RequestOptions,
    RequestRangeOptions,
    StaticRuleDeleteParams,
    require_batch_size,
    require_range_within,
    require_valid,
)
from ..types.forecast import (
    AggregatedPayload,
    CalculatedForecast,
    DataProvider,
    DataProviderInputList,
    DynamicRule,
    EditCalculatedRequest,
    PredictedDataInputList,
    StaticRule,
)
from .base import BaseService, TimeoutType, path_segment

if TYPE_CHECKING:
    from ..client import Response

logger = logging.getLogger(__name__)

DYNAMIC_RULES_PATH = "forecasts/dynamic-rules"
STATIC_RULES_PATH = "forecasts/static-rules"


def _variable_path(external_forecast_variable_id: str, resource: str) -> str:
    return (
        f"forecasts/forecast-variables/{path_segment(external_forecast_variable_id)}"
        f"/{resource}"
    )


class ForecastService(BaseService):
    """Forecast data and staffing rules."""

    # === Dynamic and static rules ===

    def get_dynamic_rules(
        self, options: RequestOptions | None, *, timeout: TimeoutType = None
    ) -> "Response[list[DynamicRule]]":
        options = require_valid(options)
        return self._call(
            "GET", DYNAMIC_RULES_PATH, query=options, dest=list[DynamicRule], timeout=timeout
        )

    def get_static_rules(
        self, options: RequestOptions | None, *, timeout: TimeoutType = None
    ) -> "Response[list[StaticRule]]":
        options = require_valid(options)
        return self._call(
            "GET", STATIC_RULES_PATH, query=options, dest=list[StaticRule], timeout=timeout
        )

    def create_dynamic_rule(
        self,
        rule: DynamicRule,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[DynamicRule]":
        options = require_valid(options)
        return self._call(
            "POST", DYNAMIC_RULES_PATH, body=rule, query=options, dest=DynamicRule, timeout=timeout
        )

    def create_static_rule(
        self,
        rule: StaticRule,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[StaticRule]":
        options = require_valid(options)
        return self._call(
            "POST", STATIC_RULES_PATH, body=rule, query=options, dest=StaticRule, timeout=timeout
        )

    def update_dynamic_rule(
        self,
        rule: DynamicRule,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """Replace an existing dynamic rule, matched by ``rule.external_id``."""
        options = require_valid(options)
        return self._call("PUT", DYNAMIC_RULES_PATH, body=rule, query=options, timeout=timeout)

    def update_static_rule(
        self,
        rule: StaticRule,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """Replace an existing static rule, matched by ``rule.external_id``."""
        options = require_valid(options)
        return self._call("PUT", STATIC_RULES_PATH, body=rule, query=options, timeout=timeout)

    def delete_dynamic_rule(
        self,
        dynamic_rule_id: str,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        options = require_valid(options)
        params = DynamicRuleDeleteParams(
            external_dynamic_rule_id=dynamic_rule_id,
            external_section_id=options.external_section_id,
            external_unit_id=options.external_unit_id,
        )
        return self._call("DELETE", DYNAMIC_RULES_PATH, query=params, timeout=timeout)

    def delete_static_rule(
        self,
        static_rule_id: str,
        options: RequestOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        options = require_valid(options)
        params = StaticRuleDeleteParams(
            external_static_rule_id=static_rule_id,
            external_section_id=options.external_section_id,
            external_unit_id=options.external_unit_id,
        )
        return self._call("DELETE", STATIC_RULES_PATH, query=params, timeout=timeout)

    # === Uploads ===

    def upload_actual_data(
        self,
        append_data: bool,
        inputs: DataProviderInputList | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """
        Send raw data points.

        Args:
            append_data: Add to existing data instead of replacing it
            inputs: Rows to upload, at most MAX_ROWS_PER_CALL

        Raises:
            BatchTooLargeError: If ``inputs`` holds too many rows.
        """
        return self._upload("forecasts/actual-data", append_data, inputs, timeout)

    def upload_budget_data(
        self,
        append_data: bool,
        inputs: DataProviderInputList | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """Send budget data points; same limits as ``upload_actual_data``."""
        return self._upload("forecasts/budget-data", append_data, inputs, timeout)

    def _upload(
        self,
        path: str,
        append_data: bool,
        inputs: DataProviderInputList | None,
        timeout: TimeoutType,
    ) -> "Response[None]":
        require_batch_size(inputs.data_provider_inputs if inputs is not None else None)
        logger.debug(
            "Uploading %d rows to %s",
            len(inputs.data_provider_inputs) if inputs is not None else 0,
            path,
        )
        return self._call(
            "POST",
            path,
            body=inputs,
            query=AppendDataParams(append_data=append_data),
            timeout=timeout,
        )

    def upload_predicted_data(
        self, predictions: PredictedDataInputList | None, *, timeout: TimeoutType = None
    ) -> "Response[None]":
        """
        Upload generated prediction data.

        The resolution of the data points must match the resolution expected
        by the forecast variable.

        Raises:
            BatchTooLargeError: If more than MAX_ROWS_PER_CALL rows are given.
        """
        require_batch_size(
            predictions.forecast_predictions if predictions is not None else None
        )
        return self._call("POST", "forecasts/predicted-data", body=predictions, timeout=timeout)

    # === Range-bounded queries ===

    def _range_call(
        self,
        method: str,
        path: str,
        options: RequestRangeOptions | None,
        dest: Any,
        timeout: TimeoutType,
    ) -> "Response[Any]":
        options = require_valid(options)
        require_range_within(options)
        return self._call(method, path, query=options, dest=dest, timeout=timeout)

    def get_actual_data(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[list[DataProvider]]":
        """Actual data previously uploaded for the forecast variable."""
        path = _variable_path(external_forecast_variable_id, "actual-data")
        return self._range_call("GET", path, options, list[DataProvider], timeout)

    def delete_actual_data(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """
        Delete uploaded actual data and the forecast calculated from it.

        Start and end must fall on the start of an hour.
        """
        path = _variable_path(external_forecast_variable_id, "actual-data")
        return self._range_call("DELETE", path, options, None, timeout)

    def get_actual_data_stream(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[list[DataProvider]]":
        path = _variable_path(external_forecast_variable_id, "actual-data-stream")
        return self._range_call("GET", path, options, list[DataProvider], timeout)

    def get_aggregated_data(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[list[AggregatedPayload]]":
        path = _variable_path(external_forecast_variable_id, "aggregated-data")
        return self._range_call("GET", path, options, list[AggregatedPayload], timeout)

    def get_calculated_forecast(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[list[CalculatedForecast]]":
        path = _variable_path(external_forecast_variable_id, "calculated-forecast")
        return self._range_call("GET", path, options, list[CalculatedForecast], timeout)

    def get_forecast_data(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[list[DataProvider]]":
        """Forecast data uploaded for the forecast variable."""
        path = _variable_path(external_forecast_variable_id, "forecast-data")
        return self._range_call("GET", path, options, list[DataProvider], timeout)

    def delete_forecast_data(
        self,
        external_forecast_variable_id: str,
        options: RequestRangeOptions | None,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        path = _variable_path(external_forecast_variable_id, "forecast-data")
        return self._range_call("DELETE", path, options, None, timeout)

    # === Calculated forecast edits ===

    def edit_calculated_forecast(
        self,
        external_forecast_variable_id: str,
        external_forecast_configuration_id: str,
        options: RequestOptions | None,
        edit: EditCalculatedRequest,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[None]":
        """Apply a manual edit to the calculated forecast."""
        options = require_valid(options)
        path = _variable_path(
            external_forecast_variable_id,
            "forecast-configurations/"
            f"{path_segment(external_forecast_configuration_id)}/edit-forecast",
        )
        return self._call("POST", path, body=edit, query=options, timeout=timeout)


__all__ = ["ForecastService"]
