"""Unit tests for ForecastService."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from quinyx.exceptions import (
    BatchTooLargeError,
    DateRangeTooWideError,
    RequiredFieldsMissingError,
)
from quinyx.options import MAX_ROWS_PER_CALL, RequestOptions, RequestRangeOptions
from quinyx.types.forecast import (
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
from quinyx.types.timestamp import Timestamp

START = datetime(2019, 10, 12, 7, 20, 50, tzinfo=timezone.utc)
UNIT = RequestOptions(external_unit_id="unit-1")


def range_options(days: int = 5) -> RequestRangeOptions:
    return RequestRangeOptions(
        start_time=START,
        end_time=START + timedelta(days=days),
        external_section_id="b",
        external_unit_id="c",
    )


def upload_rows(count: int) -> DataProviderInputList:
    row = DataProviderInput(
        external_forecast_variable_id="a",
        external_unit_id="c",
        external_section_id="b",
        data_payload=[Payload(data=123, timestamp=Timestamp(START))],
    )
    return DataProviderInputList(data_provider_inputs=[row] * count)


class TestRules:
    """Tests for dynamic and static rule endpoints."""

    def test_get_dynamic_rules(self, client, responder):
        """Dynamic rules are listed for the unit."""
        responder.reply(
            200,
            [
                {
                    "amount": 2,
                    "externalId": "r1",
                    "forecastExternalVariableId": "v1",
                    "startTime": {"hour": 8, "minute": 0, "nano": 0, "second": 0},
                    "shiftTypes": [{"amount": 1, "externalShiftTypeId": "st1"}],
                    "weekdays": ["0", "4"],
                }
            ],
        )
        response = client.forecast.get_dynamic_rules(UNIT)

        request = responder.last_request
        assert request.url.path == "/v2/forecasts/dynamic-rules"
        assert request.url.params["externalUnitId"] == "unit-1"
        [rule] = response.data
        assert rule.external_forecast_variable_id == "v1"
        assert rule.start_time.hour == 8
        assert rule.shift_types[0].shift_type_id == "st1"
        assert rule.weekdays == [Weekday.MONDAY, Weekday.FRIDAY]

    def test_get_static_rules(self, client, responder):
        """Static rules are listed for the unit."""
        responder.reply(200, [{"externalId": "s1", "startDate": 1570864850}])
        response = client.forecast.get_static_rules(UNIT)

        assert responder.last_request.url.path == "/v2/forecasts/static-rules"
        assert response.data[0].start_date == Timestamp(START)

    @pytest.mark.parametrize(
        "call",
        [
            lambda f, o: f.get_dynamic_rules(o),
            lambda f, o: f.get_static_rules(o),
            lambda f, o: f.create_dynamic_rule(DynamicRule(), o),
            lambda f, o: f.create_static_rule(StaticRule(), o),
            lambda f, o: f.update_dynamic_rule(DynamicRule(), o),
            lambda f, o: f.update_static_rule(StaticRule(), o),
            lambda f, o: f.delete_dynamic_rule("r1", o),
            lambda f, o: f.delete_static_rule("r1", o),
        ],
    )
    @pytest.mark.parametrize("options", [None, RequestOptions(external_section_id="s1")])
    def test_rules_require_unit(self, client, responder, call, options):
        """Rule calls without a unit id fail before any request."""
        with pytest.raises(RequiredFieldsMissingError):
            call(client.forecast, options)
        assert responder.requests == []

    def test_create_dynamic_rule(self, client, responder):
        """New dynamic rules are POSTed with wire names."""
        responder.reply(200, {"externalId": "r1", "amount": 3})
        rule = DynamicRule(
            amount=3,
            external_id="r1",
            external_forecast_variable_id="v1",
            start_time=LocalTime(hour=9),
            shift_types=[ShiftType(amount=1, shift_type_id="st1")],
            weekdays=[Weekday.SUNDAY],
        )
        response = client.forecast.create_dynamic_rule(rule, UNIT)

        request = responder.last_request
        body = json.loads(request.content)
        assert request.method == "POST"
        assert body["forecastExternalVariableId"] == "v1"
        assert body["shiftTypes"] == [{"amount": 1, "externalShiftTypeId": "st1"}]
        assert body["weekdays"] == ["6"]
        assert body["startTime"]["hour"] == 9
        assert response.data.amount == 3

    def test_update_static_rule(self, client, responder):
        """Static rule updates are PUT and decode nothing."""
        responder.reply(200, {"ignored": True})
        response = client.forecast.update_static_rule(
            StaticRule(external_id="s1", comment="Weekend cover"), UNIT
        )

        request = responder.last_request
        assert request.method == "PUT"
        assert request.url.path == "/v2/forecasts/static-rules"
        assert json.loads(request.content)["comment"] == "Weekend cover"
        assert response.data is None

    def test_delete_dynamic_rule(self, client, responder):
        """Deletes send the rule id and unit in the query."""
        options = RequestOptions(external_unit_id="unit-1", external_section_id="s1")
        client.forecast.delete_dynamic_rule("r1", options)

        request = responder.last_request
        assert request.method == "DELETE"
        assert request.url.path == "/v2/forecasts/dynamic-rules"
        assert list(request.url.params.multi_items()) == [
            ("externalDynamicRuleId", "r1"),
            ("externalSectionId", "s1"),
            ("externalUnitId", "unit-1"),
        ]

    def test_delete_static_rule(self, client, responder):
        """Static rule deletes name the static rule."""
        client.forecast.delete_static_rule("s1", UNIT)

        params = responder.last_request.url.params
        assert params["externalStaticRuleId"] == "s1"
        assert params["externalUnitId"] == "unit-1"


class TestUploads:
    """Tests for actual, budget and predicted data uploads."""

    def test_upload_actual_data(self, client, responder):
        """Actual data is POSTed with appendData in the query."""
        client.forecast.upload_actual_data(False, upload_rows(1))

        request = responder.last_request
        assert request.method == "POST"
        assert request.url.path == "/v2/forecasts/actual-data"
        assert request.url.params["appendData"] == "false"
        assert json.loads(request.content) == {
            "requests": [
                {
                    "externalForecastVariableId": "a",
                    "externalUnitId": "c",
                    "externalSectionId": "b",
                    "forecastDataPayload": [
                        {"data": 123, "timestamp": "2019-10-12T07:20:50Z"}
                    ],
                }
            ]
        }

    def test_upload_budget_data_append(self, client, responder):
        """Budget data honours append_data."""
        client.forecast.upload_budget_data(True, upload_rows(2))

        request = responder.last_request
        assert request.url.path == "/v2/forecasts/budget-data"
        assert request.url.params["appendData"] == "true"

    def test_upload_at_row_limit(self, client, responder):
        """Exactly MAX_ROWS_PER_CALL rows are sent."""
        client.forecast.upload_actual_data(False, upload_rows(MAX_ROWS_PER_CALL))
        body = json.loads(responder.last_request.content)
        assert len(body["requests"]) == MAX_ROWS_PER_CALL

    @pytest.mark.parametrize("method", ["upload_actual_data", "upload_budget_data"])
    def test_upload_over_row_limit(self, client, responder, method):
        """One row over the limit is rejected before any request."""
        with pytest.raises(BatchTooLargeError):
            getattr(client.forecast, method)(False, upload_rows(MAX_ROWS_PER_CALL + 1))
        assert responder.requests == []

    def test_upload_none_sends_no_body(self, client, responder):
        """A missing batch is sent without a body."""
        client.forecast.upload_actual_data(False, None)
        assert responder.last_request.content == b""

    def test_upload_predicted_data(self, client, responder):
        """Predictions are POSTed to predicted-data."""
        predictions = PredictedDataInputList(
            forecast_predictions=[
                ForecastPrediction(
                    external_forecast_variable_id="v1",
                    run_identifier="run-7",
                    run_timestamp=Timestamp(START),
                    payloads=[Payload(data=1.5, timestamp=Timestamp(START))],
                )
            ]
        )
        client.forecast.upload_predicted_data(predictions)

        request = responder.last_request
        body = json.loads(request.content)
        assert request.url.path == "/v2/forecasts/predicted-data"
        assert request.url.query == b""
        assert body["requests"][0]["runIdentifier"] == "run-7"
        assert body["requests"][0]["runTimestamp"] == "2019-10-12T07:20:50Z"
        assert body["requests"][0]["forecastDataPayload"][0]["data"] == 1.5

    def test_upload_predicted_over_row_limit(self, client, responder):
        """Predictions share the row limit."""
        predictions = PredictedDataInputList(
            forecast_predictions=[ForecastPrediction()] * (MAX_ROWS_PER_CALL + 1)
        )
        with pytest.raises(BatchTooLargeError):
            client.forecast.upload_predicted_data(predictions)
        assert responder.requests == []


class TestRangeQueries:
    """Tests for range-bounded forecast queries."""

    @pytest.mark.parametrize(
        ("method", "http_method", "resource"),
        [
            ("get_actual_data", "GET", "actual-data"),
            ("delete_actual_data", "DELETE", "actual-data"),
            ("get_actual_data_stream", "GET", "actual-data-stream"),
            ("get_aggregated_data", "GET", "aggregated-data"),
            ("get_calculated_forecast", "GET", "calculated-forecast"),
            ("get_forecast_data", "GET", "forecast-data"),
            ("delete_forecast_data", "DELETE", "forecast-data"),
        ],
    )
    def test_paths_and_query(self, client, responder, method, http_method, resource):
        """Each query hits its variable-scoped path with the range in the query."""
        getattr(client.forecast, method)("var-1", range_options())

        request = responder.last_request
        assert request.method == http_method
        assert request.url.path == f"/v2/forecasts/forecast-variables/var-1/{resource}"
        assert list(request.url.params.multi_items()) == [
            ("startTime", "2019-10-12T07:20:50Z"),
            ("endTime", "2019-10-17T07:20:50Z"),
            ("externalSectionId", "b"),
            ("externalUnitId", "c"),
        ]

    def test_get_actual_data_decodes(self, client, responder):
        """Actual data decodes into DataProvider rows."""
        responder.reply(
            200,
            [
                {
                    "externalForecastVariableId": "var-1",
                    "dataPayload": [
                        {"data": 10, "timestamp": 1570864850},
                        {"data": 11, "timestamp": "2019-10-12T08:20:50Z"},
                    ],
                }
            ],
        )
        [row] = client.forecast.get_actual_data("var-1", range_options()).data
        assert [p.timestamp for p in row.data_payload] == [
            Timestamp(START),
            Timestamp(START + timedelta(hours=1)),
        ]

    def test_get_calculated_forecast_decodes(self, client, responder):
        """Calculated forecasts decode edited values."""
        responder.reply(
            200,
            [
                {
                    "externalForecastConfigurationId": "cfg-1",
                    "dataPayload": [
                        {
                            "data": 4,
                            "editedData": 5,
                            "startTime": "2019-10-12T07:00:00Z",
                            "endTime": "2019-10-12T08:00:00Z",
                        }
                    ],
                }
            ],
        )
        [forecast] = client.forecast.get_calculated_forecast("var-1", range_options()).data
        assert forecast.external_forecast_configuration_id == "cfg-1"
        assert forecast.data_payload[0].edited_data == 5

    def test_get_aggregated_data_decodes(self, client, responder):
        """Aggregated data carries its span."""
        responder.reply(200, [{"data": 7, "startTime": 1570864850, "endTime": 1570868450}])
        [payload] = client.forecast.get_aggregated_data("var-1", range_options()).data
        assert payload.end_time == Timestamp(START + timedelta(hours=1))

    def test_range_limit_inclusive(self, client, responder):
        """A range of exactly 120 days is sent."""
        client.forecast.get_forecast_data("var-1", range_options(days=120))
        assert len(responder.requests) == 1

    def test_range_too_wide(self, client, responder):
        """Ranges over 120 days are rejected before any request."""
        with pytest.raises(DateRangeTooWideError):
            client.forecast.get_actual_data("var-1", range_options(days=121))
        assert responder.requests == []

    def test_missing_options(self, client, responder):
        """None options are rejected before any request."""
        with pytest.raises(RequiredFieldsMissingError):
            client.forecast.get_actual_data("var-1", None)
        assert responder.requests == []

    def test_incomplete_options(self, client, responder):
        """Incomplete options name the missing fields."""
        options = RequestRangeOptions(start_time=START, external_unit_id="c")
        with pytest.raises(RequiredFieldsMissingError) as exc_info:
            client.forecast.delete_forecast_data("var-1", options)
        assert exc_info.value.missing == ("end_time",)
        assert responder.requests == []

    def test_variable_id_percent_encoded(self, client, responder):
        """Variable ids are escaped into one segment."""
        client.forecast.get_actual_data("var/1", range_options())
        assert responder.last_request.url.raw_path.startswith(
            b"/v2/forecasts/forecast-variables/var%2F1/actual-data?"
        )


class TestEditCalculatedForecast:
    """Tests for edit_calculated_forecast."""

    def test_edit(self, client, responder):
        """Edits are POSTed to the configuration's edit-forecast path."""
        edit = EditCalculatedRequest(
            start_time=Timestamp(START),
            end_time=Timestamp(START + timedelta(hours=8)),
            percentage_modification=10.0,
            week_days=[Weekday.MONDAY, Weekday.TUESDAY],
        )
        client.forecast.edit_calculated_forecast("var-1", "cfg-1", UNIT, edit)

        request = responder.last_request
        body = json.loads(request.content)
        assert request.method == "POST"
        assert request.url.path == (
            "/v2/forecasts/forecast-variables/var-1/forecast-configurations/cfg-1/edit-forecast"
        )
        assert request.url.params["externalUnitId"] == "unit-1"
        assert body["startTime"] == "2019-10-12T07:20:50Z"
        assert body["endTime"] == "2019-10-12T15:20:50Z"
        assert body["weekdays"] == ["0", "1"]
        assert body["percentageModification"] == 10.0
        assert "repetitionEndDate" not in body

    def test_edit_requires_unit(self, client, responder):
        """Edits need unit options."""
        edit = EditCalculatedRequest(start_time=Timestamp(START), end_time=Timestamp(START))
        with pytest.raises(RequiredFieldsMissingError):
            client.forecast.edit_calculated_forecast("var-1", "cfg-1", None, edit)
        assert responder.requests == []
