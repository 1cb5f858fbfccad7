# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Quinyx Client - Typed Python client for the Quinyx workforce management API.

This library wraps the Quinyx v2 REST API in resource services with typed
request and response models, validating call options before any request
leaves the process.

Key Features:
    - Tags and Forecast services with pydantic payload models
    - Timestamps decoded from epoch seconds or RFC3339 alike
    - Client-side checks for required options, 120-day ranges and
      366-row uploads
    - Server request UID surfaced on every response and every error
    - Bring-your-own authenticated httpx transport

Quick Start:
    >>> import httpx
    >>> from quinyx import QuinyxClient, RequestRangeOptions
    >>>
    >>> http = httpx.Client(auth=my_oauth2_auth)
    >>> with QuinyxClient(http) as client:
    ...     options = RequestRangeOptions(
    ...         start_time=start, end_time=end, external_unit_id="unit-1"
    ...     )
    ...     response = client.forecast.get_actual_data("variable-1", options)
    ...     print(response.request_uid, response.data)

Main Exports:
    - QuinyxClient, Response: Client and call result
    - ClientConfig: Configuration options
    - RequestOptions, RequestRangeOptions: Per-call options
    - Timestamp: Dual-format timestamp
    - QuinyxError and subclasses: Error taxonomy

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import QuinyxClient, Response
from .config import DEFAULT_BASE_URL, DEFAULT_TEST_BASE_URL, ClientConfig
from .exceptions import (
    APIError,
    BatchTooLargeError,
    ConfigurationError,
    DateRangeTooWideError,
    DecodeError,
    ImmutableFieldError,
    InvalidPathError,
    MalformedTimestampError,
    QuinyxError,
    RequiredFieldsMissingError,
    TransportError,
    ValidationError,
)
from .options import (
    MAX_DAYS_RANGE,
    MAX_ROWS_PER_CALL,
    RequestOptions,
    RequestRangeOptions,
    ValidationResult,
    ValidationStatus,
    day_distance,
    is_valid,
    validate_options,
)
from .services import ForecastService, TagsService
from .types.timestamp import Timestamp

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TEST_BASE_URL",
    "MAX_DAYS_RANGE",
    "MAX_ROWS_PER_CALL",
    "APIError",
    "BatchTooLargeError",
    # Configuration
    "ClientConfig",
    "ConfigurationError",
    "DateRangeTooWideError",
    "DecodeError",
    "ForecastService",
    "ImmutableFieldError",
    "InvalidPathError",
    "MalformedTimestampError",
    # Client
    "QuinyxClient",
    # Exceptions
    "QuinyxError",
    # Options
    "RequestOptions",
    "RequestRangeOptions",
    "RequiredFieldsMissingError",
    "Response",
    # Services
    "TagsService",
    # Timestamp
    "Timestamp",
    "TransportError",
    "ValidationError",
    "ValidationResult",
    "ValidationStatus",
    "day_distance",
    "is_valid",
    "validate_options",
]
