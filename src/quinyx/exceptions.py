# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the Quinyx client library.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from QuinyxError, making it easy to catch every
client-originated failure with a single except clause. Each error carries
the server correlation identifier (``correlation_id``) so it can be quoted
to Quinyx support; it is an empty string when the server supplied none or
no request was sent.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from .codec import DecodeErrorKind


class QuinyxError(Exception):
    """Base exception for all Quinyx client errors.

    Example:
        try:
            client.tags.get_all_categories()
        except QuinyxError as e:
            logger.error(f"Quinyx call failed: {e} (request uid {e.correlation_id!r})")
    """

    def __init__(self, message: str = "", correlation_id: str = ""):
        super().__init__(message)
        self.message = message
        self.correlation_id = correlation_id


class ConfigurationError(QuinyxError):
    """Raised when a ClientConfig holds invalid values."""

    pass


class ValidationError(QuinyxError):
    """Raised when call input is rejected before any request is sent.

    The caller can always recover by correcting the input. Subclasses
    identify which precondition failed.
    """

    pass


class RequiredFieldsMissingError(ValidationError):
    """Raised when an options object is absent or lacks required fields.

    Attributes:
        missing: Names of the missing fields. Empty when the options
            object itself was not supplied.
    """

    def __init__(
        self,
        message: str = "Required fields in the Options not provided, see docs",
        missing: tuple[str, ...] = (),
    ):
        super().__init__(message)
        self.missing = missing


class DateRangeTooWideError(ValidationError):
    """Raised when a start/end range spans more days than the API allows.

    Attributes:
        days: Whole days between start and end.
        max_days: The permitted maximum.
    """

    def __init__(self, days: int, max_days: int):
        super().__init__(
            f"The amount of days between StartTime and EndTime ({days}) "
            f"is above the limit of {max_days}, see docs"
        )
        self.days = days
        self.max_days = max_days


class BatchTooLargeError(ValidationError):
    """Raised when an upload holds more rows than a single call accepts.

    Attributes:
        rows: Number of rows supplied.
        limit: Maximum rows per call.
    """

    def __init__(self, rows: int, limit: int):
        super().__init__(
            f"The total amount of data rows must not exceed {limit} in a "
            f"single call (got {rows})"
        )
        self.rows = rows
        self.limit = limit


class ImmutableFieldError(ValidationError):
    """Raised when an update tries to change a field the API keeps fixed.

    Attributes:
        field: Name of the field that cannot be changed.
    """

    def __init__(self, field: str):
        super().__init__(f"{field} cannot be changed")
        self.field = field


class InvalidPathError(ValidationError):
    """Raised when a request path cannot be resolved against the base URL.

    The base URL must end with a trailing slash and relative paths must not
    begin with one.
    """

    pass


class TransportError(QuinyxError):
    """Raised when no interpretable response was received.

    Covers connection failures, timeouts and protocol errors raised by the
    underlying HTTP transport. The original httpx exception is chained as
    ``__cause__``. The client never retries.
    """

    pass


class APIError(QuinyxError):
    """Raised when the server answers with a non-success status.

    Attributes:
        status_code: HTTP status returned by the server.
        correlation_id: Request UID supplied by the server, or "".
        response: The raw httpx response, when available.

    Example:
        try:
            client.tags.delete_tag("cat", "tag")
        except APIError as e:
            logger.warning(f"{e.status_code} from Quinyx, request uid {e.correlation_id}")
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        correlation_id: str = "",
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message, correlation_id)
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


class DecodeError(QuinyxError):
    """Raised when a payload does not match the expected shape.

    Distinct from APIError because it can occur on a successful HTTP
    status (malformed JSON, a timestamp in neither supported format, an
    unknown enum value).

    Attributes:
        kind: The DecodeErrorKind that classifies the failure, if known.
        status_code: HTTP status of the response being decoded, if any.
    """

    def __init__(
        self,
        message: str,
        kind: "DecodeErrorKind | None" = None,
        status_code: int | None = None,
        correlation_id: str = "",
    ):
        super().__init__(message, correlation_id)
        self.kind = kind
        self.status_code = status_code


class MalformedTimestampError(DecodeError):
    """Raised when a timestamp is neither epoch seconds nor RFC3339."""

    pass


__all__ = [
    "APIError",
    "BatchTooLargeError",
    "ConfigurationError",
    "DateRangeTooWideError",
    "DecodeError",
    "ImmutableFieldError",
    "InvalidPathError",
    "MalformedTimestampError",
    "QuinyxError",
    "RequiredFieldsMissingError",
    "TransportError",
    "ValidationError",
]
