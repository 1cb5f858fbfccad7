# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Timestamp type and its dual-format wire codec.

The Quinyx API emits instants either as integer epoch seconds or as RFC3339
strings. Both decode to the same Timestamp; equality compares instants, not
formatting. Encoding always produces RFC3339 in UTC with at most millisecond
precision, e.g. ``2019-10-12T07:20:50.52Z``. Query strings use the coarser
``2019-10-12T07:20:50Z`` form (see ``Timestamp.query_format``).
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..codec import DecodeErrorKind, DecodeResult, WireDecodeError, register_decoder

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_EPOCH_TOKEN = re.compile(r"^[+-]?\d+$", re.ASCII)
_RFC3339 = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[Tt]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$",
    re.ASCII,
)


def _truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond - value.microsecond % 1000)


class Timestamp:
    """
    An absolute instant, normalised to UTC and millisecond precision.

    Naive datetimes are taken to be UTC. Two timestamps are equal when they
    denote the same instant, however they were decoded. Instances are
    immutable.

    Attributes:
        time: The aware UTC datetime this timestamp wraps
    """

    __slots__ = ("_time",)

    def __init__(self, time: datetime):
        if time.tzinfo is None:
            time = time.replace(tzinfo=timezone.utc)
        self._time = _truncate_to_millis(time.astimezone(timezone.utc))

    @property
    def time(self) -> datetime:
        return self._time

    def __repr__(self) -> str:
        return f"Timestamp({self.encode()!r})"

    @classmethod
    def from_epoch(cls, seconds: int) -> "Timestamp":
        return cls(EPOCH + timedelta(seconds=seconds))

    @classmethod
    def decode(cls, raw: str | bytes) -> "Timestamp":
        """
        Decode a raw JSON token.

        Raises:
            MalformedTimestampError: If the token is neither an integer nor a
                quoted RFC3339 string.
        """
        return decode_timestamp_token(raw).unwrap()

    def encode(self) -> str:
        """RFC3339 in UTC, with trailing zeros of the millisecond part trimmed."""
        t = self.time
        text = (
            f"{t.year:04d}-{t.month:02d}-{t.day:02d}T"
            f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}"
        )
        millis = t.microsecond // 1000
        if millis:
            text += "." + f"{millis:03d}".rstrip("0")
        return text + "Z"

    def query_format(self) -> str:
        """RFC3339 in UTC without fractional seconds."""
        return format_query_time(self.time)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Timestamp):
            return self.time == other.time
        return NotImplemented

    def __lt__(self, other: "Timestamp") -> bool:
        if isinstance(other, Timestamp):
            return self.time < other.time
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.time)

    def __str__(self) -> str:
        return self.encode()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_timestamp,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.encode(), when_used="json"
            ),
        )


def format_query_time(value: datetime) -> str:
    """Render ``value`` as RFC3339 in UTC without fractional seconds."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    t = value.astimezone(timezone.utc)
    return (
        f"{t.year:04d}-{t.month:02d}-{t.day:02d}T"
        f"{t.hour:02d}:{t.minute:02d}:{t.second:02d}Z"
    )


def parse_rfc3339(text: str) -> datetime:
    """
    Parse an RFC3339 date-time into an aware UTC datetime.

    Fractional seconds beyond microseconds are truncated.

    Raises:
        ValueError: If ``text`` is not a valid RFC3339 date-time.
    """
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"not an RFC3339 timestamp: {text!r}")

    fraction = (match["fraction"] or "")[:6].ljust(6, "0")
    offset = match["offset"]
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        if hours > 23 or minutes > 59:
            raise ValueError(f"invalid UTC offset: {offset!r}")
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))

    value = datetime(
        int(match["year"]),
        int(match["month"]),
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"]),
        int(fraction),
        tzinfo=tz,
    )
    return value.astimezone(timezone.utc)


def _from_epoch(seconds: int) -> DecodeResult[Timestamp]:
    try:
        return DecodeResult.success(Timestamp.from_epoch(seconds))
    except OverflowError:
        return DecodeResult.failure(
            DecodeErrorKind.MALFORMED_TIMESTAMP,
            f"epoch seconds out of range: {seconds}",
        )


def _from_rfc3339(text: str) -> DecodeResult[Timestamp]:
    try:
        return DecodeResult.success(Timestamp(parse_rfc3339(text)))
    except (ValueError, OverflowError) as e:
        return DecodeResult.failure(DecodeErrorKind.MALFORMED_TIMESTAMP, str(e))


def decode_timestamp_token(raw: str | bytes) -> DecodeResult[Timestamp]:
    """
    Decode a raw JSON token into a Timestamp.

    Integer epoch seconds are tried first; anything else must be a quoted
    RFC3339 string.

    Example:
        >>> decode_timestamp_token("1570864850").ok
        True
        >>> decode_timestamp_token('"2019-10-12T07:20:50Z"').ok
        True
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return DecodeResult.failure(
                DecodeErrorKind.MALFORMED_TIMESTAMP, "timestamp token is not UTF-8"
            )

    token = raw.strip()
    if _EPOCH_TOKEN.match(token):
        return _from_epoch(int(token))
    if len(token) >= 2 and token[0] == '"' and token[-1] == '"':
        return _from_rfc3339(token[1:-1])
    return DecodeResult.failure(
        DecodeErrorKind.MALFORMED_TIMESTAMP, f"malformed timestamp token: {raw!r}"
    )


@register_decoder(Timestamp)
def decode_timestamp(value: Any) -> DecodeResult[Timestamp]:
    """
    Decode an already-parsed JSON value into a Timestamp.

    Integers are epoch seconds and strings are RFC3339. Timestamps and
    datetimes pass through. Booleans and floats are rejected.
    """
    if isinstance(value, Timestamp):
        return DecodeResult.success(value)
    if isinstance(value, datetime):
        return DecodeResult.success(Timestamp(value))
    if isinstance(value, bool):
        return DecodeResult.failure(
            DecodeErrorKind.MALFORMED_TIMESTAMP, f"boolean is not a timestamp: {value!r}"
        )
    if isinstance(value, int):
        return _from_epoch(value)
    if isinstance(value, str):
        return _from_rfc3339(value)
    return DecodeResult.failure(
        DecodeErrorKind.MALFORMED_TIMESTAMP,
        f"unsupported timestamp value of type {type(value).__name__}",
    )


def _validate_timestamp(value: Any) -> Timestamp:
    result = decode_timestamp(value)
    if not result.ok:
        raise WireDecodeError(result.detail, DecodeErrorKind.MALFORMED_TIMESTAMP)
    return result.value  # type: ignore[return-value]


__all__ = [
    "Timestamp",
    "decode_timestamp",
    "decode_timestamp_token",
    "format_query_time",
    "parse_rfc3339",
]
