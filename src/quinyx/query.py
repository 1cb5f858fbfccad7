# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Query-string encoding for options objects.

Every options type declares an explicit ``__query_fields__`` table of
QueryField descriptors. The encoder walks that table in declaration order,
so the same options always produce the same URL. Fields without a value
are left out entirely rather than sent empty.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from urllib.parse import urlencode

from .types.timestamp import Timestamp, format_query_time

QueryPairs = list[tuple[str, str]]


@dataclass(frozen=True)
class QueryField:
    """
    Maps one attribute of an options object to a query parameter.

    Attributes:
        key: Query parameter name sent to the API
        attr: Attribute read from the options object
        omit_empty: Also leave the key out when the value is an empty string
        formatter: Optional callable turning the value into its string form;
            defaults to ``format_query_value``
    """

    key: str
    attr: str
    omit_empty: bool = True
    formatter: Callable[[Any], str] | None = None

    def render(self, value: Any) -> str:
        if self.formatter is not None:
            return self.formatter(value)
        return format_query_value(value)


@runtime_checkable
class QueryEncodable(Protocol):
    """Anything that carries a query field table."""

    __query_fields__: Sequence[QueryField]


def format_query_value(value: Any) -> str:
    """
    Format a scalar for a query string.

    Raises:
        TypeError: For nested structures, which the API does not accept.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Timestamp):
        return value.query_format()
    if isinstance(value, datetime):
        return format_query_time(value)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (str, int, float)):
        return str(value)
    raise TypeError(
        f"Cannot encode value of type {type(value).__name__} as a query parameter"
    )


def encode_query(options: QueryEncodable) -> QueryPairs:
    """
    Encode ``options`` into ordered (key, value) pairs.

    A None value is always omitted; fields marked ``omit_empty`` also drop
    empty strings. Presence of required fields is checked by the option
    validators before encoding.

    Example:
        >>> encode_query(RequestOptions(external_unit_id="u1"))
        [('externalUnitId', 'u1')]
    """
    pairs: QueryPairs = []
    for field in options.__query_fields__:
        value = getattr(options, field.attr)
        if value is None or (field.omit_empty and value == ""):
            continue
        pairs.append((field.key, field.render(value)))
    return pairs


def urlencode_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Percent-encode ``pairs`` into a query string, preserving order."""
    return urlencode(list(pairs))


__all__ = [
    "QueryEncodable",
    "QueryField",
    "QueryPairs",
    "encode_query",
    "format_query_value",
    "urlencode_query",
]
