# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Shared plumbing for resource services."""

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from ..query import QueryEncodable, encode_query, urlencode_query

if TYPE_CHECKING:
    from ..client import QuinyxClient, Response

TimeoutType = float | httpx.Timeout | None


def path_segment(value: str) -> str:
    """Percent-encode ``value`` so it stays a single path segment."""
    return quote(str(value), safe="")


class BaseService:
    """
    Base class for a group of related endpoints.

    Services hold a reference to their QuinyxClient and nothing else, so
    they share its concurrency guarantees.
    """

    def __init__(self, client: "QuinyxClient"):
        self._client = client

    def _call(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        query: QueryEncodable | None = None,
        dest: Any = None,
        timeout: TimeoutType = None,
    ) -> "Response[Any]":
        """Encode ``query``, build the request and send it."""
        query_string = None
        if query is not None:
            query_string = urlencode_query(encode_query(query))
        request = self._client.new_request(method, path, body, query_string)
        return self._client.do(request, dest, timeout=timeout)


__all__ = ["BaseService", "TimeoutType", "path_segment"]
