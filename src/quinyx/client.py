# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Quinyx API client: request building and response decoding.

QuinyxClient composes requests against a base URL, sends them through an
injected ``httpx.Client`` and decodes JSON responses into a caller-chosen
type. Every outcome carries the server request UID: successful calls
return a Response with ``request_uid`` set, failures raise a QuinyxError
whose ``correlation_id`` holds it.

Authentication is the transport's job. Pass an ``httpx.Client`` configured
with the credentials (for example an ``httpx.Auth`` performing the OAuth2
client-credentials flow); the client never adds them itself.

Example:
    >>> http = httpx.Client(auth=my_oauth2_auth)
    >>> with QuinyxClient(http) as client:
    ...     response = client.tags.get_all_categories()
    ...     for category in response.data:
    ...         print(category.name, response.request_uid)
"""

import functools
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import to_json

from .codec import DecodeErrorKind, WireDecodeError
from .config import ClientConfig
from .exceptions import (
    APIError,
    DecodeError,
    InvalidPathError,
    MalformedTimestampError,
    TransportError,
)
from .services.forecast import ForecastService
from .services.tags import TagsService
from .types.timestamp import Timestamp

logger = logging.getLogger(__name__)

T = TypeVar("T")

JSON_CONTENT_TYPE = "application/json"


@dataclass
class Response(Generic[T]):
    """
    Result of a successful API call.

    Attributes:
        status_code: HTTP status returned by the server
        request_uid: Server request UID, or "" when none was supplied
        headers: Response headers
        data: Decoded body, or None when no destination was requested or
            the body was empty
        http_response: The underlying httpx response
    """

    status_code: int
    request_uid: str
    headers: httpx.Headers
    data: T | None = None
    http_response: httpx.Response | None = field(default=None, repr=False)


@functools.lru_cache(maxsize=128)
def _type_adapter(dest: Any) -> TypeAdapter[Any]:
    return TypeAdapter(dest)


def _json_fallback(value: Any) -> Any:
    if isinstance(value, Timestamp):
        return value.encode()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_json_body(body: Any) -> bytes:
    """Serialise ``body`` with wire aliases, dropping fields that are None."""
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
    return to_json(body, by_alias=True, exclude_none=True, fallback=_json_fallback)


def _classify(error: PydanticValidationError) -> DecodeErrorKind:
    for detail in error.errors():
        if detail["type"] == "json_invalid":
            return DecodeErrorKind.MALFORMED_JSON
        cause = detail.get("ctx", {}).get("error")
        if isinstance(cause, WireDecodeError):
            return cause.kind
    return DecodeErrorKind.UNEXPECTED_SHAPE


def decode_json_body(
    content: bytes,
    dest: Any,
    status_code: int | None = None,
    correlation_id: str = "",
) -> Any:
    """
    Decode ``content`` into ``dest`` (a model class or typing construct).

    An empty body decodes to None.

    Raises:
        DecodeError: If the body is not JSON or does not fit ``dest``.
    """
    if not content.strip():
        return None
    try:
        return _type_adapter(dest).validate_json(content)
    except PydanticValidationError as e:
        kind = _classify(e)
        error_cls = (
            MalformedTimestampError
            if kind is DecodeErrorKind.MALFORMED_TIMESTAMP
            else DecodeError
        )
        raise error_cls(
            f"Could not decode response body: {e}",
            kind=kind,
            status_code=status_code,
            correlation_id=correlation_id,
        ) from e


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


class QuinyxClient:
    """
    Client for the Quinyx API.

    The client holds only configuration and the transport, so one instance
    can serve concurrent callers as long as the httpx client can.

    Attributes:
        base_url: Root URL requests are resolved against; must end with "/"
        config: The ClientConfig in effect
        tags: Tags service
        forecast: Forecast service
    """

    def __init__(
        self,
        http_client: httpx.Client | None = None,
        config: ClientConfig | None = None,
        *,
        base_url: str | None = None,
    ):
        """
        Initialize the QuinyxClient.

        Args:
            http_client: Authenticated httpx client. When omitted an
                unauthenticated one is created and closed with this client.
            config: Client configuration; defaults to ClientConfig().
            base_url: Shortcut overriding ``config.base_url``.
        """
        config = config or ClientConfig()
        if base_url is not None:
            config = replace(config, base_url=base_url)
        self.config = config
        self.base_url = config.base_url

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.Client(timeout=config.timeout)

        self.tags = TagsService(self)
        self.forecast = ForecastService(self)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            self._http.close()

    def __enter__(self) -> "QuinyxClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def new_request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: str | None = None,
    ) -> httpx.Request:
        """
        Build a request for ``path`` relative to the base URL.

        Args:
            method: HTTP method
            path: Relative path, without a leading slash
            body: Object serialised as the JSON body; None sends no body
            query: Pre-encoded query string attached verbatim

        Raises:
            InvalidPathError: If the base URL lacks its trailing slash or
                ``path`` starts with one.
        """
        if not self.base_url.endswith("/"):
            raise InvalidPathError(
                f"base_url must have a trailing slash, but {self.base_url!r} does not"
            )
        if path.startswith("/"):
            raise InvalidPathError(f"path must be relative, got {path!r}")

        url = httpx.URL(self.base_url).join(path)
        if query:
            url = url.copy_with(query=query.encode("ascii"))

        headers = {
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": self.config.user_agent,
        }
        content = None
        if body is not None:
            content = encode_json_body(body)
            headers["Content-Type"] = JSON_CONTENT_TYPE

        return self._http.build_request(method, url, content=content, headers=headers)

    def do(
        self,
        request: httpx.Request,
        dest: Any = None,
        *,
        timeout: float | httpx.Timeout | None = None,
    ) -> Response[Any]:
        """
        Send ``request`` and decode the JSON body into ``dest``.

        Args:
            request: Request from ``new_request``
            dest: Type to decode the body into; None discards the body
            timeout: Per-call timeout passed to the transport, overriding the
                transport default

        Returns:
            Response carrying the request UID and decoded data

        Raises:
            TransportError: If no response was received
            APIError: If the server returned a non-2xx status
            DecodeError: If a 2xx body does not match ``dest``
        """
        if timeout is not None:
            request.extensions["timeout"] = httpx.Timeout(timeout).as_dict()

        logger.debug("Sending %s %s", request.method, request.url)
        try:
            http_response = self._http.send(request)
        except httpx.RequestError as e:
            logger.warning("Transport failure for %s %s: %s", request.method, request.url, e)
            raise TransportError(f"{request.method} {request.url} failed: {e}") from e

        try:
            return self._handle_response(http_response, dest)
        finally:
            http_response.close()

    def _handle_response(self, http_response: httpx.Response, dest: Any) -> Response[Any]:
        request_uid = self.extract_request_uid(http_response)
        logger.debug(
            "Received %s for %s %s (request uid %r)",
            http_response.status_code,
            http_response.request.method,
            http_response.request.url,
            request_uid,
        )

        if not http_response.is_success:
            raise self._api_error(http_response, request_uid)

        data = None
        if dest is not None:
            data = decode_json_body(
                http_response.content,
                dest,
                status_code=http_response.status_code,
                correlation_id=request_uid,
            )

        return Response(
            status_code=http_response.status_code,
            request_uid=request_uid,
            headers=http_response.headers,
            data=data,
            http_response=http_response,
        )

    def extract_request_uid(self, http_response: httpx.Response) -> str:
        """Request UID from the configured header, else the JSON body field, else ""."""
        header_value = http_response.headers.get(self.config.correlation_header)
        if header_value:
            return header_value

        body = _json_object(http_response)
        if body is not None:
            value = body.get(self.config.correlation_field)
            if isinstance(value, str):
                return value
        return ""

    def _api_error(self, http_response: httpx.Response, request_uid: str) -> APIError:
        body = _json_object(http_response) or {}
        message = next(
            (
                body[key]
                for key in ("message", "error_description", "error")
                if isinstance(body.get(key), str)
            ),
            http_response.reason_phrase or f"HTTP {http_response.status_code}",
        )
        logger.warning(
            "Quinyx API error %s for %s %s: %s (request uid %r)",
            http_response.status_code,
            http_response.request.method,
            http_response.request.url,
            message,
            request_uid,
        )
        return APIError(
            message,
            status_code=http_response.status_code,
            correlation_id=request_uid,
            response=http_response,
        )


__all__ = [
    "QuinyxClient",
    "Response",
    "decode_json_body",
    "encode_json_body",
]
