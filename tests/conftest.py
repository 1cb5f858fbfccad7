"""Shared fixtures: a QuinyxClient wired to an in-process mock transport."""

import json
from collections.abc import Callable

import httpx
import pytest

from quinyx import QuinyxClient

BASE_URL = "https://api.test/v2/"


def json_response(status_code: int = 200, body=None, headers=None) -> httpx.Response:
    """Build a JSON response; ``body`` None gives an empty body."""
    content = b"" if body is None else json.dumps(body).encode("utf-8")
    return httpx.Response(
        status_code,
        content=content,
        headers={"Content-Type": "application/json", **(headers or {})},
    )


class Responder:
    """Answers every request with a fresh copy of the configured reply."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] | None = None
        self.reply()

    def reply(self, status_code: int = 200, body=None, headers=None) -> None:
        self._reply = (status_code, body, headers)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return json_response(*self._reply)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def responder():
    return Responder()


@pytest.fixture
def client(responder):
    """QuinyxClient whose requests are answered by ``responder``."""
    http = httpx.Client(transport=httpx.MockTransport(responder))
    with QuinyxClient(http, base_url=BASE_URL) as quinyx_client:
        yield quinyx_client
    http.close()


@pytest.fixture
def make_response():
    """The ``json_response`` builder, for tests that install their own handler."""
    return json_response
