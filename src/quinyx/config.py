# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client Configuration for the Quinyx API client

This module provides the configuration dataclass used to build a
QuinyxClient and its default transport settings.
"""

from dataclasses import dataclass

from . import __version__
from .exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.quinyx.com/v2/"
DEFAULT_TEST_BASE_URL = "https://api-test.quinyx.com/v2/"


@dataclass
class ClientConfig:
    """
    Configuration for a QuinyxClient.

    The base URL is not checked for a trailing slash here; request building
    rejects it, so a client whose ``base_url`` is changed later is covered
    by the same check.
    """

    base_url: str = DEFAULT_BASE_URL
    """Root every request path is resolved against."""

    timeout: float = 30.0
    """Timeout in seconds for the transport the client creates itself."""

    user_agent: str = f"quinyx-client-python/{__version__}"
    """User-Agent header sent with every request."""

    correlation_header: str = "X-Request-Uid"
    """Response header carrying the server request UID."""

    correlation_field: str = "requestUid"
    """JSON body field carrying the request UID when the header is absent."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ConfigurationError("base_url must not be empty")
        if not self.base_url.startswith(("http://", "https://")):
            raise ConfigurationError("base_url must be an http or https URL")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if not self.correlation_header:
            raise ConfigurationError("correlation_header must not be empty")


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_TEST_BASE_URL",
    "ClientConfig",
]
