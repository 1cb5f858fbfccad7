# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Per-type wire decoders.

Values arriving from the API (timestamps, enum strings) are decoded by
explicit functions registered per target type. A decoder never raises on
peer-controlled input; it returns a DecodeResult that either holds the
value or names the failure kind. Callers that want an exception call
``DecodeResult.unwrap()``.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BeforeValidator

from .exceptions import DecodeError, MalformedTimestampError

logger = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


class DecodeErrorKind(Enum):
    """Classification of decode failures."""

    MALFORMED_TIMESTAMP = "malformed_timestamp"
    INVALID_ENUM = "invalid_enum"
    MALFORMED_JSON = "malformed_json"
    UNEXPECTED_SHAPE = "unexpected_shape"


class WireDecodeError(ValueError):
    """ValueError raised inside pydantic validators; keeps the failure kind."""

    def __init__(self, detail: str, kind: DecodeErrorKind):
        super().__init__(detail)
        self.kind = kind


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """
    Tagged outcome of decoding a single wire value.

    Exactly one of ``value`` or ``error`` is meaningful: when ``error`` is
    None the decode succeeded and ``value`` holds the result.

    Attributes:
        value: Decoded value on success
        error: Failure kind on failure
        detail: Human-readable description of the failure
    """

    value: T | None = None
    error: DecodeErrorKind | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "DecodeResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: DecodeErrorKind, detail: str) -> "DecodeResult[T]":
        return cls(error=kind, detail=detail)

    def unwrap(self) -> T:
        """Return the value or raise the matching DecodeError."""
        if self.error is None:
            return self.value  # type: ignore[return-value]
        if self.error is DecodeErrorKind.MALFORMED_TIMESTAMP:
            raise MalformedTimestampError(self.detail, kind=self.error)
        raise DecodeError(self.detail, kind=self.error)


Decoder = Callable[[Any], DecodeResult[Any]]

_DECODERS: dict[type, Decoder] = {}


def register_decoder(tp: type) -> Callable[[Decoder], Decoder]:
    """Register ``func`` as the wire decoder for ``tp``.

    Example:
        >>> @register_decoder(Weekday)
        ... def decode_weekday(raw): ...
    """

    def decorator(func: Decoder) -> Decoder:
        _DECODERS[tp] = func
        return func

    return decorator


def get_decoder(tp: type) -> Decoder:
    try:
        return _DECODERS[tp]
    except KeyError:
        raise LookupError(f"No wire decoder registered for {tp.__name__}") from None


def decode_as(tp: type[T], raw: Any) -> DecodeResult[T]:
    """Decode ``raw`` with the decoder registered for ``tp``."""
    return get_decoder(tp)(raw)


def enum_decoder(enum_cls: type[E]) -> Decoder:
    """Build and register a decoder accepting only the members of ``enum_cls``."""

    def decode(raw: Any) -> DecodeResult[E]:
        if isinstance(raw, enum_cls):
            return DecodeResult.success(raw)
        try:
            return DecodeResult.success(enum_cls(raw))
        except ValueError:
            return DecodeResult.failure(
                DecodeErrorKind.INVALID_ENUM,
                f"Invalid {enum_cls.__name__} value: {raw!r}",
            )

    return register_decoder(enum_cls)(decode)


def wire_validator(tp: type) -> BeforeValidator:
    """
    Adapt the registered decoder for ``tp`` into a pydantic BeforeValidator.

    A failed decode becomes a WireDecodeError (a ValueError), which pydantic
    reports as a validation error; the response decoder turns that into
    DecodeError with the same kind.
    """

    def validate(raw: Any) -> Any:
        result = decode_as(tp, raw)
        if not result.ok:
            logger.debug("Rejected wire value for %s: %s", tp.__name__, result.detail)
            raise WireDecodeError(result.detail, result.error)  # type: ignore[arg-type]
        return result.value

    return BeforeValidator(validate)


__all__ = [
    "DecodeErrorKind",
    "DecodeResult",
    "WireDecodeError",
    "decode_as",
    "enum_decoder",
    "get_decoder",
    "register_decoder",
    "wire_validator",
]
