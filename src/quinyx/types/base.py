# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Base model for Quinyx API payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class QuinyxModel(BaseModel):
    """
    Pydantic base for request and response payloads.

    Attributes use snake_case in Python and camelCase on the wire; fields
    whose wire name does not follow that rule declare an explicit alias.
    Unknown wire fields are ignored so additions to the API do not break
    decoding.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


__all__ = ["QuinyxModel"]
