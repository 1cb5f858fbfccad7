# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Resource services of the Quinyx API.

Available services:
- TagsService: Tag categories and tags
- ForecastService: Forecast data uploads, queries and staffing rules
"""

from .base import BaseService
from .forecast import ForecastService
from .tags import TagsService

__all__ = [
    "BaseService",
    "ForecastService",
    "TagsService",
]
