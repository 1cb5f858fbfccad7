# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Tags service.

Quinyx API docs:
https://api.quinyx.com/v2/docs/swagger-ui.html?urls.primaryName=tags#/
"""

from typing import TYPE_CHECKING

from ..exceptions import ImmutableFieldError
from ..types.tags import Tag, TagCategory
from .base import BaseService, TimeoutType, path_segment

if TYPE_CHECKING:
    from ..client import Response


class TagsService(BaseService):
    """Tag categories and the tags inside them."""

    def get_all_categories(
        self, *, timeout: TimeoutType = None
    ) -> "Response[list[TagCategory]]":
        """List every tag category."""
        return self._call("GET", "tags/categories", dest=list[TagCategory], timeout=timeout)

    def get_category(
        self, category_external_id: str, *, timeout: TimeoutType = None
    ) -> "Response[TagCategory]":
        path = f"tags/categories/{path_segment(category_external_id)}"
        return self._call("GET", path, dest=TagCategory, timeout=timeout)

    def get_all_tags(
        self, category_external_id: str, *, timeout: TimeoutType = None
    ) -> "Response[Tag]":
        """
        Fetch the tags of a category.

        Despite the endpoint name the API answers with a single tag object,
        so the response data is one Tag.
        """
        path = f"tags/categories/{path_segment(category_external_id)}/tags"
        return self._call("GET", path, dest=Tag, timeout=timeout)

    def get_tag(
        self, category_external_id: str, tag_external_id: str, *, timeout: TimeoutType = None
    ) -> "Response[Tag]":
        path = (
            f"tags/categories/{path_segment(category_external_id)}"
            f"/tags/{path_segment(tag_external_id)}"
        )
        return self._call("GET", path, dest=Tag, timeout=timeout)

    def create_tag(
        self, category_external_id: str, tag: Tag, *, timeout: TimeoutType = None
    ) -> "Response[Tag]":
        """Create ``tag`` in the category and return it as stored."""
        path = f"tags/categories/{path_segment(category_external_id)}/tags"
        return self._call("POST", path, body=tag, dest=Tag, timeout=timeout)

    def update_tag(
        self,
        category_external_id: str,
        tag_external_id: str,
        tag: Tag,
        *,
        timeout: TimeoutType = None,
    ) -> "Response[Tag]":
        """
        Update a tag; fields set on ``tag`` are changed.

        Raises:
            ImmutableFieldError: If ``tag.category_external_id`` names a
                different category. The API does not move tags between
                categories.
        """
        if (
            tag.category_external_id is not None
            and tag.category_external_id != category_external_id
        ):
            raise ImmutableFieldError("categoryExternalId")

        path = (
            f"tags/categories/{path_segment(category_external_id)}"
            f"/tags/{path_segment(tag_external_id)}"
        )
        return self._call("PUT", path, body=tag, dest=Tag, timeout=timeout)

    def delete_tag(
        self, category_external_id: str, tag_external_id: str, *, timeout: TimeoutType = None
    ) -> "Response[None]":
        path = (
            f"tags/categories/{path_segment(category_external_id)}"
            f"/tags/{path_segment(tag_external_id)}"
        )
        return self._call("DELETE", path, timeout=timeout)


__all__ = ["TagsService"]
