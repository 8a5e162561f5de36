# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Pagination types for paginated query results."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pagemerge.data.pageable import Pageable
from pagemerge.kernel.exceptions import InvalidPageRequestException

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Page(Generic[T]):
    """A page of results from a paginated query.

    Navigation metadata is derived from the request that produced the page,
    so a merged page built over several sources still navigates as one
    collection as long as it carries the caller's request.

    Attributes:
        content: The items on this page, in sort order.
        total: Total number of items across all pages.
        pageable: The request this page answers.
    """

    content: list[T]
    total: int
    pageable: Pageable

    @property
    def number(self) -> int:
        """Current page number (0-based)."""
        return self.pageable.page

    @property
    def size(self) -> int:
        """Maximum items per page."""
        return self.pageable.size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        """Total number of pages."""
        if self.total == 0:
            return 0
        return math.ceil(self.total / self.size)

    @property
    def has_content(self) -> bool:
        return bool(self.content)

    @property
    def is_full(self) -> bool:
        """Whether this page holds exactly ``size`` items."""
        return self.has_content and len(self.content) == self.size

    @property
    def has_next(self) -> bool:
        """Whether there is a next page."""
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Whether there is a previous page."""
        return self.number > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def next_pageable(self) -> Pageable:
        """Request for the page after this one (same size and sort)."""
        return self.pageable.next()

    def previous_pageable(self) -> Pageable:
        """Request for the page before this one (same size and sort)."""
        if not self.has_previous:
            raise InvalidPageRequestException(
                "First page has no previous page", code="PAGE_NUMBER", context={"page": self.number}
            )
        return self.pageable.previous()

    def map(self, func: Callable[[T], U]) -> Page[U]:
        """Transform items using a mapping function, preserving pagination metadata."""
        return Page(
            content=[func(item) for item in self.content],
            total=self.total,
            pageable=self.pageable,
        )
