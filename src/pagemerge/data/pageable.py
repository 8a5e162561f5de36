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
"""Spring-like Pageable and Sort types for pagination requests.

Page numbers are zero-based: page 0 is the first page and its offset is 0.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pagemerge.kernel.exceptions import InvalidPageRequestException

Direction = Literal["asc", "desc"]


@dataclass(frozen=True)
class Order:
    """A single sort order: property name + direction."""

    property: str
    direction: Direction = "asc"

    @staticmethod
    def asc(property: str) -> Order:
        """Create an ascending order for the given property."""
        return Order(property=property, direction="asc")

    @staticmethod
    def desc(property: str) -> Order:
        """Create a descending order for the given property."""
        return Order(property=property, direction="desc")

    @property
    def is_ascending(self) -> bool:
        return self.direction == "asc"


@dataclass(frozen=True)
class Sort:
    """Collection of sort orders."""

    orders: tuple[Order, ...] = ()

    @staticmethod
    def by(*properties: str) -> Sort:
        """Create ascending sort by properties."""
        return Sort(orders=tuple(Order.asc(p) for p in properties))

    @staticmethod
    def of(*orders: Order) -> Sort:
        """Create a sort from explicit orders."""
        return Sort(orders=tuple(orders))

    @staticmethod
    def unsorted() -> Sort:
        """No sorting."""
        return Sort()

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    @property
    def first(self) -> Order | None:
        """The primary order, or None when unsorted."""
        return self.orders[0] if self.orders else None

    def and_then(self, other: Sort) -> Sort:
        """Combine sorts, appending *other*'s orders after this sort's orders."""
        return Sort(orders=self.orders + other.orders)

    def descending(self) -> Sort:
        """Return same sort but all directions flipped to desc."""
        return Sort(orders=tuple(Order(property=o.property, direction="desc") for o in self.orders))

    def ascending(self) -> Sort:
        """Return same sort but all directions flipped to asc."""
        return Sort(orders=tuple(Order(property=o.property, direction="asc") for o in self.orders))


@dataclass(frozen=True)
class Pageable:
    """Pagination request: page number, size, and sort criteria."""

    page: int = 0
    size: int = 20
    sort: Sort = field(default_factory=Sort)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise InvalidPageRequestException(
                f"size must be >= 1, got {self.size}", code="PAGE_SIZE", context={"size": self.size}
            )
        if self.page < 0:
            raise InvalidPageRequestException(
                f"page must be >= 0, got {self.page}", code="PAGE_NUMBER", context={"page": self.page}
            )

    @staticmethod
    def of(page: int, size: int, sort: Sort | None = None) -> Pageable:
        """Create a pageable for the given page, size, and optional sort."""
        return Pageable(page=page, size=size, sort=sort or Sort())

    @property
    def offset(self) -> int:
        """Index of the first element addressed by this request."""
        return self.page * self.size

    def next(self) -> Pageable:
        """Return Pageable for next page."""
        return Pageable(page=self.page + 1, size=self.size, sort=self.sort)

    def previous(self) -> Pageable:
        """Return Pageable for previous page (min page 0)."""
        return Pageable(page=max(0, self.page - 1), size=self.size, sort=self.sort)

    def first(self) -> Pageable:
        """Return Pageable for the first page."""
        return Pageable(page=0, size=self.size, sort=self.sort)


@dataclass(frozen=True)
class OffsetPageable(Pageable):
    """A Pageable whose offset starts *skip* elements later than usual.

    ``offset = skip + page * size``. The first *skip* elements can never be
    returned by this request or by any request derived from it with
    :meth:`next`, :meth:`previous` or :meth:`first`. Page 0 of an
    ``OffsetPageable`` therefore starts at element *skip*.
    """

    skip: int = 0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.skip < 0:
            raise InvalidPageRequestException(
                f"skip must be >= 0, got {self.skip}", code="PAGE_SKIP", context={"skip": self.skip}
            )

    @property
    def offset(self) -> int:
        return self.skip + self.page * self.size

    def next(self) -> OffsetPageable:
        return OffsetPageable(page=self.page + 1, size=self.size, sort=self.sort, skip=self.skip)

    def previous(self) -> OffsetPageable:
        return OffsetPageable(page=max(0, self.page - 1), size=self.size, sort=self.sort, skip=self.skip)

    def first(self) -> OffsetPageable:
        return OffsetPageable(page=0, size=self.size, sort=self.sort, skip=self.skip)
