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
"""Pages through two order-disjoint partitions as if they were one collection.

Both partitions are sorted on the same key, and for any sort direction every
element of one partition (the *initial* one) sorts before every element of
the other (the *secondary* one). Concatenating initial then secondary gives
the global order. Only the single page straddling the boundary needs items
from both sides, so a merged page never costs more than the two probe
queries plus one corrective query into the secondary partition.

Example::

    merger = PageMerger()
    page = await merger.merge_page(
        live_repo.find_page, lambda d: d,
        archive_repo.find_page, DriveView.from_archived,
        Pageable.of(0, 25, Sort.of(Order.desc("timestamp"))),
    )
    following = await merger.merge_page(..., page.next_pageable())
"""

from __future__ import annotations

import asyncio
import inspect
import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

import structlog

from pagemerge.core.config import Config, config_properties
from pagemerge.data.page import Page
from pagemerge.data.pageable import OffsetPageable, Order, Pageable, Sort
from pagemerge.data.ports.source import SortedPageSource
from pagemerge.kernel.exceptions import ConfigurationException, InvalidPageRequestException

logger = structlog.get_logger("pagemerge.data.merger")

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")
R = TypeVar("R")

_DIRECTIONS = ("asc", "desc")
_PARTITIONS = ("a", "b")


@config_properties(prefix="pagemerge.merge")
@dataclass(frozen=True)
class MergeProperties:
    """Merge settings bound from ``pagemerge.merge``.

    Attributes:
        default_sort_field: Property sorted on when the request has no sort.
        default_direction: Direction used when the request has no sort.
        descending_initial: Partition (``"a"`` or ``"b"``) whose elements all
            come first in descending order. The other partition comes first
            in ascending order.
        concurrent_probes: Issue the two probe queries concurrently. Turn off
            when both sources share a connection or session that cannot
            serve two queries at once (e.g. one SQLAlchemy ``AsyncSession``).
    """

    default_sort_field: str = "timestamp"
    default_direction: str = "desc"
    descending_initial: str = "a"
    concurrent_probes: bool = True

    def __post_init__(self) -> None:
        if self.default_direction not in _DIRECTIONS:
            raise ConfigurationException(
                f"default_direction must be one of {_DIRECTIONS}, got {self.default_direction!r}",
                code="MERGE_DIRECTION",
                context={"default_direction": self.default_direction},
            )
        if self.descending_initial not in _PARTITIONS:
            raise ConfigurationException(
                f"descending_initial must be one of {_PARTITIONS}, got {self.descending_initial!r}",
                code="MERGE_PARTITION",
                context={"descending_initial": self.descending_initial},
            )

    @property
    def default_order(self) -> Order:
        return Order(property=self.default_sort_field, direction=self.default_direction)  # type: ignore[arg-type]

    def initial_partition(self, order: Order) -> str:
        """Name of the partition that sorts first under *order*."""
        if order.direction == "desc":
            return self.descending_initial
        return "b" if self.descending_initial == "a" else "a"


@dataclass(frozen=True)
class Partition(Generic[T, R]):
    """A page source paired with the function mapping its items to the result type."""

    name: str
    source: SortedPageSource[T]
    mapper: Callable[[T], R]

    async def fetch(self, pageable: Pageable) -> Page[T]:
        result = self.source(pageable)
        if inspect.isawaitable(result):
            result = await result
        return result

    def map_content(self, page: Page[T]) -> list[R]:
        return [self.mapper(item) for item in page.content]


@dataclass(frozen=True)
class _Probe(Generic[T, R]):
    partition: Partition[T, R]
    page: Page[T]


class PageMerger:
    """Merges two order-disjoint, independently paged partitions page by page.

    Holds only immutable settings; one instance can serve concurrent calls.
    """

    def __init__(self, properties: MergeProperties | None = None) -> None:
        self._properties = properties or MergeProperties()

    @classmethod
    def from_config(cls, config: Config) -> PageMerger:
        """Build a merger from the ``pagemerge.merge`` section of *config*."""
        return cls(config.bind(MergeProperties))

    @property
    def properties(self) -> MergeProperties:
        return self._properties

    async def merge_page(
        self,
        source_a: SortedPageSource[A],
        map_a: Callable[[A], R],
        source_b: SortedPageSource[B],
        map_b: Callable[[B], R],
        pageable: Pageable,
    ) -> Page[R]:
        """Return page ``pageable.page`` of the virtual concatenation of both partitions.

        Args:
            source_a: Page source of partition ``a``.
            map_a: Maps ``a`` items to the result type.
            source_b: Page source of partition ``b``.
            map_b: Maps ``b`` items to the result type.
            pageable: The caller's request. It is carried unchanged on the
                returned page so its navigation addresses the merged sequence.

        Returns:
            A page whose ``total`` is the sum of both partitions' totals.

        Raises:
            InvalidPageRequestException: If ``size <= 0`` or ``page < 0``.
                Nothing is queried in that case.
        """
        self._validate(pageable)

        order = self._resolve_order(pageable)
        # Log events of this call, source events included, carry the merge request.
        with structlog.contextvars.bound_contextvars(
            merge_page=pageable.page,
            merge_size=pageable.size,
            merge_sort=f"{order.property},{order.direction}",
        ):
            return await self._merge(source_a, map_a, source_b, map_b, pageable, order)

    async def _merge(
        self,
        source_a: SortedPageSource[A],
        map_a: Callable[[A], R],
        source_b: SortedPageSource[B],
        map_b: Callable[[B], R],
        pageable: Pageable,
        order: Order,
    ) -> Page[R]:
        a: Partition[A, R] = Partition("a", source_a, map_a)
        b: Partition[B, R] = Partition("b", source_b, map_b)
        a_page, b_page = await self._probe(a, b, self._initial_request(pageable, order))
        total = a_page.total + b_page.total
        logger.debug(
            "merge_page.probed",
            page=pageable.page,
            size=pageable.size,
            a_total=a_page.total,
            a_elements=a_page.number_of_elements,
            b_total=b_page.total,
            b_elements=b_page.number_of_elements,
        )

        initial, secondary = self._assign_roles(order, _Probe(a, a_page), _Probe(b, b_page))

        if secondary.page.total == 0:
            return self._binary(initial, total, pageable)
        if initial.page.total == 0:
            return self._binary(secondary, total, pageable)
        return await self._dual(initial, secondary, total, pageable, order)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(pageable: Any) -> None:
        if pageable.size <= 0:
            message = "Page size must be greater than 0"
            logger.error(message, size=pageable.size)
            raise InvalidPageRequestException(message, code="PAGE_SIZE", context={"size": pageable.size})
        if pageable.page < 0:
            message = "Page number must be non-negative"
            logger.error(message, page=pageable.page)
            raise InvalidPageRequestException(message, code="PAGE_NUMBER", context={"page": pageable.page})

    async def _probe(self, a: Partition, b: Partition, pageable: Pageable) -> tuple[Page[Any], Page[Any]]:
        if self._properties.concurrent_probes:
            tasks = [asyncio.ensure_future(a.fetch(pageable)), asyncio.ensure_future(b.fetch(pageable))]
            try:
                a_page, b_page = await asyncio.gather(*tasks)
            except BaseException:
                # Never leave a source query running after merge_page has raised.
                for task in tasks:
                    task.cancel()
                raise
            return a_page, b_page
        return await a.fetch(pageable), await b.fetch(pageable)

    def _resolve_order(self, pageable: Pageable) -> Order:
        # Only the primary order is honoured.
        return pageable.sort.first or self._properties.default_order

    @staticmethod
    def _initial_request(pageable: Pageable, order: Order) -> Pageable:
        """The caller's request, with the default order filled in when it has none."""
        if pageable.sort.is_sorted:
            return pageable
        return replace(pageable, sort=Sort.of(order))

    def _assign_roles(self, order: Order, a: _Probe, b: _Probe) -> tuple[_Probe, _Probe]:
        if self._properties.initial_partition(order) == "a":
            return a, b
        return b, a

    @staticmethod
    def _binary(only: _Probe[T, R], total: int, pageable: Pageable) -> Page[R]:
        logger.debug("merge_page.binary", partition=only.partition.name, page=pageable.page)
        return Page(content=only.partition.map_content(only.page), total=total, pageable=pageable)

    async def _dual(
        self,
        initial: _Probe,
        secondary: _Probe,
        total: int,
        pageable: Pageable,
        order: Order,
    ) -> Page[R]:
        size = pageable.size
        initial_page: Page[Any] = initial.page

        if initial_page.is_full:
            logger.debug("merge_page.full_initial", partition=initial.partition.name, page=pageable.page)
            return Page(content=initial.partition.map_content(initial_page), total=total, pageable=pageable)

        if initial_page.has_content:
            # Boundary page: the tail of initial, then the head of secondary.
            content = initial.partition.map_content(initial_page)
            needed = size - len(content)
            request = Pageable(page=0, size=needed, sort=Sort.of(order))
            logger.debug(
                "merge_page.boundary",
                page=pageable.page,
                initial=initial.partition.name,
                initial_elements=len(content),
                secondary=secondary.partition.name,
                secondary_needed=needed,
            )
            head = await secondary.partition.fetch(request)
            content.extend(secondary.partition.map_content(head))
            return Page(content=content, total=total, pageable=pageable)

        # Past the end of initial. The boundary page already took the first
        # boundary_consumed secondary items.
        boundary_consumed = (size - initial_page.total % size) % size
        initial_pages = math.ceil(initial_page.total / size)
        request = OffsetPageable(
            page=pageable.page - initial_pages,
            size=size,
            sort=Sort.of(order),
            skip=boundary_consumed,
        )
        logger.debug(
            "merge_page.secondary_only",
            page=pageable.page,
            secondary=secondary.partition.name,
            skip=boundary_consumed,
            secondary_page=request.page,
            offset=request.offset,
        )
        rest = await secondary.partition.fetch(request)
        return Page(content=secondary.partition.map_content(rest), total=total, pageable=pageable)
