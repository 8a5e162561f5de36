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
"""In-memory page source over a Python list."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from pagemerge.data.page import Page
from pagemerge.data.pageable import Order, Pageable
from pagemerge.kernel.exceptions import InvalidPageRequestException

T = TypeVar("T")


def _sort_value(item: Any, order: Order) -> Any:
    if isinstance(item, Mapping):
        if order.property not in item:
            raise InvalidPageRequestException(
                f"Unknown sort property '{order.property}'", code="PAGE_SORT", context={"property": order.property}
            )
        return item[order.property]
    try:
        return getattr(item, order.property)
    except AttributeError:
        raise InvalidPageRequestException(
            f"Unknown sort property '{order.property}'", code="PAGE_SORT", context={"property": order.property}
        ) from None


class InMemoryPageSource(Generic[T]):
    """Serves pages of a list, sorted by the request's primary order.

    Items may be objects (sorted by attribute) or mappings (sorted by key).
    The page window always starts at ``pageable.offset``, so offset-adjusted
    requests are honoured. Every request is recorded in :attr:`requests`.

    Usage::

        source = InMemoryPageSource(drives)
        page = source(Pageable.of(0, 10, Sort.of(Order.desc("timestamp"))))
        page = await source.find_page(page.next_pageable())
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: list[T] = list(items)
        self.requests: list[Pageable] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __len__(self) -> int:
        return len(self._items)

    def __call__(self, pageable: Pageable) -> Page[T]:
        self.requests.append(pageable)
        ordered = self._sorted(pageable)
        start = pageable.offset
        return Page(content=ordered[start : start + pageable.size], total=len(ordered), pageable=pageable)

    async def find_page(self, pageable: Pageable) -> Page[T]:
        """Coroutine flavour of :meth:`__call__`."""
        return self(pageable)

    def _sorted(self, pageable: Pageable) -> list[T]:
        order = pageable.sort.first
        if order is None:
            return list(self._items)
        return sorted(self._items, key=lambda item: _sort_value(item, order), reverse=not order.is_ascending)
