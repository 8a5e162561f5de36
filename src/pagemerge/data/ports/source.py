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
"""Outbound port: a page-at-a-time view over one sorted partition."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Protocol, TypeVar, runtime_checkable

from pagemerge.data.page import Page
from pagemerge.data.pageable import Pageable

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class SortedPageSource(Protocol[T_co]):
    """Callable returning one page of a sorted partition.

    Implementations must start at ``pageable.offset`` (never at
    ``page * size`` directly), return at most ``pageable.size`` items ordered
    by ``pageable.sort`` and report the partition's total element count.
    Plain callables and coroutine functions are both accepted.
    """

    def __call__(self, pageable: Pageable) -> Page[T_co] | Awaitable[Page[T_co]]: ...
