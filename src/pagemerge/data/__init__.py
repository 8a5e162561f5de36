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
"""pagemerge Data — paging types and the two-partition page merger.

Framework-agnostic types (Page, Pageable, ports) and the merger are exported
directly. The SQLAlchemy adapter lives in ``pagemerge.data.adapters.sqlalchemy``
and is imported on demand.
"""

from pagemerge.data.adapters.memory import InMemoryPageSource
from pagemerge.data.merger import MergeProperties, PageMerger, Partition
from pagemerge.data.page import Page
from pagemerge.data.pageable import OffsetPageable, Order, Pageable, Sort
from pagemerge.data.ports.source import SortedPageSource

__all__ = [
    "InMemoryPageSource",
    "MergeProperties",
    "OffsetPageable",
    "Order",
    "Page",
    "PageMerger",
    "Pageable",
    "Partition",
    "Sort",
    "SortedPageSource",
]
