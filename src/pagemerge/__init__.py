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
"""pagemerge — page through two sorted partitions as one collection."""

from pagemerge.core.config import Config, config_properties
from pagemerge.data import (
    InMemoryPageSource,
    MergeProperties,
    OffsetPageable,
    Order,
    Page,
    Pageable,
    PageMerger,
    Partition,
    Sort,
    SortedPageSource,
)
from pagemerge.kernel.exceptions import (
    ConfigurationException,
    InvalidPageRequestException,
    PageMergeException,
)
from pagemerge.logging import LoggingProperties, configure_logging

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConfigurationException",
    "InMemoryPageSource",
    "InvalidPageRequestException",
    "LoggingProperties",
    "MergeProperties",
    "OffsetPageable",
    "Order",
    "Page",
    "PageMergeException",
    "PageMerger",
    "Pageable",
    "Partition",
    "Sort",
    "SortedPageSource",
    "__version__",
    "config_properties",
    "configure_logging",
]
