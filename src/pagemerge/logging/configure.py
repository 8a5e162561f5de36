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
"""Structlog setup for applications that use pagemerge.

Library modules log through ``structlog.get_logger(name)`` and bind the
current merge request (``merge_page``, ``merge_size``, ``merge_sort``)
with ``structlog.contextvars``. ``configure_logging`` installs a processor
chain that renders those bound values with every event, through stdlib
logging so the usual level filtering applies.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass

import structlog

from pagemerge.core.config import Config, config_properties
from pagemerge.kernel.exceptions import ConfigurationException

_FORMATS = ("console", "json")
_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@config_properties(prefix="pagemerge.logging")
@dataclass(frozen=True)
class LoggingProperties:
    """Logging settings bound from ``pagemerge.logging``.

    Attributes:
        format: ``console`` for human-readable lines, ``json`` for one JSON
            object per event.
        level: Level of the ``pagemerge`` logger and of the root logger.
    """

    format: str = "console"
    level: str = "INFO"

    def __post_init__(self) -> None:
        if self.format.lower() not in _FORMATS:
            raise ConfigurationException(
                f"format must be one of {_FORMATS}, got {self.format!r}",
                code="LOG_FORMAT",
                context={"format": self.format},
            )
        if self.level.upper() not in _LEVELS:
            raise ConfigurationException(
                f"level must be one of {_LEVELS}, got {self.level!r}",
                code="LOG_LEVEL",
                context={"level": self.level},
            )


def configure_logging(config: Config | None = None) -> LoggingProperties:
    """Configure structlog and stdlib logging from the ``pagemerge.logging`` section.

    Per-module levels go under ``pagemerge.logging.modules``, keyed by
    logger name (e.g. ``pagemerge.data.merger: DEBUG``).

    Returns:
        The bound settings.
    """
    config = config or Config.defaults()
    properties = config.bind(LoggingProperties)
    level = getattr(logging, properties.level.upper())

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if properties.format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    logging.getLogger("pagemerge").setLevel(level)

    for name, module_level in config.get_section("pagemerge.logging.modules").items():
        logging.getLogger(name).setLevel(getattr(logging, str(module_level).upper(), logging.INFO))

    return properties
