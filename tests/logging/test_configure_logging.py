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
"""Tests for configure_logging — structlog setup from configuration."""

import json
import logging

import pytest
import structlog

from pagemerge.core.config import Config
from pagemerge.data.adapters.memory import InMemoryPageSource
from pagemerge.data.merger import PageMerger
from pagemerge.data.pageable import Order, Pageable, Sort
from pagemerge.kernel.exceptions import ConfigurationException
from pagemerge.logging import LoggingProperties, configure_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    for name in ("pagemerge", "pagemerge.data.merger"):
        logging.getLogger(name).setLevel(logging.NOTSET)
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(logging.WARNING)


def json_config(**logging_section):
    return Config({"pagemerge": {"logging": {"format": "json", **logging_section}}})


def json_events(out: str) -> list[dict]:
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


class TestLoggingProperties:
    def test_packaged_defaults(self):
        assert Config.defaults().bind(LoggingProperties) == LoggingProperties()

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("PAGEMERGE_LOGGING_LEVEL", "DEBUG")
        assert Config({}).bind(LoggingProperties).level == "DEBUG"

    def test_unknown_format_is_rejected(self):
        with pytest.raises(ConfigurationException) as exc_info:
            LoggingProperties(format="xml")
        assert exc_info.value.code == "LOG_FORMAT"

    def test_unknown_level_is_rejected(self):
        with pytest.raises(ConfigurationException) as exc_info:
            LoggingProperties(level="chatty")
        assert exc_info.value.code == "LOG_LEVEL"


class TestConfigureLogging:
    def test_defaults_render_to_console(self):
        properties = configure_logging()

        assert properties == LoggingProperties()
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
        assert logging.getLogger("pagemerge").level == logging.INFO

    def test_bound_context_is_merged_first(self):
        configure_logging(json_config())

        processors = structlog.get_config()["processors"]
        assert processors[0] is structlog.contextvars.merge_contextvars
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_level_applies_to_library_logger(self):
        configure_logging(json_config(level="warning"))
        assert logging.getLogger("pagemerge").level == logging.WARNING

    def test_per_module_levels(self):
        configure_logging(json_config(level="INFO", modules={"pagemerge.data.merger": "debug"}))

        assert logging.getLogger("pagemerge").level == logging.INFO
        assert logging.getLogger("pagemerge.data.merger").level == logging.DEBUG

    def test_json_event_carries_logger_and_level(self, capsys):
        configure_logging(json_config())

        structlog.get_logger("pagemerge.test").info("source.ready", rows=3)

        events = json_events(capsys.readouterr().out)
        assert events[-1]["event"] == "source.ready"
        assert events[-1]["logger"] == "pagemerge.test"
        assert events[-1]["level"] == "info"
        assert events[-1]["rows"] == 3


class TestMergeLogEvents:
    @pytest.mark.asyncio
    async def test_merge_events_carry_the_merge_request(self, capsys):
        configure_logging(json_config(level="DEBUG"))
        live = InMemoryPageSource({"value": i} for i in range(8))
        archived = InMemoryPageSource({"value": i} for i in range(8))

        await PageMerger().merge_page(
            live, lambda x: x, archived, lambda x: x, Pageable.of(1, 6, Sort.of(Order.desc("value")))
        )

        events = [e for e in json_events(capsys.readouterr().out) if e["event"].startswith("merge_page.")]
        assert [e["event"] for e in events] == ["merge_page.probed", "merge_page.boundary"]
        for event in events:
            assert event["logger"] == "pagemerge.data.merger"
            assert event["merge_page"] == 1
            assert event["merge_size"] == 6
            assert event["merge_sort"] == "value,desc"
        assert events[1]["secondary_needed"] == 4
