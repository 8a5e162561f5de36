"""pagemerge Logging — structlog setup for the library's log events."""

from pagemerge.logging.configure import LoggingProperties, configure_logging

__all__ = ["LoggingProperties", "configure_logging"]
