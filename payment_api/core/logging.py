"""Structured logging.

Events go through structlog and out through the stdlib root logger, one
line per event: JSON in deployed environments, colored key/value output
when ``OTEL_LOG_RECORD_FORMAT=console``.
"""

import logging
import sys

import structlog

from payment_api.core.config import Settings


def _level_name(settings: Settings) -> str:
    level = settings.app.log_level
    return str(getattr(level, "value", level)).upper()


def _renderer(record_format: str) -> structlog.typing.Processor:
    if record_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(settings: Settings) -> None:
    """Configure structlog and the root handler from settings."""
    level = logging.getLevelName(_level_name(settings))

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(settings.observability.log_record_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    return structlog.get_logger(name)
